"""Transaction processor: applies ledger events to accounts in arrival order.

The processor is the only writer of the account table and the transaction
log. Each event is applied exactly once. An event that fails a precondition
is dropped, logged and counted; it never stops the rest of the stream.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable

from ledger_replay.channel import IngestionChannel
from ledger_replay.exceptions import (
    AccountLockedError,
    AccountNotFoundError,
    AlreadyDisputedError,
    BalanceOverflowError,
    ClientMismatchError,
    InsufficientFundsError,
    LedgerError,
    NotDisputedError,
    ProcessorStoppedError,
    TransactionNotFoundError,
)
from ledger_replay.models import (
    Account,
    AccountSnapshot,
    Event,
    EventKind,
    LogEntry,
    ProcessorState,
    RejectionReason,
)
from ledger_replay.store import AccountTable, TransactionLog

logger = logging.getLogger(__name__)

REJECTION_REASONS: dict[type[LedgerError], RejectionReason] = {
    AccountNotFoundError: RejectionReason.ACCOUNT_NOT_FOUND,
    AccountLockedError: RejectionReason.ACCOUNT_LOCKED,
    InsufficientFundsError: RejectionReason.INSUFFICIENT_FUNDS,
    BalanceOverflowError: RejectionReason.BALANCE_OVERFLOW,
    TransactionNotFoundError: RejectionReason.TRANSACTION_NOT_FOUND,
    ClientMismatchError: RejectionReason.CLIENT_MISMATCH,
    AlreadyDisputedError: RejectionReason.ALREADY_DISPUTED,
    NotDisputedError: RejectionReason.NOT_DISPUTED,
}


@dataclass
class ProcessorStats:
    """Counts of applied and rejected events."""

    applied: int = 0
    rejected: int = 0
    rejections: dict[RejectionReason, int] = field(default_factory=dict)

    @property
    def processed(self) -> int:
        return self.applied + self.rejected

    def record_rejection(self, reason: RejectionReason) -> None:
        self.rejected += 1
        self.rejections[reason] = self.rejections.get(reason, 0) + 1


class TransactionProcessor:
    """Sequential state machine applying events to the ledger.

    Parameters
    ----------
    allow_zero_balance : bool
        Accept withdrawals that leave exactly zero available. Off by
        default, so a withdrawal must leave a strictly positive balance.
    """

    def __init__(self, allow_zero_balance: bool = False) -> None:
        self.allow_zero_balance = allow_zero_balance
        self.account_table = AccountTable()
        self.transaction_log = TransactionLog()
        self.stats = ProcessorStats()
        self.state = ProcessorState.RUNNING
        self._handlers: dict[EventKind, Callable[[Event], None]] = {
            EventKind.DEPOSIT: self._deposit,
            EventKind.WITHDRAWAL: self._withdraw,
            EventKind.DISPUTE: self._dispute,
            EventKind.RESOLVE: self._resolve,
            EventKind.CHARGEBACK: self._chargeback,
        }

    def apply(self, event: Event) -> bool:
        """Apply one event.

        Parameters
        ----------
        event : Event
            Event to apply.

        Returns
        -------
        bool
            True if the event changed the ledger, False if it was rejected.

        Raises
        ------
        ProcessorStoppedError
            If the processor already received the end-of-stream signal.
        """
        if self.state is ProcessorState.STOPPED:
            raise ProcessorStoppedError(
                f"Cannot apply {event.kind.value} {event.tx_id}: processor is stopped"
            )

        try:
            self._handlers[event.kind](event)
        except tuple(REJECTION_REASONS) as e:
            self._reject(event, REJECTION_REASONS[type(e)], e)
            return False

        self.stats.applied += 1
        return True

    def run(self, channel: IngestionChannel) -> ProcessorStats:
        """Consume events from ``channel`` until the end-of-stream signal."""
        logger.info("Processor started")
        for event in channel:
            self.apply(event)
        self.stop()
        return self.stats

    def stop(self) -> None:
        self.state = ProcessorState.STOPPED
        logger.info(
            "Processor stopped: processed=%d, applied=%d, rejected=%d, accounts=%d",
            self.stats.processed,
            self.stats.applied,
            self.stats.rejected,
            len(self.account_table),
        )

    def accounts(self) -> list[AccountSnapshot]:
        """Read-only snapshot of every account, sorted by client id."""
        return self.account_table.snapshot()

    def _reject(self, event: Event, reason: RejectionReason, error: LedgerError) -> None:
        self.stats.record_rejection(reason)
        logger.warning(
            "Rejected %s tx=%d client=%d: %s",
            event.kind.value,
            event.tx_id,
            event.client_id,
            error,
            extra={
                "extra": {
                    "kind": event.kind.value,
                    "tx_id": event.tx_id,
                    "client_id": event.client_id,
                    "reason": reason.value,
                }
            },
        )

    def _account(self, client_id: int) -> Account:
        account = self.account_table.get(client_id)
        if account is None:
            raise AccountNotFoundError(f"Client {client_id} has no account")
        return account

    def _referenced_entry(self, event: Event) -> LogEntry:
        entry = self.transaction_log.lookup(event.tx_id)
        if entry is None:
            raise TransactionNotFoundError(f"Transaction {event.tx_id} not found")
        if entry.client_id != event.client_id:
            raise ClientMismatchError(
                f"Transaction {event.tx_id} belongs to client {entry.client_id}"
            )
        return entry

    def _deposit(self, event: Event) -> None:
        self.account_table.get_or_create(event.client_id).deposit(event.amount)
        self.transaction_log.record(event)

    def _withdraw(self, event: Event) -> None:
        account = self._account(event.client_id)
        account.withdraw(event.amount, allow_zero_balance=self.allow_zero_balance)
        self.transaction_log.record(event)

    def _dispute(self, event: Event) -> None:
        entry = self._referenced_entry(event)
        if entry.disputed:
            raise AlreadyDisputedError(f"Transaction {event.tx_id} is already disputed")
        self._account(entry.client_id).hold_for_dispute(entry.amount)
        self.transaction_log.mark_disputed(entry.tx_id)

    def _resolve(self, event: Event) -> None:
        entry = self._referenced_entry(event)
        if not entry.disputed:
            raise NotDisputedError(f"Transaction {event.tx_id} is not disputed")
        self._account(entry.client_id).release_dispute(entry.amount)
        self.transaction_log.mark_resolved(entry.tx_id)

    def _chargeback(self, event: Event) -> None:
        entry = self._referenced_entry(event)
        if not entry.disputed:
            raise NotDisputedError(f"Transaction {event.tx_id} is not disputed")
        self._account(entry.client_id).chargeback(entry.amount)
