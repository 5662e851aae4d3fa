"""In-memory account table and transaction log.

Both stores are owned by a single transaction processor for the whole run
and carry no locking of their own.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator

from ledger_replay.models import Account, AccountSnapshot, Event, LogEntry

logger = logging.getLogger(__name__)


@dataclass
class AccountTable:
    """Accounts keyed by client id."""

    accounts: dict[int, Account] = field(default_factory=dict)

    def get(self, client_id: int) -> Account | None:
        """Return the client's account, or None if it was never created."""
        return self.accounts.get(client_id)

    def get_or_create(self, client_id: int) -> Account:
        """Return the client's account, creating an empty one on first use."""
        account = self.accounts.get(client_id)
        if account is None:
            account = Account(client_id=client_id)
            self.accounts[client_id] = account
            logger.debug("Created account for client %d", client_id)
        return account

    def snapshot(self) -> list[AccountSnapshot]:
        """Return read-only copies of all accounts, sorted by client id."""
        return [self.accounts[cid].snapshot() for cid in sorted(self.accounts)]

    def __len__(self) -> int:
        return len(self.accounts)

    def __contains__(self, client_id: object) -> bool:
        return client_id in self.accounts

    def __iter__(self) -> Iterator[Account]:
        return iter(self.accounts.values())


@dataclass
class TransactionLog:
    """Disputable transactions (deposits and withdrawals) keyed by tx id."""

    entries: dict[int, LogEntry] = field(default_factory=dict)

    def record(self, event: Event) -> LogEntry:
        """Store a deposit or withdrawal.

        Parameters
        ----------
        event : Event
            Event to store. Ids are expected to be unique; if one repeats
            the new event replaces the old entry.

        Returns
        -------
        LogEntry
            The stored entry.

        Raises
        ------
        ValueError
            If the event is not a deposit or withdrawal.
        """
        if not event.kind.is_storable:
            raise ValueError(f"Cannot record {event.kind.value} event {event.tx_id}")
        if event.tx_id in self.entries:
            logger.warning("Transaction %d recorded twice, keeping the latest", event.tx_id)
        entry = LogEntry(event=event)
        self.entries[event.tx_id] = entry
        return entry

    def lookup(self, tx_id: int) -> LogEntry | None:
        return self.entries.get(tx_id)

    def mark_disputed(self, tx_id: int) -> None:
        entry = self.entries.get(tx_id)
        if entry is not None:
            entry.disputed = True

    def mark_resolved(self, tx_id: int) -> None:
        entry = self.entries.get(tx_id)
        if entry is not None:
            entry.disputed = False

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, tx_id: object) -> bool:
        return tx_id in self.entries
