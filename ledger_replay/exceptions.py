"""Custom exception hierarchy for ledger-replay."""

from enum import Enum


class LedgerError(Exception):
    """Base exception for all ledger-replay errors."""


class AccountErrorKind(str, Enum):
    LOCKED = "LOCKED"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    BALANCE_OVERFLOW = "BALANCE_OVERFLOW"


class AccountError(LedgerError):
    """Raised when an account operation cannot be applied."""

    kind: AccountErrorKind

    def __init__(self, client_id: int, message: str) -> None:
        super().__init__(f"Account {client_id}: {message}")
        self.client_id = client_id


class AccountLockedError(AccountError):
    """Raised when a locked account is asked to change."""

    kind = AccountErrorKind.LOCKED


class InsufficientFundsError(AccountError):
    """Raised when available (or held) funds do not cover the amount."""

    kind = AccountErrorKind.INSUFFICIENT_FUNDS


class BalanceOverflowError(AccountError):
    """Raised when a balance would need more digits than the ledger keeps."""

    kind = AccountErrorKind.BALANCE_OVERFLOW


class EntityNotFoundError(LedgerError):
    """Raised when a referenced entity does not exist."""


class AccountNotFoundError(EntityNotFoundError):
    """Raised when an event targets a client with no account."""


class TransactionNotFoundError(EntityNotFoundError):
    """Raised when a referenced transaction id is not in the log."""


class InvalidTransactionStateError(LedgerError):
    """Raised when a logged transaction is in the wrong state for the operation."""


class ClientMismatchError(InvalidTransactionStateError):
    """Raised when an event references another client's transaction."""


class AlreadyDisputedError(InvalidTransactionStateError):
    """Raised when disputing a transaction that is already under dispute."""


class NotDisputedError(InvalidTransactionStateError):
    """Raised when resolving or charging back an undisputed transaction."""


class ProcessorStoppedError(LedgerError):
    """Raised when an event is applied after the end-of-stream signal."""


class ChannelClosedError(LedgerError):
    """Raised when sending on a channel that already carried the terminal signal."""


class ConfigurationError(LedgerError):
    """Raised when configuration is invalid or missing."""


class IngestionError(LedgerError):
    """Raised when the event source cannot be read."""


class SinkError(LedgerError):
    """Raised when a sink operation fails."""
