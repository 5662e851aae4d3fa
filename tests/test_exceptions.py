"""Tests for custom exception hierarchy."""

from ledger_replay.exceptions import (
    AccountError,
    AccountErrorKind,
    AccountLockedError,
    AccountNotFoundError,
    AlreadyDisputedError,
    BalanceOverflowError,
    ChannelClosedError,
    ClientMismatchError,
    ConfigurationError,
    EntityNotFoundError,
    IngestionError,
    InsufficientFundsError,
    InvalidTransactionStateError,
    LedgerError,
    NotDisputedError,
    ProcessorStoppedError,
    SinkError,
    TransactionNotFoundError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_ledger_error_is_exception(self) -> None:
        assert isinstance(LedgerError("test"), Exception)

    def test_account_errors_carry_kind(self) -> None:
        locked = AccountLockedError(1, "locked")
        short = InsufficientFundsError(1, "short")
        overflow = BalanceOverflowError(1, "overflow")

        assert isinstance(locked, AccountError)
        assert isinstance(short, AccountError)
        assert locked.kind is AccountErrorKind.LOCKED
        assert short.kind is AccountErrorKind.INSUFFICIENT_FUNDS
        assert overflow.kind is AccountErrorKind.BALANCE_OVERFLOW

    def test_account_error_message_and_client(self) -> None:
        err = AccountLockedError(7, "locked, unable to deposit")
        assert str(err) == "Account 7: locked, unable to deposit"
        assert err.client_id == 7

    def test_not_found_errors(self) -> None:
        assert isinstance(AccountNotFoundError("x"), EntityNotFoundError)
        assert isinstance(TransactionNotFoundError("x"), EntityNotFoundError)
        assert isinstance(TransactionNotFoundError("x"), LedgerError)

    def test_transaction_state_errors(self) -> None:
        for cls in (ClientMismatchError, AlreadyDisputedError, NotDisputedError):
            assert isinstance(cls("x"), InvalidTransactionStateError)

    def test_runtime_errors_are_ledger_errors(self) -> None:
        for cls in (
            ProcessorStoppedError,
            ChannelClosedError,
            ConfigurationError,
            IngestionError,
            SinkError,
        ):
            assert isinstance(cls("x"), LedgerError)
