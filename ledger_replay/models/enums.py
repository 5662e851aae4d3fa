"""Enumeration types for ledger events and processing."""

from enum import Enum


class EventKind(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @classmethod
    def parse(cls, token: str) -> "EventKind":
        """Parse a case-insensitive kind token, raising ValueError if unknown."""
        return cls(token.strip().lower())

    @property
    def is_storable(self) -> bool:
        """Deposits and withdrawals are kept for later disputes."""
        return self in (EventKind.DEPOSIT, EventKind.WITHDRAWAL)


class ProcessorState(str, Enum):
    RUNNING = "RUNNING"
    STOPPED = "STOPPED"


class RejectionReason(str, Enum):
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    ACCOUNT_LOCKED = "ACCOUNT_LOCKED"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    BALANCE_OVERFLOW = "BALANCE_OVERFLOW"
    TRANSACTION_NOT_FOUND = "TRANSACTION_NOT_FOUND"
    CLIENT_MISMATCH = "CLIENT_MISMATCH"
    ALREADY_DISPUTED = "ALREADY_DISPUTED"
    NOT_DISPUTED = "NOT_DISPUTED"
