"""Domain models for ledger replay."""

from ledger_replay.models.account import Account, AccountSnapshot
from ledger_replay.models.enums import EventKind, ProcessorState, RejectionReason
from ledger_replay.models.event import END_OF_STREAM, EndOfStream, Event
from ledger_replay.models.log_entry import LogEntry

__all__ = [
    "END_OF_STREAM",
    "Account",
    "AccountSnapshot",
    "EndOfStream",
    "Event",
    "EventKind",
    "LogEntry",
    "ProcessorState",
    "RejectionReason",
]
