"""Replay financial event streams against per-client accounts."""

from ledger_replay.engine import ReplayEngine, replay
from ledger_replay.models import Account, AccountSnapshot, Event, EventKind

__version__ = "0.1.0"

__all__ = [
    "Account",
    "AccountSnapshot",
    "Event",
    "EventKind",
    "ReplayEngine",
    "__version__",
    "replay",
]
