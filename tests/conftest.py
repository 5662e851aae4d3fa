"""Pytest configuration and fixtures."""

from decimal import Decimal
from pathlib import Path
from typing import Callable

import pytest

from ledger_replay.models import Event, EventKind
from ledger_replay.processor import TransactionProcessor

EventFactory = Callable[..., Event]


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def processor() -> TransactionProcessor:
    """Fresh processor with the default withdrawal policy."""
    return TransactionProcessor()


@pytest.fixture
def make_event() -> EventFactory:
    """Build events from a kind token, client id, tx id and optional amount."""

    def _make(kind: str, client_id: int, tx_id: int, amount: str = "0") -> Event:
        return Event(
            kind=EventKind(kind),
            client_id=client_id,
            tx_id=tx_id,
            amount=Decimal(amount),
        )

    return _make


@pytest.fixture
def sample_csv(tmp_path: Path) -> Path:
    """CSV covering every event kind for two clients."""
    path = tmp_path / "transactions.csv"
    path.write_text(
        "type, client, tx, amount\n"
        "deposit, 1, 1, 10.0\n"
        "deposit, 2, 2, 20.0\n"
        "deposit, 1, 3, 5.5\n"
        "withdrawal, 1, 4, 1.5\n"
        "withdrawal, 2, 5, 30.0\n"
        "dispute, 1, 3,\n"
        "resolve, 1, 3,\n"
        "dispute, 2, 2,\n"
        "chargeback, 2, 2,\n",
        encoding="utf-8",
    )
    return path
