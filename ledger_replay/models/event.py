"""Event model: one validated input instruction."""

from dataclasses import dataclass
from decimal import Decimal

from ledger_replay.models.enums import EventKind
from ledger_replay.money import ZERO


@dataclass(frozen=True)
class Event:
    """Immutable ledger event.

    Deposits and withdrawals carry an amount and a unique ``tx_id``.
    Disputes, resolves and chargebacks reference an earlier deposit or
    withdrawal through ``tx_id`` and ignore ``amount``.
    """

    kind: EventKind
    client_id: int
    tx_id: int
    amount: Decimal = ZERO

    def __post_init__(self) -> None:
        if self.client_id < 0:
            raise ValueError(f"client_id must be non-negative, got {self.client_id}")
        if self.tx_id < 0:
            raise ValueError(f"tx_id must be non-negative, got {self.tx_id}")
        if self.amount < 0:
            raise ValueError(f"amount must be non-negative, got {self.amount}")


class EndOfStream:
    """Terminal signal sent on the ingestion channel after the last event."""

    _instance: "EndOfStream | None" = None

    def __new__(cls) -> "EndOfStream":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "END_OF_STREAM"


END_OF_STREAM = EndOfStream()
