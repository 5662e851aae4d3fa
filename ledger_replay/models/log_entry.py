"""Transaction log entry model."""

from dataclasses import dataclass
from decimal import Decimal

from ledger_replay.models.event import Event


@dataclass
class LogEntry:
    """A stored deposit or withdrawal and its dispute state."""

    event: Event
    disputed: bool = False

    @property
    def tx_id(self) -> int:
        return self.event.tx_id

    @property
    def client_id(self) -> int:
        return self.event.client_id

    @property
    def amount(self) -> Decimal:
        return self.event.amount
