"""Synthetic ledger event streams for benchmarks and invariant tests."""

import random
from decimal import Decimal
from typing import Iterator

from ledger_replay.generators.base import BaseGenerator
from ledger_replay.models import Event, EventKind
from ledger_replay.money import to_amount


class EventGenerator(BaseGenerator):
    """Generate an ordered, mostly well-formed stream of ledger events.

    Deposits and withdrawals get unique increasing transaction ids. Disputes
    reference earlier deposits or withdrawals of the same client; resolves
    and chargebacks settle open disputes. A small share of events reference
    transactions that never existed.

    Parameters
    ----------
    num_clients : int
        Client ids are drawn from ``1..num_clients``.
    withdrawal_rate : float
        Share of money movements that are withdrawals.
    dispute_rate : float
        Probability that a step disputes an earlier transaction.
    settle_rate : float
        Probability that a step settles an open dispute.
    chargeback_rate : float
        Share of settlements that are chargebacks rather than resolves.
    invalid_rate : float
        Probability that a step references an unknown transaction.
    seed : int | None
        Random seed for reproducibility.
    """

    INVALID_KINDS = [EventKind.DISPUTE, EventKind.RESOLVE, EventKind.CHARGEBACK]

    def __init__(
        self,
        num_clients: int = 10,
        withdrawal_rate: float = 0.3,
        dispute_rate: float = 0.05,
        settle_rate: float = 0.1,
        chargeback_rate: float = 0.2,
        invalid_rate: float = 0.01,
        seed: int | None = None,
    ) -> None:
        super().__init__(seed)
        if num_clients < 1:
            raise ValueError("num_clients must be at least 1")
        self.num_clients = num_clients
        self.withdrawal_rate = withdrawal_rate
        self.dispute_rate = dispute_rate
        self.settle_rate = settle_rate
        self.chargeback_rate = chargeback_rate
        self.invalid_rate = invalid_rate

        self._next_tx_id = 1
        self._movements: list[Event] = []
        self._open_disputes: list[Event] = []

    def generate(self, count: int) -> Iterator[Event]:
        """Yield ``count`` events in replay order."""
        for _ in range(count):
            yield self._next_event()

    def _next_event(self) -> Event:
        roll = random.random()

        if self._open_disputes and roll < self.settle_rate:
            disputed = self._open_disputes.pop(random.randrange(len(self._open_disputes)))
            kind = (
                EventKind.CHARGEBACK
                if random.random() < self.chargeback_rate
                else EventKind.RESOLVE
            )
            return Event(kind=kind, client_id=disputed.client_id, tx_id=disputed.tx_id)

        roll = random.random()
        if self._movements and roll < self.dispute_rate:
            target = random.choice(self._movements)
            if target not in self._open_disputes:
                self._open_disputes.append(target)
            return Event(kind=EventKind.DISPUTE, client_id=target.client_id, tx_id=target.tx_id)

        if self.dispute_rate <= roll < self.dispute_rate + self.invalid_rate:
            return Event(
                kind=random.choice(self.INVALID_KINDS),
                client_id=self._client_id(),
                tx_id=self._next_tx_id + 1_000_000,
            )

        return self._movement()

    def _movement(self) -> Event:
        kind = EventKind.WITHDRAWAL if random.random() < self.withdrawal_rate else EventKind.DEPOSIT
        # 0.0001 to 999.9999
        amount = Decimal(self.fake.random_int(min=1, max=9_999_999)).scaleb(-4)
        event = Event(
            kind=kind,
            client_id=self._client_id(),
            tx_id=self._next_tx_id,
            amount=to_amount(amount),
        )
        self._next_tx_id += 1
        self._movements.append(event)
        return event

    def _client_id(self) -> int:
        return self.fake.random_int(min=1, max=self.num_clients)
