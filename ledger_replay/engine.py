"""Replay engine: wires an event source to the transaction processor.

A producer thread pushes events onto a bounded ingestion channel in source
order and closes it. The calling thread creates and owns the processor,
which consumes the channel until the terminal signal. Only the consumer
ever touches the account table and transaction log.
"""

import logging
import threading
import time
from typing import Any, Iterable

from ledger_replay.channel import IngestionChannel
from ledger_replay.config import EngineConfig
from ledger_replay.exceptions import IngestionError
from ledger_replay.models import AccountSnapshot, Event
from ledger_replay.processor import TransactionProcessor

logger = logging.getLogger(__name__)


class ReplayEngine:
    """Run one replay of an event stream.

    Parameters
    ----------
    config : EngineConfig | None
        Channel capacity and withdrawal policy. Defaults to ``EngineConfig()``.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()
        self.processor: TransactionProcessor | None = None
        self._producer_error: BaseException | None = None

    def run(self, events: Iterable[Event]) -> list[AccountSnapshot]:
        """Replay ``events`` and return the final account snapshot.

        Parameters
        ----------
        events : Iterable[Event]
            Finite, ordered event source. It is consumed once, lazily.

        Returns
        -------
        list[AccountSnapshot]
            Final state of every account, sorted by client id.

        Raises
        ------
        IngestionError
            If iterating ``events`` raised. Events read before the failure
            are still applied.
        """
        channel = IngestionChannel(self.config.channel_capacity)
        self._producer_error = None

        producer = threading.Thread(
            target=self._produce,
            args=(events, channel),
            name="ledger-producer",
            daemon=True,
        )

        start = time.perf_counter()
        producer.start()

        processor = TransactionProcessor(allow_zero_balance=self.config.allow_zero_balance)
        self.processor = processor
        processor.run(channel)
        producer.join()

        logger.info(
            "Replayed %d events into %d accounts in %.3fs",
            processor.stats.processed,
            len(processor.account_table),
            time.perf_counter() - start,
        )

        if self._producer_error is not None:
            raise IngestionError(
                f"Event source failed: {self._producer_error}"
            ) from self._producer_error

        return processor.accounts()

    def _produce(self, events: Iterable[Event], channel: IngestionChannel) -> None:
        try:
            for event in events:
                channel.send(event)
        except Exception as e:
            logger.error("Event source failed after %d events: %s", channel.sent, e)
            self._producer_error = e
        finally:
            channel.close()


def replay(events: Iterable[Event], **kwargs: Any) -> list[AccountSnapshot]:
    """Replay ``events`` with an ``EngineConfig`` built from ``kwargs``."""
    return ReplayEngine(EngineConfig(**kwargs)).run(events)
