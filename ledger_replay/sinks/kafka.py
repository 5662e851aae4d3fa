"""Kafka sink publishing the final account table, one message per account."""

import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Sequence

from confluent_kafka import Producer

from ledger_replay.config import KafkaConfig
from ledger_replay.exceptions import SinkError
from ledger_replay.models import AccountSnapshot
from ledger_replay.sinks.serialization import to_dict

logger = logging.getLogger(__name__)


@dataclass
class ProducerStats:
    """Track producer delivery statistics."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0

    @property
    def throughput(self) -> float:
        """Calculate messages per second achieved."""
        if self.start_time is None or self.end_time is None:
            return 0.0
        duration = self.end_time - self.start_time
        return self.sent / duration if duration > 0 else 0.0


class KafkaSink:
    """Output account snapshots to a Kafka topic keyed by client id."""

    def __init__(self, config: KafkaConfig | str) -> None:
        """Initialize Kafka sink.

        Parameters
        ----------
        config : KafkaConfig | str
            Producer configuration or bootstrap servers string.
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)
        if not config.enabled:
            raise SinkError("Kafka sink needs bootstrap servers")

        self.config = config
        self.producer = Producer(config.to_dict())
        self.stats = ProducerStats()

    def _delivery_callback(self, err: Any, msg: Any) -> None:
        """Handle delivery reports."""
        if err:
            self.stats.failed += 1
            logger.error("Delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def send(self, account: AccountSnapshot, topic: str | None = None) -> None:
        """Send a single account snapshot."""
        value = json.dumps(to_dict(account)).encode("utf-8")
        self.producer.produce(
            topic=topic or self.config.topic,
            key=str(account.client_id).encode("utf-8"),
            value=value,
            callback=self._delivery_callback,
        )
        self.stats.sent += 1
        self.producer.poll(0)

    def write_accounts(self, accounts: Sequence[AccountSnapshot]) -> ProducerStats:
        """Publish every account and wait for delivery reports."""
        logger.info("Publishing %d accounts to %s", len(accounts), self.config.topic)

        self.stats = ProducerStats()
        self.stats.start_time = time.time()
        for account in accounts:
            self.send(account)
        self.flush()
        self.stats.end_time = time.time()

        logger.info(
            "Publish complete: sent=%d, delivered=%d, failed=%d, success=%.1f%%, throughput=%.0f msg/s",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
            self.stats.success_rate * 100,
            self.stats.throughput,
        )
        return self.stats

    def flush(self, timeout: float = 30.0) -> None:
        """Flush pending messages."""
        remaining = self.producer.flush(timeout)
        if remaining:
            raise SinkError(f"{remaining} messages still queued after {timeout}s")

    def close(self) -> None:
        """Flush and close the producer."""
        self.flush()
        logger.info(
            "Kafka sink closed: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )
