"""Configuration management for ledger-replay."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ledger_replay.exceptions import ConfigurationError

OUTPUT_FORMATS = ("table", "csv", "json")
LOG_FORMATS = ("standard", "json")

# Bytes per in-flight event and per channel slot, used to turn a desired
# number of in-flight transactions into a channel capacity.
EVENT_SIZE_BYTES = 12
SLOT_SIZE_BYTES = 8


def capacity_for(transactions_allowed: int) -> int:
    """Derive a channel capacity from the number of transactions allowed in flight."""
    return max(1, (transactions_allowed * EVENT_SIZE_BYTES) // SLOT_SIZE_BYTES)


@dataclass
class EngineConfig:
    """Replay engine configuration."""

    channel_capacity: int = 1500
    # Allow withdrawals that leave exactly zero available
    allow_zero_balance: bool = False


@dataclass
class OutputConfig:
    """Output configuration."""

    format: str = "table"
    json_output_dir: Path | None = None
    pretty_json: bool = False


@dataclass
class KafkaConfig:
    """Kafka producer configuration for publishing account snapshots."""

    bootstrap_servers: str | None = None
    topic: str = "ledger.accounts"
    acks: str = "all"
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3

    @property
    def enabled(self) -> bool:
        return bool(self.bootstrap_servers)

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class ReplayConfig:
    """Main configuration for ledger-replay."""

    engine: EngineConfig = field(default_factory=EngineConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    def validate(self) -> "ReplayConfig":
        """Check option values, raising ConfigurationError on the first bad one."""
        if self.engine.channel_capacity < 1:
            raise ConfigurationError(
                f"Channel capacity must be positive, got {self.engine.channel_capacity}"
            )
        if self.output.format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Unknown output format {self.output.format!r}, expected one of {OUTPUT_FORMATS}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"Unknown log format {self.log_format!r}, expected one of {LOG_FORMATS}"
            )
        return self

    @classmethod
    def from_env(cls) -> "ReplayConfig":
        """Create config from environment variables."""
        import os

        capacity_str = os.getenv("LEDGER_CHANNEL_CAPACITY", "1500")
        try:
            capacity = int(capacity_str)
        except ValueError as e:
            raise ConfigurationError(
                f"LEDGER_CHANNEL_CAPACITY must be an integer, got {capacity_str!r}"
            ) from e

        engine = EngineConfig(
            channel_capacity=capacity,
            allow_zero_balance=os.getenv("LEDGER_ALLOW_ZERO_BALANCE", "false").lower() == "true",
        )

        output_dir = os.getenv("OUTPUT_DIR")
        output = OutputConfig(
            format=os.getenv("LEDGER_OUTPUT_FORMAT", "table"),
            json_output_dir=Path(output_dir) if output_dir else None,
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS") or None,
            topic=os.getenv("KAFKA_TOPIC", "ledger.accounts"),
            acks=os.getenv("KAFKA_ACKS", "all"),
        )

        return cls(
            engine=engine,
            output=output,
            kafka=kafka,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
