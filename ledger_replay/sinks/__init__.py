"""Output sinks for the final account table."""

from ledger_replay.sinks.console import ConsoleSink
from ledger_replay.sinks.json_file import JsonFileSink
from ledger_replay.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "JsonFileSink", "KafkaSink"]
