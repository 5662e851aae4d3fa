"""Command line entry point.

Usage:
    ledger-replay transactions.csv
    ledger-replay transactions.csv --format csv > accounts.csv
    ledger-replay transactions.csv --output-dir out --kafka-bootstrap localhost:9092
"""

import argparse
import logging
import sys
from pathlib import Path

from ledger_replay import __version__
from ledger_replay.config import OUTPUT_FORMATS, ReplayConfig, capacity_for
from ledger_replay.engine import ReplayEngine
from ledger_replay.exceptions import LedgerError
from ledger_replay.logging import setup_logging
from ledger_replay.readers import read_events
from ledger_replay.sinks import ConsoleSink, JsonFileSink, KafkaSink

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ledger-replay",
        description="Replay a CSV of ledger events and print the final account balances.",
    )
    parser.add_argument("input", type=Path, help="CSV file with type,client,tx,amount rows")

    capacity = parser.add_mutually_exclusive_group()
    capacity.add_argument("--capacity", type=int, help="Ingestion channel capacity")
    capacity.add_argument(
        "--transactions-allowed",
        type=int,
        help="Size the channel for this many in-flight transactions",
    )

    parser.add_argument("--format", choices=OUTPUT_FORMATS, help="Console output format")
    parser.add_argument("--output-dir", type=Path, help="Also write accounts.json here")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    parser.add_argument("--kafka-bootstrap", help="Also publish accounts to Kafka")
    parser.add_argument("--kafka-topic", help="Kafka topic for account snapshots")
    parser.add_argument(
        "--allow-zero-balance",
        action="store_true",
        help="Accept withdrawals that leave exactly zero available",
    )
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ERROR")
    parser.add_argument("--log-format", choices=["standard", "json"])
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_config(args: argparse.Namespace) -> ReplayConfig:
    """Layer command line options over the environment configuration."""
    config = ReplayConfig.from_env()

    if args.capacity is not None:
        config.engine.channel_capacity = args.capacity
    elif args.transactions_allowed is not None:
        config.engine.channel_capacity = capacity_for(args.transactions_allowed)
    if args.allow_zero_balance:
        config.engine.allow_zero_balance = True

    if args.format:
        config.output.format = args.format
    if args.output_dir:
        config.output.json_output_dir = args.output_dir
    if args.pretty:
        config.output.pretty_json = True

    if args.kafka_bootstrap:
        config.kafka.bootstrap_servers = args.kafka_bootstrap
    if args.kafka_topic:
        config.kafka.topic = args.kafka_topic

    if args.log_level:
        config.log_level = args.log_level
    if args.log_format:
        config.log_format = args.log_format

    return config.validate()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = build_config(args)
    except LedgerError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    setup_logging(level=config.log_level, format_type=config.log_format)

    input_path = args.input.resolve()
    if not input_path.is_file():
        print(f"ERROR: Input file not found: {args.input}", file=sys.stderr)
        return 1

    sinks: list[ConsoleSink | JsonFileSink | KafkaSink] = [
        ConsoleSink(fmt=config.output.format, pretty=config.output.pretty_json)
    ]

    try:
        accounts = ReplayEngine(config.engine).run(read_events(input_path))

        if config.output.json_output_dir is not None:
            sinks.append(JsonFileSink(config.output.json_output_dir, pretty=config.output.pretty_json))
        if config.kafka.enabled:
            sinks.append(KafkaSink(config.kafka))

        for sink in sinks:
            sink.write_accounts(accounts)
            sink.close()
    except LedgerError as e:
        logger.error("Replay failed: %s", e)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
