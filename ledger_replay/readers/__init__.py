"""Input readers turning raw rows into ledger events."""

from ledger_replay.readers.csv_reader import parse_amount, parse_row, read_events

__all__ = ["parse_amount", "parse_row", "read_events"]
