"""Synthetic event generators."""

from ledger_replay.generators.events import EventGenerator

__all__ = ["EventGenerator"]
