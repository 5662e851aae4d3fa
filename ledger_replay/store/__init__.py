"""In-memory stores owned by the transaction processor."""

from ledger_replay.store.ledger import AccountTable, TransactionLog

__all__ = ["AccountTable", "TransactionLog"]
