"""CSV reader for ledger event files.

Rows have the columns ``type, client, tx, amount``. The first row is a
header. A row whose kind, client id or transaction id does not parse is
skipped. A missing or unparsable amount becomes zero.
"""

import csv
import logging
from decimal import Decimal
from pathlib import Path
from typing import Iterator, Sequence

from ledger_replay.exceptions import IngestionError
from ledger_replay.models import Event, EventKind
from ledger_replay.money import ZERO, to_amount

logger = logging.getLogger(__name__)

TYPE_INDEX = 0
CLIENT_ID_INDEX = 1
TX_ID_INDEX = 2
AMOUNT_INDEX = 3


def _parse_id(text: str) -> int | None:
    try:
        value = int(text.strip())
    except ValueError:
        return None
    return value if value >= 0 else None


def parse_amount(text: str) -> Decimal:
    """Parse an amount column, falling back to zero.

    Parameters
    ----------
    text : str
        Raw column value.

    Returns
    -------
    Decimal
        The amount quantized to four decimal places, or zero if the text is
        empty, not a number, negative, not finite or above ``MAX_AMOUNT``.
    """
    try:
        amount = to_amount(text.strip())
    except ValueError:
        return ZERO
    return amount if amount >= 0 else ZERO


def parse_row(row: Sequence[str]) -> Event | None:
    """Turn one CSV row into an Event, or None if a required field is invalid."""
    if len(row) <= TX_ID_INDEX:
        return None

    try:
        kind = EventKind.parse(row[TYPE_INDEX])
    except ValueError:
        return None

    client_id = _parse_id(row[CLIENT_ID_INDEX])
    tx_id = _parse_id(row[TX_ID_INDEX])
    if client_id is None or tx_id is None:
        return None

    amount = parse_amount(row[AMOUNT_INDEX]) if len(row) > AMOUNT_INDEX else ZERO
    return Event(kind=kind, client_id=client_id, tx_id=tx_id, amount=amount)


def read_events(path: str | Path) -> Iterator[Event]:
    """Lazily read events from a CSV file.

    Parameters
    ----------
    path : str | Path
        CSV file with a header row.

    Yields
    ------
    Event
        Events in file order.

    Raises
    ------
    IngestionError
        If the file cannot be opened or read.
    """
    path = Path(path)
    skipped = 0
    try:
        with open(path, newline="", encoding="utf-8") as f:
            reader = csv.reader(f, skipinitialspace=True)
            next(reader, None)
            for line_no, row in enumerate(reader, start=2):
                if not row:
                    continue
                event = parse_row(row)
                if event is None:
                    skipped += 1
                    logger.debug("Skipping malformed row %d in %s: %r", line_no, path, row)
                    continue
                yield event
    except (OSError, csv.Error, UnicodeDecodeError) as e:
        raise IngestionError(f"Cannot read {path}: {e}") from e

    if skipped:
        logger.info("Skipped %d malformed rows in %s", skipped, path)
