"""JSON file sink for exporting the final account table."""

import json
import logging
from pathlib import Path
from typing import Sequence

from ledger_replay.exceptions import SinkError
from ledger_replay.models import AccountSnapshot
from ledger_replay.sinks.serialization import to_dict

logger = logging.getLogger(__name__)


class JsonFileSink:
    """Output accounts to ``<output_dir>/accounts.json``."""

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self.file_path = self.output_dir / "accounts.json"
        self.written = 0

    def write_accounts(self, accounts: Sequence[AccountSnapshot]) -> None:
        data = [to_dict(account) for account in accounts]
        try:
            with open(self.file_path, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                else:
                    json.dump(data, f, ensure_ascii=False)
        except OSError as e:
            raise SinkError(f"Cannot write {self.file_path}: {e}") from e
        self.written = len(accounts)

    def close(self) -> None:
        logger.info("Wrote %d accounts to %s", self.written, self.file_path)
