"""Console sink printing the final account table."""

import csv
import json
import sys
from typing import IO, Sequence

from ledger_replay.exceptions import ConfigurationError
from ledger_replay.models import AccountSnapshot
from ledger_replay.money import format_amount
from ledger_replay.sinks.serialization import to_dict

COLUMNS = ("client", "available", "held", "total", "locked")


class ConsoleSink:
    """Output accounts to a text stream (stdout by default)."""

    FORMATS = ("table", "csv", "json")

    def __init__(
        self,
        fmt: str = "table",
        pretty: bool = True,
        stream: IO[str] | None = None,
    ) -> None:
        """Initialize console sink.

        Parameters
        ----------
        fmt : str
            ``"table"`` for aligned columns, ``"csv"`` or ``"json"``.
        pretty : bool
            Pretty-print JSON output.
        stream : IO[str] | None
            Destination; resolved to ``sys.stdout`` at write time when None.
        """
        if fmt not in self.FORMATS:
            raise ConfigurationError(f"Unknown console format {fmt!r}")
        self.fmt = fmt
        self.pretty = pretty
        self.stream = stream
        self.written = 0

    def write_accounts(self, accounts: Sequence[AccountSnapshot]) -> None:
        """Write one row per account."""
        out = self.stream or sys.stdout
        if self.fmt == "table":
            self._write_table(out, accounts)
        elif self.fmt == "csv":
            self._write_csv(out, accounts)
        else:
            data = [to_dict(account) for account in accounts]
            out.write(json.dumps(data, indent=2 if self.pretty else None) + "\n")
        self.written += len(accounts)

    def _write_table(self, out: IO[str], accounts: Sequence[AccountSnapshot]) -> None:
        row_format = "{0: >6} | {1: >12} | {2: >12} | {3: >12} | {4: >6}\n"
        out.write(row_format.format(*COLUMNS))
        for account in accounts:
            out.write(
                row_format.format(
                    account.client_id,
                    format_amount(account.available),
                    format_amount(account.held),
                    format_amount(account.total),
                    str(account.locked).lower(),
                )
            )

    def _write_csv(self, out: IO[str], accounts: Sequence[AccountSnapshot]) -> None:
        writer = csv.writer(out, lineterminator="\n")
        writer.writerow(COLUMNS)
        for account in accounts:
            writer.writerow(
                [
                    account.client_id,
                    format_amount(account.available),
                    format_amount(account.held),
                    format_amount(account.total),
                    str(account.locked).lower(),
                ]
            )

    def close(self) -> None:
        (self.stream or sys.stdout).flush()
