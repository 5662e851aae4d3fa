"""Tests for the command line entry point."""

import json
from pathlib import Path
from typing import Iterator
from unittest.mock import MagicMock, patch

import pytest

from ledger_replay.cli import build_config, build_parser, main

ENV_VARS = [
    "LEDGER_CHANNEL_CAPACITY",
    "LEDGER_ALLOW_ZERO_BALANCE",
    "LEDGER_OUTPUT_FORMAT",
    "OUTPUT_DIR",
    "PRETTY_JSON",
    "KAFKA_BOOTSTRAP_SERVERS",
    "KAFKA_TOPIC",
    "KAFKA_ACKS",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def no_logging_setup() -> Iterator[None]:
    with patch("ledger_replay.cli.setup_logging"):
        yield


class TestBuildConfig:
    """Tests for command line option handling."""

    def test_defaults(self) -> None:
        config = build_config(build_parser().parse_args(["in.csv"]))

        assert config.engine.channel_capacity == 1500
        assert config.engine.allow_zero_balance is False
        assert config.output.format == "table"
        assert config.kafka.enabled is False

    def test_transactions_allowed(self) -> None:
        args = build_parser().parse_args(["in.csv", "--transactions-allowed", "1000"])
        assert build_config(args).engine.channel_capacity == 1500

    def test_options_override_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LEDGER_OUTPUT_FORMAT", "json")
        monkeypatch.setenv("LEDGER_CHANNEL_CAPACITY", "10")

        args = build_parser().parse_args(
            ["in.csv", "--format", "csv", "--capacity", "3", "--kafka-bootstrap", "k:9092"]
        )
        config = build_config(args)

        assert config.output.format == "csv"
        assert config.engine.channel_capacity == 3
        assert config.kafka.bootstrap_servers == "k:9092"

    def test_capacity_options_are_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["in.csv", "--capacity", "3", "--transactions-allowed", "4"])


class TestMain:
    """Tests for main()."""

    def test_replays_file(self, sample_csv: Path, capsys: pytest.CaptureFixture) -> None:
        assert main([str(sample_csv), "--format", "csv"]) == 0

        assert capsys.readouterr().out == (
            "client,available,held,total,locked\n"
            "1,14.0000,0.0000,14.0000,false\n"
            "2,0.0000,0.0000,0.0000,true\n"
        )

    def test_table_output_by_default(self, sample_csv: Path, capsys: pytest.CaptureFixture) -> None:
        assert main([str(sample_csv)]) == 0

        out = capsys.readouterr().out
        assert "client" in out
        assert "14.0000" in out

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        assert main([str(tmp_path / "nope.csv")]) == 1
        assert "Input file not found" in capsys.readouterr().err

    def test_invalid_capacity(self, sample_csv: Path, capsys: pytest.CaptureFixture) -> None:
        assert main([str(sample_csv), "--capacity", "0"]) == 1
        assert "capacity" in capsys.readouterr().err

    def test_writes_json_file(self, sample_csv: Path, tmp_path: Path) -> None:
        output_dir = tmp_path / "out"
        assert main([str(sample_csv), "--format", "csv", "--output-dir", str(output_dir)]) == 0

        data = json.loads((output_dir / "accounts.json").read_text(encoding="utf-8"))
        assert [a["client_id"] for a in data] == [1, 2]

    @patch("ledger_replay.sinks.kafka.Producer")
    def test_publishes_to_kafka(self, mock_producer_class: MagicMock, sample_csv: Path) -> None:
        mock_producer = MagicMock()
        mock_producer.flush.return_value = 0
        mock_producer_class.return_value = mock_producer

        assert main([str(sample_csv), "--format", "csv", "--kafka-bootstrap", "k:9092"]) == 0

        assert mock_producer.produce.call_count == 2

    def test_env_output_format(
        self, sample_csv: Path, capsys: pytest.CaptureFixture, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LEDGER_OUTPUT_FORMAT", "json")

        assert main([str(sample_csv)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data[1]["locked"] is True
