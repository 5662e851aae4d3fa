#!/usr/bin/env python3
"""Generate a sample ledger event CSV.

Usage:
    python scripts/generate_sample_data.py --events 10000 --clients 50
    python scripts/generate_sample_data.py --events 1000000 --output local/big.csv --seed 7
"""

import argparse
import csv
import logging
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ledger_replay.generators import EventGenerator
from ledger_replay.money import format_amount

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a sample ledger event CSV")
    parser.add_argument("--events", type=int, default=1000, help="Number of events")
    parser.add_argument("--clients", type=int, default=10, help="Number of clients")
    parser.add_argument("--dispute-rate", type=float, default=0.05)
    parser.add_argument("--chargeback-rate", type=float, default=0.2)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--output", type=Path, default=Path("local/transactions.csv"))
    args = parser.parse_args()

    generator = EventGenerator(
        num_clients=args.clients,
        dispute_rate=args.dispute_rate,
        chargeback_rate=args.chargeback_rate,
        seed=args.seed,
    )

    args.output.parent.mkdir(parents=True, exist_ok=True)
    t0 = time.perf_counter()
    with open(args.output, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["type", "client", "tx", "amount"])
        for event in generator.generate(args.events):
            amount = format_amount(event.amount) if event.kind.is_storable else ""
            writer.writerow([event.kind.value, event.client_id, event.tx_id, amount])

    logger.info("Wrote %d events to %s in %.1fs", args.events, args.output, time.perf_counter() - t0)


if __name__ == "__main__":
    main()
