#!/usr/bin/env python3
"""Generate a sample loan portfolio and export its ledger snapshot.

Writes clients, loans, installments, per-loan progress and summary stats
as JSON files. Paid markers can be kept in a JSON file so repeated runs
with the same seed and reference day reuse them.
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loan_ledger.config import LedgerConfig
from loan_ledger.exceptions import ConfigurationError
from loan_ledger.ledger import InMemoryPaidMarkerStore, JsonFilePaidMarkerStore
from loan_ledger.logging import setup_logging
from loan_ledger.reporting import installment_stats, loan_progress, portfolio_stats
from loan_ledger.scenarios import SamplePortfolioScenario
from loan_ledger.sinks import JsonFileSink

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Generate a sample loan portfolio and export its installment schedule"
    )
    parser.add_argument(
        "--clients",
        type=int,
        default=20,
        help="Number of clients to generate (default: 20)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--today",
        type=date.fromisoformat,
        default=None,
        help="Reference day as YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("output"),
        help="Directory for JSON files (default: output)",
    )
    parser.add_argument(
        "--paid-markers",
        type=Path,
        default=None,
        help="JSON file for paid markers (default: LEDGER_PAID_MARKERS_PATH or in-memory)",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print JSON output",
    )
    args = parser.parse_args()

    try:
        config = LedgerConfig.from_env()
    except ConfigurationError as exc:
        parser.error(str(exc))

    setup_logging(config.log_level, config.log_format)

    paid_path = args.paid_markers or config.paid_markers_path
    paid_markers = JsonFilePaidMarkerStore(paid_path) if paid_path else InMemoryPaidMarkerStore()

    scenario = SamplePortfolioScenario(
        num_clients=args.clients,
        seed=args.seed,
        today=args.today,
        config=config,
        paid_markers=paid_markers,
    )
    ledger = scenario.generate()
    store = scenario.store
    installments = ledger.installments

    sink = JsonFileSink(args.output_dir, pretty=args.pretty)
    sink.write_batch("clients", list(store.clients.values()))
    sink.write_batch("loans", list(store.loans.values()))
    sink.write_batch("installments", installments)
    sink.write_batch(
        "loan_progress",
        loan_progress(store.clients.values(), store.loans.values(), installments),
    )
    sink.write_object(
        "stats",
        {
            "today": ledger.today,
            "installments": installment_stats(installments),
            "portfolio": portfolio_stats(store.loans.values(), installments),
        },
    )
    sink.close()


if __name__ == "__main__":
    main()
