"""Command-line entrypoint for device billing reconciliation."""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from billing_recon.application.use_cases import (
    BillingReconciliationContext,
    ReconcileBillingUseCase,
)
from billing_recon.config import SETTINGS
from billing_recon.domain.errors import InvalidWorkbook
from billing_recon.domain.models import ProcessingOptions
from billing_recon.domain.results import summarize
from billing_recon.infrastructure.repositories.excel_repositories import (
    ExcelCostRepository,
    ExcelPlatformRepository,
)
from billing_recon.presentation.billing_report import write_report

logger = logging.getLogger(__name__)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile platform device counts against the cost workbook")
    parser.add_argument("platforms", type=Path, help="Path to the operations/platforms Excel file")
    parser.add_argument("costs", type=Path, help="Path to the costs/billing Excel file")
    parser.add_argument("--reference-date", type=str, help="Billing cutoff date (YYYY-MM-DD), defaults to today")
    parser.add_argument(
        "--grace-days",
        type=int,
        default=SETTINGS.default_grace_period_days,
        help="Days a deactivated device stays billable",
    )
    parser.add_argument("--output", type=Path, help="Write the xlsx billing report to this path")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)
    for path in (args.platforms, args.costs):
        if not path.is_file():
            parser.error(f"file not found: {path}")
    if args.grace_days < 0:
        parser.error("--grace-days must be zero or positive")
    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else SETTINGS.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    reference_date = date.fromisoformat(args.reference_date) if args.reference_date else None
    options = ProcessingOptions.with_defaults(reference_date, args.grace_days)

    context = BillingReconciliationContext(
        platform_repository=ExcelPlatformRepository(args.platforms),
        cost_repository=ExcelCostRepository(args.costs),
    )
    try:
        records = ReconcileBillingUseCase(context).execute(options)
    except InvalidWorkbook:
        logger.exception("Reconciliation failed")
        print(SETTINGS.error_message, file=sys.stderr)
        return 1

    summary = summarize(records)
    print("Billing Summary")
    print("===============")
    print(f"Reference date: {options.reference_date.isoformat()} (grace {options.grace_period_days} days)")
    print(f"Clients: {summary.total_clients}")
    print(f"Billable devices: {summary.total_active_devices}")
    print(f"Recent deactivations (billable): {summary.total_recently_deactivated}")
    print(f"Estimated billing: {summary.total_estimated_billing:,.2f}")
    print(f"Clients with discrepancies: {summary.clients_with_discrepancy}")

    if records:
        print("\nAccounts:")
        for record in records:
            flag = " [DISCREPANCY]" if record.has_discrepancy else ""
            print(
                f"- {record.original_account_name}: {record.counts.total_active} devices "
                f"x {record.billing.unit_price} = {record.calculated_total}{flag}"
            )

    if args.output:
        path = write_report(records, args.output)
        print(f"\nReport written to {path}")

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
