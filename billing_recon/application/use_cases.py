"""Application services orchestrating the billing reconciliation workflow."""
from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
import logging

from billing_recon.domain.ledger import AccountLedger
from billing_recon.domain.models import ConsolidatedRecord, ProcessingOptions
from billing_recon.domain.repositories import (
    CostWorkbookRepository,
    PlatformWorkbookRepository,
)
from billing_recon.infrastructure.parsing.costs import merge_cost_sheets
from billing_recon.infrastructure.parsing.platforms import aggregate_platform_sheets
from billing_recon.infrastructure.repositories.excel_repositories import (
    ExcelCostRepository,
    ExcelPlatformRepository,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BillingReconciliationContext:
    platform_repository: PlatformWorkbookRepository
    cost_repository: CostWorkbookRepository


class ReconcileBillingUseCase:
    def __init__(self, context: BillingReconciliationContext) -> None:
        self._context = context

    def execute(self, options: ProcessingOptions) -> list[ConsolidatedRecord]:
        # Both workbooks are read before any aggregation so a bad file yields no partial output.
        platform_sheets = self._context.platform_repository.list_sheets()
        cost_sheets = self._context.cost_repository.list_sheets()

        ledger = AccountLedger()
        devices = aggregate_platform_sheets(platform_sheets, ledger, options)
        cost_rows = merge_cost_sheets(cost_sheets, ledger)
        records = ledger.finalize()

        logger.info(
            "Reconciled %d accounts from %d billable devices and %d cost rows (reference %s, grace %d days)",
            len(records),
            devices,
            cost_rows,
            options.reference_date.isoformat(),
            options.grace_period_days,
        )
        return records


def process_files(
    platform_source: BytesIO | Path | str | bytes,
    cost_source: BytesIO | Path | str | bytes,
    options: ProcessingOptions | None = None,
) -> list[ConsolidatedRecord]:
    """Reconcile a platform workbook against a cost workbook.

    Returns one record per account sorted by calculated total, largest first.
    Raises ``InvalidWorkbook`` when either input cannot be read.
    """
    context = BillingReconciliationContext(
        platform_repository=ExcelPlatformRepository(platform_source),
        cost_repository=ExcelCostRepository(cost_source),
    )
    return ReconcileBillingUseCase(context).execute(options or ProcessingOptions.with_defaults())
