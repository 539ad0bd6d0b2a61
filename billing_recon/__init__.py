"""Device billing reconciliation toolkit."""
from billing_recon.application.use_cases import (
    BillingReconciliationContext,
    ReconcileBillingUseCase,
    process_files,
)
from billing_recon.domain.errors import InvalidWorkbook
from billing_recon.domain.models import ConsolidatedRecord, ProcessingOptions
from billing_recon.infrastructure.repositories.excel_repositories import (
    ExcelCostRepository,
    ExcelPlatformRepository,
)

__all__ = [
    "BillingReconciliationContext",
    "ReconcileBillingUseCase",
    "process_files",
    "InvalidWorkbook",
    "ConsolidatedRecord",
    "ProcessingOptions",
    "ExcelCostRepository",
    "ExcelPlatformRepository",
]
