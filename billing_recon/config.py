"""Central configuration for the billing reconciliation package."""
from __future__ import annotations

from dataclasses import dataclass

GENERIC_ERROR_MESSAGE = (
    "Could not process the files. Make sure both are valid Excel workbooks "
    "with the expected structure."
)


@dataclass(slots=True, frozen=True)
class Settings:
    default_grace_period_days: int
    report_file_name: str
    log_level: str
    top_accounts_limit: int
    error_message: str


SETTINGS = Settings(
    default_grace_period_days=30,
    report_file_name="billing_report.xlsx",
    log_level="INFO",
    top_accounts_limit=10,
    error_message=GENERIC_ERROR_MESSAGE,
)
