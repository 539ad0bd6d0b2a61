"""Domain-level summaries over a finished reconciliation."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from .models import ConsolidatedRecord


@dataclass(frozen=True)
class BillingSummary:
    total_clients: int
    total_active_devices: int
    total_recently_deactivated: int
    total_estimated_billing: Decimal
    clients_with_discrepancy: int

    def has_issues(self) -> bool:
        return self.clients_with_discrepancy > 0


def summarize(records: Sequence[ConsolidatedRecord]) -> BillingSummary:
    return BillingSummary(
        total_clients=len(records),
        total_active_devices=sum(r.counts.total_active for r in records),
        total_recently_deactivated=sum(r.counts.recently_deactivated for r in records),
        total_estimated_billing=sum((r.calculated_total for r in records), Decimal("0")),
        clients_with_discrepancy=sum(1 for r in records if r.has_discrepancy),
    )


def top_accounts(records: Sequence[ConsolidatedRecord], limit: int = 10) -> list[tuple[str, Decimal]]:
    """Largest accounts by calculated total; expects records already sorted."""
    return [(r.original_account_name, r.calculated_total) for r in records[:limit]]
