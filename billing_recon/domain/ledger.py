"""Aggregation context for one reconciliation pass.

The ledger owns the mapping from normalized account key to record. It is
created per run and passed through the platform pass and then the cost pass,
so concurrent runs never share state.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from .models import ConsolidatedRecord, CostData, DeviceDetail, DeviceStatus, Platform


def normalize_account_key(raw: str) -> str:
    return str(raw).strip().upper()


@dataclass(frozen=True)
class CostEntry:
    """Billing fields read from one cost row; every field overwrites the record."""

    account: str
    unit_price: Decimal
    billing_type: str
    notes: str
    commercial_name: str


class AccountLedger:
    def __init__(self) -> None:
        self._records: dict[str, ConsolidatedRecord] = {}
        self._finalized = False

    def __len__(self) -> int:
        return len(self._records)

    def get(self, raw_account: str) -> ConsolidatedRecord | None:
        return self._records.get(normalize_account_key(raw_account))

    def record_for(self, raw_account: str) -> ConsolidatedRecord:
        """Return the record for an account, creating an empty one on first mention."""
        if self._finalized:
            raise RuntimeError("ledger already finalized")
        key = normalize_account_key(raw_account)
        record = self._records.get(key)
        if record is None:
            record = ConsolidatedRecord(key=key, original_account_name=raw_account)
            self._records[key] = record
        return record

    def add_device(self, raw_account: str, platform: Platform, detail: DeviceDetail) -> ConsolidatedRecord:
        record = self.record_for(raw_account)
        record.counts.add(platform, recently_deactivated=detail.status is DeviceStatus.RECENTLY_DEACTIVATED)
        record.devices.append(detail)
        return record

    def apply_cost(self, entry: CostEntry) -> ConsolidatedRecord:
        record = self.record_for(entry.account)
        record.billing = CostData(
            unit_price=entry.unit_price,
            billing_type=entry.billing_type,
            notes=entry.notes,
            commercial_name=entry.commercial_name,
        )
        return record

    def finalize(self) -> list[ConsolidatedRecord]:
        """Compute totals and discrepancy flags, then sort by total descending.

        ``sorted`` is stable, so ties keep the order accounts were first seen.
        """
        for record in self._records.values():
            finalize_record(record)
        self._finalized = True
        return sorted(self._records.values(), key=lambda r: r.calculated_total, reverse=True)


def has_discrepancy(total_active: int, unit_price: Decimal) -> bool:
    return (total_active > 0 and unit_price == 0) or (total_active == 0 and unit_price > 0)


def finalize_record(record: ConsolidatedRecord) -> ConsolidatedRecord:
    total_active = record.counts.total_active
    unit_price = record.billing.unit_price
    record.calculated_total = total_active * unit_price
    record.has_discrepancy = has_discrepancy(total_active, unit_price)
    return record
