"""Domain models for the device billing reconciliation pipeline.

These dataclasses capture the canonical shape of a consolidated billing
record as produced by one reconciliation pass.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

from billing_recon.config import SETTINGS


class Platform(str, Enum):
    """Tracking platform a device is billed under."""

    LEASE = "lease"
    WIALON = "wialon"
    COMBUSTIBLE = "combustible"
    ADAS = "adas"


class DeviceStatus(str, Enum):
    ACTIVE = "ACTIVE"
    RECENTLY_DEACTIVATED = "RECENTLY_DEACTIVATED"


@dataclass(frozen=True)
class DeviceDetail:
    """A single billable device contributing to an account's count."""

    name: str
    imei: str
    device_type: str
    deactivation_date: str
    status: DeviceStatus
    platform: str


@dataclass
class PlatformCounts:
    lease: int = 0
    wialon: int = 0
    combustible: int = 0
    adas: int = 0
    total_active: int = 0
    recently_deactivated: int = 0

    def add(self, platform: Platform, recently_deactivated: bool = False) -> None:
        setattr(self, platform.value, getattr(self, platform.value) + 1)
        self.total_active += 1
        if recently_deactivated:
            self.recently_deactivated += 1

    @property
    def truly_active(self) -> int:
        return self.total_active - self.recently_deactivated


@dataclass
class CostData:
    unit_price: Decimal = Decimal("0")
    billing_type: str = "-"
    notes: str = "-"
    commercial_name: str = ""


@dataclass
class ConsolidatedRecord:
    """Per-account billing record; finalized once by the ledger."""

    key: str
    original_account_name: str
    counts: PlatformCounts = field(default_factory=PlatformCounts)
    billing: CostData = field(default_factory=CostData)
    calculated_total: Decimal = Decimal("0")
    has_discrepancy: bool = False
    devices: list[DeviceDetail] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class ProcessingOptions:
    """Billing cutoff and grace period applied to deactivated devices."""

    reference_date: date
    grace_period_days: int

    def __post_init__(self) -> None:
        if self.grace_period_days < 0:
            raise ValueError(f"grace_period_days must be non-negative, got {self.grace_period_days}")

    @classmethod
    def with_defaults(
        cls,
        reference_date: date | None = None,
        grace_period_days: int | None = None,
    ) -> "ProcessingOptions":
        return cls(
            reference_date=reference_date or date.today(),
            grace_period_days=SETTINGS.default_grace_period_days if grace_period_days is None else grace_period_days,
        )
