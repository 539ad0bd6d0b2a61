"""Billability rules for platform devices.

Two rules coexist on purpose. Consolidated sheets apply the grace period to
deactivation dates; legacy sheets use a flat per-sheet rule and never look at
the grace period.
"""
from __future__ import annotations

from datetime import date

from .models import DeviceStatus, ProcessingOptions

INACTIVE_ADAS_STATUSES = frozenset({"unuse", "baja", "inactive"})


def evaluate_consolidated(
    has_marker: bool,
    deactivated_on: date | None,
    options: ProcessingOptions,
) -> DeviceStatus | None:
    """Return the billing status of a consolidated-format device, or None if not billable.

    ``has_marker`` tells whether the deactivation cell held anything at all;
    ``deactivated_on`` is that cell parsed to a date (None when unparsable).
    """
    if not has_marker:
        return DeviceStatus.ACTIVE
    if deactivated_on is None:
        return None
    if deactivated_on > options.reference_date:
        return DeviceStatus.RECENTLY_DEACTIVATED
    if (options.reference_date - deactivated_on).days <= options.grace_period_days:
        return DeviceStatus.RECENTLY_DEACTIVATED
    return None


def evaluate_legacy(sheet_name: str, has_deactivation: bool, status: str | None) -> bool:
    """Flat legacy rule keyed on the exact sheet name."""
    if sheet_name in ("LEASE", "WIALON"):
        return not has_deactivation
    if sheet_name == "ADAS":
        return (status or "").lower() not in INACTIVE_ADAS_STATUSES
    return True
