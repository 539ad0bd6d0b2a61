from datetime import date

import pytest

from billing_recon.domain.billability import evaluate_consolidated, evaluate_legacy
from billing_recon.domain.models import DeviceStatus, ProcessingOptions

OPTIONS = ProcessingOptions(reference_date=date(2025, 12, 1), grace_period_days=30)


@pytest.mark.parametrize("grace", [0, 30, 365])
def test_no_marker_is_always_active(grace):
    options = ProcessingOptions(reference_date=date(2025, 12, 1), grace_period_days=grace)

    assert evaluate_consolidated(False, None, options) is DeviceStatus.ACTIVE


def test_deactivation_inside_grace_window_is_billable():
    assert evaluate_consolidated(True, date(2025, 11, 15), OPTIONS) is DeviceStatus.RECENTLY_DEACTIVATED


def test_grace_window_boundary_is_inclusive():
    assert evaluate_consolidated(True, date(2025, 11, 1), OPTIONS) is DeviceStatus.RECENTLY_DEACTIVATED
    assert evaluate_consolidated(True, date(2025, 10, 31), OPTIONS) is None


def test_old_deactivation_is_not_billable():
    assert evaluate_consolidated(True, date(2025, 9, 1), OPTIONS) is None


def test_future_deactivation_is_billable():
    options = ProcessingOptions(reference_date=date(2025, 12, 1), grace_period_days=0)

    assert evaluate_consolidated(True, date(2026, 3, 1), options) is DeviceStatus.RECENTLY_DEACTIVATED


def test_unparsable_marker_is_not_billable():
    assert evaluate_consolidated(True, None, OPTIONS) is None


def test_negative_grace_period_rejected():
    with pytest.raises(ValueError):
        ProcessingOptions(reference_date=date(2025, 12, 1), grace_period_days=-1)


def test_legacy_lease_and_wialon_use_deactivation_column():
    assert evaluate_legacy("LEASE", has_deactivation=False, status=None)
    assert not evaluate_legacy("LEASE", has_deactivation=True, status=None)
    assert not evaluate_legacy("WIALON", has_deactivation=True, status=None)


def test_legacy_adas_uses_status_column():
    assert evaluate_legacy("ADAS", has_deactivation=False, status=None)
    assert evaluate_legacy("ADAS", has_deactivation=False, status="Active")
    assert not evaluate_legacy("ADAS", has_deactivation=False, status="Baja")
    assert not evaluate_legacy("ADAS", has_deactivation=False, status="UNUSE")
    assert not evaluate_legacy("ADAS", has_deactivation=True, status="inactive")


def test_legacy_combustible_and_other_sheets_always_billable():
    assert evaluate_legacy("COMBUSTIBLE", has_deactivation=True, status="baja")
    assert evaluate_legacy("Wialon 2025", has_deactivation=True, status=None)
