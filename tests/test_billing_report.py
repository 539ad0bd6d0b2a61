from decimal import Decimal
from io import BytesIO

import pandas as pd

from billing_recon.domain.ledger import AccountLedger, CostEntry
from billing_recon.domain.models import DeviceDetail, DeviceStatus, Platform
from billing_recon.presentation.billing_report import (
    DEVICES_SHEET,
    RECENT_SHEET,
    SUMMARY_SHEET,
    device_rows,
    recent_deactivation_rows,
    render_workbook,
    summary_rows,
    write_report,
)


def make_records(with_recent: bool = True):
    ledger = AccountLedger()
    ledger.add_device(
        "Acme",
        Platform.WIALON,
        DeviceDetail("Truck 1", "111", "GPS", "", DeviceStatus.ACTIVE, "WIALON"),
    )
    if with_recent:
        ledger.add_device(
            "Acme",
            Platform.LEASE,
            DeviceDetail("Truck 2", "222", "GPS", "2025-11-20", DeviceStatus.RECENTLY_DEACTIVATED, "LEASE"),
        )
    ledger.apply_cost(CostEntry("Acme", Decimal("150"), "Mensual", "", "Acme SA"))
    ledger.apply_cost(CostEntry("Beta", Decimal("90"), "N/A", "", ""))
    return ledger.finalize()


def test_summary_rows_flatten_record():
    [acme, beta] = summary_rows(make_records())

    assert acme["Account"] == "Acme"
    assert acme["Total Billable"] == 2
    assert acme["Truly Active"] == 1
    assert acme["Recent Deactivations (Billable)"] == 1
    assert acme["Total to Bill"] == 300.0
    assert acme["Discrepancy"] is False
    assert beta["Discrepancy"] is True


def test_detail_rows():
    records = make_records()

    recent = recent_deactivation_rows(records)
    devices = device_rows(records)

    assert [row["Unit Name"] for row in recent] == ["Truck 2"]
    assert [row["Status"] for row in devices] == ["ACTIVE", "RECENTLY_DEACTIVATED"]


def test_render_workbook_sheets():
    data = render_workbook(make_records())

    sheets = pd.read_excel(BytesIO(data), sheet_name=None)

    assert list(sheets) == [SUMMARY_SHEET, RECENT_SHEET, DEVICES_SHEET]
    assert len(sheets[SUMMARY_SHEET]) == 2
    assert len(sheets[RECENT_SHEET]) == 1
    assert len(sheets[DEVICES_SHEET]) == 2


def test_recent_sheet_omitted_when_empty(tmp_path):
    path = write_report(make_records(with_recent=False), tmp_path / "report.xlsx")

    sheets = pd.read_excel(path, sheet_name=None)

    assert list(sheets) == [SUMMARY_SHEET, DEVICES_SHEET]


def test_render_workbook_with_no_records():
    sheets = pd.read_excel(BytesIO(render_workbook([])), sheet_name=None)

    assert list(sheets[SUMMARY_SHEET].columns)[0] == "Account"
    assert sheets[DEVICES_SHEET].empty
