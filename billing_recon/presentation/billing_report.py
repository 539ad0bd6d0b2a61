"""Billing report export: row shapes and the multi-sheet workbook."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Sequence

import pandas as pd

from billing_recon.domain.models import ConsolidatedRecord, DeviceStatus

SUMMARY_SHEET = "Billing Summary"
RECENT_SHEET = "Recent Deactivations"
DEVICES_SHEET = "All Billable Devices"

RECENT_BILLING_STATUS = "BILLABLE (grace period)"

SUMMARY_COLUMNS = [
    "Account",
    "Commercial Name",
    "Total Billable",
    "Truly Active",
    "Recent Deactivations (Billable)",
    "Wialon",
    "Lease",
    "ADAS",
    "Combustible",
    "Unit Price",
    "Billing Type",
    "Total to Bill",
    "Notes",
    "Discrepancy",
]
DEVICE_COLUMNS = ["Account", "Unit Name", "IMEI", "Device Type", "Deactivation Date", "Platform", "Status"]


def summary_rows(records: Sequence[ConsolidatedRecord]) -> list[dict[str, object]]:
    return [
        {
            "Account": r.original_account_name,
            "Commercial Name": r.billing.commercial_name,
            "Total Billable": r.counts.total_active,
            "Truly Active": r.counts.truly_active,
            "Recent Deactivations (Billable)": r.counts.recently_deactivated,
            "Wialon": r.counts.wialon,
            "Lease": r.counts.lease,
            "ADAS": r.counts.adas,
            "Combustible": r.counts.combustible,
            "Unit Price": float(r.billing.unit_price),
            "Billing Type": r.billing.billing_type,
            "Total to Bill": float(r.calculated_total),
            "Notes": r.billing.notes,
            "Discrepancy": r.has_discrepancy,
        }
        for r in records
    ]


def recent_deactivation_rows(records: Sequence[ConsolidatedRecord]) -> list[dict[str, object]]:
    return [
        {
            "Account": record.original_account_name,
            "Unit Name": device.name,
            "IMEI": device.imei,
            "Device Type": device.device_type,
            "Deactivation Date": device.deactivation_date,
            "Platform": device.platform,
            "Billing Status": RECENT_BILLING_STATUS,
        }
        for record in records
        for device in record.devices
        if device.status is DeviceStatus.RECENTLY_DEACTIVATED
    ]


def device_rows(records: Sequence[ConsolidatedRecord]) -> list[dict[str, object]]:
    return [
        {
            "Account": record.original_account_name,
            "Unit Name": device.name,
            "IMEI": device.imei,
            "Device Type": device.device_type,
            "Deactivation Date": device.deactivation_date,
            "Platform": device.platform,
            "Status": device.status.value,
        }
        for record in records
        for device in record.devices
    ]


def _col_idx_to_excel(col_idx: int) -> str:
    # 0 -> A, 25 -> Z, 26 -> AA
    name = ""
    n = col_idx
    while True:
        n, r = divmod(n, 26)
        name = chr(65 + r) + name
        if n == 0:
            break
        n -= 1
    return name


def render_workbook(records: Sequence[ConsolidatedRecord]) -> bytes:
    summary = pd.DataFrame(summary_rows(records), columns=SUMMARY_COLUMNS)
    recent = recent_deactivation_rows(records)
    devices = pd.DataFrame(device_rows(records), columns=DEVICE_COLUMNS)

    buf = BytesIO()
    with pd.ExcelWriter(buf, engine="xlsxwriter") as writer:
        summary.to_excel(writer, sheet_name=SUMMARY_SHEET, index=False)
        if recent:
            pd.DataFrame(recent).to_excel(writer, sheet_name=RECENT_SHEET, index=False)
        devices.to_excel(writer, sheet_name=DEVICES_SHEET, index=False)

        if not summary.empty:
            workbook = writer.book
            worksheet = writer.sheets[SUMMARY_SHEET]
            yellow = workbook.add_format({"bg_color": "#FFFF00"})
            flag_letter = _col_idx_to_excel(summary.columns.get_loc("Discrepancy"))
            last_col = len(summary.columns) - 1
            worksheet.conditional_format(1, 0, len(summary), last_col, {
                "type": "formula",
                "criteria": f"=${flag_letter}2=TRUE",
                "format": yellow,
            })
    buf.seek(0)
    return buf.getvalue()


def write_report(records: Sequence[ConsolidatedRecord], out_path: Path) -> Path:
    out_path = Path(out_path)
    out_path.write_bytes(render_workbook(records))
    return out_path
