"""Device extraction from platform sheets, one routine per sheet layout."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, Sequence
import logging

from billing_recon.domain.billability import evaluate_consolidated, evaluate_legacy
from billing_recon.domain.ledger import AccountLedger
from billing_recon.domain.models import DeviceDetail, DeviceStatus, Platform, ProcessingOptions
from billing_recon.domain.repositories import RawSheet
from billing_recon.infrastructure.parsing.headers import (
    CONSOLIDATED_ACCOUNT_COLUMNS,
    CONSOLIDATED_DEACTIVATION_COLUMNS,
    CONSOLIDATED_DEVICE_TYPE_COLUMNS,
    CONSOLIDATED_IMEI_COLUMNS,
    DEFAULT_DEVICE_NAME,
    DEVICE_NAME_COLUMNS,
    LEGACY_ACCOUNT_COLUMNS,
    LEGACY_DEACTIVATION_COLUMNS,
    LEGACY_DEVICE_TYPE_COLUMNS,
    LEGACY_IMEI_COLUMNS,
    LEGACY_STATUS_COLUMNS,
    ORIGIN_COLUMNS,
    PLACEHOLDER,
)
from billing_recon.infrastructure.parsing.sheet_format import (
    ConsolidatedSheet,
    LegacySheet,
    SheetLayout,
    detect_sheet_format,
)
from billing_recon.infrastructure.parsing.utils import (
    cell_text,
    get_value,
    has_marker,
    normalize_header,
    normalize_row,
    parse_date,
)

logger = logging.getLogger(__name__)

# Substring checks against the origin column; anything else bills as lease.
ORIGIN_PLATFORMS = (
    ("WIALON", Platform.WIALON),
    ("ADAS", Platform.ADAS),
    ("COMBUSTIBLE", Platform.COMBUSTIBLE),
)


@dataclass(frozen=True)
class DeviceEntry:
    account: str
    platform: Platform
    detail: DeviceDetail


def _text(row: Mapping[str, Any], candidates: Iterable[str], default: str) -> str:
    value = get_value(row, candidates)
    if value is None:
        return default
    return cell_text(value) or default


def platform_from_origin(origin: str) -> Platform:
    origin_upper = normalize_header(origin)
    for keyword, platform in ORIGIN_PLATFORMS:
        if keyword in origin_upper:
            return platform
    return Platform.LEASE


def consolidated_devices(sheet: ConsolidatedSheet, options: ProcessingOptions) -> Iterator[DeviceEntry]:
    for raw in sheet.rows:
        row = normalize_row(raw)

        marker = get_value(row, CONSOLIDATED_DEACTIVATION_COLUMNS)
        marked = has_marker(marker)
        deactivated_on = parse_date(marker) if marked else None
        status = evaluate_consolidated(marked, deactivated_on, options)
        if status is None:
            continue

        account = get_value(row, CONSOLIDATED_ACCOUNT_COLUMNS)
        origin = get_value(row, ORIGIN_COLUMNS)
        if account is None or origin is None:
            continue

        if deactivated_on is not None:
            deactivation_text = deactivated_on.isoformat()
        else:
            deactivation_text = cell_text(marker) if marked else ""

        origin_text = cell_text(origin)
        yield DeviceEntry(
            account=cell_text(account),
            platform=platform_from_origin(origin_text),
            detail=DeviceDetail(
                name=_text(row, DEVICE_NAME_COLUMNS, DEFAULT_DEVICE_NAME),
                imei=_text(row, CONSOLIDATED_IMEI_COLUMNS, PLACEHOLDER),
                device_type=_text(row, CONSOLIDATED_DEVICE_TYPE_COLUMNS, PLACEHOLDER),
                deactivation_date=deactivation_text,
                status=status,
                platform=origin_text,
            ),
        )


def legacy_devices(sheet: LegacySheet) -> Iterator[DeviceEntry]:
    if sheet.platform is None:
        logger.debug("Skipping sheet %r: no platform in its name", sheet.name)
        return
    for raw in sheet.rows:
        row = normalize_row(raw)

        has_deactivation = has_marker(get_value(row, LEGACY_DEACTIVATION_COLUMNS))
        status = get_value(row, LEGACY_STATUS_COLUMNS)
        if not evaluate_legacy(sheet.name, has_deactivation, None if status is None else cell_text(status)):
            continue

        account = get_value(row, LEGACY_ACCOUNT_COLUMNS)
        if account is None:
            continue

        yield DeviceEntry(
            account=cell_text(account),
            platform=sheet.platform,
            detail=DeviceDetail(
                name=_text(row, DEVICE_NAME_COLUMNS, DEFAULT_DEVICE_NAME),
                imei=_text(row, LEGACY_IMEI_COLUMNS, PLACEHOLDER),
                device_type=_text(row, LEGACY_DEVICE_TYPE_COLUMNS, PLACEHOLDER),
                deactivation_date="",
                status=DeviceStatus.ACTIVE,
                platform=sheet.platform.value.upper(),
            ),
        )


def iter_billable_devices(layout: SheetLayout, options: ProcessingOptions) -> Iterator[DeviceEntry]:
    if isinstance(layout, ConsolidatedSheet):
        return consolidated_devices(layout, options)
    return legacy_devices(layout)


def aggregate_platform_sheets(
    sheets: Sequence[RawSheet],
    ledger: AccountLedger,
    options: ProcessingOptions,
) -> int:
    """Feed every billable device of every sheet into the ledger; returns the device count."""
    added = 0
    for sheet in sheets:
        layout = detect_sheet_format(sheet)
        if layout is None:
            logger.debug("Skipping empty sheet %r", sheet.name)
            continue
        logger.debug("Sheet %r detected as %s", sheet.name, type(layout).__name__)
        for entry in iter_billable_devices(layout, options):
            ledger.add_device(entry.account, entry.platform, entry.detail)
            added += 1
    return added
