"""Structural sniffing of platform sheets.

Each sheet is classified on its own from its first row: a consolidated sheet
names the origin platform per row, a legacy sheet implies it from the sheet
name.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from billing_recon.domain.models import Platform
from billing_recon.domain.repositories import RawSheet, Row
from billing_recon.infrastructure.parsing.headers import (
    CONSOLIDATED_DETECTION_ACCOUNT_COLUMNS,
    ORIGIN_COLUMNS,
)
from billing_recon.infrastructure.parsing.utils import get_value, normalize_header, normalize_row

# Checked in this order against the upper-cased sheet name.
SHEET_NAME_PLATFORMS = (
    ("LEASE", Platform.LEASE),
    ("WIALON", Platform.WIALON),
    ("ADAS", Platform.ADAS),
    ("COMBUSTIBLE", Platform.COMBUSTIBLE),
)


@dataclass(frozen=True)
class ConsolidatedSheet:
    name: str
    rows: Sequence[Row]


@dataclass(frozen=True)
class LegacySheet:
    name: str
    rows: Sequence[Row]
    platform: Platform | None


SheetLayout = Union[ConsolidatedSheet, LegacySheet]


def is_consolidated(first_row: Row) -> bool:
    normalized = normalize_row(first_row)
    return (
        get_value(normalized, CONSOLIDATED_DETECTION_ACCOUNT_COLUMNS) is not None
        and get_value(normalized, ORIGIN_COLUMNS) is not None
    )


def infer_platform(sheet_name: str) -> Platform | None:
    name = normalize_header(sheet_name)
    for keyword, platform in SHEET_NAME_PLATFORMS:
        if keyword in name:
            return platform
    return None


def detect_sheet_format(sheet: RawSheet) -> SheetLayout | None:
    """Classify a sheet; None for a sheet without data rows."""
    if not sheet.rows:
        return None
    if is_consolidated(sheet.rows[0]):
        return ConsolidatedSheet(name=sheet.name, rows=sheet.rows)
    return LegacySheet(name=sheet.name, rows=sheet.rows, platform=infer_platform(sheet.name))
