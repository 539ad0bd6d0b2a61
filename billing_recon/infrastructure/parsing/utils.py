"""Shared parsing utilities for Excel ingestion."""
from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal
from io import BytesIO
from pathlib import Path
from typing import Any, Iterable, Mapping
import math
import numbers
import re

import pandas as pd

# Day zero of the spreadsheet serial date system (1900 leap-year bug included).
EXCEL_EPOCH = date(1899, 12, 30)

_CURRENCY_NOISE = re.compile(r"[$€£,\s]")
_NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def ensure_bytes(source: BytesIO | Path | str | bytes) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, BytesIO):
        return source.getvalue()
    if isinstance(source, (Path, str)):
        return Path(source).read_bytes()
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def describe_source(source: object) -> str:
    if isinstance(source, (Path, str)):
        return Path(source).name
    return "uploaded workbook"


def is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def has_marker(value: object) -> bool:
    """Whether a deactivation cell holds a marker; FALSE and 0 mean none."""
    if is_blank(value) or value is False:
        return False
    if isinstance(value, numbers.Number) and value == 0:
        return False
    return True


def cell_text(value: object) -> str:
    """Render a cell as text; integral floats lose their trailing ``.0``."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_header(header: object) -> str:
    return "" if header is None else str(header).strip().upper()


def normalize_row(row: Mapping[Any, Any]) -> dict[str, Any]:
    """Upper-case and trim every header; empty cells are dropped."""
    normalized: dict[str, Any] = {}
    for key, value in row.items():
        if is_blank(value):
            continue
        normalized[normalize_header(key)] = value
    return normalized


def get_value(row: Mapping[str, Any], candidates: Iterable[str]) -> Any | None:
    """Value of the first candidate header present in a normalized row."""
    for candidate in candidates:
        if candidate in row:
            return row[candidate]
    return None


def parse_currency(value: object) -> Decimal:
    if isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")
    if isinstance(value, numbers.Real):
        number = float(value)
        if not math.isfinite(number):
            return Decimal("0")
        return Decimal(str(value))
    if isinstance(value, str):
        match = _NUMBER_PREFIX.match(_CURRENCY_NOISE.sub("", value))
        if match is None:
            return Decimal("0")
        return Decimal(match.group(0))
    return Decimal("0")


def parse_date(value: object) -> date | None:
    """Parse a serial number, datetime or date string; None when there is no usable date."""
    if is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, numbers.Real):
        try:
            return EXCEL_EPOCH + timedelta(days=math.floor(float(value)))
        except (OverflowError, ValueError):
            return None
    if isinstance(value, str):
        parsed = pd.to_datetime(value.strip(), errors="coerce")
        if pd.isna(parsed):
            return None
        return parsed.date()
    return None
