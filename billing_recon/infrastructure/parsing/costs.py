"""Cost workbook parsing: sheet selection and per-account pricing rows."""
from __future__ import annotations

from typing import Iterator, Sequence
import logging

from billing_recon.domain.ledger import AccountLedger, CostEntry
from billing_recon.domain.repositories import RawSheet, Row
from billing_recon.infrastructure.parsing.headers import (
    BILLING_TYPE_COLUMNS,
    COMMERCIAL_NAME_COLUMNS,
    COST_ACCOUNT_COLUMNS,
    COST_SHEET_KEYWORDS,
    DEFAULT_BILLING_TYPE,
    NOTES_COLUMNS,
    UNIT_PRICE_COLUMNS,
)
from billing_recon.infrastructure.parsing.utils import (
    cell_text,
    get_value,
    normalize_header,
    normalize_row,
    parse_currency,
)

logger = logging.getLogger(__name__)


def pick_cost_sheet(sheets: Sequence[RawSheet]) -> RawSheet | None:
    if not sheets:
        return None
    for sheet in sheets:
        name = normalize_header(sheet.name)
        if any(keyword in name for keyword in COST_SHEET_KEYWORDS):
            return sheet
    return sheets[0]


def _text(value: object, default: str) -> str:
    if value is None:
        return default
    return cell_text(value) or default


def iter_cost_entries(rows: Sequence[Row]) -> Iterator[CostEntry]:
    for raw in rows:
        row = normalize_row(raw)
        account = get_value(row, COST_ACCOUNT_COLUMNS)
        if account is None:
            continue
        yield CostEntry(
            account=cell_text(account),
            unit_price=parse_currency(get_value(row, UNIT_PRICE_COLUMNS)),
            billing_type=_text(get_value(row, BILLING_TYPE_COLUMNS), DEFAULT_BILLING_TYPE),
            notes=_text(get_value(row, NOTES_COLUMNS), ""),
            commercial_name=_text(get_value(row, COMMERCIAL_NAME_COLUMNS), ""),
        )


def merge_cost_sheets(sheets: Sequence[RawSheet], ledger: AccountLedger) -> int:
    """Overlay pricing from the selected cost sheet; later rows win per account."""
    sheet = pick_cost_sheet(sheets)
    if sheet is None:
        return 0
    logger.debug("Using cost sheet %r", sheet.name)
    merged = 0
    for entry in iter_cost_entries(sheet.rows):
        ledger.apply_cost(entry)
        merged += 1
    return merged
