"""Spreadsheet reader: workbook bytes into named sheets of row-records."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path

import pandas as pd

from billing_recon.domain.errors import InvalidWorkbook
from billing_recon.domain.repositories import RawSheet, Row
from billing_recon.infrastructure.parsing.utils import describe_source, ensure_bytes, is_blank

# Legacy .xls files are OLE2 compound documents; everything else goes through openpyxl.
OLE2_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


def engine_for(data: bytes) -> str:
    return "xlrd" if data.startswith(OLE2_SIGNATURE) else "openpyxl"


def frame_to_rows(df: pd.DataFrame) -> list[Row]:
    rows: list[Row] = []
    for record in df.astype(object).to_dict(orient="records"):
        row = {str(column): value for column, value in record.items() if not is_blank(value)}
        if row:
            rows.append(row)
    return rows


def read_workbook(source: BytesIO | Path | str | bytes, label: str | None = None) -> list[RawSheet]:
    label = label or describe_source(source)
    data = ensure_bytes(source)
    if not data:
        raise InvalidWorkbook(label, "file is empty")
    try:
        frames = pd.read_excel(BytesIO(data), sheet_name=None, engine=engine_for(data))
    except Exception as exc:  # openpyxl, xlrd and zipfile each raise their own types
        raise InvalidWorkbook(label, str(exc)) from exc
    if not frames:
        raise InvalidWorkbook(label, "workbook has no sheets")
    return [RawSheet(name=str(name), rows=frame_to_rows(frame)) for name, frame in frames.items()]
