"""Excel-backed repositories for the platform and cost workbooks."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Sequence

from billing_recon.domain.repositories import (
    CostWorkbookRepository,
    PlatformWorkbookRepository,
    RawSheet,
)
from billing_recon.infrastructure.parsing.utils import describe_source, ensure_bytes
from billing_recon.infrastructure.parsing.workbook import read_workbook


class ExcelPlatformRepository(PlatformWorkbookRepository):
    def __init__(self, source: BytesIO | Path | str | bytes, label: str | None = None) -> None:
        self._label = label or describe_source(source)
        self._source = ensure_bytes(source)

    def list_sheets(self) -> Sequence[RawSheet]:
        return read_workbook(self._source, label=self._label)


class ExcelCostRepository(CostWorkbookRepository):
    def __init__(self, source: BytesIO | Path | str | bytes, label: str | None = None) -> None:
        self._label = label or describe_source(source)
        self._source = ensure_bytes(source)

    def list_sheets(self) -> Sequence[RawSheet]:
        return read_workbook(self._source, label=self._label)
