"""Repository interfaces anchoring the domain layer."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, Sequence

Row = Mapping[str, Any]


@dataclass(frozen=True)
class RawSheet:
    """A named sheet of row-records, headers taken from the first row."""

    name: str
    rows: Sequence[Row] = field(default_factory=tuple)


class PlatformWorkbookRepository(Protocol):
    """Provides every sheet of the operations/platforms workbook."""

    def list_sheets(self) -> Sequence[RawSheet]:
        ...


class CostWorkbookRepository(Protocol):
    """Provides the sheets of the costs/billing workbook."""

    def list_sheets(self) -> Sequence[RawSheet]:
        ...
