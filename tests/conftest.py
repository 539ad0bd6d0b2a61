from io import BytesIO
from typing import Callable

import pandas as pd
import pytest


@pytest.fixture
def make_workbook() -> Callable[[dict[str, list[dict]]], bytes]:
    def build(sheets: dict[str, list[dict]]) -> bytes:
        buf = BytesIO()
        with pd.ExcelWriter(buf, engine="openpyxl") as writer:
            for name, rows in sheets.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=name, index=False)
        return buf.getvalue()

    return build
