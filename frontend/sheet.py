"""
Sheet Model
===========
Editable 2-D grid of string cells and spreadsheet-style column labels
"""

from typing import List, Dict, Any, Tuple, Optional

import pandas as pd
from pydantic import BaseModel, Field

from frontend.settings import client_settings


class Cell(BaseModel):
    value: str = ""


class Sheet(BaseModel):
    """
    One named grid. Dimensions are fixed when the sheet is created;
    edits replace cell values in place.
    """
    id: str
    name: str
    data: List[List[Cell]] = Field(default_factory=list)

    @property
    def dimensions(self) -> Tuple[int, int]:
        """(rows, cols)"""
        if not self.data:
            return 0, 0
        return len(self.data), len(self.data[0])

    def _check_bounds(self, row: int, col: int):
        rows, cols = self.dimensions
        if not (0 <= row < rows and 0 <= col < cols):
            raise IndexError(f"Cell ({row}, {col}) outside {rows}x{cols} grid")

    def get_cell(self, row: int, col: int) -> str:
        self._check_bounds(row, col)
        return self.data[row][col].value

    def set_cell(self, row: int, col: int, value: str):
        self._check_bounds(row, col)
        self.data[row][col].value = value

    def to_dataframe(self) -> pd.DataFrame:
        """Grid as a DataFrame labelled A, B, ... with rows numbered from 1"""
        rows, cols = self.dimensions
        return pd.DataFrame(
            [[cell.value for cell in row] for row in self.data],
            columns=[get_column_label(i) for i in range(cols)],
            index=range(1, rows + 1),
        )


def get_column_label(index: int) -> str:
    """
    Spreadsheet column label for a zero-based index

    Examples:
        0 -> "A", 25 -> "Z", 26 -> "AA", 701 -> "ZZ", 702 -> "AAA"
    """
    if index < 0:
        raise ValueError(f"Column index must be >= 0, got {index}")

    label = ""
    num = index
    while num >= 0:
        label = chr(ord("A") + num % 26) + label
        num = num // 26 - 1
    return label


def create_empty_sheet(
    sheet_id: str,
    name: str,
    rows: Optional[int] = None,
    cols: Optional[int] = None
) -> Sheet:
    rows = client_settings.GRID_ROWS if rows is None else rows
    cols = client_settings.GRID_COLS if cols is None else cols
    return Sheet(
        id=sheet_id,
        name=name,
        data=[[Cell() for _ in range(cols)] for _ in range(rows)],
    )


def cell_text(value: Any) -> str:
    """Render a JSON value as cell text (null -> empty)"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def sheet_from_rows(
    sheet_id: str,
    name: str,
    rows: List[Dict[str, Any]],
    min_rows: Optional[int] = None,
    min_cols: Optional[int] = None
) -> Sheet:
    """
    Build a sheet from API rows

    Row 0 holds the column names (in first-seen order across all rows),
    followed by one grid row per record. The grid is padded with empty
    cells up to at least the default dimensions.
    """
    columns: List[str] = []
    for record in rows:
        for key in record:
            if key not in columns:
                columns.append(key)

    min_rows = client_settings.GRID_ROWS if min_rows is None else min_rows
    min_cols = client_settings.GRID_COLS if min_cols is None else min_cols
    sheet = create_empty_sheet(
        sheet_id,
        name,
        rows=max(min_rows, len(rows) + 1 if columns else 0),
        cols=max(min_cols, len(columns)),
    )

    for c, column in enumerate(columns):
        sheet.set_cell(0, c, column)
    for r, record in enumerate(rows, start=1):
        for c, column in enumerate(columns):
            sheet.set_cell(r, c, cell_text(record.get(column)))

    return sheet
