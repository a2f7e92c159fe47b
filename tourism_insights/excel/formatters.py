"""
Cell styling for survey report sheets: headers, data rows, totals, KPI cards.
"""
from __future__ import annotations

from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from tourism_insights.excel.styles import (
    HEADER_FONT, HEADER_FILL, HEADER_BORDER,
    DATA_FONT, TOTAL_FONT, TOTAL_FILL, THIN_BORDER, TOTAL_BORDER, ALTERNATE_FILL,
    KPI_VALUE_FONT, KPI_LABEL_FONT,
    CENTER, LEFT, RIGHT,
    HIGHLIGHT_FILLS,
)

# Pesos are shown with two decimals, matching the rounded API means
NUMBER_FORMATS = {
    "currency": '"COP "#,##0.00',
    "percent": '0.0"%"',
    "number": "#,##0",
}

# role -> (font, border, fill); None fill means striped data rows
ROLE_STYLES = {
    "header": (HEADER_FONT, HEADER_BORDER, HEADER_FILL),
    "data": (DATA_FONT, THIN_BORDER, None),
    "total": (TOTAL_FONT, TOTAL_BORDER, TOTAL_FILL),
}

MIN_WIDTH = 10
MAX_WIDTH = 50


def write_cell(
    ws: Worksheet,
    row: int,
    col: int,
    value,
    col_type: str = "text",
    role: str = "data",
    highlight: str | None = None,
) -> None:
    cell = ws.cell(row=row, column=col, value=value)
    font, border, fill = ROLE_STYLES[role]
    cell.font = font
    cell.border = border

    if role == "header":
        cell.alignment = CENTER
    else:
        cell.alignment = RIGHT if col_type in NUMBER_FORMATS else LEFT
        if col_type in NUMBER_FORMATS:
            cell.number_format = NUMBER_FORMATS[col_type]

    if highlight in HIGHLIGHT_FILLS:
        cell.fill = HIGHLIGHT_FILLS[highlight]
    elif fill is not None:
        cell.fill = fill
    elif row % 2 == 0:
        cell.fill = ALTERNATE_FILL


def write_header(ws: Worksheet, row: int, labels: list[str]) -> None:
    for col, label in enumerate(labels, 1):
        write_cell(ws, row, col, label, role="header")


def widen_columns(ws: Worksheet, labels: list[str], rows: list[list]) -> None:
    """Size each table column to its longest label or value, never shrinking a column."""
    for col, label in enumerate(labels, 1):
        longest = max([len(str(label))] + [len(str(r[col - 1])) for r in rows if r[col - 1] is not None])
        letter = get_column_letter(col)
        current = ws.column_dimensions[letter].width or 0
        ws.column_dimensions[letter].width = max(current, min(max(longest + 2, MIN_WIDTH), MAX_WIDTH))


def add_kpi_card(ws: Worksheet, row: int, col: int, value, label: str, col_type: str = "number") -> None:
    """Large value with a small caption underneath."""
    value_cell = ws.cell(row=row, column=col, value=value)
    value_cell.font = KPI_VALUE_FONT
    value_cell.alignment = CENTER
    if col_type in NUMBER_FORMATS:
        value_cell.number_format = NUMBER_FORMATS[col_type]

    label_cell = ws.cell(row=row + 1, column=col, value=label)
    label_cell.font = KPI_LABEL_FONT
    label_cell.alignment = CENTER
