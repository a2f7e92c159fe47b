"""
ExcelWriter — high-level helpers for building styled Excel workbooks.
"""
from __future__ import annotations

from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from tourism_insights.excel.styles import TITLE_FONT, SUBTITLE_FONT, SECTION_FONT
from tourism_insights.excel.formatters import NUMBER_FORMATS, add_kpi_card, widen_columns, write_cell, write_header


ColSpec = tuple[str, str, str]  # (key, col_type, label)


class ExcelWriter:
    """Fluent builder for styled Excel workbooks."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self._first_sheet = True

    # ------------------------------------------------------------------
    # Sheet management
    # ------------------------------------------------------------------

    def add_sheet(self, title: str) -> Worksheet:
        """Create a new worksheet (re-uses the default sheet for the first call)."""
        # Excel caps sheet titles at 31 chars and rejects a few symbols
        safe_title = "".join("-" if ch in '[]:*?/\\' else ch for ch in title)[:31]
        if self._first_sheet:
            ws = self.wb.active
            ws.title = safe_title
            self._first_sheet = False
        else:
            ws = self.wb.create_sheet(title=safe_title)
        return ws

    # ------------------------------------------------------------------
    # Title block
    # ------------------------------------------------------------------

    def write_title(
        self,
        ws: Worksheet,
        title: str,
        subtitle: str,
        merge_cols: int = 6,
    ) -> int:
        """Write title + subtitle rows. Returns next available row."""
        ws.cell(row=1, column=1).value = title
        ws.cell(row=1, column=1).font = TITLE_FONT
        ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=merge_cols)

        ws.cell(row=2, column=1).value = subtitle
        ws.cell(row=2, column=1).font = SUBTITLE_FONT
        ws.merge_cells(start_row=2, start_column=1, end_row=2, end_column=merge_cols)

        for col in range(1, merge_cols + 1):
            ws.column_dimensions[get_column_letter(col)].width = 18

        return 4

    def write_section(self, ws: Worksheet, row: int, title: str) -> int:
        """Write a section header. Returns next row."""
        ws.cell(row=row, column=1).value = title
        ws.cell(row=row, column=1).font = SECTION_FONT
        return row + 2

    # ------------------------------------------------------------------
    # KPI cards
    # ------------------------------------------------------------------

    def write_kpi_row(
        self,
        ws: Worksheet,
        row: int,
        kpis: list[tuple],  # [(value, label, format_type), ...]
        start_col: int = 1,
        col_spacing: int = 2,
    ) -> int:
        """Write a row of KPI cards. Returns next row (row + 3)."""
        col = start_col
        for value, label, fmt in kpis:
            add_kpi_card(ws, row, col, value, label, fmt)
            col += col_spacing
        return row + 3

    # ------------------------------------------------------------------
    # Data tables
    # ------------------------------------------------------------------

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: list[ColSpec],
        rows: list[dict],
        highlight_fn=None,
        freeze: bool = False,
        show_total: bool = False,
        total_label: str = "TOTAL",
    ) -> int:
        """Write a header row, one row per record and an optional total row.

        highlight_fn(row_idx, row_data) -> fill name from HIGHLIGHT_FILLS, or None.
        Returns the row number after the last written row.
        """
        labels = [label for _, _, label in columns]
        matrix = [
            [row_data.get(key, "" if col_type == "text" else 0) for key, col_type, _ in columns]
            for row_data in rows
        ]

        write_header(ws, start_row, labels)
        row = start_row + 1
        for idx, (row_data, values) in enumerate(zip(rows, matrix)):
            hl = highlight_fn(idx, row_data) if highlight_fn else None
            for col_num, ((_, col_type, _), val) in enumerate(zip(columns, values), 1):
                write_cell(ws, row, col_num, val, col_type, highlight=hl)
            row += 1

        if show_total and rows:
            for col_num, (_, col_type, _) in enumerate(columns, 1):
                if col_num == 1:
                    val, col_type = total_label, "text"
                elif col_type in NUMBER_FORMATS:
                    val = sum(values[col_num - 1] or 0 for values in matrix)
                else:
                    val = ""
                write_cell(ws, row, col_num, val, col_type, role="total")
            row += 1

        widen_columns(ws, labels, matrix)
        if freeze:
            ws.freeze_panes = f"A{start_row + 1}"

        return row

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(self, path: str | Path) -> Path:
        """Save the workbook to disk."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path
