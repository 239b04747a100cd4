from __future__ import annotations

import io
import re
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ..core.constants import (
    BAND_FILL_EVEN,
    BAND_FILL_ODD,
    DATA_BORDER_COLOR,
    DETAIL_SHEET_TITLE,
    HEADER_BORDER_COLOR,
    HEADER_FILL_COLOR,
    HEADER_FONT_COLOR,
    PERCENTAGE_NUMBER_FORMAT,
    SUMMARY_SHEET_TITLE,
)
from ..core.enums import ColumnFormat
from .columns import ColumnSpec

_INVALID_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")
_MAX_SHEET_TITLE = 31


@dataclass(frozen=True)
class SheetSpec:
    """One worksheet: rows keyed by ReportField values, laid out by `columns`."""

    rows: Sequence[Mapping[str, Any]]
    columns: Sequence[ColumnSpec]
    sheet_name: str = "Sheet1"
    title: str = ""
    subtitle: str = ""


def _thin_border(color: str) -> Border:
    side = Side(style="thin", color=color)
    return Border(left=side, right=side, top=side, bottom=side)


def sheet_title(name: str) -> str:
    """Excel sheet names: max 31 chars, no []:*?/\\."""
    cleaned = _INVALID_SHEET_CHARS.sub("-", name).strip() or "Sheet1"
    return cleaned[:_MAX_SHEET_TITLE]


class ExcelReportBuilder:
    """Render report rows into styled .xlsx bytes.

    pandas lays out the grid (column order is exactly the ColumnSpec order,
    missing keys become blank cells); the openpyxl worksheet is styled after.
    """

    header_font = Font(bold=True, color=HEADER_FONT_COLOR)
    header_fill = PatternFill(start_color=HEADER_FILL_COLOR, end_color=HEADER_FILL_COLOR, fill_type="solid")
    header_border = _thin_border(HEADER_BORDER_COLOR)
    data_border = _thin_border(DATA_BORDER_COLOR)
    odd_fill = PatternFill(start_color=BAND_FILL_ODD, end_color=BAND_FILL_ODD, fill_type="solid")
    even_fill = PatternFill(start_color=BAND_FILL_EVEN, end_color=BAND_FILL_EVEN, fill_type="solid")
    center = Alignment(horizontal="center", vertical="center")

    def build(self, sheet: SheetSpec) -> bytes:
        return self.build_many([sheet])

    def build_with_summary(self, detail: SheetSpec, summary: SheetSpec) -> bytes:
        """Two-sheet document: detail first, summary second."""
        return self.build_many(
            [
                SheetSpec(detail.rows, detail.columns, DETAIL_SHEET_TITLE, detail.title, detail.subtitle),
                SheetSpec(summary.rows, summary.columns, SUMMARY_SHEET_TITLE, summary.title, summary.subtitle),
            ]
        )

    def build_many(self, sheets: Sequence[SheetSpec]) -> bytes:
        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            for sheet in sheets:
                self._write_sheet(writer, sheet)
        return output.getvalue()

    def _write_sheet(self, writer: pd.ExcelWriter, sheet: SheetSpec) -> None:
        columns = list(sheet.columns)
        if not columns:
            raise ValueError("A report sheet needs at least one column")

        name = sheet_title(sheet.sheet_name)
        banners: list[tuple[str, Font]] = []
        if sheet.title:
            banners.append((sheet.title, Font(bold=True, size=16)))
        if sheet.subtitle:
            banners.append((sheet.subtitle, Font(bold=False, size=12)))
        # Banner rows, then one spacer row, then the header.
        header_row = len(banners) + (2 if banners else 1)

        frame = pd.DataFrame([dict(r) for r in sheet.rows], columns=[c.key.value for c in columns])
        frame.to_excel(
            writer,
            sheet_name=name,
            index=False,
            startrow=header_row - 1,
            header=[c.label for c in columns],
            na_rep="",
        )
        ws = writer.sheets[name]

        for row_idx, (text, font) in enumerate(banners, start=1):
            cell = ws.cell(row=row_idx, column=1, value=text)
            cell.font = font
            cell.alignment = Alignment(horizontal="center")
            if len(columns) > 1:
                ws.merge_cells(start_row=row_idx, start_column=1, end_row=row_idx, end_column=len(columns))

        for col_idx, col in enumerate(columns, start=1):
            ws.column_dimensions[get_column_letter(col_idx)].width = col.width

            header = ws.cell(row=header_row, column=col_idx)
            header.font = self.header_font
            header.fill = self.header_fill
            header.border = self.header_border
            header.alignment = self.center

            for offset in range(1, len(frame) + 1):
                cell = ws.cell(row=header_row + offset, column=col_idx)
                cell.fill = self.even_fill if offset % 2 == 0 else self.odd_fill
                cell.border = self.data_border
                cell.alignment = self.center
                if col.format == ColumnFormat.PERCENTAGE:
                    cell.number_format = PERCENTAGE_NUMBER_FORMAT
                elif col.format == ColumnFormat.DATE and cell.is_date:
                    cell.number_format = "yyyy-mm-dd"
