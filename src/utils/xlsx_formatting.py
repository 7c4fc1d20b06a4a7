# -*- coding: utf-8 -*-
"""Shared XLSX formatting utilities for dashboard reports.

Each report sheet is described by a list of ColumnSpec entries; the
formatter writes rows, styles the header and applies number formats.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.workbook import Workbook

logger = logging.getLogger(__name__)

# Common styles used across all report sheets
HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True)
DEFAULT_COLUMN_WIDTH = 20
QUANTITY_FORMAT = "#,##0.##"


@dataclass(frozen=True)
class ColumnSpec:
    """Definition of a single column in a report sheet."""

    name: str  # Header text
    key: str  # Key in the row dict
    data_type: str = "text"  # "text", "number", "date"
    format_code: Optional[str] = None  # Excel format code
    width: int = DEFAULT_COLUMN_WIDTH


class XLSXFormatter:
    """Shared XLSX formatting utilities for report sheets."""

    @staticmethod
    def format_header(worksheet, columns: List[ColumnSpec]) -> None:
        """Apply header styling and set column widths.

        Args:
            worksheet: openpyxl Worksheet to format
            columns: Column definitions for the sheet
        """
        for col_idx, col_spec in enumerate(columns, start=1):
            cell = worksheet.cell(row=1, column=col_idx)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.alignment = Alignment(horizontal="center", vertical="center")

            letter = cell.column_letter
            worksheet.column_dimensions[letter].width = col_spec.width

    @staticmethod
    def apply_column_formats(
        worksheet, columns: List[ColumnSpec], start_row: int = 2
    ) -> None:
        """Apply number formats to data columns.

        Args:
            worksheet: openpyxl Worksheet to format
            columns: Column definitions for the sheet
            start_row: First row of data (after header)
        """
        max_row = worksheet.max_row
        if max_row < start_row:
            return

        for col_idx, col_spec in enumerate(columns, start=1):
            if not col_spec.format_code:
                continue
            for row in range(start_row, max_row + 1):
                cell = worksheet.cell(row=row, column=col_idx)
                cell.number_format = col_spec.format_code
                if col_spec.data_type == "number":
                    cell.alignment = Alignment(horizontal="right")

    @staticmethod
    def write_sheet(
        workbook: Workbook,
        title: str,
        rows: Iterable[Dict[str, Any]],
        columns: List[ColumnSpec],
    ):
        """Append a formatted worksheet built from row dicts.

        Args:
            workbook: Target workbook
            title: Worksheet title
            rows: One dict per row, keyed by ColumnSpec.key
            columns: Column definitions for the sheet

        Returns:
            The new worksheet
        """
        worksheet = workbook.create_sheet(title=title)

        for col_idx, col_spec in enumerate(columns, start=1):
            worksheet.cell(row=1, column=col_idx, value=col_spec.name)

        for row_idx, row in enumerate(rows, start=2):
            for col_idx, col_spec in enumerate(columns, start=1):
                worksheet.cell(
                    row=row_idx,
                    column=col_idx,
                    value=format_value(row.get(col_spec.key), col_spec.data_type),
                )

        XLSXFormatter.format_header(worksheet, columns)
        XLSXFormatter.apply_column_formats(worksheet, columns)
        return worksheet


def format_value(value, data_type: str):
    """Format value for a cell based on data type.

    Args:
        value: Value to format
        data_type: One of 'text', 'number', 'date'

    Returns:
        Numbers stay numeric, dates stay ISO strings, anything else becomes text
    """
    if value is None:
        return ""

    if data_type == "number":
        if isinstance(value, (int, float)):
            return value
        try:
            return float(str(value).replace(",", "").strip())
        except ValueError:
            return str(value)

    return str(value)
