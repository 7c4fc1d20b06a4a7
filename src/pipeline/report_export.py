# -*- coding: utf-8 -*-
"""XLSX export of a computed dashboard view.

Writes four sheets: every filtered row in list order, the daily totals,
the product ranking and a summary of KPIs and active filters.
"""

import logging
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Sequence

from openpyxl import Workbook

from ..modules.transfers.models import DashboardView, TransferRecord
from ..utils import ensure_dir
from ..utils.xlsx_formatting import QUANTITY_FORMAT, ColumnSpec, XLSXFormatter

logger = logging.getLogger(__name__)

TRANSFER_COLUMNS = [
    ColumnSpec("Date", "date", "date", width=14),
    ColumnSpec("Source", "source_location", width=12),
    ColumnSpec("Destination", "dest_location", width=12),
    ColumnSpec("Product", "product_code", width=16),
    ColumnSpec("Description", "description", width=40),
    ColumnSpec("Quantity", "quantity", "number", QUANTITY_FORMAT, width=14),
]

DAILY_TOTAL_COLUMNS = [
    ColumnSpec("Date", "date", "date", width=14),
    ColumnSpec("Quantity", "total", "number", QUANTITY_FORMAT, width=14),
]

TOP_PRODUCT_COLUMNS = [
    ColumnSpec("Product", "product_code", width=16),
    ColumnSpec("Quantity", "total", "number", QUANTITY_FORMAT, width=14),
]

SUMMARY_COLUMNS = [
    ColumnSpec("Metric", "metric", width=24),
    ColumnSpec("Value", "value", width=30),
]


def _summary_rows(view: DashboardView, updated_at: Optional[str]):
    state = view.view_state
    return [
        {"metric": "Total quantity", "value": view.kpis.total_quantity},
        {"metric": "Transfers", "value": view.kpis.record_count},
        {"metric": "Distinct products", "value": view.kpis.distinct_product_count},
        {"metric": "Predominant route", "value": view.kpis.predominant_route},
        {"metric": "Period", "value": state.period},
        {"metric": "Start date", "value": state.range_start},
        {"metric": "End date", "value": state.range_end},
        {"metric": "Route", "value": state.route},
        {"metric": "Search", "value": state.search},
        {"metric": "Sort", "value": f"{view.sort.field} {view.sort.direction}"},
        {"metric": "Data updated at", "value": updated_at or ""},
    ]


def export_dashboard_xlsx(
    view: DashboardView,
    rows: Sequence[TransferRecord],
    output_path: Path,
    updated_at: Optional[str] = None,
) -> Path:
    """Write the dashboard report workbook.

    Args:
        view: Dashboard view with KPIs and chart data
        rows: Filtered and sorted records (all pages)
        output_path: Destination .xlsx file
        updated_at: Dataset timestamp shown in the summary sheet

    Returns:
        Path to the written file

    Raises:
        OSError: If the file cannot be written
    """
    output_path = Path(output_path)
    ensure_dir(output_path.parent)

    workbook = Workbook()
    workbook.remove(workbook.active)

    XLSXFormatter.write_sheet(
        workbook, "Transfers", (asdict(r) for r in rows), TRANSFER_COLUMNS
    )
    XLSXFormatter.write_sheet(
        workbook,
        "Daily totals",
        (asdict(p) for p in view.daily_totals),
        DAILY_TOTAL_COLUMNS,
    )
    XLSXFormatter.write_sheet(
        workbook,
        "Top products",
        (asdict(e) for e in view.top_products),
        TOP_PRODUCT_COLUMNS,
    )
    XLSXFormatter.write_sheet(
        workbook, "Summary", _summary_rows(view, updated_at), SUMMARY_COLUMNS
    )

    workbook.save(output_path)
    logger.info(f"Wrote XLSX: {output_path}")
    return output_path
