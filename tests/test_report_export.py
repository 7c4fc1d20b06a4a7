# -*- coding: utf-8 -*-
"""Tests for src/pipeline/report_export.py and src/utils/xlsx_formatting.py."""

import pytest

openpyxl = pytest.importorskip("openpyxl")

from src.modules.transfers.models import SortSpec, TransferRecord, ViewState  # noqa: E402
from src.pipeline.orchestrator import build_dashboard, ordered_transfers  # noqa: E402
from src.pipeline.report_export import export_dashboard_xlsx  # noqa: E402
from src.utils.xlsx_formatting import HEADER_FILL, format_value  # noqa: E402

RECORDS = [
    TransferRecord("2024-01-05", "1-300", "1-700", "SOY", "Soja em grão", 100),
    TransferRecord("2024-01-05", "1-700", "1-300", "CORN", "Milho", 40),
    TransferRecord("2024-01-07", "1-300", "1-700", "SOY", "Soja em grão", 60),
]


@pytest.fixture
def workbook_path(tmp_path):
    view_state = ViewState("2024-01", "2024-01-01", "2024-01-31")
    sort = SortSpec("quantity", "desc")
    view = build_dashboard(RECORDS, view_state, sort, page_size=2)
    rows = ordered_transfers(RECORDS, view_state, sort)
    return export_dashboard_xlsx(
        view, rows, tmp_path / "reports" / "r.xlsx", updated_at="2024-02-12T08:30:00Z"
    )


class TestExportDashboardXlsx:
    """Test export_dashboard_xlsx function."""

    def test_sheets(self, workbook_path):
        """Workbook holds the four report sheets in order."""
        wb = openpyxl.load_workbook(workbook_path)
        assert wb.sheetnames == ["Transfers", "Daily totals", "Top products", "Summary"]

    def test_transfers_sheet_has_every_page(self, workbook_path):
        """All filtered rows are written in list order, not just one page."""
        ws = openpyxl.load_workbook(workbook_path)["Transfers"]
        rows = list(ws.iter_rows(values_only=True))
        assert rows[0] == ("Date", "Source", "Destination", "Product", "Description", "Quantity")
        assert [r[5] for r in rows[1:]] == [100, 60, 40]
        assert ws["A1"].fill.start_color.rgb.endswith(HEADER_FILL.start_color.rgb[-6:])

    def test_daily_totals_and_ranking(self, workbook_path):
        """Chart data is written as plain rows."""
        wb = openpyxl.load_workbook(workbook_path)
        daily = list(wb["Daily totals"].iter_rows(min_row=2, values_only=True))
        ranking = list(wb["Top products"].iter_rows(min_row=2, values_only=True))
        assert daily == [("2024-01-05", 140), ("2024-01-07", 60)]
        assert ranking == [("SOY", 160), ("CORN", 40)]

    def test_summary(self, workbook_path):
        """Summary sheet lists KPIs, filters and the dataset timestamp."""
        ws = openpyxl.load_workbook(workbook_path)["Summary"]
        summary = dict(ws.iter_rows(min_row=2, values_only=True))
        assert summary["Total quantity"] == "200"
        assert summary["Predominant route"] == "1-300 → 1-700"
        assert summary["Period"] == "2024-01"
        assert summary["Sort"] == "quantity desc"
        assert summary["Data updated at"] == "2024-02-12T08:30:00Z"

    def test_empty_view(self, tmp_path):
        """An empty view still writes headers."""
        view = build_dashboard([], ViewState())
        path = export_dashboard_xlsx(view, [], tmp_path / "empty.xlsx")
        ws = openpyxl.load_workbook(path)["Transfers"]
        assert ws.max_row == 1


class TestFormatValue:
    """Test format_value function."""

    def test_numbers(self):
        """Numeric strings become numbers, other text stays text."""
        assert format_value(5, "number") == 5
        assert format_value("1,250.5", "number") == 1250.5
        assert format_value("n/a", "number") == "n/a"

    def test_none_and_text(self):
        """None is blank and text is stringified."""
        assert format_value(None, "text") == ""
        assert format_value(2024, "date") == "2024"
