# -*- coding: utf-8 -*-
"""Tests for src/modules/transfers/aggregation.py."""

import pytest

from src.modules.transfers.aggregation import (
    BALANCED_LABEL,
    NO_ROUTE_LABEL,
    ROUTE_A,
    ROUTE_B,
    daily_totals,
    predominant_route,
    records_to_frame,
    summarize,
    top_products,
)
from src.modules.transfers.models import (
    ChartPoint,
    KPISummary,
    RankedEntry,
    Route,
    TransferRecord,
)


def transfer(date="2024-01-05", source="1-300", dest="1-700", product="SOY", quantity=1):
    return TransferRecord(date, source, dest, product, "", quantity)


@pytest.fixture
def records():
    """Mixed routes, products and dates."""
    return [
        transfer("2024-01-06", "1-300", "1-700", "SOY", 100),
        transfer("2024-01-05", "1-300", "1-700", "CORN", 40),
        transfer("2024-01-06", "1-700", "1-300", "SOY", 25),
        transfer("2024-01-07", "2-100", "1-300", "WHEAT", 7),
        transfer("2024-01-05", "1-300", "1-700", "CORN", -5),
    ]


class TestSummarize:
    """Test summarize function."""

    def test_empty(self):
        """Empty input gives zero KPIs and N/A route."""
        assert summarize([]) == KPISummary(0, 0, 0, "N/A")

    def test_balanced_counts_by_record(self):
        """One record on each route is balanced regardless of quantity."""
        records = [
            transfer("2024-01-05", "1-300", "1-700", "SOY", 100),
            transfer("2024-01-05", "1-700", "1-300", "SOY", 50),
        ]
        kpis = summarize(records)
        assert kpis.total_quantity == 150
        assert kpis.record_count == 2
        assert kpis.distinct_product_count == 1
        assert kpis.predominant_route == BALANCED_LABEL

    def test_route_a_predominant(self, records):
        """Three records on route A beat one on route B."""
        kpis = summarize(records)
        assert kpis.predominant_route == ROUTE_A.label
        assert kpis.predominant_route == "1-300 → 1-700"

    def test_route_b_predominant(self):
        """Route B wins when it has more records."""
        records = [
            transfer(source="1-700", dest="1-300"),
            transfer(source="1-700", dest="1-300"),
            transfer(source="1-300", dest="1-700", quantity=1000),
        ]
        assert summarize(records).predominant_route == ROUTE_B.label

    def test_other_routes_ignored(self):
        """Only unrecognised routes gives N/A."""
        records = [transfer(source="2-100", dest="1-300"), transfer(source="1-300", dest="2-100")]
        assert summarize(records).predominant_route == NO_ROUTE_LABEL

    def test_totals_and_distinct_products(self, records):
        """Negative quantities are summed as-is."""
        kpis = summarize(records)
        assert kpis.total_quantity == 167
        assert kpis.record_count == 5
        assert kpis.distinct_product_count == 3

    def test_native_types(self, records):
        """KPI numbers are plain Python ints."""
        kpis = summarize(records)
        assert type(kpis.total_quantity) is int
        assert type(kpis.distinct_product_count) is int

    def test_custom_routes(self):
        """The compared routes can be replaced."""
        routes = (Route("A", "B"), Route("B", "A"))
        records = [transfer(source="B", dest="A")]
        assert summarize(records, routes).predominant_route == "B → A"


class TestPredominantRoute:
    """Test predominant_route labelling."""

    @pytest.mark.parametrize(
        "count_a,count_b,expected",
        [
            (2, 1, "1-300 → 1-700"),
            (1, 2, "1-700 → 1-300"),
            (0, 0, "N/A"),
            (3, 3, "Balanced"),
        ],
    )
    def test_labels(self, count_a, count_b, expected):
        """Label follows the record counts."""
        assert predominant_route(count_a, count_b, (ROUTE_A, ROUTE_B)) == expected


class TestDailyTotals:
    """Test daily_totals function."""

    def test_grouped_and_ascending(self, records):
        """One point per date, ascending."""
        assert daily_totals(records) == [
            ChartPoint("2024-01-05", 35),
            ChartPoint("2024-01-06", 125),
            ChartPoint("2024-01-07", 7),
        ]

    def test_conserves_quantity(self, records):
        """Daily totals add up to the record total."""
        assert sum(p.total for p in daily_totals(records)) == sum(r.quantity for r in records)

    def test_empty(self):
        """No records gives no points."""
        assert daily_totals([]) == []


class TestTopProducts:
    """Test top_products function."""

    def test_ranking(self):
        """Quantities are summed per product and ranked descending."""
        records = [
            transfer(product="A", quantity=5),
            transfer(product="B", quantity=9),
            transfer(product="A", quantity=3),
        ]
        assert top_products(records) == [RankedEntry("B", 9), RankedEntry("A", 8)]

    def test_limit(self):
        """Ranking is truncated to the limit."""
        records = [transfer(product=f"P{i:02d}", quantity=i) for i in range(15)]
        result = top_products(records)
        assert len(result) == 10
        assert result[0] == RankedEntry("P14", 14)
        assert result[-1] == RankedEntry("P05", 5)

    def test_ties_keep_first_seen_order(self):
        """Equal totals stay in first-seen order."""
        records = [
            transfer(product="X", quantity=4),
            transfer(product="Y", quantity=4),
            transfer(product="Z", quantity=4),
        ]
        assert [e.product_code for e in top_products(records)] == ["X", "Y", "Z"]

    def test_unlimited_conserves_quantity(self, records):
        """Without a limit the ranking adds up to the record total."""
        result = top_products(records, limit=None)
        assert len(result) == 3
        assert sum(e.total for e in result) == sum(r.quantity for r in records)

    def test_empty(self):
        """No records gives an empty ranking."""
        assert top_products([]) == []


class TestRecordsToFrame:
    """Test records_to_frame helper."""

    def test_columns_on_empty(self):
        """Empty input still has every column."""
        frame = records_to_frame([])
        assert frame.empty
        assert "quantity" in frame.columns
        assert "product_code" in frame.columns


class TestLargeQuantities:
    """Sums past the int64 range stay exact."""

    @pytest.fixture
    def large_records(self):
        return [
            transfer("2024-01-05", product="SOY", quantity=2**62),
            transfer("2024-01-05", product="SOY", quantity=2**62),
        ]

    def test_summarize(self, large_records):
        """Total quantity does not wrap around."""
        assert summarize(large_records).total_quantity == 2**63

    def test_daily_totals(self, large_records):
        """Daily totals conserve the record total."""
        points = daily_totals(large_records)
        assert points == [ChartPoint("2024-01-05", 2**63)]
        assert sum(p.total for p in points) == sum(r.quantity for r in large_records)

    def test_top_products(self, large_records):
        """Ranking totals do not wrap around."""
        assert top_products(large_records) == [RankedEntry("SOY", 2**63)]

    def test_quantity_column_keeps_python_ints(self, large_records):
        """The frame holds the records' own int values."""
        frame = records_to_frame(large_records)
        assert frame["quantity"].tolist() == [2**62, 2**62]
        assert frame["quantity"].dtype == object
