# -*- coding: utf-8 -*-
"""KPIs, daily time series and product ranking over filtered transfers.

All aggregations take the filtered (unsorted) record list and are pure:
the same records always produce the same result. Grouping is done with
pandas; results are converted back to plain Python numbers so the value
objects carry no numpy scalars.
"""

import logging
from dataclasses import asdict
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from src.modules.transfers.models import (
    ChartPoint,
    KPISummary,
    RankedEntry,
    Route,
    TransferRecord,
)

logger = logging.getLogger(__name__)

RECORD_COLUMNS = [
    "date",
    "source_location",
    "dest_location",
    "product_code",
    "description",
    "quantity",
]

# The dashboard only recognises these two routes for the predominant-route KPI
ROUTE_A = Route("1-300", "1-700")
ROUTE_B = Route("1-700", "1-300")
DEFAULT_ROUTES = (ROUTE_A, ROUTE_B)

BALANCED_LABEL = "Balanced"
NO_ROUTE_LABEL = "N/A"
TOP_PRODUCTS_LIMIT = 10


def _to_native(value):
    """Convert numpy scalars to int/float."""
    return value.item() if hasattr(value, "item") else value


def records_to_frame(records: Iterable[TransferRecord]) -> pd.DataFrame:
    """Build a DataFrame with one row per record and RECORD_COLUMNS columns.

    Quantity is an object column holding the records' own int/float values,
    so sums use Python arithmetic and cannot wrap around at the int64 limit.
    """
    frame = pd.DataFrame([asdict(record) for record in records], columns=RECORD_COLUMNS)
    frame["quantity"] = frame["quantity"].astype(object)
    return frame


def count_route(frame: pd.DataFrame, route: Route) -> int:
    """Number of records travelling exactly along route."""
    if frame.empty:
        return 0
    mask = (frame["source_location"] == route.source) & (
        frame["dest_location"] == route.dest
    )
    return int(mask.sum())


def predominant_route(count_a: int, count_b: int, routes: Sequence[Route]) -> str:
    """Label of the route with more records.

    Returns "N/A" when neither route occurs and "Balanced" on a non-zero tie.
    """
    route_a, route_b = routes
    if count_a > count_b:
        return route_a.label
    if count_b > count_a:
        return route_b.label
    if count_a == 0:
        return NO_ROUTE_LABEL
    return BALANCED_LABEL


def summarize(
    records: Iterable[TransferRecord], routes: Sequence[Route] = DEFAULT_ROUTES
) -> KPISummary:
    """Compute the KPI summary for a record set.

    Args:
        records: Filtered transfer records.
        routes: The two routes compared for the predominant-route label.
            Records on any other route are ignored by that comparison.

    Returns:
        KPISummary. An empty record set gives (0, 0, 0, "N/A").
    """
    frame = records_to_frame(records)
    if frame.empty:
        return KPISummary(0, 0, 0, NO_ROUTE_LABEL)

    count_a = count_route(frame, routes[0])
    count_b = count_route(frame, routes[1])
    logger.debug(f"Route counts: {routes[0].key}={count_a}, {routes[1].key}={count_b}")

    return KPISummary(
        total_quantity=_to_native(frame["quantity"].sum()),
        record_count=len(frame),
        distinct_product_count=int(frame["product_code"].nunique()),
        predominant_route=predominant_route(count_a, count_b, routes),
    )


def daily_totals(records: Iterable[TransferRecord]) -> List[ChartPoint]:
    """Sum quantity per exact date string, ascending by date."""
    frame = records_to_frame(records)
    if frame.empty:
        return []

    totals = frame.groupby("date", sort=True)["quantity"].sum()
    return [ChartPoint(date=date, total=_to_native(total)) for date, total in totals.items()]


def top_products(
    records: Iterable[TransferRecord], limit: Optional[int] = TOP_PRODUCTS_LIMIT
) -> List[RankedEntry]:
    """Rank products by summed quantity, highest first.

    Products with equal totals keep first-seen order. ``limit=None`` returns
    every product.
    """
    frame = records_to_frame(records)
    if frame.empty:
        return []

    totals = (
        frame.groupby("product_code", sort=False)["quantity"]
        .sum()
        .sort_values(ascending=False, kind="stable")
    )
    if limit is not None:
        totals = totals.head(max(limit, 0))

    return [
        RankedEntry(product_code=code, total=_to_native(total))
        for code, total in totals.items()
    ]
