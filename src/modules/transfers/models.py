# -*- coding: utf-8 -*-
"""Value objects for the transfer dashboard pipeline.

Every type here is a frozen dataclass. Records come from the dataset loader,
view-state and sort settings come from the caller, and the derived outputs
(KPIs, chart points, rankings, dashboard view) are rebuilt on every call.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

Quantity = Union[int, float]

CUSTOM_PERIOD = "custom"
ROUTE_ALL = "all"

SORT_FIELDS = ("date", "quantity")
SORT_DIRECTIONS = ("asc", "desc")


@dataclass(frozen=True)
class TransferRecord:
    """One inventory transfer between two depots."""

    date: str  # ISO "YYYY-MM-DD"
    source_location: str = ""
    dest_location: str = ""
    product_code: str = ""
    description: str = ""
    quantity: Quantity = 0

    @property
    def route_key(self) -> str:
        return f"{self.source_location}->{self.dest_location}"


@dataclass(frozen=True)
class Route:
    """Ordered (source, destination) pair of locations."""

    source: str
    dest: str

    @property
    def key(self) -> str:
        """Route filter value, e.g. ``1-300->1-700``."""
        return f"{self.source}->{self.dest}"

    @property
    def label(self) -> str:
        """Display label, e.g. ``1-300 → 1-700``."""
        return f"{self.source} → {self.dest}"

    @classmethod
    def from_key(cls, key: str) -> Optional["Route"]:
        """Parse a ``source->dest`` key, or None if it has no separator."""
        if not key or "->" not in key:
            return None
        source, dest = key.split("->", 1)
        return cls(source, dest)


@dataclass(frozen=True)
class ViewState:
    """User-selected filters.

    ``period`` is empty (nothing selected), a ``YYYY-MM`` bucket, or
    ``CUSTOM_PERIOD``. Empty range bounds mean no date constraint.
    """

    period: str = ""
    range_start: str = ""
    range_end: str = ""
    route: str = ROUTE_ALL
    search: str = ""


@dataclass(frozen=True)
class SortSpec:
    """Sort field and direction for the transfer list."""

    field: str = "date"
    direction: str = "desc"

    def __post_init__(self):
        if self.field not in SORT_FIELDS:
            raise ValueError(
                f"Unknown sort field: {self.field!r}. Expected one of {SORT_FIELDS}"
            )
        if self.direction not in SORT_DIRECTIONS:
            raise ValueError(
                f"Unknown sort direction: {self.direction!r}. "
                f"Expected one of {SORT_DIRECTIONS}"
            )

    @property
    def descending(self) -> bool:
        return self.direction == "desc"


@dataclass(frozen=True)
class KPISummary:
    total_quantity: Quantity
    record_count: int
    distinct_product_count: int
    predominant_route: str


@dataclass(frozen=True)
class ChartPoint:
    date: str
    total: Quantity


@dataclass(frozen=True)
class RankedEntry:
    product_code: str
    total: Quantity


@dataclass(frozen=True)
class Dataset:
    """Dataset payload as delivered by the loader."""

    updated_at: str
    transfers: Tuple[TransferRecord, ...] = ()


@dataclass(frozen=True)
class DashboardView:
    """Everything the presentation layer needs for one view-state."""

    view_state: ViewState
    sort: SortSpec
    page: int
    page_size: int
    total_records: int
    total_pages: int
    rows: Tuple[TransferRecord, ...]
    kpis: KPISummary
    daily_totals: Tuple[ChartPoint, ...] = field(default_factory=tuple)
    top_products: Tuple[RankedEntry, ...] = field(default_factory=tuple)
