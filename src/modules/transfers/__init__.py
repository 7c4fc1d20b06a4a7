"""Transfer dashboard pipeline: periods, filtering, sorting, aggregation."""

from src.modules.transfers.aggregation import (
    DEFAULT_ROUTES,
    ROUTE_A,
    ROUTE_B,
    TOP_PRODUCTS_LIMIT,
    daily_totals,
    summarize,
    top_products,
)
from src.modules.transfers.filtering import filter_transfers
from src.modules.transfers.models import (
    CUSTOM_PERIOD,
    ROUTE_ALL,
    ChartPoint,
    DashboardView,
    Dataset,
    KPISummary,
    RankedEntry,
    Route,
    SortSpec,
    TransferRecord,
    ViewState,
)
from src.modules.transfers.pagination import (
    DEFAULT_PAGE_SIZE,
    PAGE_SIZE_OPTIONS,
    clamp_page,
    paginate,
    total_pages,
)
from src.modules.transfers.periods import (
    distinct_month_buckets,
    month_bounds,
    parse_month_bucket,
)
from src.modules.transfers.sorting import sort_transfers
from src.modules.transfers.view_state import (
    DEFAULT_SORT,
    clear_filters,
    default_view_state,
    page_after_filter_change,
    select_period,
    set_date_range,
    set_route,
    set_search,
    toggle_sort,
)

__all__ = [
    "CUSTOM_PERIOD",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_ROUTES",
    "DEFAULT_SORT",
    "PAGE_SIZE_OPTIONS",
    "ROUTE_A",
    "ROUTE_ALL",
    "ROUTE_B",
    "TOP_PRODUCTS_LIMIT",
    "ChartPoint",
    "DashboardView",
    "Dataset",
    "KPISummary",
    "RankedEntry",
    "Route",
    "SortSpec",
    "TransferRecord",
    "ViewState",
    "clamp_page",
    "clear_filters",
    "daily_totals",
    "default_view_state",
    "page_after_filter_change",
    "distinct_month_buckets",
    "filter_transfers",
    "month_bounds",
    "paginate",
    "parse_month_bucket",
    "select_period",
    "set_date_range",
    "set_route",
    "set_search",
    "sort_transfers",
    "summarize",
    "top_products",
    "toggle_sort",
    "total_pages",
]
