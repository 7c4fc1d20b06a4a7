#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Transfer Dashboard Orchestrator

Workflow:
1. Load: Read the dataset file (data/00-raw/transbordo.json by default)
2. Periods: Derive month buckets and the default view-state (latest month)
3. Filter: Apply date range, route and search to the records
4. List: Sort the filtered records and cut the requested page
5. Aggregate: KPIs, daily totals and top products over the filtered records
6. Export (optional): Write the view to an XLSX report

Filters given on the command line override the default view-state.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..modules.transfers.aggregation import (
    DEFAULT_ROUTES,
    TOP_PRODUCTS_LIMIT,
    daily_totals,
    summarize,
    top_products,
)
from ..modules.transfers.filtering import filter_transfers
from ..modules.transfers.models import (
    CUSTOM_PERIOD,
    DashboardView,
    Route,
    SortSpec,
    TransferRecord,
    ViewState,
)
from ..modules.transfers.pagination import (
    DEFAULT_PAGE_SIZE,
    clamp_page,
    paginate,
    total_pages,
)
from ..modules.transfers.periods import distinct_month_buckets
from ..modules.transfers.sorting import sort_transfers
from ..modules.transfers.view_state import (
    DEFAULT_SORT,
    default_view_state,
    page_after_filter_change,
    select_period,
    set_date_range,
    set_route,
    set_search,
)
from ..utils.path_config import PathConfig
from .data_loader import DataLoader
from .report_export import export_dashboard_xlsx

logger = logging.getLogger(__name__)


# === PIPELINE ===


def ordered_transfers(
    records: Sequence[TransferRecord],
    view_state: ViewState,
    sort: SortSpec = DEFAULT_SORT,
) -> List[TransferRecord]:
    """Filtered records in list order (every page)."""
    return sort_transfers(filter_transfers(records, view_state), sort)


def build_dashboard(
    records: Sequence[TransferRecord],
    view_state: ViewState,
    sort: SortSpec = DEFAULT_SORT,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    top_limit: Optional[int] = TOP_PRODUCTS_LIMIT,
    routes: Sequence[Route] = DEFAULT_ROUTES,
    previous_view_state: Optional[ViewState] = None,
) -> DashboardView:
    """Run filter, sort, paginate and aggregate for one view-state.

    The list side sorts and paginates the filtered records. The aggregates
    use the same filtered records, unsorted, so they do not depend on the
    sort or the page.

    Args:
        records: Full record set.
        view_state: Active filters.
        sort: List ordering.
        page: Requested 1-based page; clamped to the available pages.
        page_size: Rows per page.
        top_limit: Length of the product ranking.
        routes: The two routes compared by the predominant-route KPI.
        previous_view_state: Filters of the previously shown view. When they
            differ from view_state the page goes back to 1.

    Returns:
        DashboardView with the page rows and every aggregate.
    """
    filtered = filter_transfers(records, view_state)
    ordered = sort_transfers(filtered, sort)

    page = page_after_filter_change(page, previous_view_state, view_state)
    pages = total_pages(len(filtered), page_size)
    current_page = clamp_page(page, pages)
    if current_page != page:
        logger.debug(f"Page {page} clamped to {current_page} of {pages}")

    return DashboardView(
        view_state=view_state,
        sort=sort,
        page=current_page,
        page_size=page_size,
        total_records=len(filtered),
        total_pages=pages,
        rows=tuple(paginate(ordered, current_page, page_size)),
        kpis=summarize(filtered, routes),
        daily_totals=tuple(daily_totals(filtered)),
        top_products=tuple(top_products(filtered, top_limit)),
    )


def apply_filter_overrides(
    view_state: ViewState,
    month: Optional[str] = None,
    start: Optional[str] = None,
    end: Optional[str] = None,
    route: Optional[str] = None,
    search: Optional[str] = None,
) -> ViewState:
    """Apply command-line filters on top of a view-state.

    A month selects that period; explicit start/end dates then turn it into
    a custom range.
    """
    if month:
        view_state = select_period(view_state, month)
    if start is not None or end is not None:
        view_state = set_date_range(view_state, start=start, end=end)
    if route is not None:
        view_state = set_route(view_state, route)
    if search is not None:
        view_state = set_search(view_state, search)
    return view_state


def default_report_path(
    view_state: ViewState, path_config: Optional[PathConfig] = None
) -> Path:
    """Report file named after the selected month or the custom range."""
    if path_config is None:
        path_config = PathConfig()

    if view_state.period and view_state.period != CUSTOM_PERIOD:
        label = view_state.period
    else:
        label = f"{view_state.range_start or 'start'}_{view_state.range_end or 'end'}"
    return path_config.report_path(f"transbordo_{label}.xlsx")


def run_dashboard(
    dataset_path: Optional[Path] = None,
    month: Optional[str] = None,
    start: Optional[str] = None,
    end: Optional[str] = None,
    route: Optional[str] = None,
    search: Optional[str] = None,
    sort: SortSpec = DEFAULT_SORT,
    page: int = 1,
    page_size: Optional[int] = None,
    top_limit: Optional[int] = None,
    export: bool = False,
    export_path: Optional[Path] = None,
    config: Optional[Dict] = None,
) -> DashboardView:
    """Load the dataset and build the dashboard view.

    Page size and ranking length default to the [dashboard] section of
    pipeline.toml. With export set, the view is also written to
    export_path, or to the reports directory when no path is given.

    Raises:
        OSError: If the XLSX export cannot be written.
    """
    loader = DataLoader(config)
    dashboard_config = loader.config.get("dashboard", {})
    if page_size is None:
        page_size = int(dashboard_config.get("page_size", DEFAULT_PAGE_SIZE))
    if top_limit is None:
        top_limit = int(dashboard_config.get("top_products", TOP_PRODUCTS_LIMIT))

    dataset = loader.load_dataset(dataset_path)
    months = distinct_month_buckets(dataset.transfers)
    logger.info(f"Available months: {', '.join(months) if months else '(none)'}")

    view_state = apply_filter_overrides(
        default_view_state(months), month, start, end, route, search
    )
    view = build_dashboard(
        dataset.transfers,
        view_state,
        sort=sort,
        page=page,
        page_size=page_size,
        top_limit=top_limit,
        routes=loader.routes(),
    )

    if export:
        if export_path is None:
            export_path = default_report_path(view_state, PathConfig(config=loader.config))
        export_dashboard_xlsx(
            view,
            ordered_transfers(dataset.transfers, view_state, sort),
            export_path,
            updated_at=dataset.updated_at,
        )

    return view


# === OUTPUT ===


def log_dashboard(view: DashboardView) -> None:
    """Log the KPIs, ranking and current page."""
    state = view.view_state
    period = state.period if state.period != CUSTOM_PERIOD else "custom range"

    logger.info("=" * 70)
    logger.info(
        f"Period: {period or 'all'} [{state.range_start or '-'} .. {state.range_end or '-'}]"
        f" | route: {state.route} | search: {state.search or '-'}"
    )
    logger.info("=" * 70)
    logger.info(f"Total quantity:     {view.kpis.total_quantity}")
    logger.info(f"Transfers:          {view.kpis.record_count}")
    logger.info(f"Distinct products:  {view.kpis.distinct_product_count}")
    logger.info(f"Predominant route:  {view.kpis.predominant_route}")

    if view.top_products:
        logger.info("-" * 70)
        logger.info("Top products:")
        for rank, entry in enumerate(view.top_products, 1):
            logger.info(f"  {rank:>2}. {entry.product_code:<20} {entry.total}")

    logger.info("-" * 70)
    logger.info(
        f"Page {view.page} of {view.total_pages or 1} "
        f"({view.total_records} records, sorted by {view.sort.field} {view.sort.direction})"
    )
    for record in view.rows:
        logger.info(
            f"  {record.date}  {record.source_location:>6} -> {record.dest_location:<6}"
            f"  {record.product_code:<16} {record.quantity:>10}  {record.description}"
        )
    if not view.rows:
        logger.info("  No records found.")


# === MAIN ===


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Transfer dashboard: Load → Filter → Sort/Paginate → Aggregate",
        epilog=(
            "Examples:\n"
            "  python -m src.pipeline.orchestrator --month 2024-01\n"
            "  python -m src.pipeline.orchestrator --route 1-300->1-700 --search soja\n"
            "  python -m src.pipeline.orchestrator --start 2024-01-01 --end 2024-03-31"
            " --export --output q1.xlsx"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--dataset", type=Path, help="Dataset file (.json or .csv)")
    parser.add_argument("--month", help="Month bucket YYYY-MM (default: latest)")
    parser.add_argument("--start", help="Range start YYYY-MM-DD (custom range)")
    parser.add_argument("--end", help="Range end YYYY-MM-DD (custom range)")
    parser.add_argument("--route", help="'all' or source->dest, e.g. 1-300->1-700")
    parser.add_argument("--search", help="Product code or description text")
    parser.add_argument("--sort", choices=["date", "quantity"], default="date")
    parser.add_argument("--direction", choices=["asc", "desc"], default="desc")
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--page-size", type=int, help="Rows per page")
    parser.add_argument("--top", type=int, help="Length of the product ranking")
    parser.add_argument(
        "--export",
        action="store_true",
        default=False,
        help="Write an XLSX report (default location: reports dir in pipeline.toml)",
    )
    parser.add_argument("--output", type=Path, help="XLSX report path for --export")
    parser.add_argument(
        "--list-months",
        action="store_true",
        default=False,
        help="Only list the available months",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)-8s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    if args.list_months:
        dataset = DataLoader().load_dataset(args.dataset)
        for month in distinct_month_buckets(dataset.transfers):
            logger.info(month)
        return 0

    try:
        view = run_dashboard(
            dataset_path=args.dataset,
            month=args.month,
            start=args.start,
            end=args.end,
            route=args.route,
            search=args.search,
            sort=SortSpec(field=args.sort, direction=args.direction),
            page=args.page,
            page_size=args.page_size,
            top_limit=args.top,
            export=args.export,
            export_path=args.output,
        )
    except OSError as e:
        logger.error(f"Dashboard run failed: {e}")
        return 1

    log_dashboard(view)
    return 0


if __name__ == "__main__":
    sys.exit(main())
