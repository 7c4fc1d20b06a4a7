# -*- coding: utf-8 -*-
"""View-state transitions for the transfer dashboard.

ViewState is immutable: every function returns a new instance and leaves
the argument untouched.
"""

import logging
from dataclasses import replace
from typing import Optional, Sequence

from src.modules.transfers.models import (
    CUSTOM_PERIOD,
    ROUTE_ALL,
    SortSpec,
    ViewState,
)
from src.modules.transfers.periods import month_bounds

logger = logging.getLogger(__name__)

DEFAULT_SORT = SortSpec(field="date", direction="desc")


def default_view_state(available_months: Sequence[str]) -> ViewState:
    """Initial filters: the most recent month with its bounds.

    Args:
        available_months: Month buckets, newest first (see
            ``distinct_month_buckets``).

    Returns:
        ViewState for the latest month, or an unconstrained ViewState when
        there are no months.
    """
    if not available_months:
        return ViewState()

    latest = available_months[0]
    start, end = month_bounds(latest)
    logger.debug(f"Default period: {latest} ({start} .. {end})")
    return ViewState(period=latest, range_start=start, range_end=end)


def select_period(view_state: ViewState, period: str) -> ViewState:
    """Switch the period selector.

    Choosing ``CUSTOM_PERIOD`` keeps the current range. Choosing a month
    replaces the range with that month's bounds.
    """
    if period == CUSTOM_PERIOD:
        return replace(view_state, period=CUSTOM_PERIOD)

    start, end = month_bounds(period)
    return replace(view_state, period=period, range_start=start, range_end=end)


def set_date_range(
    view_state: ViewState, start: Optional[str] = None, end: Optional[str] = None
) -> ViewState:
    """Edit one or both bounds; any manual edit makes the period custom."""
    return replace(
        view_state,
        period=CUSTOM_PERIOD,
        range_start=view_state.range_start if start is None else start,
        range_end=view_state.range_end if end is None else end,
    )


def set_route(view_state: ViewState, route: str) -> ViewState:
    return replace(view_state, route=route or ROUTE_ALL)


def set_search(view_state: ViewState, search: str) -> ViewState:
    return replace(view_state, search=search or "")


def clear_filters(available_months: Sequence[str]) -> ViewState:
    """Reset every filter to the most recent month.

    Without months the period becomes custom with empty bounds.
    """
    period = available_months[0] if available_months else CUSTOM_PERIOD
    start, end = month_bounds(period)
    return ViewState(period=period, range_start=start, range_end=end)


def toggle_sort(current: SortSpec, field: str) -> SortSpec:
    """Clicking the active descending column flips it to ascending.

    Any other click sorts that column descending.
    """
    if current.field == field and current.descending:
        return SortSpec(field=field, direction="asc")
    return SortSpec(field=field, direction="desc")


def page_after_filter_change(
    page: int, previous: Optional[ViewState], current: ViewState
) -> int:
    """Return to page 1 whenever the filters changed; sorting keeps the page."""
    if previous is not None and previous != current:
        return 1
    return page
