# -*- coding: utf-8 -*-
"""Filter transfer records by date range, route and free-text search.

The three predicates are independent and AND-combined. Each one passes
every record when its view-state field is empty.
"""

import logging
from typing import Iterable, List

from src.modules.transfers.models import ROUTE_ALL, TransferRecord, ViewState

logger = logging.getLogger(__name__)


def in_date_range(record: TransferRecord, start: str, end: str) -> bool:
    """Inclusive range check on ISO date strings.

    Compares strings, not parsed dates: zero-padded ISO dates order the same
    way, and malformed dates fall outside naturally.
    """
    if not start or not end:
        return True
    return start <= record.date <= end


def matches_route(record: TransferRecord, route: str) -> bool:
    if not route or route == ROUTE_ALL:
        return True
    return record.route_key == route


def matches_search(record: TransferRecord, search: str) -> bool:
    """Case-insensitive substring match on product code or description."""
    if not search:
        return True
    needle = search.lower()
    return needle in record.product_code.lower() or needle in record.description.lower()


def filter_transfers(
    records: Iterable[TransferRecord], view_state: ViewState
) -> List[TransferRecord]:
    """Return the records that pass every active filter, in input order.

    Args:
        records: Transfer records.
        view_state: Current filters.

    Returns:
        New list holding a subset of records.
    """
    filtered = [
        record
        for record in records
        if in_date_range(record, view_state.range_start, view_state.range_end)
        and matches_route(record, view_state.route)
        and matches_search(record, view_state.search)
    ]
    logger.debug(f"Filter kept {len(filtered)} records")
    return filtered
