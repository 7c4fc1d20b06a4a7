# -*- coding: utf-8 -*-
"""Stable ordering of transfer records for the paginated list."""

from typing import Callable, Dict, Iterable, List

from src.modules.transfers.models import SortSpec, TransferRecord

SORT_KEYS: Dict[str, Callable[[TransferRecord], object]] = {
    "date": lambda record: record.date,
    "quantity": lambda record: record.quantity,
}


def sort_transfers(
    records: Iterable[TransferRecord], sort_spec: SortSpec
) -> List[TransferRecord]:
    """Return a new list ordered by the sort spec.

    ``sorted`` is stable in both directions (``reverse=True`` keeps equal
    keys in input order), so pagination stays deterministic.
    """
    return sorted(records, key=SORT_KEYS[sort_spec.field], reverse=sort_spec.descending)
