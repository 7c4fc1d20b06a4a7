# -*- coding: utf-8 -*-
"""Month buckets derived from transfer dates.

A bucket is the ``YYYY-MM`` prefix of a record date. Buckets populate the
period selector and the default view-state.
"""

import calendar
import logging
import re
from typing import Iterable, List, Optional, Tuple

from src.modules.transfers.models import TransferRecord

logger = logging.getLogger(__name__)

MONTH_BUCKET_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def distinct_month_buckets(records: Iterable[TransferRecord]) -> List[str]:
    """Return the distinct ``YYYY-MM`` buckets present in records.

    Dates shorter than 7 characters are skipped. The result is sorted in
    descending order, which is also newest-first for zero-padded ISO dates.

    Args:
        records: Transfer records.

    Returns:
        Unique month buckets, newest first.
    """
    buckets = set()
    skipped = 0
    for record in records:
        if record.date and len(record.date) >= 7:
            buckets.add(record.date[:7])
        else:
            skipped += 1

    if skipped:
        logger.debug(f"Skipped {skipped} records with short dates")

    return sorted(buckets, reverse=True)


def parse_month_bucket(bucket: str) -> Optional[Tuple[int, int]]:
    """Parse a ``YYYY-MM`` bucket into (year, month), or None if invalid."""
    match = MONTH_BUCKET_PATTERN.match(bucket or "")
    if not match:
        return None

    year, month = int(match.group(1)), int(match.group(2))
    if year < 1 or not 1 <= month <= 12:
        return None
    return year, month


def month_bounds(bucket: str) -> Tuple[str, str]:
    """Return the first and last ISO day of a month bucket.

    An unparseable bucket yields ``("", "")``, which the filter engine reads
    as "no date constraint". Use ``parse_month_bucket`` to tell the two apart.

    Args:
        bucket: Month bucket such as "2024-02".

    Returns:
        Tuple of (start, end), e.g. ("2024-02-01", "2024-02-29").
    """
    parsed = parse_month_bucket(bucket)
    if parsed is None:
        logger.debug(f"Invalid month bucket: {bucket!r}")
        return "", ""

    year, month = parsed
    last_day = calendar.monthrange(year, month)[1]
    return f"{year:04d}-{month:02d}-01", f"{year:04d}-{month:02d}-{last_day:02d}"
