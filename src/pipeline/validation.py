# -*- coding: utf-8 -*-
"""Schema validation for transfer dataset files.

Validates the dataset frame at the ingestion boundary, before any row is
turned into a TransferRecord. Missing required columns reject the whole
dataset. Data-quality problems (non ISO dates, negative quantities) are
only reported: the pipeline accepts them and handles them by its own rules.

Usage:
    from src.pipeline.validation import validate_transfers

    if not validate_transfers(df, dataset_path.name):
        logger.error(f"Schema validation failed: {dataset_path}")
"""

import logging
import re
from typing import Dict

import pandas as pd

logger = logging.getLogger(__name__)

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

EXPECTED_SCHEMA: Dict = {
    "required_columns": [
        "date",
        "source_location",
        "dest_location",
        "product_code",
        "quantity",
    ],
    "optional_columns": ["description"],
    "date_columns": ["date"],
    "numeric_columns": ["quantity"],
}


def _check_required_columns(df: pd.DataFrame, source_name: str, schema: Dict) -> bool:
    """Check that all required columns exist in DataFrame.

    Args:
        df: DataFrame to validate.
        source_name: Dataset name (for error logging).
        schema: Schema definition with 'required_columns' key.

    Returns:
        True if all required columns present, False otherwise.
    """
    required = schema.get("required_columns", [])
    missing = [col for col in required if col not in df.columns]

    if missing:
        logger.error(f"{source_name} missing required columns: {missing}")
        return False

    return True


def _check_date_format(df: pd.DataFrame, source_name: str, schema: Dict) -> bool:
    """Check that date columns hold zero-padded YYYY-MM-DD strings.

    Range filtering and sorting compare dates as strings, which is only
    chronological for this exact format.

    Returns:
        True if every date matches, False otherwise.
    """
    valid = True
    for col in schema.get("date_columns", []):
        if col not in df.columns:
            continue

        matches = df[col].astype(str).apply(lambda v: bool(ISO_DATE_PATTERN.match(v)))
        bad = df[col][~matches.astype(bool)]
        if not bad.empty:
            sample = bad.astype(str).head(3).tolist()
            logger.warning(
                f"{source_name}: {len(bad)} values in {col} are not YYYY-MM-DD "
                f"(e.g. {sample})"
            )
            valid = False

    return valid


def _check_negative_values(df: pd.DataFrame, source_name: str, schema: Dict) -> bool:
    """Report negative numeric values. They are summed as-is downstream."""
    valid = True
    for col in schema.get("numeric_columns", []):
        if col not in df.columns or not pd.api.types.is_numeric_dtype(df[col]):
            continue

        negatives = int((df[col] < 0).sum())
        if negatives:
            logger.warning(f"{source_name}: {negatives} negative values in {col}")
            valid = False

    return valid


def validate_transfers(df: pd.DataFrame, source_name: str) -> bool:
    """Validate that a transfer frame can be converted into records.

    Args:
        df: Frame with record field names (see rename_source_columns).
        source_name: Dataset name used in log messages.

    Returns:
        True if the frame has every required column, False otherwise.
    """
    if df.empty and len(df.columns) == 0:
        logger.warning(f"{source_name}: dataset has no transfers")
        return True

    return _check_required_columns(df, source_name, EXPECTED_SCHEMA)


def report_data_quality(df: pd.DataFrame, source_name: str) -> bool:
    """Log data-quality warnings for a cleaned transfer frame.

    Returns:
        True if no problem was found. Problems never reject the dataset.
    """
    dates_ok = _check_date_format(df, source_name, EXPECTED_SCHEMA)
    quantities_ok = _check_negative_values(df, source_name, EXPECTED_SCHEMA)
    return dates_ok and quantities_ok
