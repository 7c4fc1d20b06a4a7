# -*- coding: utf-8 -*-
"""Data cleaning utilities for raw transfer exports.

The upstream export uses Portuguese column names (data, deposito_saida,
...). These helpers map them onto record field names and normalize the
values so every row can become a TransferRecord.
"""

import logging
from typing import Dict

import pandas as pd

logger = logging.getLogger(__name__)

SOURCE_COLUMN_MAP: Dict[str, str] = {
    "data": "date",
    "deposito_saida": "source_location",
    "deposito_entrada": "dest_location",
    "produto": "product_code",
    "descricao": "description",
    "quantidade": "quantity",
}

TEXT_COLUMNS = ["date", "source_location", "dest_location", "product_code", "description"]

INT64_LIMIT = 2**63


def rename_source_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename export columns to record field names.

    Columns already using record field names are left alone.
    """
    renames = {src: dst for src, dst in SOURCE_COLUMN_MAP.items() if src in df.columns}
    if renames:
        logger.debug(f"Renaming source columns: {renames}")
    return df.rename(columns=renames)


def clean_text_column(series: pd.Series) -> pd.Series:
    """Missing values become "", everything else a stripped string."""
    return series.apply(lambda v: "" if v is None or pd.isna(v) else str(v).strip())


def coerce_quantity(series: pd.Series) -> pd.Series:
    """Convert quantity values to numbers.

    Unparseable or missing values become 0. Negative values are kept. The
    column is returned as int64 when every value is whole and inside the
    int64 range; otherwise it stays float.

    Args:
        series: Raw quantity column

    Returns:
        Numeric quantity column
    """
    as_text = series.apply(lambda v: v.strip() if isinstance(v, str) else v)
    numeric = pd.to_numeric(as_text, errors="coerce")

    invalid = int(numeric.isna().sum() - series.isna().sum())
    if invalid > 0:
        logger.warning(f"{invalid} quantity values could not be parsed, using 0")

    numeric = numeric.fillna(0)
    fits_int64 = numeric.empty or numeric.abs().max() < INT64_LIMIT
    if fits_int64 and (numeric % 1 == 0).all():
        return numeric.astype("int64")
    return numeric.astype(float)


def clean_transfer_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Normalize a renamed transfer frame.

    Missing optional text columns are added empty. Dates are stripped but
    not reformatted: filtering compares them as strings.

    Args:
        df: Frame with record field names

    Returns:
        Cleaned copy with TEXT_COLUMNS and quantity
    """
    df = df.copy()
    for column in TEXT_COLUMNS:
        if column in df.columns:
            df[column] = clean_text_column(df[column])
        else:
            df[column] = ""

    if "quantity" in df.columns:
        df["quantity"] = coerce_quantity(df["quantity"])
    else:
        df["quantity"] = 0

    return df[TEXT_COLUMNS + ["quantity"]]
