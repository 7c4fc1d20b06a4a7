# -*- coding: utf-8 -*-
"""Dataset loader for the transfer dashboard.

Reads the dataset file exported upstream ({updatedAt, transfers} JSON, a
bare JSON list, or CSV), validates and cleans it, and returns a Dataset of
immutable TransferRecords.

Load failures never reach the pipeline: a missing, unreadable or invalid
file is logged and replaced by an empty Dataset.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd
import toml

from ..modules.transfers.aggregation import DEFAULT_ROUTES
from ..modules.transfers.models import Dataset, Route, TransferRecord
from ..utils import get_workspace_root
from ..utils.data_cleaning import clean_transfer_frame, rename_source_columns
from ..utils.path_config import PathConfig
from ..utils.staging_cache import StagingCache
from .validation import report_data_quality, validate_transfers

logger = logging.getLogger(__name__)

DEFAULT_DATASET_FILE = "transbordo.json"

LOAD_ERRORS = (
    OSError,
    json.JSONDecodeError,
    ValueError,
    pd.errors.ParserError,
    pd.errors.EmptyDataError,
)


def empty_dataset() -> Dataset:
    """Fallback dataset stamped with the current time."""
    return Dataset(updated_at=datetime.now(timezone.utc).isoformat(), transfers=())


def frame_to_records(df: pd.DataFrame) -> List[TransferRecord]:
    """Convert a cleaned transfer frame to records, preserving row order."""
    return [
        TransferRecord(
            date=row.date,
            source_location=row.source_location,
            dest_location=row.dest_location,
            product_code=row.product_code,
            description=row.description,
            quantity=row.quantity.item() if hasattr(row.quantity, "item") else row.quantity,
        )
        for row in df.itertuples(index=False)
    ]


class DataLoader:
    """Unified dataset loader with built-in caching.

    Usage:
        loader = DataLoader()
        dataset = loader.load_dataset()
        dataset = loader.load_dataset(Path("exports/transbordo.json"))
    """

    def __init__(self, config: Dict = None):
        """Initialize data loader with configuration.

        Args:
            config: Optional config dictionary. If None, loads from pipeline.toml
        """
        if config is None:
            self.config = self._load_default_config()
        else:
            self.config = config

        self.cache = StagingCache()

    def _load_default_config(self) -> Dict:
        config_path = get_workspace_root() / "pipeline.toml"

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        return toml.load(config_path)

    def default_dataset_path(self) -> Path:
        """Dataset path from [dirs] raw_data and [dataset] file."""
        path_config = PathConfig(config=self.config)
        try:
            return path_config.dataset_path()
        except KeyError:
            return path_config.raw_data_dir / DEFAULT_DATASET_FILE

    def routes(self) -> Tuple[Route, Route]:
        """The two routes compared by the predominant-route KPI.

        Configured under [routes] as a = [source, dest] and b = [source, dest].
        Falls back to the built-in pair when either entry is missing.
        """
        routes_config = self.config.get("routes", {})
        try:
            route_a = Route(*[str(v) for v in routes_config["a"]])
            route_b = Route(*[str(v) for v in routes_config["b"]])
        except (KeyError, TypeError) as e:
            if routes_config:
                logger.warning(f"Invalid [routes] config ({e}), using defaults")
            return DEFAULT_ROUTES
        return route_a, route_b

    def load_frame(self, path: Path) -> Tuple[pd.DataFrame, str]:
        """Read, validate and clean the dataset file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If required columns are missing or the payload is invalid.
        """
        raw_df, updated_at = self.cache.get_dataset(path)
        df = rename_source_columns(raw_df)

        if not validate_transfers(df, path.name):
            raise ValueError(f"{path.name}: schema validation failed")

        df = clean_transfer_frame(df)
        if not df.empty:
            report_data_quality(df, path.name)
        return df, updated_at

    def load_dataset(self, path: Optional[Path] = None) -> Dataset:
        """Load the dataset, degrading to an empty one on any failure.

        Args:
            path: Dataset file. If None, uses the configured dataset path.

        Returns:
            Dataset with records in file order.
        """
        if path is None:
            path = self.default_dataset_path()
        path = Path(path)

        try:
            df, updated_at = self.load_frame(path)
        except LOAD_ERRORS as e:
            logger.error(f"Failed to load dataset {path}: {e}")
            return empty_dataset()

        records = frame_to_records(df)
        logger.info(f"Loaded {len(records)} transfers from {path.name} (updated {updated_at})")

        cache_info = self.cache.get_cache_info()
        logger.debug(
            f"Staging cache: {cache_info['cached_files']} files, "
            f"{cache_info['total_memory_mb']} MB"
        )
        return Dataset(updated_at=updated_at, transfers=tuple(records))
