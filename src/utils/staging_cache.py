# -*- coding: utf-8 -*-
"""Dataset file cache with automatic invalidation.

Parsing the dataset file is the only I/O in the dashboard pipeline. This
module keeps the parsed DataFrame per file and re-reads it only when the
file's modification time changes.

Features:
- JSON ({"updatedAt", "transfers"} or bare list) and CSV dataset files
- Modification time tracking for invalidation
- Manual cache clearing support
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Tuple

import pandas as pd

logger = logging.getLogger(__name__)


def _mtime_iso(filepath: Path) -> str:
    mtime = filepath.stat().st_mtime
    return datetime.fromtimestamp(mtime, tz=timezone.utc).isoformat()


def read_dataset_file(filepath: Path) -> Tuple[pd.DataFrame, str]:
    """Parse a dataset file into a raw DataFrame and its update timestamp.

    CSV files are read with every column as string; their timestamp is the
    file modification time. JSON files without "updatedAt" fall back to the
    same.

    Args:
        filepath: Path to a .json or .csv dataset file

    Returns:
        Tuple of (raw DataFrame, updated_at ISO string)

    Raises:
        FileNotFoundError: If filepath does not exist
        json.JSONDecodeError: If a JSON file is malformed
        ValueError: If the JSON payload has no transfer list
        pd.errors.EmptyDataError: If a CSV file is empty
    """
    if filepath.suffix.lower() == ".csv":
        df = pd.read_csv(filepath, dtype=str, keep_default_na=False, encoding="utf-8")
        return df, _mtime_iso(filepath)

    with open(filepath, "r", encoding="utf-8") as f:
        payload = json.load(f)

    if isinstance(payload, list):
        transfers, updated_at = payload, ""
    elif isinstance(payload, dict) and isinstance(payload.get("transfers"), list):
        transfers, updated_at = payload["transfers"], payload.get("updatedAt") or ""
    else:
        raise ValueError(f"{filepath.name}: expected a 'transfers' list")

    return pd.DataFrame(transfers), updated_at or _mtime_iso(filepath)


class StagingCache:
    """Cache for dataset reads with invalidation.

    Caches parsed dataset frames and invalidates them when the underlying
    files are modified (detected via mtime).

    Usage:
        df, updated_at = StagingCache.get_dataset("data/00-raw/transbordo.json")
        StagingCache.invalidate()  # Clear all cached data
        StagingCache.invalidate("data/00-raw/transbordo.json")  # Clear one file
    """

    _cache: Dict[Path, Tuple[pd.DataFrame, str]] = {}
    _modification_times: Dict[Path, float] = {}

    @classmethod
    def get_dataset(cls, filepath: Path) -> Tuple[pd.DataFrame, str]:
        """Get parsed dataset from cache or read it from file.

        Returns a copy of the cached frame so callers can modify it freely.

        Raises:
            FileNotFoundError: If filepath does not exist
        """
        if not isinstance(filepath, Path):
            filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"Dataset file not found: {filepath}")

        current_mtime = filepath.stat().st_mtime
        cached_mtime = cls._modification_times.get(filepath)

        if filepath in cls._cache and cached_mtime == current_mtime:
            logger.debug(f"Cache hit: {filepath.name}")
            df, updated_at = cls._cache[filepath]
            return df.copy(), updated_at

        logger.debug(f"Cache miss: {filepath.name} - reading from file")
        df, updated_at = read_dataset_file(filepath)

        cls._cache[filepath] = (df, updated_at)
        cls._modification_times[filepath] = current_mtime

        return df.copy(), updated_at

    @classmethod
    def invalidate(cls, filepath: Optional[Path] = None):
        """Invalidate cache for specific file or all files.

        Args:
            filepath: Specific file to invalidate, or None to clear all cache
        """
        if filepath:
            if isinstance(filepath, str):
                filepath = Path(filepath)

            cls._cache.pop(filepath, None)
            cls._modification_times.pop(filepath, None)
            logger.debug(f"Invalidated cache for: {filepath.name}")
        else:
            cls._cache.clear()
            cls._modification_times.clear()
            logger.debug("Invalidated all cache entries")

    @classmethod
    def get_cache_info(cls) -> Dict[str, float]:
        """Get information about current cache state.

        Returns:
            Dict with keys:
                - cached_files: Number of files currently cached
                - total_memory_mb: Approximate memory usage in MB
        """
        total_memory_mb = sum(
            df.memory_usage(deep=True).sum() for df, _ in cls._cache.values()
        ) / (1024 * 1024)

        return {
            "cached_files": len(cls._cache),
            "total_memory_mb": round(total_memory_mb, 2),
        }
