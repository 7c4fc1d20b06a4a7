# -*- coding: utf-8 -*-
"""Centralized path configuration for dataset and report directories.

Reads paths from pipeline.toml so the loader, orchestrator and report
export agree on where the dataset lives and where reports are written.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

import tomllib

from . import get_workspace_root

logger = logging.getLogger(__name__)

DEFAULT_RAW_DATA_DIR = "data/00-raw"
DEFAULT_REPORTS_DIR = "data/04-reports"


class PathConfig:
    """Centralized path configuration.

    Usage:
        path_config = PathConfig()
        dataset = path_config.dataset_path()

        path_config = PathConfig(config=loader.config)
        report = path_config.report_path("transbordo_2024-01.xlsx")
    """

    def __init__(self, config_path: Optional[Path] = None, config: Optional[Dict] = None):
        """Initialize PathConfig from pipeline.toml or an already-loaded config.

        Args:
            config_path: Path to pipeline.toml. If None, uses default location.
            config: Parsed config dict. When given, config_path is not read and
                relative directories resolve against the workspace root.

        Raises:
            FileNotFoundError: If config file not found.
        """
        if config is not None:
            self._config = config
            self.workspace_root = get_workspace_root()
        else:
            if config_path is None:
                config_path = get_workspace_root() / "pipeline.toml"

            if not config_path.exists():
                raise FileNotFoundError(
                    f"Config file not found: {config_path}. "
                    "Copy pipeline.toml from the repository root."
                )

            with open(config_path, "rb") as f:
                self._config = tomllib.load(f)
            self.workspace_root = config_path.parent

        dirs = self._config.get("dirs", {})
        self.raw_data_dir = self._resolve(dirs.get("raw_data", DEFAULT_RAW_DATA_DIR))
        self.reports_dir = self._resolve(dirs.get("reports", DEFAULT_REPORTS_DIR))

    def _resolve(self, path_str: str) -> Path:
        path = Path(path_str)
        if path.is_absolute():
            return path
        return self.workspace_root / path

    def dataset_path(self) -> Path:
        """Get the configured dataset file.

        Returns:
            Path to the dataset inside the raw data directory.

        Raises:
            KeyError: If [dataset] file is not configured.
        """
        return self.raw_data_dir / self._config["dataset"]["file"]

    def report_path(self, filename: str) -> Path:
        """Get the output path for a report file inside the reports directory."""
        return self.reports_dir / filename
