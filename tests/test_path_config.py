# -*- coding: utf-8 -*-
"""Tests for src/utils/path_config.py."""

import logging
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from src.utils.path_config import PathConfig

logger = logging.getLogger(__name__)


class TestPathConfig:
    """Test PathConfig class."""

    @pytest.fixture
    def temp_config_dir(self):
        """Create a temporary directory with test pipeline.toml."""
        with TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "pipeline.toml"
            config_content = """
[dirs]
raw_data = "data/00-raw"
reports = "data/04-reports"

[dataset]
file = "transbordo.json"
"""
            config_path.write_text(config_content, encoding="utf-8")
            yield Path(tmpdir)

    def test_init_with_custom_path(self, temp_config_dir):
        """Relative directories resolve against the config location."""
        config = PathConfig(temp_config_dir / "pipeline.toml")
        assert config.raw_data_dir == temp_config_dir / "data" / "00-raw"
        assert config.reports_dir == temp_config_dir / "data" / "04-reports"

    def test_dataset_path(self, temp_config_dir):
        """Dataset path is inside the raw data directory."""
        config = PathConfig(temp_config_dir / "pipeline.toml")
        assert config.dataset_path() == temp_config_dir / "data" / "00-raw" / "transbordo.json"

    def test_report_path(self, temp_config_dir):
        """Report files go to the reports directory."""
        config = PathConfig(temp_config_dir / "pipeline.toml")
        assert config.report_path("r.xlsx") == temp_config_dir / "data" / "04-reports" / "r.xlsx"

    def test_absolute_dirs_kept(self, tmp_path):
        """Absolute directories are used as-is."""
        raw = tmp_path / "raw"
        config_path = tmp_path / "pipeline.toml"
        config_path.write_text(
            f'[dirs]\nraw_data = "{raw.as_posix()}"\nreports = "out"\n', encoding="utf-8"
        )
        config = PathConfig(config_path)
        assert config.raw_data_dir == raw

    def test_missing_dataset_section(self, tmp_path):
        """dataset_path raises KeyError without [dataset]."""
        config_path = tmp_path / "pipeline.toml"
        config_path.write_text('[dirs]\nraw_data = "a"\nreports = "b"\n', encoding="utf-8")
        with pytest.raises(KeyError):
            PathConfig(config_path).dataset_path()

    def test_missing_config_file(self, tmp_path):
        """Missing config raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            PathConfig(tmp_path / "nope.toml")

    def test_default_location(self):
        """The repository pipeline.toml is found by default."""
        config = PathConfig()
        assert config.dataset_path().name == "transbordo.json"

    def test_loaded_config_dict(self, tmp_path):
        """A config dict resolves relative dirs against the workspace root."""
        config = PathConfig(config={"dirs": {"raw_data": str(tmp_path), "reports": "out"}, "dataset": {"file": "t.json"}})
        assert config.dataset_path() == tmp_path / "t.json"
        assert config.reports_dir == config.workspace_root / "out"
        assert not (tmp_path / "pipeline.toml").exists()

    def test_missing_dirs_use_defaults(self):
        """Without [dirs] the standard data directories are used."""
        config = PathConfig(config={})
        assert config.raw_data_dir == config.workspace_root / "data" / "00-raw"
        assert config.reports_dir == config.workspace_root / "data" / "04-reports"
