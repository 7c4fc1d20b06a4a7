"""Pipeline orchestration module."""

from src.pipeline.data_loader import DataLoader
from src.pipeline.orchestrator import (
    build_dashboard,
    ordered_transfers,
    run_dashboard,
)
from src.pipeline.report_export import export_dashboard_xlsx

__all__ = [
    "DataLoader",
    "build_dashboard",
    "export_dashboard_xlsx",
    "ordered_transfers",
    "run_dashboard",
]
