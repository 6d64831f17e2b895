"""Facility CSV normalization, completeness scoring and regional risk classification."""

from .builder import build_facility
from .models import DataSummary, Facility, RawRow, RegionRisk
from .pipeline import DatasetResult, DatasetStore, LoadState, load_dataset, load_dataset_from_content, process_dataset
from .regions import analyze_regions
from .summary import generate_summary

__all__ = [
    "DataSummary",
    "DatasetResult",
    "DatasetStore",
    "Facility",
    "LoadState",
    "RawRow",
    "RegionRisk",
    "analyze_regions",
    "build_facility",
    "generate_summary",
    "load_dataset",
    "load_dataset_from_content",
    "process_dataset",
]
