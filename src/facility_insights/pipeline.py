"""Orchestration: CSV text -> facilities -> summary, region risk and quality report."""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .builder import build_facility
from .config import DEFAULT_CSV, INCOMPLETE_SCORE_THRESHOLD
from .errors import DatasetLoadError, format_load_error
from .models import DataSummary, Facility, QualityReport
from .quality import build_quality_report
from .regions import analyze_regions
from .summary import generate_summary
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


class LoadState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class DatasetResult:
    """Everything derived from one dataset load. Consumers treat it as read-only."""
    facilities: tuple
    summary: DataSummary
    regions: tuple
    quality: QualityReport
    source: str = "<memory>"

    def facility_by_id(self, facility_id: str) -> Facility | None:
        for facility in self.facilities:
            if facility.id == facility_id:
                return facility
        return None

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "facilities": [f.model_dump(by_alias=True) for f in self.facilities],
            "summary": self.summary.model_dump(by_alias=True),
            "regionAnalysis": [r.model_dump(by_alias=True) for r in self.regions],
            "quality": self.quality.model_dump(by_alias=True),
        }


def decode_csv(content: str | bytes) -> str:
    """Bytes are decoded as UTF-8 (undecodable bytes replaced); a leading BOM is dropped."""
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    return content.lstrip("\ufeff")


def process_dataset(csv_text: str) -> list[Facility]:
    """
    Tokenize the CSV and build one Facility per data row.

    Ids are unique within the result: a repeated id gets the row index
    appended ("x" then "x-1") for the second and later occurrences.
    """
    rows = tokenize(csv_text)
    facilities: list[Facility] = []
    seen: set[str] = set()
    for index, row in enumerate(rows):
        facility = build_facility(row, index)
        if facility.id in seen:
            suffix = index
            while f"{facility.id}-{suffix}" in seen:
                suffix += 1
            new_id = f"{facility.id}-{suffix}"
            logger.warning(f"Duplicate facility id {facility.id!r} ({facility.name!r}), using {new_id!r}")
            facility = facility.model_copy(update={"id": new_id})
        seen.add(facility.id)
        facilities.append(facility)
    return facilities


def analyze(
    facilities: list[Facility],
    source: str = "<memory>",
    incomplete_threshold: int = INCOMPLETE_SCORE_THRESHOLD,
) -> DatasetResult:
    summary = generate_summary(facilities, incomplete_threshold)
    regions = analyze_regions(facilities)
    quality = build_quality_report(facilities, regions, incomplete_threshold)
    return DatasetResult(
        facilities=tuple(facilities),
        summary=summary,
        regions=tuple(regions),
        quality=quality,
        source=source,
    )


def load_dataset_from_content(csv_content: str | bytes, source: str = "<upload>") -> DatasetResult:
    """Run the full pipeline over CSV text or bytes (e.g. an uploaded file)."""
    start = time.time()
    facilities = process_dataset(decode_csv(csv_content))
    result = analyze(facilities, source=source)
    logger.info(
        f"Processed {len(facilities)} facilities from {source} in {time.time() - start:.2f}s "
        f"({len(result.regions)} regions, avg completeness {result.summary.average_completeness_score})"
    )
    return result


def load_dataset(path: Path | str | None = None) -> DatasetResult:
    """Read a CSV file and run the full pipeline over it."""
    path = Path(path) if path else DEFAULT_CSV
    if not path.exists():
        raise FileNotFoundError(2, "CSV not found", str(path))
    return load_dataset_from_content(path.read_bytes(), source=str(path))


class DatasetStore:
    """
    Load-once holder for the current DatasetResult.

    State goes loading -> ready or loading -> error. A failed load is recorded,
    not raised, and is not retried; reload() or replace_with_content() discard
    the previous result wholesale.
    """

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path else DEFAULT_CSV
        self.state = LoadState.LOADING
        self.error: str | None = None
        self._result: DatasetResult | None = None
        self._loaded = False

    @property
    def result(self) -> DatasetResult | None:
        return self._result

    def load(self) -> LoadState:
        """Load the configured CSV once; later calls return the settled state."""
        if self._loaded:
            return self.state
        return self.reload()

    def reload(self) -> LoadState:
        return self._run(lambda: load_dataset(self.path), str(self.path))

    def replace_with_content(self, csv_content: str | bytes, source: str = "<upload>") -> LoadState:
        return self._run(lambda: load_dataset_from_content(csv_content, source=source), source)

    def _run(self, loader, source: str) -> LoadState:
        self.state = LoadState.LOADING
        self.error = None
        self._result = None
        self._loaded = True
        try:
            self._result = loader()
        except Exception as e:
            self.state = LoadState.ERROR
            self.error = format_load_error(e)
            logger.error(f"Failed to load dataset from {source}: {self.error}", exc_info=True)
            return self.state
        self.state = LoadState.READY
        return self.state

    def require_result(self) -> DatasetResult:
        """The loaded result; DatasetLoadError when loading failed or has not finished."""
        if self.state == LoadState.ERROR:
            raise DatasetLoadError(f"Dataset failed to load: {self.error}", source=str(self.path))
        if self.state != LoadState.READY or self._result is None:
            raise DatasetLoadError("Dataset is still loading", source=str(self.path))
        return self._result

    def status(self) -> dict:
        return {
            "state": self.state.value,
            "error": self.error,
            "source": self._result.source if self._result else str(self.path),
            "facilities": len(self._result.facilities) if self._result else 0,
        }
