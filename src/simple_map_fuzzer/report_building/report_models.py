"""Report building entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from simple_map_fuzzer.artifact_generation.artifact_models import MapFileType

REPORT_DIRECTORY_NAME = "report"


class ReportPage(str, Enum):
    """Named pages of the HTML report."""

    HOME = "home"
    ABOUT = "about"
    OVERVIEW = "overview"
    ALL_MAPS = "all_maps"
    WELCOME = "welcome"

    @property
    def file_name(self) -> str:
        return f"{self.value}.html"

    @property
    def heading(self) -> str:
        return self.value.replace("_", " ").title()


@dataclass(frozen=True)
class RunMetadata:  # pylint: disable=too-many-instance-attributes
    """Metadata rendered into the RunInfo sheet and the report pages."""

    run_start: datetime
    output_dir: Path
    total_iterations: int
    elapsed_ms: float | None = None
    stop_reason: str | None = None
    seed: int | None = None
    map_file_type: MapFileType | None = None
    subject_command: tuple[str, ...] = ()


def report_page_path(output_root: Path | str, page: ReportPage) -> Path:
    """Return the deterministic output path of ``page`` below a run's output root."""
    return Path(output_root) / REPORT_DIRECTORY_NAME / page.file_name
