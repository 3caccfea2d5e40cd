"""Run execution entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from simple_map_fuzzer.report_building.report_models import ReportPage

MAPS_DIRECTORY_NAME = "maps"
LOGS_DIRECTORY_NAME = "logs"


@dataclass(frozen=True)
class RunRequest:
    """Input contract for executing one fuzzing run.

    ``output_dir``, ``max_iterations`` and ``seed`` override the configuration
    file when set.
    """

    config_path: str
    output_dir: str | None = None
    max_iterations: int | None = None
    seed: int | None = None


@dataclass(frozen=True)
class ReportRequest:
    """Input contract for rebuilding the reports of a finished run."""

    results_csv: str
    output_dir: str | None = None
    config_path: str | None = None


@dataclass(frozen=True)
class SubjectOutcome:
    """Exit code and output lines of one subject invocation."""

    exit_code: int
    output_messages: tuple[str, ...] = ()


@dataclass(frozen=True)
class RunLayout:
    """Deterministic file locations below a run's output root."""

    root: Path

    @property
    def maps_dir(self) -> Path:
        return self.root / MAPS_DIRECTORY_NAME

    @property
    def logs_dir(self) -> Path:
        return self.root / LOGS_DIRECTORY_NAME

    @property
    def results_csv(self) -> Path:
        return self.logs_dir / "results.csv"

    @property
    def overview_csv(self) -> Path:
        return self.logs_dir / "overview.csv"

    @property
    def durations_csv(self) -> Path:
        return self.logs_dir / "durations.csv"

    @property
    def workbook(self) -> Path:
        return self.logs_dir / "results.xlsx"


@dataclass(frozen=True)
class RunOutcome:  # pylint: disable=too-many-instance-attributes
    """Output contract for one completed run."""

    output_dir: Path
    total_iterations: int
    stop_reason: str
    results_csv: Path
    overview_csv: Path
    durations_csv: Path
    workbook: Path
    report_pages: Mapping[ReportPage, Path]


@dataclass(frozen=True)
class ReportOutcome:
    """Output contract for one report rebuild."""

    output_dir: Path
    total_iterations: int
    workbook: Path
    report_pages: Mapping[ReportPage, Path]
