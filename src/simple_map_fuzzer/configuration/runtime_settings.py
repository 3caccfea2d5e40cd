"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from simple_map_fuzzer.artifact_generation.artifact_models import MapFileType
from simple_map_fuzzer.artifact_generation.generator_settings import GenerationSettings
from simple_map_fuzzer.iteration_results.result_models import NOT_AVAILABLE
from simple_map_fuzzer.result_formatting.format_options import (
    DEFAULT_EXIT_CODE_LABELS,
    FormatStyle,
)

DEFAULT_OUTPUT_DIR = "fuzzresults"
MAP_PLACEHOLDER = "{map}"
ACTIONS_PLACEHOLDER = "{actions}"


@dataclass(frozen=True)
class CustomMap:
    """A caller-provided map hint used before random generation starts."""

    kind: MapFileType
    hint: str


@dataclass(frozen=True)
class CustomInputs:
    """Custom maps and action sequences, consumed in order."""

    maps: tuple[CustomMap, ...] = ()
    action_sequences: tuple[str, ...] = ()


@dataclass(frozen=True)
class RunSettings:
    """Iteration and time budget plus the output root of a run."""

    output_dir: Path
    max_iterations: int = 100
    max_time_ms: int = 900_000


@dataclass(frozen=True)
class SubjectSettings:
    """How the program under test is invoked and how its exit codes are read."""

    command: tuple[str, ...]
    timeout_seconds: int = 30
    success_exit_codes: tuple[int, ...] = (0,)
    known_exit_codes: tuple[int, ...] = (0, 1, 10)
    working_dir: Path | None = None


@dataclass(frozen=True)
class ReportingSettings:
    """Formatting parameters for the CSV, HTML and workbook reports."""

    separator: str = ","
    placeholder: str = NOT_AVAILABLE
    max_value_length: int | None = None
    exit_code_labels: Mapping[int, str] = field(
        default_factory=lambda: dict(DEFAULT_EXIT_CODE_LABELS)
    )

    def format_style(self, base_directory: Path | None = None) -> FormatStyle:
        return FormatStyle(
            separator=self.separator,
            placeholder=self.placeholder,
            max_length=self.max_value_length,
            base_directory=base_directory,
            exit_code_labels=dict(self.exit_code_labels),
        )


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    generation: GenerationSettings
    custom: CustomInputs
    run: RunSettings
    subject: SubjectSettings | None
    reporting: ReportingSettings
