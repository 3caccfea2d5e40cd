"""Run execution use-case service."""

from __future__ import annotations

import dataclasses
import logging
import random
import time
from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from pathlib import Path

from simple_map_fuzzer.artifact_generation import (
    ActionSequenceGenerator,
    Artifact,
    EncodingError,
    InvalidConfiguration,
    RandomMapGenerator,
    write_artifact,
)
from simple_map_fuzzer.configuration import (
    Configuration,
    ConfigurationError,
    CustomMap,
    ReportingSettings,
    SubjectSettings,
    load_configuration,
)
from simple_map_fuzzer.iteration_results import (
    NOT_AVAILABLE,
    IterationResult,
    classify_error_code,
)
from simple_map_fuzzer.report_building import (
    CsvParseError,
    RunMetadata,
    build_report_context,
    read_durations_csv,
    read_results_csv,
    write_durations_csv,
    write_html_report,
    write_overview_csv,
    write_results_csv,
    write_results_workbook,
)

from .run_contracts import (
    LOGS_DIRECTORY_NAME,
    ReportOutcome,
    ReportRequest,
    RunLayout,
    RunOutcome,
    RunRequest,
)
from .subject_runner import SubjectRunner, SubprocessSubjectRunner

logger = logging.getLogger(__name__)

STOP_MAX_ITERATIONS = "max_iterations"
STOP_MAX_TIME = "max_time"


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


def execute_fuzz_run(
    request: RunRequest,
    *,
    subject_runner: SubjectRunner | None = None,
    clock: Callable[[], float] | None = None,
) -> RunOutcome:
    """Execute one fuzzing run and write its output tree and report.

    Args:
      request: Configuration path and command-line overrides.
      subject_runner: Replaces the subprocess runner built from the
        ``subject`` section.
      clock: Monotonic clock in seconds used for the time budget and the
        iteration durations.

    Raises:
      RunExecutionError: If the configuration is invalid, the output directory
        already holds maps, or an artifact or report cannot be written.
    """
    configuration = _load_run_configuration(request)
    subject = configuration.subject
    if subject is None:
        raise RunExecutionError("Configuration section 'subject' is required for run.")
    runner = subject_runner or SubprocessSubjectRunner(subject)
    resolved_clock = clock or time.monotonic
    layout = RunLayout(root=configuration.run.output_dir)
    _ensure_fresh_output(layout)

    run_start = datetime.now(UTC)
    try:
        iterations = _FuzzIterations(configuration, subject, runner, layout, resolved_clock)
        iterations.run()
        metadata = RunMetadata(
            run_start=run_start,
            output_dir=layout.root.resolve(),
            total_iterations=len(iterations.results),
            elapsed_ms=iterations.elapsed_ms,
            stop_reason=iterations.stop_reason,
            seed=configuration.generation.seed,
            map_file_type=configuration.generation.map_file_type,
            subject_command=subject.command,
        )
        return _write_run_outputs(layout, iterations, metadata, configuration.reporting)
    except (InvalidConfiguration, EncodingError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc


def rebuild_report(request: ReportRequest) -> ReportOutcome:
    """Rebuild the workbook and HTML report from a results CSV.

    Durations are read from ``durations.csv`` beside the results file when it
    exists. Without ``output_dir`` the report lands in the run root that holds
    the ``logs`` directory.

    Raises:
      RunExecutionError: If the CSV or configuration cannot be read.
    """
    results_path = Path(request.results_csv)
    output_root = Path(request.output_dir) if request.output_dir else _run_root(results_path)
    try:
        reporting = (
            load_configuration(request.config_path).reporting
            if request.config_path
            else ReportingSettings()
        )
        results = read_results_csv(results_path)
        durations_path = results_path.with_name(RunLayout(output_root).durations_csv.name)
        durations = read_durations_csv(durations_path) if durations_path.exists() else {}
        metadata = RunMetadata(
            run_start=datetime.now(UTC),
            output_dir=output_root.resolve(),
            total_iterations=len(results),
        )
        workbook = write_results_workbook(
            results,
            RunLayout(output_root).workbook,
            run_metadata=metadata,
            durations=durations,
        )
        context = build_report_context(
            results,
            durations=durations,
            style=reporting.format_style(output_root.resolve()),
            run_metadata=metadata,
        )
        pages = write_html_report(context, output_root)
    except (ConfigurationError, CsvParseError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc
    return ReportOutcome(
        output_dir=output_root.resolve(),
        total_iterations=len(results),
        workbook=workbook,
        report_pages=pages,
    )


class _FuzzIterations:
    """Generate, execute and record iterations until a budget runs out."""

    def __init__(
        self,
        configuration: Configuration,
        subject: SubjectSettings,
        runner: SubjectRunner,
        layout: RunLayout,
        clock: Callable[[], float],
    ) -> None:
        generation = configuration.generation
        rng = random.Random(generation.seed)
        self._map_generator = RandomMapGenerator(generation, rng=rng)
        self._action_generator = ActionSequenceGenerator(generation.action_sequence, rng=rng)
        self._custom_maps: Iterator[CustomMap] = iter(configuration.custom.maps)
        self._custom_sequences: Iterator[str] = iter(configuration.custom.action_sequences)
        self._run_settings = configuration.run
        self._subject = subject
        self._runner = runner
        self._layout = layout
        self._clock = clock
        self.results: list[IterationResult] = []
        self.durations: dict[int, float] = {}
        self.stop_reason = STOP_MAX_ITERATIONS
        self.elapsed_ms = 0.0

    def run(self) -> None:
        started = self._clock()
        max_iterations = self._run_settings.max_iterations
        max_time_ms = self._run_settings.max_time_ms
        for iteration_number in range(1, max_iterations + 1):
            if _elapsed_ms(started, self._clock()) >= max_time_ms:
                self.stop_reason = STOP_MAX_TIME
                logger.info(
                    "Time budget of %d ms exhausted after %d iterations.",
                    max_time_ms,
                    len(self.results),
                )
                break
            self._run_iteration(iteration_number)
        else:
            logger.info("Iteration budget of %d exhausted.", max_iterations)
        self.elapsed_ms = _elapsed_ms(started, self._clock())

    def _run_iteration(self, iteration_number: int) -> None:
        artifact, custom_attribute = self._next_map()
        actions = next(self._custom_sequences, None)
        if actions is None:
            actions = str(self._action_generator.generate_random_action_sequence())
        map_path = write_artifact(artifact, self._layout.maps_dir)

        before = self._clock()
        outcome = self._runner.run(map_path, actions)
        duration_ms = _elapsed_ms(before, self._clock())

        result = IterationResult(
            iteration_number=iteration_number,
            map_file_name=artifact.source_name,
            map_file_path=str(map_path),
            map_file_type=artifact.kind,
            string_sequence=actions,
            exit_code=outcome.exit_code,
            error_code=classify_error_code(
                outcome.exit_code,
                success_exit_codes=self._subject.success_exit_codes,
                known_exit_codes=self._subject.known_exit_codes,
            ),
            output_messages=outcome.output_messages,
            custom_attribute=custom_attribute,
        )
        self.results.append(result)
        self.durations[iteration_number] = duration_ms
        logger.debug(
            "Iteration %d: map=%s actions=%s exit_code=%d (%.1f ms)",
            iteration_number,
            artifact.source_name,
            actions,
            outcome.exit_code,
            duration_ms,
        )

    def _next_map(self) -> tuple[Artifact, str]:
        custom_map = next(self._custom_maps, None)
        if custom_map is None:
            return self._map_generator.generate_random_map(), NOT_AVAILABLE
        artifact = self._map_generator.generate_custom_map(custom_map.hint, custom_map.kind)
        return artifact, custom_map.hint


def _load_run_configuration(request: RunRequest) -> Configuration:
    try:
        configuration = load_configuration(request.config_path)
    except (ConfigurationError, OSError) as exc:
        raise RunExecutionError(str(exc)) from exc

    run_settings = configuration.run
    if request.output_dir:
        run_settings = dataclasses.replace(run_settings, output_dir=Path(request.output_dir))
    if request.max_iterations is not None:
        if request.max_iterations <= 0:
            raise RunExecutionError("max_iterations must be greater than zero.")
        run_settings = dataclasses.replace(run_settings, max_iterations=request.max_iterations)
    generation = configuration.generation
    if request.seed is not None:
        generation = dataclasses.replace(generation, seed=request.seed)
    return dataclasses.replace(configuration, run=run_settings, generation=generation)


def _ensure_fresh_output(layout: RunLayout) -> None:
    maps_dir = layout.maps_dir
    if maps_dir.is_dir() and any(maps_dir.iterdir()):
        raise RunExecutionError(
            f"Output directory already holds generated maps: {maps_dir.resolve()}"
        )


def _write_run_outputs(
    layout: RunLayout,
    iterations: _FuzzIterations,
    metadata: RunMetadata,
    reporting: ReportingSettings,
) -> RunOutcome:
    results = iterations.results
    durations = iterations.durations
    results_csv = write_results_csv(results, layout.results_csv)
    overview_csv = write_overview_csv(results, layout.overview_csv)
    durations_csv = write_durations_csv(durations, layout.durations_csv)
    workbook = write_results_workbook(
        results, layout.workbook, run_metadata=metadata, durations=durations
    )
    context = build_report_context(
        results,
        durations=durations,
        style=reporting.format_style(layout.root.resolve()),
        run_metadata=metadata,
    )
    pages = write_html_report(context, layout.root)
    logger.info("Run finished after %d iterations (%s).", len(results), iterations.stop_reason)
    return RunOutcome(
        output_dir=layout.root.resolve(),
        total_iterations=len(results),
        stop_reason=iterations.stop_reason,
        results_csv=results_csv,
        overview_csv=overview_csv,
        durations_csv=durations_csv,
        workbook=workbook,
        report_pages=pages,
    )


def _run_root(results_csv: Path) -> Path:
    parent = results_csv.parent
    return parent.parent if parent.name == LOGS_DIRECTORY_NAME else parent


def _elapsed_ms(start: float, end: float) -> float:
    return (end - start) * 1000.0
