"""Results workbook writer service."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from simple_map_fuzzer.iteration_results.result_models import IterationResult
from simple_map_fuzzer.iteration_results.statistics import (
    build_overview_rows,
    execution_time_summary,
    exit_code_counts,
    percentage,
    sort_by_iteration,
)

from .csv_report import OVERVIEW_COLUMNS, RESULT_COLUMNS
from .report_models import RunMetadata

ITERATIONS_SHEET_NAME = "Iterations"
OVERVIEW_SHEET_NAME = "Overview"
RUN_INFO_SHEET_NAME = "RunInfo"
EXECUTION_TIME_COLUMN = "Execution Time (ms)"


def write_results_workbook(
    results: Iterable[IterationResult],
    output_path: Path | str,
    *,
    run_metadata: RunMetadata | None = None,
    durations: Mapping[int, float] | None = None,
) -> Path:
    """Write the Iterations, Overview and RunInfo sheets for one run."""
    ordered = sort_by_iteration(results)
    measured = dict(durations or {})

    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = ITERATIONS_SHEET_NAME
    _write_iterations_sheet(sheet, ordered, measured)
    _write_overview_sheet(workbook.create_sheet(OVERVIEW_SHEET_NAME), ordered)
    _write_run_info_sheet(
        workbook.create_sheet(RUN_INFO_SHEET_NAME), ordered, measured, run_metadata
    )

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def _write_iterations_sheet(
    sheet: Worksheet,
    results: Sequence[IterationResult],
    durations: Mapping[int, float],
) -> None:
    _write_header_row(sheet, (*RESULT_COLUMNS, EXECUTION_TIME_COLUMN))
    for row_index, result in enumerate(results, start=2):
        values = (
            result.iteration_number,
            result.map_file_name,
            result.map_file_path,
            result.map_file_type.value,
            result.string_sequence,
            result.exit_code,
            result.error_code,
            _normalize_output_value(result.output_messages),
            result.custom_attribute,
            durations.get(result.iteration_number),
        )
        for column_index, value in enumerate(values, start=1):
            sheet.cell(row=row_index, column=column_index, value=value)


def _write_overview_sheet(sheet: Worksheet, results: Sequence[IterationResult]) -> None:
    _write_header_row(sheet, (*OVERVIEW_COLUMNS, "Share (%)"))
    total = len(results)
    for row_index, row in enumerate(build_overview_rows(results), start=2):
        values = (
            row.exit_code,
            _normalize_output_value(row.output_messages),
            row.count,
            "-".join(str(number) for number in row.iteration_numbers),
            percentage(row.count, total),
        )
        for column_index, value in enumerate(values, start=1):
            sheet.cell(row=row_index, column=column_index, value=value)


def _write_run_info_sheet(
    sheet: Worksheet,
    results: Sequence[IterationResult],
    durations: Mapping[int, float],
    run_metadata: RunMetadata | None,
) -> None:
    summary = execution_time_summary(results, durations)
    entries: list[tuple[str, Any]] = []
    if run_metadata is not None:
        entries.extend(
            (
                ("run_start", run_metadata.run_start.isoformat()),
                ("output_dir", str(run_metadata.output_dir)),
                ("seed", run_metadata.seed),
                (
                    "map_file_type",
                    run_metadata.map_file_type.value if run_metadata.map_file_type else None,
                ),
                ("subject_command", " ".join(run_metadata.subject_command) or None),
                ("elapsed_ms", run_metadata.elapsed_ms),
                ("stop_reason", run_metadata.stop_reason),
            )
        )
    entries.append(("total", len(results)))
    entries.extend(
        (f"exit_code_{code}", count) for code, count in exit_code_counts(results).items()
    )
    entries.extend(
        (
            ("measured_iterations", summary.count),
            ("min_execution_ms", summary.minimum_ms),
            ("max_execution_ms", summary.maximum_ms),
            ("mean_execution_ms", summary.mean_ms),
        )
    )
    for row, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row, column=1, value=key)
        sheet.cell(row=row, column=2, value=value)


def _write_header_row(sheet: Worksheet, columns: Sequence[str]) -> None:
    for column_index, name in enumerate(columns, start=1):
        cell = sheet.cell(row=1, column=column_index, value=name)
        cell.style = "Headline 1"
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(len(name) + 6, 40)
        )


def _normalize_output_value(value: Sequence[str]) -> str:
    return json.dumps(list(value), ensure_ascii=False, separators=(",", ":"))
