"""Report sink integration tests: workbook and HTML pages on disk."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from openpyxl import load_workbook
from simple_map_fuzzer.artifact_generation import MapFileType
from simple_map_fuzzer.iteration_results import IterationResult
from simple_map_fuzzer.report_building import (
    ITERATIONS_SHEET_NAME,
    OVERVIEW_SHEET_NAME,
    RESULT_COLUMNS,
    RUN_INFO_SHEET_NAME,
    ReportPage,
    RunMetadata,
    build_report_context,
    write_html_report,
    write_results_workbook,
)


def _results() -> list[IterationResult]:
    return [
        IterationResult(
            iteration_number=2,
            map_file_name="map_2.bin",
            map_file_path="/runs/maps/map_2.bin",
            map_file_type=MapFileType.BINARY,
            string_sequence="QQ",
            exit_code=1,
            error_code=1,
            output_messages=("bad map", "line 2"),
        ),
        IterationResult(
            iteration_number=1,
            map_file_name="map_1.txt",
            map_file_path="/runs/maps/map_1.txt",
            map_file_type=MapFileType.TEXT,
            string_sequence="SULE",
            exit_code=0,
            error_code=0,
            custom_attribute="MWP",
        ),
    ]


def test_workbook_contains_iterations_overview_and_run_info(tmp_path: Path) -> None:
    metadata = RunMetadata(
        run_start=datetime(2024, 5, 1, 12, 0, tzinfo=UTC),
        output_dir=tmp_path,
        total_iterations=2,
        elapsed_ms=4200.0,
        stop_reason="max_iterations",
        seed=7,
        map_file_type=MapFileType.ALL,
        subject_command=("game", "{map}", "{actions}"),
    )

    output = write_results_workbook(
        _results(),
        tmp_path / "logs" / "results.xlsx",
        run_metadata=metadata,
        durations={1: 10.0, 2: 30.0},
    )

    workbook = load_workbook(output)
    assert workbook.sheetnames == [ITERATIONS_SHEET_NAME, OVERVIEW_SHEET_NAME, RUN_INFO_SHEET_NAME]

    iterations = workbook[ITERATIONS_SHEET_NAME]
    headers = [cell.value for cell in iterations[1]]
    assert headers[: len(RESULT_COLUMNS)] == list(RESULT_COLUMNS)
    assert headers[-1] == "Execution Time (ms)"
    assert iterations.cell(row=2, column=1).value == 1
    assert iterations.cell(row=3, column=4).value == "BINARY"
    assert iterations.cell(row=3, column=8).value == '["bad map","line 2"]'
    assert iterations.cell(row=3, column=10).value == 30.0

    overview = workbook[OVERVIEW_SHEET_NAME]
    assert overview.cell(row=2, column=3).value == 1
    assert overview.cell(row=2, column=5).value == 50.0

    run_info = {
        row[0].value: row[1].value for row in workbook[RUN_INFO_SHEET_NAME].iter_rows()
    }
    assert run_info["seed"] == 7
    assert run_info["map_file_type"] == "ALL"
    assert run_info["stop_reason"] == "max_iterations"
    assert run_info["total"] == 2
    assert run_info["exit_code_0"] == 1
    assert run_info["exit_code_1"] == 1
    assert run_info["mean_execution_ms"] == 20.0


def test_workbook_without_metadata_or_durations(tmp_path: Path) -> None:
    output = write_results_workbook([], tmp_path / "empty.xlsx")

    run_info = {
        row[0].value: row[1].value
        for row in load_workbook(output)[RUN_INFO_SHEET_NAME].iter_rows()
    }
    assert run_info["total"] == 0
    assert run_info["measured_iterations"] == 0
    assert run_info["min_execution_ms"] is None


def test_html_report_writes_every_page(tmp_path: Path) -> None:
    context = build_report_context(_results(), durations={1: 10.0, 2: 30.0})

    written = write_html_report(context, tmp_path)

    assert set(written) == set(ReportPage)
    for page, path in written.items():
        assert path == (tmp_path / "report" / page.file_name).resolve()
        text = path.read_text(encoding="utf-8")
        assert "<html" in text
        assert "{{" not in text
    welcome = written[ReportPage.WELCOME].read_text(encoding="utf-8")
    assert "Total Number of Iterations: 2" in welcome
