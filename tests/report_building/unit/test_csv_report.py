"""CSV sink and parser tests."""

from __future__ import annotations

import csv
from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st
from simple_map_fuzzer.artifact_generation import MapFileType
from simple_map_fuzzer.iteration_results import IterationResult
from simple_map_fuzzer.report_building import (
    OVERVIEW_COLUMNS,
    RESULT_COLUMNS,
    CsvParseError,
    format_row,
    parse_row,
    read_durations_csv,
    read_results_csv,
    write_durations_csv,
    write_overview_csv,
    write_results_csv,
)

_cell_text = st.text(
    alphabet=st.characters(blacklist_categories=("Cs", "Cc")) | st.sampled_from(',";\n\r'),
    max_size=30,
)


def _result(iteration_number: int, **overrides) -> IterationResult:
    values = {
        "iteration_number": iteration_number,
        "map_file_name": f"map_{iteration_number}.txt",
        "map_file_path": f"/runs/maps/map_{iteration_number}.txt",
        "map_file_type": MapFileType.TEXT,
        "string_sequence": "SULE",
        "exit_code": 0,
        "error_code": 0,
        "output_messages": (),
    }
    values.update(overrides)
    return IterationResult(**values)


def test_output_messages_with_separator_survive_round_trip() -> None:
    result = _result(1, output_messages=("a,b", "c"))

    row = format_row(result)

    assert parse_row(row) == result
    assert parse_row(row).output_messages == ("a,b", "c")


@pytest.mark.parametrize("value", ["MW\rP", "\r", "S\r\nU", "a\n\rb"])
def test_carriage_returns_in_cells_survive_round_trip(value: str) -> None:
    result = _result(1, string_sequence=value, custom_attribute=value, output_messages=(value,))

    assert parse_row(format_row(result)) == result


def test_carriage_returns_survive_results_file_round_trip(tmp_path: Path) -> None:
    results = (_result(1, custom_attribute="MW\rP"), _result(2, string_sequence="S\rU"))

    written = write_results_csv(results, tmp_path / "results.csv")

    assert read_results_csv(written) == results


@given(
    iteration_number=st.integers(min_value=0, max_value=10**6),
    exit_code=st.integers(min_value=-(2**31), max_value=2**31 - 1),
    kind=st.sampled_from(list(MapFileType)),
    sequence=_cell_text,
    messages=st.lists(_cell_text, max_size=4),
    attribute=_cell_text,
)
def test_format_and_parse_are_inverse(
    iteration_number: int,
    exit_code: int,
    kind: MapFileType,
    sequence: str,
    messages: list[str],
    attribute: str,
) -> None:
    result = _result(
        iteration_number,
        map_file_type=kind,
        string_sequence=sequence,
        exit_code=exit_code,
        error_code=-1,
        output_messages=tuple(messages),
        custom_attribute=attribute,
    )

    assert parse_row(format_row(result)) == result


@pytest.mark.parametrize(
    "row",
    [
        '1,"map_1.txt',
        "1,2,3",
        'x,map_1.txt,/p,TEXT,SULE,0,0,[],N.A.',
        "1,map_1.txt,/p,TEXT,SULE,0,0,not-json,N.A.",
        '1,map_1.txt,/p,TEXT,SULE,0,0,"[1,2]",N.A.',
        "1,map_1.txt,/p,SOUND,SULE,0,0,[],N.A.",
    ],
)
def test_malformed_rows_raise_parse_error_with_row(row: str) -> None:
    with pytest.raises(CsvParseError) as excinfo:
        parse_row(row)

    assert excinfo.value.row == row


def test_results_csv_is_written_in_iteration_order_and_read_back(tmp_path: Path) -> None:
    results = [
        _result(2, exit_code=1, error_code=1, output_messages=("line one", "x,y")),
        _result(1, custom_attribute="MWP\nF0M"),
    ]

    written = write_results_csv(results, tmp_path / "logs" / "results.csv")

    with written.open(encoding="utf-8", newline="") as handle:
        rows = list(csv.reader(handle))
    assert tuple(rows[0]) == RESULT_COLUMNS
    assert [row[0] for row in rows[1:]] == ["1", "2"]
    assert read_results_csv(written) == (results[1], results[0])


def test_reading_csv_with_wrong_header_fails(tmp_path: Path) -> None:
    path = tmp_path / "results.csv"
    path.write_text("a,b\n1,2\n", encoding="utf-8")

    with pytest.raises(CsvParseError, match="header"):
        read_results_csv(path)


def test_reading_csv_with_unbalanced_quote_fails(tmp_path: Path) -> None:
    path = tmp_path / "results.csv"
    header = ",".join(RESULT_COLUMNS)
    path.write_text(f'{header}\n1,"map_1.txt\n', encoding="utf-8")

    with pytest.raises(CsvParseError):
        read_results_csv(path)


def test_overview_csv_groups_outcomes(tmp_path: Path) -> None:
    results = [
        _result(1, exit_code=1, output_messages=("crash",)),
        _result(2),
        _result(3, exit_code=1, output_messages=("crash",)),
        _result(4, exit_code=1, output_messages=("crash",)),
    ]

    written = write_overview_csv(results, tmp_path / "overview.csv")

    with written.open(encoding="utf-8", newline="") as handle:
        rows = list(csv.reader(handle))
    assert tuple(rows[0]) == OVERVIEW_COLUMNS
    assert rows[1] == ["1", '["crash"]', "3", "1-3-4"]
    assert rows[2] == ["0", "[]", "1", "2"]


def test_durations_round_trip(tmp_path: Path) -> None:
    written = write_durations_csv({2: 12.5, 1: 3.25}, tmp_path / "durations.csv")

    assert read_durations_csv(written) == {1: 3.25, 2: 12.5}


def test_malformed_durations_raise_parse_error(tmp_path: Path) -> None:
    path = tmp_path / "durations.csv"
    path.write_text("Iteration Number,Execution Time (ms)\n1,fast\n", encoding="utf-8")

    with pytest.raises(CsvParseError):
        read_durations_csv(path)
