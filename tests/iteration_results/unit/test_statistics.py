"""Statistics aggregator tests."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st
from simple_map_fuzzer.artifact_generation import MapFileType
from simple_map_fuzzer.iteration_results import (
    IterationResult,
    ResultField,
    build_overview_rows,
    classify_error_code,
    count_by_exit_code,
    execution_time_summary,
    exit_code_counts,
    group_by_exit_code,
    group_by_output_messages,
    percentage,
    sort_by_iteration,
    unique_values,
)


def _result(
    iteration_number: int,
    exit_code: int = 0,
    messages: tuple[str, ...] = (),
    kind: MapFileType = MapFileType.TEXT,
) -> IterationResult:
    return IterationResult(
        iteration_number=iteration_number,
        map_file_name=f"map_{iteration_number}{kind.extension}",
        map_file_path=f"/runs/maps/map_{iteration_number}{kind.extension}",
        map_file_type=kind,
        string_sequence="SULE",
        exit_code=exit_code,
        error_code=exit_code,
        output_messages=messages,
    )


def test_count_by_exit_code_counts_matching_results() -> None:
    results = [_result(number, code) for number, code in enumerate([0, 0, 1, 2, 0], start=1)]

    assert count_by_exit_code(results, 0) == 3
    assert count_by_exit_code(results, 2) == 1
    assert count_by_exit_code(results, 7) == 0
    assert count_by_exit_code([], 0) == 0


def test_exit_code_counts_are_keyed_in_ascending_order() -> None:
    results = [_result(1, 10), _result(2, -1), _result(3, 10), _result(4, 0)]

    counts = exit_code_counts(results)

    assert counts == {-1: 1, 0: 1, 10: 2}
    assert list(counts) == [-1, 0, 10]


def test_unique_values_stringifies_fields() -> None:
    results = [
        _result(1, 0, ("ok",)),
        _result(2, 1, ("boom", "trace")),
        _result(3, 0, ("ok",), MapFileType.BINARY),
    ]

    assert unique_values(results, ResultField.EXIT_CODE) == frozenset({"0", "1"})
    assert unique_values(results, "output_messages") == frozenset({"ok", "boom; trace"})
    assert unique_values(results, ResultField.MAP_FILE_TYPE) == frozenset({"TEXT", "BINARY"})


def test_unique_values_rejects_unknown_field() -> None:
    with pytest.raises(ValueError):
        unique_values([_result(1)], "not_a_field")


def test_execution_time_summary_ignores_unmeasured_iterations() -> None:
    results = [_result(1), _result(2), _result(3)]

    summary = execution_time_summary(results, {1: 10.0, 3: 30.0, 99: 1000.0})

    assert summary.minimum_ms == 10.0
    assert summary.maximum_ms == 30.0
    assert summary.mean_ms == 20.0
    assert summary.count == 2


def test_execution_time_summary_of_nothing_is_empty() -> None:
    summary = execution_time_summary([], {})

    assert summary.count == 0
    assert summary.minimum_ms is None
    assert summary.mean_ms is None


def test_grouping_keeps_iteration_order_inside_groups() -> None:
    results = [_result(3, 1, ("b",)), _result(1, 0, ("a",)), _result(2, 1, ("a",))]

    by_code = group_by_exit_code(results)
    by_messages = group_by_output_messages(results)

    assert list(by_code) == [0, 1]
    assert [result.iteration_number for result in by_code[1]] == [2, 3]
    assert [result.iteration_number for result in by_messages[("a",)]] == [1, 2]


def test_overview_rows_are_ordered_by_frequency() -> None:
    results = [
        _result(1, 1, ("crash",)),
        _result(2, 0, ("ok",)),
        _result(3, 0, ("ok",)),
        _result(4, 1, ("crash",)),
        _result(5, 0, ("ok",)),
        _result(6, 10, ()),
    ]

    rows = build_overview_rows(results)

    assert [(row.exit_code, row.count) for row in rows] == [(0, 3), (1, 2), (10, 1)]
    assert rows[0].iteration_numbers == (2, 3, 5)
    assert rows[1].output_messages == ("crash",)


def test_percentage_handles_empty_total() -> None:
    assert percentage(1, 3) == 33.33
    assert percentage(0, 0) == 0.0


def test_classify_error_code() -> None:
    kwargs = {"success_exit_codes": (0,), "known_exit_codes": (0, 1, 10)}

    assert classify_error_code(0, **kwargs) == 0
    assert classify_error_code(10, **kwargs) == 10
    assert classify_error_code(137, **kwargs) == -1


@given(
    st.lists(st.integers(min_value=-1, max_value=3), max_size=40),
    st.randoms(use_true_random=False),
)
def test_aggregation_does_not_depend_on_input_order(codes: list[int], rng) -> None:
    results = [_result(number, code, (f"m{code}",)) for number, code in enumerate(codes, 1)]
    shuffled = list(results)
    rng.shuffle(shuffled)

    assert exit_code_counts(shuffled) == exit_code_counts(results)
    assert build_overview_rows(shuffled) == build_overview_rows(results)
    assert sort_by_iteration(shuffled) == tuple(results)
    for code in range(-1, 4):
        assert count_by_exit_code(shuffled, code) == codes.count(code)
