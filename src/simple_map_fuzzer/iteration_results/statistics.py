"""Pure aggregation functions over iteration results."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from .result_models import IterationResult, ResultField


@dataclass(frozen=True)
class ExecutionTimeSummary:
    """Min, max and mean of the durations that matched an iteration."""

    minimum_ms: float | None
    maximum_ms: float | None
    mean_ms: float | None
    count: int


@dataclass(frozen=True)
class OverviewRow:
    """One distinct (exit code, output messages) outcome and where it occurred."""

    exit_code: int
    output_messages: tuple[str, ...]
    count: int
    iteration_numbers: tuple[int, ...]


def sort_by_iteration(results: Iterable[IterationResult]) -> tuple[IterationResult, ...]:
    return tuple(sorted(results, key=lambda result: result.iteration_number))


def count_by_exit_code(results: Iterable[IterationResult], code: int) -> int:
    """Count the results whose exit code equals ``code``."""
    return sum(1 for result in results if result.exit_code == code)


def exit_code_counts(results: Iterable[IterationResult]) -> dict[int, int]:
    """Count results per exit code, keyed in ascending exit code order."""
    counts = Counter(result.exit_code for result in results)
    return {code: counts[code] for code in sorted(counts)}


def unique_values(results: Iterable[IterationResult], field: ResultField | str) -> frozenset[str]:
    """Return the distinct stringified values of ``field``.

    Raises:
      ValueError: If ``field`` does not name an ``IterationResult`` field.
    """
    selected = ResultField(field)
    return frozenset(result.field_text(selected) for result in results)


def execution_time_summary(
    results: Iterable[IterationResult],
    durations: Mapping[int, float],
) -> ExecutionTimeSummary:
    """Summarize ``durations`` for the iterations present in ``results``.

    Iterations without an entry in ``durations`` are left out, not counted as zero.
    """
    measured = [
        float(durations[result.iteration_number])
        for result in results
        if result.iteration_number in durations
    ]
    if not measured:
        return ExecutionTimeSummary(minimum_ms=None, maximum_ms=None, mean_ms=None, count=0)
    return ExecutionTimeSummary(
        minimum_ms=min(measured),
        maximum_ms=max(measured),
        mean_ms=sum(measured) / len(measured),
        count=len(measured),
    )


def group_by_exit_code(
    results: Iterable[IterationResult],
) -> dict[int, tuple[IterationResult, ...]]:
    grouped: dict[int, list[IterationResult]] = {}
    for result in sort_by_iteration(results):
        grouped.setdefault(result.exit_code, []).append(result)
    return {code: tuple(grouped[code]) for code in sorted(grouped)}


def group_by_output_messages(
    results: Iterable[IterationResult],
) -> dict[tuple[str, ...], tuple[IterationResult, ...]]:
    grouped: dict[tuple[str, ...], list[IterationResult]] = {}
    for result in sort_by_iteration(results):
        grouped.setdefault(result.output_messages, []).append(result)
    return {messages: tuple(grouped[messages]) for messages in sorted(grouped)}


def build_overview_rows(results: Iterable[IterationResult]) -> tuple[OverviewRow, ...]:
    """Collapse results into distinct outcomes, most frequent first."""
    grouped: dict[tuple[int, tuple[str, ...]], list[int]] = {}
    for result in sort_by_iteration(results):
        grouped.setdefault((result.exit_code, result.output_messages), []).append(
            result.iteration_number
        )
    rows = [
        OverviewRow(
            exit_code=exit_code,
            output_messages=messages,
            count=len(iterations),
            iteration_numbers=tuple(iterations),
        )
        for (exit_code, messages), iterations in grouped.items()
    ]
    rows.sort(key=lambda row: (-row.count, row.exit_code, row.iteration_numbers[0]))
    return tuple(rows)


def percentage(part: int, total: int) -> float:
    """Return ``part`` as a percentage of ``total``, rounded to two decimals."""
    if total <= 0:
        return 0.0
    return round(100.0 * part / total, 2)
