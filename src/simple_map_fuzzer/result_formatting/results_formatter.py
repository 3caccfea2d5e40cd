"""Render views that span several iteration results."""

from __future__ import annotations

from collections.abc import Sequence

from simple_map_fuzzer.iteration_results.result_models import IterationResult
from simple_map_fuzzer.iteration_results.statistics import count_by_exit_code

from .field_labels import FormattedField
from .format_options import (
    ExitCountOptions,
    FormatStyle,
    IterationNumbersOptions,
    TotalIterationsOptions,
)
from .result_formatter import ResultFormatter

ITERATION_NUMBER_JOINER = "-"


class ResultsFormatter:
    """Format aggregated fields over a list of results, keeping input order."""

    def __init__(self, style: FormatStyle | None = None) -> None:
        self._formatter = ResultFormatter(style)

    @property
    def style(self) -> FormatStyle:
        return self._formatter.style

    def iteration_numbers(
        self,
        results: Sequence[IterationResult],
        options: IterationNumbersOptions | None = None,
    ) -> str:
        """Join iteration numbers with ``-``, e.g. ``3-7-12``."""
        joined = ITERATION_NUMBER_JOINER.join(str(result.iteration_number) for result in results)
        return self._formatter.render_field(
            FormattedField.ITERATION_NUMBERS, joined, options or IterationNumbersOptions()
        )

    def exit_count(
        self,
        results: Sequence[IterationResult],
        exit_code: int,
        options: ExitCountOptions | None = None,
    ) -> str:
        return self._formatter.exit_count(
            exit_code, count_by_exit_code(results, exit_code), options
        )

    def total_iterations(
        self,
        results: Sequence[IterationResult],
        options: TotalIterationsOptions | None = None,
    ) -> str:
        return self._formatter.total_iterations(len(results), options)
