"""Iteration results domain exports."""

from .result_models import (
    NOT_AVAILABLE,
    UNKNOWN_ERROR_CODE,
    IterationResult,
    ResultField,
    classify_error_code,
)
from .statistics import (
    ExecutionTimeSummary,
    OverviewRow,
    build_overview_rows,
    count_by_exit_code,
    execution_time_summary,
    exit_code_counts,
    group_by_exit_code,
    group_by_output_messages,
    percentage,
    sort_by_iteration,
    unique_values,
)

__all__ = [
    "NOT_AVAILABLE",
    "UNKNOWN_ERROR_CODE",
    "IterationResult",
    "ResultField",
    "classify_error_code",
    "ExecutionTimeSummary",
    "OverviewRow",
    "build_overview_rows",
    "count_by_exit_code",
    "execution_time_summary",
    "exit_code_counts",
    "group_by_exit_code",
    "group_by_output_messages",
    "percentage",
    "sort_by_iteration",
    "unique_values",
]
