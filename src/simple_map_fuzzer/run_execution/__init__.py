"""Run execution domain exports."""

from .fuzz_run_use_case import (
    STOP_MAX_ITERATIONS,
    STOP_MAX_TIME,
    RunExecutionError,
    execute_fuzz_run,
    rebuild_report,
)
from .run_contracts import (
    ReportOutcome,
    ReportRequest,
    RunLayout,
    RunOutcome,
    RunRequest,
    SubjectOutcome,
)
from .subject_runner import SubjectRunner, SubprocessSubjectRunner, output_lines

__all__ = [
    "RunRequest",
    "RunOutcome",
    "RunLayout",
    "ReportRequest",
    "ReportOutcome",
    "SubjectOutcome",
    "SubjectRunner",
    "SubprocessSubjectRunner",
    "output_lines",
    "RunExecutionError",
    "STOP_MAX_ITERATIONS",
    "STOP_MAX_TIME",
    "execute_fuzz_run",
    "rebuild_report",
]
