"""Report building domain exports."""

from .csv_report import (
    DURATION_COLUMNS,
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
from .html_report import (
    PLACEHOLDER_PATTERN,
    ReportContext,
    build_page_context,
    build_report_context,
    page_environment,
    render_page,
    render_template,
    write_html_report,
)
from .report_models import REPORT_DIRECTORY_NAME, ReportPage, RunMetadata, report_page_path
from .results_workbook import (
    ITERATIONS_SHEET_NAME,
    OVERVIEW_SHEET_NAME,
    RUN_INFO_SHEET_NAME,
    write_results_workbook,
)

__all__ = [
    "DURATION_COLUMNS",
    "OVERVIEW_COLUMNS",
    "RESULT_COLUMNS",
    "CsvParseError",
    "format_row",
    "parse_row",
    "read_durations_csv",
    "read_results_csv",
    "write_durations_csv",
    "write_overview_csv",
    "write_results_csv",
    "PLACEHOLDER_PATTERN",
    "ReportContext",
    "build_page_context",
    "build_report_context",
    "page_environment",
    "render_page",
    "render_template",
    "write_html_report",
    "REPORT_DIRECTORY_NAME",
    "ReportPage",
    "RunMetadata",
    "report_page_path",
    "ITERATIONS_SHEET_NAME",
    "OVERVIEW_SHEET_NAME",
    "RUN_INFO_SHEET_NAME",
    "write_results_workbook",
]
