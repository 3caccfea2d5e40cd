"""Human-readable labels for formatted fields."""

from __future__ import annotations

from enum import Enum


class FormattedField(str, Enum):
    """Every field the formatters can render."""

    ITERATION_NUMBER = "iteration_number"
    MAP_FILE_NAME = "map_file_name"
    MAP_FILE_PATH = "map_file_path"
    MAP_FILE_RELATIVE_PATH = "map_file_relative_path"
    MAP_FILE_TEXT = "map_file_text"
    MAP_FILE_TYPE = "map_file_type"
    CUSTOM_ATTRIBUTE = "custom_attribute"
    ERROR_CODE = "error_code"
    EXIT_CODE = "exit_code"
    OUTPUT_MESSAGES = "output_messages"
    STRING_SEQUENCE = "string_sequence"
    EXECUTION_TIME = "execution_time"
    EXIT_COUNT = "exit_count"
    TIMESTAMP = "timestamp"
    TOTAL_ITERATIONS = "total_iterations"
    ITERATION_NUMBERS = "iteration_numbers"


FIELD_LABELS: dict[FormattedField, str] = {
    FormattedField.ITERATION_NUMBER: "Iteration Number",
    FormattedField.MAP_FILE_NAME: "Map File Name",
    FormattedField.MAP_FILE_PATH: "Absolute Map File Path",
    FormattedField.MAP_FILE_RELATIVE_PATH: "Relative Map File Path",
    FormattedField.MAP_FILE_TEXT: "Map File Text",
    FormattedField.MAP_FILE_TYPE: "Map File Type",
    FormattedField.CUSTOM_ATTRIBUTE: "Map File Custom Attribute",
    FormattedField.ERROR_CODE: "Error Code",
    FormattedField.EXIT_CODE: "Exit Code",
    FormattedField.OUTPUT_MESSAGES: "Output Messages",
    FormattedField.STRING_SEQUENCE: "Action Sequence",
    FormattedField.EXECUTION_TIME: "Execution Time",
    FormattedField.EXIT_COUNT: "Exit Code Count",
    FormattedField.TIMESTAMP: "Date and Time",
    FormattedField.TOTAL_ITERATIONS: "Total Number of Iterations",
    FormattedField.ITERATION_NUMBERS: "All Iteration Numbers",
}


def field_label(field: FormattedField | str, *, exit_code: int | None = None) -> str:
    """Return the display label of ``field``.

    ``exit_code`` narrows the exit count label, e.g. ``Exit Code 10 Count``.
    """
    selected = FormattedField(field)
    if selected is FormattedField.EXIT_COUNT and exit_code is not None:
        return f"Exit Code {exit_code} Count"
    return FIELD_LABELS[selected]
