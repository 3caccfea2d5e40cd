"""Iteration result entities."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from enum import Enum

from simple_map_fuzzer.artifact_generation.artifact_models import MapFileType

NOT_AVAILABLE = "N.A."
UNKNOWN_ERROR_CODE = -1


class ResultField(str, Enum):
    """Selectable fields of an ``IterationResult``."""

    ITERATION_NUMBER = "iteration_number"
    MAP_FILE_NAME = "map_file_name"
    MAP_FILE_PATH = "map_file_path"
    MAP_FILE_TYPE = "map_file_type"
    STRING_SEQUENCE = "string_sequence"
    EXIT_CODE = "exit_code"
    ERROR_CODE = "error_code"
    OUTPUT_MESSAGES = "output_messages"
    CUSTOM_ATTRIBUTE = "custom_attribute"


@dataclass(frozen=True)
class IterationResult:  # pylint: disable=too-many-instance-attributes
    """Outcome of one generate, execute and record cycle."""

    iteration_number: int
    map_file_name: str
    map_file_path: str
    map_file_type: MapFileType
    string_sequence: str
    exit_code: int
    error_code: int
    output_messages: tuple[str, ...] = ()
    custom_attribute: str = NOT_AVAILABLE

    def field_text(self, field: ResultField | str) -> str:
        """Return the stringified value of ``field``; output messages are joined with ``"; "``."""
        selected = ResultField(field)
        if selected is ResultField.OUTPUT_MESSAGES:
            return "; ".join(self.output_messages)
        if selected is ResultField.MAP_FILE_TYPE:
            return self.map_file_type.value
        return str(getattr(self, selected.value))


def classify_error_code(
    exit_code: int,
    *,
    success_exit_codes: Collection[int],
    known_exit_codes: Collection[int],
) -> int:
    """Map a subject exit code to its error code.

    Success codes map to ``0``. Known codes map to themselves. Everything else
    maps to ``UNKNOWN_ERROR_CODE``.
    """
    if exit_code in success_exit_codes:
        return 0
    if exit_code in known_exit_codes:
        return exit_code
    return UNKNOWN_ERROR_CODE
