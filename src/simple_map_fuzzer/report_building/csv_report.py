"""CSV sink and parser for iteration results."""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

from simple_map_fuzzer.artifact_generation.artifact_models import MapFileType
from simple_map_fuzzer.iteration_results.result_models import IterationResult
from simple_map_fuzzer.iteration_results.statistics import build_overview_rows, sort_by_iteration

RESULT_COLUMNS: tuple[str, ...] = (
    "Iteration Number",
    "Map File Name",
    "Absolute Map File Path",
    "Map File Type",
    "Action Sequence",
    "Exit Code",
    "Error Code",
    "Output Messages",
    "Map File Custom Attribute",
)
OVERVIEW_COLUMNS: tuple[str, ...] = (
    "Exit Code",
    "Output Messages",
    "Count",
    "All Iteration Numbers",
)
DURATION_COLUMNS: tuple[str, ...] = ("Iteration Number", "Execution Time (ms)")


class CsvParseError(ValueError):
    """Raised when a CSV row cannot be turned back into an ``IterationResult``."""

    def __init__(self, message: str, *, row: str) -> None:
        super().__init__(f"{message}: {row!r}")
        self.row = row


def format_row(result: IterationResult) -> str:
    """Render ``result`` as one CSV record without a line terminator.

    Every cell is quoted, so carriage returns and newlines inside values
    survive on every supported interpreter.
    """
    return _join_cells(_result_cells(result))


def parse_row(row: str) -> IterationResult:
    """Parse a record produced by ``format_row``.

    Raises:
      CsvParseError: On unbalanced quotes, a wrong column count, or malformed cells.
    """
    try:
        records = list(csv.reader(io.StringIO(row), strict=True))
    except csv.Error as exc:
        raise CsvParseError(f"Malformed CSV record ({exc})", row=row) from exc
    if len(records) != 1:
        raise CsvParseError(f"Expected exactly one CSV record, found {len(records)}", row=row)
    return _result_from_cells(records[0], row=row)


def write_results_csv(results: Iterable[IterationResult], output_path: Path | str) -> Path:
    """Write the header and one row per result, in iteration-number order."""
    rows = [_result_cells(result) for result in sort_by_iteration(results)]
    return _write_csv(output_path, RESULT_COLUMNS, rows)


def read_results_csv(input_path: Path | str) -> tuple[IterationResult, ...]:
    """Read a results CSV written by ``write_results_csv``.

    Raises:
      CsvParseError: If the header or any row is malformed.
      OSError: If the file cannot be read.
    """
    with Path(input_path).open(encoding="utf-8", newline="") as handle:
        text = handle.read()
    physical_lines = text.splitlines()
    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    results: list[IterationResult] = []
    try:
        header = next(reader, None)
        if header is None or tuple(header) != RESULT_COLUMNS:
            raise CsvParseError("Unexpected results header", row=_join_cells(header or []))
        for record in reader:
            results.append(_result_from_cells(record, row=_join_cells(record)))
    except csv.Error as exc:
        offending = physical_lines[reader.line_num - 1] if reader.line_num else ""
        raise CsvParseError(
            f"Malformed CSV record near line {reader.line_num} ({exc})", row=offending
        ) from exc
    return tuple(results)


def write_overview_csv(results: Iterable[IterationResult], output_path: Path | str) -> Path:
    """Write one row per distinct (exit code, output messages) outcome, most frequent first."""
    rows = [
        [
            str(row.exit_code),
            _encode_messages(row.output_messages),
            str(row.count),
            "-".join(str(number) for number in row.iteration_numbers),
        ]
        for row in build_overview_rows(results)
    ]
    return _write_csv(output_path, OVERVIEW_COLUMNS, rows)


def write_durations_csv(durations: Mapping[int, float], output_path: Path | str) -> Path:
    rows = [[str(number), f"{durations[number]:.3f}"] for number in sorted(durations)]
    return _write_csv(output_path, DURATION_COLUMNS, rows)


def read_durations_csv(input_path: Path | str) -> dict[int, float]:
    """Read iteration durations; raises ``CsvParseError`` on malformed rows."""
    with Path(input_path).open(encoding="utf-8", newline="") as handle:
        reader = csv.reader(handle, strict=True)
        next(reader, None)
        durations: dict[int, float] = {}
        for record in reader:
            if len(record) != len(DURATION_COLUMNS):
                raise CsvParseError("Unexpected duration column count", row=_join_cells(record))
            try:
                durations[int(record[0])] = float(record[1])
            except ValueError as exc:
                raise CsvParseError("Malformed duration row", row=_join_cells(record)) from exc
    return durations


def _result_cells(result: IterationResult) -> list[str]:
    return [
        str(result.iteration_number),
        result.map_file_name,
        result.map_file_path,
        result.map_file_type.value,
        result.string_sequence,
        str(result.exit_code),
        str(result.error_code),
        _encode_messages(result.output_messages),
        result.custom_attribute,
    ]


def _result_from_cells(cells: Sequence[str], *, row: str) -> IterationResult:
    if len(cells) != len(RESULT_COLUMNS):
        raise CsvParseError(
            f"Expected {len(RESULT_COLUMNS)} columns, found {len(cells)}", row=row
        )
    (
        iteration_number,
        map_file_name,
        map_file_path,
        map_file_type,
        string_sequence,
        exit_code,
        error_code,
        output_messages,
        custom_attribute,
    ) = cells
    try:
        return IterationResult(
            iteration_number=int(iteration_number),
            map_file_name=map_file_name,
            map_file_path=map_file_path,
            map_file_type=MapFileType(map_file_type),
            string_sequence=string_sequence,
            exit_code=int(exit_code),
            error_code=int(error_code),
            output_messages=_decode_messages(output_messages),
            custom_attribute=custom_attribute,
        )
    except ValueError as exc:
        raise CsvParseError(f"Malformed result cell ({exc})", row=row) from exc


def _encode_messages(messages: Sequence[str]) -> str:
    return json.dumps(list(messages), ensure_ascii=False, separators=(",", ":"))


def _decode_messages(cell: str) -> tuple[str, ...]:
    decoded = json.loads(cell)
    if not isinstance(decoded, list) or not all(isinstance(item, str) for item in decoded):
        raise ValueError("output messages must be a JSON array of strings")
    return tuple(decoded)


def _join_cells(cells: Sequence[str]) -> str:
    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="", quoting=csv.QUOTE_ALL).writerow(cells)
    return buffer.getvalue()


def _write_csv(
    output_path: Path | str, header: Sequence[str], rows: Iterable[Sequence[str]]
) -> Path:
    destination = Path(output_path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    with destination.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle, lineterminator="\n", quoting=csv.QUOTE_ALL)
        writer.writerow(header)
        writer.writerows(rows)
    return destination.resolve()
