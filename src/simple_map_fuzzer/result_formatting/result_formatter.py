"""Render single iteration-result fields into text fragments."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from pathlib import PurePath, PurePosixPath

from simple_map_fuzzer.artifact_generation.artifact_models import MapFileType
from simple_map_fuzzer.artifact_generation.generator_settings import ACTION_NAMES, MAP_CELL_NAMES
from simple_map_fuzzer.iteration_results.result_models import IterationResult

from .field_labels import FormattedField, field_label
from .file_types import describe_file_type, format_file_information
from .format_options import (
    CodeOptions,
    CustomAttributeOptions,
    ExecutionTimeOptions,
    ExitCountOptions,
    FieldOptions,
    FormatStyle,
    IterationNumberOptions,
    MapFileNameOptions,
    MapFilePathOptions,
    MapFileTextOptions,
    MapFileTypeOptions,
    OutputMessagesOptions,
    StringSequenceOptions,
    TimestampOptions,
    TokenTextOptions,
    TotalIterationsOptions,
)

BLANK_ATTRIBUTE_DESCRIPTION = "Empty or blank string."
TIMESTAMP_FORMAT = "%d-%m-%Y %H:%M"
UNKNOWN_TOKEN = "?"


class ResultFormatter:
    """Format the fields of one ``IterationResult``.

    Every method is a pure function of its value, its options and the
    formatter's ``FormatStyle``. Missing or empty values render the style's
    placeholder instead of failing.
    """

    def __init__(self, style: FormatStyle | None = None) -> None:
        self._style = style or FormatStyle()

    @property
    def style(self) -> FormatStyle:
        return self._style

    def iteration_number(
        self, result: IterationResult, options: IterationNumberOptions | None = None
    ) -> str:
        return self.render_field(
            FormattedField.ITERATION_NUMBER,
            str(result.iteration_number),
            options or IterationNumberOptions(),
        )

    def map_file_name(
        self, result: IterationResult, options: MapFileNameOptions | None = None
    ) -> str:
        resolved = options or MapFileNameOptions()
        name = result.map_file_name
        if name and not resolved.extension:
            name = PurePosixPath(name).stem
        return self.render_field(FormattedField.MAP_FILE_NAME, name, resolved)

    def map_file_path(
        self, result: IterationResult, options: MapFilePathOptions | None = None
    ) -> str:
        resolved = options or MapFilePathOptions()
        path = result.map_file_path.replace("\\", "/")
        label = FormattedField.MAP_FILE_PATH
        if path and not resolved.absolute:
            label = FormattedField.MAP_FILE_RELATIVE_PATH
            path = _relative_to(path, self._style.base_directory)
        if path and not resolved.forward_slashes:
            path = path.replace("/", "\\")
        return self.render_field(label, path, resolved)

    def map_file_text(self, text: str | None, options: MapFileTextOptions | None = None) -> str:
        """Format the stored text of a map; ``None`` for maps without text."""
        resolved = options or MapFileTextOptions()
        rendered = None
        if text:
            rendered = _render_tokens(text.rstrip("\n"), MAP_CELL_NAMES, resolved)
        return self.render_field(FormattedField.MAP_FILE_TEXT, rendered, resolved)

    def map_file_type(
        self, result: IterationResult, options: MapFileTypeOptions | None = None
    ) -> str:
        resolved = options or MapFileTypeOptions()
        kind = result.map_file_type
        name = kind.value if resolved.uppercase else kind.value.lower()
        if resolved.describe and kind is not MapFileType.ALL:
            description = format_file_information(describe_file_type(kind.extension))
            name = f"{name} [{description}]"
        return self.render_field(FormattedField.MAP_FILE_TYPE, name, resolved)

    def custom_attribute(
        self, result: IterationResult, options: CustomAttributeOptions | None = None
    ) -> str:
        """Blank attributes render a description, or the placeholder without ``describe_blank``."""
        resolved = options or CustomAttributeOptions()
        attribute: str | None = result.custom_attribute
        if not (attribute or "").strip():
            attribute = BLANK_ATTRIBUTE_DESCRIPTION if resolved.describe_blank else None
        return self.render_field(FormattedField.CUSTOM_ATTRIBUTE, attribute, resolved)

    def error_code(self, result: IterationResult, options: CodeOptions | None = None) -> str:
        resolved = options or CodeOptions()
        return self.render_field(
            FormattedField.ERROR_CODE, self._code_text(result.error_code, resolved), resolved
        )

    def exit_code(self, result: IterationResult, options: CodeOptions | None = None) -> str:
        resolved = options or CodeOptions()
        return self.render_field(
            FormattedField.EXIT_CODE, self._code_text(result.exit_code, resolved), resolved
        )

    def output_messages(
        self, result: IterationResult, options: OutputMessagesOptions | None = None
    ) -> str:
        return self.render_field(
            FormattedField.OUTPUT_MESSAGES,
            "; ".join(result.output_messages),
            options or OutputMessagesOptions(),
        )

    def string_sequence(
        self, result: IterationResult, options: StringSequenceOptions | None = None
    ) -> str:
        resolved = options or StringSequenceOptions()
        return self.render_field(
            FormattedField.STRING_SEQUENCE,
            _render_tokens(result.string_sequence, ACTION_NAMES, resolved),
            resolved,
        )

    def execution_time(
        self, elapsed_ms: float | None, options: ExecutionTimeOptions | None = None
    ) -> str:
        """Format an elapsed time as ``mm:ss``."""
        text = None
        if elapsed_ms is not None and elapsed_ms >= 0:
            minutes, seconds = divmod(int(elapsed_ms // 1000), 60)
            text = f"{minutes:02d}:{seconds:02d}"
        return self.render_field(
            FormattedField.EXECUTION_TIME, text, options or ExecutionTimeOptions()
        )

    def exit_count(
        self, exit_code: int, count: int, options: ExitCountOptions | None = None
    ) -> str:
        resolved = options or ExitCountOptions()
        text = f"{count} occurrences" if resolved.as_text else str(count)
        label = field_label(FormattedField.EXIT_COUNT, exit_code=exit_code)
        return self.render_field(FormattedField.EXIT_COUNT, text, resolved, label=label)

    def timestamp(self, moment: datetime | None, options: TimestampOptions | None = None) -> str:
        text = moment.strftime(TIMESTAMP_FORMAT) if moment is not None else None
        return self.render_field(FormattedField.TIMESTAMP, text, options or TimestampOptions())

    def total_iterations(self, total: int, options: TotalIterationsOptions | None = None) -> str:
        return self.render_field(
            FormattedField.TOTAL_ITERATIONS, str(total), options or TotalIterationsOptions()
        )

    def render_field(
        self,
        field: FormattedField,
        value: str | None,
        options: FieldOptions,
        *,
        label: str | None = None,
    ) -> str:
        """Assemble ``<Label>: <value><separator>`` according to the common toggles.

        A value that is empty once its delimiters are stripped renders the placeholder.
        """
        if not options.include:
            return ""
        style = self._style
        text = value if value else style.placeholder
        if not options.keep_delimiters:
            text = _strip_delimiters(text, style.separator)
        text = _truncate(text, style, with_marker=options.truncation_marker)
        if not text:
            text = style.placeholder

        parts: list[str] = []
        if options.label:
            parts.append(f"{label or field_label(field)}: ")
        if options.value:
            parts.append(text)
        if options.separator:
            parts.append(style.separator)
        return "".join(parts)

    def _code_text(self, code: int, options: CodeOptions) -> str:
        label = self._style.exit_code_labels.get(code)
        if options.as_text and label:
            return f"{label} [{code}]"
        return str(code)


def _render_tokens(text: str, names: Mapping[str, str], options: TokenTextOptions) -> str:
    joiner = " " if options.full_text else ""
    lines = []
    for line in text.split("\n"):
        tokens = []
        for token in line:
            if token not in names and not options.show_unknown:
                tokens.append(UNKNOWN_TOKEN)
            elif token in names and options.full_text:
                tokens.append(names[token])
            else:
                tokens.append(token)
        lines.append(joiner.join(tokens))
    rendered = "\n".join(lines)
    return rendered if options.capitalized else rendered.lower()


def _relative_to(path: str, base_directory: PurePath | None) -> str:
    if base_directory is None:
        return path
    base = PurePosixPath(str(base_directory).replace("\\", "/"))
    try:
        return str(PurePosixPath(path).relative_to(base))
    except ValueError:
        return path


def _strip_delimiters(text: str, separator: str) -> str:
    stripped = text.replace("\r", "").replace("\n", "")
    if separator:
        stripped = stripped.replace(separator, "")
    return stripped


def _truncate(text: str, style: FormatStyle, *, with_marker: bool) -> str:
    if style.max_length is None or len(text) <= style.max_length:
        return text
    cut = text[: style.max_length]
    return f"{cut}{style.truncation_marker}" if with_marker else cut
