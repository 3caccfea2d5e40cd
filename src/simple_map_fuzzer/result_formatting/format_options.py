"""Per-field formatting options and the shared rendering style.

Every toggle defaults to ``True``, which renders a field fully labeled and
fully verbose. Setting one toggle to ``False`` suppresses exactly the aspect it
names and nothing else.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import PurePath

from simple_map_fuzzer.iteration_results.result_models import NOT_AVAILABLE

DEFAULT_EXIT_CODE_LABELS: dict[int, str] = {0: "Success", -1: "Unknown"}


@dataclass(frozen=True)
class FormatStyle:
    """Rendering parameters shared by all fields of one report."""

    separator: str = ","
    placeholder: str = NOT_AVAILABLE
    max_length: int | None = None
    truncation_marker: str = "..."
    base_directory: PurePath | None = None
    exit_code_labels: Mapping[int, str] = field(
        default_factory=lambda: dict(DEFAULT_EXIT_CODE_LABELS)
    )


@dataclass(frozen=True)
class FieldOptions:
    """Toggles shared by every formatted field."""

    include: bool = True
    label: bool = True
    value: bool = True
    separator: bool = True
    keep_delimiters: bool = True
    truncation_marker: bool = True


@dataclass(frozen=True)
class IterationNumberOptions(FieldOptions):
    pass


@dataclass(frozen=True)
class MapFileNameOptions(FieldOptions):
    """``extension``: keep the file extension."""

    extension: bool = True


@dataclass(frozen=True)
class MapFilePathOptions(FieldOptions):
    """``absolute``: keep the full path instead of one relative to the base directory.

    ``forward_slashes``: use ``/`` as path separator instead of ``\\``.
    """

    absolute: bool = True
    forward_slashes: bool = True


@dataclass(frozen=True)
class MapFileTypeOptions(FieldOptions):
    """``uppercase``: upper-case type name. ``describe``: append the file type description."""

    uppercase: bool = True
    describe: bool = True


@dataclass(frozen=True)
class TokenTextOptions(FieldOptions):
    """Options for fields made of single-character tokens.

    ``full_text``: spell out every known token. ``show_unknown``: keep tokens
    outside the known alphabet instead of masking them with ``?``.
    ``capitalized``: keep the original letter case.
    """

    full_text: bool = True
    show_unknown: bool = True
    capitalized: bool = True


@dataclass(frozen=True)
class StringSequenceOptions(TokenTextOptions):
    pass


@dataclass(frozen=True)
class MapFileTextOptions(TokenTextOptions):
    pass


@dataclass(frozen=True)
class CustomAttributeOptions(FieldOptions):
    """``describe_blank``: describe a blank attribute instead of rendering the placeholder."""

    describe_blank: bool = True


@dataclass(frozen=True)
class CodeOptions(FieldOptions):
    """``as_text``: prefix the code with its configured label, e.g. ``Success [0]``."""

    as_text: bool = True


@dataclass(frozen=True)
class OutputMessagesOptions(FieldOptions):
    pass


@dataclass(frozen=True)
class ExecutionTimeOptions(FieldOptions):
    pass


@dataclass(frozen=True)
class ExitCountOptions(FieldOptions):
    """``as_text``: append ``occurrences`` to the count."""

    as_text: bool = True


@dataclass(frozen=True)
class TimestampOptions(FieldOptions):
    pass


@dataclass(frozen=True)
class TotalIterationsOptions(FieldOptions):
    pass


@dataclass(frozen=True)
class IterationNumbersOptions(FieldOptions):
    pass
