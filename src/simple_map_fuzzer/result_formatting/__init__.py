"""Result formatting domain exports."""

from .field_labels import FIELD_LABELS, FormattedField, field_label
from .file_types import FileTypeInfo, describe_file_type, format_file_information
from .format_options import (
    DEFAULT_EXIT_CODE_LABELS,
    CodeOptions,
    CustomAttributeOptions,
    ExecutionTimeOptions,
    ExitCountOptions,
    FieldOptions,
    FormatStyle,
    IterationNumberOptions,
    IterationNumbersOptions,
    MapFileNameOptions,
    MapFilePathOptions,
    MapFileTextOptions,
    MapFileTypeOptions,
    OutputMessagesOptions,
    StringSequenceOptions,
    TimestampOptions,
    TotalIterationsOptions,
)
from .result_formatter import ResultFormatter
from .results_formatter import ResultsFormatter

__all__ = [
    "FIELD_LABELS",
    "FormattedField",
    "field_label",
    "FileTypeInfo",
    "describe_file_type",
    "format_file_information",
    "DEFAULT_EXIT_CODE_LABELS",
    "FormatStyle",
    "FieldOptions",
    "CodeOptions",
    "CustomAttributeOptions",
    "ExecutionTimeOptions",
    "ExitCountOptions",
    "IterationNumberOptions",
    "IterationNumbersOptions",
    "MapFileNameOptions",
    "MapFilePathOptions",
    "MapFileTextOptions",
    "MapFileTypeOptions",
    "OutputMessagesOptions",
    "StringSequenceOptions",
    "TimestampOptions",
    "TotalIterationsOptions",
    "ResultFormatter",
    "ResultsFormatter",
]
