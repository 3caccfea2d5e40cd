"""Descriptions of map file extensions."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FileTypeInfo:
    """Descriptive metadata for one file extension."""

    generic_type: str
    extension: str
    full_name: str
    format_type: str


_KNOWN_FILE_TYPES: dict[str, FileTypeInfo] = {
    info.extension: info
    for info in (
        FileTypeInfo("Text file", ".txt", "Unformatted Text Document", "Text file"),
        FileTypeInfo("Binary file", ".bin", "Binary Data File", "Data file"),
        FileTypeInfo("Text file", ".md", "Markdown Documentation", "Text file"),
        FileTypeInfo("Text file", ".csv", "Comma Separated Values", "Spreadsheet file"),
        FileTypeInfo("Text file", ".xlsx", "Microsoft Excel Document", "Spreadsheet file"),
        FileTypeInfo("Web file", ".html", "Hypertext Markup Language", "Document format"),
        FileTypeInfo("Web file", ".json", "JavaScript Object Notation", "Data file"),
        FileTypeInfo("Compressed data file", ".jar", "Java Archive", "Archive file"),
        FileTypeInfo("Compressed data file", ".zip", "Compressed Files", "Archive file"),
        FileTypeInfo("Executable file", ".exe", "Executable", "Executable file"),
    )
}


def describe_file_type(extension: str) -> FileTypeInfo:
    """Look up ``extension`` (with or without leading dot, any case)."""
    normalized = extension.lower()
    if not normalized.startswith("."):
        normalized = f".{normalized}"
    known = _KNOWN_FILE_TYPES.get(normalized)
    if known is not None:
        return known
    return FileTypeInfo("Unknown file type", normalized, "", "")


def format_file_information(
    info: FileTypeInfo,
    *,
    include_full_name: bool = True,
    include_generic_type: bool = True,
    include_format_type: bool = True,
) -> str:
    """Render ``info`` as e.g. ``Unformatted Text Document (Text file) as Text file``."""
    parts: list[str] = []
    if include_full_name and info.full_name:
        parts.append(info.full_name)
    if include_generic_type:
        parts.append(f"({info.generic_type})")
    if include_format_type and info.format_type:
        parts.append(f"as {info.format_type}")
    return " ".join(parts)
