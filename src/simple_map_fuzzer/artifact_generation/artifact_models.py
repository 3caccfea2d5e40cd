"""Artifact generation entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class InvalidConfiguration(ValueError):
    """Raised when a generator is constructed with contradictory or out-of-range bounds."""


class EncodingError(Exception):
    """Raised when binary map bytes cannot be built or do not survive their round trip."""


class MapFileType(str, Enum):
    """Kind of generated map. ``ALL`` selects text or binary per generated map."""

    TEXT = "TEXT"
    BINARY = "BINARY"
    ALL = "ALL"

    @property
    def extension(self) -> str:
        if self is MapFileType.TEXT:
            return ".txt"
        if self is MapFileType.BINARY:
            return ".bin"
        raise ValueError("MapFileType.ALL has no file extension.")


class TextMapMode(str, Enum):
    """Mutually exclusive row layouts for generated text maps."""

    RECTANGULAR = "rectangular"
    ONE_LINE = "one_line"
    JAGGED = "jagged"


@dataclass(frozen=True)
class Artifact:
    """One generated map.

    Text maps carry their grid rows in ``rows``. Binary maps carry the raw
    bytes in ``data`` and the stored form in ``encoded``.
    """

    kind: MapFileType
    source_name: str
    rows: tuple[str, ...] = ()
    data: bytes = b""
    encoded: bytes = b""

    @property
    def width(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def is_rectangular(self) -> bool:
        return len({len(row) for row in self.rows}) <= 1

    def stored_bytes(self) -> bytes:
        """Return the exact bytes written to storage for this artifact."""
        if self.kind is MapFileType.TEXT:
            return "".join(f"{row}\n" for row in self.rows).encode("utf-8")
        return self.encoded


@dataclass(frozen=True)
class ActionSequence:
    """Ordered action tokens handed to the subject program."""

    actions: tuple[str, ...]

    def __str__(self) -> str:
        return "".join(self.actions)

    def __len__(self) -> int:
        return len(self.actions)
