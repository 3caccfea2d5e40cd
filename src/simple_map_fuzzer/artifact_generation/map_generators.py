"""Random text and binary map generators."""

from __future__ import annotations

import itertools
import random
from typing import Protocol

from .artifact_models import (
    Artifact,
    EncodingError,
    InvalidConfiguration,
    MapFileType,
    TextMapMode,
)
from .binary_codec import encode_verified, hint_to_bytes
from .generator_settings import BinaryMapSettings, GenerationSettings, TextMapSettings


class MapGenerator(Protocol):
    """Shared capability of the text and binary map generators."""

    def generate_random_map(self) -> Artifact: ...

    def generate_custom_map(self, source_hint: str) -> Artifact: ...


class MapFileNamer:
    """Hands out collision-free map file names within one run."""

    def __init__(self, prefix: str = "map_", start: int = 1) -> None:
        self._prefix = prefix
        self._counter = itertools.count(start)

    def next_name(self, kind: MapFileType) -> str:
        return f"{self._prefix}{next(self._counter)}{kind.extension}"


class TextMapGenerator:
    """Generate text grids inside width/height bounds from a valid character set."""

    def __init__(
        self,
        settings: TextMapSettings,
        *,
        rng: random.Random | None = None,
        namer: MapFileNamer | None = None,
    ) -> None:
        _validate_text_settings(settings)
        self._settings = settings
        self._rng = rng or random.Random()
        self._namer = namer or MapFileNamer()
        self._characters = tuple(dict.fromkeys(settings.valid_characters))
        self._fill_characters = tuple(
            character for character in self._characters if character not in settings.exactly_once
        )
        self._placed_characters = tuple(settings.exactly_once) + tuple(settings.at_least_once)

    @property
    def settings(self) -> TextMapSettings:
        return self._settings

    def generate_random_map(self) -> Artifact:
        rows = [list(row) for row in self._draw_rows()]
        self._place_required_characters(rows)
        return Artifact(
            kind=MapFileType.TEXT,
            source_name=self._namer.next_name(MapFileType.TEXT),
            rows=tuple("".join(row) for row in rows),
        )

    def generate_custom_map(self, source_hint: str) -> Artifact:
        """Wrap a caller-provided line (or newline-separated lines) as a text map."""
        return Artifact(
            kind=MapFileType.TEXT,
            source_name=self._namer.next_name(MapFileType.TEXT),
            rows=tuple(source_hint.split("\n")),
        )

    def _draw_rows(self) -> list[str]:
        settings = self._settings
        if settings.mode is TextMapMode.ONE_LINE:
            return [self._draw_row(self._draw_width())]
        height = self._rng.randint(settings.min_height, settings.max_height)
        if settings.mode is TextMapMode.JAGGED:
            return [self._draw_row(self._draw_width()) for _ in range(height)]
        width = self._draw_width()
        return [self._draw_row(width) for _ in range(height)]

    def _draw_width(self) -> int:
        return self._rng.randint(self._settings.min_width, self._settings.max_width)

    def _draw_row(self, width: int) -> str:
        return "".join(self._rng.choice(self._fill_characters) for _ in range(width))

    def _place_required_characters(self, rows: list[list[str]]) -> None:
        if not self._placed_characters:
            return
        positions = [
            (row_index, column_index)
            for row_index, row in enumerate(rows)
            for column_index in range(len(row))
        ]
        chosen = self._rng.sample(positions, len(self._placed_characters))
        for character, (row_index, column_index) in zip(
            self._placed_characters, chosen, strict=True
        ):
            rows[row_index][column_index] = character


class BinaryMapGenerator:
    """Generate random byte maps and their encoded storage form."""

    def __init__(
        self,
        settings: BinaryMapSettings,
        *,
        rng: random.Random | None = None,
        namer: MapFileNamer | None = None,
    ) -> None:
        if settings.max_size <= 0:
            raise InvalidConfiguration(
                f"binary_map.max_size must be greater than zero, got {settings.max_size}."
            )
        self._settings = settings
        self._rng = rng or random.Random()
        self._namer = namer or MapFileNamer()

    @property
    def settings(self) -> BinaryMapSettings:
        return self._settings

    def generate_random_map(self) -> Artifact:
        size = (
            self._settings.max_size
            if self._settings.fixed_size
            else self._rng.randint(1, self._settings.max_size)
        )
        return self._build(self._rng.randbytes(size))

    def generate_custom_map(self, source_hint: str) -> Artifact:
        """Store each character of ``source_hint`` as one byte of a binary map.

        Raises:
          EncodingError: If the hint is empty or holds a character above U+00FF.
        """
        if not source_hint:
            raise EncodingError("A custom binary map needs at least one byte.")
        return self._build(hint_to_bytes(source_hint))

    def _build(self, data: bytes) -> Artifact:
        return Artifact(
            kind=MapFileType.BINARY,
            source_name=self._namer.next_name(MapFileType.BINARY),
            data=data,
            encoded=encode_verified(data),
        )


class RandomMapGenerator:
    """Dispatch map generation according to the configured ``MapFileType``."""

    def __init__(
        self,
        settings: GenerationSettings,
        *,
        rng: random.Random | None = None,
        namer: MapFileNamer | None = None,
    ) -> None:
        self._map_file_type = settings.map_file_type
        self._rng = rng or random.Random(settings.seed)
        shared_namer = namer or MapFileNamer()
        self.text_generator = TextMapGenerator(
            settings.text_map, rng=self._rng, namer=shared_namer
        )
        self.binary_generator = BinaryMapGenerator(
            settings.binary_map, rng=self._rng, namer=shared_namer
        )

    def generate_random_map(self) -> Artifact:
        return self._select(self._map_file_type).generate_random_map()

    def generate_custom_map(
        self, source_hint: str, kind: MapFileType | None = None
    ) -> Artifact:
        selected = kind or self._map_file_type
        if selected is MapFileType.ALL:
            selected = MapFileType.TEXT
        return self._select(selected).generate_custom_map(source_hint)

    def _select(self, kind: MapFileType) -> MapGenerator:
        if kind is MapFileType.ALL:
            kind = MapFileType.TEXT if self._rng.random() < 0.5 else MapFileType.BINARY
        if kind is MapFileType.TEXT:
            return self.text_generator
        return self.binary_generator


def _validate_text_settings(settings: TextMapSettings) -> None:
    for name, value in (("min_width", settings.min_width), ("min_height", settings.min_height)):
        if value < 1:
            raise InvalidConfiguration(f"text_map.{name} must be at least 1, got {value}.")
    if settings.max_width < settings.min_width:
        raise InvalidConfiguration(
            f"text_map.max_width ({settings.max_width}) is smaller than "
            f"text_map.min_width ({settings.min_width})."
        )
    if settings.max_height < settings.min_height:
        raise InvalidConfiguration(
            f"text_map.max_height ({settings.max_height}) is smaller than "
            f"text_map.min_height ({settings.min_height})."
        )
    if not settings.valid_characters:
        raise InvalidConfiguration("text_map.valid_characters must not be empty.")
    if "\n" in settings.valid_characters or "\r" in settings.valid_characters:
        raise InvalidConfiguration("text_map.valid_characters must not contain line breaks.")

    valid = set(settings.valid_characters)
    for name, characters in (
        ("exactly_once", settings.exactly_once),
        ("at_least_once", settings.at_least_once),
    ):
        unknown = sorted(set(characters) - valid)
        if unknown:
            raise InvalidConfiguration(
                f"text_map.{name} characters {unknown} are not in text_map.valid_characters."
            )
        if len(set(characters)) != len(characters):
            raise InvalidConfiguration(f"text_map.{name} must not repeat characters.")
    overlap = sorted(set(settings.exactly_once) & set(settings.at_least_once))
    if overlap:
        raise InvalidConfiguration(
            f"Characters {overlap} cannot be both exactly_once and at_least_once."
        )
    if not valid - set(settings.exactly_once):
        raise InvalidConfiguration(
            "text_map.valid_characters needs at least one character outside exactly_once."
        )

    required_cells = len(settings.exactly_once) + len(settings.at_least_once)
    if required_cells > _minimum_cells(settings):
        raise InvalidConfiguration(
            f"The smallest {settings.mode.value} map holds {_minimum_cells(settings)} cells, "
            f"but {required_cells} required characters must be placed."
        )


def _minimum_cells(settings: TextMapSettings) -> int:
    if settings.mode is TextMapMode.ONE_LINE:
        return settings.min_width
    return settings.min_width * settings.min_height
