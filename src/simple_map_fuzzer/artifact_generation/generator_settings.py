"""Generator bounds passed explicitly into each generator."""

from __future__ import annotations

from dataclasses import dataclass, field

from .artifact_models import MapFileType, TextMapMode

DEFAULT_MAP_CHARACTERS = "MWP0F"
DEFAULT_ACTION_ALPHABET = "EQSWULDR"
DEFAULT_VALID_ACTIONS = "ULDR"

ACTION_NAMES: dict[str, str] = {
    "E": "Exit",
    "Q": "Quit",
    "S": "Start",
    "W": "Wait",
    "U": "Up",
    "L": "Left",
    "D": "Down",
    "R": "Right",
}

MAP_CELL_NAMES: dict[str, str] = {
    "P": "Player",
    "M": "Monster",
    "W": "Wall",
    "F": "Food",
    "0": "Empty",
}


@dataclass(frozen=True)
class TextMapSettings:  # pylint: disable=too-many-instance-attributes
    """Bounds and character rules for text maps."""

    max_width: int = 20
    max_height: int = 20
    min_width: int = 1
    min_height: int = 1
    valid_characters: str = DEFAULT_MAP_CHARACTERS
    mode: TextMapMode = TextMapMode.RECTANGULAR
    exactly_once: str = ""
    at_least_once: str = ""


@dataclass(frozen=True)
class BinaryMapSettings:
    """Size bound for binary maps."""

    max_size: int = 1000
    fixed_size: bool = False


@dataclass(frozen=True)
class ActionSequenceSettings:
    """Length bound and token sets for action sequences."""

    max_length: int = 5
    alphabet: str = DEFAULT_ACTION_ALPHABET
    valid_subset: str = DEFAULT_VALID_ACTIONS
    required_actions: str = ""


@dataclass(frozen=True)
class GenerationSettings:
    """All generator settings plus the map type selector and optional seed."""

    map_file_type: MapFileType = MapFileType.TEXT
    seed: int | None = None
    text_map: TextMapSettings = field(default_factory=TextMapSettings)
    binary_map: BinaryMapSettings = field(default_factory=BinaryMapSettings)
    action_sequence: ActionSequenceSettings = field(default_factory=ActionSequenceSettings)
