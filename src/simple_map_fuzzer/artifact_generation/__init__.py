"""Artifact generation domain exports."""

from .action_sequences import (
    ActionSequenceGenerator,
    check_action_sequence,
    enumerate_action_sequences,
)
from .artifact_models import (
    ActionSequence,
    Artifact,
    EncodingError,
    InvalidConfiguration,
    MapFileType,
    TextMapMode,
)
from .artifact_writer import read_map_text, write_artifact
from .binary_codec import decode_bytes, encode_bytes, encode_verified, hint_to_bytes
from .generator_settings import (
    ACTION_NAMES,
    DEFAULT_ACTION_ALPHABET,
    DEFAULT_MAP_CHARACTERS,
    DEFAULT_VALID_ACTIONS,
    MAP_CELL_NAMES,
    ActionSequenceSettings,
    BinaryMapSettings,
    GenerationSettings,
    TextMapSettings,
)
from .map_generators import (
    BinaryMapGenerator,
    MapFileNamer,
    MapGenerator,
    RandomMapGenerator,
    TextMapGenerator,
)

__all__ = [
    "ActionSequence",
    "Artifact",
    "EncodingError",
    "InvalidConfiguration",
    "MapFileType",
    "TextMapMode",
    "ACTION_NAMES",
    "DEFAULT_ACTION_ALPHABET",
    "DEFAULT_MAP_CHARACTERS",
    "DEFAULT_VALID_ACTIONS",
    "MAP_CELL_NAMES",
    "ActionSequenceSettings",
    "BinaryMapSettings",
    "GenerationSettings",
    "TextMapSettings",
    "MapFileNamer",
    "MapGenerator",
    "TextMapGenerator",
    "BinaryMapGenerator",
    "RandomMapGenerator",
    "ActionSequenceGenerator",
    "check_action_sequence",
    "enumerate_action_sequences",
    "encode_bytes",
    "decode_bytes",
    "encode_verified",
    "hint_to_bytes",
    "write_artifact",
    "read_map_text",
]
