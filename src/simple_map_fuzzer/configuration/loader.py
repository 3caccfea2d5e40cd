"""Configuration loader service."""

from __future__ import annotations

import shlex
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from simple_map_fuzzer.artifact_generation import (
    ActionSequenceGenerator,
    ActionSequenceSettings,
    BinaryMapSettings,
    EncodingError,
    GenerationSettings,
    InvalidConfiguration,
    MapFileType,
    RandomMapGenerator,
    TextMapMode,
    TextMapSettings,
    hint_to_bytes,
)
from simple_map_fuzzer.iteration_results.result_models import NOT_AVAILABLE
from simple_map_fuzzer.result_formatting.format_options import DEFAULT_EXIT_CODE_LABELS

from .runtime_settings import (
    DEFAULT_OUTPUT_DIR,
    Configuration,
    CustomInputs,
    CustomMap,
    ReportingSettings,
    RunSettings,
    SubjectSettings,
)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file.

    YAML and JSON files are both accepted. Generator bounds are checked by
    constructing the generators once, so contradictory bounds surface here.
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    generation = _parse_generation_section(parsed.get("generation"))
    _validate_generation_bounds(generation)
    custom = _parse_custom_section(parsed.get("custom"))
    run = _parse_run_section(parsed.get("run"), path.parent)
    subject = _parse_subject_section(parsed.get("subject"), path.parent)
    reporting = _parse_reporting_section(parsed.get("reporting"))

    return Configuration(
        path=path,
        generation=generation,
        custom=custom,
        run=run,
        subject=subject,
        reporting=reporting,
    )


def _parse_generation_section(value: Any) -> GenerationSettings:
    section = _optional_mapping(value, "generation")
    defaults = GenerationSettings()
    map_file_type_raw = section.get("map_file_type", defaults.map_file_type.value)
    map_file_type_name = _require_non_empty_string(
        map_file_type_raw, "generation.map_file_type"
    ).upper()
    try:
        map_file_type = MapFileType(map_file_type_name)
    except ValueError as exc:
        raise ConfigurationError(
            "generation.map_file_type must be one of: text, binary, all."
        ) from exc

    return GenerationSettings(
        map_file_type=map_file_type,
        seed=_optional_int(section.get("seed"), "generation.seed"),
        text_map=_parse_text_map_section(section.get("text_map")),
        binary_map=_parse_binary_map_section(section.get("binary_map")),
        action_sequence=_parse_action_sequence_section(section.get("action_sequence")),
    )


def _parse_text_map_section(value: Any) -> TextMapSettings:
    section = _optional_mapping(value, "generation.text_map")
    defaults = TextMapSettings()
    mode_raw = section.get("mode", defaults.mode.value)
    mode_name = _require_non_empty_string(mode_raw, "generation.text_map.mode").lower()
    try:
        mode = TextMapMode(mode_name)
    except ValueError as exc:
        raise ConfigurationError(
            "generation.text_map.mode must be one of: rectangular, one_line, jagged."
        ) from exc
    return TextMapSettings(
        max_width=_require_positive_int(
            section.get("max_width", defaults.max_width), "generation.text_map.max_width"
        ),
        max_height=_require_positive_int(
            section.get("max_height", defaults.max_height), "generation.text_map.max_height"
        ),
        min_width=_require_positive_int(
            section.get("min_width", defaults.min_width), "generation.text_map.min_width"
        ),
        min_height=_require_positive_int(
            section.get("min_height", defaults.min_height), "generation.text_map.min_height"
        ),
        valid_characters=_require_string(
            section.get("valid_characters", defaults.valid_characters),
            "generation.text_map.valid_characters",
        ),
        mode=mode,
        exactly_once=_require_string(
            section.get("exactly_once", defaults.exactly_once),
            "generation.text_map.exactly_once",
        ),
        at_least_once=_require_string(
            section.get("at_least_once", defaults.at_least_once),
            "generation.text_map.at_least_once",
        ),
    )


def _parse_binary_map_section(value: Any) -> BinaryMapSettings:
    section = _optional_mapping(value, "generation.binary_map")
    defaults = BinaryMapSettings()
    return BinaryMapSettings(
        max_size=_require_positive_int(
            section.get("max_size", defaults.max_size), "generation.binary_map.max_size"
        ),
        fixed_size=bool(section.get("fixed_size", defaults.fixed_size)),
    )


def _parse_action_sequence_section(value: Any) -> ActionSequenceSettings:
    section = _optional_mapping(value, "generation.action_sequence")
    defaults = ActionSequenceSettings()
    return ActionSequenceSettings(
        max_length=_require_positive_int(
            section.get("max_length", defaults.max_length),
            "generation.action_sequence.max_length",
        ),
        alphabet=_require_non_empty_string(
            section.get("alphabet", defaults.alphabet), "generation.action_sequence.alphabet"
        ),
        valid_subset=_require_non_empty_string(
            section.get("valid_subset", defaults.valid_subset),
            "generation.action_sequence.valid_subset",
        ),
        required_actions=_require_string(
            section.get("required_actions", defaults.required_actions),
            "generation.action_sequence.required_actions",
        ),
    )


def _validate_generation_bounds(generation: GenerationSettings) -> None:
    try:
        RandomMapGenerator(generation)
        ActionSequenceGenerator(generation.action_sequence)
    except InvalidConfiguration as exc:
        raise ConfigurationError(str(exc)) from exc


def _parse_custom_section(value: Any) -> CustomInputs:
    section = _optional_mapping(value, "custom")
    maps_raw = section.get("maps") or []
    if not isinstance(maps_raw, Sequence) or isinstance(maps_raw, str):
        raise ConfigurationError("custom.maps must be a list.")
    maps = tuple(_parse_custom_map(entry, index) for index, entry in enumerate(maps_raw))

    sequences_raw = section.get("action_sequences") or []
    if not isinstance(sequences_raw, Sequence) or isinstance(sequences_raw, str):
        raise ConfigurationError("custom.action_sequences must be a list.")
    sequences = tuple(
        _require_non_empty_string(entry, f"custom.action_sequences[{index}]")
        for index, entry in enumerate(sequences_raw)
    )
    return CustomInputs(maps=maps, action_sequences=sequences)


def _parse_custom_map(value: Any, index: int) -> CustomMap:
    label = f"custom.maps[{index}]"
    if isinstance(value, str):
        entry: Mapping[str, Any] = {"type": "text", "hint": value}
    elif isinstance(value, Mapping):
        entry = value
    else:
        raise ConfigurationError(f"{label} must be a string or a mapping.")

    kind_name = _require_non_empty_string(entry.get("type", "text"), f"{label}.type").upper()
    if kind_name not in (MapFileType.TEXT.value, MapFileType.BINARY.value):
        raise ConfigurationError(f"{label}.type must be text or binary.")
    kind = MapFileType(kind_name)
    hint = _require_string(entry.get("hint"), f"{label}.hint")
    if kind is MapFileType.BINARY:
        if not hint:
            raise ConfigurationError(f"{label}.hint must not be empty for binary maps.")
        try:
            hint_to_bytes(hint)
        except EncodingError as exc:
            raise ConfigurationError(f"{label}.hint: {exc}") from exc
    return CustomMap(kind=kind, hint=hint)


def _parse_run_section(value: Any, base_path: Path) -> RunSettings:
    section = _optional_mapping(value, "run")
    output_dir = _require_non_empty_string(
        section.get("output_dir", DEFAULT_OUTPUT_DIR), "run.output_dir"
    )
    return RunSettings(
        output_dir=_resolve_path(base_path, output_dir),
        max_iterations=_require_positive_int(
            section.get("max_iterations", 100), "run.max_iterations"
        ),
        max_time_ms=_require_positive_int(section.get("max_time_ms", 900_000), "run.max_time_ms"),
    )


def _parse_subject_section(value: Any, base_path: Path) -> SubjectSettings | None:
    if value is None:
        return None
    section = _require_mapping(value, "subject")
    command = _normalize_command(section.get("command"))
    working_dir_raw = _optional_string(section.get("working_dir"), "subject.working_dir")
    return SubjectSettings(
        command=command,
        timeout_seconds=_require_positive_int(
            section.get("timeout_seconds", 30), "subject.timeout_seconds"
        ),
        success_exit_codes=_normalize_int_sequence(
            section.get("success_exit_codes", [0]), "subject.success_exit_codes"
        ),
        known_exit_codes=_normalize_int_sequence(
            section.get("known_exit_codes", [0, 1, 10]), "subject.known_exit_codes"
        ),
        working_dir=_resolve_path(base_path, working_dir_raw) if working_dir_raw else None,
    )


def _parse_reporting_section(value: Any) -> ReportingSettings:
    section = _optional_mapping(value, "reporting")
    separator = _require_string(section.get("separator", ","), "reporting.separator")
    placeholder = _require_string(
        section.get("placeholder", NOT_AVAILABLE), "reporting.placeholder"
    )
    max_value_length_raw = section.get("max_value_length")
    max_value_length = (
        None
        if max_value_length_raw is None
        else _require_positive_int(max_value_length_raw, "reporting.max_value_length")
    )
    labels_raw = section.get("exit_code_labels")
    if labels_raw is None:
        labels: dict[int, str] = dict(DEFAULT_EXIT_CODE_LABELS)
    else:
        labels = _normalize_exit_code_labels(labels_raw)
    return ReportingSettings(
        separator=separator,
        placeholder=placeholder,
        max_value_length=max_value_length,
        exit_code_labels=labels,
    )


def _normalize_command(value: Any) -> tuple[str, ...]:
    if value is None:
        raise ConfigurationError("subject.command is required.")
    if isinstance(value, str):
        parts = shlex.split(value)
    elif isinstance(value, Sequence):
        parts = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError("subject.command entries must be strings.")
            parts.append(item)
    else:
        raise ConfigurationError("subject.command must be a string or list of strings.")
    if not parts:
        raise ConfigurationError("subject.command must contain at least one entry.")
    return tuple(parts)


def _normalize_int_sequence(value: Any, field_name: str) -> tuple[int, ...]:
    if isinstance(value, bool) or isinstance(value, int):
        return (_require_int(value, field_name),)
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be an integer or list of integers.")
    return tuple(_require_int(item, f"{field_name} entries") for item in value)


def _normalize_exit_code_labels(value: Any) -> dict[int, str]:
    mapping = _require_mapping(value, "reporting.exit_code_labels")
    labels: dict[int, str] = {}
    for raw_code, raw_label in mapping.items():
        try:
            code = int(raw_code)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(
                f"reporting.exit_code_labels key '{raw_code}' must be an integer."
            ) from exc
        labels[code] = _require_non_empty_string(
            raw_label, f"reporting.exit_code_labels[{code}]"
        )
    return labels


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    return _require_mapping(value, section_name)


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    stripped = _require_string(value, field_name).strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    stripped = _require_string(value, field_name).strip()
    return stripped or None


def _require_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    return value


def _optional_int(value: Any, field_name: str) -> int | None:
    if value is None:
        return None
    return _require_int(value, field_name)


def _require_positive_int(value: Any, field_name: str) -> int:
    number = _require_int(value, field_name)
    if number <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return number
