"""Configuration loader tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from simple_map_fuzzer.artifact_generation import MapFileType, TextMapMode
from simple_map_fuzzer.configuration import CustomMap
from simple_map_fuzzer.configuration.loader import ConfigurationError, load_configuration


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def _write_json(tmp_path: Path, config: dict) -> Path:
    return _write_file(tmp_path / "config.json", json.dumps(config))


def test_loads_yaml_configuration(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        """
generation:
  map_file_type: all
  seed: 1234
  text_map:
    mode: JAGGED
    min_width: 2
    max_width: 8
    valid_characters: "PFW0"
    exactly_once: "P"
    at_least_once: "F"
  binary_map:
    max_size: 64
    fixed_size: true
  action_sequence:
    max_length: 7
    required_actions: "E"
custom:
  maps:
    - type: binary
      hint: "abc"
    - "MWP"
  action_sequences: ["SUE"]
run:
  output_dir: out
  max_iterations: 5
  max_time_ms: 1000
subject:
  command: "java -jar subject.jar {map} {actions}"
  timeout_seconds: 3
  success_exit_codes: 0
  known_exit_codes: [0, 1]
  working_dir: work
reporting:
  separator: ";"
  placeholder: "-"
  max_value_length: 40
  exit_code_labels:
    0: Passed
    "10": Lost
""",
    )

    configuration = load_configuration(config_path)

    generation = configuration.generation
    assert generation.map_file_type is MapFileType.ALL
    assert generation.seed == 1234
    assert generation.text_map.mode is TextMapMode.JAGGED
    assert generation.text_map.max_height == 20
    assert generation.text_map.exactly_once == "P"
    assert generation.binary_map.max_size == 64
    assert generation.binary_map.fixed_size is True
    assert generation.action_sequence.max_length == 7
    assert generation.action_sequence.valid_subset == "ULDR"
    assert configuration.custom.maps == (
        CustomMap(kind=MapFileType.BINARY, hint="abc"),
        CustomMap(kind=MapFileType.TEXT, hint="MWP"),
    )
    assert configuration.custom.action_sequences == ("SUE",)
    assert configuration.run.output_dir == (tmp_path / "out").resolve()
    assert configuration.run.max_iterations == 5
    assert configuration.run.max_time_ms == 1000
    assert configuration.subject is not None
    assert configuration.subject.command == ("java", "-jar", "subject.jar", "{map}", "{actions}")
    assert configuration.subject.success_exit_codes == (0,)
    assert configuration.subject.known_exit_codes == (0, 1)
    assert configuration.subject.working_dir == (tmp_path / "work").resolve()
    assert configuration.reporting.separator == ";"
    assert configuration.reporting.placeholder == "-"
    assert configuration.reporting.max_value_length == 40
    assert configuration.reporting.exit_code_labels == {0: "Passed", 10: "Lost"}


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "config.yaml", "")

    configuration = load_configuration(config_path)

    assert configuration.generation.map_file_type is MapFileType.TEXT
    assert configuration.generation.text_map.valid_characters == "MWP0F"
    assert configuration.custom.maps == ()
    assert configuration.run.output_dir == (tmp_path / "fuzzresults").resolve()
    assert configuration.run.max_time_ms == 900_000
    assert configuration.subject is None
    assert configuration.reporting.placeholder == "N.A."


def test_loads_json_configuration_with_command_list(tmp_path: Path) -> None:
    config_path = _write_json(
        tmp_path,
        {"subject": {"command": ["./subject", "--map", "{map}"]}, "run": {"max_iterations": 2}},
    )

    configuration = load_configuration(config_path)

    assert configuration.subject is not None
    assert configuration.subject.command == ("./subject", "--map", "{map}")
    assert configuration.subject.timeout_seconds == 30
    assert configuration.subject.known_exit_codes == (0, 1, 10)
    assert configuration.run.max_iterations == 2


def test_errors_when_configuration_file_missing(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Configuration file not found"):
        load_configuration(tmp_path / "missing.yaml")


def test_errors_when_configuration_root_is_not_mapping(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "config.yaml", "- a\n- b\n")

    with pytest.raises(ConfigurationError, match="Configuration root must be a mapping"):
        load_configuration(config_path)


def test_errors_when_yaml_is_malformed(tmp_path: Path) -> None:
    config_path = _write_file(tmp_path / "config.yaml", "generation: [unclosed\n")

    with pytest.raises(ConfigurationError, match="Failed to parse configuration file"):
        load_configuration(config_path)


@pytest.mark.parametrize(
    ("config", "message"),
    [
        ({"generation": {"map_file_type": "audio"}}, "map_file_type"),
        ({"generation": {"seed": "abc"}}, "generation.seed must be an integer"),
        ({"generation": {"seed": True}}, "generation.seed must be an integer"),
        ({"generation": {"text_map": {"mode": "spiral"}}}, "mode"),
        ({"generation": {"text_map": {"max_width": 0}}}, "must be greater than zero"),
        ({"generation": {"text_map": {"min_width": 5, "max_width": 2}}}, "max_width"),
        ({"generation": {"text_map": "wide"}}, "must be a mapping"),
        (
            {"generation": {"action_sequence": {"alphabet": "UD", "valid_subset": "UX"}}},
            "valid_subset",
        ),
        ({"custom": {"maps": [{"type": "all", "hint": "x"}]}}, "text or binary"),
        ({"custom": {"maps": [{"type": "binary", "hint": "€"}]}}, "one byte"),
        (
            {"custom": {"maps": [{"type": "binary", "hint": ""}]}},
            r"custom.maps\[0\].hint must not be empty",
        ),
        ({"custom": {"maps": "MWP"}}, "custom.maps must be a list"),
        ({"custom": {"action_sequences": [""]}}, "must not be empty"),
        ({"run": {"max_iterations": -1}}, "run.max_iterations"),
        ({"subject": {}}, "subject.command is required"),
        ({"subject": {"command": []}}, "at least one entry"),
        ({"subject": {"command": ["ok", 3]}}, "entries must be strings"),
        ({"subject": {"command": "x", "known_exit_codes": ["1"]}}, "known_exit_codes"),
        ({"reporting": {"exit_code_labels": {"zero": "Success"}}}, "must be an integer"),
        ({"reporting": {"max_value_length": 0}}, "max_value_length"),
    ],
)
def test_errors_on_invalid_values(tmp_path: Path, config: dict, message: str) -> None:
    config_path = _write_json(tmp_path, config)

    with pytest.raises(ConfigurationError, match=message):
        load_configuration(config_path)
