"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Fuzzing configuration template for simple-map-fuzzer.
# Replace every <REQUIRED> placeholder before using the run command.
# All other values are defaults and may be removed or changed.

generation:
  # One of: text, binary, all. "all" picks text or binary per iteration.
  map_file_type: text
  # Integer seed for reproducible runs. Remove for a fresh seed each run.
  seed: null
  text_map:
    # One of: rectangular, one_line, jagged.
    mode: rectangular
    min_width: 1
    max_width: 20
    min_height: 1
    max_height: 20
    valid_characters: "MWP0F"
    # Characters placed in exactly one cell of every generated map.
    exactly_once: ""
    # Characters placed in at least one cell of every generated map.
    at_least_once: ""
  binary_map:
    max_size: 1000
    # Always generate max_size bytes instead of a random size.
    fixed_size: false
  action_sequence:
    max_length: 5
    alphabet: "EQSWULDR"
    valid_subset: "ULDR"
    # Actions placed in every generated sequence.
    required_actions: ""

custom:
  # Custom maps and sequences are used before random generation starts.
  maps: []
  #  - type: text
  #    hint: "MWP\\nF0M"
  action_sequences: []
  #  - "SULE"

run:
  # Relative paths resolve against this file's directory.
  output_dir: fuzzresults
  max_iterations: 100
  max_time_ms: 900000

subject:
  # {map} and {actions} are replaced with the map path and the action sequence.
  command: "<REQUIRED>"
  timeout_seconds: 30
  success_exit_codes: [0]
  known_exit_codes: [0, 1, 10]
  # working_dir: "<OPTIONAL>"

reporting:
  separator: ","
  placeholder: "N.A."
  # max_value_length: 80
  exit_code_labels:
    0: Success
    -1: Unknown
"""


def build_placeholder_configuration() -> str:
    """Build a YAML fuzzing configuration template with defaults and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the fuzzing configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
