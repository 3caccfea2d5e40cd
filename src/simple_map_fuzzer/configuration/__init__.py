"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration
from .runtime_settings import (
    ACTIONS_PLACEHOLDER,
    DEFAULT_OUTPUT_DIR,
    MAP_PLACEHOLDER,
    Configuration,
    CustomInputs,
    CustomMap,
    ReportingSettings,
    RunSettings,
    SubjectSettings,
)

__all__ = [
    "Configuration",
    "CustomInputs",
    "CustomMap",
    "ReportingSettings",
    "RunSettings",
    "SubjectSettings",
    "ACTIONS_PLACEHOLDER",
    "DEFAULT_OUTPUT_DIR",
    "MAP_PLACEHOLDER",
    "ConfigurationError",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
