"""Configuration domain exports."""

from .config_scaffold_builder import (
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import DEFAULT_CONFIG_FILENAME, ConfigurationError, load_build_settings
from .runtime_settings import (
    CONFLICT_POLICY_ERROR,
    CONFLICT_POLICY_FIRST_WINS,
    BuildSettings,
    ConsolidationSettings,
    GeneratorSettings,
    SchemaCompilerSettings,
)

__all__ = [
    "BuildSettings",
    "ConsolidationSettings",
    "GeneratorSettings",
    "SchemaCompilerSettings",
    "CONFLICT_POLICY_ERROR",
    "CONFLICT_POLICY_FIRST_WINS",
    "ConfigurationError",
    "load_build_settings",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
