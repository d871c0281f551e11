"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    CONFLICT_POLICIES,
    DEFAULT_PRIVATE_TYPE_NAMES,
    DEFAULT_PRIVATE_TYPE_SUFFIX,
    BuildSettings,
    ConsolidationSettings,
    GeneratorSettings,
    SchemaCompilerSettings,
)

DEFAULT_CONFIG_FILENAME = "cosmwasm-bindings.yaml"
DEFAULT_CONTRACTS_DIR = "contracts"
DEFAULT_OUTPUT_DIR = "build"


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_build_settings(
    workspace_root: Path | str, config_path: Path | str | None = None
) -> BuildSettings:
    """Load build settings for a workspace.

    When ``config_path`` is omitted the workspace's default configuration file
    is used if present; otherwise every setting keeps its default.
    """
    root = Path(workspace_root).resolve()
    if not root.is_dir():
        raise ConfigurationError(f"Workspace directory not found: {root}")

    if config_path is None:
        candidate = root / DEFAULT_CONFIG_FILENAME
        path = candidate if candidate.exists() else None
    else:
        path = _resolve_path(root, str(config_path))
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

    parsed: Any = {}
    if path is not None:
        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc
    if parsed is None:
        parsed = {}
    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    workspace = _optional_mapping(parsed.get("workspace"), "workspace")
    contracts_dir = _optional_string(workspace.get("contracts_dir"), "workspace.contracts_dir")
    output_dir = _optional_string(workspace.get("output_dir"), "workspace.output_dir")

    return BuildSettings(
        workspace_root=root,
        contracts_dir=_resolve_path(root, contracts_dir or DEFAULT_CONTRACTS_DIR),
        output_dir=_resolve_path(root, output_dir or DEFAULT_OUTPUT_DIR),
        schema_compiler=_parse_schema_compiler_section(parsed.get("schema_compiler")),
        generator=_parse_generator_section(parsed.get("generator")),
        consolidation=_parse_consolidation_section(parsed.get("consolidation")),
        source_path=path,
    )


def _parse_schema_compiler_section(value: Any) -> SchemaCompilerSettings:
    section = _optional_mapping(value, "schema_compiler")
    if section.get("command") is None:
        return SchemaCompilerSettings()
    return SchemaCompilerSettings(
        command=_require_command(section.get("command"), "schema_compiler.command")
    )


def _parse_generator_section(value: Any) -> GeneratorSettings:
    section = _optional_mapping(value, "generator")
    defaults = GeneratorSettings()
    command = (
        _require_command(section.get("command"), "generator.command")
        if section.get("command") is not None
        else defaults.command
    )
    bundle_scope = _optional_string(section.get("bundle_scope"), "generator.bundle_scope")
    bundle_file = _optional_string(section.get("bundle_file"), "generator.bundle_file")
    react_query_version = _optional_string(
        section.get("react_query_version"), "generator.react_query_version"
    )
    return GeneratorSettings(
        command=command,
        bundle_scope=bundle_scope or defaults.bundle_scope,
        bundle_file=bundle_file or defaults.bundle_file,
        react_query_version=react_query_version or defaults.react_query_version,
    )


def _parse_consolidation_section(value: Any) -> ConsolidationSettings:
    section = _optional_mapping(value, "consolidation")
    names_raw = section.get("private_type_names")
    private_type_names = (
        _normalize_string_sequence(names_raw, "consolidation.private_type_names")
        if names_raw is not None
        else DEFAULT_PRIVATE_TYPE_NAMES
    )
    suffix_raw = section.get("private_type_suffix", DEFAULT_PRIVATE_TYPE_SUFFIX)
    if not isinstance(suffix_raw, str):
        raise ConfigurationError("consolidation.private_type_suffix must be a string.")
    policy_raw = section.get("declaration_conflicts", CONFLICT_POLICIES[0])
    policy = _require_non_empty_string(policy_raw, "consolidation.declaration_conflicts").lower()
    if policy not in CONFLICT_POLICIES:
        allowed = ", ".join(CONFLICT_POLICIES)
        raise ConfigurationError(f"consolidation.declaration_conflicts must be one of: {allowed}.")
    return ConsolidationSettings(
        private_type_names=private_type_names,
        private_type_suffix=suffix_raw.strip(),
        declaration_conflicts=policy,
    )


def _require_command(value: Any, field_name: str) -> tuple[str, ...]:
    if isinstance(value, str):
        parts = tuple(value.split())
    else:
        parts = _normalize_string_sequence(value, field_name)
    if not parts:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return parts


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ConfigurationError(f"{field_name} must be a list of strings.")
    normalized = []
    for item in value:
        if not isinstance(item, str):
            raise ConfigurationError(f"{field_name} entries must be strings.")
        stripped = item.strip()
        if stripped:
            normalized.append(stripped)
    return tuple(normalized)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None
