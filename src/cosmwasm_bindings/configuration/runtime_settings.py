"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_PRIVATE_TYPE_NAMES = ("InstantiateMsg", "ExecuteMsg", "QueryMsg", "MigrateMsg")
DEFAULT_PRIVATE_TYPE_SUFFIX = "Response"

CONFLICT_POLICY_ERROR = "error"
CONFLICT_POLICY_FIRST_WINS = "first-wins"
CONFLICT_POLICIES = (CONFLICT_POLICY_ERROR, CONFLICT_POLICY_FIRST_WINS)


@dataclass(frozen=True)
class SchemaCompilerSettings:
    """Command used to (re)build one package's JSON schema."""

    command: tuple[str, ...] = ("cargo", "run", "-q", "--bin", "schema")


@dataclass(frozen=True)
class GeneratorSettings:
    """Base binding generator invocation settings."""

    command: tuple[str, ...] = ("node",)
    bundle_scope: str = "contracts"
    bundle_file: str = "index.ts"
    react_query_version: str = "v4"


@dataclass(frozen=True)
class ConsolidationSettings:
    """Declaration hoisting rules."""

    private_type_names: tuple[str, ...] = DEFAULT_PRIVATE_TYPE_NAMES
    private_type_suffix: str = DEFAULT_PRIVATE_TYPE_SUFFIX
    declaration_conflicts: str = CONFLICT_POLICY_ERROR

    def is_private_type(self, name: str) -> bool:
        """Return True when a declaration must stay in its contract module."""
        if self.private_type_suffix and name.endswith(self.private_type_suffix):
            return True
        return name in self.private_type_names


@dataclass(frozen=True)
class BuildSettings:
    """Top-level configuration aggregate."""

    workspace_root: Path
    contracts_dir: Path
    output_dir: Path
    schema_compiler: SchemaCompilerSettings = field(default_factory=SchemaCompilerSettings)
    generator: GeneratorSettings = field(default_factory=GeneratorSettings)
    consolidation: ConsolidationSettings = field(default_factory=ConsolidationSettings)
    source_path: Path | None = None
