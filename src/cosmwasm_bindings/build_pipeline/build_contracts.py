"""Build pipeline entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from cosmwasm_bindings.schema_management.schema_models import NestedQueryRecord


@dataclass(frozen=True)
class BuildRequest:
    """Input contract for one binding build."""

    workspace_root: str = "."
    config_path: str | None = None
    force: bool = False
    force_packages: tuple[str, ...] = ()
    react_query: bool = False
    context_module: bool = False


@dataclass(frozen=True)
class BuildOutcome:
    """Output contract for one completed binding build."""

    output_dir: Path
    contract_names: tuple[str, ...]
    rebuilt_packages: tuple[str, ...] = ()
    nested_queries: Mapping[str, NestedQueryRecord] = field(default_factory=dict)
    shared_declarations: tuple[str, ...] = ()
    already_finalized: bool = False
