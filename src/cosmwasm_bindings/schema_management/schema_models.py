"""Schema management entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class SchemaDocument:
    """One contract's consolidated JSON schema, as written by the schema compiler."""

    source_path: Path
    root: dict[str, Any]


@dataclass(frozen=True)
class NestedQuery:
    """A flattened two-level query and what its client method must look like."""

    method_name: str
    input_type: str
    response_names: tuple[str, ...]


# Synthesized response union name -> nested query details.
NestedQueryRecord = Mapping[str, NestedQuery]
