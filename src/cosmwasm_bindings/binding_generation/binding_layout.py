"""Names of the files the base generator writes into the output directory."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

TYPES_SUFFIX = ".types.ts"
SHARED_TYPES_MODULE = "types"
SHARED_TYPES_FILE = f"{SHARED_TYPES_MODULE}.ts"
CONTEXT_FILE = "context.ts"


class OutputForm(Enum):
    """Generated client flavours that import from a contract's type module."""

    CLIENT = "client"
    REACT_QUERY = "react-query"

    def file_name(self, contract_name: str) -> str:
        return f"{contract_name}.{self.value}.ts"

    def module_specifier(self, contract_name: str) -> str:
        return f"./{contract_name}.{self.value}"


@dataclass(frozen=True)
class ContractSchemaSource:
    """One contract handed to the base generator."""

    name: str
    schema_dir: Path


def types_file_name(contract_name: str) -> str:
    return f"{contract_name}{TYPES_SUFFIX}"


def local_types_module(contract_name: str) -> str:
    return f"./{contract_name}.types"


def contract_names_in(output_dir: Path) -> list[str]:
    """Return the contracts that have a generated type module, sorted."""
    return sorted(
        path.name[: -len(TYPES_SUFFIX)]
        for path in output_dir.iterdir()
        if path.is_file() and path.name.endswith(TYPES_SUFFIX)
    )


def enabled_forms(react_query: bool) -> tuple[OutputForm, ...]:
    return (OutputForm.CLIENT, OutputForm.REACT_QUERY) if react_query else (OutputForm.CLIENT,)
