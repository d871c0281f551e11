"""Import splitting between the shared and the per-contract type module."""

from __future__ import annotations

from collections.abc import Iterable

from cosmwasm_bindings.binding_generation.binding_layout import local_types_module
from cosmwasm_bindings.typescript_syntax import TextEdit, TypeScriptModule, apply_edits

from .declaration_models import DeclarationRegistry
from .type_module_consolidator import shared_import


class ImportRewriteError(Exception):
    """Raised when a generated module does not import its sibling type module."""


def split_sibling_import(
    module: TypeScriptModule,
    contract_name: str,
    registry: DeclarationRegistry,
    local_names: Iterable[str] = (),
) -> str:
    """Split the import from ``./<Contract>.types`` into a shared and a local import.

    Registered names are imported from the shared module; everything else, plus
    ``local_names``, stays on the sibling import.
    """
    sibling = local_types_module(contract_name)
    statements = [statement for statement in module.named_imports() if statement.source == sibling]
    if not statements:
        raise ImportRewriteError(f"{module.label}: no import from '{sibling}' to rewrite.")

    extra_local = tuple(local_names)
    edits = []
    for statement in statements:
        shared = [name for name in statement.names if _imported_name(name) in registry]
        local = _unique(
            [name for name in statement.names if _imported_name(name) not in registry]
            + list(extra_local)
        )
        local_import = f'import {{{", ".join(local)}}} from "{sibling}";'
        edits.append(
            TextEdit(statement.start, statement.end, f"{shared_import(shared)}\n{local_import}")
        )
    return apply_edits(module.source, edits)


def _imported_name(specifier: str) -> str:
    return specifier.split(" as ", 1)[0].strip()


def _unique(names: list[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for name in names:
        if _imported_name(name) not in seen:
            seen.add(_imported_name(name))
            ordered.append(name)
    return ordered
