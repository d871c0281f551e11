"""Shared declaration hoisting across per-contract type modules."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from cosmwasm_bindings.binding_generation.binding_layout import (
    SHARED_TYPES_FILE,
    SHARED_TYPES_MODULE,
    types_file_name,
)
from cosmwasm_bindings.configuration.runtime_settings import ConsolidationSettings
from cosmwasm_bindings.schema_management.schema_models import NestedQueryRecord
from cosmwasm_bindings.typescript_syntax import TypeScriptModule

from .declaration_models import DeclarationRegistry, DeclarationToken

logger = logging.getLogger(__name__)


def shared_import(names: Sequence[str]) -> str:
    return f'import {{{", ".join(names)}}} from "./{SHARED_TYPES_MODULE}";'


def register_module_declarations(
    module: TypeScriptModule, registry: DeclarationRegistry, settings: ConsolidationSettings
) -> None:
    """Register every public declaration of ``module`` not registered yet."""
    for declaration in module.declarations():
        if settings.is_private_type(declaration.name):
            continue
        registry.register(
            DeclarationToken(
                name=declaration.name,
                text=module.slice(declaration.start, declaration.end),
                module=module.label,
            )
        )


def rewrite_type_module(
    module: TypeScriptModule, registry: DeclarationRegistry, record: NestedQueryRecord
) -> str:
    """Drop hoisted declarations, add nested response unions and import the shared names."""
    hoisted: list[str] = []
    kept: list[str] = []
    declared: set[str] = set()
    for declaration in module.declarations():
        declared.add(declaration.name)
        if declaration.name in registry:
            if declaration.name not in hoisted:
                hoisted.append(declaration.name)
        else:
            kept.append(module.slice(declaration.start, declaration.end))

    for response_name, nested in record.items():
        if response_name not in declared:
            kept.append(f"export type {response_name} = {' | '.join(nested.response_names)};")

    return "\n".join([shared_import(hoisted), *kept]) + "\n"


def render_shared_module(registry: DeclarationRegistry) -> str:
    return "\n".join(token.text for token in registry.tokens()) + "\n"


async def consolidate_type_modules(
    output_dir: Path,
    contract_names: Sequence[str],
    records: Mapping[str, NestedQueryRecord],
    settings: ConsolidationSettings,
) -> DeclarationRegistry:
    """Hoist shared declarations into the shared types module.

    Modules are read and written concurrently off the event loop. Registration
    runs in contract order once every module is parsed, so the first declaration
    of a name always comes from the first contract that declares it.
    """
    registry = DeclarationRegistry(conflict_policy=settings.declaration_conflicts)
    paths = {name: output_dir / types_file_name(name) for name in contract_names}

    texts = await asyncio.gather(
        *(asyncio.to_thread(paths[name].read_text, encoding="utf-8") for name in contract_names)
    )
    modules = {
        name: TypeScriptModule(text, label=paths[name].name)
        for name, text in zip(contract_names, texts)
    }
    for name in contract_names:
        register_module_declarations(modules[name], registry, settings)

    await asyncio.gather(
        *(
            asyncio.to_thread(
                paths[name].write_text,
                rewrite_type_module(modules[name], registry, records.get(name, {})),
                encoding="utf-8",
            )
            for name in contract_names
        )
    )
    (output_dir / SHARED_TYPES_FILE).write_text(render_shared_module(registry), encoding="utf-8")
    logger.info(
        "Hoisted %d shared declarations from %d type modules", len(registry), len(contract_names)
    )
    return registry
