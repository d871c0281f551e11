"""Post-processing of freshly generated bindings.

Runs declaration hoisting, import splitting and nested query patching over the
generator output, then marks the aggregate module with a re-export of the
shared types module. The marker is written last, so its presence means a
previous pass completed and nothing is left to do.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from pathlib import Path

from cosmwasm_bindings.binding_generation import (
    SHARED_TYPES_MODULE,
    BindingGenerationError,
    OutputForm,
    contract_names_in,
    enabled_forms,
    write_context_module,
)
from cosmwasm_bindings.client_patching import patch_nested_queries
from cosmwasm_bindings.configuration.runtime_settings import ConsolidationSettings
from cosmwasm_bindings.declaration_consolidation import (
    DeclarationRegistry,
    consolidate_type_modules,
    split_sibling_import,
)
from cosmwasm_bindings.schema_management.schema_models import NestedQueryRecord
from cosmwasm_bindings.typescript_syntax import TypeScriptModule

logger = logging.getLogger(__name__)

SHARED_TYPES_REEXPORT = f'export * from "./{SHARED_TYPES_MODULE}";'


def is_finalized(index_text: str) -> bool:
    return f"./{SHARED_TYPES_MODULE}" in TypeScriptModule(index_text, label="index").reexports()


async def finalize_bindings(
    output_dir: Path,
    records: Mapping[str, NestedQueryRecord],
    settings: ConsolidationSettings,
    *,
    bundle_file: str,
    react_query: bool,
    context_module: bool = False,
) -> DeclarationRegistry | None:
    """Consolidate and patch the bindings in ``output_dir``.

    Returns:
      The shared declaration registry, or None when the output was already
      finalized by an earlier pass.
    """
    index_path = output_dir / bundle_file
    if not index_path.exists():
        raise BindingGenerationError(f"Aggregate module not found: {index_path}")
    index_text = index_path.read_text(encoding="utf-8")
    if is_finalized(index_text):
        logger.info("Bindings in %s are already consolidated", output_dir)
        return None

    contract_names = contract_names_in(output_dir)
    if not contract_names:
        raise BindingGenerationError(f"No generated type modules found in {output_dir}")

    registry = await consolidate_type_modules(output_dir, contract_names, records, settings)
    forms = enabled_forms(react_query)

    await asyncio.gather(
        *(
            asyncio.to_thread(
                _rewrite_client_module,
                output_dir,
                contract_name,
                form,
                registry,
                records.get(contract_name, {}),
            )
            for contract_name in contract_names
            for form in forms
        )
    )

    if context_module:
        write_context_module(output_dir, contract_names)
    index_path.write_text(f"{index_text}\n{SHARED_TYPES_REEXPORT}", encoding="utf-8")
    return registry


def _rewrite_client_module(
    output_dir: Path,
    contract_name: str,
    form: OutputForm,
    registry: DeclarationRegistry,
    record: NestedQueryRecord,
) -> None:
    path = output_dir / form.file_name(contract_name)
    if not path.exists():
        raise BindingGenerationError(f"Generated module not found: {path}")
    module = TypeScriptModule(path.read_text(encoding="utf-8"), label=path.name)
    text = split_sibling_import(module, contract_name, registry, record.keys())
    text = patch_nested_queries(
        text, contract_name=contract_name, record=record, form=form, label=path.name
    )
    path.write_text(text, encoding="utf-8")
    if record:
        logger.debug("Patched %d nested queries in %s", len(record), path.name)
