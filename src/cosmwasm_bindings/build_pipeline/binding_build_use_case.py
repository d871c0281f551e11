"""Binding build use-case service."""

from __future__ import annotations

import asyncio
import logging
import shutil
from collections.abc import Sequence

from cosmwasm_bindings.binding_generation import (
    BindingGenerationError,
    BindingGenerator,
    ContractSchemaSource,
    TsCodegenGenerator,
)
from cosmwasm_bindings.client_patching import ClientPatchError
from cosmwasm_bindings.configuration import (
    BuildSettings,
    ConfigurationError,
    load_build_settings,
)
from cosmwasm_bindings.declaration_consolidation import (
    DeclarationConflictError,
    ImportRewriteError,
)
from cosmwasm_bindings.package_discovery import (
    ContractPackage,
    PackageDiscoveryError,
    discover_contract_packages,
    require_schema_dirs,
    select_packages,
)
from cosmwasm_bindings.schema_compilation import (
    CommandRunner,
    SchemaCompilationError,
    compile_package_schemas,
)
from cosmwasm_bindings.schema_management import (
    NestedQueryRecord,
    NestedSchemaError,
    flatten_nested_queries,
    load_schema_document,
)
from cosmwasm_bindings.typescript_syntax import TypeScriptSyntaxError

from .binding_postprocessing import finalize_bindings
from .build_contracts import BuildOutcome, BuildRequest

logger = logging.getLogger(__name__)

_PIPELINE_ERRORS = (
    PackageDiscoveryError,
    SchemaCompilationError,
    NestedSchemaError,
    BindingGenerationError,
    DeclarationConflictError,
    ImportRewriteError,
    ClientPatchError,
    TypeScriptSyntaxError,
    OSError,
)


class BuildExecutionError(Exception):
    """Raised when a binding build cannot be completed."""


def execute_binding_build(
    request: BuildRequest,
    *,
    settings: BuildSettings | None = None,
    compile_command_runner: CommandRunner | None = None,
    generator: BindingGenerator | None = None,
) -> BuildOutcome:
    """Execute one full binding build and return its outcome."""
    try:
        resolved_settings = settings or load_build_settings(
            request.workspace_root, request.config_path
        )
    except ConfigurationError as exc:
        raise BuildExecutionError(str(exc)) from exc
    resolved_generator = generator or TsCodegenGenerator(
        resolved_settings.generator, workspace_root=resolved_settings.workspace_root
    )
    try:
        return asyncio.run(
            run_binding_build(
                request,
                resolved_settings,
                compile_command_runner=compile_command_runner,
                generator=resolved_generator,
            )
        )
    except _PIPELINE_ERRORS as exc:
        raise BuildExecutionError(str(exc)) from exc


async def run_binding_build(
    request: BuildRequest,
    settings: BuildSettings,
    *,
    generator: BindingGenerator,
    compile_command_runner: CommandRunner | None = None,
) -> BuildOutcome:
    """Compile (optionally), flatten, generate and post-process every contract."""
    packages = discover_contract_packages(settings.contracts_dir)
    if not packages:
        raise PackageDiscoveryError(f"No contract packages found in {settings.contracts_dir}")

    rebuilt: tuple[ContractPackage, ...] = ()
    if request.force:
        rebuilt = select_packages(packages, request.force_packages)
        await compile_package_schemas(
            rebuilt, settings.schema_compiler, run_command=compile_command_runner
        )
    require_schema_dirs(packages)

    records = await _flatten_packages(packages, mutate=request.force)

    output_dir = settings.output_dir
    if output_dir.exists():
        shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True)
    await generator.generate(
        [ContractSchemaSource(name=p.contract_name, schema_dir=p.schema_dir) for p in packages],
        output_dir,
        react_query=request.react_query,
    )

    registry = await finalize_bindings(
        output_dir,
        records,
        settings.consolidation,
        bundle_file=settings.generator.bundle_file,
        react_query=request.react_query,
        context_module=request.context_module,
    )
    return BuildOutcome(
        output_dir=output_dir,
        contract_names=tuple(package.contract_name for package in packages),
        rebuilt_packages=tuple(package.package_name for package in rebuilt),
        nested_queries=records,
        shared_declarations=registry.names() if registry is not None else (),
        already_finalized=registry is None,
    )


async def _flatten_packages(
    packages: Sequence[ContractPackage], *, mutate: bool
) -> dict[str, NestedQueryRecord]:
    def _flatten(package: ContractPackage) -> tuple[str, NestedQueryRecord]:
        if not package.schema_file.exists():
            logger.debug("No consolidated schema for %s; skipping nested queries", package.path)
            return package.contract_name, {}
        document = load_schema_document(package.schema_file)
        record = flatten_nested_queries(
            document, contract_name=package.contract_name, mutate=mutate
        )
        return package.contract_name, record

    results = await asyncio.gather(
        *(asyncio.to_thread(_flatten, package) for package in packages)
    )
    return {contract_name: record for contract_name, record in results if record}
