"""Binding generation exports."""

from .base_generator import (
    BindingGenerationError,
    BindingGenerator,
    TsCodegenGenerator,
    build_codegen_job,
)
from .binding_layout import (
    CONTEXT_FILE,
    SHARED_TYPES_FILE,
    SHARED_TYPES_MODULE,
    ContractSchemaSource,
    OutputForm,
    contract_names_in,
    enabled_forms,
    local_types_module,
    types_file_name,
)
from .context_module import contract_kind, render_context_module, write_context_module

__all__ = [
    "BindingGenerationError",
    "BindingGenerator",
    "TsCodegenGenerator",
    "build_codegen_job",
    "CONTEXT_FILE",
    "SHARED_TYPES_FILE",
    "SHARED_TYPES_MODULE",
    "ContractSchemaSource",
    "OutputForm",
    "contract_names_in",
    "enabled_forms",
    "local_types_module",
    "types_file_name",
    "contract_kind",
    "render_context_module",
    "write_context_module",
]
