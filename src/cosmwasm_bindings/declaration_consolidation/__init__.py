"""Declaration consolidation exports."""

from .declaration_models import DeclarationConflictError, DeclarationRegistry, DeclarationToken
from .import_rewriter import ImportRewriteError, split_sibling_import
from .type_module_consolidator import (
    consolidate_type_modules,
    register_module_declarations,
    render_shared_module,
    rewrite_type_module,
)

__all__ = [
    "DeclarationConflictError",
    "DeclarationRegistry",
    "DeclarationToken",
    "ImportRewriteError",
    "split_sibling_import",
    "consolidate_type_modules",
    "register_module_declarations",
    "render_shared_module",
    "rewrite_type_module",
]
