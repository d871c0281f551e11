"""TypeScript syntax exports."""

from .syntax_tree import (
    Declaration,
    ImportStatement,
    TypeScriptModule,
    TypeScriptSyntaxError,
    first_descendant,
    iter_descendants,
)
from .text_edits import TextEdit, apply_edits

__all__ = [
    "Declaration",
    "ImportStatement",
    "TypeScriptModule",
    "TypeScriptSyntaxError",
    "TextEdit",
    "apply_edits",
    "first_descendant",
    "iter_descendants",
]
