"""TypeScript module parsing on top of tree-sitter."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from functools import lru_cache

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

DECLARATION_NODE_TYPES = frozenset(
    {
        "interface_declaration",
        "type_alias_declaration",
        "enum_declaration",
        "class_declaration",
        "abstract_class_declaration",
        "function_declaration",
        "lexical_declaration",
    }
)


class TypeScriptSyntaxError(Exception):
    """Raised when a generated module cannot be parsed."""


@lru_cache(maxsize=1)
def _typescript_language() -> Language:
    return Language(tree_sitter_typescript.language_typescript())


@dataclass(frozen=True)
class Declaration:
    """A named top-level declaration and the byte span of its statement."""

    name: str
    start: int
    end: int


@dataclass(frozen=True)
class ImportStatement:
    """A named import statement and the symbols it pulls in."""

    source: str
    names: tuple[str, ...]
    start: int
    end: int


class TypeScriptModule:
    """Parsed view over one generated TypeScript module."""

    def __init__(self, text: str, *, label: str = "<module>") -> None:
        self.label = label
        self.source = text.encode("utf-8")
        self.root = Parser(_typescript_language()).parse(self.source).root_node
        if self.root.has_error:
            raise TypeScriptSyntaxError(f"Cannot parse TypeScript module {label}.")

    def text_of(self, node: Node) -> str:
        return self.slice(node.start_byte, node.end_byte)

    def slice(self, start: int, end: int) -> str:
        return self.source[start:end].decode("utf-8")

    def declarations(self) -> list[Declaration]:
        """Return top-level named declarations in source order."""
        found: list[Declaration] = []
        for statement in self.root.named_children:
            declaration = statement
            if statement.type == "export_statement":
                declaration = statement.child_by_field_name("declaration")
                if declaration is None:
                    continue
            if declaration.type not in DECLARATION_NODE_TYPES:
                continue
            name = self.declared_name(declaration)
            if name is not None:
                found.append(Declaration(name, statement.start_byte, statement.end_byte))
        return found

    def declared_name(self, declaration: Node) -> str | None:
        name_node = declaration.child_by_field_name("name")
        if name_node is None and declaration.type == "lexical_declaration":
            declarator = first_descendant(declaration, "variable_declarator")
            name_node = declarator.child_by_field_name("name") if declarator else None
        return self.text_of(name_node) if name_node is not None else None

    def named_imports(self) -> list[ImportStatement]:
        imports: list[ImportStatement] = []
        for statement in self.root.named_children:
            if statement.type != "import_statement":
                continue
            source_node = statement.child_by_field_name("source")
            if source_node is None:
                continue
            names = tuple(
                self.text_of(specifier)
                for specifier in iter_descendants(statement)
                if specifier.type == "import_specifier"
            )
            imports.append(
                ImportStatement(
                    source=string_value(self.text_of(source_node)),
                    names=names,
                    start=statement.start_byte,
                    end=statement.end_byte,
                )
            )
        return imports

    def reexports(self) -> list[str]:
        """Return the sources of ``export * from "..."`` statements."""
        sources: list[str] = []
        for statement in self.root.named_children:
            if statement.type != "export_statement":
                continue
            source_node = statement.child_by_field_name("source")
            if source_node is None or statement.child_by_field_name("declaration") is not None:
                continue
            if any(child.type == "*" for child in statement.children):
                sources.append(string_value(self.text_of(source_node)))
        return sources


def iter_descendants(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in source order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def first_descendant(node: Node, node_type: str) -> Node | None:
    for candidate in iter_descendants(node):
        if candidate.type == node_type:
            return candidate
    return None


def string_value(literal: str) -> str:
    return literal[1:-1] if literal[:1] in {'"', "'"} else literal
