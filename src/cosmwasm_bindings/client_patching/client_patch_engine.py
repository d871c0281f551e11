"""Restores the input argument of flattened nested query methods.

After flattening, the generator sees ``{"treasury": TreasuryQuery}`` as a query
without fields and emits ``treasury: () => Promise<TreasuryResponse>`` sending
``{treasury: {}}``. Every patch site is located on the syntax tree of the
generated module; a site that cannot be found is an error.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from tree_sitter import Node

from cosmwasm_bindings.binding_generation.binding_layout import OutputForm
from cosmwasm_bindings.schema_management.schema_models import NestedQuery, NestedQueryRecord
from cosmwasm_bindings.typescript_syntax import (
    TextEdit,
    TypeScriptModule,
    apply_edits,
    first_descendant,
    iter_descendants,
)

_SIGNATURE_MEMBERS = frozenset({"property_signature", "method_signature"})
_IMPLEMENTATION_MEMBERS = frozenset({"public_field_definition", "method_definition"})

SitePatcher = Callable[[TypeScriptModule, str, str, NestedQuery], list[TextEdit]]


class ClientPatchError(Exception):
    """Raised when a generated module lacks an expected nested query site."""


def patch_nested_queries(
    text: str,
    *,
    contract_name: str,
    record: NestedQueryRecord,
    form: OutputForm,
    label: str = "<module>",
) -> str:
    """Return ``text`` with every nested query of ``record`` taking its input again."""
    if not record:
        return text
    module = TypeScriptModule(text, label=label)
    patcher = _FORM_PATCHERS[form]
    edits: list[TextEdit] = []
    for response_name, nested in record.items():
        edits.extend(patcher(module, contract_name, response_name, nested))
    return apply_edits(module.source, edits)


def _client_edits(
    module: TypeScriptModule, contract_name: str, response_name: str, nested: NestedQuery
) -> list[TextEdit]:
    returns_response = re.compile(rf"\b{re.escape(response_name)}\b")
    members = [
        node
        for node in iter_descendants(module.root)
        if node.type in _SIGNATURE_MEMBERS | _IMPLEMENTATION_MEMBERS
        and _name_of(module, node) == nested.method_name
        and returns_response.search(module.text_of(node))
    ]
    parameter = f"(input: {nested.input_type})"
    signatures = _empty_parameter_edits(
        [node for node in members if node.type in _SIGNATURE_MEMBERS], parameter
    )
    implementations = [node for node in members if node.type in _IMPLEMENTATION_MEMBERS]
    bodies = _empty_parameter_edits(implementations, parameter)
    payloads = [
        TextEdit(value.start_byte, value.end_byte, "input")
        for member in implementations
        for value in _empty_message_values(module, member, nested.method_name)
    ]
    _require(module, contract_name, nested, "interface signature", signatures)
    _require(module, contract_name, nested, "method implementation", bodies)
    _require(module, contract_name, nested, "query message", payloads)
    return signatures + bodies + payloads


def _react_query_edits(
    module: TypeScriptModule, contract_name: str, _response_name: str, nested: NestedQuery
) -> list[TextEdit]:
    method = nested.method_name
    query_interface = f"{contract_name}{method[:1].upper()}{method[1:]}Query"
    hook_name = f"use{query_interface}"

    interface_edits: list[TextEdit] = []
    hook_edits: list[TextEdit] = []
    call_edits: list[TextEdit] = []
    for node in iter_descendants(module.root):
        name = _name_of(module, node)
        if node.type == "interface_declaration" and name == query_interface:
            body = node.child_by_field_name("body")
            if body is not None and not body.named_children:
                replacement = f"{{\n  input: {nested.input_type};\n}}"
                interface_edits.append(TextEdit(body.start_byte, body.end_byte, replacement))
        elif node.type == "function_declaration" and name == hook_name:
            hook_edits.extend(_destructure_input(node))
            call_edits.extend(_forward_input(module, node, nested.method_name))

    _require(module, contract_name, nested, "query interface", interface_edits)
    _require(module, contract_name, nested, "hook parameters", hook_edits)
    _require(module, contract_name, nested, "client call", call_edits)
    return interface_edits + hook_edits + call_edits


_FORM_PATCHERS: dict[OutputForm, SitePatcher] = {
    OutputForm.CLIENT: _client_edits,
    OutputForm.REACT_QUERY: _react_query_edits,
}


def _name_of(module: TypeScriptModule, node: Node) -> str | None:
    name_node = node.child_by_field_name("name")
    return module.text_of(name_node) if name_node is not None else None


def _empty_parameter_edits(members: list[Node], parameter: str) -> list[TextEdit]:
    edits = []
    for member in members:
        parameters = first_descendant(member, "formal_parameters")
        if parameters is not None and not parameters.named_children:
            edits.append(TextEdit(parameters.start_byte, parameters.end_byte, parameter))
    return edits


def _empty_message_values(
    module: TypeScriptModule, member: Node, method_name: str
) -> list[Node]:
    values = []
    for pair in iter_descendants(member):
        if pair.type != "pair":
            continue
        key = pair.child_by_field_name("key")
        value = pair.child_by_field_name("value")
        if (
            key is not None
            and value is not None
            and module.text_of(key).strip("\"'") == method_name
            and value.type == "object"
            and not value.named_children
        ):
            values.append(value)
    return values


def _destructure_input(hook: Node) -> list[TextEdit]:
    parameters = hook.child_by_field_name("parameters")
    pattern = first_descendant(parameters, "object_pattern") if parameters is not None else None
    if pattern is None:
        return []
    if not pattern.named_children:
        return [TextEdit(pattern.start_byte, pattern.end_byte, "{\n  input\n}")]
    last = pattern.named_children[-1]
    return [TextEdit(last.end_byte, last.end_byte, ",\n  input")]


def _forward_input(module: TypeScriptModule, hook: Node, method_name: str) -> list[TextEdit]:
    edits = []
    for call in iter_descendants(hook):
        if call.type != "call_expression":
            continue
        callee = call.child_by_field_name("function")
        arguments = call.child_by_field_name("arguments")
        if callee is None or arguments is None or callee.type != "member_expression":
            continue
        prop = callee.child_by_field_name("property")
        if (
            prop is not None
            and module.text_of(prop) == method_name
            and not arguments.named_children
        ):
            edits.append(TextEdit(arguments.start_byte, arguments.end_byte, "(input)"))
    return edits


def _require(
    module: TypeScriptModule,
    contract_name: str,
    nested: NestedQuery,
    site: str,
    edits: list[TextEdit],
) -> None:
    if not edits:
        raise ClientPatchError(
            f"{module.label}: no {site} found for nested query "
            f"'{nested.method_name}' of {contract_name}."
        )
