"""Nested query detection and flattening service.

A query message built from nested enums, e.g. ``QueryMsg::Treasury(TreasuryQuery)``,
is emitted by the schema compiler as an ``anyOf`` list of bare ``$ref`` variants.
The binding generator only understands single-property variants, so every such
variant is wrapped as ``{"treasury": <ref>}`` and remembered, so that the
generated client method can later be given its input argument back.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .schema_models import NestedQuery, NestedQueryRecord, SchemaDocument

logger = logging.getLogger(__name__)

_SUB_QUERY_REFERENCE = re.compile(r"([A-Z][a-z]+)Query$")


class NestedSchemaError(Exception):
    """Raised when a nested query schema does not follow the naming contract."""


def load_schema_document(path: Path) -> SchemaDocument:
    """Parse a schema file into a structured document."""
    try:
        root = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise NestedSchemaError(f"Invalid schema file {path}: {exc}") from exc
    if not isinstance(root, dict):
        raise NestedSchemaError(f"Schema root must be an object: {path}")
    return SchemaDocument(source_path=path, root=root)


def save_schema_document(document: SchemaDocument) -> None:
    document.source_path.write_text(
        json.dumps(document.root, indent=2, ensure_ascii=False), encoding="utf-8"
    )


def flatten_nested_queries(
    document: SchemaDocument, *, contract_name: str, mutate: bool
) -> NestedQueryRecord:
    """Record every nested query of ``document`` and optionally wrap it in place.

    Args:
      document: Schema to inspect; its root is modified when ``mutate`` is set.
      contract_name: Canonical contract name used in error messages.
      mutate: Rewrite bare variants into the wrapped shape and save the file.

    Returns:
      Mapping from synthesized response union name to the nested query details.
      Empty when the query schema has no ``anyOf`` variant list.

    Raises:
      NestedSchemaError: If a variant reference does not name a ``<Name>Query``
        type or its sub-query cannot be resolved.
    """
    query = document.root.get("query")
    if not isinstance(query, Mapping) or not isinstance(query.get("anyOf"), list):
        return {}

    record: dict[str, NestedQuery] = {}
    rewritten: list[Any] = []
    changed = False
    for variant in query["anyOf"]:
        reference, wrapped = _variant_reference(variant, contract_name)
        matched = _SUB_QUERY_REFERENCE.search(reference)
        if matched is None:
            raise NestedSchemaError(
                f"{contract_name}: query variant reference '{reference}' "
                "does not name a '<Name>Query' type."
            )
        base_name = matched.group(1)
        method_name = base_name.lower()
        input_type = reference.split("/")[-1]
        record[f"{base_name}Response"] = NestedQuery(
            method_name=method_name,
            input_type=input_type,
            response_names=_sub_response_names(document.root, input_type, contract_name),
        )

        if wrapped:
            rewritten.append(variant)
        elif mutate:
            rewritten.append(
                {
                    "type": "object",
                    "required": [method_name],
                    "properties": {method_name: variant},
                    "additionalProperties": False,
                }
            )
            changed = True
        else:
            logger.warning(
                "%s: nested query '%s' is not flattened on disk; rerun with --force",
                contract_name,
                method_name,
            )
            rewritten.append(variant)

    if changed:
        query["anyOf"] = rewritten
        save_schema_document(document)
        logger.info("Flattened %d nested queries in %s", len(record), document.source_path)
    return record


def _variant_reference(variant: Any, contract_name: str) -> tuple[str, bool]:
    """Return the sub-query reference of a variant and whether it is already wrapped."""
    if not isinstance(variant, Mapping):
        raise NestedSchemaError(f"{contract_name}: query variants must be objects.")
    if isinstance(variant.get("$ref"), str):
        return variant["$ref"], False

    required = variant.get("required")
    properties = variant.get("properties")
    if (
        isinstance(required, list)
        and len(required) == 1
        and isinstance(properties, Mapping)
        and isinstance(properties.get(required[0]), Mapping)
        and isinstance(properties[required[0]].get("$ref"), str)
    ):
        return properties[required[0]]["$ref"], True
    raise NestedSchemaError(
        f"{contract_name}: query variant has neither a sub-query reference "
        "nor a single required property referencing one."
    )


def _sub_response_names(
    root: Mapping[str, Any], input_type: str, contract_name: str
) -> tuple[str, ...]:
    definitions = root["query"].get("definitions") or {}
    sub_query = definitions.get(input_type)
    if not isinstance(sub_query, Mapping) or not isinstance(sub_query.get("oneOf"), list):
        raise NestedSchemaError(
            f"{contract_name}: sub-query definition '{input_type}' has no variant list."
        )
    responses = root.get("responses") or {}
    names: list[str] = []
    for sub_variant in sub_query["oneOf"]:
        required = sub_variant.get("required") if isinstance(sub_variant, Mapping) else None
        if not required:
            raise NestedSchemaError(
                f"{contract_name}: '{input_type}' variants must have one required property."
            )
        response = responses.get(required[0])
        if not isinstance(response, Mapping) or not isinstance(response.get("title"), str):
            raise NestedSchemaError(
                f"{contract_name}: no titled response for '{input_type}.{required[0]}'."
            )
        names.append(response["title"])
    return tuple(names)
