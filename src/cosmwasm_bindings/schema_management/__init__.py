"""Schema management exports."""

from .nested_query_flattener import (
    NestedSchemaError,
    flatten_nested_queries,
    load_schema_document,
    save_schema_document,
)
from .schema_models import NestedQuery, NestedQueryRecord, SchemaDocument

__all__ = [
    "NestedQuery",
    "NestedQueryRecord",
    "SchemaDocument",
    "NestedSchemaError",
    "flatten_nested_queries",
    "load_schema_document",
    "save_schema_document",
]
