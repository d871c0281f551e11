"""Client patching exports."""

from .client_patch_engine import ClientPatchError, patch_nested_queries

__all__ = ["ClientPatchError", "patch_nested_queries"]
