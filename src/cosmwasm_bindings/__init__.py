"""Typed TypeScript bindings for CosmWasm contracts."""
