"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

from .loader import DEFAULT_CONFIG_FILENAME

_CONFIG_SCAFFOLD_TEMPLATE = """# Build configuration for cosmwasm-bindings.
# Every key is optional; remove a key to keep its default.

workspace:
  # Folder holding one sub-directory (with Cargo.toml) per contract package.
  contracts_dir: "contracts"
  # Generated bindings are written here. The folder is wiped on every run.
  output_dir: "build"

schema_compiler:
  # Runs inside <package>/artifacts for every package selected with --force.
  command: ["cargo", "run", "-q", "--bin", "schema"]

generator:
  # Node.js executable used to drive @cosmwasm/ts-codegen from the workspace root.
  command: ["node"]
  bundle_scope: "contracts"
  bundle_file: "index.ts"
  react_query_version: "v4"

consolidation:
  # Declarations with these names, or ending with the suffix, stay per contract.
  private_type_names: ["InstantiateMsg", "ExecuteMsg", "QueryMsg", "MigrateMsg"]
  private_type_suffix: "Response"
  # error: abort when two contracts declare the same name differently.
  # first-wins: keep the first declaration seen.
  declaration_conflicts: "error"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML build configuration with defaults and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str = DEFAULT_CONFIG_FILENAME) -> Path:
    """Write the configuration scaffold to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
