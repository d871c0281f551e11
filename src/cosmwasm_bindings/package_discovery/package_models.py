"""Contract package entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

BUILD_DESCRIPTOR = "Cargo.toml"


@dataclass(frozen=True)
class ContractPackage:
    """One contract package directory and the names derived from it."""

    path: Path
    contract_name: str

    @property
    def package_name(self) -> str:
        return self.path.name

    @property
    def artifacts_dir(self) -> Path:
        return self.path / "artifacts"

    @property
    def schema_dir(self) -> Path:
        return self.artifacts_dir / "schema"

    @property
    def schema_file(self) -> Path:
        """Consolidated schema written by the package's schema binary."""
        return self.schema_dir / f"{self.package_name.replace('_', '-')}.json"
