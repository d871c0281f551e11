"""Contract package discovery and naming service."""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

from .package_models import BUILD_DESCRIPTOR, ContractPackage

_NAME_TOKEN_START = re.compile(r"^.|_.")
_PACKAGE_LIST_SEPARATOR = re.compile(r"\s*,\s*")


class PackageDiscoveryError(Exception):
    """Raised when contract packages cannot be resolved."""


def canonical_contract_name(package_name: str) -> str:
    """Capitalize the first character and every character after an underscore.

    >>> canonical_contract_name("oraiswap_oracle")
    'OraiswapOracle'
    """
    return _NAME_TOKEN_START.sub(lambda match: match.group(0)[-1].upper(), package_name)


def discover_contract_packages(contracts_dir: Path) -> tuple[ContractPackage, ...]:
    """Return every package directory that carries a build descriptor, sorted by name."""
    if not contracts_dir.is_dir():
        raise PackageDiscoveryError(f"Contracts directory not found: {contracts_dir}")
    packages = [
        ContractPackage(path=entry.resolve(), contract_name=canonical_contract_name(entry.name))
        for entry in sorted(contracts_dir.iterdir(), key=lambda item: item.name)
        if entry.is_dir() and (entry / BUILD_DESCRIPTOR).exists()
    ]
    return tuple(packages)


def parse_package_list(raw: str | None) -> tuple[str, ...]:
    """Split a comma separated package list; blank input selects nothing."""
    if raw is None:
        return ()
    return tuple(name for name in _PACKAGE_LIST_SEPARATOR.split(raw.strip()) if name)


def select_packages(
    packages: Sequence[ContractPackage], package_names: Sequence[str]
) -> tuple[ContractPackage, ...]:
    """Resolve requested package names, keeping the caller's order.

    An empty request selects every package.
    """
    if not package_names:
        return tuple(packages)
    by_name = {package.package_name: package for package in packages}
    unknown = [name for name in package_names if name not in by_name]
    if unknown:
        raise PackageDiscoveryError(f"Unknown contract packages: {', '.join(unknown)}")
    selected: list[ContractPackage] = []
    for name in package_names:
        if by_name[name] not in selected:
            selected.append(by_name[name])
    return tuple(selected)


def require_schema_dirs(packages: Sequence[ContractPackage]) -> None:
    """Fail when a package has no schema directory for the generator to read."""
    missing = [package for package in packages if not package.schema_dir.is_dir()]
    if missing:
        listed = ", ".join(str(package.schema_dir) for package in missing)
        raise PackageDiscoveryError(f"Schema directory not found: {listed}")
