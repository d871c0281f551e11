"""Contract package discovery exports."""

from .package_catalog import (
    PackageDiscoveryError,
    canonical_contract_name,
    discover_contract_packages,
    parse_package_list,
    require_schema_dirs,
    select_packages,
)
from .package_models import BUILD_DESCRIPTOR, ContractPackage

__all__ = [
    "BUILD_DESCRIPTOR",
    "ContractPackage",
    "PackageDiscoveryError",
    "canonical_contract_name",
    "discover_contract_packages",
    "parse_package_list",
    "require_schema_dirs",
    "select_packages",
]
