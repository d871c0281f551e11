"""Base binding generator boundary.

The generator itself is ``@cosmwasm/ts-codegen``; this module only builds its
job description and runs it through a Node.js child process.
"""

from __future__ import annotations

import asyncio
import json
import logging
import shlex
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol

from cosmwasm_bindings.configuration.runtime_settings import GeneratorSettings

from .binding_layout import ContractSchemaSource

logger = logging.getLogger(__name__)

DRIVER_SCRIPT = Path(__file__).with_name("ts_codegen_driver.cjs")


class BindingGenerationError(Exception):
    """Raised when the base generator fails or produces no bindings."""


class BindingGenerator(Protocol):  # pylint: disable=too-few-public-methods
    """Turns contract schema directories into per-contract TypeScript modules."""

    async def generate(
        self,
        contracts: Sequence[ContractSchemaSource],
        output_dir: Path,
        *,
        react_query: bool,
    ) -> None: ...


def build_codegen_job(
    contracts: Sequence[ContractSchemaSource],
    output_dir: Path,
    settings: GeneratorSettings,
    *,
    react_query: bool,
) -> dict[str, Any]:
    """Build the ts-codegen invocation: types, client, bundle and optional react-query."""
    return {
        "contracts": [
            {"name": contract.name, "dir": str(contract.schema_dir)} for contract in contracts
        ],
        "outPath": str(output_dir),
        "options": {
            "bundle": {"bundleFile": settings.bundle_file, "scope": settings.bundle_scope},
            "types": {"enabled": True},
            "client": {"enabled": True},
            "reactQuery": {
                "enabled": react_query,
                "optionalClient": True,
                "version": settings.react_query_version,
                "mutations": True,
            },
            "recoil": {"enabled": False},
            "messageComposer": {"enabled": False},
        },
    }


class TsCodegenGenerator:  # pylint: disable=too-few-public-methods
    """Runs ts-codegen from the workspace root so its node_modules are used."""

    def __init__(self, settings: GeneratorSettings, *, workspace_root: Path) -> None:
        self._settings = settings
        self._workspace_root = workspace_root

    async def generate(
        self,
        contracts: Sequence[ContractSchemaSource],
        output_dir: Path,
        *,
        react_query: bool,
    ) -> None:
        job = build_codegen_job(contracts, output_dir, self._settings, react_query=react_query)
        command = (*self._settings.command, str(DRIVER_SCRIPT))
        command_text = shlex.join(command)
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                cwd=self._workspace_root,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise BindingGenerationError(f"Binding generator not found: {command_text}") from exc
        stdout, stderr = await process.communicate(json.dumps(job).encode("utf-8"))
        if process.returncode != 0:
            details = stderr.decode("utf-8", errors="replace").strip()
            raise BindingGenerationError(
                f"Binding generator failed with exit code {process.returncode}: {command_text}"
                + (f"\n{details}" if details else "")
            )
        if stdout.strip():
            logger.debug("%s", stdout.decode("utf-8", errors="replace").strip())
        logger.info("Generated bindings for %d contracts in %s", len(contracts), output_dir)
