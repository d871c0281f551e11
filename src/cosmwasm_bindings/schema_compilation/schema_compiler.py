"""Sequential schema compilation for contract packages."""

from __future__ import annotations

import asyncio
import logging
import shlex
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path

from cosmwasm_bindings.configuration.runtime_settings import SchemaCompilerSettings
from cosmwasm_bindings.package_discovery.package_models import ContractPackage

logger = logging.getLogger(__name__)

CommandRunner = Callable[[tuple[str, ...], Path], Awaitable[str]]


class SchemaCompilationError(Exception):
    """Raised when a package schema cannot be compiled."""


async def compile_package_schemas(
    packages: Sequence[ContractPackage],
    settings: SchemaCompilerSettings,
    *,
    run_command: CommandRunner | None = None,
) -> None:
    """Rebuild the schema of every package, one at a time.

    The compiler shares the cargo workspace lock, so packages are never built
    concurrently.
    """
    command_runner = run_command or run_checked_command
    for package in packages:
        package.artifacts_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Compiling schema for %s", package.package_name)
        output = await command_runner(settings.command, package.artifacts_dir)
        if output.strip():
            logger.info("%s", output.strip())


async def run_checked_command(command: tuple[str, ...], cwd: Path) -> str:
    """Run one command and return its stderr, or stdout when stderr is empty."""
    command_text = shlex.join(command)
    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as exc:
        raise SchemaCompilationError(f"Schema compiler not found: {command_text}") from exc
    stdout, stderr = await process.communicate()
    if process.returncode != 0:
        details = stderr.decode("utf-8", errors="replace").strip()
        raise SchemaCompilationError(
            f"Schema compiler failed with exit code {process.returncode} in {cwd}: "
            f"{command_text}" + (f"\n{details}" if details else "")
        )
    return (stderr or stdout).decode("utf-8", errors="replace")
