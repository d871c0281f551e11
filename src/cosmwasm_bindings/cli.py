"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from cosmwasm_bindings.build_pipeline import (
    BuildExecutionError,
    BuildRequest,
    execute_binding_build,
)
from cosmwasm_bindings.configuration import DEFAULT_CONFIG_FILENAME, write_placeholder_configuration
from cosmwasm_bindings.package_discovery import parse_package_list

ALL_PACKAGES = "*"


class CliError(Exception):
    """Custom CLI error."""


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="cosmwasm-bindings")
@click.option("-v", "--verbose", count=True, help="Log progress; repeat for debug output.")
def cli(verbose: int) -> None:
    """Generate and consolidate TypeScript bindings for CosmWasm contracts."""
    _configure_logging(verbose)


@cli.command(name="generate")
@click.option(
    "--force",
    "-f",
    "force",
    is_flag=False,
    flag_value=ALL_PACKAGES,
    default=None,
    metavar="[PKG_A,PKG_B,...]",
    help="Rebuild contract schemas first: all packages, or only the listed ones.",
)
@click.option(
    "--react-query",
    "react_query",
    is_flag=True,
    default=False,
    help="Also generate and patch react-query hooks.",
)
@click.option(
    "--context",
    "context_module",
    is_flag=True,
    default=False,
    help="Also write a contract context module for the generated clients.",
)
@click.option(
    "--workspace",
    "workspace_root",
    required=False,
    default=".",
    show_default=True,
    type=click.Path(path_type=str, file_okay=False),
    help="Workspace root holding the contracts folder",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str, dir_okay=False),
    help=f"Path to the YAML build configuration (default: <workspace>/{DEFAULT_CONFIG_FILENAME})",
)
def generate(
    force: str | None,
    react_query: bool,
    context_module: bool,
    workspace_root: str,
    config_path: str | None,
) -> None:
    """Generate bindings for every contract package."""
    force_packages = () if force in (None, ALL_PACKAGES) else parse_package_list(force)
    try:
        outcome = execute_binding_build(
            BuildRequest(
                workspace_root=workspace_root,
                config_path=str(Path(config_path).resolve()) if config_path else None,
                force=force is not None,
                force_packages=force_packages,
                react_query=react_query,
                context_module=context_module,
            )
        )
    except BuildExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(outcome.output_dir))


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML build configuration to write",
)
def generate_config(output_path: str) -> None:
    """Write a build configuration file with every default spelled out."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
