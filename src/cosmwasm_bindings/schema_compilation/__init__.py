"""Schema compilation exports."""

from .schema_compiler import (
    CommandRunner,
    SchemaCompilationError,
    compile_package_schemas,
    run_checked_command,
)

__all__ = [
    "CommandRunner",
    "SchemaCompilationError",
    "compile_package_schemas",
    "run_checked_command",
]
