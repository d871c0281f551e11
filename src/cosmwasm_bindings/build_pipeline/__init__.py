"""Build pipeline exports."""

from .binding_build_use_case import BuildExecutionError, execute_binding_build, run_binding_build
from .binding_postprocessing import finalize_bindings, is_finalized
from .build_contracts import BuildOutcome, BuildRequest

__all__ = [
    "BuildRequest",
    "BuildOutcome",
    "BuildExecutionError",
    "execute_binding_build",
    "run_binding_build",
    "finalize_bindings",
    "is_finalized",
]
