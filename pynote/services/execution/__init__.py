"""Remote execution: request building, submission and result classification."""

from .classifier import FORCED_TERMINATION_SIGNALS, NO_OUTPUT_PLACEHOLDER, classify
from .client import (
    ExecutionClient,
    ExecutionSettings,
    ExecutionState,
    normalize_stdin,
    running_outcome,
)

__all__ = [
    "ExecutionClient",
    "ExecutionSettings",
    "ExecutionState",
    "FORCED_TERMINATION_SIGNALS",
    "NO_OUTPUT_PLACEHOLDER",
    "classify",
    "normalize_stdin",
    "running_outcome",
]
