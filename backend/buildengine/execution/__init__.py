"""Command execution: binary lookup, template rendering and the executor."""

from .binary_locator import BinaryLocator
from .command import ExecutionResult, escape_argument, render_command
from .executor import CommandExecutor

__all__ = [
    "BinaryLocator",
    "CommandExecutor",
    "ExecutionResult",
    "escape_argument",
    "render_command",
]
