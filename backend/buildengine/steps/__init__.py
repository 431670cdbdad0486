"""Pipeline step contract and built-in steps."""

from .base import BuildStep
from .shell import ShellCommandStep, ShellStepOptions

__all__ = [
    "BuildStep",
    "ShellCommandStep",
    "ShellStepOptions",
]
