"""Logging and build context helpers."""

from buildengine.observability.build_context import (
    build_scope,
    ensure_build_id,
    get_build_id,
    reset_build_id,
    set_build_id,
)
from buildengine.observability.logging import BuildContextFilter, configure_logging

__all__ = [
    "BuildContextFilter",
    "build_scope",
    "configure_logging",
    "ensure_build_id",
    "get_build_id",
    "reset_build_id",
    "set_build_id",
]
