"""Build id carried through the executing context."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from uuid import uuid4

_build_id: ContextVar[str | None] = ContextVar("build_id", default=None)


def get_build_id() -> str | None:
    """Return the id of the build running in this context, if any."""
    return _build_id.get()


def set_build_id(build_id: str | None):
    """Bind ``build_id`` to the current context and return the reset token."""
    return _build_id.set(build_id)


def reset_build_id(token) -> None:
    _build_id.reset(token)


@contextmanager
def build_scope(build_id: str | None) -> Iterator[str | None]:
    """Bind ``build_id`` for the duration of the block.

    A ``None`` id leaves an enclosing build id in place, so nested helpers do
    not clear the id of the build they run under.
    """

    if build_id is None:
        yield get_build_id()
        return
    token = set_build_id(build_id)
    try:
        yield build_id
    finally:
        reset_build_id(token)


def ensure_build_id(build_id: str | None = None) -> str:
    """Return ``build_id``, or a fresh random id when none was given."""
    return build_id or uuid4().hex
