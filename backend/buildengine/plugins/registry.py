"""Registry of lazily produced resources for plugin construction."""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from buildengine.errors import InvalidRegistrationError

ResourceKey = tuple[str | None, str | None]


def type_key(declared_type: type | str | None) -> str | None:
    """Normalize a type given as a class or a string to a registry key."""

    if declared_type is None or isinstance(declared_type, str):
        return declared_type or None
    if isinstance(declared_type, type):
        return f"{declared_type.__module__}.{declared_type.__qualname__}"
    raise InvalidRegistrationError(f"Type must be a class or a string, got {declared_type!r}")


@dataclass(frozen=True, slots=True)
class ResourceEntry:
    """A registered producer and the key it answers to."""

    producer: Callable[[], Any]
    name: str | None = None
    type: str | None = None

    @property
    def key(self) -> ResourceKey:
        return (self.name, self.type)

    def produce(self) -> Any:
        return self.producer()


class ResourceRegistry:
    """In-memory registry keyed by ``(name, type)``.

    Producers are called on every resolution; nothing is cached. Registering
    the same key again replaces the earlier entry.
    """

    def __init__(self) -> None:
        self._entries: dict[ResourceKey, ResourceEntry] = {}
        self._lock = threading.RLock()

    def register(
        self,
        producer: Callable[[], Any],
        name: str | None = None,
        type: type | str | None = None,
    ) -> ResourceEntry:
        """Register ``producer`` under a name, a type, or both.

        Raises:
            InvalidRegistrationError: If neither name nor type is given, or
                the producer is not callable.
        """

        normalized_type = type_key(type)
        name = name or None
        if name is None and normalized_type is None:
            raise InvalidRegistrationError("Type or Name must be specified")
        if not callable(producer):
            raise InvalidRegistrationError("producer is expected to be a function")

        entry = ResourceEntry(producer=producer, name=name, type=normalized_type)
        with self._lock:
            self._entries[entry.key] = entry
        return entry

    def lookup(
        self,
        name: str | None = None,
        type: type | str | None = None,
    ) -> ResourceEntry | None:
        """Find the entry for a name/type pair without producing a value.

        Tries the exact ``(name, type)`` key, then a name-only entry, then a
        type-only entry.
        """

        normalized_type = type_key(type)
        name = name or None
        candidates: list[ResourceKey] = []
        if name is not None and normalized_type is not None:
            candidates.append((name, normalized_type))
        if name is not None:
            candidates.append((name, None))
        if normalized_type is not None:
            candidates.append((None, normalized_type))

        with self._lock:
            for key in candidates:
                entry = self._entries.get(key)
                if entry is not None:
                    return entry
        return None

    def resolve(self, name: str | None = None, type: type | str | None = None) -> Any:
        """Produce the value registered for a name/type pair, or ``None``."""

        entry = self.lookup(name, type)
        if entry is None:
            return None
        return entry.produce()

    def keys(self) -> list[ResourceKey]:
        """List registered keys in registration order."""

        with self._lock:
            return list(self._entries.keys())

    def clear(self) -> None:
        """Remove all entries (test utility)."""

        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
