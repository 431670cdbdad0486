"""Static constructor parameter declarations for pluggable steps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .registry import type_key


@dataclass(frozen=True, slots=True)
class ParameterDescriptor:
    """One constructor parameter of a pluggable step.

    Steps declare these in a ``parameters`` class attribute so the factory can
    wire them without inspecting the constructor.
    """

    name: str
    declared_type: str | None = None
    has_default: bool = False
    default: Any = None

    @classmethod
    def required(cls, name: str, declared_type: type | str | None = None) -> "ParameterDescriptor":
        return cls(name=name, declared_type=type_key(declared_type))

    @classmethod
    def optional(
        cls,
        name: str,
        default: Any = None,
        declared_type: type | str | None = None,
    ) -> "ParameterDescriptor":
        return cls(
            name=name,
            declared_type=type_key(declared_type),
            has_default=True,
            default=default,
        )


def parameters_of(step_type: type) -> tuple[ParameterDescriptor, ...]:
    """Return the declared parameter table of ``step_type`` (empty if none)."""

    return tuple(getattr(step_type, "parameters", ()) or ())
