"""Dataclasses shared by build steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(slots=True)
class BuildContext:
    """The build a step is constructed for."""

    build_id: str
    build_path: Path
    metadata: dict[str, Any] = field(default_factory=dict)
