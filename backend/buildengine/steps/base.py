"""Base contract for pipeline steps.

Steps are built by :class:`buildengine.plugins.PluginFactory`. A step declares
its constructor parameters in the ``parameters`` class attribute; the factory
resolves each one and passes them as keyword arguments.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from buildengine.plugins.descriptors import ParameterDescriptor


class BuildStep(ABC):
    """Abstract pipeline step contract."""

    step_id: ClassVar[str]
    parameters: ClassVar[tuple[ParameterDescriptor, ...]] = ()

    @abstractmethod
    async def run(self) -> bool:
        """Run the step and return whether it succeeded."""
