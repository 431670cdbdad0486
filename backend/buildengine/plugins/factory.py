"""Factory that builds pipeline steps from registered resources."""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, TypeVar

from buildengine.errors import ConfigLoadError, UnsatisfiedDependencyError

from .config_loader import apply_config_file, discover_config_files
from .descriptors import ParameterDescriptor, parameters_of
from .registry import ResourceEntry, ResourceRegistry

logger = logging.getLogger(__name__)

OPTIONS_PARAMETER = "options"

StepT = TypeVar("StepT")


class PluginFactory:
    """Builds pluggable steps, injecting resources by parameter name or type.

    Resolution order per declared parameter:
    1) per-call ``options`` for a parameter named ``options``
    2) a registry entry matching the parameter name
    3) a registry entry matching the declared type
    4) the declared default

    ``last_options`` holds the options passed to the most recent
    ``build_plugin`` call and is overwritten by every call. It is plain
    per-factory state with no locking, so threads sharing a factory see each
    other's options there; steps receive their own options independently.
    """

    def __init__(self, registry: ResourceRegistry | None = None) -> None:
        self.registry = registry if registry is not None else ResourceRegistry()
        self.last_options: dict[str, Any] | None = None

    def register_resource(
        self,
        producer: Callable[[], Any],
        name: str | None = None,
        type: type | str | None = None,
    ) -> ResourceEntry:
        """Register a resource producer; see :meth:`ResourceRegistry.register`."""

        return self.registry.register(producer, name=name, type=type)

    def build_plugin(
        self,
        step_type: type[StepT],
        options: Mapping[str, Any] | None = None,
    ) -> StepT:
        """Instantiate ``step_type`` with its declared parameters resolved.

        Raises:
            UnsatisfiedDependencyError: If a required parameter has no
                matching resource.
        """

        self.last_options = dict(options) if options is not None else None

        kwargs: dict[str, Any] = {}
        for param in parameters_of(step_type):
            kwargs[param.name] = self._resolve_parameter(param, options)

        return step_type(**kwargs)

    def _resolve_parameter(
        self,
        param: ParameterDescriptor,
        options: Mapping[str, Any] | None,
    ) -> Any:
        is_options = param.name == OPTIONS_PARAMETER
        if is_options and options is not None:
            return dict(options)

        entry = self.registry.lookup(name=param.name, type=param.declared_type)
        if entry is not None:
            return entry.produce()

        if param.has_default:
            return copy.deepcopy(param.default)
        if is_options:
            return {}
        raise UnsatisfiedDependencyError(param.name)

    def add_config_from_file(self, path: str | Path) -> bool:
        """Load a plugin config file into this factory's registry.

        Returns ``False`` when the file cannot be loaded; registration errors
        raised by the file itself propagate.
        """

        try:
            apply_config_file(path, self.registry)
        except ConfigLoadError as e:
            logger.warning(
                "plugin_config_not_loaded",
                extra={"path": str(path), "reason": str(e)},
            )
            return False

        logger.info("plugin_config_loaded", extra={"path": str(path)})
        return True

    def load_config_directory(self, directory: str | Path, filenames: list[str]) -> int:
        """Load every known plugin config file found in ``directory``.

        Returns the number of files loaded.
        """

        loaded = 0
        for path in discover_config_files(directory, filenames):
            if self.add_config_from_file(path):
                loaded += 1
        return loaded
