"""Plugin config loading: Python config scripts and YAML resource files.

A config script is a Python file exposing ``configure(registrar)``::

    def configure(registrar):
        registrar.register_resource(lambda: {"bar": "Hello"}, name="requiredArgument")

A YAML resource file lists static values::

    resources:
      - name: requiredArgument
        value:
          bar: Hello
"""

from __future__ import annotations

import copy
import hashlib
import importlib.util
import logging
import sys
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from buildengine.errors import ConfigLoadError

from .registry import ResourceRegistry

logger = logging.getLogger(__name__)

SCRIPT_SUFFIXES = {".py"}
YAML_SUFFIXES = {".yml", ".yaml"}
ENTRY_POINT = "configure"


class ResourceRegistrar:
    """Registration-only handle given to config scripts."""

    __slots__ = ("_registry",)

    def __init__(self, registry: ResourceRegistry) -> None:
        self._registry = registry

    def register_resource(
        self,
        producer: Callable[[], Any],
        name: str | None = None,
        type: type | str | None = None,
    ) -> None:
        self._registry.register(producer, name=name, type=type)


class ResourceConfigEntry(BaseModel):
    """A static resource declared in a YAML config file."""

    name: str | None = None
    type: str | None = None
    value: Any = None

    @model_validator(mode="after")
    def require_key(self) -> "ResourceConfigEntry":
        if not self.name and not self.type:
            raise ValueError("Type or Name must be specified")
        return self


class ResourceConfigFile(BaseModel):
    """Top-level structure of a YAML resource file."""

    resources: list[ResourceConfigEntry] = Field(default_factory=list)


def _constant_producer(value: Any) -> Callable[[], Any]:
    # Each resolution gets its own copy so steps cannot mutate shared config.
    return lambda: copy.deepcopy(value)


def load_config_script(path: Path) -> Callable[[ResourceRegistrar], Any]:
    """Import a config script and return its ``configure`` entry point.

    Raises:
        ConfigLoadError: If the file cannot be imported or has no entry point.
    """

    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:12]
    module_name = f"buildengine_pluginconfig_{digest}"

    try:
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise ConfigLoadError(f"Failed to create module spec for {path}")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
    except ConfigLoadError:
        raise
    except Exception as e:
        sys.modules.pop(module_name, None)
        raise ConfigLoadError(f"Failed to load config script {path}: {e}") from e

    configure = getattr(module, ENTRY_POINT, None)
    if not callable(configure):
        raise ConfigLoadError(f"{path} does not define a {ENTRY_POINT}() function")
    return configure


def load_resource_file(path: Path) -> ResourceConfigFile:
    """Parse and validate a YAML resource file.

    Raises:
        ConfigLoadError: If the YAML is invalid or does not match the schema.
    """

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigLoadError(f"Cannot read {path}: {e}") from e

    try:
        return ResourceConfigFile(**(data or {}))
    except (ValidationError, TypeError) as e:
        raise ConfigLoadError(f"Invalid resource file {path}: {e}") from e


def apply_config_file(path: str | Path, registry: ResourceRegistry) -> None:
    """Load ``path`` and apply its registrations to ``registry``.

    Raises:
        ConfigLoadError: If the file is missing, unsupported or malformed.
        InvalidRegistrationError: If a script registers a malformed resource.
    """

    path = Path(path)
    if not path.is_file():
        raise ConfigLoadError(f"Config file not found: {path}")

    suffix = path.suffix.lower()
    if suffix in SCRIPT_SUFFIXES:
        configure = load_config_script(path)
        configure(ResourceRegistrar(registry))
        return

    if suffix in YAML_SUFFIXES:
        config = load_resource_file(path)
        for entry in config.resources:
            registry.register(_constant_producer(entry.value), name=entry.name, type=entry.type)
        return

    raise ConfigLoadError(f"Unsupported config file type: {path}")


def discover_config_files(directory: str | Path, filenames: Iterable[str]) -> list[Path]:
    """Return the plugin config files present in ``directory``, in ``filenames`` order."""

    directory = Path(directory)
    if not directory.is_dir():
        logger.warning(f"Plugin config directory does not exist: {directory}")
        return []
    return [directory / name for name in filenames if (directory / name).is_file()]
