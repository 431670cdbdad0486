"""Build-plugin execution engine."""

from buildengine.bootstrap import build_default_factory
from buildengine.errors import (
    BinaryNotFoundError,
    BuildEngineError,
    CommandTemplateError,
    ConfigLoadError,
    ExecutionError,
    InvalidRegistrationError,
    PluginFactoryError,
    ProcessSpawnError,
    UnsatisfiedDependencyError,
)
from buildengine.execution import BinaryLocator, CommandExecutor, ExecutionResult
from buildengine.models import BuildContext
from buildengine.plugins import ParameterDescriptor, PluginFactory, ResourceRegistry

__all__ = [
    "BinaryLocator",
    "BinaryNotFoundError",
    "BuildContext",
    "BuildEngineError",
    "CommandExecutor",
    "CommandTemplateError",
    "ConfigLoadError",
    "ExecutionError",
    "ExecutionResult",
    "InvalidRegistrationError",
    "ParameterDescriptor",
    "PluginFactory",
    "PluginFactoryError",
    "ProcessSpawnError",
    "ResourceRegistry",
    "UnsatisfiedDependencyError",
    "build_default_factory",
]
