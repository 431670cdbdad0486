"""Plugin factory, resource registry and plugin config loading."""

from buildengine.plugins.config_loader import (
    ResourceConfigEntry,
    ResourceConfigFile,
    ResourceRegistrar,
    apply_config_file,
    discover_config_files,
    load_config_script,
    load_resource_file,
)
from buildengine.plugins.descriptors import ParameterDescriptor, parameters_of
from buildengine.plugins.factory import OPTIONS_PARAMETER, PluginFactory
from buildengine.plugins.registry import ResourceEntry, ResourceRegistry, type_key

__all__ = [
    # Registry
    "ResourceEntry",
    "ResourceRegistry",
    "type_key",

    # Descriptors
    "ParameterDescriptor",
    "parameters_of",

    # Factory
    "OPTIONS_PARAMETER",
    "PluginFactory",

    # Config loading
    "ResourceConfigEntry",
    "ResourceConfigFile",
    "ResourceRegistrar",
    "apply_config_file",
    "discover_config_files",
    "load_config_script",
    "load_resource_file",
]
