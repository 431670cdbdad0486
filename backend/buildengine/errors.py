"""Typed errors for the build engine."""


class BuildEngineError(Exception):
    """Base class for build engine errors."""


class ExecutionError(BuildEngineError):
    """Base class for command execution related errors."""


class BinaryNotFoundError(ExecutionError):
    """Raised when a binary cannot be located in any search directory."""

    def __init__(self, binary: str | list[str]):
        self.binary = binary
        names = binary if isinstance(binary, str) else ", ".join(binary)
        super().__init__(f"Could not find {names}")


class ProcessSpawnError(ExecutionError):
    """Raised when the shell itself cannot be started."""


class CommandTemplateError(ExecutionError, ValueError):
    """Raised when a command template cannot be rendered."""


class PluginFactoryError(BuildEngineError):
    """Base class for plugin factory wiring errors."""


class InvalidRegistrationError(PluginFactoryError, ValueError):
    """Raised when a resource registration is malformed."""


class UnsatisfiedDependencyError(PluginFactoryError):
    """Raised when a required step parameter cannot be resolved."""

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(f"Unsatisfied dependency: {parameter}")


class ConfigLoadError(PluginFactoryError, ValueError):
    """Raised when a plugin config file cannot be loaded."""
