"""Bootstrap helpers for wiring a plugin factory for one build."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from buildengine.config import EngineSettings, get_settings
from buildengine.execution import BinaryLocator, CommandExecutor
from buildengine.models import BuildContext
from buildengine.observability.build_context import ensure_build_id
from buildengine.plugins import PluginFactory

logger = logging.getLogger(__name__)


def build_default_factory(
    build_path: str | os.PathLike,
    settings: EngineSettings | None = None,
    build_id: str | None = None,
    build_logger: logging.Logger | None = None,
) -> PluginFactory:
    """Build a factory populated with the engine's built-in resources.

    Registers the command executor, binary locator, build context and
    settings, then loads any plugin config files found in ``build_path``.
    """

    settings = settings or get_settings()
    build_path = Path(build_path)
    build = BuildContext(build_id=ensure_build_id(build_id), build_path=build_path)
    factory = PluginFactory()

    def make_locator() -> BinaryLocator:
        return BinaryLocator(
            build_path,
            search_paths=settings.binary_search_paths,
            local_bin_dirs=settings.local_bin_dirs,
        )

    def make_executor() -> CommandExecutor:
        return CommandExecutor(
            build_logger,
            build_path,
            quiet=settings.quiet_commands,
            verbose=settings.verbose_commands,
            timeout=settings.command_timeout_seconds,
            locator=make_locator(),
            build_id=build.build_id,
        )

    factory.register_resource(make_executor, type=CommandExecutor)
    factory.register_resource(make_executor, name="executor")
    factory.register_resource(make_locator, type=BinaryLocator)
    factory.register_resource(lambda: build, type=BuildContext)
    factory.register_resource(lambda: build, name="build")
    factory.register_resource(lambda: settings, type=EngineSettings)

    loaded = factory.load_config_directory(build_path, settings.plugin_config_filenames)
    logger.info(
        "plugin_factory_ready",
        extra={"build_id": build.build_id, "resources": len(factory.registry), "configs_loaded": loaded},
    )
    return factory
