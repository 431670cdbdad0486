"""Engine configuration from environment variables."""

import os
from functools import lru_cache
from os.path import abspath, dirname, join

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Current file is backend/buildengine/config.py, the project root is two levels up
base_dir = dirname(dirname(dirname(abspath(__file__))))
env_file_path = join(base_dir, ".env")

if os.path.exists(env_file_path):
    load_dotenv(env_file_path)


class EngineSettings(BaseSettings):
    """Build engine settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="BUILD_ENGINE_",
        env_file=env_file_path,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Binary lookup, searched in order after the build root
    binary_search_paths: list[str] = ["/usr/local/bin", "/usr/bin", "/bin"]
    local_bin_dirs: list[str] = [".venv/bin", "node_modules/.bin", "vendor/bin"]

    # Command execution
    command_timeout_seconds: float | None = None
    verbose_commands: bool = False
    quiet_commands: bool = False

    # Plugin config discovery inside the build directory
    plugin_config_filenames: list[str] = [
        "pluginconfig.py",
        "pluginconfig.yml",
        "pluginconfig.yaml",
    ]

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> EngineSettings:
    """Get cached settings instance."""
    return EngineSettings()
