# conftest.py - Global pytest configuration
"""
Global pytest configuration.

This file is automatically loaded by pytest before collecting tests.
It keeps debug scripts out of collection and isolates engine settings
from the developer's environment.
"""
import glob
import os

import pytest

# Collect all debug_*.py files anywhere in the backend tree and ignore them
_backend_root = os.path.dirname(os.path.abspath(__file__))
collect_ignore = []

for pattern in ["**/debug_*.py"]:
    for path in glob.glob(os.path.join(_backend_root, pattern), recursive=True):
        collect_ignore.append(os.path.relpath(path, _backend_root))


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Drop BUILD_ENGINE_* overrides and the cached settings around each test."""
    from buildengine.config import get_settings

    for key in list(os.environ):
        if key.startswith("BUILD_ENGINE_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_executable():
    """Create an executable shell script at the given path."""

    def _make(path, body="#!/bin/sh\nexit 0\n"):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body)
        path.chmod(0o755)
        return path

    return _make
