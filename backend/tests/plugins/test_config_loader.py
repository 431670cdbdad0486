"""Tests for plugin config loading."""

from __future__ import annotations

import pytest

from buildengine.errors import ConfigLoadError
from buildengine.plugins import (
    ResourceRegistry,
    apply_config_file,
    discover_config_files,
    load_config_script,
    load_resource_file,
)


class TestLoadResourceFile:
    """Test YAML resource file parsing."""

    def test_load_valid_file(self, tmp_path):
        path = tmp_path / "pluginconfig.yml"
        path.write_text(
            """
resources:
  - name: coverage
    value:
      threshold: 80
  - type: app.Notifier
    value: email
"""
        )

        config = load_resource_file(path)

        assert len(config.resources) == 2
        assert config.resources[0].name == "coverage"
        assert config.resources[0].value == {"threshold": 80}
        assert config.resources[1].type == "app.Notifier"

    def test_empty_file_has_no_resources(self, tmp_path):
        path = tmp_path / "pluginconfig.yml"
        path.write_text("")

        assert load_resource_file(path).resources == []

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "pluginconfig.yml"
        path.write_text("resources: [unclosed")

        with pytest.raises(ConfigLoadError, match="Invalid YAML"):
            load_resource_file(path)

    def test_entry_without_name_or_type_raises(self, tmp_path):
        path = tmp_path / "pluginconfig.yml"
        path.write_text("resources:\n  - value: 1\n")

        with pytest.raises(ConfigLoadError, match="Invalid resource file"):
            load_resource_file(path)

    def test_non_mapping_document_raises(self, tmp_path):
        path = tmp_path / "pluginconfig.yml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigLoadError):
            load_resource_file(path)


class TestApplyConfigFile:
    """Test applying config files to a registry."""

    def test_yaml_values_are_copied_per_resolution(self, tmp_path):
        path = tmp_path / "pluginconfig.yaml"
        path.write_text("resources:\n  - name: settings\n    value:\n      items: [1]\n")
        registry = ResourceRegistry()

        apply_config_file(path, registry)
        first = registry.resolve(name="settings")
        first["items"].append(2)

        assert registry.resolve(name="settings") == {"items": [1]}

    def test_script_registrations_are_applied(self, tmp_path):
        path = tmp_path / "pluginconfig.py"
        path.write_text(
            "def configure(registrar):\n"
            "    registrar.register_resource(lambda: 42, type='answer.Type')\n"
        )
        registry = ResourceRegistry()

        apply_config_file(path, registry)

        assert registry.resolve(type="answer.Type") == 42

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigLoadError, match="not found"):
            apply_config_file(tmp_path / "missing.py", ResourceRegistry())

    def test_script_import_error_raises(self, tmp_path):
        path = tmp_path / "pluginconfig.py"
        path.write_text("import module_that_does_not_exist_anywhere\n")

        with pytest.raises(ConfigLoadError, match="Failed to load config script"):
            load_config_script(path)


def test_discover_config_files_keeps_filename_order(tmp_path):
    (tmp_path / "pluginconfig.yml").write_text("resources: []\n")
    (tmp_path / "pluginconfig.py").write_text("def configure(registrar):\n    pass\n")

    found = discover_config_files(tmp_path, ["pluginconfig.py", "pluginconfig.yml", "pluginconfig.yaml"])

    assert found == [tmp_path / "pluginconfig.py", tmp_path / "pluginconfig.yml"]


def test_discover_config_files_in_missing_directory(tmp_path):
    assert discover_config_files(tmp_path / "missing", ["pluginconfig.py"]) == []
