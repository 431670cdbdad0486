from __future__ import annotations

import asyncio

import pytest
from pydantic import ValidationError

from buildengine.errors import UnsatisfiedDependencyError
from buildengine.execution import CommandExecutor
from buildengine.plugins import PluginFactory
from buildengine.steps import BuildStep, ShellCommandStep


@pytest.fixture
def factory(tmp_path):
    factory = PluginFactory()
    factory.register_resource(lambda: CommandExecutor(build_path=tmp_path), type=CommandExecutor)
    return factory


def test_shell_step_is_a_build_step():
    assert issubclass(ShellCommandStep, BuildStep)
    assert ShellCommandStep.step_id == "shell"


def test_shell_step_requires_executor():
    with pytest.raises(UnsatisfiedDependencyError, match="executor"):
        PluginFactory().build_plugin(ShellCommandStep)


def test_shell_step_runs_commands_in_order(factory, tmp_path):
    step = factory.build_plugin(
        ShellCommandStep,
        {"commands": [["echo %s > out.txt", "first"], "echo second >> out.txt"]},
    )

    assert asyncio.run(step.run()) is True
    assert (tmp_path / "out.txt").read_text().splitlines() == ["first", "second"]
    assert [r["success"] for r in step.results] == [True, True]


def test_shell_step_stops_at_first_failure(factory, tmp_path):
    step = factory.build_plugin(
        ShellCommandStep,
        {"commands": ["exit 2", "touch never.txt"]},
    )

    assert asyncio.run(step.run()) is False
    assert not (tmp_path / "never.txt").exists()
    assert len(step.results) == 1
    assert step.results[0]["exit_code"] == 2


def test_shell_step_allow_failures_continues(factory, tmp_path):
    step = factory.build_plugin(
        ShellCommandStep,
        {"commands": ["exit 2", "touch after.txt"], "allow_failures": True},
    )

    assert asyncio.run(step.run()) is True
    assert (tmp_path / "after.txt").exists()


def test_shell_step_without_options_does_nothing(factory):
    step = factory.build_plugin(ShellCommandStep)

    assert step.options.commands == []
    assert asyncio.run(step.run()) is True


def test_shell_step_rejects_invalid_options(factory):
    with pytest.raises(ValidationError):
        factory.build_plugin(ShellCommandStep, {"timeout": -1})
