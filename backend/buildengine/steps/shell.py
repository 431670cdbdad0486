"""Built-in step that runs configured shell commands."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field

from buildengine.execution import CommandExecutor
from buildengine.models import BuildContext
from buildengine.plugins.descriptors import ParameterDescriptor

from .base import BuildStep

logger = logging.getLogger(__name__)


class ShellStepOptions(BaseModel):
    """Options accepted by :class:`ShellCommandStep`."""

    commands: list[str | list[str]] = Field(default_factory=list)
    allow_failures: bool = False
    timeout: float | None = Field(default=None, gt=0)


class ShellCommandStep(BuildStep):
    """Runs ``options["commands"]`` in order, stopping at the first failure."""

    step_id = "shell"
    parameters = (
        ParameterDescriptor.required("executor", CommandExecutor),
        ParameterDescriptor.optional("build", None, BuildContext),
        ParameterDescriptor.optional("options", {}),
    )

    def __init__(
        self,
        executor: CommandExecutor,
        build: BuildContext | None = None,
        options: dict[str, Any] | None = None,
    ) -> None:
        self.executor = executor
        self.build = build
        self.options = ShellStepOptions(**(options or {}))
        self.results: list[dict[str, Any]] = []

    async def run(self) -> bool:
        """Run every command; failures are tolerated when ``allow_failures`` is set."""

        for template in self.options.commands:
            ok = await self.executor.execute(template, timeout=self.options.timeout)
            if self.executor.last_result is not None:
                self.results.append(self.executor.last_result.to_dict())
            if ok:
                continue

            logger.warning(
                "shell_step_command_failed",
                extra={
                    "build_id": self.build.build_id if self.build else None,
                    "error_output": self.executor.last_error,
                    "allowed": self.options.allow_failures,
                },
            )
            if not self.options.allow_failures:
                return False
        return True
