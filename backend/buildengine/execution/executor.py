"""Shell command executor with concurrent stdout/stderr draining."""

from __future__ import annotations

import asyncio
import logging
import os
import signal
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from buildengine.errors import ProcessSpawnError
from buildengine.observability.build_context import build_scope, get_build_id

from .binary_locator import BinaryLocator
from .command import ExecutionResult, render_command

READ_CHUNK_SIZE = 65536
# How long readers may keep draining after the process group was killed.
KILL_GRACE_SECONDS = 2.0

_module_logger = logging.getLogger(__name__)


def _decode(data: bytes | bytearray) -> str:
    return bytes(data).decode("utf-8", errors="replace").rstrip("\r\n")


async def _read_stream(stream: asyncio.StreamReader | None, buffer: bytearray) -> None:
    if stream is None:
        return
    while True:
        chunk = await stream.read(READ_CHUNK_SIZE)
        if not chunk:
            return
        buffer.extend(chunk)


class CommandExecutor:
    """Runs shell commands for build steps and keeps the most recent result.

    Both output pipes are drained by concurrent reader tasks while the child
    runs, so a child that fills one pipe never blocks on it. The exit status is
    collected only after both readers hit EOF.

    On timeout the shell's process group is killed and the readers get
    ``kill_grace`` seconds to reach EOF. A descendant that moved to another
    session can keep the pipes open; the readers are then abandoned and the
    output captured so far is kept.

    Each command is logged once as ``command_executed``, stamped with the
    executor's ``build_id``. Verbose executors also log ``executing_command``
    at DEBUG before the shell starts.
    """

    def __init__(
        self,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
        build_path: str | os.PathLike | None = None,
        *,
        quiet: bool = False,
        verbose: bool = False,
        timeout: float | None = None,
        locator: BinaryLocator | None = None,
        search_paths: Sequence[str] = (),
        local_bin_dirs: Sequence[str] = (),
        build_id: str | None = None,
        kill_grace: float = KILL_GRACE_SECONDS,
    ) -> None:
        self.logger = logger or _module_logger
        self.build_path = Path(build_path) if build_path is not None else None
        self.quiet = quiet
        self.verbose = verbose
        self.timeout = timeout
        self.build_id = build_id
        self.kill_grace = kill_grace
        self.locator = locator or BinaryLocator(
            self.build_path,
            search_paths=search_paths,
            local_bin_dirs=local_bin_dirs,
        )
        self._last_result: ExecutionResult | None = None

    @property
    def last_result(self) -> ExecutionResult | None:
        return self._last_result

    @property
    def last_output(self) -> str:
        return self._last_result.output if self._last_result else ""

    @property
    def last_error(self) -> str:
        return self._last_result.error if self._last_result else ""

    def find_binary(self, name: str | Sequence[str], quiet: bool = False) -> str | None:
        """Locate an executable, searching the build path first."""

        return self.locator.find(name, quiet=quiet)

    async def execute(self, template: Sequence[Any] | str, timeout: float | None = None) -> bool:
        """Render and run ``template``; return whether it exited with status 0.

        Raises:
            CommandTemplateError: If the template cannot be rendered.
            ProcessSpawnError: If the shell cannot be started.
        """

        with build_scope(self.build_id):
            return await self._execute(template, timeout)

    async def _execute(self, template: Sequence[Any] | str, timeout: float | None) -> bool:
        self._last_result = None
        command = render_command(template)
        timeout = timeout if timeout is not None else self.timeout

        if self.verbose and not self.quiet:
            self.logger.debug("executing_command", extra={"command": command})

        started_at = datetime.now(timezone.utc)
        try:
            process = await asyncio.create_subprocess_shell(
                command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=str(self.build_path) if self.build_path is not None else None,
                start_new_session=True,
            )
        except OSError as exc:
            raise ProcessSpawnError(f"Failed to start shell for command: {command}: {exc}") from exc

        stdout = bytearray()
        stderr = bytearray()
        timed_out = False
        drain = asyncio.ensure_future(self._drain(process, stdout, stderr))
        try:
            await asyncio.wait_for(asyncio.shield(drain), timeout=timeout)
        except asyncio.TimeoutError:
            timed_out = True
            self._kill(process)
            await self._finish_drain(process, drain)
        except asyncio.CancelledError:
            self._kill(process)
            drain.cancel()
            raise

        exit_code = None if timed_out else process.returncode
        error_text = _decode(stderr)
        if timed_out:
            notice = f"Command timed out after {timeout} seconds"
            error_text = f"{error_text}\n{notice}" if error_text else notice

        result = ExecutionResult(
            command=command,
            success=exit_code == 0,
            exit_code=exit_code,
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
            output=_decode(stdout),
            error=error_text,
            timed_out=timed_out,
        )
        self._last_result = result
        self._log_result(result)
        return result.success

    async def _drain(
        self,
        process: asyncio.subprocess.Process,
        stdout: bytearray,
        stderr: bytearray,
    ) -> None:
        await asyncio.gather(
            _read_stream(process.stdout, stdout),
            _read_stream(process.stderr, stderr),
        )
        await process.wait()

    async def _finish_drain(self, process: asyncio.subprocess.Process, drain: asyncio.Future) -> None:
        done, _ = await asyncio.wait({drain}, timeout=self.kill_grace)
        if done:
            await drain
            return
        # A descendant that left the process group still holds the pipes open.
        self.logger.warning("command_pipes_abandoned", extra={"pid": process.pid})
        drain.cancel()
        await asyncio.wait({drain})
        transport = getattr(process, "_transport", None)
        if transport is not None:
            transport.close()

    def _kill(self, process: asyncio.subprocess.Process) -> None:
        if process.returncode is not None:
            return
        self.logger.warning("killing_command", extra={"pid": process.pid})
        try:
            # The shell runs in its own session; take its children down with it.
            os.killpg(process.pid, signal.SIGKILL)
        except (ProcessLookupError, PermissionError):
            try:
                process.kill()
            except ProcessLookupError:
                pass

    def _log_result(self, result: ExecutionResult) -> None:
        extra: dict[str, Any] = {
            "command": result.command,
            "success": result.success,
            "exit_code": result.exit_code,
            "timed_out": result.timed_out,
            "build_id": get_build_id(),
        }
        if not self.quiet and (not result.success or self.verbose):
            extra["output"] = result.output
            extra["error_output"] = result.error

        if self.quiet:
            level = logging.DEBUG
        else:
            level = logging.INFO if result.success else logging.WARNING
        self.logger.log(level, "command_executed", extra=extra)
