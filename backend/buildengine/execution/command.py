"""Command template rendering and execution result payloads."""

from __future__ import annotations

import re
import shlex
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from buildengine.errors import CommandTemplateError

_DOUBLE_QUOTE_SPECIALS = re.compile(r'([\\"$`])')


def escape_argument(value: str, quote: str | None = None) -> str:
    """Escape ``value`` for insertion at a point of a shell string.

    ``quote`` is the quoting context the placeholder sits in: ``None`` for a
    bare word, ``'"'`` inside double quotes, ``"'"`` inside single quotes.
    """

    if quote == '"':
        return _DOUBLE_QUOTE_SPECIALS.sub(r"\\\1", value)
    if quote == "'":
        return value.replace("'", "'\\''")
    return shlex.quote(value)


def render_command(template: Sequence[Any]) -> str:
    """Render a command template into a single shell string.

    The first element is a format string with ``%s`` placeholders (``%%`` for a
    literal percent sign); the remaining elements are substituted in order,
    each escaped for the quoting context of its placeholder. A single-element
    template is still formatted, so ``%%`` becomes ``%``. A plain string is
    taken as an already rendered command.

    Raises:
        CommandTemplateError: If the template is empty, uses an unsupported
            placeholder, or the argument count does not match.
    """

    if isinstance(template, str):
        return template
    if not template:
        raise CommandTemplateError("Command template cannot be empty")

    fmt, *args = [str(part) for part in template]

    out: list[str] = []
    quote: str | None = None
    used = 0
    i = 0
    while i < len(fmt):
        ch = fmt[i]
        if ch == "%":
            spec = fmt[i + 1 : i + 2]
            if spec == "%":
                out.append("%")
            elif spec == "s":
                if used >= len(args):
                    raise CommandTemplateError(
                        f"Not enough arguments for command template: {fmt}"
                    )
                out.append(escape_argument(args[used], quote))
                used += 1
            else:
                raise CommandTemplateError(f"Unsupported placeholder %{spec} in: {fmt}")
            i += 2
            continue
        if ch == "\\" and quote != "'":
            out.append(fmt[i : i + 2])
            i += 2
            continue
        if ch in ("'", '"'):
            if quote is None:
                quote = ch
            elif quote == ch:
                quote = None
        out.append(ch)
        i += 1

    if used != len(args):
        raise CommandTemplateError(
            f"Command template expects {used} arguments, got {len(args)}: {fmt}"
        )
    return "".join(out)


@dataclass(slots=True)
class ExecutionResult:
    """Outcome of a single executed command."""

    command: str
    success: bool
    exit_code: int | None
    started_at: datetime
    completed_at: datetime
    output: str = ""
    error: str = ""
    timed_out: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Serialize this result to a JSON-safe dictionary."""

        return {
            "command": self.command,
            "success": self.success,
            "exit_code": self.exit_code,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat(),
            "output": self.output,
            "error": self.error,
            "timed_out": self.timed_out,
        }
