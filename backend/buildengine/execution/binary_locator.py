"""Executable lookup across build-local, configured and system directories."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Sequence
from pathlib import Path

from buildengine.errors import BinaryNotFoundError

logger = logging.getLogger(__name__)


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


class BinaryLocator:
    """Resolve program names to executable paths.

    Search order for each candidate name:
    1) ``root/name`` (any existing file)
    2) ``root/<local dir>/name`` for each of ``local_bin_dirs``
    3) ``<dir>/name`` for each of ``search_paths``
    4) the process ``PATH``
    """

    def __init__(
        self,
        root: str | os.PathLike | None = None,
        search_paths: Sequence[str] = (),
        local_bin_dirs: Sequence[str] = (),
    ) -> None:
        self.root = Path(root) if root is not None else None
        self.search_paths = list(search_paths)
        self.local_bin_dirs = list(local_bin_dirs)

    def find(self, name: str | Sequence[str], quiet: bool = False) -> str | None:
        """Find the first matching executable for ``name``.

        ``name`` may be a list of alternative program names; the first one
        found wins.

        Raises:
            BinaryNotFoundError: If nothing matches and ``quiet`` is false.
        """

        names = [name] if isinstance(name, str) else list(name)
        for candidate in names:
            path = self._find_one(candidate)
            if path is not None:
                logger.debug("binary_found", extra={"binary": candidate, "path": path})
                return path

        logger.debug("binary_not_found", extra={"binary": names})
        if quiet:
            return None
        raise BinaryNotFoundError(name if isinstance(name, str) else names)

    def _find_one(self, name: str) -> str | None:
        if self.root is not None:
            direct = self.root / name
            if direct.is_file():
                return str(direct)
            for local_dir in self.local_bin_dirs:
                local = self.root / local_dir / name
                if _is_executable(local):
                    return str(local)

        for directory in self.search_paths:
            fallback = Path(directory) / name
            if _is_executable(fallback):
                return str(fallback)

        return shutil.which(name)
