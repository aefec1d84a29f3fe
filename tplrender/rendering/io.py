"""Filesystem access for rendering."""

from __future__ import annotations

import logging
import os
import stat
import sys
from contextlib import contextmanager
from typing import IO, Iterator, Protocol

from ..core.errors import OutputError

logger = logging.getLogger(__name__)

STDOUT = "-"


class FileSystem(Protocol):
    """Filesystem queries the renderer depends on."""

    def is_dir(self, path: str) -> bool:
        """Return True when path exists and is a directory."""
        ...

    def stat_is_dir(self, path: str) -> bool:
        """Like is_dir, but raise OSError when path cannot be stat'ed."""
        ...

    def list_dir(self, path: str) -> list[str]:
        """Return the names of the immediate entries of a directory."""
        ...


class LocalFileSystem:
    """FileSystem backed by the operating system."""

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def stat_is_dir(self, path: str) -> bool:
        return stat.S_ISDIR(os.stat(path).st_mode)

    def list_dir(self, path: str) -> list[str]:
        return os.listdir(path)


def ensure_parent(path: str) -> None:
    """Ensure parent directories exist for the given path.

    Args:
        path: Path whose parent directories should be created
    """
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, mode=0o755, exist_ok=True)


@contextmanager
def open_output(path: str) -> Iterator[IO[str]]:
    """Open a render destination for writing.

    ``-`` yields standard output, which is flushed but left open. Any other
    path is opened for appending: it is created when absent and existing
    content is never truncated. The file is flushed and closed on exit.

    Args:
        path: Destination path or ``-``

    Raises:
        OutputError: When the parent directory or the file cannot be created
    """
    if path == STDOUT:
        try:
            yield sys.stdout
        finally:
            sys.stdout.flush()
        return

    try:
        ensure_parent(path)
    except OSError as exc:
        raise OutputError(
            f"Error creating directory for {path!r}: {exc}", destination=path
        ) from exc

    try:
        handle = open(path, "a", encoding="utf-8")
    except OSError as exc:
        raise OutputError(
            f"Cannot open output file {path!r}: {exc}", destination=path
        ) from exc

    logger.debug(f"Opened {path} for appending")
    try:
        yield handle
    finally:
        handle.flush()
        os.fsync(handle.fileno())
        handle.close()
