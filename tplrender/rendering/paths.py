"""Mapping of input paths onto output paths."""

from __future__ import annotations

import os

from .io import STDOUT, FileSystem, LocalFileSystem

TEMPLATE_SUFFIXES = (".tpl", ".tmpl")

_SEPARATORS = tuple({"/", os.sep})


def has_trailing_separator(path: str) -> bool:
    """Return True when path ends with a path separator."""
    return path.endswith(_SEPARATORS)


def strip_template_suffix(filename: str) -> str:
    """Remove a single trailing ``.tpl`` or ``.tmpl`` suffix.

    Only the first matching suffix, in that priority order, is removed:
    ``x.tpl.tmpl`` becomes ``x.tpl``.
    """
    for suffix in TEMPLATE_SUFFIXES:
        if filename.endswith(suffix):
            return filename[: -len(suffix)]
    return filename


def base_name(path: str) -> str:
    """Return the last element of path, ignoring trailing separators."""
    stripped = path.rstrip("".join(_SEPARATORS))
    if not stripped:
        return os.sep
    return os.path.basename(stripped)


def get_output_path(base: str, filename: str, fs: FileSystem | None = None) -> str:
    """Compute where the rendering of ``filename`` is written.

    Args:
        base: Output target; ``-`` or empty for standard output, a path
            ending in a separator (or naming an existing directory) to
            mirror the file beneath it, anything else for a single file
        filename: Base name of the template file being rendered
        fs: Filesystem used to probe whether base is a directory

    Returns:
        Output path, or ``-`` for standard output
    """
    if base in ("", STDOUT):
        return STDOUT

    filename = strip_template_suffix(filename)

    if has_trailing_separator(base):
        return os.path.normpath(os.path.join(base, filename))

    fs = fs or LocalFileSystem()
    if fs.is_dir(base):
        return os.path.normpath(os.path.join(base, filename))

    # Single-file mode: every render sent here appends to the same file.
    return base


def child_output_target(out: str, directory: str) -> str:
    """Output target used for the children of ``directory``.

    A directory-root target grows by the directory's base name, so the tree
    below it is mirrored; any other target is passed down unchanged.
    """
    if has_trailing_separator(out):
        return out + base_name(directory) + "/"
    return out
