"""
Source file selection.

Composes an ignore rule from an exclude-everything base, the project's ignore
file and re-inclusion patterns for the requested paths, then walks the scan
root and keeps the files the rule does not ignore. Patterns follow gitignore
syntax with last-match-wins precedence.
"""

import logging
import os
import re
from typing import List, Optional, Sequence

import pathspec

from extraction.config import (
    BASE_IGNORE_PATTERN,
    DEFAULT_IGNORE_FILE,
    SOURCE_EXTENSIONS,
)

logger = logging.getLogger(__name__)

_GLOB_SPECIAL_RE = re.compile(r"([\\*?\[\]])")


class SelectionError(RuntimeError):
    """Raised when the file selection cannot be completed."""


def _escape_pattern(path: str) -> str:
    return _GLOB_SPECIAL_RE.sub(r"\\\1", path)


def read_ignore_file(root: str, ignore_file_name: str = DEFAULT_IGNORE_FILE) -> List[str]:
    """Read ignore-file lines from ``root``; missing file means no lines.

    Raises:
        SelectionError: If the file exists but cannot be read as text.
    """
    ignore_path = os.path.join(root, ignore_file_name)
    if not os.path.isfile(ignore_path):
        logger.debug("No ignore file at %s", ignore_path)
        return []
    try:
        with open(ignore_path, "r", encoding="utf-8") as f:
            return f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise SelectionError(f"Cannot read ignore file {ignore_path}: {e}") from e


def reinclusion_patterns(root: str, include_path: str) -> List[str]:
    """Build the ``!`` patterns that re-include one requested path.

    A path with a recognized source extension is re-included itself as well
    as treated as a directory; anything else is treated as a directory only.
    Patterns are anchored at ``root``.
    """
    abs_path = os.path.abspath(os.path.join(root, include_path))
    rel_path = os.path.relpath(abs_path, root)
    if rel_path == os.pardir or rel_path.startswith(os.pardir + os.sep):
        logger.warning("Ignoring include path outside of %s: %s", root, include_path)
        return []

    prefix = "" if rel_path == os.curdir else _escape_pattern(rel_path.replace(os.sep, "/"))
    patterns = [f"!/{prefix}/**/*{ext}".replace("//", "/") for ext in SOURCE_EXTENSIONS]
    if os.path.splitext(include_path)[1] in SOURCE_EXTENSIONS:
        patterns.append(f"!/{prefix}")
    return patterns


def build_ignore_rule(
    root: str,
    include_paths: Sequence[str],
    ignore_file_name: Optional[str] = DEFAULT_IGNORE_FILE,
) -> List[str]:
    """Compose the ordered pattern list for a selection.

    Order: the base ``*`` pattern, the ignore file's lines (skipped when
    ``ignore_file_name`` is None), then the re-inclusion patterns of each
    requested path in request order.
    """
    patterns = [BASE_IGNORE_PATTERN]
    if ignore_file_name:
        patterns.extend(read_ignore_file(root, ignore_file_name))
    for include_path in include_paths:
        patterns.extend(reinclusion_patterns(root, include_path))
    return patterns


def compile_rule(patterns: Sequence[str]) -> pathspec.PathSpec:
    """Compile gitignore-style patterns.

    Raises:
        SelectionError: If a pattern is malformed.
    """
    try:
        return pathspec.PathSpec.from_lines("gitwildmatch", patterns)
    except (ValueError, TypeError) as e:
        raise SelectionError(f"Malformed ignore pattern: {e}") from e


def _raise_walk_error(error: OSError) -> None:
    raise SelectionError(f"Failed to walk {error.filename}: {error}") from error


def walk_files(root: str) -> List[str]:
    """List every file under ``root`` as a sorted POSIX-style relative path.

    Raises:
        SelectionError: On any filesystem error during the walk.
    """
    found = []
    for dirpath, dirs, files in os.walk(root, onerror=_raise_walk_error):
        dirs.sort()
        for name in files:
            rel_path = os.path.relpath(os.path.join(dirpath, name), root)
            found.append(rel_path.replace(os.sep, "/"))
    return sorted(found)


def select_files(
    root: str,
    include_paths: Sequence[str],
    ignore_file_name: Optional[str] = DEFAULT_IGNORE_FILE,
) -> List[str]:
    """Select the files eligible for extraction under ``root``.

    Args:
        root: Scan root directory.
        include_paths: Files or directories to re-include, absolute or
            relative to ``root``.
        ignore_file_name: Name of the ignore file looked up in ``root``.
            None disables the ignore file.

    Returns:
        Selected file paths relative to ``root``, sorted.

    Raises:
        SelectionError: If the root is missing or unreadable, the ignore file
            is unreadable or malformed, or the walk fails.

    Example:
        >>> select_files("/path/to/project", ["src"])
        ['src/app.js', 'src/components/Button.jsx']
    """
    root = os.path.abspath(root)
    if not os.path.isdir(root):
        raise SelectionError(f"Scan root not found: {root}")

    patterns = build_ignore_rule(root, include_paths, ignore_file_name)

    rule = compile_rule(patterns)
    logger.debug("Composed ignore rule with %d patterns", len(patterns))

    selected = [path for path in walk_files(root) if not rule.match_file(path)]
    logger.info(f"Selected {len(selected)} files under {root}")
    return selected
