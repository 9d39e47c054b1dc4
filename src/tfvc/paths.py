"""Server and local path helpers.

Server paths start with the ``$`` root marker and use ``/`` separators.
They are case-preserving but compare case-insensitively. Local paths are
canonicalized to absolute, OS-normalized form without resolving symlinks.
"""

from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING, Optional

from tfvc.exceptions import ItemSpecParseError

if TYPE_CHECKING:
    from tfvc.models.items import RecursionType

SERVER_ROOT_MARKER = "$"
SERVER_ROOT = "$/"
SERVER_SEPARATOR = "/"
WILDCARD_CHARACTERS = frozenset("*?")

_ILLEGAL_SERVER_CHARS = re.compile(r'[<>|"\x00-\x1f]')


def is_server_path(path: str) -> bool:
    return path.startswith(SERVER_ROOT_MARKER)


def has_wildcard(path: str) -> bool:
    return any(c in WILDCARD_CHARACTERS for c in path)


def normalize_server_path(path: str) -> str:
    """Normalize separators and relative segments of a server path.

    ``$\\Proj\\.\\a//b/`` becomes ``$/Proj/a/b``. Case is preserved.

    Raises:
        ItemSpecParseError: If the path is not rooted at ``$/``, contains
            illegal characters, or ``..`` escapes the root.
    """
    unified = path.replace("\\", SERVER_SEPARATOR)
    if not is_server_path(unified):
        raise ItemSpecParseError(path, "server paths must start with $/")

    rest = unified[len(SERVER_ROOT_MARKER):]
    if rest and not rest.startswith(SERVER_SEPARATOR):
        raise ItemSpecParseError(path, "server paths must start with $/")

    segments: list[str] = []
    for segment in rest.split(SERVER_SEPARATOR):
        if not segment or segment == ".":
            continue
        if segment == "..":
            if not segments:
                raise ItemSpecParseError(path, "path escapes the server root")
            segments.pop()
            continue
        if _ILLEGAL_SERVER_CHARS.search(segment):
            raise ItemSpecParseError(path, f"illegal character in '{segment}'")
        segments.append(segment)

    return SERVER_ROOT + SERVER_SEPARATOR.join(segments)


def canonicalize_local_path(path: str, cwd: Optional[str] = None) -> str:
    """Return an absolute, normalized local path.

    Relative paths are resolved against *cwd* (the process working
    directory when None). Canonicalizing a canonical path returns it
    unchanged.
    """
    expanded = os.path.expanduser(path)
    if not os.path.isabs(expanded):
        expanded = os.path.join(cwd or os.getcwd(), expanded)
    return os.path.normpath(expanded)


def _comparable(path: str) -> tuple[str, str]:
    if is_server_path(path):
        return normalize_server_path(path).casefold(), SERVER_SEPARATOR
    return os.path.normcase(os.path.normpath(path)), os.sep


def is_child_or_equal(parent: str, child: str, recursion: RecursionType) -> bool:
    """Whether *child* falls inside the scope *parent* with *recursion*.

    A server path never matches a local path and vice versa.
    """
    from tfvc.models.items import RecursionType

    if is_server_path(parent) != is_server_path(child):
        return False

    parent_cmp, sep = _comparable(parent)
    child_cmp, _ = _comparable(child)

    if parent_cmp == child_cmp:
        return True
    if recursion == RecursionType.NONE:
        return False

    prefix = parent_cmp if parent_cmp.endswith(sep) else parent_cmp + sep
    if not child_cmp.startswith(prefix):
        return False
    if recursion == RecursionType.FULL:
        return True
    return sep not in child_cmp[len(prefix):]
