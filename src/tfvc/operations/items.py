"""Item and version resolution.

Turns free arguments of the form ``path[;version][;deletion]`` into
ItemSpecs with canonical paths and explicit versions.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Literal, Optional, Sequence, Union

from tfvc.exceptions import ItemSpecParseError, WildcardNotAllowedError, WrongArgumentCountError
from tfvc.models.items import ItemSpec, RecursionType
from tfvc.models.versions import parse_version_spec
from tfvc.paths import (
    canonicalize_local_path,
    has_wildcard,
    is_server_path,
    normalize_server_path,
)

if TYPE_CHECKING:
    from tfvc.models.versions import VersionSpec

logger = logging.getLogger(__name__)

QUALIFIER_SEPARATOR = ";"

_DELETION_ID = re.compile(r"^[Xx](\d+)$")


def split_qualifiers(argument: str) -> tuple[str, Optional[str], int]:
    """Split ``path[;version][;deletion]`` into its three parts.

    A qualifier ``X<n>`` is always a deletion id. A purely numeric second
    qualifier is a deletion id too; any other qualifier is a version.

    Returns:
        ``(path, version_text or None, deletion_id)``.
    """
    path, *qualifiers = argument.split(QUALIFIER_SEPARATOR)
    if not path:
        raise ItemSpecParseError(argument, "missing path")
    if len(qualifiers) > 2:
        raise ItemSpecParseError(argument, "too many ';' qualifiers")

    version_text: Optional[str] = None
    deletion_id: Optional[int] = None
    for position, qualifier in enumerate(qualifiers):
        match = _DELETION_ID.match(qualifier)
        if match is None and position == 1 and qualifier.isdigit():
            deletion_id_text = qualifier
        elif match is not None:
            deletion_id_text = match.group(1)
        else:
            deletion_id_text = None

        if deletion_id_text is not None:
            if deletion_id is not None:
                raise ItemSpecParseError(argument, "more than one deletion id")
            deletion_id = int(deletion_id_text)
        else:
            if version_text is not None:
                raise ItemSpecParseError(argument, "more than one version")
            if not qualifier:
                raise ItemSpecParseError(argument, "empty version")
            version_text = qualifier

    return path, version_text, deletion_id or 0


def resolve_path(path: str, cwd: Optional[str] = None) -> str:
    """Normalize a server path or canonicalize a local one."""
    if is_server_path(path):
        return normalize_server_path(path)
    return canonicalize_local_path(path, cwd)


def resolve_items(
    raw_args: Sequence[str],
    default_version: VersionSpec,
    *,
    allow_wildcards: bool,
    expected_count: Union[int, Literal["any"]] = "any",
    recursion: RecursionType = RecursionType.NONE,
    allow_deletion_ids: bool = False,
    cwd: Optional[str] = None,
) -> list[ItemSpec]:
    """Resolve free arguments into ItemSpecs.

    Empty arguments are skipped. Arguments without a version qualifier get
    *default_version*. Deletion ids are kept only when
    *allow_deletion_ids* is set; otherwise they resolve to 0.

    Raises:
        ItemSpecParseError: An argument is malformed.
        VersionSpecParseError: A version qualifier is malformed.
        WildcardNotAllowedError: A wildcard appears and is not allowed.
        WrongArgumentCountError: *expected_count* is fixed and differs.
    """
    items: list[ItemSpec] = []
    for argument in raw_args:
        if not argument:
            continue

        path_text, version_text, deletion_id = split_qualifiers(argument)
        if not allow_wildcards and has_wildcard(path_text):
            raise WildcardNotAllowedError(path_text)
        path = resolve_path(path_text, cwd)

        if deletion_id and not allow_deletion_ids:
            logger.debug("Ignoring deletion id %d on %s", deletion_id, path)
            deletion_id = 0

        version = default_version if version_text is None else parse_version_spec(version_text)
        items.append(ItemSpec(path, recursion, version, deletion_id))

    if expected_count != "any" and len(items) != expected_count:
        raise WrongArgumentCountError(expected_count, len(items))

    logger.debug("Resolved %d item(s): %s", len(items), [i.to_text() for i in items])
    return items


def resolve_new_name(argument: str, cwd: Optional[str] = None) -> str:
    """Resolve the new name given to an undelete.

    A target is a bare path: no version or deletion qualifier, no wildcard.

    Raises:
        ItemSpecParseError: The name is empty or carries a qualifier.
        WildcardNotAllowedError: The name contains a wildcard.
    """
    if not argument:
        raise ItemSpecParseError(argument, "missing path")
    if QUALIFIER_SEPARATOR in argument:
        raise ItemSpecParseError(argument, "a new name cannot carry ';' qualifiers")
    if has_wildcard(argument):
        raise WildcardNotAllowedError(argument)
    return resolve_path(argument, cwd)
