"""Item specification model.

ItemSpec is the normalized target of an operation: a canonical path, an
explicit recursion mode, an explicit version and a deletion id.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from tfvc.models.versions import LatestVersionSpec, VersionSpec
from tfvc.paths import is_server_path


class RecursionType(str, enum.Enum):
    """How far below an item an operation reaches."""

    NONE = "none"
    ONE_LEVEL = "one-level"
    FULL = "full"

    def __repr__(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ItemSpec:
    """A normalized operation target.

    Attributes:
        path: Canonical absolute local path, or normalized server path.
        recursion: Explicit recursion mode.
        version: Resolved version; never implicit.
        deletion_id: Disambiguates deleted items at the same path; 0 when
            the item is not a deletion.
    """

    path: str
    recursion: RecursionType
    version: VersionSpec
    deletion_id: int = 0

    @property
    def is_server_path(self) -> bool:
        return is_server_path(self.path)

    def to_text(self) -> str:
        """Serialize back to ``path[;version][;Xdeletion]`` form.

        The latest version is implied and therefore omitted.
        """
        text = self.path
        if not isinstance(self.version, LatestVersionSpec):
            text += ";" + self.version.to_text()
        if self.deletion_id:
            text += f";X{self.deletion_id}"
        return text

    def __str__(self) -> str:
        return self.path
