"""
FileInfo domain entity.
"""

import os
import stat
from datetime import datetime, timezone
from typing import Any


class FileInfo:
    """
    Metadata snapshot of a file or directory inside the sandbox.
    """

    def __init__(
        self,
        name: str,
        path: str,
        size: int,
        modified: datetime,
        is_directory: bool,
        permissions: str,
    ):
        """
        Initialize the FileInfo entity.

        Args:
            name: Base name of the entry
            path: Path exactly as supplied by the caller
            size: Size in bytes
            modified: Last modification time (UTC)
            is_directory: True if the entry is a directory
            permissions: Mode string, e.g. "-rw-------"
        """
        self.name = name
        self.path = path
        self.size = size
        self.modified = modified
        self.is_directory = is_directory
        self.permissions = permissions

    @classmethod
    def from_stat(cls, path: str, resolved: str, st: os.stat_result) -> "FileInfo":
        """
        Build a FileInfo from an ``os.stat`` result.

        Args:
            path: Path as supplied by the caller
            resolved: Absolute path the stat was taken on
            st: Result of ``os.stat`` (symlinks already followed)
        """
        is_dir = stat.S_ISDIR(st.st_mode)
        return cls(
            name=os.path.basename(resolved.rstrip(os.sep)) or resolved,
            path=path,
            size=st.st_size,
            modified=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
            is_directory=is_dir,
            permissions=format_permissions(st.st_mode),
        )

    def get_details(self) -> dict[str, Any]:
        """
        Get the metadata as a JSON-friendly dictionary.
        """
        return {
            "name": self.name,
            "path": self.path,
            "size": self.size,
            "modified": self.modified.isoformat(),
            "is_directory": self.is_directory,
            "permissions": self.permissions,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileInfo):
            return NotImplemented
        return self.get_details() == other.get_details()

    def __str__(self) -> str:
        return f"FileInfo(name='{self.name}', size={self.size}, permissions='{self.permissions}')"

    def __repr__(self) -> str:
        return f"FileInfo(path='{self.path}')"


def format_permissions(mode: int) -> str:
    """Render a mode the way ``ls -l`` does, with an octal fallback."""
    rendered = stat.filemode(mode)
    # CPython always renders 10 characters; anything shorter falls back to octal
    if len(rendered) < 10:
        prefix = "d" if stat.S_ISDIR(mode) else "-"
        rendered = prefix + format(stat.S_IMODE(mode) & 0o777, "o")
    return rendered
