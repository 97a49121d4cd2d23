"""Small path helpers used across the package."""

from __future__ import annotations

import os


def expand_path(path: str) -> str:
    """Expand a leading "~" or "~/" to the user's home directory.

    "~user" forms and paths without a leading tilde are returned unchanged, as is
    the input when the home directory cannot be determined.
    """
    if not path:
        return ""
    if path != "~" and not path.startswith("~/"):
        return path
    home = os.path.expanduser("~")
    if home == "~":
        return path
    if path == "~":
        return home
    return os.path.join(home, path[2:])


def normalize_dir(path: str) -> str:
    """Expand "~" and return an absolute, normalized directory path."""
    s = expand_path(str(path or "").strip())
    if not os.path.isabs(s):
        s = os.path.abspath(os.path.join(os.getcwd(), s))
    return os.path.normpath(s)


def to_slash(path: str) -> str:
    """Return ``path`` with the host separator replaced by "/"."""
    if os.sep == "/":
        return path
    return path.replace(os.sep, "/")
