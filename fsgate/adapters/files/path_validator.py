"""
Path validation that keeps caller-supplied paths inside a base directory.
"""

import logging
import os
from typing import Optional

from fsgate.exceptions import PathValidationError

# Shell metacharacters are refused outright, whatever the path resolves to.
DANGEROUS_CHARACTERS = frozenset("|;$&<>`")


class PathValidator:
    """
    Decide whether a path may be touched and return the absolute path to act on.

    Checks run in order and stop at the first failure:

    1. format: empty strings, null bytes and shell metacharacters are refused
    2. bounds: the normalized path (relative paths are anchored at the process
       working directory) must not climb out of the base directory
    3. prefix: the normalized path must equal the base or start with base + separator
    4. symlinks: the path is resolved through every existing component and the
       result must still be inside the resolved base directory

    Checks 2 and 3 only look at strings and exist to reject the common case
    cheaply. Check 4 is the authoritative one.
    """

    def __init__(self, base_dir: str, logger: Optional[logging.Logger] = None):
        """
        Initialize the validator.

        Args:
            base_dir: Boundary directory, absolute or relative to the working directory.
                It does not need to exist yet.
            logger: Logger instance used for rejection diagnostics
        """
        self._base_dir = os.path.abspath(base_dir)
        self._logger = logger or logging.getLogger(__name__)

    @property
    def base_dir(self) -> str:
        return self._base_dir

    def validate(self, path: str) -> str:
        """
        Validate ``path`` and return the absolute in-bounds path it refers to.

        Raises:
            PathValidationError: If any check fails
        """
        try:
            self._validate_format(path)
            candidate = self._validate_bounds(path)
            self._validate_resolved(path, candidate)
        except PathValidationError as e:
            self._logger.debug(str(e))
            raise
        return candidate

    def is_valid(self, path: str) -> bool:
        try:
            self.validate(path)
        except PathValidationError:
            return False
        return True

    def _validate_format(self, path: str) -> None:
        if not isinstance(path, str):
            raise PathValidationError(path, "path must be a string")
        if path == "":
            raise PathValidationError(path, "empty path")
        if "\x00" in path:
            raise PathValidationError(path, "contains null byte")
        if any(ch in DANGEROUS_CHARACTERS for ch in path):
            raise PathValidationError(path, "contains dangerous characters")

    def _validate_bounds(self, path: str) -> str:
        cleaned = os.path.normpath(path)
        if os.path.isabs(cleaned):
            candidate = cleaned
        else:
            try:
                candidate = os.path.abspath(cleaned)
            except OSError as e:
                # os.getcwd() fails when the working directory was removed
                raise PathValidationError(path, "failed to resolve absolute path", e)

        try:
            rel = os.path.relpath(candidate, self._base_dir)
        except ValueError as e:
            raise PathValidationError(path, "failed to get relative path", e)

        # also refuses in-bounds names such as "..hidden"
        if rel.startswith(os.pardir):
            raise PathValidationError(path, "path traversal attempt detected")

        if not _is_within(candidate, self._base_dir):
            raise PathValidationError(path, "path is outside base directory boundary")

        return candidate

    def _validate_resolved(self, path: str, candidate: str) -> None:
        try:
            resolved_base = _resolve(self._base_dir)
            resolved = _resolve(candidate)
        except OSError as e:
            raise PathValidationError(path, "failed to resolve symlinks", e)

        if not _is_within(resolved, resolved_base):
            raise PathValidationError(path, "symlink target is outside base directory boundary")


def _is_within(path: str, base: str) -> bool:
    if path == base:
        return True
    prefix = base if base.endswith(os.sep) else base + os.sep
    return path.startswith(prefix)


def _resolve(path: str) -> str:
    """
    Resolve every symlink in ``path``.

    Components that do not exist yet are appended to the resolved form of their
    nearest existing ancestor. A dangling symlink or a symlink loop raises OSError.
    """
    try:
        return os.path.realpath(path, strict=True)
    except (FileNotFoundError, NotADirectoryError):
        if os.path.lexists(path):
            raise
        parent, name = os.path.split(path)
        if parent == path:
            raise
        return os.path.join(_resolve(parent), name)
