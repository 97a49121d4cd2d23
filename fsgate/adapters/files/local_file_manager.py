"""
Local file system adapter confined to a base directory.

Every public operation validates the caller's path before touching the disk and
runs under a per-instance reader/writer lock: reads share it, mutations hold it
exclusively. Validation happens inside the lock so that check and action are
atomic with respect to other mutations on the same manager.

Example:

    fm = LocalFileManager("/safe/base/directory")
    fm.write_file("/safe/base/directory/notes/todo.txt", "ship it")
    print(fm.read_file("/safe/base/directory/notes/todo.txt"))
"""

import logging
import os
import shutil
import stat
from contextlib import contextmanager
from typing import Iterator, Optional

from typing_extensions import override

from fsgate.adapters.files.path_validator import PathValidator
from fsgate.entities.file_info import FileInfo
from fsgate.exceptions import FileErrorKind, FileManagerError, PathValidationError
from fsgate.ports.files.file_manager_port import FileManagerPort
from fsgate.utils.paths import to_slash
from fsgate.utils.rwlock import ReadWriteLock

FILE_MODE = 0o600
DIR_MODE = 0o700


class LocalFileManager(FileManagerPort):
    """Thread-safe file manager whose operations never leave ``base_dir``."""

    def __init__(self, base_dir: str, logger: Optional[logging.Logger] = None):
        """
        Initialize the manager.

        Args:
            base_dir: Security boundary for all operations. A relative path is resolved
                against the current working directory now; the directory itself may be
                created later, but must exist before operations inside it succeed.
            logger: Logger instance to use for logging. If None, a default logger will be created.
        """
        self._logger: logging.Logger = logger or logging.getLogger(__name__)
        self._validator = PathValidator(base_dir, self._logger)
        self._lock = ReadWriteLock()

    @property
    def base_dir(self) -> str:
        return self._validator.base_dir

    def _validate_path(self, path: str) -> str:
        """
        Return the absolute path to operate on.

        Raises:
            FileManagerError: INVALID_PATH, without the underlying reason
        """
        try:
            return self._validator.validate(path)
        except PathValidationError:
            raise FileManagerError(FileErrorKind.INVALID_PATH, path) from None

    @contextmanager
    def _not_found_as(self, path: str) -> Iterator[None]:
        try:
            yield
        except FileNotFoundError as e:
            raise FileManagerError(FileErrorKind.NOT_FOUND, path) from e

    def _make_dirs(self, target: str) -> None:
        """Create ``target`` and any missing parents, each with DIR_MODE."""
        missing: list[str] = []
        current = target
        while not os.path.isdir(current):
            missing.append(current)
            parent = os.path.dirname(current)
            if parent == current:
                break
            current = parent

        for directory in reversed(missing):
            try:
                os.mkdir(directory, DIR_MODE)
            except FileExistsError:
                if not os.path.isdir(directory):
                    raise

    @override
    def read_file(self, path: str) -> str:
        """
        Read a UTF-8 text file.

        Raises:
            FileManagerError: INVALID_PATH, NOT_FOUND or IS_DIRECTORY
            OSError: For other I/O failures
        """
        with self._lock.read_locked():
            target = self._validate_path(path)
            with self._not_found_as(path):
                if os.path.isdir(target):
                    raise FileManagerError(FileErrorKind.IS_DIRECTORY, path)
                with open(target, "r", encoding="utf-8", newline="") as f:
                    return f.read()

    @override
    def write_file(self, path: str, content: str) -> None:
        """
        Write ``content`` to a file, creating it (mode 0600) and its parents (mode 0700).

        Existing files are truncated and keep their permissions.

        Raises:
            FileManagerError: INVALID_PATH or IS_DIRECTORY
            OSError: If the parent directories or the file cannot be written
        """
        with self._lock.write_locked():
            target = self._validate_path(path)
            if os.path.isdir(target):
                raise FileManagerError(FileErrorKind.IS_DIRECTORY, path)

            parent = os.path.dirname(target)
            try:
                self._make_dirs(parent)
            except OSError as e:
                self._logger.error(f"Failed to create parent directories for {path}: {e}")
                raise

            fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
            with open(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)

    @override
    def list_files(self, path: str, recursive: bool = False) -> list[str]:
        """
        List a directory.

        Raises:
            FileManagerError: INVALID_PATH, NOT_FOUND or NOT_DIRECTORY
        """
        with self._lock.read_locked():
            target = self._validate_path(path)
            with self._not_found_as(path):
                st = os.stat(target)
                if not stat.S_ISDIR(st.st_mode):
                    raise FileManagerError(FileErrorKind.NOT_DIRECTORY, path)
                if recursive:
                    return self._list_recursive(target)
                return self._list_children(target)

    def _list_children(self, target: str) -> list[str]:
        with os.scandir(target) as it:
            return sorted(entry.name for entry in it)

    def _list_recursive(self, target: str) -> list[str]:
        def _raise(err: OSError) -> None:
            raise err

        files: list[str] = []
        # Symlinked directories are reported but not descended into.
        for root, dirnames, filenames in os.walk(target, onerror=_raise):
            dirnames.sort()
            for name in dirnames + sorted(filenames):
                rel = os.path.relpath(os.path.join(root, name), target)
                files.append(to_slash(rel))
        return files

    @override
    def file_exists(self, path: str) -> bool:
        with self._lock.read_locked():
            target = self._validate_path(path)
            try:
                os.stat(target)
            except (FileNotFoundError, NotADirectoryError):
                return False
            return True

    @override
    def create_directory(self, path: str) -> None:
        """
        Create a directory chain. Calling it on an existing directory is a no-op.

        Raises:
            FileManagerError: INVALID_PATH, or NOT_DIRECTORY if a file is in the way
        """
        with self._lock.write_locked():
            target = self._validate_path(path)
            try:
                st = os.stat(target)
            except FileNotFoundError:
                self._make_dirs(target)
                return
            if not stat.S_ISDIR(st.st_mode):
                raise FileManagerError(FileErrorKind.NOT_DIRECTORY, path)

    @override
    def delete_file(self, path: str) -> None:
        """
        Delete a file, or a directory tree. Symlinks are removed, never followed.

        Raises:
            FileManagerError: INVALID_PATH or NOT_FOUND
        """
        with self._lock.write_locked():
            target = self._validate_path(path)
            with self._not_found_as(path):
                st = os.lstat(target)
                if stat.S_ISDIR(st.st_mode):
                    shutil.rmtree(target)
                else:
                    os.remove(target)

    @override
    def get_file_info(self, path: str) -> FileInfo:
        """
        Return metadata for ``path``; symlinks report their target's metadata.

        Raises:
            FileManagerError: INVALID_PATH or NOT_FOUND
        """
        with self._lock.read_locked():
            target = self._validate_path(path)
            with self._not_found_as(path):
                st = os.stat(target)
            return FileInfo.from_stat(path, target, st)
