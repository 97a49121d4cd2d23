"""
Command history stored one entry per line in a plain-text file.
"""

import logging
import os
from typing import Optional

from typing_extensions import override

from fsgate.exceptions import HistoryError, HistoryErrorKind
from fsgate.ports.history.history_port import HistoryPort
from fsgate.utils.paths import expand_path
from fsgate.utils.rwlock import ReadWriteLock

FILE_MODE = 0o600
DIR_MODE = 0o700


class FileHistoryManager(HistoryPort):
    """
    History of CLI commands, persisted to a file.

    New entries are appended to the file. When the history grows past
    ``max_entries`` the oldest entries are dropped and the file is rewritten.
    File errors never fail an operation: the in-memory history stays usable and
    the failure is logged.
    """

    def __init__(
        self,
        file_path: str,
        max_entries: int = 0,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            file_path: History file; "~" is expanded. Empty string keeps history in memory only.
            max_entries: Maximum number of entries kept; 0 or negative means unlimited.
            logger: Logger instance to use for logging
        """
        self._file_path = expand_path(file_path)
        self._max_entries = max(max_entries, 0)
        self._logger = logger or logging.getLogger(__name__)
        self._history: list[str] = []
        self._lock = ReadWriteLock()
        self._load()

    @property
    def file_path(self) -> str:
        return self._file_path

    @override
    def add(self, entry: str) -> None:
        trimmed = entry.strip()
        if not trimmed:
            raise HistoryError(HistoryErrorKind.EMPTY)
        if "\n" in trimmed or "\r" in trimmed:
            raise HistoryError(HistoryErrorKind.EMBEDDED_NEWLINE)

        with self._lock.write_locked():
            if self._history and self._history[-1] == trimmed:
                raise HistoryError(HistoryErrorKind.CONSECUTIVE_DUPLICATE)

            self._history.append(trimmed)
            if self._max_entries and len(self._history) > self._max_entries:
                self._trim()
                self._rewrite_file()
            else:
                self._append_to_file(trimmed)

    @override
    def list(self) -> list[str]:
        with self._lock.read_locked():
            return self._history.copy()

    @override
    def size(self) -> int:
        with self._lock.read_locked():
            return len(self._history)

    @override
    def clear(self) -> None:
        with self._lock.write_locked():
            self._history = []
            self._rewrite_file()

    @override
    def last(self) -> tuple[str, bool]:
        with self._lock.read_locked():
            if not self._history:
                return "", False
            return self._history[-1], True

    def _trim(self) -> None:
        if self._max_entries and len(self._history) > self._max_entries:
            self._history = self._history[-self._max_entries :]

    def _load(self) -> None:
        if not self._file_path:
            return
        try:
            with open(self._file_path, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if line:
                        self._history.append(line)
        except FileNotFoundError:
            return
        except (OSError, UnicodeDecodeError) as e:
            self._logger.warning(f"Could not load history from {self._file_path}: {e}")
            self._history = []
            return
        self._trim()

    def _ensure_parent_dir(self) -> None:
        parent = os.path.dirname(self._file_path)
        if parent:
            os.makedirs(parent, mode=DIR_MODE, exist_ok=True)

    def _open(self, flags: int):
        fd = os.open(self._file_path, flags | os.O_CREAT | os.O_WRONLY, FILE_MODE)
        return open(fd, "w", encoding="utf-8")

    def _append_to_file(self, entry: str) -> None:
        if not self._file_path:
            return
        try:
            self._ensure_parent_dir()
            with self._open(os.O_APPEND) as f:
                f.write(entry + "\n")
        except OSError as e:
            self._logger.warning(f"Could not append to history file {self._file_path}: {e}")

    def _rewrite_file(self) -> None:
        if not self._file_path:
            return
        try:
            self._ensure_parent_dir()
            with self._open(os.O_TRUNC) as f:
                for entry in self._history:
                    f.write(entry + "\n")
        except OSError as e:
            self._logger.warning(f"Could not rewrite history file {self._file_path}: {e}")
