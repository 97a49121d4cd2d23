"""
History port interface for command history storage.
"""

from abc import ABC, abstractmethod


class HistoryPort(ABC):
    """Port interface for an ordered, de-duplicated command history."""

    @abstractmethod
    def add(self, entry: str) -> None:
        """
        Append an entry.

        Raises:
            HistoryError: If the entry is empty, contains a newline or repeats the last entry
        """
        pass

    @abstractmethod
    def list(self) -> list[str]:
        """Return all entries, oldest first."""
        pass

    @abstractmethod
    def size(self) -> int:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def last(self) -> tuple[str, bool]:
        """Return the most recent entry and True, or ("", False) when empty."""
        pass
