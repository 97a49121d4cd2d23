"""
File manager port interface defining the contract for sandboxed file operations.
"""

from abc import ABC, abstractmethod

from fsgate.entities.file_info import FileInfo


class FileManagerPort(ABC):
    """Port interface for file system operations confined to a base directory."""

    @abstractmethod
    def read_file(self, path: str) -> str:
        """
        Read the contents of a file.

        Args:
            path: Path to the file

        Returns:
            Full file content as text

        Raises:
            FileManagerError: If the path is invalid, missing or a directory
        """
        pass

    @abstractmethod
    def write_file(self, path: str, content: str) -> None:
        """
        Create or truncate a file and write content to it.

        Args:
            path: Path to the file
            content: Text content to write

        Raises:
            FileManagerError: If the path is invalid or a directory
        """
        pass

    @abstractmethod
    def list_files(self, path: str, recursive: bool = False) -> list[str]:
        """
        List entries of a directory.

        Args:
            path: Directory path
            recursive: Walk the whole subtree instead of immediate children

        Returns:
            Entry names, or paths relative to ``path`` using "/" separators

        Raises:
            FileManagerError: If the path is invalid, missing or not a directory
        """
        pass

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        """
        Check whether a file or directory exists.

        Raises:
            FileManagerError: If the path is invalid
        """
        pass

    @abstractmethod
    def create_directory(self, path: str) -> None:
        """
        Create a directory and any missing parents. Existing directories are left alone.

        Raises:
            FileManagerError: If the path is invalid or exists as a file
        """
        pass

    @abstractmethod
    def delete_file(self, path: str) -> None:
        """
        Delete a file, or a directory with all of its contents.

        Raises:
            FileManagerError: If the path is invalid or missing
        """
        pass

    @abstractmethod
    def get_file_info(self, path: str) -> FileInfo:
        """
        Return metadata about a file or directory, following symlinks.

        Raises:
            FileManagerError: If the path is invalid or missing
        """
        pass
