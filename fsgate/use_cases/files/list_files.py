"""
Use case for listing files in a directory.
"""

import logging
from typing import Optional

from fsgate.exceptions import FileManagerError
from fsgate.ports.files.file_manager_port import FileManagerPort


class ListFilesUseCase:
    """Use case for listing files in a directory."""

    def __init__(
        self,
        file_manager: FileManagerPort,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the use case.

        Args:
            file_manager: Sandboxed file manager
            logger: Logger instance to use for logging
        """
        self._file_manager = file_manager
        self._logger = logger or logging.getLogger(__name__)

    def execute(self, directory: str, recursive: bool = True) -> list[str]:
        """
        List the entries of a directory.

        Args:
            directory: Path to the directory to list
            recursive: Include every descendant, not just immediate children

        Returns:
            Entry paths relative to ``directory``

        Raises:
            FileManagerError: If the directory is invalid, missing or not a directory
            OSError: If the directory cannot be read
        """
        try:
            self._logger.info(f"Listing files in directory: {directory}")
            files = self._file_manager.list_files(directory, recursive)
            self._logger.info(f"Found {len(files)} files")
            return files
        except FileManagerError:
            raise
        except OSError as e:
            self._logger.error(f"Error listing files: {e}")
            raise
