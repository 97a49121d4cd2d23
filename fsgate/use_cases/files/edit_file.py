"""
Use case for string-replacement edits of a text file.
"""

import logging
import os
import threading
from typing import Optional

from fsgate.exceptions import FileManagerError, ToolError
from fsgate.ports.files.file_manager_port import FileManagerPort


class EditFileUseCase:
    """
    Replace every occurrence of ``old_str`` with ``new_str`` in a file.

    A missing file is created when ``old_str`` is empty, together with its parent
    directory. An empty ``old_str`` on an existing file is refused.

    The read-modify-write of one edit is serialized against other edits made
    through the same use case. Writes that bypass it (e.g. a direct
    ``write_file`` on the manager) can still land between the read and the write.
    """

    def __init__(
        self,
        file_manager: FileManagerPort,
        logger: Optional[logging.Logger] = None,
    ):
        self._file_manager = file_manager
        self._logger = logger or logging.getLogger(__name__)
        self._edit_lock = threading.Lock()

    def execute(self, path: str, old_str: str, new_str: str) -> str:
        """
        Apply the edit.

        Returns:
            "OK" for an edit, "Created file <path>" when the file was created

        Raises:
            ToolError: If the parameters are invalid or old_str is not in the file
            FileManagerError: If a file operation fails
        """
        if not path or old_str == new_str:
            raise ToolError(
                "invalid input parameters: path is required and old_str must differ from new_str"
            )

        self._logger.info(f"Editing file: {path}")
        with self._edit_lock:
            if not self._file_manager.file_exists(path) and old_str == "":
                return self._create(path, new_str)

            if old_str == "":
                raise ToolError("old_str must not be empty when editing an existing file")

            content = self._file_manager.read_file(path)
            if old_str not in content:
                raise ToolError("old string not found in file")

            self._file_manager.write_file(path, content.replace(old_str, new_str))
        return "OK"

    def _create(self, path: str, content: str) -> str:
        directory = os.path.dirname(path)
        if directory and directory != ".":
            try:
                self._file_manager.create_directory(directory)
            except FileManagerError as e:
                raise ToolError(f"Failed to create directory {directory}: {e}") from e

        self._file_manager.write_file(path, content)
        self._logger.info(f"Created file: {path}")
        return f"Created file {path}"
