"""
Use case for reading a text file, optionally restricted to a line range.
"""

import logging
from typing import Optional

from fsgate.exceptions import FileManagerError
from fsgate.ports.files.file_manager_port import FileManagerPort


def validate_line_range(start_line: Optional[int], end_line: Optional[int]) -> None:
    """
    Raises:
        ValueError: If a bound is below 1 or start_line is after end_line
    """
    if start_line is not None and start_line < 1:
        raise ValueError(f"start_line must be >= 1, got {start_line}")
    if end_line is not None and end_line < 1:
        raise ValueError(f"end_line must be >= 1, got {end_line}")
    if start_line is not None and end_line is not None and start_line > end_line:
        raise ValueError(f"start_line ({start_line}) must be <= end_line ({end_line})")


def format_numbered_lines(
    content: str, start_line: Optional[int] = None, end_line: Optional[int] = None
) -> str:
    """Render ``content`` as "N: line" rows for the 1-based inclusive range, clamped to the file."""
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    start = 0 if start_line is None else min(start_line - 1, len(lines))
    end = len(lines) if end_line is None else min(end_line, len(lines))

    return "".join(f"{i + 1}: {lines[i]}\n" for i in range(start, end))


class ReadFileUseCase:
    """Use case for reading a file through the file manager."""

    def __init__(
        self,
        file_manager: FileManagerPort,
        logger: Optional[logging.Logger] = None,
    ):
        self._file_manager = file_manager
        self._logger = logger or logging.getLogger(__name__)

    def execute(self, path: str) -> str:
        """
        Read the whole file.

        Raises:
            FileManagerError: If the path is invalid, missing or a directory
        """
        try:
            self._logger.info(f"Reading file: {path}")
            content = self._file_manager.read_file(path)
            self._logger.debug(f"Read {len(content)} characters from {path}")
            return content
        except FileManagerError:
            raise
        except (OSError, UnicodeDecodeError) as e:
            self._logger.error(f"Error reading file: {e}")
            raise

    def execute_numbered(
        self,
        path: str,
        start_line: Optional[int] = None,
        end_line: Optional[int] = None,
    ) -> str:
        """
        Read the file and return the requested lines prefixed with their line numbers.

        Raises:
            ValueError: If the line range is invalid
            FileManagerError: If the path is invalid, missing or a directory
        """
        validate_line_range(start_line, end_line)
        return format_numbered_lines(self.execute(path), start_line, end_line)
