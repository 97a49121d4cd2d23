"""
Tools "files.*" mapped to the sandboxed file manager and the Files use cases.
"""

import json
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from fsgate.exceptions import FileManagerError, ToolError
from fsgate.ports.files.file_manager_port import FileManagerPort
from fsgate.ports.tools.tools_port import ToolSpec, ToolsHandlerPort, missing_required
from fsgate.use_cases.files.edit_file import EditFileUseCase
from fsgate.use_cases.files.list_files import ListFilesUseCase
from fsgate.use_cases.files.read_file import ReadFileUseCase


def _path_param(description: str) -> dict[str, str]:
    return {"type": "string", "description": description}


TOOL_SPECS: list[ToolSpec] = [
    {
        "name": "files.read",
        "description": (
            "Read a text file and return its lines prefixed with line numbers. "
            "Do not use this with directory names."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "path": _path_param("Path of the file to read"),
                "start_line": {
                    "type": "integer",
                    "description": "1-based line to start from (default: first line)",
                },
                "end_line": {
                    "type": "integer",
                    "description": "1-based line to stop at, inclusive (default: last line)",
                },
            },
            "required": ["path"],
            "additionalProperties": False,
        },
    },
    {
        "name": "files.list",
        "description": "Recursively list files and directories under a path (default: '.').",
        "parameters": {
            "type": "object",
            "properties": {
                "path": _path_param("Directory to list"),
            },
            "additionalProperties": False,
        },
    },
    {
        "name": "files.edit",
        "description": (
            "Replace every occurrence of 'old_str' with 'new_str' in a file. "
            "'old_str' must match exactly, including whitespace. "
            "With an empty 'old_str' a missing file is created with 'new_str' as content."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "path": _path_param("Path of the file to edit"),
                "old_str": {"type": "string", "description": "Text to replace"},
                "new_str": {"type": "string", "description": "Replacement text"},
            },
            "required": ["path", "old_str", "new_str"],
            "additionalProperties": False,
        },
    },
    {
        "name": "files.write",
        "description": "Create or overwrite a text file (parent directories are created).",
        "parameters": {
            "type": "object",
            "properties": {
                "path": _path_param("Path of the file to write"),
                "content": {"type": "string"},
            },
            "required": ["path", "content"],
            "additionalProperties": False,
        },
    },
    {
        "name": "files.mkdir",
        "description": "Create a directory and any missing parents. Existing directories are fine.",
        "parameters": {
            "type": "object",
            "properties": {"path": _path_param("Directory to create")},
            "required": ["path"],
            "additionalProperties": False,
        },
    },
    {
        "name": "files.delete",
        "description": "Delete a file, or a directory with everything in it.",
        "parameters": {
            "type": "object",
            "properties": {"path": _path_param("Path to delete")},
            "required": ["path"],
            "additionalProperties": False,
        },
    },
    {
        "name": "files.stat",
        "description": "Return size, modification time, type and permissions of a path.",
        "parameters": {
            "type": "object",
            "properties": {"path": _path_param("Path to inspect")},
            "required": ["path"],
            "additionalProperties": False,
        },
    },
    {
        "name": "files.exists",
        "description": "Check whether a file or directory exists.",
        "parameters": {
            "type": "object",
            "properties": {"path": _path_param("Path to check")},
            "required": ["path"],
            "additionalProperties": False,
        },
    },
]


class FilesToolsHandler(ToolsHandlerPort):
    """Handler for file tools that an agent can call."""

    def __init__(
        self,
        file_manager: FileManagerPort,
        read_file_uc: ReadFileUseCase,
        list_files_uc: ListFilesUseCase,
        edit_file_uc: EditFileUseCase,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the files tools handler.

        Args:
            file_manager: Sandboxed file manager for the plain CRUD tools
            read_file_uc: Use case for reading files
            list_files_uc: Use case for listing files
            edit_file_uc: Use case for editing files
            logger: Logger instance to use for logging
        """
        self._file_manager = file_manager
        self._read_file_uc = read_file_uc
        self._list_files_uc = list_files_uc
        self._edit_file_uc = edit_file_uc
        self._logger = logger or logging.getLogger(__name__)
        self._specs = {spec["name"]: spec for spec in TOOL_SPECS}

    def available_tools(self) -> list[ToolSpec]:
        return list(TOOL_SPECS)

    def dispatch(self, name: str, arguments: dict[str, Any]) -> Any:
        """
        Run a files.* tool.

        Raises:
            ValueError: If the tool name is unknown
            ToolError: If the arguments are invalid or the operation fails
        """
        spec = self._specs.get(name)
        if spec is None:
            raise ValueError(f"Unknown tool: {name}")

        missing = missing_required(spec, arguments)
        if missing:
            raise ToolError(f"{name}: missing required argument(s): {', '.join(missing)}")

        self._logger.info(f"Executing {name} tool with arguments: {sorted(arguments)}")

        if name == "files.read":
            start_line = _optional_int(arguments, "start_line")
            end_line = _optional_int(arguments, "end_line")
            with _failure("Failed to read file"):
                return self._read_file_uc.execute_numbered(
                    str(arguments["path"]), start_line, end_line
                )

        if name == "files.list":
            directory = str(arguments.get("path") or ".")
            with _failure("Failed to list files"):
                files = self._list_files_uc.execute(directory, recursive=True)
            return json.dumps(files, ensure_ascii=False)

        if name == "files.edit":
            with _failure("Failed to edit file"):
                return self._edit_file_uc.execute(
                    str(arguments["path"]),
                    str(arguments["old_str"]),
                    str(arguments["new_str"]),
                )

        path = str(arguments["path"])

        if name == "files.write":
            with _failure("Failed to write file"):
                self._file_manager.write_file(path, str(arguments["content"]))
            return json.dumps({"status": "ok", "path": path}, ensure_ascii=False)

        if name == "files.mkdir":
            with _failure("Failed to create directory"):
                self._file_manager.create_directory(path)
            return json.dumps({"status": "ok", "path": path}, ensure_ascii=False)

        if name == "files.delete":
            with _failure("Failed to delete file"):
                self._file_manager.delete_file(path)
            return json.dumps({"status": "ok", "path": path}, ensure_ascii=False)

        if name == "files.stat":
            with _failure("Failed to get file info"):
                info = self._file_manager.get_file_info(path)
            return json.dumps(info.get_details(), ensure_ascii=False)

        # files.exists
        with _failure("Failed to check if file exists"):
            exists = self._file_manager.file_exists(path)
        return json.dumps({"path": path, "exists": exists}, ensure_ascii=False)


def _optional_int(arguments: dict[str, Any], key: str) -> Optional[int]:
    value = arguments.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ToolError(f"{key} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ToolError(f"{key} must be an integer, got {value!r}")


@contextmanager
def _failure(action: str) -> Iterator[None]:
    """Turn operation failures into ToolError prefixed with the action."""
    try:
        yield
    except ToolError:
        raise
    except (FileManagerError, OSError, ValueError) as e:
        raise ToolError(f"{action}: {e}") from e
