"""
Dependency injection container for managing application dependencies.
"""

import logging
from typing import Any, Optional

from fsgate.adapters.files.local_file_manager import LocalFileManager
from fsgate.adapters.history.file_history import FileHistoryManager
from fsgate.config.settings import Settings, load_settings
from fsgate.ports.files.file_manager_port import FileManagerPort
from fsgate.ports.history.history_port import HistoryPort
from fsgate.ports.tools.tools_port import ToolsHandlerPort
from fsgate.use_cases.files.edit_file import EditFileUseCase
from fsgate.use_cases.files.list_files import ListFilesUseCase
from fsgate.use_cases.files.read_file import ReadFileUseCase
from fsgate.use_cases.tools.files_tools import FilesToolsHandler


class DependencyContainer:
    """
    Container for managing application dependencies using dependency injection.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings
        self._instances: dict[str, Any] = {}
        self._logger = logging.getLogger(__name__)

    def get_settings(self) -> Settings:
        if self._settings is None:
            self._settings = load_settings()
        return self._settings

    def get_file_manager(self) -> FileManagerPort:
        """
        Get the sandboxed file manager bound to the configured base directory.
        """
        if "file_manager" not in self._instances:
            self._instances["file_manager"] = LocalFileManager(
                self.get_settings().base_dir, self._logger
            )
        return self._instances["file_manager"]

    def get_history(self) -> HistoryPort:
        if "history" not in self._instances:
            settings = self.get_settings()
            self._instances["history"] = FileHistoryManager(
                settings.history_file, settings.history_max_entries, self._logger
            )
        return self._instances["history"]

    def get_read_file_use_case(self) -> ReadFileUseCase:
        if "read_file_use_case" not in self._instances:
            self._instances["read_file_use_case"] = ReadFileUseCase(
                self.get_file_manager(), self._logger
            )
        return self._instances["read_file_use_case"]

    def get_list_files_use_case(self) -> ListFilesUseCase:
        if "list_files_use_case" not in self._instances:
            self._instances["list_files_use_case"] = ListFilesUseCase(
                self.get_file_manager(), self._logger
            )
        return self._instances["list_files_use_case"]

    def get_edit_file_use_case(self) -> EditFileUseCase:
        if "edit_file_use_case" not in self._instances:
            self._instances["edit_file_use_case"] = EditFileUseCase(
                self.get_file_manager(), self._logger
            )
        return self._instances["edit_file_use_case"]

    def get_files_tools_handler(self) -> ToolsHandlerPort:
        """
        Registry of the 'files.*' tools backed by the Files use cases.
        """
        if "files_tools_handler" not in self._instances:
            self._instances["files_tools_handler"] = FilesToolsHandler(
                self.get_file_manager(),
                self.get_read_file_use_case(),
                self.get_list_files_use_case(),
                self.get_edit_file_use_case(),
                self._logger,
            )
        return self._instances["files_tools_handler"]

    def reset(self):
        """Reset all instances (useful for testing)."""
        self._instances.clear()
