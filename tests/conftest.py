"""
Pytest configuration and shared fixtures.
"""

import os
from unittest.mock import MagicMock

import pytest

from fsgate.adapters.files.local_file_manager import LocalFileManager
from fsgate.config.settings import Settings
from fsgate.container import DependencyContainer


@pytest.fixture
def temp_directory(tmp_path):
    """
    Create a sandbox directory populated with a few files.

    Layout::

        test1.txt
        test2.py
        subdir/test3.md

    Returns:
        Absolute path to the sandbox directory
    """
    base = tmp_path / "sandbox"
    base.mkdir()
    (base / "test1.txt").write_text("This is a test file.")
    (base / "test2.py").write_text("print('Hello, world!')")
    (base / "subdir").mkdir()
    (base / "subdir" / "test3.md").write_text("# Test Markdown\n\nThis is a test.")
    return str(base)


@pytest.fixture
def outside_directory(tmp_path):
    """A directory next to the sandbox that must never be reachable."""
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "secret.txt").write_text("top secret")
    return str(outside)


@pytest.fixture
def mock_logger():
    """
    Create a mock logger for testing.

    Returns:
        Mock logger instance
    """
    return MagicMock()


@pytest.fixture
def file_manager(temp_directory, mock_logger):
    return LocalFileManager(temp_directory, mock_logger)


@pytest.fixture
def settings(temp_directory, tmp_path, monkeypatch):
    """Settings pointing at the sandbox and a throwaway history file."""
    monkeypatch.setenv("FSGATE_BASE_DIR", temp_directory)
    monkeypatch.setenv("FSGATE_HISTORY_FILE", os.path.join(str(tmp_path), "history"))
    monkeypatch.setenv("FSGATE_HISTORY_MAX", "5")
    monkeypatch.delenv("FSGATE_LOG_LEVEL", raising=False)
    return Settings()


@pytest.fixture
def dependency_container(settings, mock_logger):
    """
    Create a dependency container wired to the sandbox, with a mocked logger.
    """
    container = DependencyContainer(settings)
    container._logger = mock_logger
    return container
