"""
Tests for the FileInfo entity.
"""

import os
import stat
from datetime import datetime, timezone

import pytest

from fsgate.entities.file_info import FileInfo, format_permissions


class TestFileInfo:
    """Test cases for the FileInfo entity."""

    def test_from_stat_for_file(self, temp_directory: str):
        """Test building FileInfo from a file's stat result."""
        path = os.path.join(temp_directory, "test2.py")
        st = os.stat(path)

        info = FileInfo.from_stat("test2.py", path, st)

        assert info.name == "test2.py"
        assert info.path == "test2.py"
        assert info.size == st.st_size
        assert info.is_directory is False
        assert info.modified.tzinfo is timezone.utc

    def test_from_stat_for_directory(self, temp_directory: str):
        """Test building FileInfo from a directory's stat result."""
        path = os.path.join(temp_directory, "subdir")

        info = FileInfo.from_stat(path, path, os.stat(path))

        assert info.name == "subdir"
        assert info.is_directory is True

    def test_get_details(self):
        """Test the serializable details dictionary."""
        modified = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        info = FileInfo("a.txt", "dir/a.txt", 3, modified, False, "-rw-------")

        assert info.get_details() == {
            "name": "a.txt",
            "path": "dir/a.txt",
            "size": 3,
            "modified": "2024-05-01T12:00:00+00:00",
            "is_directory": False,
            "permissions": "-rw-------",
        }

    def test_equality(self):
        """Test FileInfo equality."""
        modified = datetime(2024, 5, 1, tzinfo=timezone.utc)

        assert FileInfo("a", "a", 1, modified, False, "-rw-------") == FileInfo(
            "a", "a", 1, modified, False, "-rw-------"
        )
        assert FileInfo("a", "a", 1, modified, False, "-rw-------") != FileInfo(
            "a", "a", 2, modified, False, "-rw-------"
        )

    def test_str_and_repr(self):
        """Test string representations."""
        info = FileInfo("a.txt", "x/a.txt", 3, datetime.now(timezone.utc), False, "-rw-------")

        assert str(info) == "FileInfo(name='a.txt', size=3, permissions='-rw-------')"
        assert repr(info) == "FileInfo(path='x/a.txt')"


class TestFormatPermissions:
    """Test cases for format_permissions."""

    def test_regular_file(self):
        """Test rendering a regular file mode."""
        assert format_permissions(stat.S_IFREG | 0o644) == "-rw-r--r--"

    def test_directory(self):
        """Test rendering a directory mode."""
        assert format_permissions(stat.S_IFDIR | 0o700) == "drwx------"

    def test_symlink_type_is_kept(self):
        """Test that the symlink type character is kept."""
        assert format_permissions(stat.S_IFLNK | 0o777) == "lrwxrwxrwx"

    @pytest.mark.parametrize(
        "mode, expected",
        [(stat.S_IFDIR | 0o750, "d750"), (stat.S_IFREG | 0o4644, "-644")],
    )
    def test_short_rendering_falls_back_to_octal(self, monkeypatch, mode, expected):
        """Test the octal fallback when filemode renders fewer than 10 characters."""
        monkeypatch.setattr(stat, "filemode", lambda m: "?")

        assert format_permissions(mode) == expected
