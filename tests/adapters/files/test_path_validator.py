"""
Tests for the PathValidator.
"""

import os

import pytest

from fsgate.adapters.files.path_validator import PathValidator
from fsgate.exceptions import PathValidationError


class TestPathValidatorFormat:
    """Format checks run before any file-system lookup."""

    @pytest.mark.parametrize(
        "suffix",
        ["a|b", "a;b", "a$b", "a&b", "a<b", "a>b", "a`b", "a\x00b"],
    )
    def test_rejects_dangerous_characters(self, temp_directory, suffix):
        """Test that shell metacharacters and null bytes are refused."""
        validator = PathValidator(temp_directory)

        with pytest.raises(PathValidationError):
            validator.validate(os.path.join(temp_directory, suffix))

    def test_rejects_empty_path(self, temp_directory):
        """Test that an empty path is refused."""
        validator = PathValidator(temp_directory)

        with pytest.raises(PathValidationError, match="empty path"):
            validator.validate("")

    def test_rejects_null_byte_with_reason(self, temp_directory):
        """Test the rejection reason for a null byte."""
        validator = PathValidator(temp_directory)

        with pytest.raises(PathValidationError, match="null byte"):
            validator.validate(os.path.join(temp_directory, "x\x00.txt"))

    def test_rejects_non_string(self, temp_directory):
        """Test that a non-string path is refused."""
        validator = PathValidator(temp_directory)

        with pytest.raises(PathValidationError, match="must be a string"):
            validator.validate(123)  # type: ignore[arg-type]

    def test_rejection_is_logged_at_debug(self, temp_directory, mock_logger):
        """Test that the rejection reason is only logged at DEBUG."""
        validator = PathValidator(temp_directory, mock_logger)

        with pytest.raises(PathValidationError):
            validator.validate("a;b")

        mock_logger.debug.assert_called_once()
        assert "dangerous characters" in mock_logger.debug.call_args[0][0]


class TestPathValidatorBounds:
    """Traversal and boundary checks."""

    def test_accepts_base_itself(self, temp_directory):
        """Test that the base directory itself is valid."""
        validator = PathValidator(temp_directory)

        assert validator.validate(temp_directory) == temp_directory

    def test_accepts_nested_path(self, temp_directory):
        """Test that a nested existing path is valid."""
        validator = PathValidator(temp_directory)
        path = os.path.join(temp_directory, "subdir", "test3.md")

        assert validator.validate(path) == path

    def test_accepts_not_yet_existing_path(self, temp_directory):
        """Test that a path whose components do not exist yet is valid."""
        validator = PathValidator(temp_directory)
        path = os.path.join(temp_directory, "new", "deeper", "file.txt")

        assert validator.validate(path) == path

    def test_collapses_dot_segments_inside_base(self, temp_directory):
        """Test that "." and ".." segments are collapsed before checking."""
        validator = PathValidator(temp_directory)
        path = os.path.join(temp_directory, "subdir", "..", "test1.txt")

        assert validator.validate(path) == os.path.join(temp_directory, "test1.txt")

    def test_rejects_parent_traversal(self, temp_directory):
        """Test that a ".." escape is refused."""
        validator = PathValidator(temp_directory)

        with pytest.raises(PathValidationError, match="path traversal attempt detected"):
            validator.validate(os.path.join(temp_directory, "..", "etc", "passwd"))

    def test_rejects_absolute_path_outside(self, temp_directory, outside_directory):
        """Test that an absolute path outside the base is refused."""
        validator = PathValidator(temp_directory)

        with pytest.raises(PathValidationError):
            validator.validate(os.path.join(outside_directory, "secret.txt"))

    def test_rejects_sibling_sharing_a_name_prefix(self, tmp_path):
        """Test that "/base2" is not treated as inside "/base"."""
        base = tmp_path / "box"
        base.mkdir()
        sibling = tmp_path / "box2"
        sibling.mkdir()
        validator = PathValidator(str(base))

        with pytest.raises(PathValidationError):
            validator.validate(str(sibling / "file.txt"))

    def test_rejects_name_starting_with_dots(self, temp_directory):
        """Test that a relative path beginning with ".." is refused even inside the base."""
        validator = PathValidator(temp_directory)

        with pytest.raises(PathValidationError, match="path traversal attempt detected"):
            validator.validate(os.path.join(temp_directory, "..hidden"))
        assert not validator.is_valid(os.path.join(temp_directory, "...", "x"))

    def test_relative_path_resolves_against_working_directory(
        self, temp_directory, monkeypatch
    ):
        """Test that relative paths are anchored at the working directory."""
        monkeypatch.chdir(temp_directory)
        validator = PathValidator(temp_directory)

        assert validator.validate("subdir/test3.md") == os.path.join(
            temp_directory, "subdir", "test3.md"
        )

    def test_relative_path_outside_working_directory_is_rejected(
        self, temp_directory, outside_directory, monkeypatch
    ):
        """Test a relative path when the working directory is outside the base."""
        monkeypatch.chdir(outside_directory)
        validator = PathValidator(temp_directory)

        with pytest.raises(PathValidationError):
            validator.validate("secret.txt")

    def test_relative_base_directory(self, temp_directory, monkeypatch):
        """Test that a relative base directory is made absolute."""
        parent, name = os.path.split(temp_directory)
        monkeypatch.chdir(parent)
        validator = PathValidator(name)

        assert validator.base_dir == temp_directory
        assert validator.is_valid(os.path.join(temp_directory, "test1.txt"))

    def test_base_directory_need_not_exist(self, tmp_path):
        """Test validation against a base directory that does not exist yet."""
        base = str(tmp_path / "later")
        validator = PathValidator(base)

        assert validator.validate(os.path.join(base, "a.txt")) == os.path.join(base, "a.txt")


class TestPathValidatorSymlinks:
    """The resolved location decides."""

    def test_rejects_symlink_to_outside_file(self, temp_directory, outside_directory):
        """Test that a symlink to a file outside the base is refused."""
        link = os.path.join(temp_directory, "link.txt")
        os.symlink(os.path.join(outside_directory, "secret.txt"), link)
        validator = PathValidator(temp_directory)

        with pytest.raises(PathValidationError, match="symlink"):
            validator.validate(link)

    def test_rejects_path_through_symlinked_directory(
        self, temp_directory, outside_directory
    ):
        """Test that a new file under a symlinked outside directory is refused."""
        link = os.path.join(temp_directory, "escape")
        os.symlink(outside_directory, link)
        validator = PathValidator(temp_directory)

        with pytest.raises(PathValidationError):
            validator.validate(os.path.join(link, "new_file.txt"))

    def test_accepts_symlink_inside_base(self, temp_directory):
        """Test that a symlink to a file inside the base is valid."""
        link = os.path.join(temp_directory, "alias.txt")
        os.symlink(os.path.join(temp_directory, "test1.txt"), link)
        validator = PathValidator(temp_directory)

        assert validator.validate(link) == link

    def test_rejects_dangling_symlink(self, temp_directory):
        """Test that a dangling symlink is refused."""
        link = os.path.join(temp_directory, "dangling")
        os.symlink(os.path.join(temp_directory, "missing-target"), link)
        validator = PathValidator(temp_directory)

        with pytest.raises(PathValidationError, match="failed to resolve symlinks"):
            validator.validate(link)

    def test_rejects_symlink_loop(self, temp_directory):
        """Test that a symlink loop is refused."""
        a = os.path.join(temp_directory, "loop_a")
        b = os.path.join(temp_directory, "loop_b")
        os.symlink(b, a)
        os.symlink(a, b)
        validator = PathValidator(temp_directory)

        with pytest.raises(PathValidationError):
            validator.validate(a)

    def test_symlinked_base_directory(self, temp_directory, tmp_path):
        """Test that a base directory reached through a symlink still works."""
        alias = str(tmp_path / "alias")
        os.symlink(temp_directory, alias)
        validator = PathValidator(alias)

        path = os.path.join(alias, "test1.txt")
        assert validator.validate(path) == path
