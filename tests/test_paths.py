# tests/test_paths.py
"""Tests for relative path computation."""

import tempfile
from pathlib import Path

import pytest

from pnpconfig.errors import PathRelativizationFailure
from pnpconfig.paths import MAX_PARENT_HOPS, relativize


class TestRelativizeFileBase:
    """Base paths that are (or look like) files."""

    def test_same_directory(self):
        """Target beside the base file is a bare filename."""
        assert relativize("/nonexistent/jobs/board.yaml", "/nonexistent/jobs/job.yaml", "/") == "board.yaml"

    def test_subdirectory(self):
        """Target below the base directory."""
        result = relativize("/nonexistent/jobs/boards/a.yaml", "/nonexistent/jobs/job.yaml", "/")
        assert result == "boards/a.yaml"

    def test_sibling_directory(self):
        """Target in a sibling directory goes up once."""
        result = relativize("/nonexistent/boards/a.yaml", "/nonexistent/jobs/job.yaml", "/")
        assert result == "../boards/a.yaml"

    def test_only_root_in_common(self):
        """Absolute paths always share the root."""
        result = relativize("/x/y/board.yaml", "/nonexistent/jobs/job.yaml", "/")
        assert result == "../../x/y/board.yaml"

    def test_unnormalized_input(self):
        """Redundant segments are normalized away."""
        result = relativize("/nonexistent/jobs/../boards/./a.yaml", "/nonexistent/jobs/job.yaml", "/")
        assert result == "../boards/a.yaml"


class TestRelativizeDirectoryBase:
    """Base paths that are directories."""

    def test_trailing_separator_is_directory(self):
        """A missing base ending in the separator is a directory."""
        result = relativize("/nonexistent/boards/a.yaml", "/nonexistent/jobs/", "/")
        assert result == "../boards/a.yaml"

    def test_existing_directory(self):
        """An existing directory base is judged by the file system."""
        with tempfile.TemporaryDirectory() as tmpdir:
            base = Path(tmpdir) / "jobs"
            base.mkdir()
            target = Path(tmpdir) / "boards" / "a.yaml"

            assert relativize(str(target), str(base), "/") == "../boards/a.yaml"

    def test_existing_file(self):
        """An existing file base anchors at its directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            base = Path(tmpdir) / "job.yaml"
            base.write_text("pnp-job: {}\n")
            target = Path(tmpdir) / "board.yaml"

            assert relativize(str(target), str(base), "/") == "board.yaml"


class TestRelativizeFailure:
    """Cases with no relative path."""

    def test_different_drives(self):
        """Paths on different drives share no ancestor."""
        with pytest.raises(PathRelativizationFailure):
            relativize("D:\\boards\\a.xml", "C:\\jobs\\job.xml", "\\")

    def test_same_drive(self):
        """Windows separators on the same drive."""
        result = relativize("C:\\boards\\a.xml", "C:\\jobs\\job.xml", "\\")
        assert result == "..\\boards\\a.xml"

    def test_relative_paths_without_common_element(self):
        """Relative paths with different first elements fail."""
        with pytest.raises(PathRelativizationFailure):
            relativize("boards/a.yaml", "jobs/job.yaml", "/")

    def test_hop_limit(self):
        """Too many parent hops fail."""
        deep = "/".join(["d"] * (MAX_PARENT_HOPS + 2))
        with pytest.raises(PathRelativizationFailure) as exc_info:
            relativize("/target.yaml", f"/{deep}/job.yaml", "/")
        assert "parent directories" in str(exc_info.value)

    def test_failure_is_value_error(self):
        """Failure is also a ValueError."""
        with pytest.raises(ValueError):
            relativize("D:\\a", "C:\\b", "\\")
