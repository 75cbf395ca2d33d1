"""Tests for path utilities."""

import tempfile
from pathlib import Path

from apkvault.util.paths import available_path, format_size, list_subdirectories, safe_filename


class TestAvailablePath:
    """Test collision-free local file naming."""

    def test_free_path_is_returned_unchanged(self):
        """Test that a free path is kept."""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "base.apk"

            assert available_path(path) == path

    def test_suffix_inserted_before_extension(self):
        """Test that a taken name gets _1 before the extension."""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "base.apk"
            path.touch()

            assert available_path(path) == Path(temp_dir) / "base_1.apk"

    def test_first_free_suffix_is_used(self):
        """Test that taken suffixes are skipped."""
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            for name in ["base.apk", "base_1.apk", "base_2.apk"]:
                (root / name).touch()

            result = available_path(root / "base.apk")

            assert result == root / "base_3.apk"
            assert not result.exists()

    def test_name_without_extension(self):
        """Test that extensionless names get a plain suffix."""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "payload"
            path.touch()

            assert available_path(path).name == "payload_1"


class TestPathHelpers:
    """Test the remaining path helpers."""

    def test_safe_filename(self):
        """Test filename sanitizing."""
        assert safe_filename("my/backup:1") == "my_backup_1"
        assert safe_filename("  .hidden. ") == "hidden"
        assert safe_filename("...") == "unknown"

    def test_list_subdirectories(self):
        """Test that only directories are listed, sorted by name."""
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            (root / "b").mkdir()
            (root / "a").mkdir()
            (root / "file.txt").touch()

            assert [d.name for d in list_subdirectories(root)] == ["a", "b"]
            assert list_subdirectories(root / "missing") == []

    def test_format_size(self):
        """Test size formatting."""
        assert format_size(0) == "0 B"
        assert format_size(512) == "512.0 B"
        assert format_size(1536) == "1.5 KB"
