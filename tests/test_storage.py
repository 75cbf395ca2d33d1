"""Tests for backup storage layout."""

from datetime import datetime

import pytest

from apkvault.backup.storage import BackupExistsError, BackupStorage

NOW = datetime(2024, 3, 5, 14, 7, 9)


class TestBackupNames:
    """Test backup name resolution."""

    def test_empty_name_uses_timestamp(self, tmp_path):
        """Test that an empty name becomes a timestamp."""
        storage = BackupStorage(tmp_path)

        assert storage.resolve_backup_name("", now=NOW) == "20240305140709"
        assert storage.resolve_backup_name("   ", now=NOW) == "20240305140709"

    def test_date_token_replaced(self, tmp_path):
        """Test $date substitution."""
        storage = BackupStorage(tmp_path)

        assert storage.resolve_backup_name("pixel_$date", now=NOW) == "pixel_20240305140709"

    def test_plain_name_kept(self, tmp_path):
        """Test that a plain name passes through."""
        assert BackupStorage(tmp_path).resolve_backup_name("before-reset", now=NOW) == "before-reset"

    def test_unsafe_name_sanitized(self, tmp_path):
        """Test that path separators cannot escape the backup root."""
        assert BackupStorage(tmp_path).resolve_backup_name("../evil/name", now=NOW) == "_evil_name"


class TestBackupStorage:
    """Test backup directory management."""

    def test_missing_root(self, tmp_path):
        """Test a backup root that does not exist yet."""
        storage = BackupStorage(tmp_path / "backup")

        assert not storage.exists()
        assert storage.list_backups() == []

        storage.ensure_root()
        assert storage.exists()

    def test_create_and_list_backups(self, tmp_path):
        """Test that created backups are listed by name."""
        storage = BackupStorage(tmp_path / "backup")

        storage.create_backup("b")
        storage.create_backup("a")
        (tmp_path / "backup" / "notes.txt").write_text("not a backup")

        assert [b.name for b in storage.list_backups()] == ["a", "b"]

    def test_create_existing_backup(self, tmp_path):
        """Test that names are unique under the root."""
        storage = BackupStorage(tmp_path)
        storage.create_backup("first")

        with pytest.raises(BackupExistsError):
            storage.create_backup("first")

    def test_list_packages(self, tmp_path):
        """Test listing the packages of a backup."""
        storage = BackupStorage(tmp_path)
        backup_dir = storage.create_backup("snap")
        (backup_dir / "com.b").mkdir()
        (backup_dir / "com.a").mkdir()
        (backup_dir / "stray.apk").touch()

        assert storage.list_packages(backup_dir) == ["com.a", "com.b"]
