"""
Unit tests for AddressBook source discovery.
"""

import errno
from pathlib import Path
from unittest.mock import patch

import pytest

from imessage_contacts.core.database import ContactsDatabase, DatabaseAccessError
from imessage_contacts.contacts.discovery import (
    find_contacts_database_paths,
    open_contacts_databases,
)
from tests.conftest import DB_FILENAME


class TestFindContactsDatabasePaths:
    """Tests for locating database files."""

    def test_finds_databases_in_name_order(self, sources_dir, add_source):
        add_source("B-source", [])
        add_source("A-source", [])

        paths = find_contacts_database_paths(sources_dir, DB_FILENAME)

        assert [p.parent.name for p in paths] == ["A-source", "B-source"]

    def test_skips_source_without_database(self, sources_dir, add_source):
        add_source("with-db", [])
        (sources_dir / "empty").mkdir()

        paths = find_contacts_database_paths(sources_dir, DB_FILENAME)

        assert [p.parent.name for p in paths] == ["with-db"]

    def test_skips_database_path_that_is_not_a_file(self, sources_dir):
        (sources_dir / "weird" / DB_FILENAME).mkdir(parents=True)

        assert find_contacts_database_paths(sources_dir, DB_FILENAME) == []

    def test_ignores_plain_files_in_sources_dir(self, sources_dir, add_source):
        add_source("real", [])
        (sources_dir / ".DS_Store").write_text("")

        assert len(find_contacts_database_paths(sources_dir, DB_FILENAME)) == 1


class TestOpenContactsDatabases:
    """Tests for opening discovered databases."""

    def test_opens_each_source_read_only(self, sources_dir, add_source, sample_contacts):
        add_source("one", sample_contacts)
        add_source("two", sample_contacts)

        databases = open_contacts_databases(sources_dir, DB_FILENAME)
        try:
            assert len(databases) == 2
            row = databases[0].execute_one("SELECT COUNT(*) AS n FROM ZABCDRECORD")
            assert row["n"] == len(sample_contacts)
        finally:
            for db in databases:
                db.close()

    def test_missing_sources_dir_returns_empty_list(self, tmp_path):
        assert open_contacts_databases(tmp_path / "does-not-exist", DB_FILENAME) == []

    def test_unreadable_sources_dir_returns_empty_list(self, sources_dir):
        with patch("pathlib.Path.iterdir", side_effect=PermissionError("Operation not permitted")):
            assert open_contacts_databases(sources_dir, DB_FILENAME) == []

    def test_no_sources(self, sources_dir):
        assert open_contacts_databases(sources_dir, DB_FILENAME) == []


class TestUnusableSourceAmongGoodOnes:
    """One bad source is skipped without hiding the others."""

    @pytest.fixture
    def three_sources(self, add_source, sample_contacts):
        return [
            add_source("A-good", sample_contacts),
            add_source("B-locked", sample_contacts),
            add_source("C-good", sample_contacts),
        ]

    def test_unreadable_source_dir_only_excludes_itself(self, sources_dir, three_sources):
        """stat() failing with EACCES inside one source drops just that source."""
        locked = three_sources[1]
        real_stat = Path.stat

        def stat(self, *args, **kwargs):
            if self == locked:
                raise PermissionError(errno.EACCES, "Permission denied", str(self))
            return real_stat(self, *args, **kwargs)

        with patch.object(Path, "stat", stat):
            databases = open_contacts_databases(sources_dir, DB_FILENAME)

        try:
            assert [db.db_path.parent.name for db in databases] == ["A-good", "C-good"]
        finally:
            for db in databases:
                db.close()

    def test_database_that_cannot_be_opened_is_skipped(self, sources_dir, three_sources):
        """A DatabaseAccessError for one path keeps the rest in order."""
        failing = three_sources[1]

        def open_database(db_path):
            if db_path == failing:
                raise DatabaseAccessError(f"Cannot open contacts database {db_path}: denied")
            return ContactsDatabase(db_path)

        with patch("imessage_contacts.contacts.discovery.ContactsDatabase", side_effect=open_database):
            databases = open_contacts_databases(sources_dir, DB_FILENAME)

        try:
            assert [db.db_path.parent.name for db in databases] == ["A-good", "C-good"]
        finally:
            for db in databases:
                db.close()
