"""
Shared fixtures: AddressBook-schema SQLite databases laid out the way macOS
stores them (Sources/<source-id>/AddressBook-v22.abcddb).
"""

import sqlite3
from pathlib import Path
from typing import Dict, List, Any

import pytest

from imessage_contacts.core.config import Config

DB_FILENAME = "AddressBook-v22.abcddb"

SCHEMA = """
CREATE TABLE ZABCDRECORD (
    Z_PK INTEGER PRIMARY KEY,
    ZFIRSTNAME TEXT,
    ZLASTNAME TEXT,
    ZORGANIZATION TEXT,
    ZNICKNAME TEXT
);
CREATE TABLE ZABCDPHONENUMBER (
    Z_PK INTEGER PRIMARY KEY,
    ZOWNER INTEGER,
    ZFULLNUMBER TEXT
);
CREATE TABLE ZABCDEMAILADDRESS (
    Z_PK INTEGER PRIMARY KEY,
    ZOWNER INTEGER,
    ZADDRESS TEXT
);
"""


def create_addressbook(db_path: Path, contacts: List[Dict[str, Any]]) -> Path:
    """
    Create an AddressBook database.

    Each contact dict may carry first, last, org, nickname, phones and emails.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    try:
        conn.executescript(SCHEMA)
        for contact in contacts:
            cursor = conn.execute(
                "INSERT INTO ZABCDRECORD (ZFIRSTNAME, ZLASTNAME, ZORGANIZATION, ZNICKNAME) "
                "VALUES (?, ?, ?, ?)",
                (
                    contact.get("first"),
                    contact.get("last"),
                    contact.get("org"),
                    contact.get("nickname"),
                ),
            )
            owner = cursor.lastrowid
            for phone in contact.get("phones", []):
                conn.execute(
                    "INSERT INTO ZABCDPHONENUMBER (ZOWNER, ZFULLNUMBER) VALUES (?, ?)",
                    (owner, phone),
                )
            for email in contact.get("emails", []):
                conn.execute(
                    "INSERT INTO ZABCDEMAILADDRESS (ZOWNER, ZADDRESS) VALUES (?, ?)",
                    (owner, email),
                )
        conn.commit()
    finally:
        conn.close()
    return db_path


@pytest.fixture
def sources_dir(tmp_path):
    """Empty AddressBook Sources directory."""
    path = tmp_path / "Sources"
    path.mkdir()
    return path


@pytest.fixture
def add_source(sources_dir):
    """Factory adding a source database under sources_dir."""
    def _add(source_id: str, contacts: List[Dict[str, Any]]) -> Path:
        return create_addressbook(sources_dir / source_id / DB_FILENAME, contacts)
    return _add


@pytest.fixture
def config(tmp_path, sources_dir, monkeypatch):
    """Config rooted in tmp_path and pointed at sources_dir."""
    monkeypatch.delenv("IMESSAGE_CONTACTS_SOURCES_DIR", raising=False)
    cfg = Config(tmp_path / "config")
    cfg.set("sources_directory", str(sources_dir))
    return cfg


@pytest.fixture
def sample_contacts():
    """A small address book covering names, orgs and both handle kinds."""
    return [
        {"first": "John", "last": "Doe", "phones": ["(415) 555-1234"], "emails": ["john@example.com"]},
        {"first": "Jane", "last": "Smith", "nickname": "Janie", "phones": ["14155555678"]},
        {"org": "Acme Corp", "phones": ["+44 20 7946 0958"]},
        {"first": "Johnny", "last": "Appleseed", "emails": ["johnny@apple.example"]},
        {"nickname": "Ghost", "phones": ["5550001111"]},
    ]
