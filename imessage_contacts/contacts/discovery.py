"""
AddressBook source discovery.

macOS keeps one AddressBook database per account under
~/Library/Application Support/AddressBook/Sources/<source-id>/. Each source
directory may or may not contain the database file.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from imessage_contacts.core.database import ContactsDatabase, DatabaseAccessError

logger = logging.getLogger(__name__)

DEFAULT_SOURCES_DIR = Path.home() / "Library" / "Application Support" / "AddressBook" / "Sources"
DEFAULT_DATABASE_FILENAME = "AddressBook-v22.abcddb"


def find_contacts_database_paths(
    sources_dir: Union[str, Path] = DEFAULT_SOURCES_DIR,
    database_filename: str = DEFAULT_DATABASE_FILENAME,
) -> List[Path]:
    """
    List the AddressBook database files present under the sources directory.

    Candidates are visited in name order so the result, and therefore global
    pagination order, is stable between calls.

    A source directory or database file that cannot be inspected is skipped.

    Raises:
        OSError: If the sources directory itself cannot be listed
    """
    base = Path(sources_dir)
    paths = []

    for entry in sorted(base.iterdir(), key=lambda p: p.name):
        db_path = entry / database_filename
        try:
            if not entry.is_dir():
                continue

            if not db_path.is_file():
                logger.debug("No contacts database in %s", entry)
                continue
        except OSError as e:
            # An unreadable source only excludes itself
            logger.debug("Skipping unreadable contacts source %s: %s", entry, e)
            continue

        paths.append(db_path)

    return paths


def open_contacts_databases(
    sources_dir: Optional[Union[str, Path]] = None,
    database_filename: str = DEFAULT_DATABASE_FILENAME,
) -> List[ContactsDatabase]:
    """
    Open every available AddressBook database read-only.

    Never raises: an unreadable sources directory yields an empty list and a
    database that cannot be opened is skipped.

    Args:
        sources_dir: Directory holding one subdirectory per source
        database_filename: Database file name expected inside each source

    Returns:
        Open databases in discovery order. The caller owns and closes them.
    """
    if sources_dir is None:
        sources_dir = DEFAULT_SOURCES_DIR

    try:
        paths = find_contacts_database_paths(sources_dir, database_filename)
    except OSError as e:
        logger.error(f"Error opening AddressBook databases: {e}")
        return []

    databases = []
    for db_path in paths:
        try:
            databases.append(ContactsDatabase(db_path))
        except DatabaseAccessError as e:
            logger.warning("Skipping contacts source: %s", e)
            continue
        logger.debug("Opened contacts source %s", db_path)

    logger.info(f"Discovered {len(databases)} AddressBook source(s) in {sources_dir}")
    return databases
