"""
Core module for iMessage contact search
Contains configuration, database access and model definitions
"""

from .config import Config, configure_logging
from .database import ContactsDatabase, DatabaseAccessError
from .models import HandleKind, RawHandleRow, ContactEntry, PaginationWindow, ContactSearchResult

__all__ = [
    'Config', 'configure_logging', 'ContactsDatabase', 'DatabaseAccessError',
    'HandleKind', 'RawHandleRow', 'ContactEntry', 'PaginationWindow', 'ContactSearchResult',
]
