"""
iMessage contact search
Finds contacts by name across every local AddressBook source and returns
their iMessage handles with global pagination
"""

from .contacts import ContactSearch, ContactSearchError, search_contacts_by_name
from .core import Config, ContactEntry, ContactSearchResult, PaginationWindow

__version__ = "0.1.0"

__all__ = [
    'ContactSearch', 'ContactSearchError', 'search_contacts_by_name',
    'Config', 'ContactEntry', 'ContactSearchResult', 'PaginationWindow',
]
