"""
Contact search across macOS AddressBook sources
"""

from .discovery import open_contacts_databases, find_contacts_database_paths
from .errors import ContactSearchError, SearchCancelledError
from .normalizer import normalize_phone_number, build_full_name, to_contact_entries
from .predicate import SearchPredicate, build_search_predicate
from .search import ContactSearch, search_contacts_by_name

__all__ = [
    'open_contacts_databases', 'find_contacts_database_paths',
    'ContactSearchError', 'SearchCancelledError',
    'normalize_phone_number', 'build_full_name', 'to_contact_entries',
    'SearchPredicate', 'build_search_predicate',
    'ContactSearch', 'search_contacts_by_name',
]
