"""
Contact search across all AddressBook sources.

Usage:
    with ContactSearch() as contacts:
        result = contacts.search("John", "Smith", limit=20)
        for entry in result.data:
            print(entry.name, entry.handle)
"""

import logging
import threading
from typing import List, Optional, Sequence

from imessage_contacts.core.config import Config
from imessage_contacts.core.database import ContactsDatabase
from imessage_contacts.core.models import ContactSearchResult, PaginationWindow
from imessage_contacts.contacts.aggregator import (
    aggregate_contact_handles,
    aggregate_contact_handles_concurrently,
)
from imessage_contacts.contacts.discovery import open_contacts_databases
from imessage_contacts.contacts.errors import ContactSearchError, SearchCancelledError
from imessage_contacts.contacts.normalizer import to_contact_entries
from imessage_contacts.contacts.predicate import build_search_predicate

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50


def search_contacts_by_name(
    databases: Sequence[ContactsDatabase],
    first_name: str,
    last_name: Optional[str] = None,
    limit: int = DEFAULT_LIMIT,
    offset: int = 0,
    cancel_event: Optional[threading.Event] = None,
    concurrent: bool = False,
) -> ContactSearchResult:
    """
    Search contacts by name and return their phone numbers and email addresses.

    Phone numbers are normalized to match iMessage handle format (e.g. +1
    prefix for US numbers). Pagination spans all databases in order.

    Args:
        databases: Open AddressBook databases, in discovery order
        first_name: First name to search for (matched against all name fields
            if last_name is not provided; empty lists every named contact)
        last_name: Optional last name for a more specific search
        limit: Maximum number of handles to return
        offset: Number of handles to skip
        cancel_event: Checked between sources; when set the search stops
        concurrent: Count and fetch sources in parallel

    Returns:
        ContactSearchResult with entries and pagination metadata. `partial`
        is set when a source failed; its count may still be in the total.

    Raises:
        ContactSearchError: Any failure, with the original message
    """
    try:
        predicate = build_search_predicate(first_name, last_name)

        aggregate = aggregate_contact_handles_concurrently if concurrent else aggregate_contact_handles
        state = aggregate(databases, predicate, limit, offset, cancel_event=cancel_event)

        data = to_contact_entries(state.rows)

        if state.partial:
            logger.warning(
                f"Contact search returned partial results; failed sources: {state.failed_sources}"
            )

        return ContactSearchResult(
            data=data,
            pagination=PaginationWindow.compute(state.total, limit, offset),
            partial=state.partial,
            failed_sources=state.failed_sources,
        )

    except SearchCancelledError:
        raise
    except Exception as e:
        raise ContactSearchError(f"Failed to search contacts: {e}") from e


class ContactSearch:
    """
    Long-lived contact search service.

    Sources are discovered once, on first use, and the connections are reused
    for every search until close(). Discovery order is therefore fixed for the
    lifetime of the object.
    """

    def __init__(self, config: Optional[Config] = None, concurrent: bool = False):
        """
        Initialize contact search.

        Args:
            config: Configuration (defaults to Config())
            concurrent: Use the concurrent aggregator
        """
        self.config = config or Config()
        self.concurrent = concurrent
        self._databases: Optional[List[ContactsDatabase]] = None
        self._lock = threading.Lock()

    def __enter__(self) -> 'ContactSearch':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def sources(self) -> List[ContactsDatabase]:
        """Open source databases, discovering them on first access."""
        with self._lock:
            if self._databases is None:
                self._databases = open_contacts_databases(
                    self.config.get_sources_directory(),
                    self.config.get_database_filename(),
                )
            return self._databases

    def search(
        self,
        first_name: str,
        last_name: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
        cancel_event: Optional[threading.Event] = None,
    ) -> ContactSearchResult:
        """Search all sources; limit defaults to the configured default_limit."""
        if limit is None:
            limit = self.config.get("default_limit", DEFAULT_LIMIT)

        try:
            sources = self.sources
        except Exception as e:
            raise ContactSearchError(f"Failed to search contacts: {e}") from e

        return search_contacts_by_name(
            sources,
            first_name,
            last_name,
            limit=limit,
            offset=offset,
            cancel_event=cancel_event,
            concurrent=self.concurrent,
        )

    def close(self) -> None:
        """Close every source connection opened by this service."""
        with self._lock:
            for db in self._databases or []:
                db.close()
            self._databases = None
