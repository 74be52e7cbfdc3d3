"""Errors raised by contact search."""


class ContactSearchError(Exception):
    """Contact search failed."""
    pass


class SearchCancelledError(ContactSearchError):
    """Contact search was cancelled between sources."""
    pass
