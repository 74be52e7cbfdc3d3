"""
Turns raw AddressBook handle rows into display-ready contact entries.

Phone numbers are rewritten into the form iMessage uses for handles
(e.g. +14155551234); email addresses pass through untouched.
"""

import re
from typing import Iterable, List, Optional, Set, Tuple

from imessage_contacts.core.models import ContactEntry, HandleKind, RawHandleRow

_NON_PHONE_CHARS = re.compile(r"[^0-9+]")

UNKNOWN_NAME = "Unknown"


def normalize_phone_number(phone: str) -> str:
    """
    Normalize a phone number to iMessage handle format.

    Examples:
        "555-123-4567"     -> "+15551234567"
        "15551234567"      -> "+15551234567"
        "+44 20 7946 0958" -> "+442079460958"
        "ext."             -> "ext."  (nothing left after cleaning)
    """
    stripped = _NON_PHONE_CHARS.sub("", phone)
    # Only a leading plus survives
    cleaned = ("+" if stripped.startswith("+") else "") + stripped.replace("+", "")

    if cleaned.startswith("+"):
        return cleaned

    if len(cleaned) == 10:
        return f"+1{cleaned}"

    if len(cleaned) == 11 and cleaned.startswith("1"):
        return f"+{cleaned}"

    return cleaned or phone


def build_full_name(
    first_name: Optional[str],
    last_name: Optional[str],
    organization: Optional[str],
) -> str:
    """First and last name, else organization, else "Unknown"."""
    parts = []
    if first_name:
        parts.append(first_name)
    if last_name:
        parts.append(last_name)

    if not parts and organization:
        parts.append(organization)

    return " ".join(parts) or UNKNOWN_NAME


def normalize_handle(row: RawHandleRow) -> str:
    if row.kind == HandleKind.PHONE:
        return normalize_phone_number(row.handle)
    return row.handle


def to_contact_entries(rows: Iterable[RawHandleRow]) -> List[ContactEntry]:
    """
    Convert raw rows to contact entries.

    Rows whose handle normalizes to an empty string are dropped, and only the
    first entry for each (name, handle) pair is kept.
    """
    seen: Set[Tuple[str, str]] = set()
    entries = []

    for row in rows:
        name = build_full_name(row.first_name, row.last_name, row.organization)
        handle = normalize_handle(row)

        if not handle:
            continue

        key = (name, handle)
        if key in seen:
            continue
        seen.add(key)

        entries.append(ContactEntry(name=name, handle=handle))

    return entries
