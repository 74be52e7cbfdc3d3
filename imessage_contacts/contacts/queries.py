"""
Per-source queries: count and paginated fetch of matching contact handles.

Both queries select from the same two-armed union so a fetch window always
lines up with the count: records joined to a phone number, then records
joined to an email address.
"""

from typing import List

from imessage_contacts.core.database import ContactsDatabase
from imessage_contacts.core.models import RawHandleRow
from imessage_contacts.contacts.predicate import SearchPredicate

_PHONE_ARM = """
    SELECT
      r.ZFIRSTNAME AS firstName,
      r.ZLASTNAME AS lastName,
      r.ZORGANIZATION AS organization,
      p.ZFULLNUMBER AS handle,
      'phone' AS handle_type
    FROM ZABCDRECORD r
    INNER JOIN ZABCDPHONENUMBER p ON p.ZOWNER = r.Z_PK
    WHERE {predicate}
    AND p.ZFULLNUMBER IS NOT NULL
"""

_EMAIL_ARM = """
    SELECT
      r.ZFIRSTNAME AS firstName,
      r.ZLASTNAME AS lastName,
      r.ZORGANIZATION AS organization,
      e.ZADDRESS AS handle,
      'email' AS handle_type
    FROM ZABCDRECORD r
    INNER JOIN ZABCDEMAILADDRESS e ON e.ZOWNER = r.Z_PK
    WHERE {predicate}
    AND e.ZADDRESS IS NOT NULL
"""


def _union(predicate: SearchPredicate) -> str:
    return (
        _PHONE_ARM.format(predicate=predicate.expression)
        + "\n    UNION ALL\n"
        + _EMAIL_ARM.format(predicate=predicate.expression)
    )


def count_contact_handles(db: ContactsDatabase, predicate: SearchPredicate) -> int:
    """Count matching phone and email handles without fetching them."""
    query = f"SELECT COUNT(*) AS total FROM ({_union(predicate)})"
    row = db.execute_one(query, predicate.union_parameters())
    return row["total"] if row else 0


def fetch_contact_handles(
    db: ContactsDatabase,
    predicate: SearchPredicate,
    limit: int,
    offset: int,
) -> List[RawHandleRow]:
    """
    Fetch up to `limit` matching handles after skipping `offset` of them.

    Rows are ordered by (lastName, firstName, handle) with handle_type as a
    final tie-breaker. SQLite sorts NULL before any value in ascending order,
    so contacts without a last name come first.
    """
    query = (
        _union(predicate)
        + "\n    ORDER BY lastName, firstName, handle, handle_type\n    LIMIT ? OFFSET ?"
    )
    params = predicate.union_parameters() + (limit, offset)
    return [RawHandleRow.from_dict(row) for row in db.execute(query, params)]
