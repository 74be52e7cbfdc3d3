"""
Name predicates for AddressBook contact queries.

Columns are referenced through the `r` alias of ZABCDRECORD.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

HAS_NAME_FIELD = "(r.ZFIRSTNAME IS NOT NULL OR r.ZLASTNAME IS NOT NULL OR r.ZORGANIZATION IS NOT NULL)"


@dataclass(frozen=True)
class SearchPredicate:
    """A WHERE-clause fragment with positional `?` placeholders and its parameters."""
    expression: str
    parameters: Tuple[str, ...] = ()

    def union_parameters(self, arms: int = 2) -> Tuple[str, ...]:
        """Parameters for a query that applies this predicate once per UNION arm."""
        return self.parameters * arms


def _contains(term: str) -> str:
    return f"%{term}%"


def build_search_predicate(first_name: str, last_name: Optional[str] = None) -> SearchPredicate:
    """
    Build the name filter for a contact search.

    - No first or last name: any record with a first, last or organization name.
    - Last name given: first AND last name must contain their terms.
    - First name only: first, last, organization or nickname contains the term.
    """
    if first_name == "" and not last_name:
        return SearchPredicate(HAS_NAME_FIELD)

    if last_name:
        return SearchPredicate(
            f"(r.ZFIRSTNAME LIKE ? AND r.ZLASTNAME LIKE ?) AND {HAS_NAME_FIELD}",
            (_contains(first_name), _contains(last_name)),
        )

    pattern = _contains(first_name)
    return SearchPredicate(
        "(r.ZFIRSTNAME LIKE ? OR r.ZLASTNAME LIKE ? OR r.ZORGANIZATION LIKE ? OR r.ZNICKNAME LIKE ?)"
        f" AND {HAS_NAME_FIELD}",
        (pattern, pattern, pattern, pattern),
    )
