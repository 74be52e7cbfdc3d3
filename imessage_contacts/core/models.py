"""
Data models for iMessage contact search
Defines the raw handle rows read from AddressBook sources and the
display-ready entries and pagination metadata returned to callers
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any


class HandleKind(str, Enum):
    """Kind of messaging handle attached to a contact record"""
    PHONE = "phone"
    EMAIL = "email"


@dataclass(frozen=True)
class RawHandleRow:
    """One contact record joined to one phone number or email address"""
    handle: str
    kind: HandleKind
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    organization: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RawHandleRow':
        """Create RawHandleRow from a query row mapping"""
        return cls(
            handle=data.get('handle') or "",
            kind=HandleKind(data.get('handle_type', 'phone')),
            first_name=data.get('firstName'),
            last_name=data.get('lastName'),
            organization=data.get('organization'),
        )


@dataclass(frozen=True)
class ContactEntry:
    """Display-ready contact: derived name plus normalized handle"""
    name: str
    handle: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "handle": self.handle}


@dataclass
class PaginationWindow:
    """Pagination metadata for one page of results"""
    total: int = 0
    limit: int = 0
    offset: int = 0
    has_more: bool = False
    page: int = 1
    total_pages: int = 0

    @classmethod
    def compute(cls, total: int, limit: int, offset: int) -> 'PaginationWindow':
        """
        Build pagination metadata for a (limit, offset) window over `total` rows.

        A non-positive limit yields zero pages and is reported as page 1.
        """
        if limit > 0:
            page = offset // limit + 1
            total_pages = -(-total // limit)
        else:
            page = 1
            total_pages = 0

        return cls(
            total=total,
            limit=limit,
            offset=offset,
            has_more=offset + limit < total,
            page=page,
            total_pages=total_pages,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset,
            "hasMore": self.has_more,
            "page": self.page,
            "totalPages": self.total_pages,
        }


@dataclass
class ContactSearchResult:
    """One page of contact search results"""
    data: List[ContactEntry] = field(default_factory=list)
    pagination: PaginationWindow = field(default_factory=PaginationWindow)
    partial: bool = False  # a source failed; total may exceed what data can reach
    failed_sources: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialization-ready payload with camelCase pagination keys"""
        return {
            "data": [entry.to_dict() for entry in self.data],
            "pagination": self.pagination.to_dict(),
            "partial": self.partial,
        }
