"""
Cross-source aggregation of contact handles.

A caller's (offset, limit) window spans all sources in discovery order: the
first source's rows, then the second's, and so on. Each source is counted,
and only the sources that overlap the window are fetched, so no source's
full result set is ever materialized.

Every source is counted even after the page is full so that `total` covers
all of them.
"""

import logging
import sqlite3
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Dict

from imessage_contacts.core.database import ContactsDatabase
from imessage_contacts.core.models import RawHandleRow
from imessage_contacts.contacts.errors import SearchCancelledError
from imessage_contacts.contacts.predicate import SearchPredicate
from imessage_contacts.contacts.queries import count_contact_handles, fetch_contact_handles

logger = logging.getLogger(__name__)


@dataclass
class AggregationState:
    """Running offset/limit bookkeeping threaded through the source loop."""
    remaining_offset: int
    remaining_limit: int
    total: int = 0
    rows: List[RawHandleRow] = field(default_factory=list)
    failed_sources: List[str] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        return bool(self.failed_sources)


def _check_cancelled(cancel_event: Optional[threading.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise SearchCancelledError("Contact search cancelled")


def _visit_source(
    state: AggregationState,
    db: ContactsDatabase,
    predicate: SearchPredicate,
) -> AggregationState:
    """Count one source and, if it overlaps the window, fetch its slice."""
    try:
        count = count_contact_handles(db, predicate)
        state.total += count

        if state.remaining_offset >= count:
            state.remaining_offset -= count
            return state

        if state.remaining_limit <= 0:
            return state

        rows = fetch_contact_handles(db, predicate, state.remaining_limit, state.remaining_offset)
        state.rows.extend(rows)
        state.remaining_offset = 0
        state.remaining_limit -= len(rows)

    except sqlite3.Error as e:
        # A count already added to total is kept; the result is flagged partial
        logger.error(f"Error searching contacts database {db.db_path}: {e}")
        state.failed_sources.append(str(db.db_path))

    return state


def aggregate_contact_handles(
    databases: Sequence[ContactsDatabase],
    predicate: SearchPredicate,
    limit: int,
    offset: int,
    cancel_event: Optional[threading.Event] = None,
) -> AggregationState:
    """
    Collect one global (offset, limit) window of handles across sources.

    Sources are visited strictly in order: the offset left for a source is
    only known once every earlier source has been counted.

    Raises:
        SearchCancelledError: If cancel_event is set before a source is visited
    """
    state = AggregationState(remaining_offset=offset, remaining_limit=limit)

    for db in databases:
        _check_cancelled(cancel_event)
        state = _visit_source(state, db, predicate)

    return state


def _count_or_none(db: ContactsDatabase, predicate: SearchPredicate) -> Optional[int]:
    try:
        return count_contact_handles(db, predicate)
    except sqlite3.Error as e:
        logger.error(f"Error counting contacts in {db.db_path}: {e}")
        return None


def aggregate_contact_handles_concurrently(
    databases: Sequence[ContactsDatabase],
    predicate: SearchPredicate,
    limit: int,
    offset: int,
    cancel_event: Optional[threading.Event] = None,
    max_workers: Optional[int] = None,
) -> AggregationState:
    """
    Concurrent variant of aggregate_contact_handles.

    All sources are counted in parallel. A prefix sum over the counts gives
    each source its index range in the global ordering, and only the sources
    whose range intersects [offset, offset + limit) are fetched, also in
    parallel. Rows are returned in source order.

    A failed fetch leaves a gap in the page instead of shifting later
    sources forward.
    """
    state = AggregationState(remaining_offset=offset, remaining_limit=limit)
    if not databases:
        return state

    _check_cancelled(cancel_event)
    workers = max_workers or len(databases)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        counts = list(executor.map(lambda db: _count_or_none(db, predicate), databases))

        windows: Dict[int, tuple] = {}
        start = 0
        window_end = offset + max(limit, 0)
        for index, (db, count) in enumerate(zip(databases, counts)):
            if count is None:
                state.failed_sources.append(str(db.db_path))
                continue

            state.total += count
            end = start + count
            overlap = min(end, window_end) - max(start, offset)
            if overlap > 0:
                windows[index] = (overlap, max(offset - start, 0))
            start = end

        _check_cancelled(cancel_event)

        future_by_index = {
            index: executor.submit(
                fetch_contact_handles, databases[index], predicate, local_limit, local_offset
            )
            for index, (local_limit, local_offset) in windows.items()
        }

        for index in sorted(future_by_index):
            try:
                state.rows.extend(future_by_index[index].result())
            except sqlite3.Error as e:
                db = databases[index]
                logger.error(f"Error searching contacts database {db.db_path}: {e}")
                state.failed_sources.append(str(db.db_path))

    state.remaining_offset = max(offset - state.total, 0)
    state.remaining_limit = limit - len(state.rows)
    return state
