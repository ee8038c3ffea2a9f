# app/services/event_gateway.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Protocol

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.timeutils import to_utc
from app.models.event import Event
from app.schemas.occurrence import Occurrence, SubjectKind

logger = logging.getLogger(__name__)


class PersistedEventGateway(Protocol):
    """
    Read access to persisted occurrences (edits, cancellations, one-offs).
    """

    async def query_by_range(self, start: datetime, end: datetime) -> list[Occurrence]:
        ...


def event_to_occurrence(event: Event) -> Occurrence:
    """
    Map a stored Event row to an Occurrence.

    The subject kind is derived from which subject id the row carries; a row
    carrying a group id is a group session.
    """
    if event.group_id:
        kind = SubjectKind.GROUP
        group_id, client_id = event.group_id, None
    else:
        kind = SubjectKind.CLIENT
        group_id, client_id = None, event.client_id

    return Occurrence(
        id=event.id,
        subject_kind=kind,
        cancelled=bool(event.cancelled),
        start_time=to_utc(event.start_time),
        duration_minutes=event.duration_minutes,
        group_id=group_id,
        client_id=client_id,
    )


class SqlEventGateway:
    """
    PersistedEventGateway backed by the `events` table.

    `query_by_range` returns every stored occurrence whose start lies strictly
    between `start` and `end`, cancelled ones included: cancellations are
    needed downstream to suppress the matching generated occurrences.

    When `owner_id` is given, only that user's events are returned.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        owner_id: str | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._owner_id = owner_id

    async def query_by_range(self, start: datetime, end: datetime) -> list[Occurrence]:
        conditions = [
            Event.start_time > to_utc(start),
            Event.start_time < to_utc(end),
        ]
        if self._owner_id is not None:
            conditions.append(Event.user_id == self._owner_id)

        stmt = select(Event).where(and_(*conditions)).order_by(Event.start_time.asc())

        async with self._session_factory() as session:
            result = await session.execute(stmt)
            events = list(result.scalars().all())

        logger.debug(
            "Loaded %d persisted event(s) between %s and %s",
            len(events),
            start.isoformat(),
            end.isoformat(),
        )
        return [event_to_occurrence(event) for event in events]
