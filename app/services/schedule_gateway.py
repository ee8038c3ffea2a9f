# app/services/schedule_gateway.py
from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.schedule_rule import ScheduleRule
from app.schemas.occurrence import RecurrenceRuleRead

logger = logging.getLogger(__name__)


class ScheduleGateway(Protocol):
    """
    Read access to a user's weekly recurrence rules.
    """

    async def load_rules(self, owner_id: str) -> list[RecurrenceRuleRead]:
        ...


class SqlScheduleGateway:
    """
    ScheduleGateway backed by the `schedules` table.

    Rules are returned ordered by weekday, then time of day. Callers must not
    rely on that order for correctness.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def load_rules(self, owner_id: str) -> list[RecurrenceRuleRead]:
        stmt = (
            select(ScheduleRule)
            .where(ScheduleRule.user_id == owner_id)
            .order_by(
                ScheduleRule.weekday.asc(),
                ScheduleRule.hour.asc(),
                ScheduleRule.minute.asc(),
                ScheduleRule.id.asc(),
            )
        )

        async with self._session_factory() as session:
            result = await session.execute(stmt)
            rows = list(result.scalars().all())

        logger.debug("Loaded %d schedule rule(s) for user %s", len(rows), owner_id)
        return [RecurrenceRuleRead.model_validate(row) for row in rows]
