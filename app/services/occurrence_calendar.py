# app/services/occurrence_calendar.py
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone, tzinfo

from app.core.timeutils import ensure_aware, utc_now
from app.schemas.occurrence import Occurrence
from app.services.event_gateway import PersistedEventGateway
from app.services.occurrence_merger import merge
from app.services.recurrence_expander import expand
from app.services.schedule_gateway import ScheduleGateway

logger = logging.getLogger(__name__)


async def get_merged_occurrences(
    user_id: str,
    window_start: datetime,
    window_end: datetime,
    *,
    schedule_gateway: ScheduleGateway,
    event_gateway: PersistedEventGateway,
    now: datetime | None = None,
    calendar_tz: tzinfo = timezone.utc,
) -> list[Occurrence]:
    """
    Build the ordered calendar of a user for the given window.

    Steps
    -----
    1) Load the user's recurrence rules and expand them over the window
       (skipped when there are no rules).
    2) Concurrently, load persisted occurrences in the window.
    3) Merge both: persisted overrides win, cancelled sessions are dropped,
       the result is ordered by start time.

    `now` is captured once per call (defaulting to the current UTC time) and
    held fixed for the whole expansion. Schedule times are read as wall-clock
    times in `calendar_tz`, whatever offset the window was written with.
    Gateway failures propagate unchanged; no partial result is returned.
    """
    if ensure_aware(window_end) < ensure_aware(window_start):
        raise ValueError("window_end must be greater than or equal to window_start")

    now = ensure_aware(now) if now is not None else utc_now()

    async def _generate() -> list[Occurrence]:
        rules = await schedule_gateway.load_rules(user_id)
        if not rules:
            return []
        return list(expand(rules, window_start, window_end, now, calendar_tz))

    generated, persisted = await asyncio.gather(
        _generate(),
        event_gateway.query_by_range(window_start, window_end),
    )

    merged = merge(persisted, generated)
    logger.debug(
        "User %s: %d generated, %d persisted, %d merged occurrence(s)",
        user_id,
        len(generated),
        len(persisted),
        len(merged),
    )
    return merged
