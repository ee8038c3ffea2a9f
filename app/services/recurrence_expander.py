# app/services/recurrence_expander.py
from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from datetime import datetime, timedelta, timezone, tzinfo

from app.core.timeutils import ensure_aware
from app.schemas.occurrence import Occurrence, RecurrenceRuleRead
from app.services.occurrence_identity import key_to_occurrence, require_key

logger = logging.getLogger(__name__)

# Extra day scanned past window_end to absorb time-zone/rounding effects at
# the boundary. Anything it produces outside the window is filtered below.
SCAN_SLACK = timedelta(days=1)


def expand(
    rules: Sequence[RecurrenceRuleRead],
    window_start: datetime,
    window_end: datetime,
    now: datetime,
    calendar_tz: tzinfo = timezone.utc,
) -> Iterator[Occurrence]:
    """
    Lazily generate the occurrences the given weekly rules imply for a window.

    Rules
    -----
    - Nothing is generated for days that already lie before `now`: the scan
      starts at max(window_start, now). Past sessions are only visible through
      the persisted event store.
    - Days are scanned one by one up to window_end + 1 day (inclusive).
    - Rule times are wall-clock times in `calendar_tz`. The window and `now`
      are converted into that zone first, so the result depends only on the
      instants the window covers, not on the offset it was written with.
      Naive datetimes are read as UTC.
    - An occurrence is kept only if window_start < start_time < window_end,
      the same strict bounds the persisted event lookup uses.
    - Output order is unspecified; sorting is the merger's job.

    `now` must be captured once by the caller and is never re-read here, so a
    single call is fully deterministic.
    """
    if not rules:
        return

    window_start = ensure_aware(window_start).astimezone(calendar_tz)
    window_end = ensure_aware(window_end).astimezone(calendar_tz)
    now = ensure_aware(now).astimezone(calendar_tz)

    scan_start = max(window_start, now)
    scan_end = window_end + SCAN_SLACK
    day_count = (scan_end.date() - scan_start.date()).days

    logger.debug(
        "Expanding %d rule(s) over %d day(s) starting %s",
        len(rules),
        max(day_count + 1, 0),
        scan_start.isoformat(),
    )

    for offset in range(day_count + 1):
        day = scan_start + timedelta(days=offset)
        weekday = day.isoweekday()

        for rule in rules:
            if rule.weekday != weekday:
                continue

            occurrence = key_to_occurrence(require_key(day, rule))
            if window_start < occurrence.start_time < window_end:
                yield occurrence
