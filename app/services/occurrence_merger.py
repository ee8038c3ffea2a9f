# app/services/occurrence_merger.py
from __future__ import annotations

from collections.abc import Iterable

from app.core.timeutils import to_utc
from app.schemas.occurrence import Occurrence


def _sort_key(occurrence: Occurrence) -> tuple:
    # Absolute instant first; id only breaks exact ties so output is stable.
    return (to_utc(occurrence.start_time), occurrence.id)


def merge(
    persisted: Iterable[Occurrence],
    generated: Iterable[Occurrence],
) -> list[Occurrence]:
    """
    Reconcile generated occurrences with persisted ones.

    Rules
    -----
    1) A persisted occurrence sharing an id with a generated one replaces it
       entirely (it may carry edits the rule does not encode).
    2) Persisted occurrences without a generated counterpart (one-offs, or
       sessions created before their rule changed) are added as-is.
    3) Cancelled occurrences never make it into the result.
    4) Each id appears at most once.
    5) The result is ordered by start time, ascending.
    """
    persisted_list = list(persisted)
    persisted_by_id = {occurrence.id: occurrence for occurrence in persisted_list}

    result: list[Occurrence] = []
    generated_ids: set[str] = set()

    for occurrence in generated:
        # Two identical rules yield the same id; keep the first only.
        if occurrence.id in generated_ids:
            continue
        generated_ids.add(occurrence.id)
        effective = persisted_by_id.get(occurrence.id, occurrence)
        if not effective.cancelled:
            result.append(effective)

    for occurrence in persisted_list:
        if occurrence.id in generated_ids or occurrence.cancelled:
            continue
        result.append(occurrence)

    result.sort(key=_sort_key)
    return result
