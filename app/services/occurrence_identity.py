# app/services/occurrence_identity.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.schemas.occurrence import Occurrence, RecurrenceRuleRead, SubjectKind

ID_TIMESTAMP_FORMAT = "%Y%m%d%H%M"


class ValidationError(ValueError):
    """
    Raised when a recurrence rule is placed on a date whose weekday does not
    match the rule's weekday.
    """

    def __init__(self, mismatch: "WeekdayMismatch") -> None:
        super().__init__(mismatch.message)
        self.mismatch = mismatch


@dataclass(frozen=True)
class OccurrenceKey:
    """
    Everything that determines the identity of one occurrence.

    Exists only during computation; never persisted.
    """

    subject_kind: SubjectKind
    subject_id: str
    occurrence_instant: datetime
    duration_minutes: int


@dataclass(frozen=True)
class WeekdayMismatch:
    """
    Result value returned by `derive_key` when `day` falls on another weekday
    than the rule.
    """

    day: datetime
    rule: RecurrenceRuleRead

    @property
    def message(self) -> str:
        return (
            f"date {self.day.date().isoformat()} (weekday {self.day.isoweekday()}) "
            f"does not match rule's weekday {self.rule.weekday}"
        )


def derive_key(day: datetime, rule: RecurrenceRuleRead) -> OccurrenceKey | WeekdayMismatch:
    """
    Place `rule` on the calendar day of `day`.

    The time of day carried by `day` is discarded: the instant is the date of
    `day` at `rule.hour:rule.minute:00`, in the same time zone as `day`.
    """
    if day.isoweekday() != rule.weekday:
        return WeekdayMismatch(day=day, rule=rule)

    return OccurrenceKey(
        subject_kind=rule.subject_kind,
        subject_id=rule.subject_id,
        occurrence_instant=day.replace(
            hour=rule.hour,
            minute=rule.minute,
            second=0,
            microsecond=0,
        ),
        duration_minutes=rule.duration_minutes,
    )


def require_key(day: datetime, rule: RecurrenceRuleRead) -> OccurrenceKey:
    """
    Like `derive_key`, but raises ValidationError on a weekday mismatch.
    """
    result = derive_key(day, rule)
    if isinstance(result, WeekdayMismatch):
        raise ValidationError(result)
    return result


def key_to_id(key: OccurrenceKey) -> str:
    """
    Format the canonical occurrence id, e.g. `group_G1_202501060900_60`.
    """
    prefix = f"{key.subject_kind.value}_{key.subject_id}"
    stamp = key.occurrence_instant.strftime(ID_TIMESTAMP_FORMAT)
    return f"{prefix}_{stamp}_{key.duration_minutes}"


def key_to_occurrence(key: OccurrenceKey) -> Occurrence:
    """
    Build the default (non-cancelled) occurrence for a freshly generated key.
    """
    is_group = key.subject_kind is SubjectKind.GROUP
    return Occurrence(
        id=key_to_id(key),
        subject_kind=key.subject_kind,
        cancelled=False,
        start_time=key.occurrence_instant,
        duration_minutes=key.duration_minutes,
        group_id=key.subject_id if is_group else None,
        client_id=None if is_group else key.subject_id,
    )
