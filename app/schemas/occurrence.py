# app/schemas/occurrence.py
from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Subject ids are embedded verbatim in generated occurrence ids.
SUBJECT_ID_PATTERN = r"^[A-Za-z0-9_-]+$"


class SubjectKind(str, Enum):
    """
    Who a session is held for: a whole group or a single client.
    """

    GROUP = "group"
    CLIENT = "client"


class RecurrenceRuleRead(BaseModel):
    """
    Read-only view of a weekly recurrence rule ("schedule" entry).
    """

    model_config = ConfigDict(from_attributes=True)

    user_id: str = Field(
        ...,
        description="Owner of the rule.",
        examples=["uid-123"],
    )
    weekday: int = Field(
        ...,
        ge=1,
        le=7,
        description="ISO weekday of the slot (Monday = 1, Sunday = 7).",
        examples=[1],
    )
    hour: int = Field(..., ge=0, le=23, examples=[9])
    minute: int = Field(0, ge=0, le=59, examples=[30])
    duration_minutes: int = Field(..., ge=0, examples=[60])
    group_id: str | None = Field(None, pattern=SUBJECT_ID_PATTERN, examples=["G1"])
    client_id: str | None = Field(None, pattern=SUBJECT_ID_PATTERN, examples=[None])

    @field_validator("group_id", "client_id", mode="before")
    @classmethod
    def _blank_subject_is_none(cls, value):
        return value or None

    @model_validator(mode="after")
    def _check_subject(self) -> "RecurrenceRuleRead":
        if not self.group_id and not self.client_id:
            raise ValueError("a recurrence rule needs a group_id or a client_id")
        return self

    @property
    def subject_kind(self) -> SubjectKind:
        return SubjectKind.GROUP if self.group_id else SubjectKind.CLIENT

    @property
    def subject_id(self) -> str:
        return self.group_id or self.client_id or ""


class Occurrence(BaseModel):
    """
    A single dated session, either generated from a recurrence rule or
    loaded from the persisted event store.

    Serialized with the wire names used by the calendar clients
    (`type`, `from`, `durationMinutes`).
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(
        ...,
        description=(
            "Deterministic occurrence identifier: "
            "`{group|client}_{subjectId}_{yyyyMMddHHmm}_{durationMinutes}`."
        ),
        examples=["group_G1_202501060900_60"],
    )
    subject_kind: SubjectKind = Field(
        ...,
        alias="type",
        description="Whether the session is for a group or a single client.",
        examples=["group"],
    )
    cancelled: bool = Field(
        False,
        description="True if the session was explicitly cancelled.",
        examples=[False],
    )
    start_time: datetime = Field(
        ...,
        alias="from",
        description="Start of the session (ISO-8601).",
        examples=["2025-01-06T09:00:00Z"],
    )
    duration_minutes: int = Field(
        ...,
        alias="durationMinutes",
        description="Length of the session in minutes.",
        examples=[60],
    )
    group_id: str | None = Field(None, examples=["G1"])
    client_id: str | None = Field(None, examples=[None])

    @model_validator(mode="after")
    def _check_subject(self) -> "Occurrence":
        if self.subject_kind is SubjectKind.GROUP:
            if not self.group_id or self.client_id:
                raise ValueError("group occurrences must carry group_id only")
        elif not self.client_id or self.group_id:
            raise ValueError("client occurrences must carry client_id only")
        return self
