# app/api/routes/health.py
from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel, Field

from app.core.config import get_settings
from app.core.timeutils import utc_now

router = APIRouter(tags=["Health"])


class CalendarStatus(BaseModel):
    """
    Liveness report plus the settings that shape every generated calendar.
    """

    status: str = Field(..., examples=["ok"])
    app_name: str = Field(..., examples=["Session Calendar"])
    environment: str = Field(..., examples=["local"])
    calendar_timezone: str = Field(
        ...,
        description="Zone the weekly schedule times are interpreted in.",
        examples=["Europe/Berlin"],
    )
    calendar_now: datetime = Field(
        ...,
        description=(
            "Current wall clock in `calendar_timezone`. Schedule slots before "
            "this instant are no longer generated."
        ),
        examples=["2025-01-06T10:30:00+01:00"],
    )
    max_window_days: int = Field(
        ...,
        description="Widest startDate/endDate window accepted by /events.",
        examples=[366],
    )


@router.get(
    "/health",
    response_model=CalendarStatus,
    summary="Service liveness and calendar settings",
    description=(
        "Answers without touching the database. Besides liveness it reports "
        "the calendar time zone and the window limit, so a client can tell "
        "why a session appears at a given hour or why a wide window is refused."
    ),
)
async def health_check() -> CalendarStatus:
    settings = get_settings()
    return CalendarStatus(
        status="ok",
        app_name=settings.APP_NAME,
        environment=settings.APP_ENV,
        calendar_timezone=settings.CALENDAR_TZ,
        calendar_now=utc_now().astimezone(settings.calendar_zone),
        max_window_days=settings.MAX_WINDOW_DAYS,
    )
