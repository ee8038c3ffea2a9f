# app/api/routes/events.py
from datetime import datetime, timedelta
from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.dependencies.current_user import get_current_user
from app.core.config import get_settings
from app.core.timeutils import ensure_aware
from app.db.session import get_session_factory
from app.models.user import User
from app.schemas.occurrence import Occurrence
from app.services.event_gateway import SqlEventGateway
from app.services.occurrence_calendar import get_merged_occurrences
from app.services.schedule_gateway import SqlScheduleGateway

router = APIRouter(prefix="/events", tags=["Events"])


@router.get(
    "",
    response_model=list[Occurrence],
    response_model_exclude_none=True,
    status_code=HTTPStatus.OK,
    summary="List the caller's sessions in a date window",
    description=(
        "Return every session of the calling user between `startDate` and "
        "`endDate`, ordered by start time.\n\n"
        "The result combines two sources:\n"
        "- sessions generated from the user's weekly schedule (only from now on)\n"
        "- persisted sessions (edits, cancellations and one-offs), which always "
        "take precedence over a generated session with the same id\n\n"
        "Cancelled sessions are never returned. Naive date-times are read as UTC."
    ),
    responses={
        200: {
            "description": "Ordered list of sessions.",
            "content": {
                "application/json": {
                    "example": [
                        {
                            "id": "group_G1_202501060900_60",
                            "type": "group",
                            "cancelled": False,
                            "from": "2025-01-06T09:00:00Z",
                            "durationMinutes": 60,
                            "group_id": "G1",
                        }
                    ]
                }
            },
        },
        400: {"description": "Unknown user, inverted or too wide date window."},
        401: {"description": "The request carries no caller identity."},
    },
)
async def list_events(
    start_date: datetime = Query(
        ...,
        alias="startDate",
        description="Start of the window (ISO-8601 date-time, exclusive).",
        examples=["2025-01-06T00:00:00Z"],
    ),
    end_date: datetime = Query(
        ...,
        alias="endDate",
        description="End of the window (ISO-8601 date-time).",
        examples=["2025-01-12T23:59:59Z"],
    ),
    user: User = Depends(get_current_user),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> list[Occurrence]:
    """
    Materialize the caller's calendar for the requested window.
    """
    start_date = ensure_aware(start_date)
    end_date = ensure_aware(end_date)

    if end_date < start_date:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail="endDate must not be before startDate.",
        )

    settings = get_settings()
    max_days = settings.MAX_WINDOW_DAYS
    if end_date - start_date > timedelta(days=max_days):
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail=f"Date window must not exceed {max_days} days.",
        )

    return await get_merged_occurrences(
        user.id,
        start_date,
        end_date,
        schedule_gateway=SqlScheduleGateway(session_factory),
        event_gateway=SqlEventGateway(session_factory, owner_id=user.id),
        calendar_tz=settings.calendar_zone,
    )
