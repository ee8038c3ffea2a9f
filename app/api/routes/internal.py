# app/api/routes/internal.py
from http import HTTPStatus

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies.internal_auth import verify_internal_api_key
from app.db.session import get_db
from app.schemas.user import UserBootstrap, UserRead
from app.services.account_bootstrap import bootstrap_user

router = APIRouter(
    prefix="/internal",
    tags=["Internal"],
    dependencies=[Depends(verify_internal_api_key)],
)


@router.post(
    "/users",
    response_model=UserRead,
    status_code=HTTPStatus.OK,
    summary="Create the user record for a newly authenticated account",
    description=(
        "Hook called by the auth layer when an account logs in for the first "
        "time. Creates the user record, or refreshes its name and avatar if it "
        "already exists, so calling it repeatedly is safe.\n\n"
        "Protected via the `X-Internal-Api-Key` header when configured."
    ),
    responses={
        200: {
            "description": "User record created or refreshed.",
            "content": {
                "application/json": {
                    "example": {
                        "id": "uid-123",
                        "name": "Jane Coach",
                        "avatar": "https://example.com/avatar.png",
                        "created_at": "2025-01-01T10:30:00Z",
                    }
                }
            },
        },
        401: {
            "description": "Missing or invalid internal API key (if configured).",
        },
    },
)
async def create_user(
    payload: UserBootstrap,
    db: AsyncSession = Depends(get_db),
) -> UserRead:
    return await bootstrap_user(db, payload)
