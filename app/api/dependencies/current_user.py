# app/api/dependencies/current_user.py
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.models.user import User
from app.services.account_bootstrap import get_user

logger = logging.getLogger(__name__)


async def get_current_user(
    user_id: Optional[str] = Header(
        default=None,
        alias="X-User-Id",
        description=(
            "Identifier of the authenticated caller, injected by the upstream "
            "auth layer after verifying the caller's token."
        ),
    ),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Resolve the calling user.

    - No identity on the request      -> 401 (unauthenticated).
    - Identity without a user record  -> 400 (invalid argument).
    """
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthenticated.",
        )

    user = await get_user(db, user_id)
    if user is None:
        logger.warning("Rejected request for unknown user %s", user_id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid user",
        )

    return user
