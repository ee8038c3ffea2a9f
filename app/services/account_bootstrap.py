# app/services/account_bootstrap.py
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.schemas.user import UserBootstrap, UserRead

logger = logging.getLogger(__name__)


async def bootstrap_user(db: AsyncSession, payload: UserBootstrap) -> UserRead:
    """
    Create the user record for a freshly authenticated account.

    Idempotent: calling it again for the same uid does not create a second
    row; the stored name and avatar are overwritten with the latest values
    reported by the auth provider.
    """
    result = await db.execute(select(User).where(User.id == payload.uid))
    user = result.scalar_one_or_none()

    if user is None:
        user = User(id=payload.uid)
        db.add(user)
        logger.info("Creating user record for %s", payload.uid)
    else:
        logger.info("User %s already exists; refreshing profile", payload.uid)

    user.name = payload.display_name
    user.avatar = payload.photo_url

    await db.commit()
    await db.refresh(user)

    return UserRead.model_validate(user)


async def get_user(db: AsyncSession, user_id: str) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()
