# app/api/dependencies/internal_auth.py
import logging
import secrets
from http import HTTPStatus
from typing import Optional

from fastapi import Header, HTTPException

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Environments where /internal may stay open when no key is configured.
KEYLESS_ENVIRONMENTS = frozenset({"local", "test"})


def _expected_key(settings: Settings) -> Optional[str]:
    """
    The key /internal callers must present, or None when the hook is open.

    Outside KEYLESS_ENVIRONMENTS a missing key is a deployment error: the
    bootstrap hook would otherwise let anyone create or rename accounts.
    """
    env = (settings.APP_ENV or "local").lower()
    if settings.INTERNAL_API_KEY:
        return settings.INTERNAL_API_KEY
    if env in KEYLESS_ENVIRONMENTS:
        return None

    logger.error("INTERNAL_API_KEY is not configured for environment %s", env)
    raise HTTPException(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        detail="INTERNAL_API_KEY not configured for this environment.",
    )


async def verify_internal_api_key(
    internal_api_key: Optional[str] = Header(
        default=None,
        alias="X-Internal-Api-Key",
        description="Shared secret of the identity provider's account hooks.",
    ),
) -> None:
    """
    Guard for /internal, where the identity provider announces new accounts.

    401 when a key is expected and the header is missing or wrong;
    500 when a non-local deployment has no key configured.
    """
    expected = _expected_key(get_settings())
    if expected is None:
        return

    if not internal_api_key or not secrets.compare_digest(internal_api_key, expected):
        logger.warning("Rejected account hook call with invalid or missing API key")
        raise HTTPException(
            status_code=HTTPStatus.UNAUTHORIZED,
            detail="Invalid or missing internal API key.",
        )
