# app/api/routes/payments.py
from http import HTTPStatus

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies.current_user import get_current_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.payments import PaymentsThisMonth
from app.services.payments_summary import compute_payments_this_month

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.get(
    "/this-month",
    response_model=PaymentsThisMonth,
    status_code=HTTPStatus.OK,
    summary="Get the caller's income summary for the current month",
    description=(
        "Return how much the calling user received this month, from how many "
        "payments, and how many payments are expected (one per client)."
    ),
    responses={
        200: {
            "description": "Summary computed.",
            "content": {
                "application/json": {
                    "example": {"month": 1, "amount": 420.0, "count": 6, "expected": 8}
                }
            },
        },
        400: {"description": "Unknown user."},
        401: {"description": "The request carries no caller identity."},
    },
)
async def get_payments_this_month(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> PaymentsThisMonth:
    return await compute_payments_this_month(db, user_id=user.id)
