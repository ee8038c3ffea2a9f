# app/services/payments_summary.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.timeutils import to_utc, utc_now
from app.models.payment import Client, Income
from app.schemas.payments import PaymentsThisMonth


def month_bounds(now: datetime) -> tuple[datetime, datetime]:
    """
    Return [start, end) of the calendar month containing `now`, in UTC.
    """
    now = to_utc(now)
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


async def compute_payments_this_month(
    db: AsyncSession,
    user_id: str,
    now: datetime | None = None,
) -> PaymentsThisMonth:
    """
    Summarize the incomes a user received during the current month.

    - amount   = sum of income amounts received in the month
    - count    = number of those incomes
    - expected = number of the user's clients (one payment expected per client)
    """
    now = to_utc(now) if now is not None else utc_now()
    start, end = month_bounds(now)

    incomes_stmt = select(
        func.coalesce(func.sum(Income.amount), 0.0),
        func.count(Income.id),
    ).where(
        and_(
            Income.user_id == user_id,
            Income.received_at >= start,
            Income.received_at < end,
        )
    )
    incomes_row = (await db.execute(incomes_stmt)).one()
    amount, count = incomes_row

    clients_stmt = select(func.count(Client.id)).where(Client.user_id == user_id)
    expected = (await db.execute(clients_stmt)).scalar_one()

    return PaymentsThisMonth(
        month=now.month,
        amount=float(amount or 0.0),
        count=int(count or 0),
        expected=int(expected or 0),
    )
