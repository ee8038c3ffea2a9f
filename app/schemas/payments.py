# app/schemas/payments.py
from pydantic import BaseModel, Field


class PaymentsThisMonth(BaseModel):
    """
    Income summary of the calling user for the current calendar month.
    """

    month: int = Field(
        ...,
        ge=1,
        le=12,
        description="Calendar month (1-12) the summary refers to.",
        examples=[1],
    )
    amount: float = Field(
        ...,
        description="Sum of all incomes received this month.",
        examples=[420.0],
    )
    count: int = Field(
        ...,
        description="Number of incomes received this month.",
        examples=[6],
    )
    expected: int = Field(
        ...,
        description="Number of clients, i.e. how many payments are expected per month.",
        examples=[8],
    )
