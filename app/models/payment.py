# app/models/payment.py
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import relationship

from app.db.base import Base


class Client(Base):
    """
    An individual client of a user. Each client is expected to pay once a month.
    """

    __tablename__ = "clients"

    id = Column(String(128), primary_key=True)

    user_id = Column(
        String(128),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name = Column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Client id={self.id} user_id={self.user_id}>"


class Income(Base):
    """
    A single payment received by a user.
    """

    __tablename__ = "incomes"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(
        String(128),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    client_id = Column(
        String(128),
        ForeignKey("clients.id", ondelete="SET NULL"),
        nullable=True,
    )

    amount = Column(Float, nullable=False, default=0.0)

    received_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(tz=timezone.utc),
        index=True,
    )

    client = relationship("Client", backref="incomes")

    def __repr__(self) -> str:
        return (
            f"<Income id={self.id} user_id={self.user_id} "
            f"amount={self.amount} received_at={self.received_at}>"
        )
