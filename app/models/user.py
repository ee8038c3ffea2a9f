# app/models/user.py
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String

from app.db.base import Base


class User(Base):
    """
    Account record created on first login.

    The primary key is the identifier issued by the upstream auth provider,
    so callers can be resolved without an extra lookup table.
    """

    __tablename__ = "users"

    id = Column(String(128), primary_key=True)
    name = Column(String(255), nullable=True)
    avatar = Column(String(1024), nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(tz=timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} name={self.name}>"
