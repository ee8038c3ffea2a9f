# app/models/event.py
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
)

from app.db.base import Base


class Event(Base):
    """
    A persisted occurrence: an edited, cancelled or one-off session.

    The primary key is the occurrence identifier (e.g.
    `group_G1_202501060900_60`), so an override written for a generated
    occurrence shares its id with it.
    """

    __tablename__ = "events"

    id = Column(String(255), primary_key=True)

    user_id = Column(
        String(128),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )

    start_time = Column(DateTime(timezone=True), nullable=False, index=True)
    duration_minutes = Column(Integer, nullable=False)

    cancelled = Column(Boolean, nullable=False, default=False)

    group_id = Column(String(128), nullable=True)
    client_id = Column(String(128), nullable=True)

    def __repr__(self) -> str:
        return (
            f"<Event id={self.id} start_time={self.start_time} "
            f"cancelled={self.cancelled}>"
        )
