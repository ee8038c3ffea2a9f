# app/models/schedule_rule.py
from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    String,
)

from app.db.base import Base


class ScheduleRule(Base):
    """
    A weekly recurring slot for a group or an individual client.

    Exactly one of `group_id` / `client_id` is expected to be set. Rows are
    maintained by the schedule-management flow; the calendar only reads them.
    """

    __tablename__ = "schedules"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(
        String(128),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # ISO weekday: Monday = 1 ... Sunday = 7
    weekday = Column(Integer, nullable=False)
    hour = Column(Integer, nullable=False)
    minute = Column(Integer, nullable=False, default=0)
    duration_minutes = Column(Integer, nullable=False)

    group_id = Column(String(128), nullable=True)
    client_id = Column(String(128), nullable=True)

    __table_args__ = (
        CheckConstraint("weekday BETWEEN 1 AND 7", name="ck_schedules_weekday"),
        CheckConstraint("hour BETWEEN 0 AND 23", name="ck_schedules_hour"),
        CheckConstraint("minute BETWEEN 0 AND 59", name="ck_schedules_minute"),
    )

    def __repr__(self) -> str:
        return (
            f"<ScheduleRule id={self.id} user_id={self.user_id} "
            f"weekday={self.weekday} time={self.hour:02d}:{self.minute:02d}>"
        )
