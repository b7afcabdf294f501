"""One calendar day of tracked activity: wake time plus the day's study sessions."""

from datetime import date, datetime, timezone
from sqlalchemy import Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from activity_tracker.db.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Activity(Base):
    __tablename__ = "activities"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    date: Mapped[date] = mapped_column(Date, nullable=False, unique=True, index=True)
    wake_time: Mapped[str] = mapped_column(String(5), nullable=False)  # "HH:MM", 24-hour
    # Sum of study_sessions.duration; recomputed by the store on every write, never set directly
    total_study_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    study_sessions: Mapped[list["StudySession"]] = relationship(
        "StudySession",
        back_populates="activity",
        cascade="all, delete-orphan",
        order_by="StudySession.position",
        lazy="selectin",
    )
