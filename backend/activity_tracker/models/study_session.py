from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from activity_tracker.db.base import Base


class StudySession(Base):
    __tablename__ = "study_sessions"
    __table_args__ = (CheckConstraint("duration >= 1", name="ck_study_sessions_duration_positive"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    activity_id: Mapped[int] = mapped_column(
        ForeignKey("activities.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # order within the day
    topic: Mapped[str] = mapped_column(String(255), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)  # minutes
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    activity: Mapped["Activity"] = relationship("Activity", back_populates="study_sessions")
