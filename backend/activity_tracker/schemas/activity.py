"""Pydantic schemas for the daily activity API (wake time + study sessions)."""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from activity_tracker.services.time_conversion import WakeCategory, minutes_to_wake_time, wake_time_to_minutes


class StudySessionIn(BaseModel):
    """One study session as entered by the user. Also the body for appending a session to a day."""

    topic: str = Field(..., min_length=1, max_length=255)
    duration: int = Field(..., ge=1, description="Minutes")
    notes: str = ""

    @field_validator("topic", "notes")
    @classmethod
    def _strip(cls, v: str) -> str:
        return v.strip()

    @field_validator("topic")
    @classmethod
    def _topic_not_blank(cls, v: str) -> str:
        if not v:
            raise ValueError("topic must not be empty")
        return v


class ActivityUpsertBody(BaseModel):
    """Body for creating or replacing one day. Sessions replace the stored list."""

    date: date
    wake_time: str = Field(..., description="HH:MM, 24-hour")
    study_sessions: list[StudySessionIn] = Field(default_factory=list)

    @field_validator("wake_time")
    @classmethod
    def _canonical_wake_time(cls, v: str) -> str:
        # FormatError is a ValueError, so pydantic reports it as a 422
        return minutes_to_wake_time(wake_time_to_minutes(v))


class StudySessionResponse(BaseModel):
    topic: str
    duration: int
    notes: str


class ActivityResponse(BaseModel):
    """Single day as returned by the API, with derived fields."""

    date: date
    wake_time: str
    wake_category: WakeCategory
    study_sessions: list[StudySessionResponse]
    total_study_minutes: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ActivityListResponse(BaseModel):
    """Paginated days, newest first."""

    items: list[ActivityResponse]
    total: int
    limit: int
    offset: int
    has_more: bool
