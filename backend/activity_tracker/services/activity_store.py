"""
Persistence for daily activity records (one row per calendar date).

Every write that touches study sessions recomputes Activity.total_study_minutes
here, explicitly; there are no ORM hooks keeping it in sync. Functions flush but
do not commit: the caller owns the transaction.
"""

import logging
from collections.abc import Sequence
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from activity_tracker.models.activity import Activity, utcnow
from activity_tracker.models.study_session import StudySession
from activity_tracker.schemas.activity import StudySessionIn
from activity_tracker.services.stats import total_study_minutes

logger = logging.getLogger(__name__)


class ActivityNotFound(LookupError):
    """No activity is stored for the requested date."""

    def __init__(self, day: date):
        super().__init__(f"Activity not found for {day.isoformat()}")
        self.day = day


def _range_query(start: date | None, end: date | None):
    q = select(Activity)
    if start is not None:
        q = q.where(Activity.date >= start)
    if end is not None:
        q = q.where(Activity.date <= end)
    return q


async def find_by_date_range(session: AsyncSession, start: date, end: date) -> Sequence[Activity]:
    """Records with start <= date <= end (inclusive), newest first."""
    r = await session.execute(_range_query(start, end).order_by(Activity.date.desc()))
    return r.scalars().all()


async def find_by_date(session: AsyncSession, day: date) -> Activity | None:
    r = await session.execute(
        select(Activity).where(Activity.date == day).execution_options(populate_existing=True)
    )
    return r.scalar_one_or_none()


async def list_activities(
    session: AsyncSession,
    start: date | None = None,
    end: date | None = None,
    *,
    limit: int = 50,
    offset: int = 0,
) -> tuple[Sequence[Activity], int]:
    """Page of records (newest first) plus the total count for the optional range."""
    base = _range_query(start, end)
    count_q = select(func.count()).select_from(base.subquery())
    total = (await session.execute(count_q)).scalar() or 0
    r = await session.execute(base.order_by(Activity.date.desc()).offset(offset).limit(limit))
    return r.scalars().all(), total


def _build_sessions(sessions: Sequence[StudySessionIn], start_position: int = 0) -> list[StudySession]:
    return [
        StudySession(position=start_position + i, topic=s.topic, duration=s.duration, notes=s.notes or "")
        for i, s in enumerate(sessions)
    ]


def _insert_for(session: AsyncSession):
    """Dialect insert supporting ON CONFLICT (PostgreSQL in production, SQLite in tests)."""
    return sqlite_insert if session.get_bind().dialect.name == "sqlite" else pg_insert


async def upsert_activity(
    session: AsyncSession,
    day: date,
    wake_time: str,
    sessions: Sequence[StudySessionIn],
) -> Activity:
    """
    Create the day or replace its wake time and full session list.
    The row is written with INSERT .. ON CONFLICT (date) so concurrent saves of a new day both succeed.
    """
    insert = _insert_for(session)
    stmt = insert(Activity).values(date=day, wake_time=wake_time)
    stmt = stmt.on_conflict_do_update(
        index_elements=[Activity.date],
        set_={"wake_time": stmt.excluded.wake_time, "updated_at": utcnow()},
    )
    await session.execute(stmt)

    activity = await find_by_date(session, day)
    activity.study_sessions = _build_sessions(sessions)
    activity.total_study_minutes = total_study_minutes(activity.study_sessions)
    await session.flush()
    logger.info("Activity %s saved (%d sessions)", day.isoformat(), len(sessions))
    return activity


async def add_study_session(session: AsyncSession, day: date, study: StudySessionIn) -> Activity:
    """Append one session to an existing day. Raises ActivityNotFound."""
    activity = await find_by_date(session, day)
    if not activity:
        raise ActivityNotFound(day)
    activity.study_sessions.extend(_build_sessions([study], start_position=len(activity.study_sessions)))
    activity.total_study_minutes = total_study_minutes(activity.study_sessions)
    await session.flush()
    logger.debug("Activity %s: session %r added, total %d min", day.isoformat(), study.topic, activity.total_study_minutes)
    return activity


async def delete_activity(session: AsyncSession, day: date) -> None:
    """Delete the day and its sessions. Raises ActivityNotFound."""
    activity = await find_by_date(session, day)
    if not activity:
        raise ActivityNotFound(day)
    await session.delete(activity)
    await session.flush()
    logger.info("Activity %s deleted", day.isoformat())
