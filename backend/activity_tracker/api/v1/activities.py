"""Activities API: one record per calendar day (wake time + study sessions)."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from activity_tracker.db.session import get_db
from activity_tracker.models.activity import Activity
from activity_tracker.schemas.activity import (
    ActivityListResponse,
    ActivityResponse,
    ActivityUpsertBody,
    StudySessionIn,
)
from activity_tracker.services import activity_store
from activity_tracker.services.activity_store import ActivityNotFound
from activity_tracker.services.time_conversion import wake_category

router = APIRouter(prefix="/activities", tags=["activities"])


def _row_to_response(row: Activity) -> ActivityResponse:
    return ActivityResponse(
        date=row.date,
        wake_time=row.wake_time,
        wake_category=wake_category(row.wake_time),
        study_sessions=[
            {"topic": s.topic, "duration": s.duration, "notes": s.notes or ""} for s in row.study_sessions
        ],
        total_study_minutes=row.total_study_minutes or 0,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


@router.get(
    "",
    response_model=ActivityListResponse,
    summary="List activities",
)
async def list_activities(
    session: Annotated[AsyncSession, Depends(get_db)],
    from_date: date | None = None,
    to_date: date | None = None,
    limit: int = Query(default=50, ge=1, le=400),
    offset: int = Query(default=0, ge=0),
) -> ActivityListResponse:
    """Return logged days (newest first), optionally limited to an inclusive date range."""
    if from_date and to_date and from_date > to_date:
        raise HTTPException(status_code=400, detail="from_date must be on or before to_date")
    rows, total = await activity_store.list_activities(session, from_date, to_date, limit=limit, offset=offset)
    return ActivityListResponse(
        items=[_row_to_response(row) for row in rows],
        total=total,
        limit=limit,
        offset=offset,
        has_more=(offset + limit) < total,
    )


@router.get(
    "/{day}",
    response_model=ActivityResponse,
    summary="Get activity for a date",
    responses={404: {"description": "No activity for this date"}},
)
async def get_activity(
    session: Annotated[AsyncSession, Depends(get_db)],
    day: date,
) -> ActivityResponse:
    row = await activity_store.find_by_date(session, day)
    if not row:
        raise HTTPException(status_code=404, detail="Activity not found for this date")
    return _row_to_response(row)


@router.post(
    "",
    response_model=ActivityResponse,
    status_code=201,
    summary="Create or update activity for a date",
    responses={422: {"description": "Invalid wake time or session"}},
)
async def upsert_activity(
    session: Annotated[AsyncSession, Depends(get_db)],
    body: ActivityUpsertBody,
) -> ActivityResponse:
    """Create the day or replace its wake time and sessions. Total study minutes is recomputed."""
    row = await activity_store.upsert_activity(session, body.date, body.wake_time, body.study_sessions)
    await session.commit()
    return _row_to_response(row)


@router.put(
    "/{day}/session",
    response_model=ActivityResponse,
    summary="Add a study session to an existing day",
    responses={404: {"description": "No activity for this date"}},
)
async def add_study_session(
    session: Annotated[AsyncSession, Depends(get_db)],
    day: date,
    body: StudySessionIn,
) -> ActivityResponse:
    try:
        row = await activity_store.add_study_session(session, day, body)
    except ActivityNotFound:
        raise HTTPException(status_code=404, detail="Activity not found for this date")
    await session.commit()
    return _row_to_response(row)


@router.delete(
    "/{day}",
    summary="Delete activity for a date",
    responses={404: {"description": "No activity for this date"}},
)
async def delete_activity(
    session: Annotated[AsyncSession, Depends(get_db)],
    day: date,
) -> dict[str, str]:
    try:
        await activity_store.delete_activity(session, day)
    except ActivityNotFound:
        raise HTTPException(status_code=404, detail="Activity not found for this date")
    await session.commit()
    return {"message": "Activity deleted successfully"}
