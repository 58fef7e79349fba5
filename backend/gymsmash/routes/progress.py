"""Progress and personal record routes."""
from typing import Optional, List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from gymsmash.models.base import get_db
from gymsmash.models.user import User
from gymsmash.schemas.progress import PersonalRecordResponse, ProgressCharts
from gymsmash.services.activity_service import load_user_logs
from gymsmash.services.progress import (
    exercise_progress,
    personal_records,
    tracked_exercises,
    volume_over_time,
    weekly_frequency,
)
from gymsmash.utils.auth import get_current_user

router = APIRouter(prefix="/progress", tags=["Progress"])


@router.get("/records", response_model=List[PersonalRecordResponse])
async def get_personal_records(
    limit: int = Query(10, ge=1, le=50),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Heaviest lift per exercise."""
    logs = await load_user_logs(db, current_user.id)
    return personal_records(logs, limit)


@router.get("/charts", response_model=ProgressCharts)
async def get_progress_charts(
    exercise: Optional[str] = Query(None, description="Exercise to chart (defaults to the first tracked)"),
    weeks: int = Query(8, ge=1, le=52),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Chart series for volume, training frequency and one exercise's weight."""
    logs = await load_user_logs(db, current_user.id)
    names = tracked_exercises(logs)
    selected = exercise or (names[0] if names else None)

    return ProgressCharts(
        volume_over_time=volume_over_time(logs),
        weekly_frequency=weekly_frequency(logs, weeks),
        tracked_exercises=names,
        exercise_name=selected,
        exercise_progress=exercise_progress(logs, selected) if selected else [],
    )
