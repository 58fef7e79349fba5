"""Workout logging routes."""
import logging
from datetime import date, timedelta
from typing import Optional, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gymsmash.models.base import get_db
from gymsmash.models.user import User
from gymsmash.models.workout import WorkoutLog, ExerciseLog
from gymsmash.schemas.workout import (
    EarnedAchievement,
    WeeklyWorkoutStats,
    WorkoutLogCreate,
    WorkoutLogCreated,
    WorkoutLogResponse,
    WorkoutLogSummary,
    WorkoutSummary,
)
from gymsmash.services.activity_service import refresh_user_activity
from gymsmash.services.schedule_builder import week_start as monday_of
from gymsmash.services.workout_stats import ACHIEVEMENTS_BY_TYPE, session_volume
from gymsmash.utils.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workouts", tags=["Workouts"])


async def get_user_log(db: AsyncSession, user_id: UUID, log_id: UUID) -> Optional[WorkoutLog]:
    """Load one of a user's logs with its exercises, refreshing cached state."""
    result = await db.execute(
        select(WorkoutLog)
        .where(and_(WorkoutLog.id == log_id, WorkoutLog.user_id == user_id))
        .options(selectinload(WorkoutLog.exercises_completed))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


@router.get("/logs", response_model=List[WorkoutLogSummary])
async def list_workout_logs(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List workout logs with optional filtering."""
    query = select(WorkoutLog).where(WorkoutLog.user_id == current_user.id)

    if start_date:
        query = query.where(WorkoutLog.date >= start_date)
    if end_date:
        query = query.where(WorkoutLog.date <= end_date)

    query = query.order_by(WorkoutLog.date.desc(), WorkoutLog.created_at.desc())
    query = query.offset(offset).limit(limit).options(selectinload(WorkoutLog.exercises_completed))

    result = await db.execute(query)
    logs = result.scalars().all()

    return [
        WorkoutLogSummary(
            id=log.id,
            workout_name=log.workout_name,
            muscle_group=log.muscle_group,
            date=log.date,
            duration_minutes=log.duration_minutes,
            total_volume=log.total_volume,
            exercise_count=len(log.exercises_completed),
        )
        for log in logs
    ]


@router.get("/logs/{log_id}", response_model=WorkoutLogResponse)
async def get_workout_log(
    log_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get a specific workout log."""
    log = await get_user_log(db, current_user.id, log_id)

    if not log:
        raise HTTPException(status_code=404, detail="Workout log not found")

    return log


@router.post("/logs", response_model=WorkoutLogCreated, status_code=status.HTTP_201_CREATED)
async def create_workout_log(
    log_data: WorkoutLogCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Log a completed workout.

    Only exercises with at least one completed set are kept. Stats and
    achievements are brought up to date before responding.
    """
    performed = [e for e in log_data.exercises_completed if e.sets_completed > 0]
    total_volume = session_volume(performed)

    log = WorkoutLog(
        user_id=current_user.id,
        workout_name=log_data.workout_name,
        muscle_group=log_data.muscle_group,
        date=log_data.date or date.today(),
        duration_minutes=log_data.duration_minutes,
        total_volume=total_volume,
    )

    # Add exercise logs
    for i, ex_data in enumerate(performed):
        log.exercises_completed.append(ExerciseLog(
            exercise_name=ex_data.exercise_name,
            exercise_code=ex_data.exercise_code,
            sets_completed=ex_data.sets_completed,
            reps_per_set=ex_data.reps_per_set,
            weight_kg=ex_data.weight_kg,
            video_url=ex_data.video_url,
            template_url=ex_data.template_url,
            order_index=i,
        ))

    db.add(log)
    await db.flush()

    _, new_types = await refresh_user_activity(db, current_user.id, new_log_id=log.id)
    logger.info(
        f"User {current_user.id} logged {log.workout_name}: "
        f"{len(performed)} exercises, {total_volume}kg"
    )

    log = await get_user_log(db, current_user.id, log.id)
    return WorkoutLogCreated(
        log=WorkoutLogResponse.model_validate(log),
        summary=WorkoutSummary(
            workout_name=log.workout_name,
            exercises_completed=len(performed),
            total_volume=log.total_volume,
            duration_minutes=log.duration_minutes,
            date=log.date,
        ),
        new_achievements=[
            EarnedAchievement(
                type=kind,
                title=ACHIEVEMENTS_BY_TYPE[kind].unlocked_title,
                message=ACHIEVEMENTS_BY_TYPE[kind].unlocked_message,
                points=ACHIEVEMENTS_BY_TYPE[kind].points,
            )
            for kind in new_types
        ],
    )


@router.delete("/logs/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workout_log(
    log_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a workout log."""
    log = await get_user_log(db, current_user.id, log_id)

    if not log:
        raise HTTPException(status_code=404, detail="Workout log not found")

    await db.delete(log)
    await db.flush()
    await refresh_user_activity(db, current_user.id)


@router.get("/stats/weekly", response_model=WeeklyWorkoutStats)
async def get_weekly_stats(
    week_offset: int = Query(0, ge=0, le=52, description="Weeks ago (0 = current)"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get workout statistics for a specific week."""
    week_start = monday_of(date.today()) - timedelta(weeks=week_offset)
    week_end = week_start + timedelta(days=6)

    result = await db.execute(
        select(WorkoutLog).where(
            and_(
                WorkoutLog.user_id == current_user.id,
                WorkoutLog.date >= week_start,
                WorkoutLog.date <= week_end,
            )
        )
    )
    logs = result.scalars().all()

    total_duration = sum(log.duration_minutes or 0 for log in logs)

    muscle_groups: dict[str, int] = {}
    for log in logs:
        group = log.muscle_group or "Other"
        muscle_groups[group] = muscle_groups.get(group, 0) + 1

    return WeeklyWorkoutStats(
        week_start=week_start,
        total_workouts=len(logs),
        total_duration_minutes=total_duration,
        total_volume=sum(log.total_volume or 0 for log in logs),
        muscle_groups=muscle_groups,
        avg_workout_duration=total_duration / len(logs) if logs else None,
    )
