"""Recompute user stats and award achievements after workouts change."""
import logging
from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from gymsmash.models.social import Achievement, UserStats
from gymsmash.models.workout import WorkoutLog
from gymsmash.services.workout_stats import (
    compute_user_stats,
    evaluate_achievements,
    total_points,
)

logger = logging.getLogger(__name__)


async def load_user_logs(db: AsyncSession, user_id: UUID) -> list[WorkoutLog]:
    """A user's full workout history with exercises, oldest first."""
    result = await db.execute(
        select(WorkoutLog)
        .where(WorkoutLog.user_id == user_id)
        .order_by(WorkoutLog.date, WorkoutLog.created_at)
        .options(selectinload(WorkoutLog.exercises_completed))
    )
    return list(result.scalars().all())


async def get_or_create_stats(db: AsyncSession, user_id: UUID) -> UserStats:
    result = await db.execute(select(UserStats).where(UserStats.user_id == user_id))
    stats = result.scalar_one_or_none()
    if stats is None:
        stats = UserStats(
            user_id=user_id,
            total_workouts=0,
            total_volume=0.0,
            current_streak=0,
            longest_streak=0,
            points=0,
        )
        db.add(stats)
    return stats


async def earned_achievements(db: AsyncSession, user_id: UUID) -> list[Achievement]:
    result = await db.execute(
        select(Achievement)
        .where(Achievement.user_id == user_id)
        .order_by(Achievement.earned_date)
    )
    return list(result.scalars().all())


async def refresh_user_activity(
    db: AsyncSession,
    user_id: UUID,
    today: Optional[date] = None,
    new_log_id: Optional[UUID] = None,
) -> tuple[UserStats, list[str]]:
    """
    Recalculate a user's stats from their history and award new achievements.

    Achievements are never revoked, so deleting a workout only lowers totals.
    Personal records are only checked for ``new_log_id``.

    Args:
        db: Database session
        user_id: User whose history changed
        today: Reference date for streaks
        new_log_id: Workout just logged, if any

    Returns:
        (updated stats, newly earned achievement types)
    """
    today = today or date.today()
    logs = await load_user_logs(db, user_id)
    snapshot = compute_user_stats(logs, today)

    stats = await get_or_create_stats(db, user_id)
    stats.total_workouts = snapshot.total_workouts
    stats.total_volume = snapshot.total_volume
    stats.current_streak = snapshot.current_streak
    stats.longest_streak = snapshot.longest_streak
    stats.last_workout_date = snapshot.last_workout_date

    earned = [a.achievement_type for a in await earned_achievements(db, user_id)]
    new_log = next((log for log in logs if log.id == new_log_id), None) if new_log_id else None
    new_types = evaluate_achievements(snapshot, logs, earned, new_log)
    for kind in new_types:
        db.add(Achievement(user_id=user_id, achievement_type=kind, earned_date=today))
        logger.info(f"User {user_id} earned achievement {kind}")

    stats.points = total_points(earned + new_types)
    await db.flush()
    return stats, new_types
