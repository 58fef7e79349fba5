"""Achievement routes."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gymsmash.models.base import get_db
from gymsmash.models.user import User
from gymsmash.schemas.progress import (
    AchievementCheckResponse,
    AchievementsResponse,
    AchievementStatus,
    UserStatsResponse,
)
from gymsmash.services.activity_service import earned_achievements, refresh_user_activity
from gymsmash.services.workout_stats import ACHIEVEMENTS, total_points
from gymsmash.utils.auth import get_current_user

router = APIRouter(prefix="/achievements", tags=["Achievements"])


@router.get("", response_model=AchievementsResponse)
async def list_achievements(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """The full catalog with the caller's earned dates."""
    rows = await earned_achievements(db, current_user.id)
    earned = {a.achievement_type: a.earned_date for a in rows}

    return AchievementsResponse(
        achievements=[
            AchievementStatus(
                type=a.type,
                title=a.title,
                description=a.description,
                points=a.points,
                earned=a.type in earned,
                earned_date=earned.get(a.type),
            )
            for a in ACHIEVEMENTS
        ],
        total_points=total_points(earned),
        earned_count=len(earned),
    )


@router.post("/check", response_model=AchievementCheckResponse)
async def check_achievements(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Recalculate stats and award anything newly unlocked."""
    stats, new_types = await refresh_user_activity(db, current_user.id)
    return AchievementCheckResponse(
        new_achievements=new_types,
        stats=UserStatsResponse.model_validate(stats),
    )
