"""Community leaderboard route."""
from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gymsmash.models.base import get_db
from gymsmash.models.social import UserStats
from gymsmash.models.user import User
from gymsmash.schemas.progress import LeaderboardResponse
from gymsmash.services.leaderboard import LEADERBOARD_SIZE, build_leaderboard
from gymsmash.utils.auth import get_current_user

router = APIRouter(prefix="/leaderboard", tags=["Leaderboard"])


@router.get("", response_model=LeaderboardResponse)
async def get_leaderboard(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Top users by points plus volume, streak and workout boards."""
    result = await db.execute(
        select(UserStats).order_by(UserStats.points.desc()).limit(LEADERBOARD_SIZE)
    )
    stats = result.scalars().all()

    user_ids = [s.user_id for s in stats]
    names = {}
    if user_ids:
        rows = await db.execute(select(User.id, User.full_name).where(User.id.in_(user_ids)))
        names = {user_id: full_name for user_id, full_name in rows.all()}

    return build_leaderboard(stats, names, current_user.id)
