"""API routes."""
from gymsmash.routes.auth import router as auth_router
from gymsmash.routes.profile import router as profile_router
from gymsmash.routes.schedules import router as schedules_router
from gymsmash.routes.catalog import router as catalog_router
from gymsmash.routes.workouts import router as workouts_router
from gymsmash.routes.progress import router as progress_router
from gymsmash.routes.achievements import router as achievements_router
from gymsmash.routes.leaderboard import router as leaderboard_router
from gymsmash.routes.challenges import router as challenges_router
from gymsmash.routes.buddies import router as buddies_router
from gymsmash.routes.billing import router as billing_router
from gymsmash.routes.media import router as media_router
from gymsmash.routes.admin import router as admin_router

__all__ = [
    "auth_router",
    "profile_router",
    "schedules_router",
    "catalog_router",
    "workouts_router",
    "progress_router",
    "achievements_router",
    "leaderboard_router",
    "challenges_router",
    "buddies_router",
    "billing_router",
    "media_router",
    "admin_router",
]
