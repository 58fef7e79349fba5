"""Pydantic schemas for API validation."""
from gymsmash.schemas.auth import (
    MagicLinkRequest,
    MagicLinkVerify,
    TokenResponse,
    RefreshTokenRequest,
)
from gymsmash.schemas.user import (
    UserUpdate,
    UserResponse,
    QuestionnaireRequest,
    ProfileResponse,
)
from gymsmash.schemas.catalog import (
    ExerciseCreate,
    ExerciseResponse,
    WorkoutTemplateCreate,
    WorkoutTemplateResponse,
    CoachCreate,
    CoachResponse,
)
from gymsmash.schemas.schedule import ScheduleResponse, RotationStatusResponse
from gymsmash.schemas.workout import WorkoutLogCreate, WorkoutLogResponse
from gymsmash.schemas.progress import ProgressCharts, LeaderboardResponse
from gymsmash.schemas.social import BuddyResponse, StickerResponse, ChallengeResponse
from gymsmash.schemas.billing import PricingConfigResponse, SpecialOfferResponse
from gymsmash.schemas.media import MediaAssetResponse, OverlayLayoutResponse

__all__ = [
    "MagicLinkRequest",
    "MagicLinkVerify",
    "TokenResponse",
    "RefreshTokenRequest",
    "UserUpdate",
    "UserResponse",
    "QuestionnaireRequest",
    "ProfileResponse",
    "ExerciseCreate",
    "ExerciseResponse",
    "WorkoutTemplateCreate",
    "WorkoutTemplateResponse",
    "CoachCreate",
    "CoachResponse",
    "ScheduleResponse",
    "RotationStatusResponse",
    "WorkoutLogCreate",
    "WorkoutLogResponse",
    "ProgressCharts",
    "LeaderboardResponse",
    "BuddyResponse",
    "StickerResponse",
    "ChallengeResponse",
    "PricingConfigResponse",
    "SpecialOfferResponse",
    "MediaAssetResponse",
    "OverlayLayoutResponse",
]
