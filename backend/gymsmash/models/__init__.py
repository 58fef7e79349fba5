"""Database models."""
from gymsmash.models.base import Base
from gymsmash.models.user import User, UserProfile
from gymsmash.models.catalog import Exercise, WorkoutTemplate, Coach, AppSettings
from gymsmash.models.workout import WorkoutSchedule, WorkoutLog, ExerciseLog
from gymsmash.models.social import (
    WorkoutBuddy,
    BuddyMessage,
    Challenge,
    ChallengeParticipant,
    UserStats,
    Achievement,
)
from gymsmash.models.billing import PricingConfig, SpecialOffer
from gymsmash.models.media import MediaAsset

__all__ = [
    "Base",
    "User",
    "UserProfile",
    "Exercise",
    "WorkoutTemplate",
    "Coach",
    "AppSettings",
    "WorkoutSchedule",
    "WorkoutLog",
    "ExerciseLog",
    "WorkoutBuddy",
    "BuddyMessage",
    "Challenge",
    "ChallengeParticipant",
    "UserStats",
    "Achievement",
    "PricingConfig",
    "SpecialOffer",
    "MediaAsset",
]
