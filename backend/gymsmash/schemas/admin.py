"""Admin dashboard schemas."""
from datetime import date, datetime
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field

from gymsmash.models.user import SubscriptionTier, UserRole


class AdminUserRow(BaseModel):
    """One user in the admin table."""
    id: UUID
    email: str
    full_name: Optional[str] = None
    role: UserRole
    subscription_tier: SubscriptionTier
    trial_end_date: Optional[date] = None
    student_verified: bool
    primary_goal: Optional[str] = None
    experience_level: Optional[str] = None
    workout_count: int = 0
    points: int = 0
    current_streak: int = 0
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    created_at: datetime


class ReasonCountResponse(BaseModel):
    reason: str
    label: str
    count: int
    percent: float

    class Config:
        from_attributes = True


class CancellationFeedback(BaseModel):
    total: int
    reasons: List[ReasonCountResponse]
    comments: List[str]

    class Config:
        from_attributes = True


class AdminUsersResponse(BaseModel):
    users: List[AdminUserRow]
    total_users: int
    premium_users: int
    total_workouts: int
    cancellations: CancellationFeedback


class RotationWeeksUpdate(BaseModel):
    weeks: int = Field(..., ge=1, le=52)


class SyncExercisesResponse(BaseModel):
    schedules_updated: int
    exercises_updated: int
