"""User and profile schemas."""
from datetime import datetime, date
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from gymsmash.models.user import (
    AgeRange,
    BodyType,
    EquipmentAccess,
    ExperienceLevel,
    Gender,
    PrimaryGoal,
    SubscriptionTier,
    TargetZone,
    UserRole,
    Weekday,
)
from gymsmash.schemas.common import PartialUpdate


class UserUpdate(BaseModel):
    """Schema for updating the signed-in account."""
    full_name: Optional[str] = Field(None, max_length=200)


class UserResponse(BaseModel):
    """Schema for user response."""
    id: UUID
    email: str
    full_name: Optional[str] = None
    role: UserRole
    is_verified: bool
    subscription_tier: SubscriptionTier
    trial_end_date: Optional[date] = None
    subscription_status: Optional[str] = None
    has_premium: bool
    student_verified: bool
    student_email: Optional[str] = None
    buddy_promo_applied: bool
    before_photo_url: Optional[str] = None
    before_photo_date: Optional[date] = None
    created_at: datetime

    class Config:
        from_attributes = True


class QuestionnaireRequest(BaseModel):
    """Answers to the onboarding questionnaire."""
    gender: Gender
    age_range: AgeRange
    experience_level: ExperienceLevel
    body_type: BodyType
    target_zone: List[TargetZone] = Field(..., min_length=1)
    primary_goal: PrimaryGoal
    available_days: List[Weekday] = Field(..., min_length=1, max_length=7)
    equipment_access: EquipmentAccess
    preferred_coach_id: Optional[UUID] = None
    workout_duration_preference: Optional[int] = Field(None, ge=10, le=180)

    @field_validator("available_days")
    @classmethod
    def days_must_be_distinct(cls, days: List[Weekday]) -> List[Weekday]:
        if len(set(days)) != len(days):
            raise ValueError("Each training day can only be chosen once")
        return days


class ProfileUpdate(PartialUpdate):
    """Schema for updating individual preferences."""
    not_nullable = ("experience_level", "body_type")

    preferred_coach_id: Optional[UUID] = None
    workout_duration_preference: Optional[int] = Field(None, ge=10, le=180)
    experience_level: Optional[ExperienceLevel] = None
    body_type: Optional[BodyType] = None


class ProfileResponse(BaseModel):
    """Schema for profile response."""
    id: UUID
    user_id: UUID
    gender: Gender
    age_range: AgeRange
    experience_level: ExperienceLevel
    body_type: BodyType
    target_zone: List[str]
    primary_goal: PrimaryGoal
    available_days: List[str]
    preferred_coach_id: Optional[UUID] = None
    equipment_access: EquipmentAccess
    workout_duration_preference: Optional[int] = None
    current_rotation_cycle: int
    last_rotation_date: Optional[date] = None
    declined_current_rotation: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class QuestionnaireResponse(BaseModel):
    """Saved profile plus the outcome of schedule generation."""
    profile: ProfileResponse
    schedule_generated: bool
    schedule_error: Optional[str] = None
    trial_granted: bool = False
