"""Buddy, sticker and challenge schemas."""
from datetime import date, datetime
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, model_validator

from gymsmash.models.social import BuddyStatus, ChallengeType, StickerType
from gymsmash.schemas.common import PartialUpdate


class BuddyInviteRequest(BaseModel):
    buddy_email: EmailStr


class BuddyRespondRequest(BaseModel):
    accept: bool


class BuddyResponse(BaseModel):
    id: UUID
    user_id: UUID
    buddy_email: str
    buddy_user_id: Optional[UUID] = None
    status: BuddyStatus
    created_at: datetime

    class Config:
        from_attributes = True


class BuddySummary(BaseModel):
    """An accepted buddy as seen by the caller."""
    id: UUID
    buddy_user_id: UUID
    email: str
    full_name: Optional[str] = None
    total_workouts: int = 0
    current_streak: int = 0
    last_workout_date: Optional[date] = None


class BuddyListResponse(BaseModel):
    buddies: List[BuddySummary]
    pending_sent: List[BuddyResponse]
    pending_received: List[BuddyResponse]


class BuddyAcceptResponse(BaseModel):
    buddy: BuddyResponse
    granted_trial: bool
    buddy_promo_applied: bool


class StickerCreate(BaseModel):
    to_user_id: UUID
    message_type: StickerType
    custom_message: Optional[str] = Field(None, max_length=280)


class StickerResponse(BaseModel):
    id: UUID
    from_user_id: UUID
    to_user_id: UUID
    message_type: StickerType
    emoji: str
    label: str
    custom_message: Optional[str] = None
    is_read: bool
    expires_at: datetime
    created_at: datetime


class ChallengeBase(BaseModel):
    name: str = Field(..., max_length=200)
    description: Optional[str] = None
    challenge_type: ChallengeType
    exercise_name: Optional[str] = Field(None, max_length=200)
    target_value: float = Field(..., gt=0)
    reward_points: int = Field(default=0, ge=0)
    start_date: date
    end_date: date
    is_active: bool = True


class ChallengeCreate(ChallengeBase):
    """Schema for creating a challenge."""

    @model_validator(mode="after")
    def check_window(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        if self.challenge_type == ChallengeType.SPECIFIC_EXERCISE and not self.exercise_name:
            raise ValueError("exercise_name is required for specific_exercise challenges")
        return self


class ChallengeUpdate(PartialUpdate):
    not_nullable = (
        "name", "challenge_type", "target_value", "reward_points",
        "start_date", "end_date", "is_active",
    )

    name: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    challenge_type: Optional[ChallengeType] = None
    exercise_name: Optional[str] = Field(None, max_length=200)
    target_value: Optional[float] = Field(None, gt=0)
    reward_points: Optional[int] = Field(None, ge=0)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: Optional[bool] = None


class ChallengeResponse(ChallengeBase):
    id: UUID
    created_at: datetime

    class Config:
        from_attributes = True


class ChallengeStatus(BaseModel):
    """A challenge with the caller's standing."""
    challenge: ChallengeResponse
    participant_count: int
    joined: bool
    progress: float = 0
    progress_percent: float = 0
    completed: bool = False


class ChallengeListResponse(BaseModel):
    active: List[ChallengeStatus]
    upcoming: List[ChallengeStatus]


class ChallengeParticipantResponse(BaseModel):
    id: UUID
    challenge_id: UUID
    user_id: UUID
    progress: float
    completed: bool

    class Config:
        from_attributes = True
