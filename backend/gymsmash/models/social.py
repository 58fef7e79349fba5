"""Buddies, sticker messages, challenges, stats and achievements."""
import enum
import uuid
from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    Enum, String, Float, Integer, Boolean, ForeignKey, DateTime, Date, Text, UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from gymsmash.models.base import Base


class BuddyStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class StickerType(str, enum.Enum):
    """Encouragement stickers buddies can send."""
    PROUD_OF_YOU = "proud_of_you"
    SMASHED_IT = "smashed_it"
    KEEP_GOING = "keep_going"
    LETS_GO = "lets_go"
    FIRE = "fire"
    MUSCLE = "muscle"


class ChallengeType(str, enum.Enum):
    WORKOUT_COUNT = "workout_count"
    TOTAL_VOLUME = "total_volume"
    STREAK = "streak"
    SPECIFIC_EXERCISE = "specific_exercise"


class WorkoutBuddy(Base):
    """Buddy invitation from one user to an email address."""

    __tablename__ = "workout_buddies"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    buddy_email: Mapped[str] = mapped_column(String(255), index=True)
    buddy_user_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )
    status: Mapped[BuddyStatus] = mapped_column(Enum(BuddyStatus), default=BuddyStatus.PENDING)


class BuddyMessage(Base):
    """Short-lived sticker sent between accepted buddies."""

    __tablename__ = "buddy_messages"

    from_user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    to_user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    message_type: Mapped[StickerType] = mapped_column(Enum(StickerType))
    custom_message: Mapped[Optional[str]] = mapped_column(String(280), nullable=True)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)


class Challenge(Base):
    """Time-boxed community challenge."""

    __tablename__ = "challenges"

    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    challenge_type: Mapped[ChallengeType] = mapped_column(Enum(ChallengeType))
    exercise_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    target_value: Mapped[float] = mapped_column(Float)
    reward_points: Mapped[int] = mapped_column(Integer, default=0)
    start_date: Mapped[date] = mapped_column(Date)
    end_date: Mapped[date] = mapped_column(Date)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class ChallengeParticipant(Base):
    """A user's enrolment and progress in a challenge."""

    __tablename__ = "challenge_participants"
    __table_args__ = (UniqueConstraint("challenge_id", "user_id"),)

    challenge_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("challenges.id", ondelete="CASCADE"), index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    progress: Mapped[float] = mapped_column(Float, default=0.0)
    completed: Mapped[bool] = mapped_column(Boolean, default=False)


class UserStats(Base):
    """Aggregated totals used by leaderboards and achievements."""

    __tablename__ = "user_stats"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), unique=True
    )
    total_workouts: Mapped[int] = mapped_column(Integer, default=0)
    total_volume: Mapped[float] = mapped_column(Float, default=0.0)
    current_streak: Mapped[int] = mapped_column(Integer, default=0)  # weeks
    longest_streak: Mapped[int] = mapped_column(Integer, default=0)  # weeks
    points: Mapped[int] = mapped_column(Integer, default=0, index=True)
    last_workout_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)


class Achievement(Base):
    """Achievement earned by a user."""

    __tablename__ = "achievements"
    __table_args__ = (UniqueConstraint("user_id", "achievement_type"),)

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    achievement_type: Mapped[str] = mapped_column(String(50))
    earned_date: Mapped[date] = mapped_column(Date)
