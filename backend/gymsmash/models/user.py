"""User account and questionnaire profile models."""
import enum
import uuid
from datetime import date, datetime
from typing import Optional, List

from sqlalchemy import Enum, String, Integer, Boolean, ForeignKey, DateTime, Date, Text
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gymsmash.models.base import Base


class UserRole(str, enum.Enum):
    """Account role."""
    USER = "user"
    ADMIN = "admin"


class SubscriptionTier(str, enum.Enum):
    """Subscription tier."""
    FREE = "free"
    PREMIUM = "premium"


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"


class AgeRange(str, enum.Enum):
    UNDER_25 = "under_25"
    FROM_26_TO_35 = "26-35"
    FROM_36_TO_45 = "36-45"
    FROM_46_TO_55 = "46-55"
    OVER_56 = "56+"


class ExperienceLevel(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class BodyType(str, enum.Enum):
    SLIM = "slim"
    AVERAGE = "average"
    ATHLETIC = "athletic"
    HEAVY = "heavy"


class TargetZone(str, enum.Enum):
    """Body zones a user wants to focus on."""
    ARMS = "arms"
    CHEST = "chest"
    ABS = "abs"
    LEGS = "legs"
    GLUTES = "glutes"
    BACK = "back"
    SHOULDERS = "shoulders"


class PrimaryGoal(str, enum.Enum):
    TONE_BODY = "tone_body"
    BUILD_MUSCLE = "build_muscle"


class EquipmentAccess(str, enum.Enum):
    FULL_GYM = "full_gym"
    BODYWEIGHT_ONLY = "bodyweight_only"


class Weekday(str, enum.Enum):
    """Days of the week, Monday first."""
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class User(Base):
    """Account with authentication, subscription and verification state."""

    __tablename__ = "users"

    # Authentication
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False)
    role: Mapped[UserRole] = mapped_column(Enum(UserRole), default=UserRole.USER)
    full_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    # Subscription
    subscription_tier: Mapped[SubscriptionTier] = mapped_column(
        Enum(SubscriptionTier), default=SubscriptionTier.FREE
    )
    trial_end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    stripe_customer_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    stripe_subscription_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    subscription_status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    cancelled_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    cancellation_reason: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    cancellation_comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    buddy_promo_applied: Mapped[bool] = mapped_column(Boolean, default=False)

    # Student verification
    student_verified: Mapped[bool] = mapped_column(Boolean, default=False)
    student_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    student_verified_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    student_verification_code: Mapped[Optional[str]] = mapped_column(String(6), nullable=True)
    student_verification_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    student_verification_expires: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Before photo
    before_photo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    before_photo_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    # Relationships
    profile: Mapped[Optional["UserProfile"]] = relationship(
        "UserProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def has_premium(self) -> bool:
        """Premium through a paid tier or a running trial."""
        if self.subscription_tier == SubscriptionTier.PREMIUM:
            return True
        return self.trial_end_date is not None and self.trial_end_date >= date.today()


class UserProfile(Base):
    """Questionnaire answers and template rotation state."""

    __tablename__ = "user_profiles"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), unique=True
    )

    # Questionnaire
    gender: Mapped[Gender] = mapped_column(Enum(Gender))
    age_range: Mapped[AgeRange] = mapped_column(Enum(AgeRange))
    experience_level: Mapped[ExperienceLevel] = mapped_column(Enum(ExperienceLevel))
    body_type: Mapped[BodyType] = mapped_column(Enum(BodyType))
    target_zone: Mapped[List[str]] = mapped_column(JSONB, default=list)
    primary_goal: Mapped[PrimaryGoal] = mapped_column(Enum(PrimaryGoal))
    available_days: Mapped[List[str]] = mapped_column(JSONB, default=list)
    preferred_coach_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), ForeignKey("coaches.id", ondelete="SET NULL"), nullable=True
    )
    equipment_access: Mapped[EquipmentAccess] = mapped_column(Enum(EquipmentAccess))
    workout_duration_preference: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Template rotation
    current_rotation_cycle: Mapped[int] = mapped_column(Integer, default=0)
    last_rotation_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    declined_current_rotation: Mapped[bool] = mapped_column(Boolean, default=False)

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="profile")
