"""Admin-managed catalog: exercises, workout templates, coaches, app settings."""
from typing import Optional, List

from sqlalchemy import String, Integer, Boolean, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from gymsmash.models.base import Base


DEFAULT_STATS_TO_DISPLAY = ["weight", "volume", "time_under_tension"]


class Exercise(Base):
    """Exercise in the shared library."""

    __tablename__ = "exercises"

    name: Mapped[str] = mapped_column(String(200))
    exercise_code: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Targeting
    target_goal: Mapped[List[str]] = mapped_column(JSONB, default=list)
    equipment_needed: Mapped[List[str]] = mapped_column(JSONB, default=list)
    experience_level: Mapped[List[str]] = mapped_column(JSONB, default=list)
    target_zones: Mapped[List[str]] = mapped_column(JSONB, default=list)
    stats_to_display: Mapped[List[str]] = mapped_column(
        JSONB, default=lambda: list(DEFAULT_STATS_TO_DISPLAY)
    )

    # Defaults
    default_sets: Mapped[int] = mapped_column(Integer, default=3)
    default_reps: Mapped[str] = mapped_column(String(20), default="10-12")
    default_rest_seconds: Mapped[int] = mapped_column(Integer, default=60)

    # Media
    video_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # [{"coach_id": "...", "video_url": "..."}]
    coach_videos: Mapped[List[dict]] = mapped_column(JSONB, default=list)
    is_unilateral: Mapped[bool] = mapped_column(Boolean, default=False)


class WorkoutTemplate(Base):
    """Reusable workout definition; versions of one template share a group."""

    __tablename__ = "workout_templates"

    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Targeting
    target_goal: Mapped[Optional[str]] = mapped_column(String(50), nullable=True, index=True)
    target_zones: Mapped[List[str]] = mapped_column(JSONB, default=list)
    equipment_needed: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    fitness_level: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    duration_minutes: Mapped[int] = mapped_column(Integer, default=45)
    muscle_group: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # [{"name", "exercise_code", "sets", "reps", "rest_seconds", "video_url", ...}]
    exercises: Mapped[List[dict]] = mapped_column(JSONB, default=list)

    # Rotation
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    template_group: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, index=True)
    version_number: Mapped[Optional[int]] = mapped_column(Integer, default=1)


class Coach(Base):
    """Coach whose videos can replace the library demos."""

    __tablename__ = "coaches"

    name: Mapped[str] = mapped_column(String(200))
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    specialty: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    photo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    intro_video_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class AppSettings(Base):
    """Key/value application settings editable by admins."""

    __tablename__ = "app_settings"

    setting_key: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    setting_value: Mapped[str] = mapped_column(Text)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
