"""Weekly schedules and logged workout sessions."""
import uuid
import datetime as dt
from typing import Optional, List

from sqlalchemy import String, Float, Integer, ForeignKey, Date, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from gymsmash.models.base import Base


class WorkoutSchedule(Base):
    """A user's generated plan for one week."""

    __tablename__ = "workout_schedules"
    __table_args__ = (UniqueConstraint("user_id", "week_start_date"),)

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    week_start_date: Mapped[dt.date] = mapped_column(Date, index=True)

    # [{"day", "workout_name", "muscle_group", "duration_minutes", "exercises"}]
    workouts: Mapped[List[dict]] = mapped_column(JSONB, default=list)


class WorkoutLog(Base):
    """Logged workout session."""

    __tablename__ = "workout_logs"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), index=True
    )

    # Workout info
    workout_name: Mapped[str] = mapped_column(String(200))
    muscle_group: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    date: Mapped[dt.date] = mapped_column(Date, index=True)
    duration_minutes: Mapped[int] = mapped_column(Integer, default=0)

    # Metrics
    total_volume: Mapped[float] = mapped_column(Float, default=0.0)

    # Relationships
    exercises_completed: Mapped[List["ExerciseLog"]] = relationship(
        "ExerciseLog", back_populates="log", cascade="all, delete-orphan",
        order_by="ExerciseLog.order_index"
    )


class ExerciseLog(Base):
    """One exercise performed within a logged session."""

    __tablename__ = "exercise_logs"

    log_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("workout_logs.id", ondelete="CASCADE"), index=True
    )

    # Exercise info
    exercise_name: Mapped[str] = mapped_column(String(200))
    exercise_code: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Performance
    sets_completed: Mapped[int] = mapped_column(Integer, default=0)
    reps_per_set: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    weight_kg: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    # Recorded media
    video_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    template_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Order
    order_index: Mapped[int] = mapped_column(Integer, default=0)

    # Relationships
    log: Mapped["WorkoutLog"] = relationship("WorkoutLog", back_populates="exercises_completed")

    @property
    def volume(self) -> float:
        return (self.sets_completed or 0) * (self.reps_per_set or 0) * (self.weight_kg or 0)
