"""Weekly schedule schemas."""
from datetime import date, datetime
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field

from gymsmash.models.user import Weekday


class ScheduledWorkout(BaseModel):
    """One day's workout within a schedule."""
    day: str
    workout_name: str
    muscle_group: str = ""
    duration_minutes: int = 45
    exercises: List[dict] = Field(default_factory=list)


class ScheduleResponse(BaseModel):
    id: UUID
    user_id: UUID
    week_start_date: date
    workouts: List[ScheduledWorkout]
    updated_at: datetime

    class Config:
        from_attributes = True


class ScheduleUpdate(BaseModel):
    """Replace a schedule's workouts."""
    workouts: List[ScheduledWorkout]


class DayWorkoutRequest(BaseModel):
    template_id: UUID


class SwapDaysRequest(BaseModel):
    first_day: Weekday
    second_day: Weekday


class RotationStatusResponse(BaseModel):
    current_cycle: int
    next_cycle: int
    rotation_weeks: int
    weeks_since_start: int
    declined: bool
    is_due: bool


class GenerateScheduleRequest(BaseModel):
    """Optional overrides for regeneration."""
    cycle: Optional[int] = Field(None, ge=0)
