"""Workout logging schemas."""
import datetime as dt
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field


class ExerciseLogCreate(BaseModel):
    """Schema for one performed exercise."""
    exercise_name: str = Field(..., max_length=200)
    exercise_code: Optional[str] = Field(None, max_length=100)
    sets_completed: int = Field(default=0, ge=0)
    reps_per_set: Optional[int] = Field(None, ge=0)
    weight_kg: Optional[float] = Field(None, ge=0)
    video_url: Optional[str] = None
    template_url: Optional[str] = None


class ExerciseLogResponse(BaseModel):
    id: UUID
    exercise_name: str
    exercise_code: Optional[str] = None
    sets_completed: int
    reps_per_set: Optional[int] = None
    weight_kg: Optional[float] = None
    video_url: Optional[str] = None
    template_url: Optional[str] = None
    order_index: int

    class Config:
        from_attributes = True


class WorkoutLogCreate(BaseModel):
    """Schema for logging a finished session."""
    workout_name: str = Field(..., max_length=200)
    muscle_group: Optional[str] = Field(None, max_length=100)
    date: Optional[dt.date] = None
    duration_minutes: int = Field(default=0, ge=0)
    exercises_completed: List[ExerciseLogCreate] = Field(default_factory=list)


class WorkoutLogResponse(BaseModel):
    """Schema for workout log response."""
    id: UUID
    user_id: UUID
    workout_name: str
    muscle_group: Optional[str] = None
    date: dt.date
    duration_minutes: int
    total_volume: float
    exercises_completed: List[ExerciseLogResponse]
    created_at: dt.datetime

    class Config:
        from_attributes = True


class WorkoutLogSummary(BaseModel):
    """Condensed log for lists."""
    id: UUID
    workout_name: str
    muscle_group: Optional[str] = None
    date: dt.date
    duration_minutes: int
    total_volume: float
    exercise_count: int


class EarnedAchievement(BaseModel):
    type: str
    title: str
    message: str
    points: int


class WorkoutSummary(BaseModel):
    """What the finish screen shows."""
    workout_name: str
    exercises_completed: int
    total_volume: float
    duration_minutes: int
    date: dt.date


class WorkoutLogCreated(BaseModel):
    log: WorkoutLogResponse
    summary: WorkoutSummary
    new_achievements: List[EarnedAchievement]


class WeeklyWorkoutStats(BaseModel):
    """Weekly workout statistics."""
    week_start: dt.date
    total_workouts: int
    total_duration_minutes: int
    total_volume: float
    muscle_groups: dict[str, int]
    avg_workout_duration: Optional[float] = None
