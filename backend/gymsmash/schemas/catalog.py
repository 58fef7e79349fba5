"""Exercise library, template and coach schemas."""
from datetime import datetime
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field

from gymsmash.schemas.common import PartialUpdate


class CoachVideo(BaseModel):
    coach_id: UUID
    video_url: str


class ExerciseBase(BaseModel):
    """Base schema for a library exercise."""
    name: str = Field(..., max_length=200)
    description: Optional[str] = None
    target_goal: List[str] = Field(default_factory=list)
    equipment_needed: List[str] = Field(default_factory=list)
    experience_level: List[str] = Field(default_factory=list)
    target_zones: List[str] = Field(default_factory=list)
    stats_to_display: List[str] = Field(
        default_factory=lambda: ["weight", "volume", "time_under_tension"]
    )
    default_sets: int = Field(default=3, ge=1)
    default_reps: str = Field(default="10-12", max_length=20)
    default_rest_seconds: int = Field(default=60, ge=0)
    video_url: Optional[str] = None
    coach_videos: List[CoachVideo] = Field(default_factory=list)
    is_unilateral: bool = False


class ExerciseCreate(ExerciseBase):
    exercise_code: str = Field(..., min_length=1, max_length=100)


class ExerciseUpdate(PartialUpdate):
    """Schema for updating an exercise."""
    not_nullable = (
        "name", "exercise_code", "target_goal", "equipment_needed", "experience_level",
        "target_zones", "stats_to_display", "default_sets", "default_reps",
        "default_rest_seconds", "coach_videos", "is_unilateral",
    )

    name: Optional[str] = Field(None, max_length=200)
    exercise_code: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    target_goal: Optional[List[str]] = None
    equipment_needed: Optional[List[str]] = None
    experience_level: Optional[List[str]] = None
    target_zones: Optional[List[str]] = None
    stats_to_display: Optional[List[str]] = None
    default_sets: Optional[int] = Field(None, ge=1)
    default_reps: Optional[str] = Field(None, max_length=20)
    default_rest_seconds: Optional[int] = Field(None, ge=0)
    video_url: Optional[str] = None
    coach_videos: Optional[List[CoachVideo]] = None
    is_unilateral: Optional[bool] = None


class ExerciseResponse(ExerciseBase):
    id: UUID
    exercise_code: str
    coach_videos: List[dict]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TemplateExercise(BaseModel):
    """Exercise entry stored inside a template."""
    name: str
    exercise_code: Optional[str] = None
    sets: int = Field(default=3, ge=1)
    reps: str = "10-12"
    rest_seconds: int = Field(default=60, ge=0)
    video_url: Optional[str] = None
    notes: Optional[str] = None


class WorkoutTemplateBase(BaseModel):
    """Base schema for a workout template."""
    name: str = Field(..., max_length=200)
    description: Optional[str] = None
    target_goal: Optional[str] = None
    target_zones: List[str] = Field(default_factory=list)
    equipment_needed: Optional[str] = None
    fitness_level: Optional[str] = None
    duration_minutes: int = Field(default=45, ge=1)
    muscle_group: Optional[str] = Field(None, max_length=100)
    exercises: List[TemplateExercise] = Field(default_factory=list)
    template_group: Optional[str] = Field(None, max_length=100)
    version_number: Optional[int] = Field(default=1, ge=1)


class WorkoutTemplateCreate(WorkoutTemplateBase):
    is_active: bool = True


class WorkoutTemplateUpdate(PartialUpdate):
    """Schema for updating a template."""
    not_nullable = ("name", "target_zones", "duration_minutes", "exercises", "is_active")

    name: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    target_goal: Optional[str] = None
    target_zones: Optional[List[str]] = None
    equipment_needed: Optional[str] = None
    fitness_level: Optional[str] = None
    duration_minutes: Optional[int] = Field(None, ge=1)
    muscle_group: Optional[str] = Field(None, max_length=100)
    exercises: Optional[List[TemplateExercise]] = None
    template_group: Optional[str] = Field(None, max_length=100)
    version_number: Optional[int] = Field(None, ge=1)
    is_active: Optional[bool] = None


class WorkoutTemplateResponse(WorkoutTemplateBase):
    id: UUID
    exercises: List[dict]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CoachBase(BaseModel):
    name: str = Field(..., max_length=200)
    bio: Optional[str] = None
    specialty: Optional[str] = Field(None, max_length=200)
    photo_url: Optional[str] = None
    intro_video_url: Optional[str] = None
    is_active: bool = True


class CoachCreate(CoachBase):
    pass


class CoachUpdate(PartialUpdate):
    not_nullable = ("name", "is_active")

    name: Optional[str] = Field(None, max_length=200)
    bio: Optional[str] = None
    specialty: Optional[str] = Field(None, max_length=200)
    photo_url: Optional[str] = None
    intro_video_url: Optional[str] = None
    is_active: Optional[bool] = None


class CoachResponse(CoachBase):
    id: UUID
    created_at: datetime

    class Config:
        from_attributes = True


class AppSettingUpdate(BaseModel):
    setting_value: str = Field(..., max_length=1000)
    description: Optional[str] = None


class AppSettingResponse(BaseModel):
    setting_key: str
    setting_value: str
    description: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
