"""Media upload and overlay schemas."""
import datetime as dt
from enum import Enum
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from gymsmash.models.media import MediaCategory, MediaKind


class MediaAssetResponse(BaseModel):
    id: UUID
    kind: MediaKind
    category: MediaCategory
    file_url: str
    content_type: Optional[str] = None
    size_bytes: int
    workout_log_id: Optional[UUID] = None
    exercise_name: Optional[str] = None
    created_at: dt.datetime

    class Config:
        from_attributes = True


class OverlayKind(str, Enum):
    EXERCISE = "exercise"
    WORKOUT = "workout"
    FREESTYLE = "freestyle"
    BEFORE_PHOTO = "before_photo"


class OverlayRequest(BaseModel):
    """Inputs for one overlay layout; which fields apply depends on the kind."""
    kind: OverlayKind
    logo_aspect: float = Field(default=1.0, gt=0)

    # exercise
    exercise_name: Optional[str] = None
    weight_kg: Optional[float] = Field(None, ge=0)
    sets: Optional[int] = Field(None, ge=0)
    reps: Optional[int] = Field(None, ge=0)

    # workout
    workout_log_id: Optional[UUID] = None
    exercises_completed: Optional[int] = Field(None, ge=0)
    total_volume: Optional[float] = Field(None, ge=0)
    duration_minutes: Optional[int] = Field(None, ge=0)
    workout_date: Optional[dt.date] = None

    # freestyle
    elapsed_seconds: Optional[int] = Field(None, ge=0)

    # before photo
    width: Optional[int] = Field(None, gt=0)
    height: Optional[int] = Field(None, gt=0)

    @model_validator(mode="after")
    def check_inputs(self):
        if self.kind == OverlayKind.EXERCISE and not self.exercise_name:
            raise ValueError("exercise_name is required for exercise overlays")
        if self.kind == OverlayKind.BEFORE_PHOTO and not (self.width and self.height):
            raise ValueError("width and height are required for before photo overlays")
        return self


class LogoPlacementResponse(BaseModel):
    x: float
    y: float
    width: float
    height: float
    alpha: float

    class Config:
        from_attributes = True


class TextItemResponse(BaseModel):
    text: str
    x: float
    y: float
    font: str

    class Config:
        from_attributes = True


class TextStyleResponse(BaseModel):
    color: str
    alpha: float
    align: str
    shadow_color: str
    shadow_blur: int

    class Config:
        from_attributes = True


class OverlayLayoutResponse(BaseModel):
    width: int
    height: int
    mirror: bool
    logo: LogoPlacementResponse
    style: TextStyleResponse
    texts: List[TextItemResponse]
    output_mime_type: str

    class Config:
        from_attributes = True
