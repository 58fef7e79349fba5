"""Progress, achievement and leaderboard schemas."""
import datetime as dt
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel


class PersonalRecordResponse(BaseModel):
    exercise_name: str
    weight_kg: float
    date: dt.date
    sets: Optional[int] = None
    reps: Optional[int] = None

    class Config:
        from_attributes = True


class VolumePointResponse(BaseModel):
    date: dt.date
    volume: float

    class Config:
        from_attributes = True


class ExercisePointResponse(BaseModel):
    date: dt.date
    weight_kg: float
    sets: Optional[int] = None
    reps: Optional[int] = None

    class Config:
        from_attributes = True


class FrequencyPointResponse(BaseModel):
    week_start: dt.date
    count: int

    class Config:
        from_attributes = True


class ProgressCharts(BaseModel):
    """Chart series for the progress screen."""
    volume_over_time: List[VolumePointResponse]
    weekly_frequency: List[FrequencyPointResponse]
    tracked_exercises: List[str]
    exercise_name: Optional[str] = None
    exercise_progress: List[ExercisePointResponse]


class UserStatsResponse(BaseModel):
    total_workouts: int
    total_volume: float
    current_streak: int
    longest_streak: int
    points: int
    last_workout_date: Optional[dt.date] = None

    class Config:
        from_attributes = True


class AchievementStatus(BaseModel):
    type: str
    title: str
    description: str
    points: int
    earned: bool
    earned_date: Optional[dt.date] = None


class AchievementsResponse(BaseModel):
    achievements: List[AchievementStatus]
    total_points: int
    earned_count: int


class AchievementCheckResponse(BaseModel):
    new_achievements: List[str]
    stats: UserStatsResponse


class LeaderboardEntryResponse(BaseModel):
    user_id: UUID
    full_name: str
    points: int
    total_volume: float
    current_streak: int
    total_workouts: int

    class Config:
        from_attributes = True


class LeaderboardResponse(BaseModel):
    by_points: List[LeaderboardEntryResponse]
    by_volume: List[LeaderboardEntryResponse]
    by_streak: List[LeaderboardEntryResponse]
    by_workouts: List[LeaderboardEntryResponse]
    user_rank: Optional[int] = None
    user_entry: Optional[LeaderboardEntryResponse] = None

    class Config:
        from_attributes = True
