"""Keep exercises stored inside schedules in step with the exercise library."""
from typing import Mapping, Optional, Sequence

from gymsmash.models.catalog import Exercise, DEFAULT_STATS_TO_DISPLAY


def coach_video_url(exercise: Exercise, coach_id: Optional[str]) -> Optional[str]:
    """The coach's demo video for an exercise, else the library video."""
    if coach_id:
        for entry in exercise.coach_videos or []:
            if str(entry.get("coach_id")) == str(coach_id) and entry.get("video_url"):
                return entry["video_url"]
    return exercise.video_url


def sync_workout_exercises(
    workouts: Sequence[dict],
    exercises_by_code: Mapping[str, Exercise],
    coach_id: Optional[str] = None,
) -> tuple[list[dict], int]:
    """
    Refresh library-backed fields on every exercise in a schedule.

    Exercises whose code is missing or unknown are copied unchanged.

    Returns:
        (updated workouts, number of exercises that changed)
    """
    changed = 0
    updated_workouts = []

    for workout in workouts:
        updated_exercises = []
        for item in workout.get("exercises") or []:
            library = exercises_by_code.get(item.get("exercise_code") or "")
            if library is None:
                updated_exercises.append(item)
                continue

            refreshed = dict(item)
            refreshed["video_url"] = coach_video_url(library, coach_id)
            refreshed["is_unilateral"] = bool(library.is_unilateral)
            refreshed["stats_to_display"] = list(
                library.stats_to_display or DEFAULT_STATS_TO_DISPLAY
            )
            if refreshed != item:
                changed += 1
            updated_exercises.append(refreshed)

        updated_workouts.append({**workout, "exercises": updated_exercises})

    return updated_workouts, changed
