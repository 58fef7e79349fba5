"""Personal records and chart series from workout history."""
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from gymsmash.models.workout import WorkoutLog
from gymsmash.services.schedule_builder import week_start


@dataclass
class PersonalRecord:
    exercise_name: str
    weight_kg: float
    date: date
    sets: Optional[int]
    reps: Optional[int]


@dataclass
class VolumePoint:
    date: date
    volume: float


@dataclass
class ExercisePoint:
    date: date
    weight_kg: float
    sets: Optional[int]
    reps: Optional[int]


@dataclass
class FrequencyPoint:
    week_start: date
    count: int


def _by_date(logs: Iterable[WorkoutLog]) -> list[WorkoutLog]:
    return sorted(logs, key=lambda log: log.date)


def personal_records(logs: Sequence[WorkoutLog], limit: int = 10) -> list[PersonalRecord]:
    """
    Heaviest weight lifted per exercise.

    The first session to reach a weight keeps the record; later sessions
    must lift strictly more.
    """
    records: dict[str, PersonalRecord] = {}
    for log in _by_date(logs):
        for exercise in log.exercises_completed:
            weight = exercise.weight_kg or 0
            if weight <= 0:
                continue
            current = records.get(exercise.exercise_name)
            if current is None or weight > current.weight_kg:
                records[exercise.exercise_name] = PersonalRecord(
                    exercise_name=exercise.exercise_name,
                    weight_kg=weight,
                    date=log.date,
                    sets=exercise.sets_completed,
                    reps=exercise.reps_per_set,
                )

    ranked = sorted(records.values(), key=lambda r: r.weight_kg, reverse=True)
    return ranked[:limit]


def tracked_exercises(logs: Sequence[WorkoutLog]) -> list[str]:
    """Names of exercises that have been logged with weight."""
    return sorted({
        exercise.exercise_name
        for log in logs
        for exercise in log.exercises_completed
        if (exercise.weight_kg or 0) > 0
    })


def volume_over_time(logs: Sequence[WorkoutLog], limit: int = 20) -> list[VolumePoint]:
    points = [
        VolumePoint(date=log.date, volume=log.total_volume)
        for log in _by_date(logs)
        if (log.total_volume or 0) > 0
    ]
    return points[-limit:]


def exercise_progress(
    logs: Sequence[WorkoutLog],
    exercise_name: str,
    limit: int = 15,
) -> list[ExercisePoint]:
    """Weight history for one exercise, one point per session."""
    points = []
    for log in _by_date(logs):
        match = next(
            (
                e for e in log.exercises_completed
                if e.exercise_name == exercise_name and (e.weight_kg or 0) > 0
            ),
            None,
        )
        if match is not None:
            points.append(ExercisePoint(
                date=log.date,
                weight_kg=match.weight_kg,
                sets=match.sets_completed,
                reps=match.reps_per_set,
            ))
    return points[-limit:]


def weekly_frequency(logs: Sequence[WorkoutLog], weeks: int = 8) -> list[FrequencyPoint]:
    """Workouts per Monday-start week for the most recent weeks with data."""
    counts: dict[date, int] = {}
    for log in logs:
        key = week_start(log.date)
        counts[key] = counts.get(key, 0) + 1

    points = [FrequencyPoint(week_start=k, count=counts[k]) for k in sorted(counts)]
    return points[-weeks:]
