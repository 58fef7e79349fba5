"""User statistics and achievement rules."""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from gymsmash.models.workout import WorkoutLog, ExerciseLog
from gymsmash.services.schedule_builder import week_start


@dataclass(frozen=True)
class AchievementDefinition:
    """An achievement users can unlock."""
    type: str
    title: str
    description: str
    points: int
    unlocked_title: str
    unlocked_message: str


ACHIEVEMENTS: list[AchievementDefinition] = [
    AchievementDefinition(
        "first_workout", "First Workout", "Complete your first workout", 10,
        "First Workout Complete!", "You've taken the first step on your fitness journey!",
    ),
    AchievementDefinition(
        "week_streak_3", "3 Week Streak", "Maintain a 3-week workout streak", 25,
        "3 Week Streak!", "Consistency is key! Keep up the momentum!",
    ),
    AchievementDefinition(
        "week_streak_4", "4 Week Streak", "Maintain a 4-week workout streak", 50,
        "4 Week Streak!", "You're on fire! A full month of dedication!",
    ),
    AchievementDefinition(
        "week_streak_8", "8 Week Streak", "Maintain an 8-week workout streak", 100,
        "8 Week Streak!", "Incredible dedication! You're unstoppable!",
    ),
    AchievementDefinition(
        "total_workouts_10", "10 Workouts", "Complete 10 total workouts", 20,
        "10 Workouts Done!", "Double digits! You're building a solid foundation!",
    ),
    AchievementDefinition(
        "total_workouts_25", "25 Workouts", "Complete 25 total workouts", 50,
        "25 Workouts Complete!", "Quarter century! Your hard work is paying off!",
    ),
    AchievementDefinition(
        "total_workouts_50", "50 Workouts", "Complete 50 total workouts", 100,
        "50 Workouts!", "Halfway to 100! You're a fitness warrior!",
    ),
    AchievementDefinition(
        "total_workouts_100", "100 Workouts", "Complete 100 total workouts", 200,
        "100 Workouts!", "Century club! You're an inspiration!",
    ),
    AchievementDefinition(
        "volume_milestone_1000", "1K Volume", "Lift 1,000kg total volume", 30,
        "1,000kg Moved!", "That's a ton of weight! Literally impressive!",
    ),
    AchievementDefinition(
        "volume_milestone_5000", "5K Volume", "Lift 5,000kg total volume", 75,
        "5,000kg Volume!", "You've moved 5 tons! Incredible strength!",
    ),
    AchievementDefinition(
        "volume_milestone_10000", "10K Volume", "Lift 10,000kg total volume", 150,
        "10,000kg Volume!", "10 tons moved! You're a powerhouse!",
    ),
    AchievementDefinition(
        "pr_breaker", "PR Breaker", "Set a new personal record", 15,
        "Personal Record!", "New PR! You've surpassed your previous best!",
    ),
]

ACHIEVEMENTS_BY_TYPE = {a.type: a for a in ACHIEVEMENTS}

STREAK_THRESHOLDS = {"week_streak_3": 3, "week_streak_4": 4, "week_streak_8": 8}
WORKOUT_THRESHOLDS = {
    "total_workouts_10": 10,
    "total_workouts_25": 25,
    "total_workouts_50": 50,
    "total_workouts_100": 100,
}
VOLUME_THRESHOLDS = {
    "volume_milestone_1000": 1000,
    "volume_milestone_5000": 5000,
    "volume_milestone_10000": 10000,
}


@dataclass
class StatsSnapshot:
    """Totals derived from a user's workout history."""
    total_workouts: int = 0
    total_volume: float = 0.0
    current_streak: int = 0
    longest_streak: int = 0
    last_workout_date: Optional[date] = None


def exercise_volume(sets: Optional[int], reps: Optional[int], weight: Optional[float]) -> float:
    """Sets x reps x weight, treating missing values as zero."""
    return (sets or 0) * (reps or 0) * (weight or 0)


def session_volume(exercises: Iterable[ExerciseLog]) -> float:
    return sum(exercise_volume(e.sets_completed, e.reps_per_set, e.weight_kg) for e in exercises)


def _training_weeks(logs: Iterable[WorkoutLog]) -> set[date]:
    return {week_start(log.date) for log in logs}


def current_week_streak(logs: Iterable[WorkoutLog], today: Optional[date] = None) -> int:
    """
    Consecutive training weeks ending this week.

    The current week still counts as part of the streak while it is in
    progress, so the streak may end last week.
    """
    weeks = _training_weeks(logs)
    cursor = week_start(today or date.today())
    if cursor not in weeks:
        cursor -= timedelta(days=7)

    streak = 0
    while cursor in weeks:
        streak += 1
        cursor -= timedelta(days=7)
    return streak


def longest_week_streak(logs: Iterable[WorkoutLog]) -> int:
    weeks = sorted(_training_weeks(logs))
    longest = run = 0
    previous: Optional[date] = None
    for week in weeks:
        run = run + 1 if previous and week - previous == timedelta(days=7) else 1
        longest = max(longest, run)
        previous = week
    return longest


def compute_user_stats(logs: Sequence[WorkoutLog], today: Optional[date] = None) -> StatsSnapshot:
    """Aggregate a user's complete workout history."""
    if not logs:
        return StatsSnapshot()
    return StatsSnapshot(
        total_workouts=len(logs),
        total_volume=sum(log.total_volume or 0 for log in logs),
        current_streak=current_week_streak(logs, today),
        longest_streak=longest_week_streak(logs),
        last_workout_date=max(log.date for log in logs),
    )


def set_personal_record(latest: WorkoutLog, previous: Iterable[WorkoutLog]) -> bool:
    """True when the latest session beats an earlier best weight for any exercise."""
    best: dict[str, float] = {}
    for log in previous:
        for exercise in log.exercises_completed:
            if exercise.weight_kg:
                name = exercise.exercise_name
                best[name] = max(best.get(name, 0), exercise.weight_kg)

    return any(
        exercise.weight_kg and exercise.exercise_name in best
        and exercise.weight_kg > best[exercise.exercise_name]
        for exercise in latest.exercises_completed
    )


def evaluate_achievements(
    stats: StatsSnapshot,
    logs: Sequence[WorkoutLog],
    earned: Iterable[str],
    new_log: Optional[WorkoutLog] = None,
) -> list[str]:
    """
    Achievement types newly satisfied by the user's history.

    Only ``new_log`` can earn a personal record, measured against the
    sessions dated on or before it.

    Args:
        stats: Current totals
        logs: Workout history, oldest first
        earned: Types the user already holds
        new_log: The session just logged, if any

    Returns:
        Newly unlocked types in catalog order
    """
    earned = set(earned)
    unlocked = set()

    if stats.total_workouts >= 1:
        unlocked.add("first_workout")
    for kind, weeks in STREAK_THRESHOLDS.items():
        if stats.longest_streak >= weeks:
            unlocked.add(kind)
    for kind, count in WORKOUT_THRESHOLDS.items():
        if stats.total_workouts >= count:
            unlocked.add(kind)
    for kind, volume in VOLUME_THRESHOLDS.items():
        if stats.total_volume >= volume:
            unlocked.add(kind)
    if new_log is not None and "pr_breaker" not in earned:
        previous = [log for log in logs if log is not new_log and log.date <= new_log.date]
        if set_personal_record(new_log, previous):
            unlocked.add("pr_breaker")

    return [a.type for a in ACHIEVEMENTS if a.type in unlocked and a.type not in earned]


def total_points(achievement_types: Iterable[str]) -> int:
    return sum(
        ACHIEVEMENTS_BY_TYPE[kind].points
        for kind in set(achievement_types)
        if kind in ACHIEVEMENTS_BY_TYPE
    )
