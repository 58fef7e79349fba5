"""Challenge progress and listing rules."""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from gymsmash.models.social import Challenge, ChallengeParticipant, ChallengeType
from gymsmash.models.workout import WorkoutLog


@dataclass
class ChallengeBoard:
    active: list[Challenge]
    upcoming: list[Challenge]


def logs_in_window(logs: Iterable[WorkoutLog], challenge: Challenge) -> list[WorkoutLog]:
    """Sessions dated on or between the challenge's start and end dates."""
    return [log for log in logs if challenge.start_date <= log.date <= challenge.end_date]


def longest_daily_streak(days: Iterable[date]) -> int:
    """Longest run of consecutive calendar days."""
    longest = run = 0
    previous: Optional[date] = None
    for day in sorted(set(days)):
        run = run + 1 if previous and day - previous == timedelta(days=1) else 1
        longest = max(longest, run)
        previous = day
    return longest


def challenge_progress(challenge: Challenge, logs: Iterable[WorkoutLog]) -> float:
    """
    Progress toward a challenge target from a user's workout logs.

    Args:
        challenge: Challenge definition
        logs: The user's workout logs (any dates)

    Returns:
        Workout count, volume, streak length in days or matching session count
    """
    window = logs_in_window(logs, challenge)
    kind = challenge.challenge_type

    if kind == ChallengeType.WORKOUT_COUNT:
        return len(window)
    if kind == ChallengeType.TOTAL_VOLUME:
        return sum(log.total_volume or 0 for log in window)
    if kind == ChallengeType.STREAK:
        return longest_daily_streak(log.date for log in window)
    if kind == ChallengeType.SPECIFIC_EXERCISE:
        return sum(
            1 for log in window
            if any(e.exercise_name == challenge.exercise_name for e in log.exercises_completed)
        )
    return 0


def progress_percent(progress: float, target: float) -> float:
    if not target or target <= 0:
        return 100.0
    return min(progress / target * 100, 100.0)


def partition_challenges(challenges: Sequence[Challenge], today: Optional[date] = None) -> ChallengeBoard:
    """Split active challenges into running and upcoming; finished ones are dropped."""
    today = today or date.today()
    live = [c for c in challenges if c.is_active]
    return ChallengeBoard(
        active=[c for c in live if c.start_date <= today <= c.end_date],
        upcoming=[c for c in live if c.start_date > today],
    )


def participant_counts(participants: Iterable[ChallengeParticipant]) -> dict:
    counts: dict = {}
    for participant in participants:
        counts[participant.challenge_id] = counts.get(participant.challenge_id, 0) + 1
    return counts
