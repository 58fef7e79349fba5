"""Tests for challenge progress and listing."""
import uuid
from datetime import date

import pytest

from gymsmash.models.social import Challenge, ChallengeParticipant, ChallengeType
from gymsmash.models.workout import ExerciseLog, WorkoutLog
from gymsmash.services.challenges import (
    challenge_progress,
    longest_daily_streak,
    participant_counts,
    partition_challenges,
    progress_percent,
)


def make_challenge(kind, start=date(2026, 10, 1), end=date(2026, 10, 31),
                   exercise_name=None, active=True, target=10):
    return Challenge(
        id=uuid.uuid4(),
        name="October",
        challenge_type=kind,
        exercise_name=exercise_name,
        target_value=target,
        reward_points=0,
        start_date=start,
        end_date=end,
        is_active=active,
    )


def make_log(day, volume=0.0, exercise=None):
    return WorkoutLog(
        id=uuid.uuid4(),
        workout_name="Session",
        date=day,
        duration_minutes=30,
        total_volume=volume,
        exercises_completed=[ExerciseLog(exercise_name=exercise, sets_completed=3)] if exercise else [],
    )


class TestChallengeProgress:
    """Tests for progress by challenge type."""

    def test_workout_count_window_inclusive(self):
        """Test sessions on the start and end dates count."""
        challenge = make_challenge(ChallengeType.WORKOUT_COUNT)
        logs = [
            make_log(date(2026, 9, 30)),
            make_log(date(2026, 10, 1)),
            make_log(date(2026, 10, 31)),
            make_log(date(2026, 11, 1)),
        ]

        assert challenge_progress(challenge, logs) == 2

    def test_total_volume(self):
        """Test volume sums within the window."""
        challenge = make_challenge(ChallengeType.TOTAL_VOLUME)
        logs = [make_log(date(2026, 10, 2), 1200), make_log(date(2026, 10, 3), 800)]

        assert challenge_progress(challenge, logs) == 2000

    def test_streak_is_longest_daily_run(self):
        """Test streak challenges count consecutive days."""
        challenge = make_challenge(ChallengeType.STREAK)
        logs = [
            make_log(date(2026, 10, 2)),
            make_log(date(2026, 10, 3)),
            make_log(date(2026, 10, 3)),
            make_log(date(2026, 10, 4)),
            make_log(date(2026, 10, 10)),
        ]

        assert challenge_progress(challenge, logs) == 3

    def test_specific_exercise_counts_sessions(self):
        """Test sessions containing the exercise are counted."""
        challenge = make_challenge(ChallengeType.SPECIFIC_EXERCISE, exercise_name="Squat")
        logs = [
            make_log(date(2026, 10, 2), exercise="Squat"),
            make_log(date(2026, 10, 3), exercise="Bench"),
            make_log(date(2026, 10, 4), exercise="Squat"),
        ]

        assert challenge_progress(challenge, logs) == 2

    def test_longest_daily_streak_empty(self):
        """Test no days gives zero."""
        assert longest_daily_streak([]) == 0

    def test_progress_percent_capped(self):
        """Test percentages cap at 100 and zero targets are complete."""
        assert progress_percent(5, 10) == pytest.approx(50.0)
        assert progress_percent(15, 10) == 100.0
        assert progress_percent(0, 0) == 100.0


class TestChallengeListing:
    """Tests for partitioning challenges."""

    def test_partition(self):
        """Test running, upcoming, finished and inactive challenges."""
        running = make_challenge(ChallengeType.STREAK)
        upcoming = make_challenge(ChallengeType.STREAK, start=date(2026, 11, 1), end=date(2026, 11, 30))
        finished = make_challenge(ChallengeType.STREAK, start=date(2026, 9, 1), end=date(2026, 9, 30))
        inactive = make_challenge(ChallengeType.STREAK, active=False)

        board = partition_challenges([running, upcoming, finished, inactive], today=date(2026, 10, 19))

        assert board.active == [running]
        assert board.upcoming == [upcoming]

    def test_participant_counts(self):
        """Test participants are counted per challenge."""
        first, second = uuid.uuid4(), uuid.uuid4()
        participants = [
            ChallengeParticipant(challenge_id=first, user_id=uuid.uuid4()),
            ChallengeParticipant(challenge_id=first, user_id=uuid.uuid4()),
            ChallengeParticipant(challenge_id=second, user_id=uuid.uuid4()),
        ]

        assert participant_counts(participants) == {first: 2, second: 1}
