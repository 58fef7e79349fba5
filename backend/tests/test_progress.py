"""Tests for personal records, chart series and leaderboards."""
import uuid
from datetime import date

from gymsmash.models.social import UserStats
from gymsmash.models.workout import ExerciseLog, WorkoutLog
from gymsmash.services.leaderboard import ANONYMOUS_NAME, build_leaderboard
from gymsmash.services.progress import (
    exercise_progress,
    personal_records,
    tracked_exercises,
    volume_over_time,
    weekly_frequency,
)


def make_log(day, volume=0.0, exercises=()):
    return WorkoutLog(
        id=uuid.uuid4(),
        workout_name="Session",
        date=day,
        duration_minutes=40,
        total_volume=volume,
        exercises_completed=[
            ExerciseLog(exercise_name=name, sets_completed=sets, reps_per_set=10, weight_kg=weight)
            for name, weight, sets in exercises
        ],
    )


def make_stats(points, volume=0.0, streak=0, workouts=0):
    return UserStats(
        user_id=uuid.uuid4(),
        points=points,
        total_volume=volume,
        current_streak=streak,
        total_workouts=workouts,
    )


class TestPersonalRecords:
    """Tests for heaviest-lift records."""

    def test_heaviest_per_exercise(self):
        """Test the record is the heaviest weight with its session details."""
        logs = [
            make_log(date(2026, 10, 8), exercises=[("Squat", 100, 5)]),
            make_log(date(2026, 10, 1), exercises=[("Squat", 90, 3), ("Bench", 70, 3)]),
        ]

        records = personal_records(logs)

        assert [(r.exercise_name, r.weight_kg) for r in records] == [("Squat", 100), ("Bench", 70)]
        assert records[0].date == date(2026, 10, 8)
        assert records[0].sets == 5

    def test_first_session_keeps_tied_record(self):
        """Test a later tie does not replace the record date."""
        logs = [
            make_log(date(2026, 10, 1), exercises=[("Squat", 100, 3)]),
            make_log(date(2026, 10, 8), exercises=[("Squat", 100, 3)]),
        ]

        assert personal_records(logs)[0].date == date(2026, 10, 1)

    def test_unweighted_ignored_and_limit(self):
        """Test bodyweight entries are ignored and the limit applies."""
        logs = [make_log(date(2026, 10, 1), exercises=[
            ("Push Up", None, 3), ("A", 10, 3), ("B", 20, 3), ("C", 30, 3),
        ])]

        records = personal_records(logs, limit=2)

        assert [r.exercise_name for r in records] == ["C", "B"]


class TestChartSeries:
    """Tests for chart data."""

    def test_tracked_exercises_sorted(self):
        """Test tracked names are unique, weighted and sorted."""
        logs = [
            make_log(date(2026, 10, 1), exercises=[("Squat", 100, 3), ("Plank", None, 3)]),
            make_log(date(2026, 10, 2), exercises=[("Bench", 60, 3), ("Squat", 105, 3)]),
        ]

        assert tracked_exercises(logs) == ["Bench", "Squat"]

    def test_volume_over_time_skips_zero_and_limits(self):
        """Test zero-volume sessions are skipped and the latest are kept."""
        logs = [make_log(date(2026, 10, d), volume=d * 100) for d in range(1, 6)]
        logs.append(make_log(date(2026, 10, 6), volume=0))

        points = volume_over_time(logs, limit=3)

        assert [p.date.day for p in points] == [3, 4, 5]

    def test_exercise_progress(self):
        """Test one point per session for the chosen exercise."""
        logs = [
            make_log(date(2026, 10, 8), exercises=[("Squat", 105, 3)]),
            make_log(date(2026, 10, 1), exercises=[("Squat", 100, 3)]),
            make_log(date(2026, 10, 4), exercises=[("Bench", 60, 3)]),
        ]

        points = exercise_progress(logs, "Squat")

        assert [(p.date, p.weight_kg) for p in points] == [
            (date(2026, 10, 1), 100),
            (date(2026, 10, 8), 105),
        ]

    def test_weekly_frequency_groups_by_monday(self):
        """Test workouts are counted per Monday-start week."""
        logs = [
            make_log(date(2026, 10, 12)),
            make_log(date(2026, 10, 14)),
            make_log(date(2026, 10, 18)),
            make_log(date(2026, 10, 5)),
        ]

        points = weekly_frequency(logs, weeks=8)

        assert [(p.week_start, p.count) for p in points] == [
            (date(2026, 10, 5), 1),
            (date(2026, 10, 12), 3),
        ]


class TestLeaderboard:
    """Tests for leaderboard ranking."""

    def test_ranked_by_points_with_caller_rank(self):
        """Test points order and the caller's 1-based rank."""
        low = make_stats(10)
        high = make_stats(50)
        mid = make_stats(30)

        board = build_leaderboard([low, high, mid], {high.user_id: "Top"}, user_id=mid.user_id)

        assert [e.points for e in board.by_points] == [50, 30, 10]
        assert board.by_points[0].full_name == "Top"
        assert board.by_points[1].full_name == ANONYMOUS_NAME
        assert board.user_rank == 2
        assert board.user_entry.points == 30

    def test_category_boards(self):
        """Test volume, streak and workout boards use their own order."""
        a = make_stats(10, volume=5000, streak=1, workouts=3)
        b = make_stats(20, volume=100, streak=6, workouts=40)

        board = build_leaderboard([a, b], {})

        assert board.by_volume[0].user_id == a.user_id
        assert board.by_streak[0].user_id == b.user_id
        assert board.by_workouts[0].user_id == b.user_id

    def test_caller_not_ranked(self):
        """Test a caller outside the board has no rank."""
        board = build_leaderboard([make_stats(5)], {}, user_id=uuid.uuid4())

        assert board.user_rank is None
        assert board.user_entry is None
