"""Tests for workout statistics, streaks and achievements."""
import uuid
from datetime import date

from gymsmash.models.workout import ExerciseLog, WorkoutLog
from gymsmash.services.workout_stats import (
    ACHIEVEMENTS,
    StatsSnapshot,
    compute_user_stats,
    current_week_streak,
    evaluate_achievements,
    exercise_volume,
    longest_week_streak,
    session_volume,
    set_personal_record,
    total_points,
)


def make_log(day, volume=0.0, exercises=()):
    return WorkoutLog(
        id=uuid.uuid4(),
        user_id=uuid.uuid4(),
        workout_name="Session",
        date=day,
        duration_minutes=45,
        total_volume=volume,
        exercises_completed=[
            ExerciseLog(
                exercise_name=name,
                sets_completed=3,
                reps_per_set=10,
                weight_kg=weight,
                order_index=i,
            )
            for i, (name, weight) in enumerate(exercises)
        ],
    )


class TestVolume:
    """Tests for volume arithmetic."""

    def test_exercise_volume(self):
        """Test sets x reps x weight."""
        assert exercise_volume(3, 10, 50) == 1500

    def test_missing_values_are_zero(self):
        """Test missing values give zero volume."""
        assert exercise_volume(3, None, 50) == 0
        assert exercise_volume(None, None, None) == 0

    def test_session_volume_sums_exercises(self):
        """Test a session adds up every exercise."""
        log = make_log(date(2024, 1, 1), exercises=[("Squat", 100), ("Bench", 60), ("Plank", None)])
        assert session_volume(log.exercises_completed) == 4800


class TestWeekStreaks:
    """Tests for week-based streaks (weeks start on Monday)."""

    def test_streak_includes_current_week(self):
        """Test consecutive weeks ending this week."""
        logs = [make_log(date(2026, 10, 5)), make_log(date(2026, 10, 13))]

        assert current_week_streak(logs, today=date(2026, 10, 15)) == 2

    def test_current_week_in_progress_does_not_break_streak(self):
        """Test a streak ending last week is still current."""
        logs = [make_log(date(2026, 9, 29)), make_log(date(2026, 10, 6))]

        assert current_week_streak(logs, today=date(2026, 10, 14)) == 2

    def test_gap_breaks_streak(self):
        """Test a missed week ends the current streak."""
        logs = [make_log(date(2026, 9, 21)), make_log(date(2026, 10, 12))]

        assert current_week_streak(logs, today=date(2026, 10, 14)) == 1

    def test_no_recent_training(self):
        """Test no workouts this week or last gives zero."""
        logs = [make_log(date(2026, 8, 3))]

        assert current_week_streak(logs, today=date(2026, 10, 14)) == 0

    def test_longest_streak(self):
        """Test the longest run of consecutive weeks."""
        logs = [
            make_log(date(2026, 6, 1)),
            make_log(date(2026, 6, 9)),
            make_log(date(2026, 6, 10)),
            make_log(date(2026, 6, 17)),
            make_log(date(2026, 8, 3)),
        ]

        assert longest_week_streak(logs) == 3

    def test_compute_stats(self):
        """Test aggregated totals."""
        logs = [make_log(date(2026, 10, 5), 1000), make_log(date(2026, 10, 13), 500)]

        stats = compute_user_stats(logs, today=date(2026, 10, 14))

        assert stats.total_workouts == 2
        assert stats.total_volume == 1500
        assert stats.current_streak == 2
        assert stats.last_workout_date == date(2026, 10, 13)

    def test_compute_stats_empty(self):
        """Test empty history gives zero stats."""
        assert compute_user_stats([]) == StatsSnapshot()


class TestPersonalRecords:
    """Tests for PR detection."""

    def test_heavier_lift_is_record(self):
        """Test beating an earlier best weight."""
        earlier = make_log(date(2026, 10, 1), exercises=[("Squat", 80)])
        latest = make_log(date(2026, 10, 8), exercises=[("Squat", 85)])

        assert set_personal_record(latest, [earlier])

    def test_first_time_exercise_is_not_record(self):
        """Test an exercise with no history is not a PR."""
        earlier = make_log(date(2026, 10, 1), exercises=[("Squat", 80)])
        latest = make_log(date(2026, 10, 8), exercises=[("Bench", 60)])

        assert not set_personal_record(latest, [earlier])

    def test_equal_weight_is_not_record(self):
        """Test matching the best is not a PR."""
        earlier = make_log(date(2026, 10, 1), exercises=[("Squat", 80)])
        latest = make_log(date(2026, 10, 8), exercises=[("Squat", 80)])

        assert not set_personal_record(latest, [earlier])


class TestAchievements:
    """Tests for achievement evaluation and points."""

    def test_first_workout(self):
        """Test one workout unlocks first_workout."""
        stats = StatsSnapshot(total_workouts=1, total_volume=100)
        logs = [make_log(date(2026, 10, 1))]

        assert evaluate_achievements(stats, logs, []) == ["first_workout"]

    def test_thresholds_in_catalog_order(self):
        """Test several unlocks come back in catalog order."""
        stats = StatsSnapshot(total_workouts=10, total_volume=5000, longest_streak=4)

        unlocked = evaluate_achievements(stats, [], [])

        assert unlocked == [
            "first_workout",
            "week_streak_3",
            "week_streak_4",
            "total_workouts_10",
            "volume_milestone_1000",
            "volume_milestone_5000",
        ]

    def test_already_earned_skipped(self):
        """Test held achievements are not returned again."""
        stats = StatsSnapshot(total_workouts=1)

        assert evaluate_achievements(stats, [make_log(date(2026, 10, 1))], ["first_workout"]) == []

    def test_pr_breaker(self):
        """Test a PR in the new session unlocks pr_breaker."""
        logs = [
            make_log(date(2026, 10, 1), exercises=[("Deadlift", 100)]),
            make_log(date(2026, 10, 8), exercises=[("Deadlift", 110)]),
        ]
        stats = StatsSnapshot(total_workouts=2)

        assert "pr_breaker" in evaluate_achievements(stats, logs, ["first_workout"], logs[-1])

    def test_no_pr_without_new_session(self):
        """Test recalculating after a deletion never awards pr_breaker."""
        logs = [
            make_log(date(2026, 10, 1), exercises=[("Deadlift", 100)]),
            make_log(date(2026, 10, 8), exercises=[("Deadlift", 110)]),
        ]
        stats = StatsSnapshot(total_workouts=2)

        assert "pr_breaker" not in evaluate_achievements(stats, logs, ["first_workout"])

    def test_backdated_pr_checks_earlier_sessions(self):
        """Test a back-dated session is compared with the sessions before it."""
        first = make_log(date(2026, 10, 1), exercises=[("Deadlift", 100)])
        backdated = make_log(date(2026, 10, 5), exercises=[("Deadlift", 105)])
        latest = make_log(date(2026, 10, 8), exercises=[("Deadlift", 120)])
        logs = [first, backdated, latest]
        stats = StatsSnapshot(total_workouts=3)

        assert "pr_breaker" in evaluate_achievements(stats, logs, ["first_workout"], backdated)

    def test_lighter_session_is_not_pr(self):
        """Test a new session below an earlier best earns nothing."""
        first = make_log(date(2026, 10, 1), exercises=[("Deadlift", 120)])
        latest = make_log(date(2026, 10, 8), exercises=[("Deadlift", 110)])
        stats = StatsSnapshot(total_workouts=2)

        assert "pr_breaker" not in evaluate_achievements(stats, [first, latest], ["first_workout"], latest)

    def test_total_points(self):
        """Test points sum once per achievement type."""
        assert total_points(["first_workout", "pr_breaker", "first_workout"]) == 25
        assert total_points(["unknown"]) == 0

    def test_catalog_types_unique(self):
        """Test achievement types are unique."""
        types = [a.type for a in ACHIEVEMENTS]
        assert len(types) == len(set(types))
