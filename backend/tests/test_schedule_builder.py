"""Tests for template rotation and weekly schedule construction."""
import uuid
from datetime import date

import pytest

from gymsmash.models.catalog import WorkoutTemplate
from gymsmash.services.schedule_builder import (
    assign_zones,
    build_week_for_goal,
    build_week_from_zones,
    parse_rotation_weeks,
    remove_day_workout,
    rotation_status,
    set_day_workout,
    swap_days,
    week_start,
)
from gymsmash.services.template_rotation import (
    NoTemplatesError,
    filter_candidate_templates,
    group_templates,
    select_rotation,
)


def make_template(name, muscle_group=None, goal="tone_body", equipment="full_gym",
                  group=None, version=1, active=True):
    return WorkoutTemplate(
        id=uuid.uuid4(),
        name=name,
        muscle_group=muscle_group,
        target_goal=goal,
        equipment_needed=equipment,
        template_group=group,
        version_number=version,
        is_active=active,
        duration_minutes=45,
        exercises=[{"name": f"{name} move", "sets": 3, "reps": "10"}],
    )


class TestTemplateFiltering:
    """Tests for narrowing templates to a user's goal and equipment."""

    def test_goal_and_equipment_match_first(self):
        """Test exact goal and equipment matches win."""
        gym = make_template("Gym", equipment="full_gym")
        home = make_template("Home", equipment="bodyweight_only")

        result = filter_candidate_templates([gym, home], "tone_body", "bodyweight_only")

        assert result == [home]

    def test_falls_back_to_goal_only(self):
        """Test equipment is relaxed when nothing matches both."""
        gym = make_template("Gym", equipment="full_gym")
        other = make_template("Other", goal="build_muscle")

        result = filter_candidate_templates([gym, other], "tone_body", "bodyweight_only")

        assert result == [gym]

    def test_falls_back_to_all_active(self):
        """Test every active template is used when the goal has none."""
        a = make_template("A", goal="build_muscle")
        b = make_template("B", goal="build_muscle", active=False)

        result = filter_candidate_templates([a, b], "tone_body", "full_gym")

        assert result == [a]

    def test_no_active_templates_raises(self):
        """Test an empty catalog is an error."""
        with pytest.raises(NoTemplatesError):
            filter_candidate_templates([make_template("Off", active=False)], "tone_body", None)


class TestRotationSelection:
    """Tests for picking one version per template group."""

    def test_groups_sorted_by_version(self):
        """Test group members are ordered by version number."""
        v2 = make_template("Legs v2", group="legs", version=2)
        v1 = make_template("Legs v1", group="legs", version=1)
        solo = make_template("Solo")

        groups, ungrouped = group_templates([v2, v1, solo])

        assert groups["legs"] == [v1, v2]
        assert ungrouped == [solo]

    def test_cycle_picks_version_and_wraps(self):
        """Test the cycle selects a version, wrapping past the last one."""
        v1 = make_template("Legs v1", group="legs", version=1)
        v2 = make_template("Legs v2", group="legs", version=2)
        solo = make_template("Solo")

        assert select_rotation([v1, v2, solo], 0) == [v1, solo]
        assert select_rotation([v1, v2, solo], 1) == [v2, solo]
        assert select_rotation([v1, v2, solo], 2) == [v1, solo]

    def test_missing_version_counts_as_one(self):
        """Test templates without a version sort as version 1."""
        unversioned = make_template("Back", group="back", version=None)
        v2 = make_template("Back v2", group="back", version=2)

        assert select_rotation([v2, unversioned], 0) == [unversioned]

    def test_nothing_to_select_raises(self):
        """Test an empty candidate list is an error."""
        with pytest.raises(NoTemplatesError):
            select_rotation([], 0)


class TestZoneAssignment:
    """Tests for spreading target zones across training days."""

    def test_first_zone_preferred(self):
        """Test the first listed zone is used while it has no nearby conflict."""
        assigned = assign_zones(["monday", "tuesday", "thursday"], ["chest", "arms", "legs"])

        assert assigned["monday"] == "chest"
        assert assigned["tuesday"] == "chest"
        assert assigned["thursday"] == "chest"

    def test_repeated_zone_never_conflicts(self):
        """Test a zone does not conflict with itself on nearby days."""
        assigned = assign_zones(["monday", "thursday"], ["arms", "chest"])

        assert assigned == {"monday": "arms", "thursday": "arms"}

    def test_wraps_when_every_zone_conflicts(self):
        """Test the positional zone is used when all zones conflict."""
        assigned = assign_zones(["monday", "tuesday"], ["arms"])

        assert assigned == {"monday": "arms", "tuesday": "arms"}

    def test_no_zones(self):
        """Test no zones gives no assignments."""
        assert assign_zones(["monday"], []) == {}


class TestWeekConstruction:
    """Tests for building a week of workouts."""

    def test_zones_pick_matching_muscle_group(self):
        """Test each day gets a template for its zone."""
        legs = make_template("Leg Day", muscle_group="Legs")
        back = make_template("Back Day", muscle_group="Back")

        week = build_week_from_zones(["monday", "friday"], ["back", "legs"], [legs, back])

        assert [w["day"] for w in week] == ["monday", "friday"]
        assert week[0]["workout_name"] == "Back Day"
        assert week[0]["exercises"] == back.exercises

    def test_templates_not_repeated_until_all_used(self):
        """Test the week cycles through templates before repeating."""
        a = make_template("A", muscle_group="Legs")
        b = make_template("B", muscle_group="Back")

        week = build_week_from_zones(["monday", "wednesday", "friday"], [], [a, b])

        assert [w["workout_name"] for w in week] == ["A", "B", "A"]

    def test_build_muscle_follows_split(self):
        """Test muscle builders follow the fixed split by day position."""
        back = make_template("Back", muscle_group="Back", goal="build_muscle")
        abs_ = make_template("Abs", muscle_group="Abs/Shoulders", goal="build_muscle")
        arms = make_template("Arms", muscle_group="Biceps/Triceps", goal="build_muscle")

        week = build_week_for_goal(["monday", "tuesday"], "build_muscle", [back, arms, abs_])

        assert [w["workout_name"] for w in week] == ["Abs", "Arms"]

    def test_other_goals_take_templates_in_order(self):
        """Test non-split goals use templates in order."""
        a = make_template("A")
        b = make_template("B")

        week = build_week_for_goal(["monday", "tuesday", "wednesday"], "tone_body", [a, b])

        assert [w["workout_name"] for w in week] == ["A", "B", "A"]

    def test_no_templates_gives_empty_week(self):
        """Test an empty template list yields no workouts."""
        assert build_week_for_goal(["monday"], "tone_body", []) == []


class TestDayEditing:
    """Tests for editing a stored week."""

    def week(self):
        return [
            {"day": "monday", "workout_name": "A"},
            {"day": "wednesday", "workout_name": "B"},
        ]

    def test_set_day_adds_and_sorts(self):
        """Test a new day is inserted in weekday order."""
        updated = set_day_workout(self.week(), "Tuesday", make_template("C"))

        assert [w["day"] for w in updated] == ["monday", "tuesday", "wednesday"]
        assert updated[1]["workout_name"] == "C"

    def test_set_day_replaces(self):
        """Test an existing day is replaced."""
        updated = set_day_workout(self.week(), "monday", make_template("C"))

        assert [w["workout_name"] for w in updated] == ["C", "B"]

    def test_remove_day(self):
        """Test removing a day leaves the others."""
        assert remove_day_workout(self.week(), "MONDAY") == [{"day": "wednesday", "workout_name": "B"}]

    def test_swap_two_workouts(self):
        """Test swapping two scheduled days."""
        updated = swap_days(self.week(), "monday", "wednesday")

        assert [w["workout_name"] for w in updated] == ["B", "A"]

    def test_swap_moves_to_rest_day(self):
        """Test a workout moves onto a rest day."""
        updated = swap_days(self.week(), "friday", "monday")

        assert [(w["day"], w["workout_name"]) for w in updated] == [
            ("wednesday", "B"),
            ("friday", "A"),
        ]

    def test_swap_two_rest_days_fails(self):
        """Test swapping two rest days is rejected."""
        with pytest.raises(ValueError):
            swap_days(self.week(), "tuesday", "sunday")

    def test_input_not_mutated(self):
        """Test edits return new lists."""
        original = self.week()
        swap_days(original, "monday", "wednesday")

        assert original[0]["day"] == "monday"


class TestRotationStatus:
    """Tests for rotation timing."""

    def test_week_start_is_monday(self):
        """Test week_start returns the Monday of the week."""
        assert week_start(date(2026, 10, 18)) == date(2026, 10, 12)
        assert week_start(date(2026, 10, 12)) == date(2026, 10, 12)

    def test_due_after_rotation_weeks(self):
        """Test rotation is due once enough weeks have passed."""
        status = rotation_status(2, date(2026, 1, 1), 4, False, today=date(2026, 1, 29))

        assert status.weeks_since_start == 4
        assert status.is_due
        assert status.next_cycle == 3

    def test_not_due_early_or_declined(self):
        """Test rotation is not due early, or after declining."""
        early = rotation_status(0, date(2026, 1, 1), 4, False, today=date(2026, 1, 28))
        declined = rotation_status(0, date(2026, 1, 1), 4, True, today=date(2026, 3, 1))

        assert not early.is_due
        assert not declined.is_due

    def test_missing_cycle_counts_as_zero(self):
        """Test a missing cycle is treated as the first."""
        status = rotation_status(None, date(2026, 1, 1), 4, False, today=date(2026, 1, 1))

        assert status.current_cycle == 0
        assert status.next_cycle == 1

    def test_parse_rotation_weeks(self):
        """Test bad setting values fall back to the default."""
        assert parse_rotation_weeks("6", 4) == 6
        assert parse_rotation_weeks(None, 4) == 4
        assert parse_rotation_weeks("abc", 4) == 4
        assert parse_rotation_weeks("0", 4) == 4
