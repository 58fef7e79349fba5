"""Weekly schedule construction and day editing."""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Sequence

from gymsmash.models.catalog import WorkoutTemplate


WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

ZONE_MUSCLE_GROUPS = {
    "arms": "Arms",
    "chest": "Chest",
    "abs": "Abs",
    "legs": "Legs",
    "glutes": "Glutes",
    "back": "Back",
    "shoulders": "Shoulders",
}

# Zones that load overlapping muscles and should not land close together
CONFLICTING_ZONES = [
    ("arms", "chest"),
    ("arms", "back"),
]

# Minimum spacing in days between conflicting zones
CONFLICT_WINDOW_DAYS = 2

BUILD_MUSCLE_SPLIT = ["Abs/Shoulders", "Biceps/Triceps", "Chest/Calves", "Legs", "Back"]


def week_start(day: date) -> date:
    """Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def day_index(day: str) -> int:
    return WEEKDAYS.index(day.lower())


def _zones_conflict(zone: str, other: str) -> bool:
    return any(
        (zone == a and other == b) or (zone == b and other == a)
        for a, b in CONFLICTING_ZONES
    )


def _has_nearby_conflict(index: int, zone: str, assigned: dict[str, str]) -> bool:
    for assigned_day, assigned_zone in assigned.items():
        distance = abs(day_index(assigned_day) - index)
        if 0 < distance <= CONFLICT_WINDOW_DAYS and _zones_conflict(zone, assigned_zone):
            return True
    return False


def assign_zones(available_days: Sequence[str], target_zones: Sequence[str]) -> dict[str, str]:
    """
    Give each training day a target zone, keeping conflicting zones apart.

    Days are visited in the order the user listed them. Each day takes the
    first zone that has no conflict with a zone already placed one or two
    days away. When every zone conflicts, the zone at the day's position
    (wrapping) is used.

    Args:
        available_days: Weekday names chosen by the user
        target_zones: Zones in the user's order of preference

    Returns:
        Mapping of day -> zone (empty when there are no zones)
    """
    assigned: dict[str, str] = {}
    if not target_zones:
        return assigned

    for position, day in enumerate(available_days):
        index = day_index(day)
        zone = next(
            (z for z in target_zones if not _has_nearby_conflict(index, z, assigned)),
            None,
        )
        if zone is None:
            zone = target_zones[position % len(target_zones)]
        assigned[day] = zone

    return assigned


def workout_slot(day: str, template: WorkoutTemplate) -> dict:
    """Schedule entry for a template on a given day."""
    return {
        "day": day,
        "workout_name": template.name,
        "muscle_group": template.muscle_group or "",
        "duration_minutes": template.duration_minutes,
        "exercises": list(template.exercises or []),
    }


def _first_unused(
    templates: Sequence[WorkoutTemplate],
    used: set,
    muscle_group: Optional[str] = None,
) -> Optional[WorkoutTemplate]:
    for template in templates:
        if template.id in used:
            continue
        if muscle_group is None or template.muscle_group == muscle_group:
            return template
    return None


def build_week_from_zones(
    available_days: Sequence[str],
    target_zones: Sequence[str],
    templates: Sequence[WorkoutTemplate],
) -> list[dict]:
    """
    Build a week of workouts matched to the user's target zones.

    A template is not repeated within the week until every template has been
    used once.
    """
    assigned = assign_zones(available_days, target_zones)
    used: set = set()
    workouts = []

    for day in available_days:
        template = None
        zone = assigned.get(day)
        if zone:
            template = _first_unused(templates, used, ZONE_MUSCLE_GROUPS.get(zone))
        if template is None:
            template = _first_unused(templates, used)
        if template is None and templates:
            used.clear()
            template = templates[0]

        if template is not None:
            used.add(template.id)
            workouts.append(workout_slot(day, template))

    return workouts


def build_week_for_goal(
    available_days: Sequence[str],
    goal: Optional[str],
    templates: Sequence[WorkoutTemplate],
) -> list[dict]:
    """
    Build a week of workouts following the goal's split.

    Muscle builders follow a fixed five-day split by day position; other
    goals take templates in order.
    """
    split = BUILD_MUSCLE_SPLIT if goal == "build_muscle" else None
    used: set = set()
    workouts = []

    for position, day in enumerate(available_days):
        target = split[position % len(split)] if split else None
        template = None
        if target:
            template = _first_unused(templates, used, target)
        if template is None:
            template = _first_unused(templates, used)

        if template is None and templates:
            used.clear()
            if target:
                template = next((t for t in templates if t.muscle_group == target), None)
            if template is None:
                template = templates[0]

        if template is not None:
            used.add(template.id)
            workouts.append(workout_slot(day, template))

    return workouts


def _find_day(workouts: Sequence[dict], day: str) -> Optional[int]:
    for i, workout in enumerate(workouts):
        if workout.get("day", "").lower() == day.lower():
            return i
    return None


def set_day_workout(workouts: Sequence[dict], day: str, template: WorkoutTemplate) -> list[dict]:
    """Replace the workout on ``day`` with ``template``, or add it."""
    updated = [dict(w) for w in workouts]
    slot = workout_slot(day.lower(), template)
    index = _find_day(updated, day)
    if index is None:
        updated.append(slot)
    else:
        updated[index] = slot
    return sorted(updated, key=lambda w: day_index(w["day"]))


def remove_day_workout(workouts: Sequence[dict], day: str) -> list[dict]:
    """Drop the workout on ``day``; unknown days leave the week unchanged."""
    return [dict(w) for w in workouts if w.get("day", "").lower() != day.lower()]


def swap_days(workouts: Sequence[dict], first: str, second: str) -> list[dict]:
    """
    Swap the workouts of two days.

    When only one of the days has a workout, it moves to the other day.

    Raises:
        ValueError: If neither day has a workout
    """
    updated = [dict(w) for w in workouts]
    i = _find_day(updated, first)
    j = _find_day(updated, second)

    if i is None and j is None:
        raise ValueError("Neither day has a scheduled workout")

    if i is not None and j is not None:
        updated[i]["day"], updated[j]["day"] = updated[j]["day"], updated[i]["day"]
    elif i is not None:
        updated[i]["day"] = second.lower()
    else:
        updated[j]["day"] = first.lower()

    return sorted(updated, key=lambda w: day_index(w["day"]))


@dataclass
class RotationStatus:
    """Whether a user is due to move to the next set of template versions."""
    current_cycle: int
    next_cycle: int
    rotation_weeks: int
    weeks_since_start: int
    declined: bool

    @property
    def is_due(self) -> bool:
        return self.weeks_since_start >= self.rotation_weeks and not self.declined


def parse_rotation_weeks(value: Optional[str], default: int) -> int:
    """Rotation length from the settings table, falling back on bad values."""
    try:
        weeks = int(value) if value is not None else default
    except (TypeError, ValueError):
        return default
    return weeks if weeks > 0 else default


def rotation_status(
    current_cycle: Optional[int],
    start: date,
    rotation_weeks: int,
    declined: bool,
    today: Optional[date] = None,
) -> RotationStatus:
    """
    Compute rotation state.

    Args:
        current_cycle: Profile rotation cycle
        start: Last rotation date, or the profile creation date
        rotation_weeks: Weeks between rotations
        declined: Whether the user declined the current rotation
        today: Reference date (defaults to today)
    """
    today = today or date.today()
    cycle = current_cycle or 0
    weeks = max((today - start).days // 7, 0)
    return RotationStatus(
        current_cycle=cycle,
        next_cycle=cycle + 1,
        rotation_weeks=rotation_weeks,
        weeks_since_start=weeks,
        declined=declined,
    )
