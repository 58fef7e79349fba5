"""Template selection for the weekly schedule.

Templates that are versions of the same workout share a ``template_group``.
Each rotation cycle picks the next version from every group, so a user sees
fresh variations of the same workouts every few weeks. Ungrouped templates
are always included.
"""
from typing import Iterable, Optional, Sequence

from gymsmash.models.catalog import WorkoutTemplate


class NoTemplatesError(Exception):
    """Raised when no active template can be used for a schedule."""


def filter_candidate_templates(
    templates: Iterable[WorkoutTemplate],
    goal: Optional[str],
    equipment: Optional[str],
) -> list[WorkoutTemplate]:
    """
    Narrow templates to the user's goal and equipment, relaxing as needed.

    Tries (goal, equipment), then goal alone, then every active template.

    Args:
        templates: All templates known to the system
        goal: The user's primary goal
        equipment: The user's equipment access

    Returns:
        Candidate templates in input order

    Raises:
        NoTemplatesError: If there is no active template at all
    """
    active = [t for t in templates if t.is_active]

    matched = [
        t for t in active
        if t.target_goal == goal and t.equipment_needed == equipment
    ]
    if not matched:
        matched = [t for t in active if t.target_goal == goal]
    if not matched:
        matched = active

    if not matched:
        raise NoTemplatesError(
            "No workout templates available. Please contact support."
        )
    return matched


def group_templates(
    templates: Sequence[WorkoutTemplate],
) -> tuple[dict[str, list[WorkoutTemplate]], list[WorkoutTemplate]]:
    """
    Split templates into version groups and standalone templates.

    Groups keep first-seen order; each group is sorted by version number
    (missing versions count as 1).

    Returns:
        (groups by template_group, ungrouped templates)
    """
    groups: dict[str, list[WorkoutTemplate]] = {}
    ungrouped: list[WorkoutTemplate] = []

    for template in templates:
        if template.template_group:
            groups.setdefault(template.template_group, []).append(template)
        else:
            ungrouped.append(template)

    for name, members in groups.items():
        groups[name] = sorted(members, key=lambda t: t.version_number or 1)

    return groups, ungrouped


def select_rotation(
    templates: Sequence[WorkoutTemplate],
    cycle: int,
) -> list[WorkoutTemplate]:
    """
    Pick one version per template group for a rotation cycle.

    Args:
        templates: Candidate templates
        cycle: Rotation cycle (0 for a new user)

    Returns:
        Selected group versions followed by every ungrouped template

    Raises:
        NoTemplatesError: If nothing can be selected
    """
    groups, ungrouped = group_templates(templates)

    selected = [members[cycle % len(members)] for members in groups.values()]
    selected.extend(ungrouped)

    if not selected:
        raise NoTemplatesError("No suitable templates found")
    return selected
