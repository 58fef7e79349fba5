"""Schedule generation, rotation and exercise sync against the database."""
import logging
from datetime import date, timedelta
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gymsmash.config import get_settings
from gymsmash.models.catalog import AppSettings, Exercise, WorkoutTemplate
from gymsmash.models.user import User, UserProfile
from gymsmash.models.workout import WorkoutSchedule
from gymsmash.services.exercise_sync import sync_workout_exercises
from gymsmash.services.schedule_builder import (
    RotationStatus,
    build_week_for_goal,
    build_week_from_zones,
    parse_rotation_weeks,
    rotation_status,
    week_start,
)
from gymsmash.services.template_rotation import (
    NoTemplatesError,
    filter_candidate_templates,
    select_rotation,
)

logger = logging.getLogger(__name__)
settings = get_settings()

ROTATION_WEEKS_KEY = "template_rotation_weeks"

ZONES = "zones"
GOAL = "goal"


class ScheduleGenerationError(Exception):
    """Raised when a schedule cannot be generated for a user."""


async def get_setting(db: AsyncSession, key: str) -> Optional[AppSettings]:
    result = await db.execute(select(AppSettings).where(AppSettings.setting_key == key))
    return result.scalar_one_or_none()


async def put_setting(
    db: AsyncSession,
    key: str,
    value: str,
    description: Optional[str] = None,
) -> AppSettings:
    """Create or update an app setting."""
    setting = await get_setting(db, key)
    if setting is None:
        setting = AppSettings(setting_key=key, setting_value=value, description=description)
        db.add(setting)
    else:
        setting.setting_value = value
        if description is not None:
            setting.description = description
    await db.flush()
    return setting


async def get_rotation_weeks(db: AsyncSession) -> int:
    setting = await get_setting(db, ROTATION_WEEKS_KEY)
    return parse_rotation_weeks(
        setting.setting_value if setting else None,
        settings.default_rotation_weeks,
    )


async def load_active_templates(db: AsyncSession) -> list[WorkoutTemplate]:
    result = await db.execute(
        select(WorkoutTemplate)
        .where(WorkoutTemplate.is_active == True)
        .order_by(WorkoutTemplate.created_at)
    )
    return list(result.scalars().all())


async def available_templates(
    db: AsyncSession,
    profile: UserProfile,
    cycle: Optional[int] = None,
) -> list[WorkoutTemplate]:
    """
    Templates a user trains with under a rotation cycle.

    Args:
        db: Database session
        profile: The user's questionnaire answers
        cycle: Rotation cycle (defaults to the profile's current cycle)

    Raises:
        ScheduleGenerationError: If no template is available
    """
    if cycle is None:
        cycle = profile.current_rotation_cycle or 0
    templates = await load_active_templates(db)
    try:
        candidates = filter_candidate_templates(
            templates,
            profile.primary_goal.value if profile.primary_goal else None,
            profile.equipment_access.value if profile.equipment_access else None,
        )
        return select_rotation(candidates, cycle)
    except NoTemplatesError as e:
        raise ScheduleGenerationError(str(e)) from e


async def _exercise_library(db: AsyncSession) -> dict[str, Exercise]:
    result = await db.execute(select(Exercise))
    return {e.exercise_code: e for e in result.scalars().all() if e.exercise_code}


async def save_week(
    db: AsyncSession,
    user_id: UUID,
    workouts: list[dict],
    start: Optional[date] = None,
) -> WorkoutSchedule:
    """Insert or replace the schedule for a week."""
    start = start or week_start(date.today())
    result = await db.execute(
        select(WorkoutSchedule).where(
            WorkoutSchedule.user_id == user_id,
            WorkoutSchedule.week_start_date == start,
        )
    )
    schedule = result.scalar_one_or_none()

    if schedule is None:
        schedule = WorkoutSchedule(user_id=user_id, week_start_date=start, workouts=workouts)
        db.add(schedule)
    else:
        schedule.workouts = workouts

    await db.flush()
    return schedule


async def generate_schedule(
    db: AsyncSession,
    user: User,
    profile: UserProfile,
    cycle: Optional[int] = None,
    strategy: str = ZONES,
) -> WorkoutSchedule:
    """
    Build and store this week's schedule from the user's questionnaire.

    Args:
        db: Database session
        user: Schedule owner
        profile: The user's questionnaire answers
        cycle: Rotation cycle (defaults to the profile's current cycle)
        strategy: ``zones`` to match target zones, ``goal`` to follow the goal split

    Returns:
        The stored schedule

    Raises:
        ScheduleGenerationError: If no template is available or no day was chosen
    """
    if not profile.available_days:
        raise ScheduleGenerationError("Please choose at least one training day")

    if cycle is None:
        cycle = profile.current_rotation_cycle or 0
    selected = await available_templates(db, profile, cycle)

    if strategy == GOAL:
        workouts = build_week_for_goal(
            profile.available_days,
            profile.primary_goal.value if profile.primary_goal else None,
            selected,
        )
    else:
        workouts = build_week_from_zones(profile.available_days, profile.target_zone or [], selected)

    library = await _exercise_library(db)
    coach_id = str(profile.preferred_coach_id) if profile.preferred_coach_id else None
    workouts, _ = sync_workout_exercises(workouts, library, coach_id)

    schedule = await save_week(db, user.id, workouts)
    logger.info(
        f"Generated schedule for user {user.id}: {len(workouts)} workouts, cycle {cycle}"
    )
    return schedule


async def get_current_schedule(
    db: AsyncSession,
    user_id: UUID,
    week_offset: int = 0,
    today: Optional[date] = None,
) -> Optional[WorkoutSchedule]:
    """
    Schedule for a week, falling back to the latest earlier schedule.

    Edits made to a schedule carry over to every following week until a new
    schedule is generated.
    """
    target = week_start(today or date.today()) + timedelta(weeks=week_offset)
    result = await db.execute(
        select(WorkoutSchedule)
        .where(
            WorkoutSchedule.user_id == user_id,
            WorkoutSchedule.week_start_date <= target,
        )
        .order_by(WorkoutSchedule.week_start_date.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def get_rotation_status(
    db: AsyncSession,
    profile: UserProfile,
    today: Optional[date] = None,
) -> RotationStatus:
    weeks = await get_rotation_weeks(db)
    start = profile.last_rotation_date
    if start is None:
        start = profile.created_at.date() if profile.created_at else (today or date.today())
    return rotation_status(
        profile.current_rotation_cycle,
        start,
        weeks,
        bool(profile.declined_current_rotation),
        today,
    )


async def apply_rotation(
    db: AsyncSession,
    user: User,
    profile: UserProfile,
    today: Optional[date] = None,
) -> WorkoutSchedule:
    """Move the user to the next template versions and rebuild the week."""
    next_cycle = (profile.current_rotation_cycle or 0) + 1
    schedule = await generate_schedule(db, user, profile, cycle=next_cycle, strategy=GOAL)

    profile.current_rotation_cycle = next_cycle
    profile.last_rotation_date = today or date.today()
    profile.declined_current_rotation = False
    await db.flush()

    logger.info(f"User {user.id} rotated to cycle {next_cycle}")
    return schedule


async def decline_rotation(db: AsyncSession, profile: UserProfile) -> None:
    profile.declined_current_rotation = True
    await db.flush()


async def sync_user_schedules(
    db: AsyncSession,
    user_id: UUID,
    coach_id: Optional[UUID] = None,
) -> int:
    """Refresh exercise details in every schedule a user has; returns exercises changed."""
    library = await _exercise_library(db)
    result = await db.execute(select(WorkoutSchedule).where(WorkoutSchedule.user_id == user_id))

    total = 0
    for schedule in result.scalars().all():
        workouts, changed = sync_workout_exercises(
            schedule.workouts or [], library, str(coach_id) if coach_id else None
        )
        if changed:
            schedule.workouts = workouts
            total += changed

    await db.flush()
    return total


async def sync_all_schedules(db: AsyncSession) -> tuple[int, int]:
    """
    Refresh exercise details in every stored schedule.

    Returns:
        (schedules updated, exercises changed)
    """
    library = await _exercise_library(db)
    coaches = await db.execute(
        select(UserProfile.user_id, UserProfile.preferred_coach_id)
    )
    coach_by_user = {
        user_id: str(coach_id) for user_id, coach_id in coaches.all() if coach_id
    }

    result = await db.execute(select(WorkoutSchedule))
    schedules_updated = 0
    exercises_changed = 0
    for schedule in result.scalars().all():
        workouts, changed = sync_workout_exercises(
            schedule.workouts or [], library, coach_by_user.get(schedule.user_id)
        )
        if changed:
            schedule.workouts = workouts
            schedules_updated += 1
            exercises_changed += changed

    await db.flush()
    logger.info(
        f"Synced exercises: {schedules_updated} schedules, {exercises_changed} exercises updated"
    )
    return schedules_updated, exercises_changed
