"""Weekly schedule routes."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from gymsmash.models.base import get_db
from gymsmash.models.catalog import WorkoutTemplate
from gymsmash.models.user import User, UserProfile, Weekday
from gymsmash.models.workout import WorkoutSchedule
from gymsmash.routes.profile import get_profile
from gymsmash.schemas.catalog import WorkoutTemplateResponse
from gymsmash.schemas.schedule import (
    DayWorkoutRequest,
    GenerateScheduleRequest,
    RotationStatusResponse,
    ScheduleResponse,
    SwapDaysRequest,
)
from gymsmash.services.schedule_builder import remove_day_workout, set_day_workout, swap_days
from gymsmash.services.schedule_service import (
    ScheduleGenerationError,
    apply_rotation,
    available_templates,
    decline_rotation,
    generate_schedule,
    get_current_schedule,
    get_rotation_status,
)
from gymsmash.utils.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedules", tags=["Schedules"])


async def _require_profile(db: AsyncSession, user: User) -> UserProfile:
    profile = await get_profile(db, user)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Complete the questionnaire first",
        )
    return profile


async def _require_schedule(db: AsyncSession, user: User) -> WorkoutSchedule:
    schedule = await get_current_schedule(db, user.id)
    if not schedule:
        raise HTTPException(status_code=404, detail="No schedule found")
    return schedule


def _status_response(rotation) -> RotationStatusResponse:
    return RotationStatusResponse(
        current_cycle=rotation.current_cycle,
        next_cycle=rotation.next_cycle,
        rotation_weeks=rotation.rotation_weeks,
        weeks_since_start=rotation.weeks_since_start,
        declined=rotation.declined,
        is_due=rotation.is_due,
    )


@router.get("/current", response_model=ScheduleResponse)
async def read_current_schedule(
    week_offset: int = Query(0, ge=-52, le=52, description="Weeks from now (0 = current)"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get the schedule in effect for a week."""
    schedule = await get_current_schedule(db, current_user.id, week_offset)
    if not schedule:
        raise HTTPException(status_code=404, detail="No schedule found")
    return schedule


@router.post("/generate", response_model=ScheduleResponse)
async def regenerate_schedule(
    request: Optional[GenerateScheduleRequest] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Rebuild this week's schedule from the saved questionnaire."""
    profile = await _require_profile(db, current_user)
    cycle = request.cycle if request else None
    try:
        schedule = await generate_schedule(db, current_user, profile, cycle=cycle)
    except ScheduleGenerationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    await db.refresh(schedule)
    return schedule


@router.get("/rotation", response_model=RotationStatusResponse)
async def read_rotation_status(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Whether fresh template versions are due."""
    profile = await _require_profile(db, current_user)
    return _status_response(await get_rotation_status(db, profile))


@router.post("/rotation/apply", response_model=ScheduleResponse)
async def accept_rotation(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Move to the next template versions and rebuild the week."""
    profile = await _require_profile(db, current_user)
    try:
        schedule = await apply_rotation(db, current_user, profile)
    except ScheduleGenerationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

    await db.refresh(schedule)
    return schedule


@router.post("/rotation/decline", response_model=RotationStatusResponse)
async def skip_rotation(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Keep the current templates until the next rotation."""
    profile = await _require_profile(db, current_user)
    await decline_rotation(db, profile)
    return _status_response(await get_rotation_status(db, profile))


@router.put("/current/days/{day}", response_model=ScheduleResponse)
async def set_day(
    day: Weekday,
    request: DayWorkoutRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Put a template on a day, replacing any workout already there."""
    schedule = await _require_schedule(db, current_user)
    template = await db.get(WorkoutTemplate, request.template_id)
    if not template or not template.is_active:
        raise HTTPException(status_code=404, detail="Workout template not found")

    schedule.workouts = set_day_workout(schedule.workouts or [], day.value, template)
    await db.flush()
    await db.refresh(schedule)
    return schedule


@router.delete("/current/days/{day}", response_model=ScheduleResponse)
async def clear_day(
    day: Weekday,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Make a day a rest day."""
    schedule = await _require_schedule(db, current_user)
    schedule.workouts = remove_day_workout(schedule.workouts or [], day.value)
    await db.flush()
    await db.refresh(schedule)
    return schedule


@router.post("/current/swap", response_model=ScheduleResponse)
async def swap_schedule_days(
    request: SwapDaysRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Swap two days' workouts, or move a workout to a rest day."""
    schedule = await _require_schedule(db, current_user)
    try:
        schedule.workouts = swap_days(
            schedule.workouts or [], request.first_day.value, request.second_day.value
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    await db.flush()
    await db.refresh(schedule)
    return schedule


@router.get("/templates", response_model=List[WorkoutTemplateResponse])
async def list_available_templates(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Templates the caller can pick from under their current rotation."""
    profile = await _require_profile(db, current_user)
    try:
        return await available_templates(db, profile)
    except ScheduleGenerationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
