"""Exercise library, workout template and coach routes."""
import logging
from typing import Optional, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from gymsmash.models.base import get_db
from gymsmash.models.catalog import Coach, Exercise, WorkoutTemplate
from gymsmash.models.user import User
from gymsmash.schemas.catalog import (
    CoachCreate,
    CoachResponse,
    CoachUpdate,
    ExerciseCreate,
    ExerciseResponse,
    ExerciseUpdate,
    WorkoutTemplateCreate,
    WorkoutTemplateResponse,
    WorkoutTemplateUpdate,
)
from gymsmash.utils.auth import get_current_admin, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["Catalog"])


async def _code_taken(db: AsyncSession, code: str, exclude_id: Optional[UUID] = None) -> bool:
    query = select(Exercise.id).where(Exercise.exercise_code == code)
    if exclude_id:
        query = query.where(Exercise.id != exclude_id)
    result = await db.execute(query)
    return result.first() is not None


# Exercises

@router.get("/exercises", response_model=List[ExerciseResponse])
async def list_exercises(
    zone: Optional[str] = Query(None),
    goal: Optional[str] = Query(None),
    level: Optional[str] = Query(None),
    search: Optional[str] = Query(None, max_length=100),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List library exercises with optional filtering."""
    query = select(Exercise)

    if zone:
        query = query.where(Exercise.target_zones.contains([zone]))
    if goal:
        query = query.where(Exercise.target_goal.contains([goal]))
    if level:
        query = query.where(Exercise.experience_level.contains([level]))
    if search:
        pattern = f"%{search}%"
        query = query.where(or_(Exercise.name.ilike(pattern), Exercise.exercise_code.ilike(pattern)))

    result = await db.execute(query.order_by(Exercise.name))
    return result.scalars().all()


@router.post("/exercises", response_model=ExerciseResponse, status_code=status.HTTP_201_CREATED)
async def create_exercise(
    exercise_data: ExerciseCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """Add an exercise to the library."""
    if await _code_taken(db, exercise_data.exercise_code):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Exercise code already exists",
        )

    exercise = Exercise(**exercise_data.model_dump(mode="json"))
    db.add(exercise)
    await db.flush()
    await db.refresh(exercise)

    logger.info(f"Admin {admin.id} created exercise {exercise.exercise_code}")
    return exercise


@router.put("/exercises/{exercise_id}", response_model=ExerciseResponse)
async def update_exercise(
    exercise_id: UUID,
    updates: ExerciseUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """Update a library exercise."""
    exercise = await db.get(Exercise, exercise_id)
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")

    update_data = updates.model_dump(mode="json", exclude_unset=True)
    code = update_data.get("exercise_code")
    if code and code != exercise.exercise_code and await _code_taken(db, code, exercise.id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Exercise code already exists",
        )

    for field, value in update_data.items():
        setattr(exercise, field, value)

    await db.flush()
    await db.refresh(exercise)

    return exercise


@router.delete("/exercises/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exercise(
    exercise_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """Remove an exercise from the library."""
    exercise = await db.get(Exercise, exercise_id)
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")

    await db.delete(exercise)


# Workout templates

@router.get("/templates", response_model=List[WorkoutTemplateResponse])
async def list_templates(
    active_only: bool = Query(True),
    goal: Optional[str] = Query(None),
    template_group: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List workout templates."""
    query = select(WorkoutTemplate)

    if active_only:
        query = query.where(WorkoutTemplate.is_active == True)
    if goal:
        query = query.where(WorkoutTemplate.target_goal == goal)
    if template_group:
        query = query.where(WorkoutTemplate.template_group == template_group)

    query = query.order_by(
        WorkoutTemplate.template_group,
        WorkoutTemplate.version_number,
        WorkoutTemplate.name,
    )
    result = await db.execute(query)
    return result.scalars().all()


@router.post("/templates", response_model=WorkoutTemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_template(
    template_data: WorkoutTemplateCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """Create a workout template (or a new version within a group)."""
    template = WorkoutTemplate(**template_data.model_dump(mode="json"))
    db.add(template)
    await db.flush()
    await db.refresh(template)

    logger.info(f"Admin {admin.id} created template {template.name}")
    return template


@router.put("/templates/{template_id}", response_model=WorkoutTemplateResponse)
async def update_template(
    template_id: UUID,
    updates: WorkoutTemplateUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """Update a workout template."""
    template = await db.get(WorkoutTemplate, template_id)
    if not template:
        raise HTTPException(status_code=404, detail="Workout template not found")

    update_data = updates.model_dump(mode="json", exclude_unset=True)
    for field, value in update_data.items():
        setattr(template, field, value)

    await db.flush()
    await db.refresh(template)

    return template


@router.post("/templates/{template_id}/deactivate", response_model=WorkoutTemplateResponse)
async def deactivate_template(
    template_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """Retire a template from future schedules without deleting it."""
    template = await db.get(WorkoutTemplate, template_id)
    if not template:
        raise HTTPException(status_code=404, detail="Workout template not found")

    template.is_active = False
    await db.flush()
    await db.refresh(template)

    return template


@router.delete("/templates/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """Delete a workout template."""
    template = await db.get(WorkoutTemplate, template_id)
    if not template:
        raise HTTPException(status_code=404, detail="Workout template not found")

    await db.delete(template)


# Coaches

@router.get("/coaches", response_model=List[CoachResponse])
async def list_coaches(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List active coaches."""
    result = await db.execute(
        select(Coach).where(Coach.is_active == True).order_by(Coach.name)
    )
    return result.scalars().all()


@router.post("/coaches", response_model=CoachResponse, status_code=status.HTTP_201_CREATED)
async def create_coach(
    coach_data: CoachCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    coach = Coach(**coach_data.model_dump())
    db.add(coach)
    await db.flush()
    await db.refresh(coach)
    return coach


@router.put("/coaches/{coach_id}", response_model=CoachResponse)
async def update_coach(
    coach_id: UUID,
    updates: CoachUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    coach = await db.get(Coach, coach_id)
    if not coach:
        raise HTTPException(status_code=404, detail="Coach not found")

    for field, value in updates.model_dump(exclude_unset=True).items():
        setattr(coach, field, value)

    await db.flush()
    await db.refresh(coach)
    return coach


@router.delete("/coaches/{coach_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_coach(
    coach_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    coach = await db.get(Coach, coach_id)
    if not coach:
        raise HTTPException(status_code=404, detail="Coach not found")

    await db.delete(coach)
