"""Questionnaire and profile routes."""
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gymsmash.config import get_settings
from gymsmash.models.base import get_db
from gymsmash.models.catalog import Coach
from gymsmash.models.media import MediaAsset, MediaCategory, MediaKind
from gymsmash.models.user import User, UserProfile
from gymsmash.schemas.media import MediaAssetResponse
from gymsmash.schemas.user import (
    ProfileResponse,
    ProfileUpdate,
    QuestionnaireRequest,
    QuestionnaireResponse,
)
from gymsmash.services.media_storage import MediaTooLargeError, public_url, save_upload
from gymsmash.services.pricing import grant_trial
from gymsmash.services.schedule_service import (
    ScheduleGenerationError,
    generate_schedule,
    sync_user_schedules,
)
from gymsmash.utils.auth import get_current_user

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/profile", tags=["Profile"])


async def get_profile(db: AsyncSession, user: User) -> Optional[UserProfile]:
    result = await db.execute(select(UserProfile).where(UserProfile.user_id == user.id))
    return result.scalar_one_or_none()


async def _ensure_coach(db: AsyncSession, coach_id) -> None:
    if coach_id is None:
        return
    coach = await db.get(Coach, coach_id)
    if not coach or not coach.is_active:
        raise HTTPException(status_code=404, detail="Coach not found")


@router.get("", response_model=ProfileResponse)
async def read_profile(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get the caller's questionnaire profile."""
    profile = await get_profile(db, current_user)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.post("/questionnaire", response_model=QuestionnaireResponse)
async def submit_questionnaire(
    answers: QuestionnaireRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Save questionnaire answers and build the weekly schedule.

    Rotation progress is kept when the questionnaire is retaken. A failed
    schedule build does not discard the answers.
    """
    await _ensure_coach(db, answers.preferred_coach_id)

    fields = dict(
        gender=answers.gender,
        age_range=answers.age_range,
        experience_level=answers.experience_level,
        body_type=answers.body_type,
        target_zone=[z.value for z in answers.target_zone],
        primary_goal=answers.primary_goal,
        available_days=[d.value for d in answers.available_days],
        preferred_coach_id=answers.preferred_coach_id,
        equipment_access=answers.equipment_access,
        workout_duration_preference=answers.workout_duration_preference,
    )

    profile = await get_profile(db, current_user)
    trial_granted = False
    if profile is None:
        profile = UserProfile(
            user_id=current_user.id,
            current_rotation_cycle=0,
            last_rotation_date=date.today(),
            declined_current_rotation=False,
            **fields,
        )
        db.add(profile)
        trial_granted = grant_trial(current_user, settings.trial_days)
        logger.info(f"Created profile for user {current_user.id}")
    else:
        for field, value in fields.items():
            setattr(profile, field, value)
        profile.declined_current_rotation = False

    await db.flush()

    schedule_error = None
    try:
        await generate_schedule(db, current_user, profile)
    except ScheduleGenerationError as e:
        logger.warning(f"Schedule generation failed for user {current_user.id}: {e}")
        schedule_error = str(e)

    await db.refresh(profile)

    return QuestionnaireResponse(
        profile=ProfileResponse.model_validate(profile),
        schedule_generated=schedule_error is None,
        schedule_error=schedule_error,
        trial_granted=trial_granted,
    )


@router.patch("", response_model=ProfileResponse)
async def update_profile(
    updates: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update individual preferences; a new coach refreshes schedule videos."""
    profile = await get_profile(db, current_user)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")

    update_data = updates.model_dump(exclude_unset=True)
    coach_changed = (
        "preferred_coach_id" in update_data
        and update_data["preferred_coach_id"] != profile.preferred_coach_id
    )
    if coach_changed:
        await _ensure_coach(db, update_data["preferred_coach_id"])

    for field, value in update_data.items():
        setattr(profile, field, value)

    await db.flush()

    if coach_changed:
        changed = await sync_user_schedules(db, current_user.id, profile.preferred_coach_id)
        logger.info(f"Coach change for user {current_user.id} updated {changed} exercises")

    await db.refresh(profile)
    return profile


@router.post("/before-photo", response_model=MediaAssetResponse, status_code=status.HTTP_201_CREATED)
async def upload_before_photo(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Store the before photo and record it on the account."""
    if file.content_type and not file.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Before photo must be an image")

    try:
        relative, size = await save_upload(file, current_user.id)
    except MediaTooLargeError:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="File too large",
        )

    asset = MediaAsset(
        user_id=current_user.id,
        kind=MediaKind.PHOTO,
        category=MediaCategory.BEFORE,
        file_path=relative,
        file_url=public_url(relative),
        content_type=file.content_type,
        size_bytes=size,
    )
    db.add(asset)

    current_user.before_photo_url = asset.file_url
    current_user.before_photo_date = date.today()

    await db.flush()
    await db.refresh(asset)

    return asset
