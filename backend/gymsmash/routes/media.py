"""Photo and video capture routes."""
import logging
from datetime import date
from typing import Optional, List
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gymsmash.models.base import get_db
from gymsmash.models.media import MediaAsset, MediaCategory, MediaKind
from gymsmash.models.user import User
from gymsmash.routes.workouts import get_user_log
from gymsmash.schemas.media import (
    MediaAssetResponse,
    OverlayKind,
    OverlayLayoutResponse,
    OverlayRequest,
)
from gymsmash.services.media_storage import (
    MediaTooLargeError,
    delete_file,
    public_url,
    save_upload,
)
from gymsmash.services.overlay import (
    before_photo_overlay,
    exercise_overlay,
    freestyle_overlay,
    workout_overlay,
)
from gymsmash.utils.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/media", tags=["Media"])


@router.post("/upload", response_model=MediaAssetResponse, status_code=status.HTTP_201_CREATED)
async def upload_media(
    file: UploadFile = File(...),
    kind: MediaKind = Form(...),
    category: MediaCategory = Form(...),
    workout_log_id: Optional[UUID] = Form(None),
    exercise_name: Optional[str] = Form(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Store a captured photo or video."""
    expected_prefix = "video/" if kind == MediaKind.VIDEO else "image/"
    if file.content_type and not file.content_type.startswith(expected_prefix):
        raise HTTPException(
            status_code=400,
            detail=f"Expected a {kind.value} upload, got {file.content_type}",
        )

    if workout_log_id and not await get_user_log(db, current_user.id, workout_log_id):
        raise HTTPException(status_code=404, detail="Workout log not found")

    try:
        relative, size = await save_upload(file, current_user.id)
    except MediaTooLargeError:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="File too large",
        )

    asset = MediaAsset(
        user_id=current_user.id,
        kind=kind,
        category=category,
        file_path=relative,
        file_url=public_url(relative),
        content_type=file.content_type,
        size_bytes=size,
        workout_log_id=workout_log_id,
        exercise_name=exercise_name,
    )
    db.add(asset)
    await db.flush()
    await db.refresh(asset)

    logger.info(f"User {current_user.id} uploaded {kind.value} ({category.value})")
    return asset


@router.get("", response_model=List[MediaAssetResponse])
async def list_media(
    kind: Optional[MediaKind] = Query(None),
    category: Optional[MediaCategory] = Query(None),
    workout_log_id: Optional[UUID] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """The caller's uploads, newest first."""
    query = select(MediaAsset).where(MediaAsset.user_id == current_user.id)
    if kind:
        query = query.where(MediaAsset.kind == kind)
    if category:
        query = query.where(MediaAsset.category == category)
    if workout_log_id:
        query = query.where(MediaAsset.workout_log_id == workout_log_id)

    result = await db.execute(query.order_by(MediaAsset.created_at.desc()).limit(limit))
    return result.scalars().all()


@router.delete("/{asset_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_media(
    asset_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete an upload and its file."""
    asset = await db.get(MediaAsset, asset_id)
    if not asset or asset.user_id != current_user.id:
        raise HTTPException(status_code=404, detail="Media not found")

    if not delete_file(asset.file_path):
        logger.warning(f"File for media {asset_id} was already gone")

    if current_user.before_photo_url == asset.file_url:
        current_user.before_photo_url = None
        current_user.before_photo_date = None

    await db.delete(asset)


@router.post("/overlay", response_model=OverlayLayoutResponse)
async def build_overlay(
    request: OverlayRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Layout of the stats overlay for a capture.

    Workout overlays can be filled from a saved log by passing
    ``workout_log_id``; explicit values in the request win.
    """
    if request.kind == OverlayKind.EXERCISE:
        return exercise_overlay(
            request.exercise_name,
            request.weight_kg or 0,
            request.sets or 0,
            request.reps or 0,
            request.logo_aspect,
        )

    if request.kind == OverlayKind.WORKOUT:
        exercises = request.exercises_completed
        volume = request.total_volume
        duration = request.duration_minutes
        workout_date = request.workout_date

        if request.workout_log_id:
            log = await get_user_log(db, current_user.id, request.workout_log_id)
            if not log:
                raise HTTPException(status_code=404, detail="Workout log not found")
            exercises = exercises if exercises is not None else len(log.exercises_completed)
            volume = volume if volume is not None else log.total_volume
            duration = duration if duration is not None else log.duration_minutes
            workout_date = workout_date or log.date

        return workout_overlay(
            exercises or 0,
            volume or 0.0,
            duration or 0,
            workout_date or date.today(),
            request.logo_aspect,
        )

    if request.kind == OverlayKind.FREESTYLE:
        return freestyle_overlay(
            request.elapsed_seconds or 0,
            request.workout_date or date.today(),
            request.logo_aspect,
        )

    return before_photo_overlay(request.width, request.height, request.logo_aspect)
