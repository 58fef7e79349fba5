"""Admin routes: settings, user management, schedules, pricing and offers."""
import logging
from typing import Optional, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from gymsmash.models.base import get_db
from gymsmash.models.billing import PricingConfig, SpecialOffer
from gymsmash.models.social import UserStats
from gymsmash.models.user import SubscriptionTier, User, UserProfile
from gymsmash.models.workout import WorkoutLog, WorkoutSchedule
from gymsmash.schemas.admin import (
    AdminUserRow,
    AdminUsersResponse,
    CancellationFeedback,
    RotationWeeksUpdate,
    SyncExercisesResponse,
)
from gymsmash.schemas.billing import (
    PricingConfigCreate,
    PricingConfigResponse,
    PricingConfigUpdate,
    SpecialOfferCreate,
    SpecialOfferResponse,
    SpecialOfferUpdate,
    SubscriptionUpdate,
)
from gymsmash.schemas.catalog import AppSettingResponse, AppSettingUpdate
from gymsmash.schemas.schedule import ScheduleResponse, ScheduleUpdate
from gymsmash.schemas.user import UserResponse
from gymsmash.services.admin_reports import cancellation_breakdown, matches_search
from gymsmash.services.schedule_builder import day_index
from gymsmash.services.schedule_service import (
    ROTATION_WEEKS_KEY,
    get_setting,
    put_setting,
    sync_all_schedules,
)
from gymsmash.utils.auth import get_current_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(get_current_admin)])


# Settings

@router.get("/settings/{key}", response_model=AppSettingResponse)
async def read_setting(key: str, db: AsyncSession = Depends(get_db)):
    setting = await get_setting(db, key)
    if not setting:
        raise HTTPException(status_code=404, detail="Setting not found")
    return setting


@router.put("/settings/{key}", response_model=AppSettingResponse)
async def write_setting(key: str, update: AppSettingUpdate, db: AsyncSession = Depends(get_db)):
    setting = await put_setting(db, key, update.setting_value, update.description)
    await db.refresh(setting)
    logger.info(f"Admin updated setting {key}")
    return setting


@router.put("/rotation-weeks", response_model=AppSettingResponse)
async def set_rotation_weeks(update: RotationWeeksUpdate, db: AsyncSession = Depends(get_db)):
    """Set how many weeks pass before users are offered new templates."""
    setting = await put_setting(
        db,
        ROTATION_WEEKS_KEY,
        str(update.weeks),
        "Weeks between workout template rotations",
    )
    await db.refresh(setting)
    return setting


@router.post("/sync-exercises", response_model=SyncExercisesResponse)
async def sync_exercises(db: AsyncSession = Depends(get_db)):
    """Push catalog changes into every stored schedule."""
    schedules_updated, exercises_updated = await sync_all_schedules(db)
    return SyncExercisesResponse(
        schedules_updated=schedules_updated,
        exercises_updated=exercises_updated,
    )


# Users

@router.get("/users", response_model=AdminUsersResponse)
async def list_users(
    search: Optional[str] = Query(None, max_length=200),
    db: AsyncSession = Depends(get_db),
):
    """
    Every user with profile highlights, workout counts and stats.

    Totals and cancellation feedback always cover all users; ``search``
    only filters the rows.
    """
    users = (await db.execute(select(User).order_by(User.created_at.desc()))).scalars().all()

    profiles = {
        p.user_id: p for p in (await db.execute(select(UserProfile))).scalars().all()
    }
    stats = {
        s.user_id: s for s in (await db.execute(select(UserStats))).scalars().all()
    }
    counts_result = await db.execute(
        select(WorkoutLog.user_id, func.count(WorkoutLog.id)).group_by(WorkoutLog.user_id)
    )
    workout_counts = {user_id: count for user_id, count in counts_result.all()}

    rows = []
    for user in users:
        if not matches_search(user, search):
            continue
        profile = profiles.get(user.id)
        user_stats = stats.get(user.id)
        rows.append(AdminUserRow(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            role=user.role,
            subscription_tier=user.subscription_tier,
            trial_end_date=user.trial_end_date,
            student_verified=user.student_verified,
            primary_goal=profile.primary_goal.value if profile else None,
            experience_level=profile.experience_level.value if profile else None,
            workout_count=workout_counts.get(user.id, 0),
            points=user_stats.points if user_stats else 0,
            current_streak=user_stats.current_streak if user_stats else 0,
            cancelled_at=user.cancelled_at,
            cancellation_reason=user.cancellation_reason,
            created_at=user.created_at,
        ))

    return AdminUsersResponse(
        users=rows,
        total_users=len(users),
        premium_users=sum(1 for u in users if u.has_premium),
        total_workouts=sum(workout_counts.values()),
        cancellations=CancellationFeedback.model_validate(cancellation_breakdown(users)),
    )


@router.post("/users/{user_id}/subscription", response_model=UserResponse)
async def set_subscription(
    user_id: UUID,
    update: SubscriptionUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Override a user's subscription tier."""
    user = await db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    user.subscription_tier = update.subscription_tier
    if update.subscription_tier == SubscriptionTier.PREMIUM:
        user.cancelled_at = None

    await db.flush()
    await db.refresh(user)
    logger.info(f"Admin set user {user_id} to {update.subscription_tier.value}")
    return user


@router.put("/schedules/{schedule_id}", response_model=ScheduleResponse)
async def replace_schedule(
    schedule_id: UUID,
    update: ScheduleUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Replace a user's week by hand."""
    schedule = await db.get(WorkoutSchedule, schedule_id)
    if not schedule:
        raise HTTPException(status_code=404, detail="Schedule not found")

    try:
        workouts = sorted(update.workouts, key=lambda w: day_index(w.day))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    schedule.workouts = [w.model_dump(mode="json") for w in workouts]
    await db.flush()
    await db.refresh(schedule)
    return schedule


# Pricing

@router.get("/pricing", response_model=List[PricingConfigResponse])
async def list_pricing(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(PricingConfig).order_by(PricingConfig.price_monthly))
    return result.scalars().all()


@router.post("/pricing", response_model=PricingConfigResponse, status_code=status.HTTP_201_CREATED)
async def create_pricing(data: PricingConfigCreate, db: AsyncSession = Depends(get_db)):
    plan = PricingConfig(**data.model_dump())
    db.add(plan)
    await db.flush()
    await db.refresh(plan)
    return plan


@router.put("/pricing/{plan_id}", response_model=PricingConfigResponse)
async def update_pricing(
    plan_id: UUID,
    updates: PricingConfigUpdate,
    db: AsyncSession = Depends(get_db),
):
    plan = await db.get(PricingConfig, plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Plan not found")

    for field, value in updates.model_dump(exclude_unset=True).items():
        setattr(plan, field, value)

    await db.flush()
    await db.refresh(plan)
    return plan


@router.delete("/pricing/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pricing(plan_id: UUID, db: AsyncSession = Depends(get_db)):
    plan = await db.get(PricingConfig, plan_id)
    if not plan:
        raise HTTPException(status_code=404, detail="Plan not found")
    await db.delete(plan)


# Offers

@router.get("/offers", response_model=List[SpecialOfferResponse])
async def list_offers(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(SpecialOffer).order_by(SpecialOffer.created_at.desc()))
    return result.scalars().all()


@router.post("/offers", response_model=SpecialOfferResponse, status_code=status.HTTP_201_CREATED)
async def create_offer(data: SpecialOfferCreate, db: AsyncSession = Depends(get_db)):
    values = data.model_dump()
    if values.get("promo_code"):
        values["promo_code"] = values["promo_code"].strip().upper()
    offer = SpecialOffer(**values)
    db.add(offer)
    await db.flush()
    await db.refresh(offer)
    return offer


@router.put("/offers/{offer_id}", response_model=SpecialOfferResponse)
async def update_offer(
    offer_id: UUID,
    updates: SpecialOfferUpdate,
    db: AsyncSession = Depends(get_db),
):
    offer = await db.get(SpecialOffer, offer_id)
    if not offer:
        raise HTTPException(status_code=404, detail="Offer not found")

    values = updates.model_dump(exclude_unset=True)
    if values.get("promo_code"):
        values["promo_code"] = values["promo_code"].strip().upper()
    for field, value in values.items():
        setattr(offer, field, value)

    await db.flush()
    await db.refresh(offer)
    return offer


@router.delete("/offers/{offer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_offer(offer_id: UUID, db: AsyncSession = Depends(get_db)):
    offer = await db.get(SpecialOffer, offer_id)
    if not offer:
        raise HTTPException(status_code=404, detail="Offer not found")
    await db.delete(offer)
