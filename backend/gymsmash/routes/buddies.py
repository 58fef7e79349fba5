"""Workout buddy and sticker routes."""
import logging
from datetime import datetime, timezone
from typing import List
from uuid import UUID

import stripe
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select, or_, and_
from sqlalchemy.ext.asyncio import AsyncSession

from gymsmash.config import get_settings
from gymsmash.models.base import get_db
from gymsmash.models.social import BuddyMessage, BuddyStatus, UserStats, WorkoutBuddy
from gymsmash.models.user import User
from gymsmash.schemas.social import (
    BuddyAcceptResponse,
    BuddyInviteRequest,
    BuddyListResponse,
    BuddyRespondRequest,
    BuddyResponse,
    BuddySummary,
    StickerCreate,
    StickerResponse,
)
from gymsmash.services.buddies import (
    STICKERS,
    BuddyError,
    is_open_pair,
    normalize_invite_email,
    sticker_expiry,
    unexpired,
    unread,
)
from gymsmash.services.email_service import email_service
from gymsmash.services.pricing import grant_trial
from gymsmash.services.stripe_service import BillingError, StripeService
from gymsmash.utils.auth import get_current_user

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/buddies", tags=["Buddies"])


def _sticker_response(message: BuddyMessage) -> StickerResponse:
    emoji, label = STICKERS[message.message_type]
    return StickerResponse(
        id=message.id,
        from_user_id=message.from_user_id,
        to_user_id=message.to_user_id,
        message_type=message.message_type,
        emoji=emoji,
        label=label,
        custom_message=message.custom_message,
        is_read=message.is_read,
        expires_at=message.expires_at,
        created_at=message.created_at,
    )


async def _are_buddies(db: AsyncSession, user_id: UUID, other_id: UUID) -> bool:
    result = await db.execute(
        select(WorkoutBuddy.id).where(
            WorkoutBuddy.status == BuddyStatus.ACCEPTED,
            or_(
                and_(WorkoutBuddy.user_id == user_id, WorkoutBuddy.buddy_user_id == other_id),
                and_(WorkoutBuddy.user_id == other_id, WorkoutBuddy.buddy_user_id == user_id),
            ),
        )
    )
    return result.first() is not None


async def _apply_buddy_promo(inviter: User) -> bool:
    """
    Reward the inviter once per account.

    Subscribers get the buddy coupon on their Stripe subscription when one
    is configured; everyone else gets free premium days.
    """
    if inviter.buddy_promo_applied:
        return False

    applied_coupon = False
    if inviter.stripe_subscription_id and settings.stripe_buddy_coupon_id:
        try:
            StripeService().apply_coupon(
                subscription_id=inviter.stripe_subscription_id,
                coupon_id=settings.stripe_buddy_coupon_id,
            )
            applied_coupon = True
        except (BillingError, stripe.StripeError) as e:
            logger.warning(f"Buddy coupon failed for user {inviter.id}: {e}")

    if not applied_coupon:
        grant_trial(inviter, settings.buddy_promo_free_days)

    inviter.buddy_promo_applied = True
    logger.info(f"Buddy promo applied for user {inviter.id} (coupon: {applied_coupon})")
    return True


async def _get_invite_for_invitee(db: AsyncSession, buddy_id: UUID, user: User) -> WorkoutBuddy:
    buddy = await db.get(WorkoutBuddy, buddy_id)
    if not buddy:
        raise HTTPException(status_code=404, detail="Buddy invite not found")
    if buddy.buddy_email.lower() != user.email.lower():
        raise HTTPException(status_code=403, detail="This invite was sent to someone else")
    if buddy.status != BuddyStatus.PENDING:
        raise HTTPException(status_code=409, detail="This invite has already been answered")
    return buddy


async def _accept(db: AsyncSession, buddy: WorkoutBuddy, user: User) -> BuddyAcceptResponse:
    buddy.status = BuddyStatus.ACCEPTED
    buddy.buddy_user_id = user.id

    granted_trial = grant_trial(user, settings.buddy_trial_days)

    inviter = await db.get(User, buddy.user_id)
    promo_applied = await _apply_buddy_promo(inviter) if inviter else False

    await db.flush()
    await db.refresh(buddy)
    return BuddyAcceptResponse(
        buddy=BuddyResponse.model_validate(buddy),
        granted_trial=granted_trial,
        buddy_promo_applied=promo_applied,
    )


@router.get("", response_model=BuddyListResponse)
async def list_buddies(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Accepted buddies with their stats, plus pending invites both ways."""
    result = await db.execute(
        select(WorkoutBuddy).where(
            or_(
                WorkoutBuddy.user_id == current_user.id,
                WorkoutBuddy.buddy_user_id == current_user.id,
                WorkoutBuddy.buddy_email == current_user.email,
            )
        ).order_by(WorkoutBuddy.created_at.desc())
    )
    rows = result.scalars().all()

    accepted = [b for b in rows if b.status == BuddyStatus.ACCEPTED]
    other_ids = [
        b.buddy_user_id if b.user_id == current_user.id else b.user_id
        for b in accepted
    ]

    users = {}
    stats = {}
    if other_ids:
        user_rows = await db.execute(select(User).where(User.id.in_(other_ids)))
        users = {u.id: u for u in user_rows.scalars().all()}
        stat_rows = await db.execute(select(UserStats).where(UserStats.user_id.in_(other_ids)))
        stats = {s.user_id: s for s in stat_rows.scalars().all()}

    buddies = []
    for buddy, other_id in zip(accepted, other_ids):
        other = users.get(other_id)
        if other is None:
            continue
        other_stats = stats.get(other_id)
        buddies.append(BuddySummary(
            id=buddy.id,
            buddy_user_id=other_id,
            email=other.email,
            full_name=other.full_name,
            total_workouts=other_stats.total_workouts if other_stats else 0,
            current_streak=other_stats.current_streak if other_stats else 0,
            last_workout_date=other_stats.last_workout_date if other_stats else None,
        ))

    return BuddyListResponse(
        buddies=buddies,
        pending_sent=[
            b for b in rows
            if b.status == BuddyStatus.PENDING and b.user_id == current_user.id
        ],
        pending_received=[
            b for b in rows
            if b.status == BuddyStatus.PENDING and b.buddy_email == current_user.email
        ],
    )


@router.post("/invite", response_model=BuddyResponse, status_code=status.HTTP_201_CREATED)
async def invite_buddy(
    request: BuddyInviteRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Invite someone by email to be a workout buddy."""
    try:
        email = normalize_invite_email(current_user.email, request.buddy_email)
    except BuddyError as e:
        raise HTTPException(status_code=400, detail=str(e))

    existing = await db.execute(
        select(WorkoutBuddy).where(
            or_(
                and_(WorkoutBuddy.user_id == current_user.id, WorkoutBuddy.buddy_email == email),
                and_(
                    WorkoutBuddy.buddy_email == current_user.email,
                    WorkoutBuddy.user_id.in_(select(User.id).where(User.email == email)),
                ),
            )
        )
    )
    if any(is_open_pair(b) for b in existing.scalars().all()):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="You already have an invite or buddy with this email",
        )

    buddy = WorkoutBuddy(user_id=current_user.id, buddy_email=email, status=BuddyStatus.PENDING)
    db.add(buddy)
    await db.flush()
    await db.refresh(buddy)

    accept_link = f"{settings.web_app_base_url.rstrip('/')}/buddies?invite={buddy.id}"
    await email_service.send_buddy_invite(
        email, current_user.full_name or current_user.email, accept_link
    )
    logger.info(f"User {current_user.id} invited a buddy")

    return buddy


@router.post("/{buddy_id}/accept", response_model=BuddyAcceptResponse)
async def accept_buddy(
    buddy_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Accept an invite addressed to the caller."""
    buddy = await _get_invite_for_invitee(db, buddy_id, current_user)
    return await _accept(db, buddy, current_user)


@router.post("/{buddy_id}/respond", response_model=BuddyAcceptResponse)
async def respond_to_buddy(
    buddy_id: UUID,
    request: BuddyRespondRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Accept or decline an invite addressed to the caller."""
    buddy = await _get_invite_for_invitee(db, buddy_id, current_user)
    if request.accept:
        return await _accept(db, buddy, current_user)

    buddy.status = BuddyStatus.DECLINED
    await db.flush()
    await db.refresh(buddy)
    return BuddyAcceptResponse(
        buddy=BuddyResponse.model_validate(buddy),
        granted_trial=False,
        buddy_promo_applied=False,
    )


@router.delete("/{buddy_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_buddy(
    buddy_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Remove a buddy or cancel an invite, from either side."""
    buddy = await db.get(WorkoutBuddy, buddy_id)
    if not buddy:
        raise HTTPException(status_code=404, detail="Buddy not found")

    involved = (
        buddy.user_id == current_user.id
        or buddy.buddy_user_id == current_user.id
        or buddy.buddy_email.lower() == current_user.email.lower()
    )
    if not involved:
        raise HTTPException(status_code=404, detail="Buddy not found")

    await db.delete(buddy)


# Stickers

@router.post("/messages", response_model=StickerResponse, status_code=status.HTTP_201_CREATED)
async def send_sticker(
    request: StickerCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Send a sticker to an accepted buddy."""
    if not await _are_buddies(db, current_user.id, request.to_user_id):
        raise HTTPException(status_code=403, detail="You can only send stickers to your buddies")

    message = BuddyMessage(
        from_user_id=current_user.id,
        to_user_id=request.to_user_id,
        message_type=request.message_type,
        custom_message=request.custom_message,
        is_read=False,
        expires_at=sticker_expiry(settings.sticker_lifetime_hours),
    )
    db.add(message)
    await db.flush()
    await db.refresh(message)

    return _sticker_response(message)


@router.get("/messages/received", response_model=List[StickerResponse])
async def received_stickers(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Unread stickers sent to the caller that have not expired."""
    now = datetime.now(timezone.utc)
    result = await db.execute(
        select(BuddyMessage).where(
            BuddyMessage.to_user_id == current_user.id,
            BuddyMessage.is_read.is_(False),
            BuddyMessage.expires_at > now,
        )
    )
    return [_sticker_response(m) for m in unexpired(unread(result.scalars().all()), now)]


@router.get("/messages/sent", response_model=List[StickerResponse])
async def sent_stickers(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Stickers the caller sent that have not expired."""
    now = datetime.now(timezone.utc)
    result = await db.execute(
        select(BuddyMessage).where(
            BuddyMessage.from_user_id == current_user.id,
            BuddyMessage.expires_at > now,
        )
    )
    return [_sticker_response(m) for m in unexpired(result.scalars().all(), now)]


@router.post("/messages/{message_id}/read", response_model=StickerResponse)
async def mark_sticker_read(
    message_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Dismiss a received sticker."""
    message = await db.get(BuddyMessage, message_id)
    if not message or message.to_user_id != current_user.id:
        raise HTTPException(status_code=404, detail="Message not found")

    message.is_read = True
    await db.flush()
    await db.refresh(message)

    return _sticker_response(message)
