"""Community challenge routes."""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gymsmash.models.base import get_db
from gymsmash.models.social import Challenge, ChallengeParticipant
from gymsmash.models.user import User
from gymsmash.schemas.social import (
    ChallengeCreate,
    ChallengeListResponse,
    ChallengeParticipantResponse,
    ChallengeResponse,
    ChallengeStatus,
    ChallengeUpdate,
)
from gymsmash.services.activity_service import load_user_logs
from gymsmash.services.challenges import (
    challenge_progress,
    participant_counts,
    partition_challenges,
    progress_percent,
)
from gymsmash.utils.auth import get_current_admin, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/challenges", tags=["Challenges"])


@router.get("", response_model=ChallengeListResponse)
async def list_challenges(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Running and upcoming challenges.

    The caller's progress in every joined challenge is recalculated from
    their workout logs.
    """
    result = await db.execute(
        select(Challenge).where(Challenge.is_active == True).order_by(Challenge.start_date)
    )
    board = partition_challenges(result.scalars().all())
    shown = board.active + board.upcoming

    participants = []
    if shown:
        rows = await db.execute(
            select(ChallengeParticipant).where(
                ChallengeParticipant.challenge_id.in_([c.id for c in shown])
            )
        )
        participants = rows.scalars().all()
    counts = participant_counts(participants)
    mine = {p.challenge_id: p for p in participants if p.user_id == current_user.id}

    logs = await load_user_logs(db, current_user.id) if mine else []

    def status_for(challenge: Challenge) -> ChallengeStatus:
        participant = mine.get(challenge.id)
        if participant is None:
            return ChallengeStatus(
                challenge=ChallengeResponse.model_validate(challenge),
                participant_count=counts.get(challenge.id, 0),
                joined=False,
            )

        participant.progress = challenge_progress(challenge, logs)
        participant.completed = participant.progress >= challenge.target_value
        return ChallengeStatus(
            challenge=ChallengeResponse.model_validate(challenge),
            participant_count=counts.get(challenge.id, 0),
            joined=True,
            progress=participant.progress,
            progress_percent=progress_percent(participant.progress, challenge.target_value),
            completed=participant.completed,
        )

    response = ChallengeListResponse(
        active=[status_for(c) for c in board.active],
        upcoming=[status_for(c) for c in board.upcoming],
    )
    await db.flush()
    return response


@router.post(
    "/{challenge_id}/join",
    response_model=ChallengeParticipantResponse,
    status_code=status.HTTP_201_CREATED,
)
async def join_challenge(
    challenge_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Join a challenge."""
    challenge = await db.get(Challenge, challenge_id)
    if not challenge or not challenge.is_active:
        raise HTTPException(status_code=404, detail="Challenge not found")

    existing = await db.execute(
        select(ChallengeParticipant).where(
            ChallengeParticipant.challenge_id == challenge_id,
            ChallengeParticipant.user_id == current_user.id,
        )
    )
    if existing.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Already joined this challenge",
        )

    participant = ChallengeParticipant(
        challenge_id=challenge_id,
        user_id=current_user.id,
        progress=0.0,
        completed=False,
    )
    db.add(participant)
    await db.flush()

    logger.info(f"User {current_user.id} joined challenge {challenge_id}")
    return participant


@router.post("", response_model=ChallengeResponse, status_code=status.HTTP_201_CREATED)
async def create_challenge(
    challenge_data: ChallengeCreate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """Create a challenge."""
    challenge = Challenge(**challenge_data.model_dump())
    db.add(challenge)
    await db.flush()
    await db.refresh(challenge)
    return challenge


@router.put("/{challenge_id}", response_model=ChallengeResponse)
async def update_challenge(
    challenge_id: UUID,
    updates: ChallengeUpdate,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """Update a challenge."""
    challenge = await db.get(Challenge, challenge_id)
    if not challenge:
        raise HTTPException(status_code=404, detail="Challenge not found")

    for field, value in updates.model_dump(exclude_unset=True).items():
        setattr(challenge, field, value)

    if challenge.end_date < challenge.start_date:
        raise HTTPException(status_code=400, detail="end_date must not be before start_date")

    await db.flush()
    await db.refresh(challenge)
    return challenge


@router.delete("/{challenge_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_challenge(
    challenge_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    """Delete a challenge and its participants."""
    challenge = await db.get(Challenge, challenge_id)
    if not challenge:
        raise HTTPException(status_code=404, detail="Challenge not found")

    await db.delete(challenge)
