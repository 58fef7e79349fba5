"""Buddy invitation and sticker rules."""
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from gymsmash.models.social import BuddyMessage, BuddyStatus, StickerType, WorkoutBuddy


class BuddyError(Exception):
    """Raised when a buddy action is not allowed."""


STICKERS = {
    StickerType.PROUD_OF_YOU: ("🏆", "Proud of You"),
    StickerType.SMASHED_IT: ("💪", "Smashed It"),
    StickerType.KEEP_GOING: ("🔥", "Keep Going"),
    StickerType.LETS_GO: ("🚀", "Let's Go!"),
    StickerType.FIRE: ("🔥", "On Fire!"),
    StickerType.MUSCLE: ("💪", "Strong!"),
}


def normalize_invite_email(inviter_email: str, buddy_email: Optional[str]) -> str:
    """
    Validate a buddy invite target.

    Raises:
        BuddyError: If the address is empty or is the inviter's own
    """
    email = (buddy_email or "").strip().lower()
    if not email:
        raise BuddyError("Please enter your buddy's email")
    if email == inviter_email.lower():
        raise BuddyError("You can't invite yourself")
    return email


def is_open_pair(buddy: WorkoutBuddy) -> bool:
    """Pending and accepted invites block a duplicate invite."""
    return buddy.status in (BuddyStatus.PENDING, BuddyStatus.ACCEPTED)


def sticker_expiry(lifetime_hours: int, now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now + timedelta(hours=lifetime_hours)


def unexpired(messages: Iterable[BuddyMessage], now: Optional[datetime] = None) -> list[BuddyMessage]:
    """Messages still visible, newest first."""
    now = now or datetime.now(timezone.utc)
    live = [m for m in messages if m.expires_at > now]
    return sorted(live, key=lambda m: m.expires_at, reverse=True)


def unread(messages: Iterable[BuddyMessage]) -> list[BuddyMessage]:
    """Received stickers that have not been dismissed."""
    return [m for m in messages if not m.is_read]
