"""Tests for buddy invites and stickers."""
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from gymsmash.models.social import BuddyMessage, BuddyStatus, StickerType, WorkoutBuddy
from gymsmash.services.buddies import (
    STICKERS,
    BuddyError,
    is_open_pair,
    normalize_invite_email,
    sticker_expiry,
    unexpired,
    unread,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def make_message(expires_at, is_read=False):
    return BuddyMessage(
        id=uuid.uuid4(),
        from_user_id=uuid.uuid4(),
        to_user_id=uuid.uuid4(),
        message_type=StickerType.SMASHED_IT,
        is_read=is_read,
        expires_at=expires_at,
    )


class TestInvites:
    """Tests for invite validation."""

    def test_email_normalised(self):
        """Test the address is trimmed and lowercased."""
        assert normalize_invite_email("me@example.com", "  Pal@Example.COM ") == "pal@example.com"

    def test_self_invite_rejected(self):
        """Test inviting yourself fails regardless of case."""
        with pytest.raises(BuddyError):
            normalize_invite_email("Me@Example.com", "me@example.com")

    def test_empty_rejected(self):
        """Test an empty address fails."""
        with pytest.raises(BuddyError):
            normalize_invite_email("me@example.com", "  ")

    @pytest.mark.parametrize("status,expected", [
        (BuddyStatus.PENDING, True),
        (BuddyStatus.ACCEPTED, True),
        (BuddyStatus.DECLINED, False),
    ])
    def test_open_pair(self, status, expected):
        """Test which invites block a new one."""
        buddy = WorkoutBuddy(user_id=uuid.uuid4(), buddy_email="pal@example.com", status=status)
        assert is_open_pair(buddy) is expected


class TestStickers:
    """Tests for sticker lifetime."""

    def test_expiry(self):
        """Test stickers expire after their lifetime."""
        assert sticker_expiry(24, NOW) == NOW + timedelta(hours=24)

    def test_unexpired_newest_first(self):
        """Test expired stickers are hidden and the rest sorted newest first."""
        old = make_message(NOW + timedelta(hours=1))
        new = make_message(NOW + timedelta(hours=20))
        gone = make_message(NOW - timedelta(minutes=1))

        assert unexpired([old, gone, new], NOW) == [new, old]

    def test_read_stickers_dismissed(self):
        """Test a sticker marked read no longer shows as received."""
        seen = make_message(NOW + timedelta(hours=5), is_read=True)
        fresh = make_message(NOW + timedelta(hours=5))

        assert unread([seen, fresh]) == [fresh]

    def test_every_sticker_has_emoji_and_label(self):
        """Test the sticker catalog covers every type."""
        assert set(STICKERS) == set(StickerType)
