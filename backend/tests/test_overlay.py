"""Tests for capture overlays and admin reports."""
import uuid
from datetime import date, datetime, timezone

from gymsmash.models.user import User
from gymsmash.services.admin_reports import cancellation_breakdown, matches_search
from gymsmash.services.overlay import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    LOGO_MARGIN,
    PHOTO_MIME_TYPE,
    VIDEO_MIME_TYPE,
    before_photo_overlay,
    corner_logo,
    exercise_overlay,
    format_number,
    freestyle_overlay,
    workout_overlay,
)


class TestOverlayLayouts:
    """Tests for overlay layouts."""

    def test_format_number(self):
        """Test numbers drop trailing zeros and group on request."""
        assert format_number(60.0) == "60"
        assert format_number(62.5) == "62.5"
        assert format_number(12500, grouped=True) == "12,500"

    def test_corner_logo(self):
        """Test the logo sits in the top-right corner."""
        logo = corner_logo(1000, 2000, aspect=2.0)

        assert logo.height == 100
        assert logo.width == 200
        assert logo.x == 1000 - 200 - LOGO_MARGIN
        assert logo.y == LOGO_MARGIN

    def test_exercise_overlay(self):
        """Test exercise overlays show name, weight and volume."""
        layout = exercise_overlay("Squat", 60, 3, 10)
        texts = [t.text for t in layout.texts]

        assert layout.width == CANVAS_WIDTH and layout.height == CANVAS_HEIGHT
        assert layout.mirror
        assert layout.output_mime_type == VIDEO_MIME_TYPE
        assert texts[0] == "Smashed It! 💪"
        assert "Squat" in texts
        assert "60kg" in texts
        assert "1800kg" in texts

    def test_workout_overlay(self):
        """Test workout overlays show the session summary."""
        layout = workout_overlay(5, 12500, 48, date(2026, 10, 19))
        texts = [t.text for t in layout.texts]

        assert "12,500kg" in texts
        assert "48 min" in texts
        assert "2026-10-19" in texts

    def test_freestyle_overlay(self):
        """Test freestyle overlays show elapsed time and date as a photo."""
        layout = freestyle_overlay(754, date(2026, 10, 19))
        texts = [t.text for t in layout.texts]

        assert "12:34" in texts
        assert "Oct 19, 2026" in texts
        assert layout.output_mime_type == PHOTO_MIME_TYPE

    def test_before_photo_overlay(self):
        """Test the before photo gets only a faint centred logo."""
        layout = before_photo_overlay(1000, 2000)

        assert layout.texts == []
        assert not layout.mirror
        assert layout.logo.x == (1000 - layout.logo.width) / 2
        assert layout.logo.alpha == 0.5


def make_user(name, email, reason=None, cancelled=False, comment=None):
    return User(
        id=uuid.uuid4(),
        email=email,
        full_name=name,
        cancellation_reason=reason,
        cancellation_comment=comment,
        cancelled_at=datetime(2026, 10, 1, tzinfo=timezone.utc) if cancelled else None,
    )


class TestAdminReports:
    """Tests for admin dashboard aggregations."""

    def test_cancellation_breakdown(self):
        """Test reasons are counted, labelled and sorted by count."""
        users = [
            make_user("A", "a@example.com", "too_expensive", comment="Pricey"),
            make_user("B", "b@example.com", "too_expensive"),
            make_user("C", "c@example.com", cancelled=True),
            make_user("D", "d@example.com"),
        ]

        breakdown = cancellation_breakdown(users)

        assert breakdown.total == 3
        assert breakdown.reasons[0].reason == "too_expensive"
        assert breakdown.reasons[0].label == "Too Expensive"
        assert breakdown.reasons[0].count == 2
        assert breakdown.reasons[0].percent == 66.7
        assert breakdown.reasons[1].reason == "not_provided"
        assert breakdown.comments == ["Pricey"]

    def test_no_cancellations(self):
        """Test an empty breakdown."""
        breakdown = cancellation_breakdown([make_user("A", "a@example.com")])

        assert breakdown.total == 0
        assert breakdown.reasons == []

    def test_search(self):
        """Test search matches name or email case-insensitively."""
        user = make_user("Jordan Lee", "jordan@example.com")

        assert matches_search(user, None)
        assert matches_search(user, "LEE")
        assert matches_search(user, "example.com")
        assert not matches_search(user, "taylor")
