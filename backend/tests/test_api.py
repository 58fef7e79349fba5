"""Smoke tests for the HTTP layer without a database."""
import uuid
from datetime import date, datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from gymsmash.main import app
from gymsmash.models.base import get_db
from gymsmash.models.social import (
    BuddyMessage,
    BuddyStatus,
    Challenge,
    ChallengeParticipant,
    ChallengeType,
    StickerType,
    WorkoutBuddy,
)
from gymsmash.models.user import (
    AgeRange,
    BodyType,
    EquipmentAccess,
    ExperienceLevel,
    Gender,
    PrimaryGoal,
    SubscriptionTier,
    User,
    UserProfile,
    UserRole,
)
from gymsmash.routes import profile as profile_routes
from gymsmash.services import stripe_service
from gymsmash.utils.auth import get_current_user


async def no_db():
    yield None


class FakeResult:
    def __init__(self, rows=()):
        self.rows = list(rows)

    def scalars(self):
        return self

    def all(self):
        return self.rows

    def first(self):
        return self.rows[0] if self.rows else None

    def scalar_one_or_none(self):
        return self.first()


class FakeSession:
    """Answers ``execute`` calls in order and ``get`` calls by primary key."""

    def __init__(self, results=(), objects=None):
        self.results = [FakeResult(rows) for rows in results]
        self.objects = objects or {}
        self.added = []

    async def execute(self, statement):
        return self.results.pop(0) if self.results else FakeResult()

    async def get(self, model, key):
        return self.objects.get(key)

    def add(self, obj):
        self.added.append(obj)

    async def flush(self):
        pass

    async def refresh(self, obj):
        pass

    async def delete(self, obj):
        pass


def make_user(role=UserRole.USER):
    return User(
        id=uuid.uuid4(),
        email="member@example.com",
        role=role,
        is_active=True,
        subscription_tier=SubscriptionTier.FREE,
    )


@pytest.fixture
def client():
    app.dependency_overrides[get_db] = no_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def signed_in(client):
    app.dependency_overrides[get_current_user] = lambda: make_user()
    return client


@pytest.fixture
def with_session(signed_in):
    def install(session):
        async def override():
            yield session
        app.dependency_overrides[get_db] = override
        return signed_in
    return install


class TestPublicEndpoints:
    """Tests for endpoints that need no sign in."""

    def test_health(self, client):
        """Test the health check."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        """Test the root endpoint lists the docs."""
        assert client.get("/").json()["docs"] == "/docs"

    @pytest.mark.parametrize("path", ["/auth/me", "/profile", "/schedules/current", "/workouts/logs"])
    def test_auth_required(self, client, path):
        """Test protected endpoints reject missing tokens."""
        assert client.get(path).status_code == 401

    def test_invalid_token(self, client):
        """Test a bad bearer token is rejected."""
        response = client.get("/auth/me", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401

    def test_magic_link_validation(self, client):
        """Test magic link requests need a valid email."""
        assert client.post("/auth/magic-link", json={"email": "not-an-email"}).status_code == 422


class TestSignedInEndpoints:
    """Tests for endpoints that run without the database."""

    def test_admin_only(self, signed_in):
        """Test members cannot reach admin routes."""
        assert signed_in.get("/admin/users").status_code == 403

    def test_exercise_overlay(self, signed_in):
        """Test an exercise overlay layout is returned."""
        response = signed_in.post("/media/overlay", json={
            "kind": "exercise",
            "exercise_name": "Squat",
            "weight_kg": 60,
            "sets": 3,
            "reps": 10,
        })

        assert response.status_code == 200
        body = response.json()
        assert body["mirror"] is True
        assert "1800kg" in [t["text"] for t in body["texts"]]

    def test_freestyle_overlay(self, signed_in):
        """Test a freestyle overlay uses the given date."""
        response = signed_in.post("/media/overlay", json={
            "kind": "freestyle",
            "elapsed_seconds": 65,
            "workout_date": date(2026, 10, 19).isoformat(),
        })

        assert response.status_code == 200
        assert "1:05" in [t["text"] for t in response.json()["texts"]]

    def test_overlay_requires_inputs(self, signed_in):
        """Test before photo overlays need dimensions."""
        response = signed_in.post("/media/overlay", json={"kind": "before_photo"})

        assert response.status_code == 422

    def test_questionnaire_validation(self, signed_in):
        """Test the questionnaire rejects missing answers."""
        response = signed_in.post("/profile/questionnaire", json={"gender": "male"})

        assert response.status_code == 422


class TestChallengeRoutes:
    """Tests for joining and editing challenges."""

    def test_join_twice_conflicts(self, with_session):
        """Test a second join of the same challenge is refused."""
        challenge_id = uuid.uuid4()
        challenge = Challenge(
            id=challenge_id,
            name="October volume",
            challenge_type=ChallengeType.TOTAL_VOLUME,
            target_value=10000,
            start_date=date(2026, 10, 1),
            end_date=date(2026, 10, 31),
            is_active=True,
        )
        joined = ChallengeParticipant(challenge_id=challenge_id, user_id=uuid.uuid4())
        client = with_session(FakeSession(results=[[joined]], objects={challenge_id: challenge}))

        response = client.post(f"/challenges/{challenge_id}/join")

        assert response.status_code == 409

    @pytest.mark.parametrize("field", ["end_date", "name", "target_value"])
    def test_update_rejects_null(self, signed_in, field):
        """Test required challenge fields cannot be cleared."""
        app.dependency_overrides[get_current_user] = lambda: make_user(UserRole.ADMIN)

        response = signed_in.put(f"/challenges/{uuid.uuid4()}", json={field: None})

        assert response.status_code == 422

    def test_update_allows_clearing_optional_field(self, with_session):
        """Test nullable challenge fields can still be cleared."""
        challenge_id = uuid.uuid4()
        challenge = Challenge(
            id=challenge_id,
            name="Squat month",
            description="Squat as often as you can",
            challenge_type=ChallengeType.WORKOUT_COUNT,
            target_value=12,
            reward_points=0,
            start_date=date(2026, 10, 1),
            end_date=date(2026, 10, 31),
            is_active=True,
            created_at=datetime(2026, 9, 30, tzinfo=timezone.utc),
        )
        client = with_session(FakeSession(objects={challenge_id: challenge}))
        app.dependency_overrides[get_current_user] = lambda: make_user(UserRole.ADMIN)

        response = client.put(f"/challenges/{challenge_id}", json={"description": None})

        assert response.status_code == 200
        assert challenge.description is None


class TestBuddyRoutes:
    """Tests for invites and stickers."""

    def test_duplicate_invite_conflicts(self, with_session):
        """Test inviting someone with an open invite is refused."""
        pending = WorkoutBuddy(
            user_id=uuid.uuid4(),
            buddy_email="pal@example.com",
            status=BuddyStatus.PENDING,
        )
        client = with_session(FakeSession(results=[[pending]]))

        response = client.post("/buddies/invite", json={"buddy_email": "pal@example.com"})

        assert response.status_code == 409

    def test_sticker_needs_accepted_buddy(self, with_session):
        """Test stickers can only go to accepted buddies."""
        client = with_session(FakeSession(results=[[]]))

        response = client.post("/buddies/messages", json={
            "to_user_id": str(uuid.uuid4()),
            "message_type": "fire",
        })

        assert response.status_code == 403

    def test_read_stickers_not_received(self, with_session):
        """Test a dismissed sticker no longer comes back."""
        now = datetime.now(timezone.utc)

        def sticker(is_read):
            return BuddyMessage(
                id=uuid.uuid4(),
                from_user_id=uuid.uuid4(),
                to_user_id=uuid.uuid4(),
                message_type=StickerType.FIRE,
                is_read=is_read,
                expires_at=now + timedelta(hours=2),
                created_at=now,
            )

        fresh = sticker(False)
        client = with_session(FakeSession(results=[[sticker(True), fresh]]))

        response = client.get("/buddies/messages/received")

        assert response.status_code == 200
        assert [m["id"] for m in response.json()] == [str(fresh.id)]


class TestQuestionnaireRoute:
    """Tests for retaking the questionnaire."""

    ANSWERS = {
        "gender": "female",
        "age_range": "26-35",
        "experience_level": "intermediate",
        "body_type": "athletic",
        "target_zone": ["legs", "glutes"],
        "primary_goal": "build_muscle",
        "available_days": ["monday", "wednesday", "friday"],
        "equipment_access": "full_gym",
    }

    def test_resubmit_keeps_rotation(self, with_session, monkeypatch):
        """Test retaking the questionnaire keeps the rotation cycle and clears a decline."""
        now = datetime(2026, 10, 1, tzinfo=timezone.utc)
        profile = UserProfile(
            id=uuid.uuid4(),
            user_id=uuid.uuid4(),
            gender=Gender.MALE,
            age_range=AgeRange.UNDER_25,
            experience_level=ExperienceLevel.BEGINNER,
            body_type=BodyType.SLIM,
            target_zone=["arms"],
            primary_goal=PrimaryGoal.TONE_BODY,
            available_days=["tuesday"],
            equipment_access=EquipmentAccess.BODYWEIGHT_ONLY,
            current_rotation_cycle=3,
            last_rotation_date=date(2026, 9, 1),
            declined_current_rotation=True,
            created_at=now,
            updated_at=now,
        )
        cycles = []

        async def fake_generate(db, user, saved_profile, *args, **kwargs):
            cycles.append(saved_profile.current_rotation_cycle)

        monkeypatch.setattr(profile_routes, "generate_schedule", fake_generate)
        client = with_session(FakeSession(results=[[profile]]))

        response = client.post("/profile/questionnaire", json=self.ANSWERS)

        assert response.status_code == 200
        body = response.json()
        assert body["profile"]["current_rotation_cycle"] == 3
        assert body["profile"]["declined_current_rotation"] is False
        assert body["profile"]["primary_goal"] == "build_muscle"
        assert body["schedule_generated"] is True
        assert body["trial_granted"] is False
        assert cycles == [3]


class TestStripeWebhook:
    """Tests for webhook signature checks."""

    def test_bad_signature_rejected(self, client, monkeypatch):
        """Test an unsigned event is refused before anything changes."""
        monkeypatch.setattr(stripe_service.settings, "stripe_secret_key", "sk_test_gymsmash")
        monkeypatch.setattr(stripe_service.settings, "stripe_webhook_secret", "whsec_gymsmash")

        response = client.post(
            "/billing/webhook",
            content=b'{"type": "checkout.session.completed"}',
            headers={"stripe-signature": "t=1700000000,v1=deadbeef"},
        )

        assert response.status_code == 400
