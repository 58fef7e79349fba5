"""Tests for tokens, magic links and upload file names."""
import uuid
from datetime import datetime, timedelta, timezone

from gymsmash.services.auth_service import AuthService, _magic_links
from gymsmash.services.media_storage import public_url, safe_filename


class TestTokens:
    """Tests for JWT access and refresh tokens."""

    def test_token_pair_round_trip(self):
        """Test a token pair decodes to the same user."""
        service = AuthService()
        user_id = uuid.uuid4()

        pair = service.create_token_pair(user_id, "member@example.com")
        payload = service.verify_token(pair.access_token)

        assert payload.sub == str(user_id)
        assert payload.email == "member@example.com"
        assert pair.token_type == "bearer"
        assert pair.user_id == str(user_id)

    def test_refresh_token_not_accepted_as_access(self):
        """Test token types are enforced."""
        service = AuthService()
        refresh = service.create_refresh_token(uuid.uuid4(), "member@example.com")

        assert service.verify_token(refresh, expected_type="access") is None
        assert service.verify_token(refresh, expected_type="refresh") is not None

    def test_expired_token(self):
        """Test expired tokens are rejected."""
        service = AuthService()
        token = service.create_access_token(
            uuid.uuid4(), "member@example.com", expires_delta=timedelta(seconds=-1)
        )

        assert service.verify_token(token) is None

    def test_garbage_token(self):
        """Test malformed tokens are rejected."""
        assert AuthService().verify_token("not-a-token") is None


class TestMagicLinks:
    """Tests for one-time magic link tokens."""

    def test_token_is_single_use(self):
        """Test a magic link works once and lowercases the email."""
        service = AuthService()
        token = service.create_magic_link_token("Member@Example.com")

        assert service.verify_magic_link_token(token) == "member@example.com"
        assert service.verify_magic_link_token(token) is None

    def test_expired_magic_link(self):
        """Test an expired magic link is rejected."""
        service = AuthService()
        token = service.create_magic_link_token("member@example.com")
        _magic_links[token]["expires"] = datetime.now(timezone.utc) - timedelta(seconds=1)

        assert service.verify_magic_link_token(token) is None

    def test_link_url_contains_token(self):
        """Test the emailed link carries the token."""
        service = AuthService()

        assert service.get_magic_link_url("abc").endswith("?token=abc")


class TestUploadNames:
    """Tests for stored file names."""

    def test_unsafe_characters_replaced(self):
        """Test path parts and odd characters are stripped."""
        assert safe_filename("../../etc/pass wd.jpg") == "pass_wd.jpg"
        assert safe_filename("clip (1).webm") == "clip__1_.webm"

    def test_default_name(self):
        """Test empty names fall back to the default."""
        assert safe_filename(None) == "upload.bin"
        assert safe_filename("") == "upload.bin"

    def test_long_names_truncated(self):
        """Test names are capped in length."""
        assert len(safe_filename("a" * 500 + ".jpg")) == 180

    def test_public_url(self):
        """Test public URLs join the base, mount path and file."""
        assert public_url("user/file.jpg").endswith("/media/files/user/file.jpg")
