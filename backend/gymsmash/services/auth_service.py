"""Authentication service for JWT and magic link authentication."""
import secrets
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

import jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gymsmash.config import get_settings
from gymsmash.models.user import User
from gymsmash.schemas.auth import TokenResponse, TokenPayload

logger = logging.getLogger(__name__)
settings = get_settings()

# In-memory magic link storage
# Format: {token: {email: str, expires: datetime}}
_magic_links: dict[str, dict] = {}


class AuthService:
    """Service for handling authentication."""

    def __init__(self):
        """Initialize auth service."""
        self.secret_key = settings.jwt_secret_key
        self.algorithm = settings.jwt_algorithm
        self.access_token_expire = timedelta(minutes=settings.jwt_access_token_expire_minutes)
        self.refresh_token_expire = timedelta(days=settings.jwt_refresh_token_expire_days)
        self.magic_link_expire = timedelta(minutes=settings.magic_link_expire_minutes)

    def _encode(self, user_id: UUID, email: str, token_type: str, lifetime: timedelta) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "email": email,
            "exp": now + lifetime,
            "iat": now,
            "type": token_type,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def create_access_token(
        self,
        user_id: UUID,
        email: str,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create a JWT access token.

        Args:
            user_id: User's UUID
            email: User's email
            expires_delta: Optional custom expiration time

        Returns:
            Encoded JWT token
        """
        return self._encode(user_id, email, "access", expires_delta or self.access_token_expire)

    def create_refresh_token(self, user_id: UUID, email: str) -> str:
        """Create a JWT refresh token."""
        return self._encode(user_id, email, "refresh", self.refresh_token_expire)

    def create_token_pair(self, user_id: UUID, email: str) -> TokenResponse:
        """Issue the access/refresh pair returned after sign in."""
        return TokenResponse(
            access_token=self.create_access_token(user_id, email),
            refresh_token=self.create_refresh_token(user_id, email),
            expires_in=int(self.access_token_expire.total_seconds()),
            user_id=str(user_id),
        )

    def verify_token(self, token: str, expected_type: str = "access") -> Optional[TokenPayload]:
        """
        Verify and decode a JWT token.

        Args:
            token: The JWT token to verify
            expected_type: Expected token type ("access" or "refresh")

        Returns:
            Decoded token payload or None if invalid
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
            )
        except jwt.ExpiredSignatureError:
            logger.warning("Token expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid token: {e}")
            return None

        if payload.get("type") != expected_type:
            logger.warning(f"Token type mismatch: expected {expected_type}")
            return None

        return TokenPayload(
            sub=payload["sub"],
            email=payload["email"],
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            type=payload["type"],
        )

    def create_magic_link_token(self, email: str) -> str:
        token = secrets.token_urlsafe(32)
        _magic_links[token] = {
            "email": email.lower(),
            "expires": datetime.now(timezone.utc) + self.magic_link_expire,
        }

        self._cleanup_expired_magic_links()

        return token

    def verify_magic_link_token(self, token: str) -> Optional[str]:
        """
        Consume a magic link token and return the associated email.

        Returns:
            Email address if valid, None otherwise
        """
        link_data = _magic_links.pop(token, None)

        if not link_data:
            return None

        if datetime.now(timezone.utc) > link_data["expires"]:
            return None

        return link_data["email"]

    def get_magic_link_url(self, token: str) -> str:
        return f"{settings.magic_link_base_url}?token={token}"

    def _cleanup_expired_magic_links(self):
        """Remove expired magic link tokens."""
        now = datetime.now(timezone.utc)
        expired = [
            token for token, data in _magic_links.items()
            if now > data["expires"]
        ]
        for token in expired:
            del _magic_links[token]

    async def get_or_create_user(self, db: AsyncSession, email: str) -> User:
        """Find the account for a verified email, creating it on first sign in."""
        email = email.lower()

        result = await db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()

        if user:
            if not user.is_verified:
                user.is_verified = True
            return user

        user = User(
            email=email,
            is_verified=True,  # Verified via magic link
        )
        db.add(user)
        await db.flush()
        logger.info(f"Created user {user.id}")

        return user


# Singleton instance
auth_service = AuthService()
