"""Authentication routes."""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from gymsmash.config import get_settings
from gymsmash.models.base import get_db
from gymsmash.models.user import User
from gymsmash.schemas.auth import (
    MagicLinkRequest,
    MagicLinkVerify,
    TokenResponse,
    RefreshTokenRequest,
)
from gymsmash.schemas.user import UserResponse, UserUpdate
from gymsmash.services.auth_service import auth_service
from gymsmash.services.email_service import email_service
from gymsmash.utils.auth import get_current_user

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/magic-link", status_code=status.HTTP_200_OK)
async def request_magic_link(request: MagicLinkRequest):
    """
    Request a magic link for email authentication.

    The link will be sent to the provided email address.
    """
    token = auth_service.create_magic_link_token(request.email)
    magic_link_url = auth_service.get_magic_link_url(token)

    sent = await email_service.send_magic_link(request.email, magic_link_url)

    response = {"message": "Magic link sent to your email"}
    if settings.debug and not sent:
        response["debug_link"] = magic_link_url
    return response


@router.post("/verify", response_model=TokenResponse)
async def verify_magic_link(
    request: MagicLinkVerify,
    db: AsyncSession = Depends(get_db),
):
    """
    Verify a magic link token and return authentication tokens.
    """
    email = auth_service.verify_magic_link_token(request.token)

    if not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired magic link",
        )

    user = await auth_service.get_or_create_user(db, email)
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is disabled",
        )
    return auth_service.create_token_pair(user.id, user.email)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(request: RefreshTokenRequest):
    """
    Refresh an access token using a refresh token.
    """
    payload = auth_service.verify_token(request.refresh_token, expected_type="refresh")

    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )

    return auth_service.create_token_pair(UUID(payload.sub), payload.email)


@router.post("/logout")
async def logout():
    """
    Log out the current user.

    Tokens are stateless; the client discards them.
    """
    return {"message": "Logged out successfully"}


@router.get("/validate")
async def validate_token(
    current_user: User = Depends(get_current_user),
):
    """
    Validate the current auth token.

    Returns user info if token is valid, 401 if invalid/expired.
    """
    return {
        "valid": True,
        "user_id": str(current_user.id),
        "email": current_user.email,
    }


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the signed-in account."""
    return current_user


@router.put("/me", response_model=UserResponse)
async def update_me(
    updates: UserUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update the signed-in account."""
    update_data = updates.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(current_user, field, value)

    await db.flush()
    await db.refresh(current_user)

    return current_user
