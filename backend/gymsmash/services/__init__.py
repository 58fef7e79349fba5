"""Backend services."""
from gymsmash.services.auth_service import AuthService
from gymsmash.services.email_service import EmailService
from gymsmash.services.stripe_service import StripeService

__all__ = [
    "AuthService",
    "EmailService",
    "StripeService",
]
