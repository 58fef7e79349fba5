"""Stripe checkout, customer portal and webhook handling."""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

import stripe
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gymsmash.config import get_settings
from gymsmash.models.billing import PricingConfig, SpecialOffer
from gymsmash.models.user import SubscriptionTier, User

logger = logging.getLogger(__name__)
settings = get_settings()


class BillingError(Exception):
    """Raised when a billing operation cannot proceed."""


@dataclass(frozen=True)
class StripeConfig:
    secret_key: str
    webhook_secret: Optional[str]
    checkout_success_url: str
    checkout_cancel_url: str
    portal_return_url: str


def _get_stripe_config() -> StripeConfig:
    """Load Stripe config from settings; billing endpoints fail closed without a key."""
    if not settings.stripe_secret_key:
        raise BillingError("Stripe not configured (missing: STRIPE_SECRET_KEY)")

    base = settings.web_app_base_url.rstrip("/")
    return StripeConfig(
        secret_key=settings.stripe_secret_key,
        webhook_secret=settings.stripe_webhook_secret,
        checkout_success_url=settings.stripe_checkout_success_url or f"{base}/account?checkout=success",
        checkout_cancel_url=settings.stripe_checkout_cancel_url or f"{base}/account?checkout=cancel",
        portal_return_url=settings.stripe_portal_return_url or f"{base}/account",
    )


def tier_for_subscription_status(status: Optional[str]) -> SubscriptionTier:
    """Only active and trialing subscriptions are premium."""
    if (status or "").lower() in ("active", "trialing"):
        return SubscriptionTier.PREMIUM
    return SubscriptionTier.FREE


def apply_checkout_completed(user: User, session: dict) -> None:
    user.subscription_tier = SubscriptionTier.PREMIUM
    user.subscription_status = "active"
    user.stripe_customer_id = session.get("customer") or user.stripe_customer_id
    user.stripe_subscription_id = session.get("subscription") or user.stripe_subscription_id
    user.cancelled_at = None


def apply_subscription_updated(user: User, subscription: dict) -> None:
    status = subscription.get("status")
    user.subscription_status = status
    user.subscription_tier = tier_for_subscription_status(status)
    user.stripe_subscription_id = subscription.get("id") or user.stripe_subscription_id


def apply_subscription_deleted(user: User, subscription: dict) -> None:
    """Downgrade and record why the member left."""
    details = subscription.get("cancellation_details") or {}
    user.subscription_tier = SubscriptionTier.FREE
    user.subscription_status = subscription.get("status") or "canceled"
    user.cancelled_at = datetime.now(timezone.utc)
    user.cancellation_reason = details.get("feedback") or "not_provided"
    user.cancellation_comment = details.get("comment")


class StripeService:
    """Thin wrapper over the Stripe SDK."""

    def __init__(self) -> None:
        cfg = _get_stripe_config()
        stripe.api_key = cfg.secret_key
        self.cfg = cfg

    def create_checkout_session(
        self,
        *,
        user: User,
        plan: PricingConfig,
        offer: Optional[SpecialOffer] = None,
    ) -> str:
        """
        Create a subscription Checkout session for a plan.

        Args:
            user: Buyer
            plan: Plan with a Stripe price
            offer: Offer whose Stripe coupon should be applied

        Returns:
            Hosted checkout URL
        """
        if not plan.stripe_price_id:
            raise BillingError(f"Plan {plan.plan_name} has no Stripe price")

        params: dict[str, Any] = {
            "mode": "subscription",
            "success_url": self.cfg.checkout_success_url,
            "cancel_url": self.cfg.checkout_cancel_url,
            "line_items": [{"price": plan.stripe_price_id, "quantity": 1}],
            "client_reference_id": str(user.id),
            "metadata": {"user_id": str(user.id), "plan_type": plan.plan_type.value},
        }
        if offer is not None and offer.stripe_coupon_id:
            params["discounts"] = [{"coupon": offer.stripe_coupon_id}]
        else:
            params["allow_promotion_codes"] = True

        if user.stripe_customer_id:
            params["customer"] = user.stripe_customer_id
        else:
            params["customer_email"] = user.email

        session = stripe.checkout.Session.create(**params)
        logger.info(f"Created checkout session for user {user.id} on plan {plan.plan_type.value}")
        return str(session.url)

    def create_portal_session(self, *, user: User) -> str:
        if not user.stripe_customer_id:
            raise BillingError("No Stripe customer for this account")
        session = stripe.billing_portal.Session.create(
            customer=user.stripe_customer_id,
            return_url=self.cfg.portal_return_url,
        )
        return str(session.url)

    def apply_coupon(self, *, subscription_id: str, coupon_id: str) -> None:
        stripe.Subscription.modify(subscription_id, discounts=[{"coupon": coupon_id}])
        logger.info(f"Applied coupon {coupon_id} to subscription {subscription_id}")

    def construct_event(self, *, payload: bytes, sig_header: str):
        if not self.cfg.webhook_secret:
            raise BillingError("Stripe webhook secret not configured")
        return stripe.Webhook.construct_event(
            payload=payload,
            sig_header=sig_header,
            secret=self.cfg.webhook_secret,
        )


async def _find_user(db: AsyncSession, obj: dict) -> Optional[User]:
    reference = obj.get("client_reference_id") or (obj.get("metadata") or {}).get("user_id")
    if reference:
        try:
            result = await db.execute(select(User).where(User.id == UUID(reference)))
        except ValueError:
            logger.warning(f"Ignoring malformed user reference {reference}")
        else:
            user = result.scalar_one_or_none()
            if user:
                return user

    customer = obj.get("customer")
    if customer:
        result = await db.execute(select(User).where(User.stripe_customer_id == customer))
        return result.scalar_one_or_none()
    return None


async def handle_webhook_event(db: AsyncSession, event: dict) -> bool:
    """
    Mirror a Stripe event onto the matching user.

    Returns:
        True if the event changed a user
    """
    event_type = event["type"]
    obj = event["data"]["object"]

    handlers = {
        "checkout.session.completed": apply_checkout_completed,
        "customer.subscription.created": apply_subscription_updated,
        "customer.subscription.updated": apply_subscription_updated,
        "customer.subscription.deleted": apply_subscription_deleted,
    }
    handler = handlers.get(event_type)
    if handler is None:
        logger.info(f"Ignoring Stripe event {event_type}")
        return False

    user = await _find_user(db, obj)
    if user is None:
        logger.warning(f"No user found for Stripe event {event_type}")
        return False

    handler(user, obj)
    await db.flush()
    logger.info(f"Processed Stripe event {event_type} for user {user.id}")
    return True
