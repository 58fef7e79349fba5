"""Plan pricing, special offers, trials and student verification rules."""
import secrets
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional

from gymsmash.models.billing import DiscountType, PricingConfig, SpecialOffer
from gymsmash.models.user import SubscriptionTier, User


STUDENT_EMAIL_DOMAINS = [
    ".ac.uk",
    ".edu",
    ".edu.au",
    ".edu.sg",
    ".ac.nz",
    ".edu.cn",
    ".ac.jp",
    ".ac.in",
]

STUDENT_EMAIL_SUBJECT = "Gym Smash - Student Verification Code"


class VerificationError(Exception):
    """Raised when a student verification code cannot be accepted."""


def is_student_email(email: str) -> bool:
    return any(email.lower().endswith(domain) for domain in STUDENT_EMAIL_DOMAINS)


def generate_verification_code() -> str:
    """Six-digit code that never starts with zero."""
    return str(100000 + secrets.randbelow(900000))


def start_student_verification(
    user: User,
    student_email: str,
    expire_minutes: int,
    now: Optional[datetime] = None,
) -> str:
    """
    Store a fresh verification code on the user.

    Raises:
        VerificationError: If the address is not on a student domain
    """
    if not is_student_email(student_email):
        raise VerificationError(
            "Please enter a valid student email address (e.g., ending in .ac.uk or .edu)"
        )
    now = now or datetime.now(timezone.utc)
    code = generate_verification_code()
    user.student_verification_code = code
    user.student_verification_email = student_email.lower()
    user.student_verification_expires = now + timedelta(minutes=expire_minutes)
    return code


def complete_student_verification(user: User, code: str, now: Optional[datetime] = None) -> None:
    """
    Check a code and mark the user as a verified student.

    The code is checked before its expiry, so a wrong code is reported as
    invalid even after the code has expired.

    Raises:
        VerificationError: If the code is wrong or has expired
    """
    now = now or datetime.now(timezone.utc)
    if not user.student_verification_code or user.student_verification_code != code:
        raise VerificationError("Invalid verification code. Please try again.")
    if user.student_verification_expires is None or user.student_verification_expires < now:
        raise VerificationError("Verification code has expired. Please request a new one.")

    user.student_verified = True
    user.student_email = user.student_verification_email
    user.student_verified_at = now
    user.student_verification_code = None
    user.student_verification_email = None
    user.student_verification_expires = None


def offer_is_live(offer: SpecialOffer, today: Optional[date] = None) -> bool:
    """Active and within its date window (open-ended on either side)."""
    today = today or date.today()
    if not offer.is_active:
        return False
    if offer.start_date and today < offer.start_date:
        return False
    if offer.end_date and today > offer.end_date:
        return False
    return True


def offer_applies_to(offer: SpecialOffer, plan_type: str) -> bool:
    plans = offer.applies_to_plans or ["all"]
    return "all" in plans or plan_type in plans


def apply_offer(price: float, offer: Optional[SpecialOffer]) -> float:
    """Discounted price, never below zero, rounded to cents."""
    if offer is None:
        return round(price, 2)
    if offer.discount_type == DiscountType.PERCENTAGE:
        discounted = price * (1 - offer.discount_value / 100)
    else:
        discounted = price - offer.discount_value
    return round(max(discounted, 0.0), 2)


def find_offer(
    offers: Iterable[SpecialOffer],
    plan: PricingConfig,
    promo_code: Optional[str] = None,
    today: Optional[date] = None,
) -> Optional[SpecialOffer]:
    """
    Offer to apply to a plan.

    With a promo code only the offer carrying that code qualifies; otherwise
    the live offer giving the lowest price wins.
    """
    candidates = [
        o for o in offers
        if offer_is_live(o, today) and offer_applies_to(o, plan.plan_type)
    ]
    if promo_code:
        code = promo_code.strip().upper()
        return next((o for o in candidates if (o.promo_code or "").upper() == code), None)

    codeless = [o for o in candidates if not o.promo_code]
    if not codeless:
        return None
    return min(codeless, key=lambda o: apply_offer(plan.price_monthly, o))


def grant_trial(user: User, days: int, today: Optional[date] = None) -> bool:
    """
    Give a user premium access for ``days`` days.

    Trials do not change the subscription tier. Paying members and users
    whose trial already runs longer are left alone.

    Returns:
        True if the trial was granted or extended
    """
    today = today or date.today()
    if user.subscription_tier == SubscriptionTier.PREMIUM:
        return False
    end = today + timedelta(days=days)
    if user.trial_end_date and user.trial_end_date >= end:
        return False
    user.trial_end_date = end
    return True
