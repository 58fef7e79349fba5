"""Tests for pricing, offers, trials, student verification and Stripe events."""
import uuid
from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from gymsmash.models.billing import BillingPeriod, DiscountType, PlanType, PricingConfig, SpecialOffer
from gymsmash.models.user import SubscriptionTier, User
from gymsmash.schemas.billing import PricingConfigUpdate, SpecialOfferUpdate
from gymsmash.services.pricing import (
    VerificationError,
    apply_offer,
    complete_student_verification,
    find_offer,
    generate_verification_code,
    grant_trial,
    is_student_email,
    offer_is_live,
    start_student_verification,
)
from gymsmash.services.stripe_service import (
    apply_checkout_completed,
    apply_subscription_deleted,
    apply_subscription_updated,
    tier_for_subscription_status,
)

TODAY = date(2026, 10, 19)
NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def make_user(**overrides):
    values = dict(
        id=uuid.uuid4(),
        email="member@example.com",
        subscription_tier=SubscriptionTier.FREE,
        trial_end_date=None,
        student_verified=False,
    )
    values.update(overrides)
    return User(**values)


def make_plan(plan_type=PlanType.STANDARD, price=10.0):
    return PricingConfig(
        id=uuid.uuid4(),
        plan_type=plan_type,
        plan_name="Standard",
        price_monthly=price,
        billing_period=BillingPeriod.MONTHLY,
        is_active=True,
    )


def make_offer(discount_type=DiscountType.PERCENTAGE, value=20, plans=None, code=None,
               start=None, end=None, active=True):
    return SpecialOffer(
        id=uuid.uuid4(),
        offer_name="Offer",
        discount_type=discount_type,
        discount_value=value,
        applies_to_plans=plans or ["all"],
        promo_code=code,
        start_date=start,
        end_date=end,
        is_active=active,
    )


class TestOffers:
    """Tests for special offer selection and discounts."""

    def test_percentage_discount(self):
        """Test a percentage offer."""
        assert apply_offer(9.99, make_offer(value=20)) == 7.99

    def test_fixed_discount_not_negative(self):
        """Test fixed discounts never go below zero."""
        assert apply_offer(5.0, make_offer(DiscountType.FIXED, 3)) == 2.0
        assert apply_offer(5.0, make_offer(DiscountType.FIXED, 8)) == 0.0

    def test_no_offer(self):
        """Test the price is unchanged without an offer."""
        assert apply_offer(9.999, None) == 10.0

    def test_live_window(self):
        """Test date windows are inclusive and open-ended."""
        assert offer_is_live(make_offer(start=TODAY, end=TODAY), TODAY)
        assert offer_is_live(make_offer(), TODAY)
        assert not offer_is_live(make_offer(start=TODAY + timedelta(days=1)), TODAY)
        assert not offer_is_live(make_offer(end=TODAY - timedelta(days=1)), TODAY)
        assert not offer_is_live(make_offer(active=False), TODAY)

    def test_best_codeless_offer_wins(self):
        """Test the lowest price among codeless offers is chosen."""
        small = make_offer(value=10)
        big = make_offer(value=30)
        coded = make_offer(value=90, code="SECRET")

        assert find_offer([small, big, coded], make_plan(), today=TODAY) is big

    def test_plan_restriction(self):
        """Test offers only apply to their plans."""
        student_only = make_offer(plans=["student"])

        assert find_offer([student_only], make_plan(), today=TODAY) is None
        assert find_offer([student_only], make_plan(PlanType.STUDENT), today=TODAY) is student_only

    def test_promo_code_case_insensitive(self):
        """Test promo codes match regardless of case."""
        coded = make_offer(code="SMASH50")

        assert find_offer([coded], make_plan(), "smash50", TODAY) is coded
        assert find_offer([coded], make_plan(), "other", TODAY) is None


class TestTrials:
    """Tests for premium trials."""

    def test_grants_trial_without_changing_tier(self):
        """Test trials set an end date only."""
        user = make_user()

        assert grant_trial(user, 7, TODAY)
        assert user.trial_end_date == TODAY + timedelta(days=7)
        assert user.subscription_tier == SubscriptionTier.FREE

    def test_longer_trial_kept(self):
        """Test a shorter trial does not cut a longer one."""
        user = make_user(trial_end_date=TODAY + timedelta(days=90))

        assert not grant_trial(user, 7, TODAY)
        assert user.trial_end_date == TODAY + timedelta(days=90)

    def test_premium_members_skipped(self):
        """Test paying members are not given trials."""
        user = make_user(subscription_tier=SubscriptionTier.PREMIUM)

        assert not grant_trial(user, 7, TODAY)
        assert user.trial_end_date is None

    def test_has_premium(self):
        """Test premium comes from the tier or a running trial."""
        assert make_user(subscription_tier=SubscriptionTier.PREMIUM).has_premium
        assert make_user(trial_end_date=date.today()).has_premium
        assert not make_user(trial_end_date=date.today() - timedelta(days=1)).has_premium


class TestStudentVerification:
    """Tests for student email verification."""

    def test_student_domains(self):
        """Test recognised student domains."""
        assert is_student_email("sam@uni.ac.uk")
        assert is_student_email("SAM@STATE.EDU")
        assert not is_student_email("sam@gmail.com")

    def test_code_shape(self):
        """Test codes are six digits without a leading zero."""
        for _ in range(50):
            code = generate_verification_code()
            assert len(code) == 6 and code.isdigit() and code[0] != "0"

    def test_start_rejects_non_student_email(self):
        """Test non-student addresses are rejected."""
        with pytest.raises(VerificationError):
            start_student_verification(make_user(), "sam@gmail.com", 15, NOW)

    def test_full_flow(self):
        """Test a correct code verifies the user and clears the pending code."""
        user = make_user()
        code = start_student_verification(user, "Sam@Uni.ac.uk", 15, NOW)

        complete_student_verification(user, code, NOW + timedelta(minutes=5))

        assert user.student_verified
        assert user.student_email == "sam@uni.ac.uk"
        assert user.student_verification_code is None

    def test_wrong_code(self):
        """Test a wrong code fails."""
        user = make_user()
        code = start_student_verification(user, "sam@uni.ac.uk", 15, NOW)
        wrong = "999999" if code != "999999" else "111111"

        with pytest.raises(VerificationError, match="Invalid"):
            complete_student_verification(user, wrong, NOW)

    def test_expired_code(self):
        """Test an expired code fails."""
        user = make_user()
        code = start_student_verification(user, "sam@uni.ac.uk", 15, NOW)

        with pytest.raises(VerificationError, match="expired"):
            complete_student_verification(user, code, NOW + timedelta(minutes=16))
        assert not user.student_verified


class TestStripeEvents:
    """Tests for mirroring Stripe events onto users."""

    def test_checkout_completed(self):
        """Test a completed checkout upgrades the user."""
        user = make_user()

        apply_checkout_completed(user, {"customer": "cus_1", "subscription": "sub_1"})

        assert user.subscription_tier == SubscriptionTier.PREMIUM
        assert user.stripe_customer_id == "cus_1"
        assert user.stripe_subscription_id == "sub_1"

    def test_status_mapping(self):
        """Test only active and trialing subscriptions are premium."""
        assert tier_for_subscription_status("active") == SubscriptionTier.PREMIUM
        assert tier_for_subscription_status("trialing") == SubscriptionTier.PREMIUM
        assert tier_for_subscription_status("past_due") == SubscriptionTier.FREE
        assert tier_for_subscription_status(None) == SubscriptionTier.FREE

    def test_subscription_updated(self):
        """Test status changes update the tier."""
        user = make_user(subscription_tier=SubscriptionTier.PREMIUM)

        apply_subscription_updated(user, {"id": "sub_1", "status": "unpaid"})

        assert user.subscription_tier == SubscriptionTier.FREE
        assert user.subscription_status == "unpaid"

    def test_subscription_deleted_records_feedback(self):
        """Test cancellation feedback is stored on the user."""
        user = make_user(subscription_tier=SubscriptionTier.PREMIUM)

        apply_subscription_deleted(user, {
            "status": "canceled",
            "cancellation_details": {"feedback": "too_expensive", "comment": "Pricey"},
        })

        assert user.subscription_tier == SubscriptionTier.FREE
        assert user.cancellation_reason == "too_expensive"
        assert user.cancellation_comment == "Pricey"
        assert user.cancelled_at is not None

    def test_subscription_deleted_without_feedback(self):
        """Test a missing reason is recorded as not_provided."""
        user = make_user()

        apply_subscription_deleted(user, {})

        assert user.cancellation_reason == "not_provided"
        assert user.subscription_status == "canceled"


class TestAdminUpdates:
    """Tests for partial plan and offer updates."""

    def test_required_fields_cannot_be_null(self):
        """Test an explicit null is refused for required columns."""
        with pytest.raises(ValidationError):
            SpecialOfferUpdate(offer_name=None)
        with pytest.raises(ValidationError):
            PricingConfigUpdate.model_validate({"price_monthly": None})

    def test_optional_fields_can_be_cleared(self):
        """Test nullable fields accept null and omitted fields stay unset."""
        update = SpecialOfferUpdate.model_validate({"promo_code": None, "end_date": None})

        assert update.model_dump(exclude_unset=True) == {"promo_code": None, "end_date": None}
