"""Plans, checkout, Stripe webhooks and student verification."""
import logging
from typing import List

import stripe
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from gymsmash.config import get_settings
from gymsmash.models.base import get_db
from gymsmash.models.billing import PlanType, PricingConfig, SpecialOffer
from gymsmash.models.user import User
from gymsmash.schemas.billing import (
    CheckoutRequest,
    CheckoutResponse,
    PlanOffer,
    PortalResponse,
    PricingConfigResponse,
    SpecialOfferResponse,
    StudentCodeRequest,
    StudentVerifyRequest,
)
from gymsmash.schemas.user import UserResponse
from gymsmash.services.email_service import email_service
from gymsmash.services.pricing import (
    STUDENT_EMAIL_SUBJECT,
    VerificationError,
    apply_offer,
    complete_student_verification,
    find_offer,
    offer_is_live,
    start_student_verification,
)
from gymsmash.services.stripe_service import BillingError, StripeService, handle_webhook_event
from gymsmash.utils.auth import get_current_user

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/billing", tags=["Billing"])


def _stripe() -> StripeService:
    try:
        return StripeService()
    except BillingError as e:
        raise HTTPException(status_code=503, detail=str(e))


async def _load_offers(db: AsyncSession) -> List[SpecialOffer]:
    result = await db.execute(select(SpecialOffer).where(SpecialOffer.is_active == True))
    return list(result.scalars().all())


@router.get("/plans", response_model=List[PlanOffer])
async def list_plans(db: AsyncSession = Depends(get_db)):
    """Active plans with the best live offer applied."""
    result = await db.execute(
        select(PricingConfig)
        .where(PricingConfig.is_active == True)
        .order_by(PricingConfig.price_monthly)
    )
    plans = result.scalars().all()
    offers = await _load_offers(db)

    response = []
    for plan in plans:
        offer = find_offer(offers, plan)
        response.append(PlanOffer(
            plan=PricingConfigResponse.model_validate(plan),
            offer_id=offer.id if offer else None,
            banner_text=offer.banner_text if offer else None,
            discounted_price_monthly=apply_offer(plan.price_monthly, offer),
        ))
    return response


@router.get("/offers", response_model=List[SpecialOfferResponse])
async def list_live_offers(db: AsyncSession = Depends(get_db)):
    """Offers running today, for banners."""
    return [o for o in await _load_offers(db) if offer_is_live(o)]


@router.post("/checkout", response_model=CheckoutResponse)
async def create_checkout(
    request: CheckoutRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Start a Stripe Checkout session for a plan."""
    plan = await db.get(PricingConfig, request.plan_id)
    if not plan or not plan.is_active:
        raise HTTPException(status_code=404, detail="Plan not found")

    if plan.plan_type == PlanType.STUDENT and not current_user.student_verified:
        raise HTTPException(
            status_code=403,
            detail="Verify your student email to use the student plan",
        )

    offer = find_offer(await _load_offers(db), plan, request.promo_code)
    if request.promo_code and offer is None:
        raise HTTPException(status_code=400, detail="Promo code is not valid for this plan")

    service = _stripe()
    try:
        url = service.create_checkout_session(user=current_user, plan=plan, offer=offer)
    except BillingError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except stripe.StripeError as e:
        logger.error(f"Stripe checkout failed for user {current_user.id}: {e}")
        raise HTTPException(status_code=502, detail="Payment provider error")

    return CheckoutResponse(checkout_url=url)


@router.post("/portal", response_model=PortalResponse)
async def create_portal(current_user: User = Depends(get_current_user)):
    """Open the Stripe customer portal to manage or cancel a subscription."""
    service = _stripe()
    try:
        url = service.create_portal_session(user=current_user)
    except BillingError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except stripe.StripeError as e:
        logger.error(f"Stripe portal failed for user {current_user.id}: {e}")
        raise HTTPException(status_code=502, detail="Payment provider error")

    return PortalResponse(portal_url=url)


@router.post("/webhook")
async def stripe_webhook(request: Request, db: AsyncSession = Depends(get_db)):
    """Receive Stripe events; the signature is checked before anything changes."""
    payload = await request.body()
    sig_header = request.headers.get("stripe-signature", "")

    service = _stripe()
    try:
        event = service.construct_event(payload=payload, sig_header=sig_header)
    except (BillingError, ValueError, stripe.SignatureVerificationError) as e:
        logger.warning(f"Rejected Stripe webhook: {e}")
        raise HTTPException(status_code=400, detail="Invalid webhook")

    await handle_webhook_event(db, event)
    return {"received": True}


@router.post("/student/send-code")
async def send_student_code(
    request: StudentCodeRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Email a six-digit code to a student address."""
    try:
        code = start_student_verification(
            current_user, request.student_email, settings.student_code_expire_minutes
        )
    except VerificationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    await db.flush()
    sent = await email_service.send_student_code(request.student_email, code, STUDENT_EMAIL_SUBJECT)
    logger.info(f"Student code issued for user {current_user.id} (emailed: {sent})")

    return {
        "message": "Verification code sent",
        "expires_in_minutes": settings.student_code_expire_minutes,
    }


@router.post("/student/verify", response_model=UserResponse)
async def verify_student(
    request: StudentVerifyRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Confirm the emailed code and unlock the student plan."""
    try:
        complete_student_verification(current_user, request.code)
    except VerificationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    await db.flush()
    await db.refresh(current_user)
    return current_user
