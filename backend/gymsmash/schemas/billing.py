"""Pricing, offer, checkout and student verification schemas."""
from datetime import date, datetime
from typing import Optional, List
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from gymsmash.models.billing import BillingPeriod, DiscountType, PlanType
from gymsmash.models.user import SubscriptionTier
from gymsmash.schemas.common import PartialUpdate


class PricingConfigBase(BaseModel):
    plan_type: PlanType
    plan_name: str = Field(..., max_length=200)
    price_monthly: float = Field(..., ge=0)
    price_total: Optional[float] = Field(None, ge=0)
    stripe_price_id: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    billing_period: BillingPeriod = BillingPeriod.MONTHLY
    is_active: bool = True


class PricingConfigCreate(PricingConfigBase):
    pass


class PricingConfigUpdate(PartialUpdate):
    not_nullable = ("plan_name", "price_monthly", "billing_period", "is_active")

    plan_name: Optional[str] = Field(None, max_length=200)
    price_monthly: Optional[float] = Field(None, ge=0)
    price_total: Optional[float] = Field(None, ge=0)
    stripe_price_id: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    billing_period: Optional[BillingPeriod] = None
    is_active: Optional[bool] = None


class PricingConfigResponse(PricingConfigBase):
    id: UUID
    created_at: datetime

    class Config:
        from_attributes = True


class PlanOffer(BaseModel):
    """A plan with the best live offer applied."""
    plan: PricingConfigResponse
    offer_id: Optional[UUID] = None
    banner_text: Optional[str] = None
    discounted_price_monthly: float


class SpecialOfferBase(BaseModel):
    offer_name: str = Field(..., max_length=200)
    discount_type: DiscountType
    discount_value: float = Field(..., ge=0)
    applies_to_plans: List[str] = Field(default_factory=lambda: ["all"])
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    promo_code: Optional[str] = Field(None, max_length=50)
    stripe_coupon_id: Optional[str] = Field(None, max_length=100)
    banner_text: Optional[str] = Field(None, max_length=300)
    is_active: bool = True


class SpecialOfferCreate(SpecialOfferBase):
    pass


class SpecialOfferUpdate(PartialUpdate):
    not_nullable = ("offer_name", "discount_type", "discount_value", "applies_to_plans", "is_active")

    offer_name: Optional[str] = Field(None, max_length=200)
    discount_type: Optional[DiscountType] = None
    discount_value: Optional[float] = Field(None, ge=0)
    applies_to_plans: Optional[List[str]] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    promo_code: Optional[str] = Field(None, max_length=50)
    stripe_coupon_id: Optional[str] = Field(None, max_length=100)
    banner_text: Optional[str] = Field(None, max_length=300)
    is_active: Optional[bool] = None


class SpecialOfferResponse(SpecialOfferBase):
    id: UUID
    created_at: datetime

    class Config:
        from_attributes = True


class CheckoutRequest(BaseModel):
    plan_id: UUID
    promo_code: Optional[str] = Field(None, max_length=50)


class CheckoutResponse(BaseModel):
    checkout_url: str


class PortalResponse(BaseModel):
    portal_url: str


class StudentCodeRequest(BaseModel):
    student_email: EmailStr


class StudentVerifyRequest(BaseModel):
    code: str = Field(..., min_length=6, max_length=6)


class SubscriptionUpdate(BaseModel):
    """Admin override of a user's tier."""
    subscription_tier: SubscriptionTier
