"""Pricing plans and special offers."""
import enum
from datetime import date
from typing import Optional, List

from sqlalchemy import Enum, String, Float, Boolean, Date, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from gymsmash.models.base import Base


class PlanType(str, enum.Enum):
    STANDARD = "standard"
    STUDENT = "student"
    ANNUAL = "annual"


class BillingPeriod(str, enum.Enum):
    MONTHLY = "monthly"
    ANNUAL = "annual"


class DiscountType(str, enum.Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class PricingConfig(Base):
    """Purchasable plan backed by a Stripe price."""

    __tablename__ = "pricing_configs"

    plan_type: Mapped[PlanType] = mapped_column(Enum(PlanType), index=True)
    plan_name: Mapped[str] = mapped_column(String(200))
    price_monthly: Mapped[float] = mapped_column(Float)
    price_total: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    stripe_price_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    billing_period: Mapped[BillingPeriod] = mapped_column(
        Enum(BillingPeriod), default=BillingPeriod.MONTHLY
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class SpecialOffer(Base):
    """Time-limited discount shown as a banner and applied at checkout."""

    __tablename__ = "special_offers"

    offer_name: Mapped[str] = mapped_column(String(200))
    discount_type: Mapped[DiscountType] = mapped_column(Enum(DiscountType))
    discount_value: Mapped[float] = mapped_column(Float)
    # Plan types, or ["all"]
    applies_to_plans: Mapped[List[str]] = mapped_column(JSONB, default=lambda: ["all"])
    start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    promo_code: Mapped[Optional[str]] = mapped_column(String(50), nullable=True, index=True)
    stripe_coupon_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    banner_text: Mapped[Optional[str]] = mapped_column(String(300), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
