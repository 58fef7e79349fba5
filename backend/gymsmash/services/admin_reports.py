"""Aggregations for the admin user dashboard."""
from dataclasses import dataclass
from typing import Iterable, Optional

from gymsmash.models.user import User

CANCELLATION_REASONS = {
    "customer_service": "Customer Service",
    "low_quality": "Low Quality",
    "missing_features": "Missing Features",
    "switched_service": "Switched Service",
    "too_complex": "Too Complex",
    "too_expensive": "Too Expensive",
    "unused": "Unused",
    "other": "Other",
    "none": "No Reason Given",
    "not_provided": "Not Provided",
}


@dataclass
class ReasonCount:
    reason: str
    label: str
    count: int
    percent: float


@dataclass
class CancellationBreakdown:
    total: int
    reasons: list[ReasonCount]
    comments: list[str]


def cancellation_breakdown(users: Iterable[User]) -> CancellationBreakdown:
    """
    Count cancellation reasons across users who have left.

    A user counts as cancelled with either a reason or a cancellation time;
    a missing reason is reported as ``not_provided``.
    """
    cancelled = [u for u in users if u.cancellation_reason or u.cancelled_at]

    counts: dict[str, int] = {}
    for user in cancelled:
        reason = user.cancellation_reason or "not_provided"
        counts[reason] = counts.get(reason, 0) + 1

    total = len(cancelled)
    reasons = [
        ReasonCount(
            reason=reason,
            label=CANCELLATION_REASONS.get(reason, reason),
            count=count,
            percent=round(count / total * 100, 1),
        )
        for reason, count in sorted(counts.items(), key=lambda item: item[1], reverse=True)
    ]
    comments = [u.cancellation_comment for u in cancelled if u.cancellation_comment]
    return CancellationBreakdown(total=total, reasons=reasons, comments=comments)


def matches_search(user: User, term: Optional[str]) -> bool:
    """Case-insensitive match on name or email."""
    if not term:
        return True
    term = term.lower()
    return term in (user.full_name or "").lower() or term in (user.email or "").lower()
