"""Aggregation of ratings into a display summary."""

import math
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Union

from site_ratings.schemas.ratings import Rating, RatingSummary, empty_distribution

Number = Union[int, float]

_CENTS = Decimal("0.01")


def round_score(value: Number) -> int:
    """Round to the nearest whole star, halves going up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def round_average(value: float) -> float:
    """Round to 2 decimals, halves going up on the exact binary value."""
    return float(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))


def _local_now(now: Optional[datetime]) -> datetime:
    # Naive values are read as local wall-clock time.
    return (now or datetime.now()).astimezone()


def is_in_month_of(created_at: datetime, now: datetime) -> bool:
    """True when ``created_at`` falls in the same calendar month and year as ``now``."""
    local = created_at.astimezone(now.tzinfo)
    return local.year == now.year and local.month == now.month


def summarize_ratings(ratings: Iterable[Rating], now: Optional[datetime] = None) -> RatingSummary:
    """Compute total, average, monthly count and distribution.

    Ratings whose rounded value falls outside 1..5 are left out of the
    distribution but still count towards ``total`` and ``average``.
    """
    ratings = list(ratings)
    current = _local_now(now)

    distribution = empty_distribution()
    for rating in ratings:
        score = round_score(rating.rating)
        if score in distribution:
            distribution[score] += 1

    total = len(ratings)
    average = round_average(sum(r.rating for r in ratings) / total) if total else 0

    monthly = sum(1 for r in ratings if is_in_month_of(r.created_at, current))

    return RatingSummary(
        total=total,
        average=average,
        monthly=monthly,
        distribution=distribution,
    )
