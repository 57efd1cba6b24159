"""
Net Promoter Score calculation for survey responses.
Buckets 0-10 ratings into promoters, passives and detractors and scores the set.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional

from ..config.classifier_config import NPS_CONFIG


class FeedbackType(Enum):
    """NPS respondent buckets."""
    PROMOTER = "Promoter"
    PASSIVE = "Passive"
    DETRACTOR = "Detractor"


@dataclass
class NpsSummary:
    """NPS breakdown for a set of responses."""
    total: int = 0
    promoters: int = 0
    passives: int = 0
    detractors: int = 0
    score: int = 0
    band: str = ""

    @property
    def unrated(self) -> int:
        return self.total - self.promoters - self.passives - self.detractors


def _as_rating(value: Any) -> Optional[float]:
    """Parse a rating cell; None for blanks, NaN and non-numeric text."""
    if value is None or isinstance(value, bool):
        return None
    try:
        rating = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(rating):
        return None
    return rating


def nps_category(rating: Any) -> Optional[FeedbackType]:
    """
    Bucket a single 0-10 rating.

    Args:
        rating: Raw rating (int, float, numeric string, None or NaN)

    Returns:
        FeedbackType, or None if the rating is missing or not numeric
    """
    value = _as_rating(rating)
    if value is None:
        return None
    if value >= NPS_CONFIG["promoter_min"]:
        return FeedbackType.PROMOTER
    if value >= NPS_CONFIG["passive_min"]:
        return FeedbackType.PASSIVE
    return FeedbackType.DETRACTOR


def nps_rating_band(score: float) -> str:
    """Describe an NPS score (-100 to 100)."""
    for band in NPS_CONFIG["rating_bands"]:
        if score >= band["min"]:
            return band["label"]
    return NPS_CONFIG["rating_bands"][-1]["label"]


def calculate_nps(ratings: Iterable[Any]) -> NpsSummary:
    """
    Calculate the Net Promoter Score for a set of responses.

    NPS = % promoters - % detractors, rounded to the nearest integer (halves
    round up). Every response counts towards the total, rated or not.

    Args:
        ratings: Raw ratings, one per response

    Returns:
        NpsSummary
    """
    summary = NpsSummary()

    for rating in ratings:
        summary.total += 1
        bucket = nps_category(rating)
        if bucket == FeedbackType.PROMOTER:
            summary.promoters += 1
        elif bucket == FeedbackType.PASSIVE:
            summary.passives += 1
        elif bucket == FeedbackType.DETRACTOR:
            summary.detractors += 1

    if summary.total > 0:
        raw = (summary.promoters / summary.total * 100) - (summary.detractors / summary.total * 100)
        summary.score = int(math.floor(raw + 0.5))

    summary.band = nps_rating_band(summary.score)
    return summary
