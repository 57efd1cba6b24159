"""
Scoring Module for survey responses.

Contains NPS bucketing and scoring used alongside comment classification.
"""

from .nps import (
    FeedbackType,
    NpsSummary,
    nps_category,
    nps_rating_band,
    calculate_nps,
)

__all__ = [
    "FeedbackType",
    "NpsSummary",
    "nps_category",
    "nps_rating_band",
    "calculate_nps",
]
