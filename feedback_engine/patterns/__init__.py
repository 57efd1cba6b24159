"""
Feedback Rule Definitions for the Feedback Triage Engine.

Contains all rule tables for labelling survey comments:
- Category rules (weighted, scored)
- Area rules (priority ordered)
- User type rules (priority ordered)
- Constructive / non-constructive patterns
"""

from .feedback_patterns import (
    CATEGORY_RULES,
    AREA_RULES,
    USER_TYPE_RULES,
    CONSTRUCTIVE_PATTERNS,
    NON_CONSTRUCTIVE_PATTERNS,
)

__all__ = [
    "CATEGORY_RULES",
    "AREA_RULES",
    "USER_TYPE_RULES",
    "CONSTRUCTIVE_PATTERNS",
    "NON_CONSTRUCTIVE_PATTERNS",
]
