"""
Categorisation Module for the Feedback Triage Engine.

Orchestrates comment classification through:
- Preprocessing (coercion, Unicode and whitespace normalization)
- Pattern matching (whole-word, free-form and proximity matchers)
- Category scoring (weighted rules)
- Priority picking (first matching rule for area and user type)
- Constructiveness classification
"""

from .engine import (
    FeedbackClassifier,
    ClassificationResult,
    CategoryHit,
    CategoryScore,
    score_category,
    pick_rule,
    comment_type,
    classify_comment,
)
from .preprocess import (
    normalize_text,
    coerce_comment,
    is_blank,
)
from .pattern_matching import (
    WordMatcher,
    PatternMatcher,
    ProximityMatcher,
    Rule,
    within_n_words,
    word,
    pattern,
    near,
)

__all__ = [
    # Main classifier
    "FeedbackClassifier",
    "ClassificationResult",
    "CategoryHit",
    "CategoryScore",
    "score_category",
    "pick_rule",
    "comment_type",
    "classify_comment",
    # Preprocessing utilities
    "normalize_text",
    "coerce_comment",
    "is_blank",
    # Pattern matching utilities
    "WordMatcher",
    "PatternMatcher",
    "ProximityMatcher",
    "Rule",
    "within_n_words",
    "word",
    "pattern",
    "near",
]
