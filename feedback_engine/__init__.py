"""
Feedback Engine - Rule-based Survey Comment Triage.

A modular, auditable system for labelling free-text NPS survey comments so
analysts can filter and aggregate feedback without reading every response.

Main Components:
    - patterns: Category, area, user type and constructiveness rule tables
    - config: Labels, thresholds and NPS bands
    - categorisation: Normalization, matchers, scorer, picker and classifier
    - scoring: NPS bucketing and scoring
"""

from typing import Dict, List, Optional

# Core categorisation components
from .categorisation.engine import (
    FeedbackClassifier,
    ClassificationResult,
    CategoryHit,
    CategoryScore,
    score_category,
    pick_rule,
    comment_type,
    classify_comment,
)

from .categorisation.preprocess import (
    normalize_text,
    coerce_comment,
)

from .categorisation.pattern_matching import (
    Rule,
    WordMatcher,
    PatternMatcher,
    ProximityMatcher,
    within_n_words,
)

# Scoring components
from .scoring.nps import (
    FeedbackType,
    NpsSummary,
    nps_category,
    calculate_nps,
)

# Configuration
from .config.classifier_config import (
    CLASSIFIER_CONFIG,
    NPS_CONFIG,
)

from .patterns.feedback_patterns import (
    CATEGORY_RULES,
    AREA_RULES,
    USER_TYPE_RULES,
    CONSTRUCTIVE_PATTERNS,
    NON_CONSTRUCTIVE_PATTERNS,
)


__version__ = "1.0.0"
__all__ = [
    # Categorisation
    "FeedbackClassifier",
    "ClassificationResult",
    "CategoryHit",
    "CategoryScore",
    "score_category",
    "pick_rule",
    "comment_type",
    "classify_comment",
    "normalize_text",
    "coerce_comment",
    "Rule",
    "WordMatcher",
    "PatternMatcher",
    "ProximityMatcher",
    "within_n_words",
    # Scoring
    "FeedbackType",
    "NpsSummary",
    "nps_category",
    "calculate_nps",
    # Configuration
    "CLASSIFIER_CONFIG",
    "NPS_CONFIG",
    # Patterns
    "CATEGORY_RULES",
    "AREA_RULES",
    "USER_TYPE_RULES",
    "CONSTRUCTIVE_PATTERNS",
    "NON_CONSTRUCTIVE_PATTERNS",
    # Main function
    "run_feedback_classification",
]


def run_feedback_classification(
    records: List[Dict],
    comment_column: Optional[str] = None,
    start_id: int = 1,
) -> List[Dict]:
    """
    Main entry point for labelling survey records.

    Each record keeps its original fields and gains:
        - ID: 1-based running identifier
        - Category, Area, UserType, CommentType: the four labels
        - CategoryExplain: every category that matched, with its matched tests
        - NPSCategory: Promoter / Passive / Detractor (only if the record has an NPS field)

    Args:
        records: List of record dictionaries (e.g. parsed CSV rows)
        comment_column: Field holding the comment (default from CLASSIFIER_CONFIG)
        start_id: First ID to assign

    Returns:
        New list of labelled record dictionaries; the input is not modified

    Example:
        >>> rows = [{"NPS": 6, "Comments": "SSMS doesn't have a good profiler"}]
        >>> run_feedback_classification(rows)[0]["Category"]
        'SSMS/ADS Comparison'
    """
    columns = CLASSIFIER_CONFIG["columns"]
    comment_column = comment_column or columns["comment"]
    classifier = FeedbackClassifier()

    labelled = []
    for offset, record in enumerate(records):
        comment = coerce_comment(record.get(comment_column))
        result = classifier.classify_comment(comment)

        row = dict(record)
        row["ID"] = start_id + offset
        row.update(result.to_dict())
        if columns["nps"] in record:
            bucket = nps_category(record[columns["nps"]])
            row["NPSCategory"] = bucket.value if bucket else ""
        labelled.append(row)

    return labelled
