"""
Feedback Classifier for Survey Comment Triage.
Labels free-text NPS comments by category, product area, user type and constructiveness.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..config.classifier_config import CLASSIFIER_CONFIG
from ..patterns.feedback_patterns import (
    CATEGORY_RULES,
    AREA_RULES,
    USER_TYPE_RULES,
    CONSTRUCTIVE_PATTERNS,
    NON_CONSTRUCTIVE_PATTERNS,
)
from .pattern_matching import Matcher, Rule, any_test_matches, find_fallback, match_tests
from .preprocess import is_blank, normalize_text


logger = logging.getLogger(__name__)

FALLBACKS = CLASSIFIER_CONFIG["fallbacks"]
COMMENT_TYPES = CLASSIFIER_CONFIG["comment_types"]


@dataclass(frozen=True)
class CategoryHit:
    """One category rule that matched at least one test."""
    category: str
    matches: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"category": self.category, "matches": list(self.matches)}


@dataclass(frozen=True)
class CategoryScore:
    """Result of category scoring."""
    category: str
    score: int
    explain: Tuple[CategoryHit, ...] = ()


@dataclass
class ClassificationResult:
    """Labels for a single comment."""
    category: str
    area: str
    user_type: str
    comment_type: str
    category_explain: Tuple[CategoryHit, ...] = field(default_factory=tuple)
    category_score: int = 0
    debug_rationale: Optional[str] = None  # Optional debug information

    def to_dict(self) -> Dict[str, Any]:
        """Render the record-level label fields."""
        return {
            "Category": self.category,
            "Area": self.area,
            "UserType": self.user_type,
            "CommentType": self.comment_type,
            "CategoryExplain": [hit.to_dict() for hit in self.category_explain],
        }


def score_category(comment: Optional[str], rules: Sequence[Rule] = CATEGORY_RULES) -> CategoryScore:
    """
    Score every category rule and pick the best one.

    A rule scores weight x number of matched tests, so a lower-weight category
    can win on breadth of evidence. A later rule must strictly beat the current
    best, which makes declaration order the tie-break. Every rule with at least
    one match is recorded in the explanation, winner or not.

    Args:
        comment: Raw comment text (may be None or empty)
        rules: Category rules in declaration order

    Returns:
        CategoryScore with the winning category, its score and the explanation

    Example:
        >>> score_category("SSMS doesn't have a good profiler").category
        'SSMS/ADS Comparison'
    """
    text = normalize_text(comment)

    fallback_rule = find_fallback(rules)
    best_name = fallback_rule.name if fallback_rule else FALLBACKS["category"]
    best_score = 0
    hits: List[CategoryHit] = []

    for rule in rules:
        if rule.is_fallback:
            continue

        matches = match_tests(text, rule.tests)
        score = rule.weight * len(matches)

        if score > best_score:
            best_name = rule.name
            best_score = score

        if matches:
            hits.append(CategoryHit(category=rule.name, matches=matches))

    return CategoryScore(category=best_name, score=best_score, explain=tuple(hits))


def pick_rule(
    comment: Optional[str],
    rules: Sequence[Rule],
    fallback: str = FALLBACKS["area"],
) -> str:
    """
    Return the name of the first rule with any matching test.

    Rule order is priority: no scoring, no aggregation. Catch-all rules (no
    tests) are never candidates; if nothing matches, the set's catch-all name
    is returned, or `fallback` when the set has none.

    Args:
        comment: Raw comment text
        rules: Priority ordered rules
        fallback: Label used when nothing matches and there is no catch-all

    Returns:
        Rule name
    """
    text = normalize_text(comment)

    for rule in rules:
        if rule.is_fallback:
            continue
        if any_test_matches(text, rule.tests):
            return rule.name

    catch_all = find_fallback(rules)
    return catch_all.name if catch_all else fallback


def comment_type(
    comment: Optional[str],
    constructive: Sequence[Matcher] = CONSTRUCTIVE_PATTERNS,
    non_constructive: Sequence[Matcher] = NON_CONSTRUCTIVE_PATTERNS,
    min_length: int = CLASSIFIER_CONFIG["min_comment_length"],
) -> str:
    """
    Classify how constructive a comment is.

    Checked in order: empty, too short, non-constructive phrasing,
    constructive phrasing, otherwise general.
    """
    text = normalize_text(comment)
    if not text:
        return COMMENT_TYPES["empty"]
    if len(text) < min_length:
        return COMMENT_TYPES["non_constructive"]
    if any_test_matches(text, non_constructive):
        return COMMENT_TYPES["non_constructive"]
    if any_test_matches(text, constructive):
        return COMMENT_TYPES["constructive"]
    return COMMENT_TYPES["general"]


class FeedbackClassifier:
    """Classifies survey comments for feedback triage."""

    def __init__(
        self,
        category_rules: Sequence[Rule] = CATEGORY_RULES,
        area_rules: Sequence[Rule] = AREA_RULES,
        user_type_rules: Sequence[Rule] = USER_TYPE_RULES,
        constructive_patterns: Sequence[Matcher] = CONSTRUCTIVE_PATTERNS,
        non_constructive_patterns: Sequence[Matcher] = NON_CONSTRUCTIVE_PATTERNS,
        debug_mode: bool = False,
    ):
        """Initialize the classifier with rule tables.

        Args:
            debug_mode: If True, emit detailed rationale for classification decisions
        """
        self.category_rules = tuple(category_rules)
        self.area_rules = tuple(area_rules)
        self.user_type_rules = tuple(user_type_rules)
        self.constructive_patterns = tuple(constructive_patterns)
        self.non_constructive_patterns = tuple(non_constructive_patterns)
        self.min_comment_length = CLASSIFIER_CONFIG["min_comment_length"]
        self.debug_mode = debug_mode

    def classify_comment(self, comment: Optional[str]) -> ClassificationResult:
        """
        Classify a single comment.

        The four labels are computed independently from the same comment.

        Args:
            comment: Raw comment text (None and blank are valid inputs)

        Returns:
            ClassificationResult with all four labels and the category explanation
        """
        category = score_category(comment, self.category_rules)

        result = ClassificationResult(
            category=category.category,
            area=self.determine_area(comment),
            user_type=self.determine_user_type(comment),
            comment_type=self.determine_comment_type(comment),
            category_explain=category.explain,
            category_score=category.score,
        )
        result.debug_rationale = self._build_debug_rationale(category)
        return result

    def determine_area(self, comment: Optional[str]) -> str:
        """Pick the product area; blank comments are always the empty-input area."""
        if is_blank(comment):
            return FALLBACKS["empty_area"]
        return pick_rule(comment, self.area_rules, FALLBACKS["area"])

    def determine_user_type(self, comment: Optional[str]) -> str:
        """Pick the respondent persona; blank comments are Unknown."""
        if is_blank(comment):
            return FALLBACKS["empty_user_type"]
        return pick_rule(comment, self.user_type_rules, FALLBACKS["user_type"])

    def determine_comment_type(self, comment: Optional[str]) -> str:
        return comment_type(
            comment,
            self.constructive_patterns,
            self.non_constructive_patterns,
            self.min_comment_length,
        )

    def _build_debug_rationale(self, category: CategoryScore) -> Optional[str]:
        """Build debug rationale string if debug mode is enabled.

        Args:
            category: Category scoring result

        Returns:
            Debug rationale string if debug_mode is True, None otherwise
        """
        if not self.debug_mode:
            return None

        rationale = f"category={category.category} score={category.score}"
        if category.explain:
            evidence = "; ".join(
                f"{hit.category}: {', '.join(hit.matches)}" for hit in category.explain
            )
            rationale = f"{rationale} [{evidence}]"

        logger.debug(rationale)
        return rationale

    def classify_comments(
        self, comments: Iterable[Optional[str]]
    ) -> List[Tuple[Optional[str], ClassificationResult]]:
        """
        Classify many comments.

        Each comment is classified on its own; no state is carried between them.

        Args:
            comments: Iterable of raw comments

        Returns:
            List of (comment, ClassificationResult) tuples in input order
        """
        results = [(comment, self.classify_comment(comment)) for comment in comments]
        logger.debug("Classified %d comments", len(results))
        return results

    def get_category_summary(
        self, classified: Iterable[Tuple[Optional[str], ClassificationResult]]
    ) -> Dict[str, Dict[str, int]]:
        """
        Count labels across classified comments.

        Args:
            classified: Output of classify_comments

        Returns:
            Dictionary of label field -> {label: count}
        """
        summary: Dict[str, Dict[str, int]] = {
            "category": defaultdict(int),
            "area": defaultdict(int),
            "user_type": defaultdict(int),
            "comment_type": defaultdict(int),
        }

        for _, result in classified:
            summary["category"][result.category] += 1
            summary["area"][result.area] += 1
            summary["user_type"][result.user_type] += 1
            summary["comment_type"][result.comment_type] += 1

        return {label: dict(counts) for label, counts in summary.items()}


_default_classifier = FeedbackClassifier()


def classify_comment(comment: Optional[str]) -> ClassificationResult:
    """Classify a comment with the default rule tables."""
    return _default_classifier.classify_comment(comment)
