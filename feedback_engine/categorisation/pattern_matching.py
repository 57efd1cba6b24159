"""
Pattern Matching Primitives for Feedback Classification.

Provides the three matcher kinds the rule tables are built from:
- WordMatcher: literal term(s) anchored at word boundaries
- PatternMatcher: free-form regular expression, no implied boundaries
- ProximityMatcher: a term accepted only near context words (or in an exact-case form)

Every matcher is immutable, case-insensitive unless stated otherwise, and can
describe itself for the explanation trace. Word boundaries and word characters
are ASCII only, so a term touching a non-Latin letter still counts as a word.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional, Pattern, Sequence, Tuple, Union


Terms = Union[str, Sequence[str]]

DEFAULT_PROXIMITY_WINDOW = 3


def _as_tuple(terms: Terms) -> Tuple[str, ...]:
    if isinstance(terms, str):
        return (terms,)
    return tuple(terms)


def _alternation(terms: Terms) -> str:
    """Escape literal terms and join them into a non-capturing alternation."""
    escaped = "|".join(re.escape(term) for term in _as_tuple(terms))
    return f"(?:{escaped})"


@lru_cache(maxsize=256)
def _proximity_regex(a: Tuple[str, ...], b: Tuple[str, ...], n: int) -> Pattern:
    first = _alternation(a)
    second = _alternation(b)
    gap = rf"(?:\W+\w+){{0,{n}}}\W+"
    return re.compile(
        rf"\b{first}\b{gap}\b{second}\b|\b{second}\b{gap}\b{first}\b",
        re.IGNORECASE | re.ASCII,
    )


def within_n_words(text: str, a: Terms, b: Terms, n: int = DEFAULT_PROXIMITY_WINDOW) -> bool:
    """
    Check whether two words occur within n intervening words of each other.

    Both orders are accepted (a before b, or b before a), so the check is
    symmetric in a and b. Each side may be a literal word or a sequence of
    literal alternatives; all of them are matched as whole words.

    Args:
        text: Normalized text to search
        a: First word (or alternatives)
        b: Second word (or alternatives)
        n: Maximum number of words allowed between a and b

    Returns:
        True if a and b co-occur within the window

    Example:
        >>> within_n_words("ads keeps losing my data", "ads", ("azure", "data"))
        True
    """
    if not text:
        return False
    return bool(_proximity_regex(_as_tuple(a), _as_tuple(b), n).search(text))


@dataclass(frozen=True)
class WordMatcher:
    """Whole-word match of a literal term, or of any of several literal alternatives."""
    terms: Tuple[str, ...]
    regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "terms", _as_tuple(self.terms))
        object.__setattr__(
            self, "regex", re.compile(rf"\b{_alternation(self.terms)}\b", re.IGNORECASE | re.ASCII)
        )

    def matches(self, text: str) -> bool:
        return bool(self.regex.search(text))

    def describe(self) -> str:
        return f"word:{'|'.join(self.terms)}"


@dataclass(frozen=True)
class PatternMatcher:
    """Free-form regular expression; the caller owns any boundaries or escaping."""
    pattern: str
    regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "regex", re.compile(self.pattern, re.IGNORECASE | re.ASCII))

    def matches(self, text: str) -> bool:
        return bool(self.regex.search(text))

    def describe(self) -> str:
        return f"pattern:{self.pattern}"


@dataclass(frozen=True)
class ProximityMatcher:
    """
    Contextual match for short, high-collision terms.

    Matches when exact_form appears as a whole word with exact case, or when
    term appears within `window` words of one of the `near` words.
    """
    term: str
    near: Tuple[str, ...]
    window: int = DEFAULT_PROXIMITY_WINDOW
    exact_form: Optional[str] = None
    exact_regex: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "near", _as_tuple(self.near))
        exact = rf"\b{re.escape(self.exact_form)}\b" if self.exact_form else r"(?!)"
        object.__setattr__(self, "exact_regex", re.compile(exact, re.ASCII))

    def matches(self, text: str) -> bool:
        if self.exact_regex.search(text):
            return True
        return within_n_words(text, self.term, self.near, self.window)

    def describe(self) -> str:
        description = f"near:{self.term}~({'|'.join(self.near)})/{self.window}"
        if self.exact_form:
            description += f" or exact:{self.exact_form}"
        return description


Matcher = Union[WordMatcher, PatternMatcher, ProximityMatcher]


def word(*terms: str) -> WordMatcher:
    """Build a whole-word matcher from one or more literal terms."""
    return WordMatcher(terms)


def pattern(regex: str) -> PatternMatcher:
    """Build a free-form pattern matcher."""
    return PatternMatcher(regex)


def near(
    term: str, context: Terms, window: int = DEFAULT_PROXIMITY_WINDOW, exact_form: Optional[str] = None
) -> ProximityMatcher:
    """Build a proximity matcher accepting `term` only near `context` words."""
    return ProximityMatcher(term, _as_tuple(context), window, exact_form)


def match_tests(text: str, tests: Sequence[Matcher]) -> Tuple[str, ...]:
    """
    Evaluate every matcher against the text.

    Args:
        text: Normalized text
        tests: Matchers to evaluate, in order

    Returns:
        Descriptions of the matchers that matched, in test order
    """
    return tuple(test.describe() for test in tests if test.matches(text))


def any_test_matches(text: str, tests: Sequence[Matcher]) -> bool:
    """Return True at the first matcher that matches."""
    return any(test.matches(text) for test in tests)


@dataclass(frozen=True)
class Rule:
    """
    A named, ordered list of matchers.

    Weight only matters to the category scorer. A rule with no tests is the
    catch-all of its rule set and is never evaluated.
    """
    name: str
    tests: Tuple[Matcher, ...] = ()
    weight: int = 1

    def __post_init__(self):
        object.__setattr__(self, "tests", tuple(self.tests))
        if self.weight < 1:
            raise ValueError(f"Rule weight must be >= 1, got {self.weight} for {self.name!r}")

    @property
    def is_fallback(self) -> bool:
        return not self.tests


RuleSet = Tuple[Rule, ...]


def find_fallback(rules: Sequence[Rule]) -> Optional[Rule]:
    """Return the first catch-all rule in the set, if any."""
    for rule in rules:
        if rule.is_fallback:
            return rule
    return None
