"""
Unit tests for the priority picker (area, user type) and comment type classification.
"""

import unittest

from feedback_engine.categorisation.engine import comment_type, pick_rule
from feedback_engine.categorisation.pattern_matching import Rule, pattern, word
from feedback_engine.patterns.feedback_patterns import AREA_RULES, USER_TYPE_RULES


class TestPickRule(unittest.TestCase):
    """Test first-match-wins rule picking."""

    def test_area_priority_order(self):
        # Connectivity is declared before Query Results
        self.assertEqual(pick_rule("connection errors in the results grid", AREA_RULES), "Connectivity")

    def test_area_query_results(self):
        self.assertEqual(pick_rule("query results are hard to copy", AREA_RULES), "Query Results")

    def test_area_query_editor(self):
        self.assertEqual(pick_rule("auto-complete in the editor is weak", AREA_RULES), "Query Editor")

    def test_area_copilot(self):
        self.assertEqual(pick_rule("co-pilot is hit and miss", AREA_RULES), "GitHub Copilot")

    def test_area_catch_all(self):
        self.assertEqual(pick_rule("nice tool overall", AREA_RULES), "Other")

    def test_user_types(self):
        self.assertEqual(pick_rule("SSMS doesn't have a good profiler", USER_TYPE_RULES), "DBA")
        self.assertEqual(pick_rule("great for coding in vs code", USER_TYPE_RULES), "Developer")
        self.assertEqual(pick_rule("I need this for power bi reports", USER_TYPE_RULES), "Data Analyst")
        self.assertEqual(pick_rule("nice tool overall", USER_TYPE_RULES), "General User")

    def test_dba_wins_over_developer(self):
        self.assertEqual(pick_rule("backup jobs from the extension", USER_TYPE_RULES), "DBA")

    def test_none_uses_catch_all(self):
        self.assertEqual(pick_rule(None, AREA_RULES), "Other")

    def test_fallback_without_catch_all(self):
        rules = (Rule(name="Editor", tests=(word("editor"),)),)
        self.assertEqual(pick_rule("grid", rules, fallback="Elsewhere"), "Elsewhere")

    def test_catch_all_is_never_a_candidate(self):
        rules = (Rule(name="Rest"), Rule(name="Editor", tests=(word("editor"),)))
        self.assertEqual(pick_rule("the editor", rules), "Editor")
        self.assertEqual(pick_rule("the grid", rules), "Rest")


class TestCommentType(unittest.TestCase):
    """Test constructiveness classification."""

    def test_empty(self):
        for comment in (None, "", "   \n"):
            self.assertEqual(comment_type(comment), "No Comment")

    def test_short_comment_is_non_constructive(self):
        self.assertEqual(comment_type("meh"), "Non-constructive")
        self.assertEqual(comment_type("please"), "Non-constructive")
        self.assertEqual(comment_type("add more"), "Non-constructive")

    def test_length_threshold_is_inclusive(self):
        # exactly 10 normalized characters
        self.assertEqual(comment_type("add option"), "Constructive")

    def test_length_is_measured_after_normalization(self):
        self.assertEqual(comment_type("   add   opt   "), "Non-constructive")

    def test_non_constructive_wins_over_constructive(self):
        self.assertEqual(comment_type("Please just copy SSMS features"), "Non-constructive")
        self.assertEqual(comment_type("You should bring back the old grid"), "Non-constructive")

    def test_constructive(self):
        self.assertEqual(
            comment_type("It would be great to add a schema compare option"),
            "Constructive",
        )
        self.assertEqual(comment_type("Better keyboard support please"), "Constructive")

    def test_general(self):
        self.assertEqual(comment_type("SSMS doesn't have a good profiler"), "General")

    def test_custom_patterns_and_threshold(self):
        result = comment_type(
            "nice",
            constructive=(pattern(r"\bnice\b"),),
            non_constructive=(),
            min_length=1,
        )
        self.assertEqual(result, "Constructive")


if __name__ == "__main__":
    unittest.main()
