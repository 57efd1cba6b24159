"""
Tests for the FeedbackClassifier facade and run_feedback_classification.
"""

import logging
import unittest

from feedback_engine import (
    FeedbackClassifier,
    ClassificationResult,
    classify_comment,
    run_feedback_classification,
)
from feedback_engine.categorisation.pattern_matching import Rule, word


CATEGORIES = {
    "SSMS/ADS Comparison", "Missing Feature", "Connectivity", "Quality/Performance",
    "UI/UX", "AI/Copilot", "General Feedback",
}
AREAS = {"Connectivity", "Query Results", "Query Editor", "GitHub Copilot", "Other"}
USER_TYPES = {"DBA", "Developer", "Data Analyst", "General User", "Unknown"}
COMMENT_TYPES = {"No Comment", "Non-constructive", "Constructive", "General"}


class TestFeedbackClassifier(unittest.TestCase):
    """Test end-to-end classification of single comments."""

    def setUp(self):
        self.classifier = FeedbackClassifier()

    def test_full_classification(self):
        result = self.classifier.classify_comment("SSMS doesn't have a good profiler")

        self.assertIsInstance(result, ClassificationResult)
        self.assertEqual(result.category, "SSMS/ADS Comparison")
        self.assertEqual(result.area, "Other")
        self.assertEqual(result.user_type, "DBA")
        self.assertEqual(result.comment_type, "General")
        self.assertEqual(result.category_score, 8)
        self.assertIsNone(result.debug_rationale)

    def test_feature_request(self):
        result = classify_comment("It would be great to add a schema compare option")
        self.assertEqual(result.category, "Missing Feature")
        self.assertEqual(result.area, "Other")
        self.assertEqual(result.user_type, "General User")
        self.assertEqual(result.comment_type, "Constructive")

    def test_timeout(self):
        result = classify_comment("The query hits a timeout")
        self.assertEqual(result.category, "Connectivity")
        self.assertEqual(result.area, "Connectivity")
        self.assertEqual(result.user_type, "Data Analyst")

    def test_blank_comment_special_case(self):
        for comment in (None, "", "   ", "\ufeff"):
            result = self.classifier.classify_comment(comment)
            self.assertEqual(result.category, "General Feedback")
            self.assertEqual(result.area, "Other")
            self.assertEqual(result.user_type, "Unknown")
            self.assertEqual(result.comment_type, "No Comment")
            self.assertEqual(result.category_explain, ())

    def test_labels_always_from_known_sets(self):
        comments = [
            None, "", "x", "ads", "ADS", "please", "Ça marche pas du tout",
            "Copilot keeps suggesting wrong SQL",
            "Export of the result grid is missing",
            "kerberos login fails every morning",
            "🙂🙂🙂🙂🙂🙂🙂🙂🙂🙂",
            "a" * 5000,
        ]
        for comment in comments:
            result = self.classifier.classify_comment(comment)
            self.assertIn(result.category, CATEGORIES)
            self.assertIn(result.area, AREAS)
            self.assertIn(result.user_type, USER_TYPES)
            self.assertIn(result.comment_type, COMMENT_TYPES)

    def test_deterministic(self):
        comment = "Intellisense is slow and the editor hangs"
        self.assertEqual(
            self.classifier.classify_comment(comment).to_dict(),
            self.classifier.classify_comment(comment).to_dict(),
        )

    def test_to_dict(self):
        record = classify_comment("SSMS doesn't have a good profiler").to_dict()
        self.assertEqual(
            record,
            {
                "Category": "SSMS/ADS Comparison",
                "Area": "Other",
                "UserType": "DBA",
                "CommentType": "General",
                "CategoryExplain": [
                    {"category": "SSMS/ADS Comparison", "matches": ["word:ssms", "word:profiler"]},
                ],
            },
        )

    def test_custom_rule_tables(self):
        classifier = FeedbackClassifier(
            category_rules=(Rule(name="Speed", tests=(word("slow"),)), Rule(name="Misc")),
            area_rules=(Rule(name="Grid", tests=(word("grid"),)), Rule(name="Elsewhere")),
            user_type_rules=(Rule(name="Anyone"),),
        )
        result = classifier.classify_comment("the grid is slow to render")
        self.assertEqual(result.category, "Speed")
        self.assertEqual(result.area, "Grid")
        self.assertEqual(result.user_type, "Anyone")

        blank = classifier.classify_comment("")
        self.assertEqual(blank.area, "Other")
        self.assertEqual(blank.user_type, "Unknown")


class TestDebugMode(unittest.TestCase):
    """Test debug rationale output."""

    def test_rationale_lists_evidence(self):
        classifier = FeedbackClassifier(debug_mode=True)
        with self.assertLogs("feedback_engine.categorisation.engine", level=logging.DEBUG):
            result = classifier.classify_comment("SSMS doesn't have a good profiler")
        self.assertEqual(
            result.debug_rationale,
            "category=SSMS/ADS Comparison score=8 [SSMS/ADS Comparison: word:ssms, word:profiler]",
        )

    def test_rationale_without_matches(self):
        classifier = FeedbackClassifier(debug_mode=True)
        result = classifier.classify_comment("")
        self.assertEqual(result.debug_rationale, "category=General Feedback score=0")


class TestBatchClassification(unittest.TestCase):
    """Test classifying and summarising many comments."""

    def test_classify_comments_keeps_order(self):
        classifier = FeedbackClassifier()
        comments = ["The query hits a timeout", None, "I prefer ADS"]
        classified = classifier.classify_comments(comments)

        self.assertEqual([comment for comment, _ in classified], comments)
        self.assertEqual(
            [result.category for _, result in classified],
            ["Connectivity", "General Feedback", "SSMS/ADS Comparison"],
        )

    def test_category_summary(self):
        classifier = FeedbackClassifier()
        classified = classifier.classify_comments(["slow", "it is so slow", None])
        summary = classifier.get_category_summary(classified)

        self.assertEqual(summary["category"], {"Quality/Performance": 2, "General Feedback": 1})
        self.assertEqual(summary["comment_type"], {"Non-constructive": 1, "General": 1, "No Comment": 1})
        self.assertEqual(summary["user_type"], {"General User": 2, "Unknown": 1})


class TestRunFeedbackClassification(unittest.TestCase):
    """Test the record-level entry point."""

    def test_labels_records(self):
        records = [
            {"NPS": 6, "Comments": "SSMS doesn't have a good profiler"},
            {"NPS": 10, "Comments": None},
            {"NPS": None, "Comments": "It would be great to add a schema compare option"},
        ]
        labelled = run_feedback_classification(records)

        self.assertEqual([row["ID"] for row in labelled], [1, 2, 3])
        self.assertEqual(labelled[0]["Category"], "SSMS/ADS Comparison")
        self.assertEqual(labelled[0]["NPSCategory"], "Detractor")
        self.assertEqual(labelled[1]["NPSCategory"], "Promoter")
        self.assertEqual(labelled[1]["UserType"], "Unknown")
        self.assertEqual(labelled[2]["NPSCategory"], "")
        self.assertEqual(labelled[2]["CommentType"], "Constructive")

    def test_input_not_modified(self):
        records = [{"Comments": "slow"}]
        labelled = run_feedback_classification(records)
        self.assertEqual(records, [{"Comments": "slow"}])
        self.assertNotIn("NPSCategory", labelled[0])

    def test_custom_column_and_start_id(self):
        labelled = run_feedback_classification(
            [{"Feedback": "kerberos login fails"}], comment_column="Feedback", start_id=41
        )
        self.assertEqual(labelled[0]["ID"], 41)
        self.assertEqual(labelled[0]["Area"], "Connectivity")

    def test_non_string_comment(self):
        labelled = run_feedback_classification([{"Comments": 12345}])
        self.assertEqual(labelled[0]["CommentType"], "No Comment")


if __name__ == "__main__":
    unittest.main()
