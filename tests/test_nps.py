"""
Unit tests for NPS bucketing and scoring.
"""

import unittest

from feedback_engine.scoring.nps import FeedbackType, calculate_nps, nps_category, nps_rating_band


class TestNpsCategory(unittest.TestCase):
    """Test bucketing of single ratings."""

    def test_boundaries(self):
        expected = {
            10: FeedbackType.PROMOTER,
            9: FeedbackType.PROMOTER,
            8: FeedbackType.PASSIVE,
            7: FeedbackType.PASSIVE,
            6: FeedbackType.DETRACTOR,
            0: FeedbackType.DETRACTOR,
        }
        for rating, bucket in expected.items():
            self.assertEqual(nps_category(rating), bucket, f"rating {rating}")

    def test_numeric_strings_and_floats(self):
        self.assertEqual(nps_category("9"), FeedbackType.PROMOTER)
        self.assertEqual(nps_category(7.0), FeedbackType.PASSIVE)

    def test_missing_values(self):
        for value in (None, "", "n/a", float("nan"), True):
            self.assertIsNone(nps_category(value), f"value {value!r}")


class TestRatingBand(unittest.TestCase):

    def test_bands(self):
        self.assertEqual(nps_rating_band(100), "Excellent")
        self.assertEqual(nps_rating_band(50), "Excellent")
        self.assertEqual(nps_rating_band(49), "Very Good")
        self.assertEqual(nps_rating_band(30), "Very Good")
        self.assertEqual(nps_rating_band(0), "Good")
        self.assertEqual(nps_rating_band(-1), "Needs Work")
        self.assertEqual(nps_rating_band(-30), "Needs Work")
        self.assertEqual(nps_rating_band(-31), "Critical")
        self.assertEqual(nps_rating_band(-100), "Critical")


class TestCalculateNps(unittest.TestCase):
    """Test aggregate NPS calculation."""

    def test_balanced(self):
        summary = calculate_nps([10, 9, 8, 7, 6, 0])
        self.assertEqual(summary.total, 6)
        self.assertEqual(summary.promoters, 2)
        self.assertEqual(summary.passives, 2)
        self.assertEqual(summary.detractors, 2)
        self.assertEqual(summary.score, 0)
        self.assertEqual(summary.band, "Good")

    def test_excellent(self):
        summary = calculate_nps([10, 10, 10, 6])
        self.assertEqual(summary.score, 50)
        self.assertEqual(summary.band, "Excellent")

    def test_all_detractors(self):
        summary = calculate_nps([1, 2, 3])
        self.assertEqual(summary.score, -100)
        self.assertEqual(summary.band, "Critical")

    def test_halves_round_up(self):
        # 1 promoter in 8 -> 12.5
        self.assertEqual(calculate_nps([10, 8, 8, 8, 8, 8, 8, 8]).score, 13)
        # 1 detractor in 8 -> -12.5
        self.assertEqual(calculate_nps([3, 8, 8, 8, 8, 8, 8, 8]).score, -12)

    def test_unrated_responses_count_towards_total(self):
        summary = calculate_nps([10, None, "abc"])
        self.assertEqual(summary.total, 3)
        self.assertEqual(summary.promoters, 1)
        self.assertEqual(summary.unrated, 2)
        self.assertEqual(summary.score, 33)
        self.assertEqual(summary.band, "Very Good")

    def test_empty(self):
        summary = calculate_nps([])
        self.assertEqual(summary.total, 0)
        self.assertEqual(summary.score, 0)
        self.assertEqual(summary.band, "Good")

    def test_accepts_generator(self):
        summary = calculate_nps(rating for rating in (9, 9, 0))
        self.assertEqual(summary.score, 33)


if __name__ == "__main__":
    unittest.main()
