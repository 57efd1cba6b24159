"""
Unit tests for comment coercion and text normalization.
"""

import unittest

from feedback_engine.categorisation.preprocess import coerce_comment, is_blank, normalize_text


class TestCoerceComment(unittest.TestCase):
    """Test coercion of raw cell values into comment text."""

    def test_string_passes_through(self):
        self.assertEqual(coerce_comment("slow to load"), "slow to load")

    def test_non_strings_become_empty(self):
        for value in (None, 42, 3.5, float("nan"), ["ssms"], {"comment": "x"}):
            self.assertEqual(coerce_comment(value), "", f"Expected '' for {value!r}")


class TestNormalizeText(unittest.TestCase):
    """Test normalization ahead of matching."""

    def test_strips_diacritics(self):
        self.assertEqual(normalize_text("Café connexión"), "Cafe connexion")

    def test_collapses_and_trims_whitespace(self):
        self.assertEqual(normalize_text("  too   slow\n\tto  load  "), "too slow to load")

    def test_preserves_case(self):
        self.assertEqual(normalize_text("ADS and ads"), "ADS and ads")

    def test_compatibility_forms_are_decomposed(self):
        # Fullwidth letters fold to ASCII under NFKD
        self.assertEqual(normalize_text("ＳＳＭＳ"), "SSMS")

    def test_idempotent(self):
        samples = [
            "  Déjà   vu\n",
            "Intellisense   is   slow",
            "ＳＳＭＳ profiler",
            "",
        ]
        for sample in samples:
            once = normalize_text(sample)
            self.assertEqual(normalize_text(once), once)

    def test_none_and_blank(self):
        self.assertEqual(normalize_text(None), "")
        self.assertEqual(normalize_text("   \n "), "")

    def test_byte_order_mark_is_whitespace(self):
        self.assertEqual(normalize_text("\ufeff"), "")
        self.assertEqual(normalize_text("\ufeffslow \ufeff load\ufeff"), "slow load")


class TestIsBlank(unittest.TestCase):

    def test_blank_values(self):
        for value in (None, "", "   ", "\n\t", "\ufeff", " \ufeff\n", float("nan")):
            self.assertTrue(is_blank(value))

    def test_non_blank(self):
        self.assertFalse(is_blank(" x "))


if __name__ == "__main__":
    unittest.main()
