#!/usr/bin/env python3
import unittest

from spellingbee.lib.emphasis import locate


class LocateTest(unittest.TestCase):
    def test_case_insensitive_first_match(self):
        sentence = "The Cat chased another cat."
        self.assertEqual(locate(sentence, "cat"), (4, 7))
        start, end = locate(sentence, "CAT")
        self.assertEqual(sentence[start:end], "Cat")

    def test_range_covers_original_casing(self):
        sentence = "The spelling bee is fun"
        start, end = locate(sentence, "SPELLING")
        self.assertEqual((start, end), (4, 12))
        self.assertEqual(sentence[start:end], "spelling")

    def test_absent_or_empty(self):
        self.assertIsNone(locate("A dog ran.", "cat"))
        self.assertIsNone(locate("A dog ran.", ""))
        self.assertIsNone(locate("", "dog"))

    def test_needle_is_literal_text(self):
        self.assertIsNone(locate("axb", "a.b"))
        self.assertEqual(locate("use a.b here", "a.b"), (4, 7))


if __name__ == "__main__":
    unittest.main()
