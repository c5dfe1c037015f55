#!/usr/bin/env python3
import unittest

from spellingbee.errors import ConfigurationError, MissingColumn
from spellingbee.lib.extractor import cell_text, extract_round_words, header_text
from spellingbee.models import WordRecord

HEADER = ["Word", "Pronunciation", "Definition", "Sentence", "2023", "2024"]


class ExtractRoundWordsTest(unittest.TestCase):
    def test_filters_by_year_marker_and_counts_skips(self):
        rows = [
            HEADER,
            ["cat", "kat", "a small animal", "The cat sat.", "x", "x"],
            ["dog", "dawg", "a loyal animal", "A dog ran.", "x", None],
            [None, "", "", "", None, "x"],
            ["  emu ", " ee-myoo ", " a bird ", " An emu ran. ", None, " x "],
        ]
        result = extract_round_words(rows, "2024")

        self.assertEqual(
            list(result.records),
            [
                WordRecord("cat", "kat", "a small animal", "The cat sat."),
                WordRecord("emu", "ee-myoo", "a bird", "An emu ran."),
            ],
        )
        self.assertEqual(result.stats.considered_rows, 4)
        self.assertEqual(result.stats.skipped_no_year_marker, 1)
        self.assertEqual(result.stats.skipped_no_word, 1)

    def test_one_of_each_row_kind(self):
        rows = [
            ["Word", "Pronunciation", "Definition", "Sentence", "2024"],
            ["cat", "", "", "", "x"],
            ["", "", "", "", "x"],
            ["dog", "", "", "", ""],
        ]
        result = extract_round_words(rows, "2024")
        self.assertEqual([r.word for r in result.records], ["cat"])
        self.assertEqual(result.stats.skipped_no_word, 1)
        self.assertEqual(result.stats.skipped_no_year_marker, 1)

    def test_whitespace_marker_does_not_count(self):
        rows = [HEADER, ["cat", "", "", "", "", "   "]]
        result = extract_round_words(rows, "2024")
        self.assertEqual(result.records, ())
        self.assertEqual(result.stats.skipped_no_year_marker, 1)

    def test_missing_year_column_raises(self):
        with self.assertRaises(MissingColumn) as ctx:
            extract_round_words([HEADER, ["cat", "", "", "", "x", "x"]], "2025")
        self.assertEqual(ctx.exception.missing, ["2025"])
        self.assertIn("2024", ctx.exception.available)
        self.assertIsInstance(ctx.exception, ConfigurationError)

    def test_missing_required_column_raises(self):
        header = ["Word", "Definition", "Sentence", "2024"]
        with self.assertRaises(MissingColumn) as ctx:
            extract_round_words([header], "2024")
        self.assertEqual(ctx.exception.missing, ["Pronunciation"])

    def test_numeric_year_headers_and_mapping_rows(self):
        rows = [
            {0: "Word", 1: "Pronunciation", 2: "Definition", 3: "Sentence", 4: 2024.0},
            {0: "owl", 4: "x"},
            {0: "bat"},
        ]
        result = extract_round_words(rows, "2024")
        self.assertEqual(list(result.records), [WordRecord("owl")])
        self.assertEqual(result.stats.skipped_no_year_marker, 1)

    def test_year_header_is_matched_exactly(self):
        rows = [["Word", "Pronunciation", "Definition", "Sentence", "2019Fall"], ["yak", "", "", "", "x"]]
        self.assertEqual(len(extract_round_words(rows, "2019Fall").records), 1)
        with self.assertRaises(MissingColumn):
            extract_round_words(rows, "2019fall")


class CellTextTest(unittest.TestCase):
    def test_coercion(self):
        self.assertEqual(header_text(2024.0), "2024")
        self.assertEqual(header_text(float("nan")), "")
        self.assertEqual(cell_text(None), "")
        self.assertEqual(cell_text("  x "), "x")
        self.assertEqual(cell_text(12), "12")


if __name__ == "__main__":
    unittest.main()
