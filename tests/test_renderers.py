#!/usr/bin/env python3
import tempfile
import unittest
from pathlib import Path

from docx import Document
from pptx import Presentation
from pptx.util import Inches

from spellingbee.errors import TemplateError
from spellingbee.lib.documents import WordListRenderer
from spellingbee.lib.expansion import TemplateExpander
from spellingbee.lib.slides import SlideDeckRenderer
from spellingbee.lib.templates import build_document_template, build_slide_template
from spellingbee.models import RoundContext, WordRecord

CONTEXT = RoundContext(
    year="2024",
    round_key="2",
    event_name="Test Bee",
    event_date="Nov 7, 2024",
    created_date="11/07/2024 09:00 AM",
)

RECORDS = [
    WordRecord("apple", "AP-uhl", "a round fruit", "The Apple fell."),
    WordRecord("bear", "bair", "a large mammal", "A bear slept."),
    WordRecord("cedar", "SEE-der", "an evergreen tree", "Tall trees grow here."),
]


def slide_text(slide):
    return "\n".join(shape.text_frame.text for shape in slide.shapes if shape.has_text_frame)


class SlideDeckRendererTest(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.template = build_slide_template(self.dir / "slides.pptx")
        self.out = self.dir / "out" / "round.pptx"

    def tearDown(self):
        self.tmp.cleanup()

    def _expand(self, records, template=None):
        with SlideDeckRenderer(template or self.template, self.out) as renderer:
            result = TemplateExpander(renderer).expand(records, CONTEXT)
            renderer.commit()
        return result

    def test_default_template_has_four_slides(self):
        self.assertEqual(len(Presentation(str(self.template)).slides), 4)

    def test_deck_layout_and_text(self):
        self._expand(RECORDS)
        slides = list(Presentation(str(self.out)).slides)
        self.assertEqual(len(slides), 8)

        texts = [slide_text(s) for s in slides]
        self.assertIn("Nov 7, 2024", texts[0])
        self.assertIn("Test Bee", texts[0])
        self.assertIn("Spelling Bee Round 2", texts[0])
        self.assertIn("Round 2", texts[1])
        self.assertIn("Spellers at Work", texts[1])
        self.assertNotIn("Round", texts[3])
        self.assertIn("Spellers at Work", texts[3])
        self.assertEqual([texts[i].strip() for i in (2, 4, 6)], ["apple", "bear", "cedar"])
        self.assertIn("This concludes\nRound 2", texts[7])
        for text in texts:
            self.assertNotIn("{{", text)

    def test_empty_round_keeps_three_slides(self):
        self._expand([])
        self.assertEqual(len(Presentation(str(self.out)).slides), 3)

    def test_sentence_word_is_bold(self):
        prs = Presentation(str(self.template))
        body = prs.slides[2]
        box = body.shapes.add_textbox(Inches(0.5), Inches(5.5), Inches(9), Inches(1))
        box.text_frame.paragraphs[0].add_run().text = "{{sentence}}"
        template = self.dir / "with-sentence.pptx"
        prs.save(str(template))

        result = self._expand(RECORDS, template)
        self.assertEqual(len(result.warnings), 1)

        slides = list(Presentation(str(self.out)).slides)
        runs = [r for shape in slides[2].shapes if shape.has_text_frame for p in shape.text_frame.paragraphs for r in p.runs]
        bold_runs = [r.text for r in runs if r.font.bold and r.text != "apple"]
        self.assertEqual(bold_runs, ["Apple"])
        sentence = next(p for shape in slides[2].shapes if shape.has_text_frame for p in shape.text_frame.paragraphs if "fell" in p.text)
        self.assertEqual([r.text for r in sentence.runs], ["The ", "Apple", " fell."])
        self.assertFalse(sentence.runs[0].font.bold)


class WordListRendererTest(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.template = build_document_template(self.dir / "words.docx")
        self.out = self.dir / "round.docx"

    def tearDown(self):
        self.tmp.cleanup()

    def _expand(self, records):
        with WordListRenderer(self.template, self.out) as renderer:
            result = TemplateExpander(renderer).expand(records, CONTEXT)
            renderer.commit()
        return result

    def test_rows_follow_block_layout(self):
        result = self._expand(RECORDS)
        self.assertEqual(result.block_count, 8)
        table = Document(str(self.out)).tables[0]
        self.assertEqual(len(table.rows), 8)

        cells = [row.cells[0].text for row in table.rows]
        self.assertIn("Test Bee 2024", cells[0])
        self.assertIn("Round 2 Words", cells[0])
        self.assertTrue(cells[2].startswith("1. apple\tAP-uhl"))
        self.assertTrue(cells[4].startswith("2. bear"))
        self.assertTrue(cells[6].startswith("3. cedar"))
        self.assertIn("a large mammal", cells[4])
        self.assertEqual(cells[7], "End of Round 2")
        for text in cells:
            self.assertNotIn("{{", text)

    def test_sentence_word_is_bold_and_italic(self):
        self._expand(RECORDS)
        table = Document(str(self.out)).tables[0]
        sentence = next(p for p in table.rows[2].cells[0].paragraphs if "fell" in p.text)
        self.assertEqual([r.text for r in sentence.runs], ["The ", "Apple", " fell."])
        self.assertTrue(sentence.runs[1].bold)
        self.assertTrue(sentence.runs[1].italic)
        self.assertFalse(sentence.runs[0].bold)

    def test_footer_gets_created_date(self):
        self._expand(RECORDS)
        footer = Document(str(self.out)).sections[0].footer
        self.assertEqual(footer.paragraphs[0].text, "Generated 11/07/2024 09:00 AM")

    def test_body_rows_do_not_split_across_pages(self):
        self._expand(RECORDS[:2])
        table = Document(str(self.out)).tables[0]
        for i in (2, 4):
            tr_pr = table.rows[i]._tr.trPr
            self.assertIsNotNone(tr_pr)
            self.assertEqual(len(tr_pr.xpath("./w:cantSplit")), 1)

    def test_document_without_table_is_rejected(self):
        plain = self.dir / "plain.docx"
        doc = Document()
        doc.add_paragraph("{{word}}")
        doc.save(str(plain))
        with self.assertRaises(TemplateError):
            WordListRenderer(plain, self.out)


if __name__ == "__main__":
    unittest.main()
