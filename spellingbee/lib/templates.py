"""
Default templates
Builds the stock four-block slide deck and word-list document

Both templates follow the block layout the expander expects:
title, interstitial, body, conclusion. Every placeholder is written as a
single run so substitution never has to merge runs.
"""

from __future__ import annotations

import logging
from pathlib import Path

from docx import Document
from docx.enum.text import WD_PARAGRAPH_ALIGNMENT
from docx.oxml import OxmlElement
from pptx import Presentation
from pptx.enum.text import MSO_AUTO_SIZE, PP_ALIGN
from pptx.util import Inches

from .. import config
from .. import constants as c

logger = logging.getLogger("spellingbee.templates")


def _add_textbox(slide, left, top, width, height, text, size, color, bold=False):
    """Centered textbox, one paragraph per line and one run per paragraph"""
    textbox = slide.shapes.add_textbox(Inches(left), Inches(top), Inches(width), Inches(height))
    frame = textbox.text_frame
    frame.word_wrap = True
    frame.auto_size = MSO_AUTO_SIZE.NONE
    for i, line in enumerate(text.split("\n")):
        para = frame.paragraphs[0] if i == 0 else frame.add_paragraph()
        para.alignment = PP_ALIGN.CENTER
        if not line:
            continue
        run = para.add_run()
        run.text = line
        run.font.name = c.SLIDE_FONT
        run.font.size = size
        run.font.color.rgb = color
        if bold:
            run.font.bold = True
    return textbox


def _blank_slide(prs):
    slide = prs.slides.add_slide(prs.slide_layouts[c.BLANK_LAYOUT])
    fill = slide.background.fill
    fill.solid()
    fill.fore_color.rgb = c.WHITE
    return slide


def build_slide_template(path: Path) -> Path:
    """Write the default slide template (4:3, four slides) to path"""
    prs = Presentation()
    prs.slide_width = c.SLIDE_WIDTH
    prs.slide_height = c.SLIDE_HEIGHT

    title = _blank_slide(prs)
    _add_textbox(title, 0.5, 1.0, 9, 0.8, "{{event_date}}", c.TITLE_DATE_SIZE, c.GRAY)
    _add_textbox(title, 0.5, 2.3, 9, 1.5, "{{event_name}}\n{{year}}", c.TITLE_EVENT_SIZE, c.DARK_GREEN, bold=True)
    _add_textbox(title, 0.5, 4.6, 9, 0.8, "Spelling Bee Round {{round}}", c.TITLE_ROUND_SIZE, c.BLACK)

    # {{round}} here becomes the round banner on the opening slide and blank between words
    interstitial = _blank_slide(prs)
    _add_textbox(interstitial, 0.5, 0.8, 9, 1.2, "{{round}}", c.BANNER_SIZE, c.GREEN, bold=True)
    _add_textbox(interstitial, 0.5, 2.8, 9, 3.0, c.INTERSTITIAL_MESSAGE, c.INFO_SIZE, c.GRAY)

    body = _blank_slide(prs)
    _add_textbox(body, 0.5, 2.75, 9, 2.0, "{{word}}", c.WORD_SIZE, c.BLACK, bold=True)

    conclusion = _blank_slide(prs)
    _add_textbox(conclusion, 0.5, 2.5, 9, 2.5, c.CONCLUSION_MESSAGE, c.INFO_SIZE, c.DARK_GREEN)

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    prs.save(str(path))
    logger.info(f"Created slide template: {path}")
    return path


def _add_doc_run(para, text, size=None, bold=False, italic=False, color=None):
    run = para.add_run(text)
    if size:
        run.font.size = size
    if bold:
        run.bold = True
    if italic:
        run.italic = True
    if color:
        run.font.color.rgb = color
    return run


def build_document_template(path: Path) -> Path:
    """Write the default word-list template (one table, four rows) to path"""
    doc = Document()
    section = doc.sections[0]
    section.page_width = c.DOC_PAGE_WIDTH
    section.page_height = c.DOC_PAGE_HEIGHT
    for margin in ["left_margin", "right_margin", "top_margin", "bottom_margin"]:
        setattr(section, margin, c.DOC_MARGIN)

    normal = doc.styles["Normal"]
    normal.font.name = c.DOC_FONT
    normal.font.size = c.DOC_FONT_SIZE

    table = doc.add_table(rows=4, cols=1)
    title_cell, interstitial_cell, body_cell, conclusion_cell = (row.cells[0] for row in table.rows)

    para = title_cell.paragraphs[0]
    para.alignment = WD_PARAGRAPH_ALIGNMENT.CENTER
    _add_doc_run(para, "{{event_name}} {{year}}", c.DOC_TITLE_SIZE, bold=True, color=c.DOC_HEADING_COLOR)
    para = title_cell.add_paragraph()
    para.alignment = WD_PARAGRAPH_ALIGNMENT.CENTER
    _add_doc_run(para, "Round {{round}} Words", bold=True)
    para = title_cell.add_paragraph()
    para.alignment = WD_PARAGRAPH_ALIGNMENT.CENTER
    _add_doc_run(para, "{{event_date}}")

    # Spacer between word entries
    interstitial_cell.paragraphs[0].paragraph_format.space_after = c.DocPt(6)

    para = body_cell.paragraphs[0]
    para.paragraph_format.tab_stops.add_tab_stop(c.DOC_TAB_STOP)
    _add_doc_run(para, "{{index}}")
    _add_doc_run(para, ". ")
    _add_doc_run(para, "{{word}}", bold=True)
    _add_doc_run(para, "\t")
    _add_doc_run(para, "{{pronunciation}}")
    _add_doc_run(body_cell.add_paragraph(), "{{definition}}")
    body_cell.add_paragraph()
    _add_doc_run(body_cell.add_paragraph(), "{{sentence}}", italic=True)
    # Keep each word entry on one page
    table.rows[config.BODY_BLOCK]._tr.get_or_add_trPr().append(OxmlElement("w:cantSplit"))

    para = conclusion_cell.paragraphs[0]
    para.alignment = WD_PARAGRAPH_ALIGNMENT.CENTER
    _add_doc_run(para, "End of Round {{round}}", bold=True)

    footer = section.footer.paragraphs[0]
    footer.alignment = WD_PARAGRAPH_ALIGNMENT.RIGHT
    _add_doc_run(footer, "Generated {{created_date}}", c.DOC_FOOTER_SIZE)

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    doc.save(str(path))
    logger.info(f"Created document template: {path}")
    return path


def ensure_templates(cfg: config.GeneratorConfig) -> tuple[Path, Path]:
    """Create the default templates in cfg.templates_dir unless they already exist"""
    created = []
    for path, build in ((cfg.slides_template_path, build_slide_template), (cfg.doc_template_path, build_document_template)):
        if path.exists():
            logger.info(f"Template already exists, leaving it alone: {path}")
        else:
            build(path)
        created.append(path)
    return created[0], created[1]
