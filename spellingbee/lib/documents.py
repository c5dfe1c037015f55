"""Word list renderer: one block per row of the template's word table"""

from __future__ import annotations

import logging
from copy import deepcopy
from pathlib import Path

from docx import Document
from docx.oxml.ns import qn
from docx.text.paragraph import Paragraph
from docx.text.run import Run

from ..errors import TemplateError
from .expansion import BlockRenderer
from .runs import paragraph_text, replace_in_runs, split_runs

logger = logging.getLogger("spellingbee.documents")

WORD_TOKEN = "{{word}}"


class RowBlock:
    """A table row (w:tr); two blocks are equal when they wrap the same element."""

    def __init__(self, tr):
        self.tr = tr

    def __eq__(self, other):
        return isinstance(other, RowBlock) and self.tr is other.tr

    def __hash__(self):
        return id(self.tr)

    def __repr__(self):
        return f"RowBlock({id(self.tr):#x})"


def _wrap_run(r, sibling):
    return Run(r, sibling._parent)


def _element_text(element) -> str:
    return "".join(t.text or "" for t in element.iter(qn("w:t")))


class WordListRenderer(BlockRenderer):
    """
    Expands a .docx template whose blocks are the rows of one table.

    The block table is the first table mentioning {{word}}, or the first
    table when none does. Everything outside that table (body paragraphs,
    headers, footers) only takes document-wide values.
    """

    emphasis_styles = ("bold", "italic")

    def __init__(self, template_path: Path, output_path: Path):
        super().__init__(output_path)
        self.template_path = Path(template_path)
        self.doc = Document(str(self.template_path))
        tables = self.doc.tables
        if not tables:
            raise TemplateError(f"Document template has no table: {self.template_path.name}")
        self.table = next((t for t in tables if WORD_TOKEN in _element_text(t._tbl)), tables[0])
        logger.debug(f"Loaded template with {len(self.table._tbl.tr_lst)} table rows")

    def blocks(self) -> list:
        return [RowBlock(tr) for tr in self.table._tbl.tr_lst]

    def duplicate(self, block: RowBlock) -> RowBlock:
        new_tr = deepcopy(block.tr)
        block.tr.addnext(new_tr)
        return RowBlock(new_tr)

    def move(self, block: RowBlock, position: int) -> None:
        tr = block.tr
        tbl = tr.getparent()
        tbl.remove(tr)
        remaining = tbl.tr_lst
        if position < len(remaining):
            remaining[position].addprevious(tr)
        elif remaining:
            remaining[-1].addnext(tr)
        else:
            tbl.append(tr)

    def remove(self, block: RowBlock) -> None:
        block.tr.getparent().remove(block.tr)

    def _paragraphs(self, block: RowBlock) -> list[Paragraph]:
        return [Paragraph(p, self.table) for p in block.tr.iter(qn("w:p"))]

    def substitute_text(self, block: RowBlock, token: str, value: str) -> int:
        return sum(replace_in_runs(p.runs, token, value) for p in self._paragraphs(block))

    def get_text(self, block: RowBlock) -> str:
        return "\n".join(paragraph_text(p.runs) for p in self._paragraphs(block))

    def set_emphasis(self, block: RowBlock, start: int, end: int, styles) -> None:
        runs = split_runs([p.runs for p in self._paragraphs(block)], start, end, _wrap_run)
        for run in runs:
            if "bold" in styles:
                run.bold = True
            if "italic" in styles:
                run.italic = True

    def _outside_paragraphs(self) -> list[Paragraph]:
        tbl = self.table._tbl
        paragraphs = [
            Paragraph(p, self.doc._body)
            for p in self.doc.element.body.iter(qn("w:p"))
            if not any(ancestor is tbl for ancestor in p.iterancestors(qn("w:tbl")))
        ]
        seen = []
        for section in self.doc.sections:
            for part in (
                section.header,
                section.footer,
                section.first_page_header,
                section.first_page_footer,
                section.even_page_header,
                section.even_page_footer,
            ):
                # Linked headers/footers have no part of their own; touching _element would add one
                if part.is_linked_to_previous:
                    continue
                element = part._element
                if any(element is other for other in seen):
                    continue
                seen.append(element)
                paragraphs.extend(Paragraph(p, part) for p in element.iter(qn("w:p")))
        return paragraphs

    def substitute_outside_blocks(self, token: str, value: str) -> int:
        return sum(replace_in_runs(p.runs, token, value) for p in self._outside_paragraphs())

    def get_outside_text(self) -> str:
        return "\n".join(paragraph_text(p.runs) for p in self._outside_paragraphs())

    def _save(self, path: Path) -> None:
        self.doc.save(str(path))
