"""Slide deck renderer: one block per slide of a PowerPoint template"""

from __future__ import annotations

import logging
from copy import deepcopy
from pathlib import Path

from pptx import Presentation
from pptx.opc.constants import RELATIONSHIP_TYPE as RT
from pptx.oxml.ns import qn
from pptx.shapes.group import GroupShape
from pptx.text.text import _Run

from .expansion import BlockRenderer
from .runs import paragraph_text, replace_in_runs, split_runs

logger = logging.getLogger("spellingbee.slides")

R_NS = "{http://schemas.openxmlformats.org/officeDocument/2006/relationships}"

# Relationships a duplicated slide gets on its own from add_slide()
_SKIPPED_RELS = (RT.SLIDE_LAYOUT, RT.NOTES_SLIDE)


def _shape_paragraphs(shapes):
    """Paragraphs of text frames, table cells and grouped shapes, in shape order"""
    for shape in shapes:
        if isinstance(shape, GroupShape):
            yield from _shape_paragraphs(shape.shapes)
        elif shape.has_text_frame:
            yield from shape.text_frame.paragraphs
        elif shape.has_table:
            for cell in shape.table.iter_cells():
                yield from cell.text_frame.paragraphs


def _wrap_run(r, sibling):
    return _Run(r, sibling._parent)


class SlideDeckRenderer(BlockRenderer):
    """Expands a .pptx template; blocks are slides in presentation order."""

    emphasis_styles = ("bold",)

    def __init__(self, template_path: Path, output_path: Path):
        super().__init__(output_path)
        self.template_path = Path(template_path)
        self.prs = Presentation(str(self.template_path))
        logger.debug(f"Loaded template with {len(self.prs.slides)} slides")

    @property
    def _sld_id_lst(self):
        return self.prs.slides._sldIdLst

    def _sld_id(self, slide):
        for sld_id in self._sld_id_lst:
            if self.prs.part.related_part(sld_id.rId) is slide.part:
                return sld_id
        raise KeyError("Slide is not in the presentation")

    def blocks(self) -> list:
        return list(self.prs.slides)

    def duplicate(self, slide):
        """Copy a slide (shapes, background, media/link relationships) to just after it"""
        new = self.prs.slides.add_slide(slide.slide_layout)
        for shape in list(new.shapes):
            shape._element.getparent().remove(shape._element)

        rid_map = {}
        for rid, rel in slide.part.rels.items():
            if rel.reltype in _SKIPPED_RELS:
                continue
            if rel.is_external:
                rid_map[rid] = new.part.relate_to(rel.target_ref, rel.reltype, is_external=True)
            else:
                rid_map[rid] = new.part.relate_to(rel.target_part, rel.reltype)

        tree = new.shapes._spTree
        for child in slide.shapes._spTree.iterchildren():
            if child.tag in (qn("p:nvGrpSpPr"), qn("p:grpSpPr"), qn("p:extLst")):
                continue
            tree.insert_element_before(deepcopy(child), "p:extLst")

        c_sld = new._element.cSld
        src_bg = slide._element.cSld.find(qn("p:bg"))
        if src_bg is not None:
            old_bg = c_sld.find(qn("p:bg"))
            if old_bg is not None:
                c_sld.remove(old_bg)
            c_sld.insert(0, deepcopy(src_bg))

        for element in c_sld.iter():
            for attr, value in element.attrib.items():
                if attr.startswith(R_NS) and value in rid_map:
                    element.set(attr, rid_map[value])

        position = self.blocks().index(slide) + 1
        self.move(new, position)
        return new

    def move(self, slide, position: int) -> None:
        sld_id_lst = self._sld_id_lst
        sld_id = self._sld_id(slide)
        sld_id_lst.remove(sld_id)
        remaining = list(sld_id_lst)
        if position >= len(remaining):
            sld_id_lst.append(sld_id)
        else:
            remaining[position].addprevious(sld_id)

    def remove(self, slide) -> None:
        sld_id = self._sld_id(slide)
        rid = sld_id.rId
        self._sld_id_lst.remove(sld_id)
        if rid in self.prs.part.rels:
            self.prs.part.drop_rel(rid)

    def _paragraphs(self, slide):
        return list(_shape_paragraphs(slide.shapes))

    def substitute_text(self, slide, token: str, value: str) -> int:
        return sum(replace_in_runs(p.runs, token, value) for p in self._paragraphs(slide))

    def get_text(self, slide) -> str:
        return "\n".join(paragraph_text(p.runs) for p in self._paragraphs(slide))

    def set_emphasis(self, slide, start: int, end: int, styles) -> None:
        runs = split_runs([p.runs for p in self._paragraphs(slide)], start, end, _wrap_run)
        for run in runs:
            if "bold" in styles:
                run.font.bold = True
            if "italic" in styles:
                run.font.italic = True

    def _save(self, path: Path) -> None:
        self.prs.save(str(path))
