"""
Styling constants for the default slide and word-list templates
All brand colours, fonts and sizes live here
"""

from docx.shared import Inches as DocInches
from docx.shared import Pt as DocPt
from docx.shared import RGBColor as DocRGBColor
from pptx.dml.color import RGBColor
from pptx.util import Inches, Pt

# Brand colours
GREEN = RGBColor(0x94, 0xC6, 0x01)
DARK_GREEN = RGBColor(0x74, 0xA5, 0x0F)
BLACK = RGBColor(0x00, 0x00, 0x00)
WHITE = RGBColor(0xFF, 0xFF, 0xFF)
GRAY = RGBColor(0x71, 0x68, 0x5A)

# Slide layout (4:3 like the printed programme)
SLIDE_WIDTH = Inches(10)
SLIDE_HEIGHT = Inches(7.5)
BLANK_LAYOUT = 6

# Slide fonts
SLIDE_FONT = "Questrial"
TITLE_DATE_SIZE = Pt(24)
TITLE_EVENT_SIZE = Pt(32)
TITLE_ROUND_SIZE = Pt(22)
BANNER_SIZE = Pt(54)
INFO_SIZE = Pt(36)
WORD_SIZE = Pt(48)

# Slide messages
INTERSTITIAL_MESSAGE = "Spellers at Work\n\n..quiet please..."
CONCLUSION_MESSAGE = "This concludes\nRound {{round}}"

# Word list document
DOC_FONT = "Calibri"
DOC_FONT_SIZE = DocPt(20)
DOC_TITLE_SIZE = DocPt(24)
DOC_FOOTER_SIZE = DocPt(10)
DOC_PAGE_WIDTH = DocInches(8.5)  # Letter
DOC_PAGE_HEIGHT = DocInches(11)
DOC_MARGIN = DocInches(0.75)
DOC_TAB_STOP = DocInches(3.5)  # Pronunciation column
DOC_HEADING_COLOR = DocRGBColor(0x74, 0xA5, 0x0F)
