"""Spelling bee round materials: slide decks and word lists from a word database"""

__version__ = "0.1.0"
