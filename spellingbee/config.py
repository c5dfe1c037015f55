"""Configuration for the round material generator"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

# Event
EVENT_NAME = "BEF Spelling Bee"
EVENT_DATE = None  # None = today's date when generating

# Paths
TEMPLATES_DIR = "templates"
SLIDES_TEMPLATE_NAME = "bee-slide-template.pptx"  # Located in templates/ folder
DOC_TEMPLATE_NAME = "bee-words-template.docx"
OUTPUT_DIR = "output"

# Workbook
WORD_COLUMN = "Word"
PRONUNCIATION_COLUMN = "Pronunciation"
DEFINITION_COLUMN = "Definition"
SENTENCE_COLUMN = "Sentence"
ROUND_SHEET_PATTERN = r"^Round\s+(\d+)(\s|\+)?$"

# Template block positions (0-based, same layout for slides and document rows)
TITLE_BLOCK = 0
INTERSTITIAL_BLOCK = 1
BODY_BLOCK = 2
CONCLUSION_BLOCK = 3

# Interstitial handling: "keep-original" or "duplicate-original"
INTERSTITIAL_POLICY = "keep-original"
ROUND_BANNER = "Round {round}"  # Text for {{round}} on the opening interstitial

# Date formats
CREATED_DATE_FORMAT = "%m/%d/%Y %I:%M %p"

INTERSTITIAL_POLICIES = ("keep-original", "duplicate-original")


def format_event_date(when: datetime | None = None) -> str:
    """Format a date like 'Nov 7, 2024'"""
    when = when or datetime.now()
    return f"{when:%b} {when.day}, {when.year}"


@dataclass(frozen=True)
class GeneratorConfig:
    """Immutable settings passed to the orchestrator and renderers."""

    event_name: str = EVENT_NAME
    event_date: str | None = EVENT_DATE
    templates_dir: Path = Path(TEMPLATES_DIR)
    slides_template: Path | None = None
    doc_template: Path | None = None
    output_dir: Path = Path(OUTPUT_DIR)
    interstitial_policy: str = INTERSTITIAL_POLICY
    round_banner: str = ROUND_BANNER

    def __post_init__(self):
        if self.interstitial_policy not in INTERSTITIAL_POLICIES:
            raise ValueError(
                f"Unknown interstitial policy {self.interstitial_policy!r}; "
                f"expected one of {', '.join(INTERSTITIAL_POLICIES)}"
            )

    @property
    def slides_template_path(self) -> Path:
        return self.slides_template or self.templates_dir / SLIDES_TEMPLATE_NAME

    @property
    def doc_template_path(self) -> Path:
        return self.doc_template or self.templates_dir / DOC_TEMPLATE_NAME

    def resolved_event_date(self, when: datetime | None = None) -> str:
        return self.event_date or format_event_date(when)

    def with_overrides(self, **overrides) -> GeneratorConfig:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_config(env_file: str | None = None, **overrides) -> GeneratorConfig:
    """
    Build configuration from defaults, environment (.env supported) and overrides.

    Environment variables: BEE_EVENT_NAME, BEE_EVENT_DATE, BEE_OUTPUT_DIR,
    BEE_TEMPLATES_DIR, BEE_INTERSTITIAL_POLICY.
    """
    load_dotenv(env_file)
    base = GeneratorConfig(
        event_name=os.getenv("BEE_EVENT_NAME", EVENT_NAME),
        event_date=os.getenv("BEE_EVENT_DATE") or EVENT_DATE,
        templates_dir=Path(os.getenv("BEE_TEMPLATES_DIR", TEMPLATES_DIR)),
        output_dir=Path(os.getenv("BEE_OUTPUT_DIR", OUTPUT_DIR)),
        interstitial_policy=os.getenv("BEE_INTERSTITIAL_POLICY", INTERSTITIAL_POLICY),
    )
    return base.with_overrides(**overrides)
