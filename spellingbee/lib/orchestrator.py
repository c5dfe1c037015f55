"""Generate slide decks and word lists for every round of a year"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .. import config
from ..errors import EmptyResultSet, TemplateError
from ..models import ExpansionResult, GeneratedArtifact, RoundContext
from ..readers.excel_reader import RowSource
from .documents import WordListRenderer
from .expansion import TemplateExpander
from .extractor import extract_round_words
from .shuffle import shuffle
from .slides import SlideDeckRenderer
from .utils import safe_filename

logger = logging.getLogger("spellingbee.orchestrator")

SLIDES = "Slides"
WORDS = "Words"


@dataclass(frozen=True)
class RoundError:
    round_key: str
    stage: str  # "round", "Slides" or "Words"
    message: str


@dataclass
class GenerationReport:
    """What a run produced and what went wrong, per round."""

    year: str
    rounds: list[str] = field(default_factory=list)
    generated: list[GeneratedArtifact] = field(default_factory=list)
    errors: list[RoundError] = field(default_factory=list)
    warnings: list = field(default_factory=list)

    @property
    def succeeded_rounds(self) -> list[str]:
        """Rounds for which both the slide deck and the word list were written"""
        kinds = {}
        for artifact in self.generated:
            kinds.setdefault(artifact.round_key, set()).add(artifact.kind)
        return [r for r in self.rounds if kinds.get(r, set()) >= {SLIDES, WORDS}]

    def render(self) -> str:
        lines = [f"Year {self.year}: {len(self.succeeded_rounds)}/{len(self.rounds)} rounds generated"]
        for artifact in self.generated:
            lines.append(f"✅ Round {artifact.round_key} {artifact.kind}: {artifact.word_count} words -> {artifact.path}")
        for error in self.errors:
            label = f"Round {error.round_key}" if error.stage == "round" else f"Round {error.round_key} {error.stage}"
            lines.append(f"❌ {label}: {error.message}")
        if self.warnings:
            lines.append(f"⚠️  {len(self.warnings)} sentence(s) without the target word (not emphasised)")
        return "\n".join(lines)


def artifact_name(event_name: str, year: str, round_key: str, kind: str) -> str:
    """File name for a round artifact, e.g. 'BEF Spelling Bee 2024 - Round 1 - Slides.pptx'"""
    suffix = ".pptx" if kind == SLIDES else ".docx"
    return safe_filename(f"{event_name} {year} - Round {round_key} - {kind}") + suffix


class RoundOrchestrator:
    """Runs extract -> shuffle -> expand for each round, isolating failures per round and artifact."""

    def __init__(self, source: RowSource, cfg: config.GeneratorConfig | None = None, now: datetime | None = None):
        self.source = source
        self.config = cfg or config.GeneratorConfig()
        self.now = now

    def _context(self, year: str, round_key: str) -> RoundContext:
        now = self.now or datetime.now()
        return RoundContext(
            year=year,
            round_key=round_key,
            event_name=self.config.event_name,
            event_date=self.config.resolved_event_date(now),
            created_date=now.strftime(config.CREATED_DATE_FORMAT),
        )

    def run(self, year: str, rounds: list[str] | None = None) -> GenerationReport:
        """
        Generate materials for the given rounds (all round sheets when None).

        Never raises for a single round's failure; see the returned report.
        """
        year = str(year)
        report = GenerationReport(year=year)
        available = self.source.round_sheets()
        logger.info(f"Found {len(available)} round sheet(s): {', '.join(available) or 'none'}")

        if rounds is None:
            selected = list(available)
        else:
            selected = []
            for round_key in dict.fromkeys(rounds):
                if round_key in available:
                    selected.append(round_key)
                else:
                    logger.error(f"Round {round_key} not found in workbook")
                    report.rounds.append(round_key)
                    report.errors.append(RoundError(round_key, "round", "Round not found in workbook"))

        for round_key in selected:
            report.rounds.append(round_key)
            logger.info(f"Processing round {round_key}")
            try:
                self.generate_round(year, round_key, report)
            except EmptyResultSet as e:
                logger.error(f"Round {round_key}: {e}")
                report.errors.append(RoundError(round_key, "round", str(e)))
            except Exception as e:
                logger.exception(f"Round {round_key} failed: {e}")
                report.errors.append(RoundError(round_key, "round", str(e)))
        return report

    def generate_round(self, year: str, round_key: str, report: GenerationReport) -> None:
        extraction = extract_round_words(self.source.get_rows(round_key), year)
        if not extraction.records:
            raise EmptyResultSet(round_key, year)

        records = shuffle(extraction.records, round_key)
        context = self._context(year, round_key)
        outputs = (
            (SLIDES, SlideDeckRenderer, self.config.slides_template_path),
            (WORDS, WordListRenderer, self.config.doc_template_path),
        )
        for kind, renderer_cls, template_path in outputs:
            output_path = Path(self.config.output_dir) / artifact_name(self.config.event_name, year, round_key, kind)
            try:
                result = self._render(renderer_cls, template_path, output_path, records, context)
            except Exception as e:
                logger.exception(f"Round {round_key} {kind} failed: {e}")
                report.errors.append(RoundError(round_key, kind, str(e)))
                continue
            report.warnings.extend(result.warnings)
            report.generated.append(GeneratedArtifact(round_key, kind, output_path, result.word_count))

    def _render(self, renderer_cls, template_path, output_path, records, context) -> ExpansionResult:
        template_path = Path(template_path)
        if not template_path.exists():
            raise TemplateError(f"Template not found: {template_path}")
        with renderer_cls(template_path, output_path) as renderer:
            expander = TemplateExpander(
                renderer,
                interstitial_policy=self.config.interstitial_policy,
                round_banner=self.config.round_banner,
            )
            result = expander.expand(records, context)
            renderer.commit()
        return result
