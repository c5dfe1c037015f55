"""Generate spelling bee slide decks and word lists from the word database"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .lib.orchestrator import RoundOrchestrator
from .lib.templates import ensure_templates
from .lib.utils import find_path
from .logging_config import console, setup_logging
from .readers.excel_reader import WorkbookRowSource

logger = logging.getLogger("spellingbee.generate")


def parse_round_filter(value: str) -> list[str] | None:
    """'all' -> None (every round sheet); '1,2' -> ['1', '2']"""
    value = value.strip()
    if value.lower() == "all":
        return None
    rounds = [part.strip() for part in value.split(",") if part.strip()]
    if not rounds:
        raise ValueError(f"No rounds given in '{value}'")
    return rounds


def _round_filter(value):
    try:
        return parse_round_filter(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


class _ArgumentParser(argparse.ArgumentParser):
    """Argument errors exit with status 1 like every other failure"""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="spellingbee", description=__doc__)
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    gen = subparsers.add_parser("generate", help="Generate slides and word lists for a year")
    gen.add_argument("year", help='Year column header, e.g. "2024"')
    gen.add_argument("workbook", type=Path, help="Excel word database (.xlsx)")
    gen.add_argument("--rounds", type=_round_filter, default=None, help='"all" or a comma list like 1,2 (default: all)')
    gen.add_argument("--output-dir", type=Path, help=f"Output folder (default: {config.OUTPUT_DIR})")
    gen.add_argument("--slides-template", type=Path, help="Slide deck template (.pptx)")
    gen.add_argument("--doc-template", type=Path, help="Word list template (.docx)")
    gen.add_argument("--event-name", help=f'Event name (default: "{config.EVENT_NAME}")')
    gen.add_argument("--event-date", help="Event date text (default: today, e.g. Nov 7, 2024)")
    gen.add_argument("--interstitial-policy", choices=config.INTERSTITIAL_POLICIES, help="How the opening interstitial is produced")

    init = subparsers.add_parser("init-templates", help="Write the default templates")
    init.add_argument("directory", type=Path, nargs="?", default=None, help=f"Target folder (default: {config.TEMPLATES_DIR})")
    return parser


def _generate(args) -> int:
    cfg = config.load_config(
        output_dir=args.output_dir,
        slides_template=args.slides_template,
        doc_template=args.doc_template,
        event_name=args.event_name,
        event_date=args.event_date,
        interstitial_policy=args.interstitial_policy,
    )
    if not args.slides_template or not args.doc_template:
        cfg = cfg.with_overrides(templates_dir=find_path(str(cfg.templates_dir)))

    console.print(f"🚀 Spelling Bee Generator\n{'=' * 60}")
    console.print(f"📁 Output: {cfg.output_dir}\n")
    try:
        source = WorkbookRowSource(args.workbook)
    except Exception as e:
        logger.error(f"Could not read workbook: {e}")
        console.print(f"❌ {e}")
        return 1

    report = RoundOrchestrator(source, cfg).run(args.year, args.rounds)
    console.print(f"\n{'=' * 60}\n{report.render()}\n📁 Output: {cfg.output_dir}/")
    return 0 if report.succeeded_rounds else 1


def _init_templates(args) -> int:
    cfg = config.load_config(templates_dir=args.directory)
    slides, doc = ensure_templates(cfg)
    console.print(f"✅ Templates ready:\n  {slides}\n  {doc}")
    return 0


def main(argv=None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    if args.command == "init-templates":
        return _init_templates(args)
    return _generate(args)


if __name__ == "__main__":
    raise SystemExit(main())
