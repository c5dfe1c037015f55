"""Turn raw worksheet rows into validated word records for one year"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence

from .. import config
from ..errors import MissingColumn
from ..models import ExtractionResult, ExtractionStats, WordRecord

logger = logging.getLogger("spellingbee.extractor")

REQUIRED_COLUMNS = (
    config.WORD_COLUMN,
    config.PRONUNCIATION_COLUMN,
    config.DEFINITION_COLUMN,
    config.SENTENCE_COLUMN,
)


def header_text(value) -> str:
    """Coerce a header cell to the string it is matched against."""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def cell_text(value) -> str:
    """Cell value as trimmed text; None, NaN and whitespace become ''."""
    return header_text(value).strip()


def _cell(row, index: int):
    if isinstance(row, Mapping):
        return row.get(index)
    if index < len(row):
        return row[index]
    return None


def _headers(header_row) -> list[str]:
    if isinstance(header_row, Mapping):
        width = max(header_row.keys(), default=-1) + 1
        return [header_text(header_row.get(i)) for i in range(width)]
    return [header_text(h) for h in header_row]


def extract_round_words(rows: Sequence, year: str) -> ExtractionResult:
    """
    Extract the words active for a year from a round's rows.

    Args:
        rows: Header row followed by data rows; each row is a sequence or a
            column index -> value mapping
        year: Year column header, matched exactly (e.g. "2024", "2019Fall")

    Returns:
        ExtractionResult with records in source row order and skip counts

    Raises:
        MissingColumn: a required column or the year column is absent
    """
    headers = _headers(rows[0]) if rows else []
    missing = [name for name in (*REQUIRED_COLUMNS, year) if name not in headers]
    if missing:
        raise MissingColumn(missing, [h for h in headers if h])

    year_col = headers.index(year)
    word_col, pron_col, def_col, sent_col = (headers.index(name) for name in REQUIRED_COLUMNS)
    logger.debug(f"Found year column '{year}' at index {year_col}")

    records = []
    considered = skipped_no_year = skipped_no_word = 0
    for row in rows[1:]:
        considered += 1
        if not cell_text(_cell(row, year_col)):
            skipped_no_year += 1
            continue
        word = cell_text(_cell(row, word_col))
        if not word:
            skipped_no_word += 1
            continue
        records.append(
            WordRecord(
                word=word,
                pronunciation=cell_text(_cell(row, pron_col)),
                definition=cell_text(_cell(row, def_col)),
                sentence=cell_text(_cell(row, sent_col)),
            )
        )

    stats = ExtractionStats(
        considered_rows=considered,
        skipped_no_year_marker=skipped_no_year,
        skipped_no_word=skipped_no_word,
    )
    logger.info(
        f"Year {year}: found {len(records)} words, skipped {skipped_no_year} (no year marker), "
        f"skipped {skipped_no_word} (no word)"
    )
    return ExtractionResult(records=tuple(records), stats=stats)
