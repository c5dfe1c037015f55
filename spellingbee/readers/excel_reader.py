"""
Excel Reader
Utilities for finding round sheets in the word database and reading their rows

This module provides:
- Round sheet detection from sheet names ("Round 1", "Round 2+", ...)
- Cached workbook reads with pandas (openpyxl engine)
- A row source handing header + data rows to the record extractor

Usage:
    from spellingbee.readers.excel_reader import WorkbookRowSource

    source = WorkbookRowSource(Path("bee-words.xlsx"))
    for round_key in source.round_sheets():
        rows = source.get_rows(round_key)
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path

import pandas as pd

from .. import config

logger = logging.getLogger("spellingbee.readers.excel_reader")

ROUND_SHEET_RE = re.compile(config.ROUND_SHEET_PATTERN)


def parse_round_key(sheet_name: str) -> str | None:
    """
    Extract the round identifier from a sheet name.

    Args:
        sheet_name: Worksheet name, e.g. "Round 3" or "Round 4+"

    Returns:
        Round identifier ("3") or None if the sheet is not a round sheet
    """
    match = ROUND_SHEET_RE.match(sheet_name)
    return match.group(1) if match else None


def _round_sort_key(round_key: str):
    return (int(round_key), round_key)


class RowSource(ABC):
    """Supplies header + data rows for each round."""

    @abstractmethod
    def round_sheets(self) -> dict[str, str]:
        """Map round identifier -> sheet name, in round order."""

    @abstractmethod
    def get_rows(self, round_key: str) -> list[list]:
        """Rows of a round, first row holding the headers."""


class InMemoryRowSource(RowSource):
    """Row source over already-loaded sheets ({sheet name: rows})."""

    def __init__(self, sheets: dict[str, list]):
        self.sheets = sheets
        self._round_sheets = self._find_round_sheets()

    def _find_round_sheets(self) -> dict[str, str]:
        rounds = {}
        for sheet_name in self.sheets:
            round_key = parse_round_key(sheet_name)
            if round_key is None:
                logger.debug(f"Skipping sheet named '{sheet_name}'")
                continue
            if round_key in rounds:
                logger.warning(
                    f"Sheets '{rounds[round_key]}' and '{sheet_name}' are both round {round_key}; using '{sheet_name}'"
                )
            rounds[round_key] = sheet_name
        return dict(sorted(rounds.items(), key=lambda item: _round_sort_key(item[0])))

    def round_sheets(self) -> dict[str, str]:
        return dict(self._round_sheets)

    def get_rows(self, round_key: str) -> list[list]:
        return self.sheets[self._round_sheets[round_key]]


@lru_cache(maxsize=16)
def _read_workbook_cached(excel_file_str: str, mtime: float) -> dict[str, tuple[tuple, ...]]:
    """
    Read every sheet of a workbook as raw rows (internal use).

    Rows are returned as tuples so the cached value cannot be mutated; NaN
    cells become None. mtime is part of the cache key so edits are picked up.
    """
    sheets = pd.read_excel(excel_file_str, sheet_name=None, header=None, dtype=object, engine="openpyxl")
    result = {}
    for sheet_name, df in sheets.items():
        # Keep blank rows inside the data, drop the trailing ones
        filled = df.notna().any(axis=1).to_numpy().nonzero()[0]
        df = df.iloc[: filled[-1] + 1] if len(filled) else df.iloc[0:0]
        df = df.astype(object).where(pd.notna(df), None)
        result[str(sheet_name)] = tuple(tuple(row) for row in df.values.tolist())
        logger.debug(f"Read sheet '{sheet_name}': {len(df)} rows x {len(df.columns)} columns")
    return result


def read_workbook(excel_file: Path) -> dict[str, tuple[tuple, ...]]:
    """Read all sheets of an Excel workbook (with caching)."""
    excel_file = Path(excel_file)
    return _read_workbook_cached(str(excel_file.absolute()), excel_file.stat().st_mtime)


class WorkbookRowSource(InMemoryRowSource):
    """Row source backed by an .xlsx word database."""

    def __init__(self, excel_file: Path):
        self.excel_file = Path(excel_file)
        if not self.excel_file.exists():
            raise FileNotFoundError(f"Workbook not found: {self.excel_file}")
        logger.info(f"Reading Excel file: {self.excel_file.name}")
        sheets = read_workbook(self.excel_file)
        logger.info(f"Sheet names: {', '.join(sheets)}")
        super().__init__({name: [list(row) for row in rows] for name, rows in sheets.items()})
