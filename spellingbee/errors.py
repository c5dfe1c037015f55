"""Exceptions raised while generating round materials"""

from __future__ import annotations


class SpellingBeeError(Exception):
    """Base class for all generator errors."""


class ConfigurationError(SpellingBeeError):
    """Workbook or template does not have the structure the generator needs."""


class MissingColumn(ConfigurationError):
    """A required header (or the requested year header) is absent."""

    def __init__(self, missing: list[str], available: list[str]):
        self.missing = list(missing)
        self.available = list(available)
        super().__init__(
            f"Missing column(s) {', '.join(repr(m) for m in self.missing)}; "
            f"available headers: {', '.join(repr(a) for a in self.available) or '(none)'}"
        )


class TemplateError(ConfigurationError):
    """Template is missing a role block or a required placeholder."""


class ValidationError(SpellingBeeError):
    """Generated output failed its post-condition checks."""


class EmptyResultSet(SpellingBeeError):
    """No active words for a (round, year) pair."""

    def __init__(self, round_key: str, year: str):
        self.round_key = round_key
        self.year = year
        super().__init__(f"No words found for year {year}")


class EmphasisNotFound(SpellingBeeError):
    """Target word does not occur in its own sentence. Never raised, only collected."""

    def __init__(self, word: str, sentence: str):
        self.word = word
        self.sentence = sentence
        super().__init__(f"Could not find {word!r} in sentence: {sentence!r}")
