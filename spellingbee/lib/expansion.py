"""
Template expansion engine

Turns a four-block template (title, interstitial, body, conclusion) plus N
word records into the block sequence

    title, interstitial, body(0), interstitial, body(1), ..., body(N-1), conclusion

The engine only talks to a BlockRenderer, so the same state machine drives
slide decks (block = slide) and word lists (block = table row).
"""

from __future__ import annotations

import logging
import os
import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .. import config
from ..errors import EmphasisNotFound, TemplateError, ValidationError
from ..models import ExpansionResult, RoundContext, WordRecord
from .emphasis import locate

logger = logging.getLogger("spellingbee.expansion")

PLACEHOLDER_RE = re.compile(r"\{\{([^{}]*)\}\}")

GLOBAL_PLACEHOLDERS = frozenset({"year", "event_date", "event_name", "created_date"})
ROLE_NAMES = ("title", "interstitial", "body", "conclusion")


def token(name: str) -> str:
    return "{{" + name + "}}"


def placeholders_in(text: str) -> set[str]:
    return {name.strip() for name in PLACEHOLDER_RE.findall(text)}


@dataclass(frozen=True)
class BlockRole:
    """One role of the template: where it sits and which placeholders it may hold."""

    name: str
    position: int
    required: frozenset[str] = field(default_factory=frozenset)
    allowed: frozenset[str] = field(default_factory=frozenset)

    def permits(self, placeholder: str) -> bool:
        return placeholder in self.allowed or placeholder in GLOBAL_PLACEHOLDERS


class TemplateBlockSet:
    """The fixed shape of a template, validated when constructed."""

    def __init__(self, roles: Sequence[BlockRole]):
        roles = tuple(sorted(roles, key=lambda role: role.position))
        names = [role.name for role in roles]

        bodies = [role for role in roles if role.name == "body"]
        if len(bodies) != 1:
            raise TemplateError(f"Template must have exactly one body block, found {len(bodies)}")
        if "word" not in bodies[0].required:
            raise TemplateError("Body block must require the {{word}} placeholder")

        missing = [name for name in ROLE_NAMES if name not in names]
        if missing or len(set(names)) != len(names):
            raise TemplateError(f"Template roles must be {', '.join(ROLE_NAMES)} once each, got {', '.join(names)}")

        positions = [role.position for role in roles]
        if positions != list(range(len(roles))):
            raise TemplateError(f"Block positions must be 0..{len(roles) - 1}, got {positions}")

        self.roles = roles
        self._by_name = {role.name: role for role in roles}

    @classmethod
    def default(
        cls,
        title: int = config.TITLE_BLOCK,
        interstitial: int = config.INTERSTITIAL_BLOCK,
        body: int = config.BODY_BLOCK,
        conclusion: int = config.CONCLUSION_BLOCK,
    ) -> TemplateBlockSet:
        return cls(
            [
                BlockRole("title", title, allowed=frozenset({"round"})),
                BlockRole("interstitial", interstitial, allowed=frozenset({"round"})),
                BlockRole(
                    "body",
                    body,
                    required=frozenset({"word"}),
                    allowed=frozenset({"index", "word", "pronunciation", "definition", "sentence"}),
                ),
                BlockRole("conclusion", conclusion, allowed=frozenset({"round"})),
            ]
        )

    def role(self, name: str) -> BlockRole:
        return self._by_name[name]

    def __len__(self):
        return len(self.roles)


class BlockRenderer(ABC):
    """
    Output medium seen by the engine.

    Positions are 0-based; move(block, position) leaves the block at index
    `position` of blocks(). get_text() joins paragraph texts with "\\n" and
    set_emphasis() offsets index that string, end exclusive.
    """

    emphasis_styles: tuple[str, ...] = ("bold",)

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)
        self._partial_path = self.output_path.with_name(f".{self.output_path.name}.partial")

    @abstractmethod
    def blocks(self) -> list: ...

    @abstractmethod
    def duplicate(self, block): ...

    @abstractmethod
    def move(self, block, position: int) -> None: ...

    @abstractmethod
    def remove(self, block) -> None: ...

    @abstractmethod
    def substitute_text(self, block, token: str, value: str) -> int: ...

    @abstractmethod
    def set_emphasis(self, block, start: int, end: int, styles: Sequence[str]) -> None: ...

    @abstractmethod
    def get_text(self, block) -> str: ...

    @abstractmethod
    def _save(self, path: Path) -> None: ...

    def substitute_outside_blocks(self, token: str, value: str) -> int:
        """Replace a token in text that belongs to no block (headers, footers)."""
        return 0

    def get_outside_text(self) -> str:
        return ""

    def commit(self) -> Path:
        """Write the finished output; the target only appears once fully saved."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self._save(self._partial_path)
        os.replace(self._partial_path, self.output_path)
        logger.info(f"Created: {self.output_path}")
        return self.output_path

    def close(self) -> None:
        if self._partial_path.exists():
            self._partial_path.unlink()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class TemplateExpander:
    """Runs validate -> substitute -> snapshot -> emit -> cleanup -> verify on a renderer."""

    def __init__(
        self,
        renderer: BlockRenderer,
        block_set: TemplateBlockSet | None = None,
        interstitial_policy: str = config.INTERSTITIAL_POLICY,
        round_banner: str = config.ROUND_BANNER,
    ):
        if interstitial_policy not in config.INTERSTITIAL_POLICIES:
            raise ValueError(f"Unknown interstitial policy {interstitial_policy!r}")
        self.renderer = renderer
        self.block_set = block_set or TemplateBlockSet.default()
        self.interstitial_policy = interstitial_policy
        self.round_banner = round_banner

    def validate(self) -> dict:
        """Map role name -> template block, or raise TemplateError."""
        blocks = self.renderer.blocks()
        if len(blocks) != len(self.block_set):
            raise TemplateError(
                f"Template has {len(blocks)} blocks, expected {len(self.block_set)} "
                f"({', '.join(role.name for role in self.block_set.roles)})"
            )

        role_blocks = {}
        for role in self.block_set.roles:
            block = blocks[role.position]
            found = placeholders_in(self.renderer.get_text(block))
            missing = role.required - found
            if missing:
                raise TemplateError(
                    f"Template validation failed: {role.name} block (index {role.position}) "
                    f"missing {', '.join(token(m) for m in sorted(missing))}"
                )
            unknown = sorted(p for p in found if not role.permits(p))
            if unknown:
                raise TemplateError(
                    f"Template validation failed: {role.name} block (index {role.position}) "
                    f"has unsupported placeholder(s) {', '.join(token(u) for u in unknown)}"
                )
            role_blocks[role.name] = block

        unknown = sorted(
            p for p in placeholders_in(self.renderer.get_outside_text()) if p not in GLOBAL_PLACEHOLDERS | {"round"}
        )
        if unknown:
            raise TemplateError(f"Unsupported placeholder(s) outside blocks: {', '.join(token(u) for u in unknown)}")
        logger.debug("Template validation passed")
        return role_blocks

    def expand(self, records: Sequence[WordRecord], context: RoundContext) -> ExpansionResult:
        """
        Expand the template in place for the given records.

        Nothing is saved here; call renderer.commit() once this returns.

        Raises:
            TemplateError: template shape or placeholders are wrong
            ValidationError: output order or leftover placeholders are wrong
        """
        renderer = self.renderer
        roles = self.validate()
        title, interstitial, body, conclusion = (roles[name] for name in ROLE_NAMES)

        # Interstitial {{round}} is resolved per instance below.
        values = context.global_values()
        for block in renderer.blocks():
            for name, value in values.items():
                if name == "round" and block == interstitial:
                    continue
                renderer.substitute_text(block, token(name), value)
        for name, value in values.items():
            renderer.substitute_outside_blocks(token(name), value)

        # Pristine copies: every instance is duplicated from these, never from a filled block.
        pristine_body = renderer.duplicate(body)
        pristine_interstitial = renderer.duplicate(interstitial)
        leftovers = [body, pristine_body, pristine_interstitial]

        output = []
        self._place(title, output)

        if self.interstitial_policy == "keep-original":
            opening = interstitial
        else:
            opening = renderer.duplicate(pristine_interstitial)
            leftovers.append(interstitial)
        self._place(opening, output)
        renderer.substitute_text(opening, token("round"), self.round_banner.format(round=context.round_key))

        warnings = []
        for i, record in enumerate(records):
            instance = renderer.duplicate(pristine_body)
            self._place(instance, output)
            self._fill(instance, record, i + 1, warnings)

            if i < len(records) - 1:
                separator = renderer.duplicate(pristine_interstitial)
                self._place(separator, output)
                renderer.substitute_text(separator, token("round"), "")

        self._place(conclusion, output)
        renderer.substitute_text(conclusion, token("round"), context.round_key)

        for block in leftovers:
            renderer.remove(block)

        self._verify(output)
        logger.info(f"Expanded template: {len(records)} words, {len(output)} blocks")
        return ExpansionResult(block_count=len(output), word_count=len(records), warnings=warnings)

    def _place(self, block, output: list) -> None:
        self.renderer.move(block, len(output))
        output.append(block)

    def _fill(self, block, record: WordRecord, index: int, warnings: list) -> None:
        renderer = self.renderer
        fields = {
            "index": str(index),
            "word": record.word,
            "pronunciation": record.pronunciation,
            "definition": record.definition,
        }
        for name, value in fields.items():
            renderer.substitute_text(block, token(name), value)

        sentence_token = token("sentence")
        text = renderer.get_text(block)
        if sentence_token not in text:
            return
        base = text.index(sentence_token)
        renderer.substitute_text(block, sentence_token, record.sentence)
        if not record.sentence:
            return

        span = locate(record.sentence, record.word)
        if span is None:
            warning = EmphasisNotFound(record.word, record.sentence)
            logger.warning(str(warning))
            warnings.append(warning)
            return
        start, end = span
        renderer.set_emphasis(block, base + start, base + end, self.renderer.emphasis_styles)

    def _verify(self, output: list) -> None:
        actual = self.renderer.blocks()
        if len(actual) != len(output) or any(a != b for a, b in zip(actual, output)):
            raise ValidationError(f"Block order mismatch: expected {len(output)} blocks, renderer has {len(actual)}")

        for i, block in enumerate(actual):
            residue = PLACEHOLDER_RE.findall(self.renderer.get_text(block))
            if residue:
                raise ValidationError(
                    f"Block {i} still contains placeholder(s) {', '.join(token(r) for r in residue)}"
                )
        residue = PLACEHOLDER_RE.findall(self.renderer.get_outside_text())
        if residue:
            raise ValidationError(f"Text outside blocks still contains {', '.join(token(r) for r in residue)}")
