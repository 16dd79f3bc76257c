# src/singlish/models.py
"""
Data models for the transliteration engine.

This module defines the small containers that flow between the tokenizer,
the rule table and the renderer:

- GraphemeRule: one Latin spelling and the Sinhala cluster it produces.
- DictionaryEntry: one curated whole-word rendering.
- Token / TokenKind: a typed, positioned span of the raw input.
- RenderedToken: a token plus the text shown for it.
- Diagnostic: a non-fatal note about degraded output.
- TransliterationResult: the ordered pairs returned to callers.

These classes do not contain business logic; they only structure the data so
that tokenizing, matching and rendering remain simple and predictable.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List


@dataclass(frozen=True, slots=True)
class GraphemeRule:
    """
    One entry of the grapheme rule table.

    Attributes
    ----------
    pattern : str
        The Latin spelling matched against the input. Matching is
        case-sensitive: capitals select retroflex or aspirated letters.
    output : str
        The Sinhala grapheme cluster emitted for the pattern. May span several
        code points (consonant + virama + ZWJ + consonant for conjuncts).
    priority : int
        Tie-breaker between rules sharing the same pattern; higher wins.
        Longer patterns always win over shorter ones regardless of priority.
    """
    pattern: str
    output: str
    priority: int = 0


@dataclass(frozen=True, slots=True)
class DictionaryEntry:
    """
    A curated rendering that overrides the rule table.

    Attributes
    ----------
    key : str
        Normalized Latin word (casefolded, trimmed). Abbreviations keep their
        trailing full stop, e.g. ``"ru."``.
    value : str
        The exact Sinhala rendering returned on a hit.
    """
    key: str
    value: str


class TokenKind(str, Enum):
    PHONETIC = "phonetic"
    FOREIGN = "foreign"
    NUMBER = "number"
    PUNCTUATION = "punctuation"
    WHITESPACE = "whitespace"


# kinds that terminate the word before them
BOUNDARY_KINDS = frozenset({TokenKind.WHITESPACE, TokenKind.PUNCTUATION})


@dataclass(frozen=True, slots=True)
class Token:
    """
    A contiguous span of the input.

    Attributes
    ----------
    kind : TokenKind
        Classification decided by the tokenizer.
    text : str
        The raw span, verbatim.
    start : int
        Index of the first character of the span in the full input.
    """
    kind: TokenKind
    text: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.text)

    @property
    def is_boundary(self) -> bool:
        return self.kind in BOUNDARY_KINDS


@dataclass(frozen=True, slots=True)
class RenderedToken:
    token: Token
    rendered: str


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """
    A note on degraded (never failed) output.

    kind is ``"unmapped"`` when a Latin fragment matched no rule and was
    emitted as-is, or ``"corrected"`` when the typo layer replaced a word.
    position is an index into the full input.
    """
    kind: str
    fragment: str
    position: int


@dataclass(slots=True)
class TransliterationResult:
    """
    The ordered (token, rendering) pairs for one input.

    Attributes
    ----------
    pairs : List[RenderedToken]
        One entry per token, in input order. Joining the raw token texts
        reconstructs the input exactly.
    diagnostics : List[Diagnostic]
        Degraded-output notes collected while rendering; empty when every
        fragment was covered by the dictionary or the rule table.
    """
    pairs: List[RenderedToken] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(p.rendered for p in self.pairs)

    @property
    def source(self) -> str:
        return "".join(p.token.text for p in self.pairs)

    def to_dict(self) -> dict:
        return {
            "input": self.source,
            "output": self.text,
            "tokens": [
                {"kind": p.token.kind.value, "text": p.token.text,
                 "start": p.token.start, "rendered": p.rendered}
                for p in self.pairs
            ],
            "diagnostics": [
                {"kind": d.kind, "fragment": d.fragment, "position": d.position}
                for d in self.diagnostics
            ],
        }
