# src/singlish/session.py
"""
Incremental transliteration for live typing.

A Session is fed the full input on every change and returns the full
rendering. Tokens whose boundary has been observed are cached and reused
as-is; only the tail from the last stable boundary is re-tokenized and
re-rendered.

Stability
---------
The tokenizer never looks more than one character past the end of a token
(whitespace and letter runs stop at the first foreign character, a word
absorbs one following "." for abbreviations, a number absorbs one unit
letter only when the next character is not a letter). So a token is final
once the character right after it is known and is:

  * whitespace or punctuation, when the token is a word or number, or
  * anything at all, when the token itself is whitespace or punctuation.

Everything before a final token is final too. On update, the cached prefix
is reused up to the last final token whose end (plus that one lookahead
character) lies inside the common prefix of the old and new input. Deleting
a separating space therefore drops the cache at that point and the fused
word is resolved again from scratch.

A Session is single-writer state: one per input stream, not shared across
threads without external locking.
"""

from __future__ import annotations
import logging
from typing import List, Optional

from .loader import Tables, load_tables
from .models import Diagnostic, RenderedToken, Token, TransliterationResult
from .transliterate import Transliterator

log = logging.getLogger(__name__)


def _common_prefix_len(a: str, b: str) -> int:
    n = min(len(a), len(b))
    i = 0
    while i < n and a[i] == b[i]:
        i += 1
    return i


def _is_final(token: Token, following: Optional[Token]) -> bool:
    if following is None:
        return False
    return token.is_boundary or following.is_boundary


class Session:
    """One user's input stream. Call update() with the full text on every change."""

    def __init__(self, tables: Optional[Tables] = None, *,
                 transliterator: Optional[Transliterator] = None) -> None:
        if transliterator is None:
            transliterator = Transliterator(tables if tables is not None else load_tables())
        self._tr = transliterator
        self.reset()

    # ------------- lifecycle -------------

    def reset(self) -> None:
        """Forget everything (input cleared / stream ended)."""
        self._text: str = ""
        self._result = TransliterationResult()
        self._final: List[bool] = []
        self._stable_count: int = 0
        self.reused: int = 0
        self.fresh_diagnostics: List[Diagnostic] = []

    # ------------- query -------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def result(self) -> TransliterationResult:
        return self._result

    @property
    def stable_boundary(self) -> int:
        """Index in the current input up to which tokens are final."""
        if self._stable_count == 0:
            return 0
        return self._result.pairs[self._stable_count - 1].token.end

    def update(self, text: str) -> str:
        """Re-render for the new full input and return the full rendering."""
        if not isinstance(text, str):
            raise TypeError(f"expected str, got {type(text).__name__}")
        if not text:
            self.reset()
            return ""

        seen = set(self._result.diagnostics)
        keep = self._reusable_count(text)
        kept_pairs: List[RenderedToken] = self._result.pairs[:keep]
        kept_final = self._final[:keep]
        start = kept_pairs[-1].token.end if kept_pairs else 0

        tail = self._tr.render_tokens(self._tr.tokenize(text, start))
        diagnostics = [d for d in self._result.diagnostics if d.position < start] + tail.diagnostics

        pairs = kept_pairs + tail.pairs
        final = kept_final + [
            _is_final(p.token, pairs[keep + k + 1].token if keep + k + 1 < len(pairs) else None)
            for k, p in enumerate(tail.pairs)
        ]

        self._text = text
        self._result = TransliterationResult(pairs=pairs, diagnostics=diagnostics)
        self._final = final
        self._stable_count = max((i + 1 for i, f in enumerate(final) if f), default=0)
        self.reused = keep
        # what a UI has not shown yet for this stream
        self.fresh_diagnostics = [d for d in diagnostics if d not in seen]
        log.debug("session update: reused=%d rerendered=%d stable_boundary=%d",
                  keep, len(tail.pairs), self.stable_boundary)
        return self._result.text

    # ------------- internals -------------

    def _reusable_count(self, text: str) -> int:
        """Number of cached tokens that can be carried over unchanged."""
        if not self._result.pairs:
            return 0
        lcp = _common_prefix_len(self._text, text)
        for k in range(self._stable_count - 1, -1, -1):
            # the token and its one-character lookahead must be unchanged
            if self._final[k] and self._result.pairs[k].token.end < lcp:
                return k + 1
        return 0
