from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Tuple

from . import config as CFG
from .correct import suggest
from .loader import Tables
from .models import Diagnostic, RenderedToken, Token, TokenKind, TransliterationResult
from .normalize import compose, is_digit
from .tokenizer import tokenize

log = logging.getLogger(__name__)


class Transliterator:
    """
    Stateless converter over shared, read-only Tables.

    For every phonetic word: exception dictionary first, then a left-to-right
    greedy longest-match scan of the grapheme table. Other tokens pass through
    verbatim, except a trailing unit letter on a number which is replaced by
    its Sinhala suffix.
    """

    def __init__(self, tables: Tables, *, correct_typos: Optional[bool] = None) -> None:
        self.tables = tables
        self.correct_typos = CFG.CORRECT_TYPOS if correct_typos is None else bool(correct_typos)

    # ------------- words -------------

    def transliterate_word(self, word: str) -> str:
        """Sinhala rendering of one Latin word. Total: unmapped letters come back as-is."""
        return self._render_word(word, 0)[0]

    def _render_word(self, word: str, offset: int) -> Tuple[str, List[Diagnostic]]:
        hit = self.tables.lexicon.lookup(word)
        if hit is not None:
            return hit, []

        diags: List[Diagnostic] = []
        if self.correct_typos:
            fixed = suggest(word, self.tables.lexicon)
            if fixed is not None:
                diags.append(Diagnostic("corrected", word, offset))
                hit = self.tables.lexicon.lookup(fixed)
                if hit is not None:
                    return hit, diags
                word = fixed

        rendered, unmapped = self._scan(word)
        for pos, frag in unmapped:
            log.debug("unmapped fragment %r at %d", frag, offset + pos)
            diags.append(Diagnostic("unmapped", frag, offset + pos))
        return rendered, diags

    # /* ~~~ greedy longest match, one rule per position, no backtracking ~~~ */
    def _scan(self, word: str) -> Tuple[str, List[Tuple[int, str]]]:
        """
        An upper-case letter that starts no rule is matched again against the
        lower-cased word, so "Mama" style typing still converts.
        """
        table = self.tables.rules
        lowered = "".join(c.lower() if c.isascii() else c for c in word)
        out: List[str] = []
        unmapped: List[Tuple[int, str]] = []
        i, n = 0, len(word)
        while i < n:
            rule = table.longest_match(word, i)
            if rule is None and word[i].isupper():
                rule = table.longest_match(lowered, i)
            if rule is None:
                # fallback: emit the letter unchanged and move on
                if unmapped and unmapped[-1][0] + len(unmapped[-1][1]) == i:
                    p, frag = unmapped[-1]
                    unmapped[-1] = (p, frag + word[i])
                else:
                    unmapped.append((i, word[i]))
                out.append(word[i])
                i += 1
                continue
            out.append(rule.output)
            i += len(rule.pattern)
        return compose("".join(out)), unmapped

    # ------------- tokens -------------

    def render_token(self, token: Token) -> Tuple[str, List[Diagnostic]]:
        if token.kind is TokenKind.PHONETIC:
            return self._render_word(token.text, token.start)
        if token.kind is TokenKind.NUMBER and token.text and not is_digit(token.text[-1]):
            suffix = self.tables.lexicon.unit_suffix(token.text[-1])
            if suffix is not None:
                return token.text[:-1] + suffix, []
        return token.text, []

    def render_tokens(self, tokens: Iterable[Token]) -> TransliterationResult:
        result = TransliterationResult()
        for tok in tokens:
            rendered, diags = self.render_token(tok)
            result.pairs.append(RenderedToken(tok, rendered))
            result.diagnostics.extend(diags)
        return result

    # ------------- full text -------------

    def tokenize(self, text: str, start: int = 0) -> List[Token]:
        return tokenize(text, self.tables.lexicon, start)

    def transliterate(self, text: str) -> TransliterationResult:
        if not isinstance(text, str):
            raise TypeError(f"expected str, got {type(text).__name__}")
        return self.render_tokens(self.tokenize(text))

    def translate(self, text: str) -> str:
        return self.transliterate(text).text
