from __future__ import annotations
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from .models import DictionaryEntry
from .normalize import normalize_key


class Lexicon:
    """
    Word-level data consulted before the rule table:

      * exceptions: curated whole-word renderings (the exception dictionary),
      * foreign:    loan words always kept in Latin script,
      * units:      letters written straight after a number and their suffix,
      * vocabulary: known spellings, only used by the optional typo layer.

    Keys are stored normalized (casefolded, trimmed). Instances are immutable
    once constructed.
    """

    def __init__(
        self,
        entries: Iterable[DictionaryEntry] = (),
        *,
        foreign: Iterable[str] = (),
        units: Optional[Mapping[str, str]] = None,
        vocabulary: Optional[Mapping[str, int]] = None,
    ) -> None:
        exceptions: Dict[str, str] = {}
        for e in entries:
            exceptions[normalize_key(e.key)] = e.value
        self._exceptions = MappingProxyType(exceptions)
        self._abbreviations = frozenset(k[:-1] for k in exceptions if k.endswith(".") and len(k) > 1)
        self._foreign = frozenset(normalize_key(w) for w in foreign if w.strip())
        # unit letters are matched as written: "k" is a unit, "K" is not
        self._units = MappingProxyType(dict(units or {}))
        vocab = {normalize_key(w): int(n) for w, n in (vocabulary or {}).items()}
        self._vocabulary = MappingProxyType(vocab)
        self._vocab_sorted: Tuple[str, ...] = tuple(sorted(vocab))

    # ---- exception dictionary ----
    def lookup(self, word: str) -> Optional[str]:
        """Exact rendering for word (case-insensitive, trimmed), or None."""
        return self._exceptions.get(normalize_key(word))

    def is_abbreviation(self, word: str) -> bool:
        """True when word + "." is a dictionary key."""
        return normalize_key(word) in self._abbreviations

    # ---- foreign words ----
    def is_foreign(self, word: str) -> bool:
        return normalize_key(word) in self._foreign

    @property
    def foreign_words(self) -> frozenset:
        return self._foreign

    # ---- numeral units ----
    def unit_suffix(self, letter: str) -> Optional[str]:
        return self._units.get(letter)

    # ---- vocabulary ----
    def is_known(self, word: str) -> bool:
        key = normalize_key(word)
        return key in self._vocabulary or key in self._exceptions

    def frequency(self, word: str) -> int:
        return self._vocabulary.get(normalize_key(word), 0)

    @property
    def vocabulary(self) -> Tuple[str, ...]:
        """Sorted vocabulary terms."""
        return self._vocab_sorted

    # ---- introspection ----
    def __len__(self) -> int:
        return len(self._exceptions)

    def __contains__(self, word: str) -> bool:
        return self.lookup(word) is not None
