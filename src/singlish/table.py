from __future__ import annotations
from typing import Dict, Iterable, List, Optional
import bisect

from .models import GraphemeRule


class GraphemeTable:
    """
    Pattern index over the grapheme rules.
    Build-time: dict pattern -> best rule so far (insert/get).
    Frozen form: sorted patterns + parallel rule list, looked up with bisect,
    plus the set of pattern lengths so a scan only probes lengths that exist.
    A frozen table is read-only and safe to share between sessions and threads.
    """
    def __init__(self) -> None:
        self._building: Optional[Dict[str, GraphemeRule]] = {}
        self._frozen: bool = False
        self._keys: List[str] = []
        self._rules: List[GraphemeRule] = []
        self._lengths: List[int] = []   # descending

    # -------- Build-time API --------
    def insert(self, rule: GraphemeRule) -> None:
        if self._frozen:
            raise RuntimeError("GraphemeTable is frozen; cannot insert")
        if not rule.pattern:
            raise ValueError("grapheme rule with an empty pattern")
        assert self._building is not None
        current = self._building.get(rule.pattern)
        # equal priority: the later rule wins, so curated files can override
        if current is None or rule.priority >= current.priority:
            self._building[rule.pattern] = rule

    def insert_many(self, rules: Iterable[GraphemeRule]) -> int:
        n = 0
        for r in rules:
            self.insert(r); n += 1
        return n

    # -------- Freeze --------
    def freeze(self) -> "GraphemeTable":
        if self._frozen:
            return self
        assert self._building is not None
        items = sorted(self._building.items(), key=lambda kv: kv[0])
        self._keys = [k for k, _ in items]
        self._rules = [r for _, r in items]
        self._lengths = sorted({len(k) for k in self._keys}, reverse=True)
        self._building = None
        self._frozen = True
        return self

    # -------- Query --------
    def get(self, pattern: str) -> Optional[GraphemeRule]:
        if not self._frozen:
            assert self._building is not None
            return self._building.get(pattern)
        i = bisect.bisect_left(self._keys, pattern)
        if i != len(self._keys) and self._keys[i] == pattern:
            return self._rules[i]
        return None

    def longest_match(self, text: str, pos: int) -> Optional[GraphemeRule]:
        """
        Return the rule with the longest pattern matching text at pos, or None.
        Probes each known pattern length once, longest first; never backtracks
        behind pos.
        """
        if not self._frozen:
            raise RuntimeError("GraphemeTable must be frozen before matching")
        remaining = len(text) - pos
        for n in self._lengths:
            if n > remaining:
                continue
            rule = self.get(text[pos:pos + n])
            if rule is not None:
                return rule
        return None

    def __len__(self) -> int:
        if self._frozen:
            return len(self._keys)
        assert self._building is not None
        return len(self._building)

    def __contains__(self, pattern: str) -> bool:
        return self.get(pattern) is not None
