"""
Best-effort spelling repair for Singlish words (off unless enabled).

A typed word that the dictionary and vocabulary.txt do not know is compared
with every known spelling. A known spelling exactly one keystroke away
(one letter swapped, doubled or dropped) replaces it. Slips near the start of
a word cost more than slips near the end, since the opening letters usually
decide the consonant being typed.
"""

from __future__ import annotations
import logging
from typing import Optional, Tuple

from . import config as CFG
from .lexicon import Lexicon
from .normalize import normalize_key

log = logging.getLogger(__name__)

# cost by 1-based position of the slip; later positions cost the fallback value
_SWAP_COST = {1: 5, 2: 4, 3: 3, 4: 2}
_EXTRA_OR_DROPPED_COST = {1: 10, 2: 8, 3: 6, 4: 4}
_SWAP_FALLBACK = 1
_EXTRA_OR_DROPPED_FALLBACK = 2


def _shared_head(a: str, b: str) -> int:
    n = min(len(a), len(b))
    i = 0
    while i < n and a[i] == b[i]:
        i += 1
    return i


def _slip(typed: str, known: str) -> Optional[Tuple[str, int]]:
    """
    How typed differs from known when they are one keystroke apart:
    ("swap" | "extra" | "dropped", 1-based position in typed), else None.
    """
    head = _shared_head(typed, known)
    grow = len(typed) - len(known)
    if grow == 0 and typed[head + 1:] == known[head + 1:]:
        return "swap", head + 1
    if grow == 1 and typed[head + 1:] == known[head:]:
        return "extra", head + 1
    if grow == -1 and typed[head:] == known[head + 1:]:
        return "dropped", head + 1
    return None


def within_1_edit(typed: str, known: str) -> Tuple[bool, int]:
    """
    (True, penalty) when typed is known or one slip away from it, else
    (False, 0). The penalty is 0 for an exact match and negative otherwise.
    """
    if typed == known:
        return True, 0
    if abs(len(typed) - len(known)) > 1:
        return False, 0
    slip = _slip(typed, known)
    if slip is None:
        return False, 0
    kind, pos = slip
    if kind == "swap":
        return True, -_SWAP_COST.get(pos, _SWAP_FALLBACK)
    return True, -_EXTRA_OR_DROPPED_COST.get(pos, _EXTRA_OR_DROPPED_FALLBACK)


def suggest(word: str, lexicon: Lexicon) -> Optional[str]:
    """
    Known spelling one slip away from word, or None.

    Words already known (vocabulary or dictionary) and words shorter than
    config.MIN_CORRECTABLE_LEN are never corrected. Among candidates the
    cheapest slip wins, then the more frequent spelling, then the
    alphabetically first.
    """
    typed = normalize_key(word)
    if len(typed) < CFG.MIN_CORRECTABLE_LEN or lexicon.is_known(typed):
        return None

    best: Optional[Tuple[int, int, str]] = None   # (cost, -freq, spelling)
    for known in lexicon.vocabulary:
        ok, penalty = within_1_edit(typed, known)
        if not ok:
            continue
        key = (-penalty, -lexicon.frequency(known), known)
        if best is None or key < best:
            best = key

    if best is None:
        return None
    log.debug("typo layer: %r -> %r (cost %d)", word, best[2], best[0])
    return best[2]
