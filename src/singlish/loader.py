from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, NamedTuple, Tuple

from . import config as CFG
from .lexicon import Lexicon
from .models import DictionaryEntry, GraphemeRule
from .normalize import VIRAMA, ZWJ
from .table import GraphemeTable

log = logging.getLogger(__name__)

RAYANNA = "ර"
YAYANNA = "ය"
INHERENT = "-"   # sign column value for the inherent vowel


class TableFormatError(ValueError):
    """A data file line could not be parsed. Raised at load time only."""
    def __init__(self, path: str, line_no: int, reason: str) -> None:
        super().__init__(f"{path}:{line_no}: {reason}")
        self.path = path
        self.line_no = line_no
        self.reason = reason


class _Vowel(NamedTuple):
    latin: str
    independent: str
    sign: str        # "" for the inherent vowel
    priority: int


@dataclass(frozen=True)
class Tables:
    """Everything the engine reads: frozen rule table + lexicon. Shared, never mutated."""
    rules: GraphemeTable
    lexicon: Lexicon
    data_dir: str


# ---------------- file parsing ----------------

def _iter_rows(path: str, columns: Tuple[int, ...]) -> Iterator[Tuple[int, List[str]]]:
    """Yield (line_no, cells) for every data line; skip blanks and comments."""
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    with open(path, "r", encoding="utf-8") as f:
        for line_no, raw in enumerate(f, 1):
            line = raw.rstrip("\r\n")
            if not line.strip() or line.lstrip().startswith(CFG.COMMENT_PREFIX):
                continue
            cells = line.split("\t")
            if len(cells) not in columns:
                want = " or ".join(str(c) for c in columns)
                raise TableFormatError(path, line_no, f"expected {want} tab-separated columns, got {len(cells)}")
            if not cells[0]:
                raise TableFormatError(path, line_no, "empty pattern")
            yield line_no, cells


def _int(cell: str, path: str, line_no: int) -> int:
    try:
        return int(cell)
    except ValueError:
        raise TableFormatError(path, line_no, f"priority must be an integer, got {cell!r}") from None


def read_vowels(path: str) -> List[_Vowel]:
    out: List[_Vowel] = []
    for line_no, (latin, independent, sign, prio) in _iter_rows(path, (4,)):
        out.append(_Vowel(latin, independent, "" if sign == INHERENT else sign, _int(prio, path, line_no)))
    return out


def read_pairs(path: str) -> List[GraphemeRule]:
    """consonants.tsv / specials.tsv: latin, sinhala, priority."""
    out: List[GraphemeRule] = []
    for line_no, (latin, sinhala, prio) in _iter_rows(path, (3,)):
        if not sinhala:
            raise TableFormatError(path, line_no, "empty output")
        out.append(GraphemeRule(latin, sinhala, _int(prio, path, line_no)))
    return out


def read_exceptions(path: str) -> List[DictionaryEntry]:
    out: List[DictionaryEntry] = []
    for line_no, (word, sinhala) in _iter_rows(path, (2,)):
        if not sinhala:
            raise TableFormatError(path, line_no, "empty rendering")
        out.append(DictionaryEntry(word.strip().casefold(), sinhala))
    return out


def read_words(path: str) -> List[str]:
    return [cells[0].strip() for _, cells in _iter_rows(path, (1,))]


def read_units(path: str) -> Dict[str, str]:
    units: Dict[str, str] = {}
    for line_no, (letter, suffix) in _iter_rows(path, (2,)):
        if len(letter) != 1:
            raise TableFormatError(path, line_no, f"unit marker must be one letter, got {letter!r}")
        units[letter] = suffix
    return units


def read_vocabulary(path: str) -> Dict[str, int]:
    vocab: Dict[str, int] = {}
    for line_no, cells in _iter_rows(path, (1, 2)):
        vocab[cells[0].strip()] = _int(cells[1], path, line_no) if len(cells) == 2 else 1
    return vocab


# ---------------- rule expansion ----------------

def _consonant_rules(c: GraphemeRule, vowels: Iterable[_Vowel]) -> Iterator[GraphemeRule]:
    """
    Expand one consonant into:
      bare consonant (virama), consonant + each vowel sign,
      rakaransaya (C + r + vowel) and yansaya (C + y + vowel) conjuncts.
    """
    vowels = list(vowels)
    yield GraphemeRule(c.pattern, c.output + VIRAMA, c.priority)
    for v in vowels:
        yield GraphemeRule(c.pattern + v.latin, c.output + v.sign, c.priority + v.priority)

    conj_prio = c.priority + CFG.CONJUNCT_PRIORITY_OFFSET
    if CFG.BUILD_RAKARANSAYA and c.output != RAYANNA:
        for v in vowels:
            yield GraphemeRule(c.pattern + "r" + v.latin,
                               c.output + VIRAMA + ZWJ + RAYANNA + v.sign,
                               conj_prio + v.priority)
    if CFG.BUILD_YANSAYA and c.output != YAYANNA:
        for v in vowels:
            yield GraphemeRule(c.pattern + "y" + v.latin,
                               c.output + VIRAMA + ZWJ + YAYANNA + v.sign,
                               conj_prio + v.priority)


def build_rule_table(vowels: List[_Vowel], consonants: List[GraphemeRule],
                     specials: List[GraphemeRule]) -> GraphemeTable:
    table = GraphemeTable()
    table.insert_many(GraphemeRule(v.latin, v.independent, v.priority) for v in vowels)
    for c in consonants:
        table.insert_many(_consonant_rules(c, vowels))
    table.insert_many(specials)
    return table.freeze()


# ---------------- public API ----------------

def build_tables(data_dir: str | os.PathLike | None = None) -> Tables:
    """Read every data file under data_dir (default: config.DATA_DIR) and build fresh Tables."""
    root = Path(data_dir) if data_dir is not None else CFG.DATA_DIR
    if not root.is_dir():
        raise FileNotFoundError(str(root))

    def p(name: str) -> str:
        return str(root / name)

    log.info("Loading grapheme rules from %s", root)
    vowels = read_vowels(p(CFG.VOWELS_FILE))
    consonants = read_pairs(p(CFG.CONSONANTS_FILE))
    specials = read_pairs(p(CFG.SPECIALS_FILE))
    rules = build_rule_table(vowels, consonants, specials)
    log.info("Rule table ready: vowels=%d consonants=%d specials=%d rules=%d",
             len(vowels), len(consonants), len(specials), len(rules))

    lexicon = Lexicon(
        read_exceptions(p(CFG.EXCEPTIONS_FILE)),
        foreign=read_words(p(CFG.FOREIGN_FILE)),
        units=read_units(p(CFG.UNITS_FILE)),
        vocabulary=read_vocabulary(p(CFG.VOCABULARY_FILE)),
    )
    log.info("Lexicon ready: exceptions=%d foreign=%d vocabulary=%d",
             len(lexicon), len(lexicon.foreign_words), len(lexicon.vocabulary))
    return Tables(rules=rules, lexicon=lexicon, data_dir=str(root))


@lru_cache(maxsize=None)
def _cached_tables(data_dir: str) -> Tables:
    return build_tables(data_dir)


def load_tables(data_dir: str | os.PathLike | None = None) -> Tables:
    """
    Process-wide Tables for data_dir, built on first use and reused afterwards.
    The returned object is read-only; every engine and session shares it.
    """
    root = Path(data_dir) if data_dir is not None else CFG.DATA_DIR
    return _cached_tables(str(root.resolve()))
