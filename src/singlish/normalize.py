from __future__ import annotations
import unicodedata

from .config import NORMAL_FORM

ZWJ = "\u200d"
VIRAMA = "\u0dca"


def normalize_key(text: str) -> str:
    """Dictionary key form: casefolded and trimmed. Inner characters are kept."""
    return text.strip().casefold()


def compose(text: str) -> str:
    """Join emitted clusters into one composed form (NFC by default)."""
    return unicodedata.normalize(NORMAL_FORM, text)


def is_latin_letter(ch: str) -> bool:
    """
    Any Latin-script letter, accented ones included. Only ASCII words are
    transliterated; the rest pass through whole.
    """
    if ch.isascii():
        return ch.isalpha()
    return ch.isalpha() and unicodedata.name(ch, "").startswith("LATIN ")


def is_combining_accent(ch: str) -> bool:
    """Decomposed diacritics (U+0301 and friends) that stay with the Latin letter before them."""
    return unicodedata.category(ch) == "Mn" and unicodedata.name(ch, "").startswith("COMBINING ")


def is_word_char(ch: str) -> bool:
    return is_latin_letter(ch) or is_combining_accent(ch)


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def is_script_char(ch: str) -> bool:
    """
    Letters of other scripts (already-typed Sinhala included) and the marks
    and joiners that attach to them. Runs of these are passed through.
    """
    if ch.isascii() or is_latin_letter(ch):
        return False
    if ch.isalpha() or ch == ZWJ:
        return True
    return unicodedata.category(ch).startswith("M")


def is_capitalized(word: str) -> bool:
    return bool(word) and word[0].isupper()
