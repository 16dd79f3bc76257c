from __future__ import annotations
from typing import List, Optional

from . import config as CFG
from .lexicon import Lexicon
from .models import Token, TokenKind
from .normalize import is_capitalized, is_digit, is_latin_letter, is_script_char, is_word_char

_EMPTY_LEXICON = Lexicon()


def classify_word(word: str, lexicon: Lexicon) -> TokenKind:
    """
    Decide whether a Latin letter run is transliterated or kept as-is.
    Dictionary hits always transliterate; listed loan words and (by default)
    capitalised words are foreign. Words with letters outside ASCII
    (Pokémon, Zürich) have no rules and are foreign as a whole.
    """
    if lexicon.lookup(word) is not None:
        return TokenKind.PHONETIC
    if lexicon.is_foreign(word):
        return TokenKind.FOREIGN
    if not word.isascii():
        return TokenKind.FOREIGN
    if CFG.CAPITALIZED_IS_FOREIGN and is_capitalized(word):
        return TokenKind.FOREIGN
    return TokenKind.PHONETIC


def _run_end(text: str, i: int, pred) -> int:
    n = len(text)
    while i < n and pred(text[i]):
        i += 1
    return i


def tokenize(text: str, lexicon: Optional[Lexicon] = None, start: int = 0) -> List[Token]:
    """
    Split text[start:] into typed tokens, left to right. Total: never raises
    for a str input.

    The concatenation of token texts equals text[start:] exactly. Token.start
    is an index into the full text, so a tail can be re-tokenized and spliced
    onto cached tokens.

    Rules:
      * a maximal run of Latin letters (with any combining accents) is one
        word; if the run is followed by
        "." and run + "." is a dictionary abbreviation the dot joins the word;
      * a maximal run of digits is a Number, optionally absorbing ONE trailing
        unit letter when no other letter follows it; otherwise the letters are
        split off as their own word;
      * a maximal run of whitespace is kept as one Whitespace token;
      * a run of letters from other scripts is passed through as Foreign;
      * any other single character is Punctuation.
    """
    lex = lexicon if lexicon is not None else _EMPTY_LEXICON
    tokens: List[Token] = []
    n = len(text)
    i = max(0, start)

    while i < n:
        ch = text[i]

        if ch.isspace():
            j = _run_end(text, i, str.isspace)
            tokens.append(Token(TokenKind.WHITESPACE, text[i:j], i))

        elif is_latin_letter(ch):
            j = _run_end(text, i, is_word_char)
            word = text[i:j]
            if j < n and text[j] == "." and lex.is_abbreviation(word):
                tokens.append(Token(TokenKind.PHONETIC, text[i:j + 1], i))
                j += 1
            else:
                tokens.append(Token(classify_word(word, lex), word, i))

        elif is_digit(ch):
            j = _run_end(text, i, is_digit)
            # "5000k" keeps its unit letter; "8ta" splits into "8" + "ta"
            if (j < n and lex.unit_suffix(text[j]) is not None
                    and not (j + 1 < n and is_latin_letter(text[j + 1]))):
                j += 1
            tokens.append(Token(TokenKind.NUMBER, text[i:j], i))

        elif is_script_char(ch):
            j = _run_end(text, i, is_script_char)
            tokens.append(Token(TokenKind.FOREIGN, text[i:j], i))

        else:
            j = i + 1
            tokens.append(Token(TokenKind.PUNCTUATION, ch, i))

        i = j

    return tokens
