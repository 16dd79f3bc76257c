"""
Singlish Transliteration Engine

This package converts Singlish (Sinhala written phonetically in Latin
letters) into Sinhala script. Mixed English/Sinhala text, punctuation and
numbers are handled, and a Session keeps already-typed words stable while the
user keeps typing.

The package is designed with a clean separation of concerns:
- Data files for the grapheme rules and the exception dictionary
- Tokenizing raw input into typed, positioned tokens
- Dictionary lookup, then greedy longest-match over the rule table
- Incremental re-rendering of only the word being typed

Main Functions:
    translate(text): Stateless full conversion
    Session().update(text): Incremental conversion for live typing

Example Usage:
    from singlish import translate, Session

    translate("mama paaree inne")        # 'මම පාරේ ඉන්නේ'

    s = Session()
    s.update("mama kae")
    s.update("mama kaeema kannavaa")     # 'මම කෑම කන්නවා'
"""

# src/singlish/__init__.py
from .engine import Engine
from .loader import Tables, TableFormatError, build_tables, load_tables
from .models import Diagnostic, RenderedToken, Token, TokenKind, TransliterationResult
from .session import Session
from .tokenizer import tokenize
from .transliterate import Transliterator

__version__ = "1.0.0"
__all__ = [
    "translate", "transliterate", "Engine", "Session", "Transliterator",
    "Tables", "TableFormatError", "build_tables", "load_tables", "tokenize",
    "Token", "TokenKind", "RenderedToken", "Diagnostic", "TransliterationResult",
]


def transliterate(text: str) -> TransliterationResult:
    """Token pairs and diagnostics for text, using the default tables."""
    return Transliterator(load_tables()).transliterate(text)


def translate(text: str) -> str:
    """Sinhala rendering of text, using the default tables."""
    return transliterate(text).text
