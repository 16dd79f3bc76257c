# src/singlish/engine.py
from __future__ import annotations

import os
import logging
from typing import Optional

from . import config as CFG
from .loader import Tables, build_tables, load_tables
from .models import TransliterationResult
from .session import Session
from .transliterate import Transliterator

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - the shared rule table + lexicon (loader.Tables),
      - the stateless converter (transliterate.Transliterator),
      - per-stream incremental state (session.Session).

    Public API (used by CLI/Flask/desktop):
      * build(data_dir, ...):  load tables -> attach converter
      * translate(text):       full re-derivation, returns Sinhala text
      * transliterate(text):   same, returns token pairs + diagnostics
      * new_session():         incremental state for one typing stream
      * shutdown():            drop references

    Tables for the default data directory are cached process-wide, so
    building many engines costs one load.
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self.tables: Optional[Tables] = None
        self._tr: Optional[Transliterator] = None

    # /* ~~~ Load the rule table and dictionaries and wire up the converter ~~~ */
    def build(
        self,
        data_dir: Optional[str] = None,
        *,
        correct_typos: Optional[bool] = None,   # None -> config.CORRECT_TYPOS
        fresh: bool = False,                    # bypass the process-wide cache
        verbose: bool = False,
    ) -> "Engine":
        if verbose:
            logging.basicConfig(level=logging.INFO)
            os.environ["SINGLISH_VERBOSE"] = "1"

        log.info("Loading tables from %s", data_dir or CFG.DATA_DIR)
        tables = build_tables(data_dir) if fresh else load_tables(data_dir)

        # Commit engine state
        self.tables = tables
        self._tr = Transliterator(tables, correct_typos=correct_typos)
        log.info("Engine build() complete: rules=%d exceptions=%d typo_layer=%s",
                 len(tables.rules), len(tables.lexicon), self._tr.correct_typos)
        return self

    # ------------- query -------------

    def translate(self, text: str) -> str:
        return self._require().translate(text)

    def transliterate(self, text: str) -> TransliterationResult:
        return self._require().transliterate(text)

    def transliterate_word(self, word: str) -> str:
        return self._require().transliterate_word(word)

    def new_session(self) -> Session:
        return Session(transliterator=self._require())

    # ------------- teardown -------------

    # /* ~~~ Release references; shared tables stay cached for other engines ~~~ */
    def shutdown(self) -> None:
        self._tr = None
        self.tables = None
        log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _require(self) -> Transliterator:
        if self._tr is None:
            raise RuntimeError("Engine not initialized. Call build() first.")
        return self._tr
