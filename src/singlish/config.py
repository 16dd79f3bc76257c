from __future__ import annotations
import os
from pathlib import Path

# package root: src/singlish/
PACKAGE_ROOT = Path(__file__).resolve().parent

# where the rule table and dictionaries live (SINGLISH_DATA_DIR overrides)
DATA_DIR = Path(os.environ.get("SINGLISH_DATA_DIR") or PACKAGE_ROOT / "data")

# data file names inside DATA_DIR
VOWELS_FILE = "vowels.tsv"
CONSONANTS_FILE = "consonants.tsv"
SPECIALS_FILE = "specials.tsv"
EXCEPTIONS_FILE = "exceptions.tsv"
FOREIGN_FILE = "foreign.txt"
UNITS_FILE = "units.tsv"
VOCABULARY_FILE = "vocabulary.txt"

# lines starting with this are ignored in every data file
COMMENT_PREFIX = "#"

# composed form applied to every rendered word
NORMAL_FORM = "NFC"

# a capitalised word that misses the dictionary is passed through as foreign
CAPITALIZED_IS_FOREIGN = True

# /* ~~~ conjunct generation: consonant + r / y + vowel ~~~ */
BUILD_RAKARANSAYA = True
BUILD_YANSAYA = True
CONJUNCT_PRIORITY_OFFSET = -5

# optional best-effort typo layer (one edit against vocabulary.txt)
CORRECT_TYPOS = os.environ.get("SINGLISH_CORRECT_TYPOS") == "1"
MIN_CORRECTABLE_LEN = 3

# progress logging (set SINGLISH_VERBOSE=1 to enable)
VERBOSE = os.environ.get("SINGLISH_VERBOSE") == "1"
