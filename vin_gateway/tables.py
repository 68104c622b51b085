"""
Static VIN tables: position weights, transliteration, check characters
and model-year codes.

All tables are built at import time and exposed read-only.  Nothing in
the package mutates them afterwards, so they can be shared freely
between threads.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

VIN_LENGTH = 17
CHECK_DIGIT_INDEX = 8     # 9th character
MODEL_YEAR_INDEX = 9      # 10th character
YEAR_CYCLE = 30

# ---------------------------------------------------------------------------
# Check digit weights (one per VIN position; the check digit itself is 0)
# ---------------------------------------------------------------------------

CHARACTER_WEIGHTS: Tuple[int, ...] = (
    8, 7, 6, 5, 4, 3, 2, 10, 0, 9, 8, 7, 6, 5, 4, 3, 2,
)

# ---------------------------------------------------------------------------
# Transliteration: VIN character -> numeric value for the checksum.
# I, O and Q never appear in a VIN and are absent.
# ---------------------------------------------------------------------------

CHARACTER_TRANSLITERATION: Mapping[str, int] = MappingProxyType({
    "A": 1, "B": 2, "C": 3, "D": 4, "E": 5, "F": 6, "G": 7, "H": 8,
    "J": 1, "K": 2, "L": 3, "M": 4, "N": 5,         "P": 7,         "R": 9,
    "S": 2, "T": 3, "U": 4, "V": 5, "W": 6, "X": 7, "Y": 8, "Z": 9,
    "0": 0, "1": 1, "2": 2, "3": 3, "4": 4,
    "5": 5, "6": 6, "7": 7, "8": 8, "9": 9,
})

# Check digit alphabet.  A remainder of 10 is written as "X".
VALID_CHECK_CHARACTERS: Mapping[str, int] = MappingProxyType({
    **{str(_i): _i for _i in range(10)},
    "X": 10,
})

# ---------------------------------------------------------------------------
# Model year codes (position 10).  The sequence repeats every 30 years:
# A=1980/2010, ..., Y=2000/2030, 1=2001/2031, ..., 9=2009/2039.
# ---------------------------------------------------------------------------

_YEAR_CODE_SEQUENCE = "ABCDEFGHJKLMNPRSTVWXY123456789"

YEAR_CODES: Mapping[str, int] = MappingProxyType({
    _c: _i for _i, _c in enumerate(_YEAR_CODE_SEQUENCE)
})
