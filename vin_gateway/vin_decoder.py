"""
VIN decoder: check-digit validation, manufacturer (WMI) lookup and
model year decode.

Everything here is offline and table driven.  None of the functions
raise on bad input; they return a sentinel instead:

    is_valid_vin            -> False
    get_world_manufacturer  -> ""
    get_model_year          -> 0

Usage:
    from vin_gateway.vin_decoder import is_valid_vin, get_world_manufacturer, get_model_year
    is_valid_vin("1HGCM82633A004352")            # -> True
    get_world_manufacturer("1HGCM82633A004352")  # -> "Honda USA"
    get_model_year("1HGCM82633A004352", 1980)    # -> 2003
"""

import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from .tables import (
    CHARACTER_TRANSLITERATION,
    CHARACTER_WEIGHTS,
    CHECK_DIGIT_INDEX,
    MODEL_YEAR_INDEX,
    VALID_CHECK_CHARACTERS,
    VIN_LENGTH,
    YEAR_CODES,
    YEAR_CYCLE,
)
from .wmi import get_wmi_table

logger = logging.getLogger(__name__)

# Check value -> check character ("X" stands for 10)
_CHECK_CHARACTER_FOR_VALUE: Dict[int, str] = {
    value: char for char, value in VALID_CHECK_CHARACTERS.items()
}


# ---------------------------------------------------------------------------
# Check digit (position 9)
# ---------------------------------------------------------------------------

def _weighted_sum(vin: str) -> Optional[int]:
    """Sum of weight * transliteration over all 17 positions, or None if
    any character is not a legal VIN character."""
    total = 0
    for weight, ch in zip(CHARACTER_WEIGHTS, vin):
        value = CHARACTER_TRANSLITERATION.get(ch)
        if value is None:
            return None
        total += weight * value
    return total


def is_valid_vin(vin: Optional[str]) -> bool:
    """
    Return True if ``vin`` is a 17-character VIN whose check digit matches.

    The input is taken as-is: lowercase letters, whitespace and the letters
    I, O and Q all make a VIN invalid.
    """
    if not isinstance(vin, str) or len(vin) != VIN_LENGTH:
        return False

    check_char = vin[CHECK_DIGIT_INDEX]
    if check_char not in VALID_CHECK_CHARACTERS:
        return False

    total = _weighted_sum(vin)
    if total is None:
        return False

    return total % 11 == VALID_CHECK_CHARACTERS[check_char]


def expected_check_digit(vin: Optional[str]) -> Optional[str]:
    """
    Return the check character the rest of ``vin`` calls for ("0"-"9" or "X").

    The character currently at position 9 is ignored (its weight is 0), so
    this also works on a VIN with a wrong check digit.  Returns None if the
    VIN has the wrong length or contains an illegal character elsewhere.
    """
    if not isinstance(vin, str) or len(vin) != VIN_LENGTH:
        return None
    # Any legal character will do at the check position
    total = _weighted_sum(vin[:CHECK_DIGIT_INDEX] + "0" + vin[CHECK_DIGIT_INDEX + 1:])
    if total is None:
        return None
    return _CHECK_CHARACTER_FOR_VALUE[total % 11]


# ---------------------------------------------------------------------------
# WMI -> manufacturer (positions 1-3)
# ---------------------------------------------------------------------------

def get_world_manufacturer(vin_or_prefix: Optional[str]) -> str:
    """
    Return the manufacturer name for a VIN or a bare WMI, or "" if unknown.

    The 3-character prefix is tried first (when the input is long enough),
    then the 2-character prefix.  The input is not validated, so partial
    VINs work too.
    """
    if not isinstance(vin_or_prefix, str) or len(vin_or_prefix) < 2:
        return ""

    table = get_wmi_table()

    if len(vin_or_prefix) > 2:
        name = table.get(vin_or_prefix[:3])
        if name is not None:
            return name

    return table.get(vin_or_prefix[:2], "")


# ---------------------------------------------------------------------------
# Model year (position 10)
# ---------------------------------------------------------------------------

def _current_year() -> int:
    return datetime.now().year


def get_model_year_from_char(year_char: Optional[str], start_year: int = 0) -> int:
    """
    Decode a model year code to a 4-digit year, or 0 if it isn't a year code.

    Codes repeat every 30 years, so ``start_year`` picks the cycle
    (e.g. 1980 or 2010).  If not given, the cycle containing the current
    year is used.  A result later than next year is taken to be from the
    previous cycle, since a model year can run at most one year ahead of
    the calendar.
    """
    offset = YEAR_CODES.get(year_char) if isinstance(year_char, str) else None
    if offset is None:
        return 0

    current = _current_year()
    if not start_year:
        start_year = (current // YEAR_CYCLE) * YEAR_CYCLE

    year = start_year + offset
    if year > current + 1:
        year -= YEAR_CYCLE
    return year


def get_model_year(vin: Optional[str], start_year: int = 0) -> int:
    """Decode the model year from the 10th character of ``vin`` (0 if unknown)."""
    if not isinstance(vin, str) or len(vin) <= MODEL_YEAR_INDEX:
        return 0
    return get_model_year_from_char(vin[MODEL_YEAR_INDEX], start_year)


# ---------------------------------------------------------------------------
# Full decode
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VinInfo:
    """Everything we can tell about a VIN without external data."""
    vin: str
    valid: bool
    wmi: str = ""
    manufacturer: str = ""
    model_year: int = 0
    check_digit: str = ""
    expected_check_digit: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def decode_vin(vin: Optional[str], start_year: int = 0) -> VinInfo:
    """
    Decode a VIN into a :class:`VinInfo`.

    Unlike the individual lookups, this strips surrounding whitespace and
    upper-cases the input first, since it's meant for user-typed VINs.
    Fields that can't be decoded keep their sentinel value.

    Args:
        vin: VIN as entered (any string, may be partial)
        start_year: first year of the 30-year cycle to decode against
            (0 = the cycle containing the current year)
    """
    vin = vin.strip().upper() if isinstance(vin, str) else ""
    valid = is_valid_vin(vin)
    logger.debug(f"Decoding VIN {vin[:6]}... (valid={valid})")

    return VinInfo(
        vin=vin,
        valid=valid,
        wmi=vin[:3],
        manufacturer=get_world_manufacturer(vin),
        model_year=get_model_year(vin, start_year),
        check_digit=vin[CHECK_DIGIT_INDEX] if len(vin) > CHECK_DIGIT_INDEX else "",
        expected_check_digit=expected_check_digit(vin),
    )
