"""
VIN Gateway - offline Vehicle Identification Number checks

Validates the ISO 3779 check digit and decodes the world manufacturer
and model year from a VIN using static tables.  No network, no database.
"""

__version__ = "1.0.0"

from vin_gateway.vin_decoder import (
    VinInfo,
    decode_vin,
    expected_check_digit,
    get_model_year,
    get_model_year_from_char,
    get_world_manufacturer,
    is_valid_vin,
)

__all__ = [
    "VinInfo",
    "decode_vin",
    "expected_check_digit",
    "get_model_year",
    "get_model_year_from_char",
    "get_world_manufacturer",
    "is_valid_vin",
]
