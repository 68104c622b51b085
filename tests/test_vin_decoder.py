"""Tests for check digit validation, manufacturer lookup and model year decode."""

from __future__ import annotations

from datetime import datetime

import pytest

from vin_gateway import (
    VinInfo,
    decode_vin,
    expected_check_digit,
    get_model_year,
    get_model_year_from_char,
    get_world_manufacturer,
    is_valid_vin,
)
from vin_gateway.tables import CHARACTER_TRANSLITERATION, CHECK_DIGIT_INDEX

HONDA_VIN = "1HGCM82633A004352"
# Same VIN with the serial changed so the remainder is 10
X_CHECK_VIN = "1HGCM826X3A004350"
TESLA_VIN = "5YJSA1E14FF101183"

# ── Validation ────────────────────────────────────────────────────


class TestIsValidVin:
    @pytest.mark.parametrize("vin", [HONDA_VIN, X_CHECK_VIN, "11111111111111111"])
    def test_valid(self, vin: str):
        assert is_valid_vin(vin) is True

    @pytest.mark.parametrize("vin", [
        None,
        "",
        "1HGCM82633A00435",     # 16
        "1HGCM82633A0043521",   # 18
        "1",
        " " * 17,
    ])
    def test_wrong_length_or_empty(self, vin):
        assert is_valid_vin(vin) is False

    @pytest.mark.parametrize("bad", ["I", "O", "Q"])
    def test_excluded_letters(self, bad: str):
        for pos in range(17):
            if pos == CHECK_DIGIT_INDEX:
                continue
            vin = HONDA_VIN[:pos] + bad + HONDA_VIN[pos + 1:]
            assert is_valid_vin(vin) is False

    def test_check_character_outside_alphabet(self):
        # "A" is a legal VIN character but not a legal check digit
        assert is_valid_vin(HONDA_VIN[:8] + "A" + HONDA_VIN[9:]) is False

    def test_wrong_check_digit(self):
        assert is_valid_vin(HONDA_VIN[:8] + "4" + HONDA_VIN[9:]) is False
        assert is_valid_vin("1HGCM82633A004350") is False

    def test_case_sensitive(self):
        assert is_valid_vin(HONDA_VIN.lower()) is False

    def test_not_stripped(self):
        assert is_valid_vin(f" {HONDA_VIN}") is False

    def test_single_character_mutation_flips_result(self):
        # Weights and value deltas are both non-zero mod 11, so any change to
        # a non-check position that changes the transliterated value is caught.
        for pos in range(17):
            if pos == CHECK_DIGIT_INDEX:
                continue
            original = CHARACTER_TRANSLITERATION[HONDA_VIN[pos]]
            for ch, value in CHARACTER_TRANSLITERATION.items():
                if value == original:
                    continue
                mutated = HONDA_VIN[:pos] + ch + HONDA_VIN[pos + 1:]
                assert is_valid_vin(mutated) is False, mutated

    def test_same_transliteration_value_is_undetectable(self):
        # "H" and "Y" both transliterate to 8
        assert is_valid_vin("1YGCM82633A004352") is True

    def test_idempotent(self):
        assert [is_valid_vin(HONDA_VIN) for _ in range(5)] == [True] * 5


class TestExpectedCheckDigit:
    def test_matches_actual_for_valid_vin(self):
        assert expected_check_digit(HONDA_VIN) == "3"

    def test_ignores_current_check_character(self):
        assert expected_check_digit(HONDA_VIN[:8] + "Z" + HONDA_VIN[9:]) == "3"

    def test_ten_is_x(self):
        assert expected_check_digit("1HGCM82633A004350") == "X"

    @pytest.mark.parametrize("vin", [None, "", "1HGCM8263", "1HGCM82633A00435O"])
    def test_undecodable(self, vin):
        assert expected_check_digit(vin) is None


# ── Manufacturer ──────────────────────────────────────────────────


class TestGetWorldManufacturer:
    def test_two_character_prefix(self):
        assert get_world_manufacturer(HONDA_VIN) == "Honda USA"

    def test_three_character_prefix_wins(self):
        assert get_world_manufacturer(TESLA_VIN) == "Tesla Motors"
        assert get_world_manufacturer("1G1YY22G965104380") == "Chevrolet USA"

    def test_falls_back_to_two_characters(self):
        # "1GX" is not in the table but "1G" is
        assert get_world_manufacturer("1GX") == "General Motors USA"

    def test_bare_wmi(self):
        assert get_world_manufacturer("WBA") == "BMW"
        assert get_world_manufacturer("1H") == "Honda USA"

    def test_two_character_input_skips_three_character_lookup(self):
        assert get_world_manufacturer("1G") == "General Motors USA"
        assert get_world_manufacturer("5Y") == ""

    @pytest.mark.parametrize("value", [None, "", "1", "00", "QQQ", 123, ["1", "H", "G"], b"1HG"])
    def test_not_found_or_not_a_string(self, value):
        assert get_world_manufacturer(value) == ""

    def test_case_sensitive(self):
        assert get_world_manufacturer("wba") == ""

    def test_partial_vin(self):
        assert get_world_manufacturer("JMZ") == "Mazda"
        assert get_world_manufacturer("JMZBK") == "Mazda"

    def test_idempotent(self):
        results = {get_world_manufacturer(TESLA_VIN) for _ in range(5)}
        assert results == {"Tesla Motors"}


# ── Model year ────────────────────────────────────────────────────


class TestGetModelYearFromChar:
    @pytest.mark.parametrize("code, start_year, expected", [
        ("A", 1980, 1980),
        ("A", 2010, 2010),
        ("Y", 1980, 2000),
        ("1", 1980, 2001),
        ("9", 1980, 2009),
        ("L", 2010, 2020),
    ])
    def test_explicit_start_year(self, pinned_year, code, start_year, expected):
        assert get_model_year_from_char(code, start_year) == expected

    def test_folds_back_past_next_year(self, pinned_year):
        # 2010 + 20 = 2030 is beyond 2027, so it belongs to the previous cycle
        assert get_model_year_from_char("Y", 2010) == 2000

    @pytest.mark.parametrize("code, expected", [
        ("A", 2010),
        ("T", 2026),
        ("V", 2027),   # next year is still a valid model year
        ("W", 1998),
        ("9", 2009),
    ])
    def test_default_start_year(self, pinned_year, code, expected):
        assert get_model_year_from_char(code) == expected

    @pytest.mark.parametrize("code", ["I", "O", "Q", "U", "Z", "0", "a", "", "AB", None])
    def test_unknown_code(self, pinned_year, code):
        assert get_model_year_from_char(code) == 0
        assert get_model_year_from_char(code, 1980) == 0

    def test_real_clock_bound(self):
        current = datetime.now().year
        for code in "ABCDEFGHJKLMNPRSTVWXY123456789":
            year = get_model_year_from_char(code)
            assert current - 30 < year <= current + 1


class TestGetModelYear:
    def test_from_vin(self, pinned_year):
        assert get_model_year(HONDA_VIN, 1980) == 2003
        assert get_model_year(HONDA_VIN) == 2003

    def test_ten_characters_is_enough(self, pinned_year):
        assert get_model_year("1HGCM82633", 1980) == 2003

    @pytest.mark.parametrize("vin", [None, "", "1HGCM8263", 12345678901, list("1HGCM82633A004352")])
    def test_too_short_or_not_a_string(self, vin):
        assert get_model_year(vin) == 0
        assert get_model_year(vin, 1980) == 0

    def test_unknown_year_code(self):
        assert get_model_year("1HGCM8263U") == 0

    def test_idempotent(self, pinned_year):
        assert [get_model_year(HONDA_VIN) for _ in range(5)] == [2003] * 5
        assert [get_model_year(HONDA_VIN, 1980) for _ in range(5)] == [2003] * 5


# ── Full decode ───────────────────────────────────────────────────


class TestDecodeVin:
    def test_valid_vin(self, pinned_year):
        info = decode_vin(HONDA_VIN, 1980)
        assert info == VinInfo(
            vin=HONDA_VIN,
            valid=True,
            wmi="1HG",
            manufacturer="Honda USA",
            model_year=2003,
            check_digit="3",
            expected_check_digit="3",
        )

    def test_normalizes_input(self, pinned_year):
        info = decode_vin(f"  {HONDA_VIN.lower()}\n")
        assert info.vin == HONDA_VIN
        assert info.valid is True

    def test_invalid_vin_still_decodes_what_it_can(self, pinned_year):
        info = decode_vin(TESLA_VIN)
        assert info.valid is False
        assert info.manufacturer == "Tesla Motors"
        assert info.model_year == 2015
        assert info.check_digit == "4"
        assert info.expected_check_digit == "1"

    @pytest.mark.parametrize("vin", [None, "", 123, b"1HGCM82633A004352", ["1HGCM82633A004352"]])
    def test_empty_or_not_a_string(self, vin):
        info = decode_vin(vin)
        assert info.to_dict() == {
            "vin": "",
            "valid": False,
            "wmi": "",
            "manufacturer": "",
            "model_year": 0,
            "check_digit": "",
            "expected_check_digit": None,
        }
