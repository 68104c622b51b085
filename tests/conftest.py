"""Shared test fixtures: pinned clock for model year decode."""

from __future__ import annotations

import pytest

from vin_gateway import vin_decoder

PINNED_YEAR = 2026


@pytest.fixture()
def pinned_year(monkeypatch: pytest.MonkeyPatch) -> int:
    """Freeze the decoder's notion of the current year."""
    monkeypatch.setattr(vin_decoder, "_current_year", lambda: PINNED_YEAR)
    return PINNED_YEAR
