"""Tests for fixed-point rounding, sentinel filters and MAC helpers."""
import pytest

from ble2json.core.binary import (
    format_mac,
    in_range,
    is_mac,
    normalize_mac,
    not_sentinel,
    round_fixed,
    scaled,
)


def test_round_fixed_three_places():
    assert round_fixed(1.0364999) == 1.036
    assert round_fixed(1.0366) == 1.037
    assert round_fixed(-1.0366) == -1.037


def test_round_fixed_halves_away_from_zero():
    assert round_fixed(2.5, places=0) == 3.0
    assert round_fixed(-2.5, places=0) == -3.0
    assert round_fixed(0.5, places=0) == 1.0


def test_not_sentinel():
    assert not_sentinel(0xFFFF, 0xFFFF) is None
    assert not_sentinel(0xFFFE, 0xFFFF) == 0xFFFE


def test_in_range_is_inclusive():
    assert in_range(1600, 1600, 3646) == 1600
    assert in_range(3646, 1600, 3646) == 3646
    assert in_range(1599, 1600, 3646) is None
    assert in_range(3647, 1600, 3646) is None


def test_scaled_rounds_decimal_ties_away_from_zero():
    # 803 * 0.0025 is exactly 2.0075; the binary product lands just below it
    assert scaled(803, 0.0025) == 2.008
    assert scaled(-1, 0.0005) == -0.001
    assert scaled(3, 0.0005) == 0.002
    assert scaled(-3, 0.0005) == -0.002


def test_round_fixed_accepts_decimal_strings():
    assert round_fixed("2.0075") == 2.008
    assert round_fixed("-2.0075") == -2.008


def test_scaled_passes_none_through():
    assert scaled(None, 0.001) is None


def test_scaled_with_offset():
    assert scaled(1377, 0.001, offset=1.6) == 2.977


def test_scaled_without_rounding():
    assert scaled(41, 0.5, rounded=False) == 20.5


def test_format_mac():
    assert format_mac(bytes([0xCB, 0xB8, 0x33, 0x4C, 0x88, 0x4F])) == "CB:B8:33:4C:88:4F"
    assert format_mac(bytes(6)) == "00:00:00:00:00:00"


@pytest.mark.parametrize(
    "address",
    ["CB:B8:33:4C:88:4F", "cb:b8:33:4c:88:4f", "00:00:00:00:00:00"],
)
def test_is_mac_valid(address):
    assert is_mac(address)


@pytest.mark.parametrize(
    "address",
    [
        "",
        "CB:B8:33:4C:88",
        "CB:B8:33:4C:88:4F:00",
        "CB-B8-33-4C-88-4F",
        "CBB8334C884F",
        "CB:B8:33:4C:88:4G",
        "CB:B8:33:4C:88:4F\n",
        "C:BB8:33:4C:88:4F",
        None,
        42,
    ],
)
def test_is_mac_invalid(address):
    assert not is_mac(address)


def test_normalize_mac():
    assert normalize_mac("cb:b8:33:4c:88:4f") == "CB:B8:33:4C:88:4F"
    with pytest.raises(ValueError):
        normalize_mac("not-a-mac")
