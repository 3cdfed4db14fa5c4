from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

_MAC_PATTERN = re.compile(r"[0-9A-Fa-f]{2}(?::[0-9A-Fa-f]{2}){5}")

FIXED_PLACES = 3


Number = Union[int, float, str, Decimal]


def _exact(number: Number) -> Decimal:
    # floats are taken at their shortest repr, so 0.0025 stays 0.0025
    return number if isinstance(number, Decimal) else Decimal(str(number))


def _quantize(value: Decimal, places: int) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def round_fixed(value: Number, places: int = FIXED_PLACES) -> float:
    """Round to ``places`` decimals, halves away from zero."""
    return float(_quantize(_exact(value), places))


def not_sentinel(raw: int, sentinel: int) -> Optional[int]:
    return None if raw == sentinel else raw


def in_range(raw: int, low: int, high: int) -> Optional[int]:
    return raw if low <= raw <= high else None


def scaled(
    raw: Optional[int],
    factor: Number,
    offset: Number = 0,
    rounded: bool = True,
    places: int = FIXED_PLACES,
) -> Optional[float]:
    """
    Apply a fixed-point scale to a raw integer.

    The product is computed exactly in decimal and, when ``rounded``, cut to
    ``places`` decimals with halves away from zero before the single
    conversion to float.
    """
    if raw is None:
        return None
    value = Decimal(raw) * _exact(factor) + _exact(offset)
    if rounded:
        value = _quantize(value, places)
    return float(value)


def format_mac(raw: bytes) -> str:
    return ":".join(f"{byte:02X}" for byte in raw)


def is_mac(address: str) -> bool:
    return isinstance(address, str) and _MAC_PATTERN.fullmatch(address) is not None


def normalize_mac(address: str) -> str:
    if not is_mac(address):
        raise ValueError(f"Not a valid MAC address: {address!r}")
    return address.upper()
