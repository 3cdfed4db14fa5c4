"""
Decoder for Ruuvi data format 3 ("RAWv1"), a 14-byte big-endian payload.

Layout::

    offset  field         type  absent when
    0       data_format   u8    -
    1       humidity      u8    > 200            (0.5 %/bit)
    2       temp int      u8    -                (bit 7 is the sign)
    3       temp fraction u8    >= 100           (0.01 C/bit)
    4-5     pressure      u16   0xFFFF           (+50000 Pa)
    6-11    accel x/y/z   i16   -32768           (0.001 g/bit)
    12-13   voltage       u16   outside 1600-3646 (0.001 V/bit)
"""
from __future__ import annotations

import struct
from typing import Optional

from ble2json.core.binary import in_range, not_sentinel, scaled
from ble2json.parsing.ruuvi.model import RuuviV3Reading

V3_FORMAT = 3
V3_LENGTH = 14

_LAYOUT = struct.Struct(">BBBBHhhhH")

_SIGN_BIT = 0x80
_MAGNITUDE_MASK = 0x7F

HUMIDITY_MAX = 200
TEMPERATURE_FRACTION_LIMIT = 100
PRESSURE_OFFSET = 50000
VOLTAGE_MIN = 1600
VOLTAGE_MAX = 3646
I16_MIN = -0x8000
U16_MAX = 0xFFFF


def _temperature(integer: int, fraction: int) -> Optional[float]:
    if fraction >= TEMPERATURE_FRACTION_LIMIT:
        return None
    # Hundredths first so the result is the nearest float to the 2-decimal value.
    value = ((integer & _MAGNITUDE_MASK) * 100 + fraction) / 100
    return -value if integer & _SIGN_BIT else value


def decode_v3(payload: bytes) -> RuuviV3Reading:
    """
    Decode a data format 3 payload.

    Every field that carries its "not available" value, or falls outside
    its valid range, is returned as ``None``; the reading itself is always
    produced. The format byte is not inspected here; routing on it is the
    dispatcher's job, and the reading always reports format 3.

    Args:
        payload: Exactly 14 bytes of manufacturer data, format byte included.

    Returns:
        The decoded ``RuuviV3Reading``.

    Raises:
        ValueError: If ``payload`` is not 14 bytes long.
    """
    if len(payload) != V3_LENGTH:
        raise ValueError(f"Format 3 payload must be {V3_LENGTH} bytes, got {len(payload)}")

    (
        _data_format,
        humidity,
        temp_integer,
        temp_fraction,
        pressure,
        accel_x,
        accel_y,
        accel_z,
        voltage,
    ) = _LAYOUT.unpack(payload)

    return RuuviV3Reading(
        data_format=V3_FORMAT,
        humidity=scaled(in_range(humidity, 0, HUMIDITY_MAX), 0.5, rounded=False),
        temperature=_temperature(temp_integer, temp_fraction),
        pressure=None if pressure == U16_MAX else pressure + PRESSURE_OFFSET,
        acceleration_x=scaled(not_sentinel(accel_x, I16_MIN), 0.001),
        acceleration_y=scaled(not_sentinel(accel_y, I16_MIN), 0.001),
        acceleration_z=scaled(not_sentinel(accel_z, I16_MIN), 0.001),
        voltage=scaled(in_range(voltage, VOLTAGE_MIN, VOLTAGE_MAX), 0.001),
    )
