"""
Decoder for Ruuvi data format 5 ("RAWv2"), a 24-byte big-endian payload.

Layout::

    offset  field                 type   absent when
    0       data_format           u8     -
    1-2     temperature           i16    -32768        (0.005 C/bit)
    3-4     humidity              u16    > 40000       (0.0025 %/bit)
    5-6     pressure              u16    0xFFFF        (+50000 Pa)
    7-12    accel x/y/z           i16    -32768        (0.001 g/bit)
    13-14   power word            u16    see below
    15      movement_counter      u8     0xFF
    16-17   measurement_sequence  u16    0xFFFF
    18-23   mac                   6 x u8 FF:FF:FF:FF:FF:FF

Power word bit layout (bytes 13-14 read as one big-endian u16)::

    bit  15 ............ 5 | 4 ..... 0
         voltage (11 bits) | tx power (5 bits)

    voltage  = word >> 5,   absent when > 2046, volts = v * 0.001 + 1.6
    tx power = word & 0x1F, absent when > 30,   dBm   = t * 2 - 40
"""
from __future__ import annotations

import struct
from typing import Optional

from ble2json.core.binary import format_mac, in_range, not_sentinel, scaled
from ble2json.parsing.ruuvi.model import RuuviV5Reading

V5_FORMAT = 5
V5_LENGTH = 24

_LAYOUT = struct.Struct(">BhHHhhhHBH6s")

VOLTAGE_SHIFT = 5
TX_POWER_MASK = 0x1F

HUMIDITY_MAX = 40000
PRESSURE_OFFSET = 50000
VOLTAGE_MAX = 2046
VOLTAGE_OFFSET = 1.6
TX_POWER_MAX = 30
I16_MIN = -0x8000
U8_MAX = 0xFF
U16_MAX = 0xFFFF
MAC_UNAVAILABLE = b"\xff" * 6


def _voltage(power_word: int) -> Optional[float]:
    raw = in_range(power_word >> VOLTAGE_SHIFT, 0, VOLTAGE_MAX)
    return scaled(raw, 0.001, offset=VOLTAGE_OFFSET)


def _tx_power(power_word: int) -> Optional[int]:
    raw = in_range(power_word & TX_POWER_MASK, 0, TX_POWER_MAX)
    return None if raw is None else raw * 2 - 40


def decode_v5(payload: bytes) -> RuuviV5Reading:
    """
    Decode a data format 5 payload.

    Fields carrying their "not available" value are returned as ``None``.
    The format byte is not inspected and the reading always reports
    format 5.

    Args:
        payload: Exactly 24 bytes of manufacturer data, format byte included.

    Returns:
        The decoded ``RuuviV5Reading``.

    Raises:
        ValueError: If ``payload`` is not 24 bytes long.
    """
    if len(payload) != V5_LENGTH:
        raise ValueError(f"Format 5 payload must be {V5_LENGTH} bytes, got {len(payload)}")

    (
        _data_format,
        temperature,
        humidity,
        pressure,
        accel_x,
        accel_y,
        accel_z,
        power_word,
        movement_counter,
        measurement_sequence,
        mac,
    ) = _LAYOUT.unpack(payload)

    return RuuviV5Reading(
        data_format=V5_FORMAT,
        temperature=scaled(not_sentinel(temperature, I16_MIN), 0.005),
        humidity=scaled(in_range(humidity, 0, HUMIDITY_MAX), 0.0025),
        pressure=None if pressure == U16_MAX else pressure + PRESSURE_OFFSET,
        acceleration_x=scaled(not_sentinel(accel_x, I16_MIN), 0.001),
        acceleration_y=scaled(not_sentinel(accel_y, I16_MIN), 0.001),
        acceleration_z=scaled(not_sentinel(accel_z, I16_MIN), 0.001),
        voltage=_voltage(power_word),
        tx_power=_tx_power(power_word),
        movement_counter=not_sentinel(movement_counter, U8_MAX),
        measurement_sequence=not_sentinel(measurement_sequence, U16_MAX),
        mac=None if mac == MAC_UNAVAILABLE else format_mac(mac),
    )
