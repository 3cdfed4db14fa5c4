"""
Selects the decoder for a manufacturer data mapping.

A payload is decoded only when the manufacturer id is Ruuvi's, the first
byte names a supported data format, and the length matches that format.
Anything else yields ``None``.
"""
from __future__ import annotations

from typing import Callable, Mapping, Optional

from ble2json.parsing.ruuvi.model import SensorReading
from ble2json.parsing.ruuvi.v3 import V3_FORMAT, V3_LENGTH, decode_v3
from ble2json.parsing.ruuvi.v5 import V5_FORMAT, V5_LENGTH, decode_v5

RUUVI_MANUFACTURER_ID = 0x0499

# data format byte -> (payload length, decoder)
DECODERS: dict[int, tuple[int, Callable[[bytes], SensorReading]]] = {
    V3_FORMAT: (V3_LENGTH, decode_v3),
    V5_FORMAT: (V5_LENGTH, decode_v5),
}


def decode_payload(manufacturer_id: int, payload: bytes) -> Optional[SensorReading]:
    """
    Decode a single manufacturer data entry.

    Args:
        manufacturer_id: The 16-bit company identifier of the entry.
        payload: The raw bytes of the entry.

    Returns:
        The decoded reading, or ``None`` if the entry is not a supported
        Ruuvi payload.
    """
    if manufacturer_id != RUUVI_MANUFACTURER_ID or not payload:
        return None
    decoder = DECODERS.get(payload[0])
    if decoder is None:
        return None
    length, decode = decoder
    if len(payload) != length:
        return None
    return decode(bytes(payload))


def decode_manufacturer_data(data: Optional[Mapping[int, bytes]]) -> Optional[SensorReading]:
    """
    Decode the manufacturer data of one advertisement.

    Only a mapping with exactly one entry is decoded. Several entries are
    ambiguous and produce ``None`` rather than a guess.

    Args:
        data: Mapping of manufacturer id to payload bytes.

    Returns:
        The decoded reading, or ``None``.
    """
    if not data or len(data) != 1:
        return None
    ((manufacturer_id, payload),) = data.items()
    return decode_payload(manufacturer_id, payload)


def decode_hex(text: str, manufacturer_id: int = RUUVI_MANUFACTURER_ID) -> Optional[SensorReading]:
    """
    Decode a payload written as hex, e.g. ``"05 12 FC 53 ..."``.

    Raises:
        ValueError: If ``text`` is not valid hex.
    """
    return decode_payload(manufacturer_id, bytes.fromhex(text))
