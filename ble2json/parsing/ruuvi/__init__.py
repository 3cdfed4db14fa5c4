"""
Ruuvi advertisement payload decoding.

Ruuvi tags broadcast their measurements as manufacturer specific data under
company id ``0x0499``. This sub-package decodes data formats 3 and 5 into
reading models and defines their JSON wire format.
"""
from ble2json.parsing.ruuvi.dispatch import (
    RUUVI_MANUFACTURER_ID,
    decode_hex,
    decode_manufacturer_data,
    decode_payload,
)
from ble2json.parsing.ruuvi.model import (
    DeviceReading,
    RuuviV3Reading,
    RuuviV5Reading,
    SensorReading,
    dump_reading,
    dump_readings,
    load_reading,
    load_readings,
)
from ble2json.parsing.ruuvi.v3 import decode_v3
from ble2json.parsing.ruuvi.v5 import decode_v5

__all__ = [
    "RUUVI_MANUFACTURER_ID",
    "decode_hex",
    "decode_manufacturer_data",
    "decode_payload",
    "decode_v3",
    "decode_v5",
    "DeviceReading",
    "RuuviV3Reading",
    "RuuviV5Reading",
    "SensorReading",
    "dump_reading",
    "dump_readings",
    "load_reading",
    "load_readings",
]
