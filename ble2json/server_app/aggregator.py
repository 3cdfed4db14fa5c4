from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional, TypeVar

from ble2json.parsing.ruuvi import DeviceReading, decode_manufacturer_data
from ble2json.radio import RadioStack

T = TypeVar("T")


class ReadingAggregator:
    """Builds ``DeviceReading`` records from radio lookups."""

    def __init__(self, radio: RadioStack, logger: Optional[logging.Logger] = None):
        self.radio = radio
        self.logger = logger or logging.getLogger(__name__)

    def _lookup(self, query: Callable[[str], Optional[T]], name: str, address: str) -> Optional[T]:
        # A failed lookup only blanks the field it was meant to fill.
        try:
            return query(address)
        except Exception as exc:
            self.logger.warning(
                "radio_lookup_failed",
                extra={
                    "details": {
                        "device": name,
                        "address": address,
                        "query": getattr(query, "__name__", repr(query)),
                        "error": f"{type(exc).__name__}: {exc}",
                    }
                },
            )
            return None

    def read(self, name: str, address: str) -> DeviceReading:
        rssi = self._lookup(self.radio.get_signal_strength, name, address)
        manufacturer_data = self._lookup(self.radio.get_manufacturer_data, name, address)
        return DeviceReading(
            name=name,
            address=address,
            rssi=rssi,
            sensor_data=decode_manufacturer_data(manufacturer_data),
        )

    def read_all(self, devices: Mapping[str, str]) -> list[DeviceReading]:
        return [self.read(name, address) for name, address in devices.items()]
