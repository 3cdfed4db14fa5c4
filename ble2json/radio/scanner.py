from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterable, Optional

from bleak import BleakScanner
from bleak.backends.device import BLEDevice
from bleak.backends.scanner import AdvertisementData
from bleak.exc import BleakError

from ble2json.core.binary import normalize_mac
from ble2json.errors import DeviceNotConfiguredError, RadioError
from ble2json.radio.base import RadioStack


@dataclass(frozen=True)
class Advertisement:
    rssi: Optional[int]
    manufacturer_data: dict[int, bytes]
    seen_at: float


class BleakRadio(RadioStack):
    """
    Keeps the latest advertisement of every configured address.

    The set of addresses is fixed at construction; advertisements from other
    devices are ignored, and lookups for them raise
    ``DeviceNotConfiguredError``.
    """

    def __init__(
        self,
        addresses: Iterable[str],
        adapter: Optional[str] = "hci0",
        scanning_mode: str = "active",
        max_age: float = 0.0,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.addresses = frozenset(normalize_mac(address) for address in addresses)
        self.adapter = adapter
        self.scanning_mode = scanning_mode
        self.max_age = max_age
        self.logger = logger or logging.getLogger(__name__)
        self._latest: dict[str, Advertisement] = {}
        self._scanner: Optional[BleakScanner] = None

    async def start(self) -> None:
        if self._scanner is not None:
            return
        try:
            scanner = BleakScanner(
                detection_callback=self._on_advertisement,
                scanning_mode=self.scanning_mode,
                adapter=self.adapter,
            )
            await scanner.start()
        except (BleakError, OSError) as exc:
            raise RadioError(f"Could not start BLE discovery on {self.adapter}: {exc}") from exc
        self._scanner = scanner
        self.logger.info(
            "discovery_started",
            extra={"details": {"adapter": self.adapter, "devices": len(self.addresses)}},
        )

    async def stop(self) -> None:
        if self._scanner is None:
            return
        scanner, self._scanner = self._scanner, None
        try:
            await scanner.stop()
        except BleakError as exc:
            self.logger.warning("discovery_stop_failed", extra={"details": {"error": str(exc)}})

    def _on_advertisement(self, device: BLEDevice, advertisement: AdvertisementData) -> None:
        address = device.address.upper()
        if address not in self.addresses:
            return
        self._latest[address] = Advertisement(
            rssi=advertisement.rssi,
            manufacturer_data=dict(advertisement.manufacturer_data),
            seen_at=time.monotonic(),
        )

    def _lookup(self, address: str) -> Optional[Advertisement]:
        key = address.upper()
        if key not in self.addresses:
            raise DeviceNotConfiguredError(address)
        entry = self._latest.get(key)
        if entry is None:
            return None
        if self.max_age and time.monotonic() - entry.seen_at > self.max_age:
            return None
        return entry

    def get_signal_strength(self, address: str) -> Optional[int]:
        entry = self._lookup(address)
        return entry.rssi if entry else None

    def get_manufacturer_data(self, address: str) -> Optional[dict[int, bytes]]:
        entry = self._lookup(address)
        if entry is None or not entry.manufacturer_data:
            return None
        return dict(entry.manufacturer_data)
