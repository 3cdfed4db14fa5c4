from typing import Optional

import pytest

from ble2json.errors import DeviceNotConfiguredError
from ble2json.radio import RadioStack
from ble2json.server_app.config import DeviceConfig, ServerSettings

LIVING_ROOM = "CB:B8:33:4C:88:4F"
SAUNA = "D1:2E:6A:00:11:22"
V3_PAYLOAD = bytes.fromhex("03 29 1A 1E CE 1E FC 18 F9 42 02 CA 0B 53")
V5_PAYLOAD = bytes.fromhex("05 12 FC 53 94 C3 7C 00 04 FF FC 04 0C AC 36 42 00 CD CB B8 33 4C 88 4F")


class MemoryRadio(RadioStack):
    """In-memory radio with fixed advertisements."""

    def __init__(self, addresses, rssi=None, manufacturer_data=None, fail_start: Optional[Exception] = None):
        self.addresses = set(addresses)
        self.rssi = dict(rssi or {})
        self.manufacturer_data = dict(manufacturer_data or {})
        self.fail_start = fail_start
        self.started = False
        self.stopped = False

    async def start(self) -> None:
        if self.fail_start is not None:
            raise self.fail_start
        self.started = True

    async def stop(self) -> None:
        self.stopped = True

    def _check(self, address: str) -> None:
        if address not in self.addresses:
            raise DeviceNotConfiguredError(address)

    def get_signal_strength(self, address: str) -> Optional[int]:
        self._check(address)
        return self.rssi.get(address)

    def get_manufacturer_data(self, address: str) -> Optional[dict[int, bytes]]:
        self._check(address)
        return self.manufacturer_data.get(address)


@pytest.fixture
def device_config() -> DeviceConfig:
    return DeviceConfig.from_dict({"devices": {"living_room": LIVING_ROOM, "sauna": SAUNA}})


@pytest.fixture
def settings(tmp_path) -> ServerSettings:
    return ServerSettings(config_path=str(tmp_path / "unused.json"), log_ring_size=50)


@pytest.fixture
def radio() -> MemoryRadio:
    return MemoryRadio(
        [LIVING_ROOM, SAUNA],
        rssi={LIVING_ROOM: -62, SAUNA: -81},
        manufacturer_data={LIVING_ROOM: {0x0499: V5_PAYLOAD}, SAUNA: {0x0499: V3_PAYLOAD}},
    )
