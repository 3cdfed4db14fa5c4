from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class RadioStack(ABC):
    """Source of the latest advertisement data per device address."""

    @abstractmethod
    async def start(self) -> None:
        """Connect to the Bluetooth stack and start discovery."""

    @abstractmethod
    async def stop(self) -> None:
        """Stop discovery."""

    @abstractmethod
    def get_signal_strength(self, address: str) -> Optional[int]:
        """RSSI of the latest advertisement in dBm, or ``None`` if none was seen."""

    @abstractmethod
    def get_manufacturer_data(self, address: str) -> Optional[dict[int, bytes]]:
        """Manufacturer data of the latest advertisement, or ``None`` if none was seen."""
