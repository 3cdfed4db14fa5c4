from ble2json.clients import Ble2JsonClient
from ble2json.parsing.ruuvi import (
    DeviceReading,
    RuuviV3Reading,
    RuuviV5Reading,
    decode_hex,
    decode_manufacturer_data,
)
from ble2json.radio import BleakRadio, RadioStack
from ble2json.server_app import create_app, ServerSettings
from ble2json.server import Ble2JsonServer
from importlib.metadata import PackageNotFoundError, version

__all__ = [
    "Ble2JsonClient",
    "Ble2JsonServer",
    "BleakRadio",
    "RadioStack",
    "DeviceReading",
    "RuuviV3Reading",
    "RuuviV5Reading",
    "decode_hex",
    "decode_manufacturer_data",
    "create_app",
    "ServerSettings",
]

try:
    __version__ = version("ble2json")
except PackageNotFoundError:
    __version__ = "0.0.0"
