from ble2json.radio.base import RadioStack
from ble2json.radio.scanner import Advertisement, BleakRadio

__all__ = ["RadioStack", "BleakRadio", "Advertisement"]
