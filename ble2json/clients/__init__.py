from ble2json.clients.http import Ble2JsonClient

__all__ = ["Ble2JsonClient"]
