from __future__ import annotations

import urllib.parse

import requests

from ble2json.parsing.ruuvi import DeviceReading, load_reading, load_readings


class Ble2JsonClient:
    def __init__(self, host: str = "127.0.0.1", port: int = 8080, timeout: float = 10) -> None:
        self.base_url = f"http://{host}:{port}"
        self.timeout = timeout

    def _get(self, path: str) -> requests.Response:
        try:
            return requests.get(f"{self.base_url}{path}", timeout=self.timeout)
        except requests.RequestException as exc:
            raise ConnectionError(
                f"Could not reach ble2json server at {self.base_url}. Original error: {exc}"
            ) from exc

    def get_reading(self, label: str) -> DeviceReading:
        resp = self._get("/" + urllib.parse.quote(label, safe=""))
        if resp.status_code != 200:
            raise ValueError(f"Failed to get reading '{label}': {resp.status_code} {resp.text}")
        return load_reading(resp.content)

    def get_readings(self) -> list[DeviceReading]:
        resp = self._get("/")
        if resp.status_code != 200:
            raise ValueError(f"Failed to get readings: {resp.status_code} {resp.text}")
        return load_readings(resp.content)
