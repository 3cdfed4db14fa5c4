"""Tests for the HTTP client (mocked requests)."""
from unittest.mock import MagicMock, patch

import pytest
import requests

from ble2json.clients import Ble2JsonClient
from ble2json.parsing.ruuvi import DeviceReading, RuuviV5Reading, decode_v5, dump_reading, dump_readings

from conftest import LIVING_ROOM, V5_PAYLOAD


def _response(status_code: int, text: str) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    resp.content = text.encode("utf-8")
    return resp


def _reading() -> DeviceReading:
    return DeviceReading(name="living_room", address=LIVING_ROOM, rssi=-62, sensor_data=decode_v5(V5_PAYLOAD))


@patch("ble2json.clients.http.requests.get")
def test_get_reading(mock_get):
    mock_get.return_value = _response(200, dump_reading(_reading()))
    reading = Ble2JsonClient(port=9000).get_reading("living_room")
    assert reading == _reading()
    assert isinstance(reading.sensor_data, RuuviV5Reading)
    mock_get.assert_called_once_with("http://127.0.0.1:9000/living_room", timeout=10)


@patch("ble2json.clients.http.requests.get")
def test_get_reading_quotes_label(mock_get):
    mock_get.return_value = _response(200, dump_reading(_reading()))
    Ble2JsonClient().get_reading("living room")
    assert mock_get.call_args.args[0] == "http://127.0.0.1:8080/living%20room"


@patch("ble2json.clients.http.requests.get")
def test_get_readings(mock_get):
    mock_get.return_value = _response(200, dump_readings([_reading()]))
    assert Ble2JsonClient().get_readings() == [_reading()]
    assert mock_get.call_args.args[0] == "http://127.0.0.1:8080/"


@patch("ble2json.clients.http.requests.get")
def test_not_found(mock_get):
    mock_get.return_value = _response(404, "Not Found")
    with pytest.raises(ValueError, match="404 Not Found"):
        Ble2JsonClient().get_reading("kitchen")


@patch("ble2json.clients.http.requests.get")
def test_server_unreachable(mock_get):
    mock_get.side_effect = requests.ConnectionError("refused")
    with pytest.raises(ConnectionError, match="Could not reach"):
        Ble2JsonClient().get_readings()
