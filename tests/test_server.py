"""Tests for the command line entry point."""
import json
from unittest.mock import patch

from ble2json.server import Ble2JsonServer, main
from ble2json.server_app.config import ServerSettings

from conftest import LIVING_ROOM


def test_decode_option(capsys):
    code = main(["--decode", "05 12 FC 53 94 C3 7C 00 04 FF FC 04 0C AC 36 42 00 CD CB B8 33 4C 88 4F"])
    assert code == 0
    body = json.loads(capsys.readouterr().out)
    assert body["dataFormat"] == 5
    assert body["measurementSequence"] == 205


def test_decode_unrecognized(capsys):
    assert main(["--decode", "0102"]) == 0
    assert capsys.readouterr().out.strip() == "null"


def test_decode_invalid_hex(capsys):
    assert main(["--decode", "zz"]) == 2
    assert "ble2json:" in capsys.readouterr().err


def test_missing_config_exits(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "missing.json")]) == 1
    assert "not found" in capsys.readouterr().err


def _config(tmp_path) -> str:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"ip": "0.0.0.0", "port": 9000, "devices": {"living_room": LIVING_ROOM}}))
    return str(path)


def test_server_listens_on_config_address(tmp_path):
    server = Ble2JsonServer(ServerSettings(config_path=_config(tmp_path)))
    assert (server.host, server.port) == ("0.0.0.0", 9000)


def test_server_settings_override_config(tmp_path):
    server = Ble2JsonServer(ServerSettings(config_path=_config(tmp_path), server_ip="127.0.0.1", server_port=9100))
    assert (server.host, server.port) == ("127.0.0.1", 9100)


@patch("ble2json.server.uvicorn.run")
def test_main_starts_uvicorn(mock_run, tmp_path):
    assert main(["--config", _config(tmp_path), "--port", "9200"]) == 0
    kwargs = mock_run.call_args.kwargs
    assert kwargs["host"] == "0.0.0.0"
    assert kwargs["port"] == 9200
