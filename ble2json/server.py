import argparse
import sys

import uvicorn

from ble2json.errors import ConfigError
from ble2json.parsing.ruuvi import decode_hex
from ble2json.server_app import create_app, ServerSettings


class Ble2JsonServer:
    def __init__(self, settings: ServerSettings) -> None:
        self.settings = settings
        self.app = create_app(settings=self.settings)
        device_config = self.app.state.device_config
        self.host = self.settings.server_ip or device_config.listen_address
        self.port = self.settings.server_port or device_config.listen_port

    def start(self) -> None:
        uvicorn.run(self.app, host=self.host, port=self.port, log_level="info")


def decode_command(text: str) -> str:
    reading = decode_hex(text)
    return "null" if reading is None else reading.model_dump_json(by_alias=True)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Serve Ruuvi sensor readings as JSON over HTTP.")
    parser.add_argument("--config", type=str, default=None, help="Path to the JSON configuration file.")
    parser.add_argument("--ip", type=str, default=None, help="IP address to bind to (overrides the config file).")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on (overrides the config file).")
    parser.add_argument("--decode", type=str, default=None, metavar="HEX",
                        help="Decode one Ruuvi payload given as hex, print it as JSON and exit.")
    args = parser.parse_args(argv)

    if args.decode is not None:
        try:
            print(decode_command(args.decode))
        except ValueError as exc:
            print(f"ble2json: {exc}", file=sys.stderr)
            return 2
        return 0

    overrides = {"config_path": args.config, "server_ip": args.ip, "server_port": args.port}
    settings = ServerSettings(**{key: value for key, value in overrides.items() if value is not None})
    try:
        server = Ble2JsonServer(settings)
    except ConfigError as exc:
        print(f"ble2json: {exc}", file=sys.stderr)
        return 1
    server.start()
    return 0


if __name__ == "__main__":
    sys.exit(main())
