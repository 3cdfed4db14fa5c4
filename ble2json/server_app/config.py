from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import SettingsConfigDict, BaseSettings

from ble2json.core.binary import is_mac
from ble2json.errors import ConfigError

DEFAULT_CONFIG_PATH = os.path.join("~", ".config", "ble2json", "config.json")


class ServerSettings(BaseSettings):
    config_path: str = Field(DEFAULT_CONFIG_PATH, validation_alias="CONFIG_PATH")

    # Override the listen address/port of the config file when set.
    server_ip: Optional[str] = Field(None, validation_alias="SERVER_IP")
    server_port: Optional[int] = Field(None, validation_alias="SERVER_PORT")

    bluetooth_adapter: str = Field("hci0", validation_alias="BLUETOOTH_ADAPTER")
    scanning_mode: Literal["active", "passive"] = Field("active", validation_alias="SCANNING_MODE")
    reading_max_age: float = Field(0.0, ge=0.0, validation_alias="READING_MAX_AGE")

    log_ring_size: int = Field(200, validation_alias="LOG_RING_SIZE")
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", populate_by_name=True, extra="ignore")


@lru_cache
def get_settings() -> ServerSettings:
    return ServerSettings()


class DeviceConfig(BaseModel):
    """
    Contents of the JSON configuration file.

    ``devices`` is required and maps a label (the URL path a reading is
    served under) to the device's MAC address. Both
    ``listenAddress``/``listenPort`` and the shorter ``ip``/``port`` keys
    are accepted.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    listen_address: str = Field(
        "127.0.0.1", validation_alias=AliasChoices("listenAddress", "ip", "listen_address")
    )
    listen_port: int = Field(8080, validation_alias=AliasChoices("listenPort", "port", "listen_port"))
    devices: dict[str, str]

    @classmethod
    def from_dict(cls, data: dict[str, Any], logger: Optional[logging.Logger] = None) -> "DeviceConfig":
        """
        Validate raw configuration data.

        Device entries whose address is not a MAC (six colon separated hex
        pairs) are dropped with a warning; the remaining addresses are
        upper-cased.

        Raises:
            ConfigError: If the data does not have the expected structure.
        """
        logger = logger or logging.getLogger(__name__)
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a JSON object")
        raw_devices = data.get("devices")
        if isinstance(raw_devices, dict):
            devices: dict[str, str] = {}
            for label, address in raw_devices.items():
                if not is_mac(address):
                    logger.warning("invalid_device_address", extra={"details": {"device": label, "address": address}})
                    continue
                devices[label] = address.upper()
            data = {**data, "devices": devices}
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc


def load_device_config(path: str, logger: Optional[logging.Logger] = None) -> DeviceConfig:
    full_path = os.path.expanduser(path)
    try:
        with open(full_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as exc:
        raise ConfigError(f"Configuration file not found: {full_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Configuration file {full_path} is not valid JSON: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Could not read configuration file {full_path}: {exc}") from exc
    return DeviceConfig.from_dict(data, logger=logger)
