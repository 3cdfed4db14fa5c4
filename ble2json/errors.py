class ConfigError(ValueError):
    """The configuration file is missing or malformed."""


class RadioError(ConnectionError):
    """The Bluetooth stack could not be reached or discovery could not start."""


class DeviceNotConfiguredError(KeyError):
    """A radio lookup was made for an address that was never registered."""

    def __init__(self, address: str) -> None:
        super().__init__(address)
        self.address = address

    def __str__(self) -> str:
        return f"Address not configured: {self.address}"
