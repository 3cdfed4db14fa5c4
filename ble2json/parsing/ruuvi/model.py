"""
Reading models and the JSON wire format.

Decoded readings and device readings are frozen pydantic models. Field names
are snake_case in Python and camelCase on the wire; absent values are written
as ``null`` so every reading carries the same set of keys.
"""
from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

I16_MIN = -0x8000
I16_MAX = 0x7FFF


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def as_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class RuuviV3Reading(WireModel):
    """
    A decoded Ruuvi data format 3 ("RAWv1") payload.

    Attributes:
        data_format: Always ``3``.
        humidity: Relative humidity in percent.
        temperature: Temperature in degrees Celsius.
        pressure: Atmospheric pressure in pascals.
        acceleration_x: Acceleration along X in g.
        acceleration_y: Acceleration along Y in g.
        acceleration_z: Acceleration along Z in g.
        voltage: Battery voltage in volts.
    """
    data_format: Literal[3] = 3
    humidity: Optional[float] = None
    temperature: Optional[float] = None
    pressure: Optional[int] = None
    acceleration_x: Optional[float] = None
    acceleration_y: Optional[float] = None
    acceleration_z: Optional[float] = None
    voltage: Optional[float] = None


class RuuviV5Reading(WireModel):
    """
    A decoded Ruuvi data format 5 ("RAWv2") payload.

    Attributes:
        data_format: Always ``5``.
        temperature: Temperature in degrees Celsius.
        humidity: Relative humidity in percent.
        pressure: Atmospheric pressure in pascals.
        acceleration_x: Acceleration along X in g.
        acceleration_y: Acceleration along Y in g.
        acceleration_z: Acceleration along Z in g.
        voltage: Battery voltage in volts.
        tx_power: Transmit power in dBm.
        movement_counter: Movement events counted by the tag.
        measurement_sequence: Sequence number of the measurement.
        mac: MAC address of the tag as reported in the payload.
    """
    data_format: Literal[5] = 5
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    pressure: Optional[int] = None
    acceleration_x: Optional[float] = None
    acceleration_y: Optional[float] = None
    acceleration_z: Optional[float] = None
    voltage: Optional[float] = None
    tx_power: Optional[int] = None
    movement_counter: Optional[int] = None
    measurement_sequence: Optional[int] = None
    mac: Optional[str] = None


SensorReading = Union[RuuviV3Reading, RuuviV5Reading]


class DeviceReading(WireModel):
    """The latest state of one configured device."""
    name: str
    address: str
    rssi: Optional[int] = Field(None, ge=I16_MIN, le=I16_MAX)
    sensor_data: Optional[SensorReading] = None


_READINGS = TypeAdapter(list[DeviceReading])


def dump_reading(reading: DeviceReading) -> str:
    return reading.model_dump_json(by_alias=True)


def load_reading(text: str | bytes) -> DeviceReading:
    return DeviceReading.model_validate_json(text)


def dump_readings(readings: list[DeviceReading]) -> str:
    return _READINGS.dump_json(readings, by_alias=True).decode("utf-8")


def load_readings(text: str | bytes) -> list[DeviceReading]:
    return _READINGS.validate_json(text)
