"""Data models for the Ecobee Prometheus exporter."""

from dataclasses import dataclass, field


@dataclass(slots=True)
class Runtime:
    """Runtime block of a thermostat; temperatures are tenths of a degree."""

    connected: bool
    actual_temperature: int
    desired_heat: int
    desired_cool: int


@dataclass(slots=True)
class Settings:
    """Settings block of a thermostat."""

    hvac_mode: str


@dataclass(slots=True)
class Event:
    """A scheduled or manual event such as a temperature hold."""

    type: str
    running: bool
    cool_hold_temp: int
    heat_hold_temp: int
    is_cool_off: bool
    is_heat_off: bool
    name: str = ""


@dataclass(frozen=True, slots=True)
class SensorCapability:
    """A typed reading reported by a remote sensor as an untyped string."""

    id: str
    type: str
    value: str


@dataclass(slots=True)
class RemoteSensor:
    """A remote sensor attached to a thermostat, including the built-in one."""

    id: str
    name: str
    type: str
    in_use: bool
    capabilities: list[SensorCapability] = field(default_factory=list)


@dataclass(slots=True)
class Thermostat:
    """Snapshot of a single thermostat as returned by the thermostat endpoint."""

    identifier: str
    name: str
    runtime: Runtime
    settings: Settings
    events: list[Event] = field(default_factory=list)
    remote_sensors: list[RemoteSensor] = field(default_factory=list)


@dataclass(slots=True)
class EquipmentSummary:
    """Connectivity and running equipment of a thermostat.

    Built from the revision and status lists of the thermostat summary
    endpoint. Every equipment kind Ecobee reports has a flag here, even
    though only a few of them are exported.
    """

    identifier: str
    name: str
    connected: bool
    heat_pump: bool = False
    heat_pump2: bool = False
    heat_pump3: bool = False
    comp_cool1: bool = False
    comp_cool2: bool = False
    aux_heat1: bool = False
    aux_heat2: bool = False
    aux_heat3: bool = False
    fan: bool = False
    humidifier: bool = False
    dehumidifier: bool = False
    ventilator: bool = False
    economizer: bool = False
    comp_hot_water: bool = False
    aux_hot_water: bool = False
