"""Pytest configuration and fixtures for Ecobee exporter tests."""

from typing import Any

import pytest

from ecobee_exporter.descriptors import EcobeeDescriptors, build_descriptors
from ecobee_exporter.models import (
    EquipmentSummary,
    Event,
    RemoteSensor,
    Runtime,
    SensorCapability,
    Settings,
    Thermostat,
)


def create_thermostat(
    hvac_mode: str = "auto",
    *,
    connected: bool = True,
    events: list[Event] | None = None,
    remote_sensors: list[RemoteSensor] | None = None,
) -> Thermostat:
    """Create the T1 thermostat used across the mapping tests."""
    return Thermostat(
        identifier="T1",
        name="Living Room",
        runtime=Runtime(
            connected=connected,
            actual_temperature=705,
            desired_heat=680,
            desired_cool=720,
        ),
        settings=Settings(hvac_mode=hvac_mode),
        events=events or [],
        remote_sensors=remote_sensors or [],
    )


def create_hold_event(**overrides: Any) -> Event:
    """Create a running dual-setpoint hold event."""
    values = {
        "type": "hold",
        "running": True,
        "cool_hold_temp": 730,
        "heat_hold_temp": 690,
        "is_cool_off": False,
        "is_heat_off": False,
    }
    values.update(overrides)
    return Event(**values)


def create_sensor(*capabilities: tuple[str, str], in_use: bool = True) -> RemoteSensor:
    """Create a remote sensor with (type, value) capabilities."""
    return RemoteSensor(
        id="rs:100",
        name="Bedroom",
        type="ecobee3_remote_sensor",
        in_use=in_use,
        capabilities=[
            SensorCapability(id=str(i), type=t, value=v)
            for i, (t, v) in enumerate(capabilities, start=1)
        ],
    )


@pytest.fixture
def descriptors() -> EcobeeDescriptors:
    """Fixture providing descriptors built with the default prefix."""
    return build_descriptors("ecobee")


@pytest.fixture
def thermostat() -> Thermostat:
    """Fixture providing a connected thermostat in auto mode with a hold."""
    return create_thermostat(
        events=[create_hold_event()],
        remote_sensors=[
            create_sensor(
                ("temperature", "712"),
                ("humidity", "41"),
                ("occupancy", "true"),
            )
        ],
    )


@pytest.fixture
def summary() -> EquipmentSummary:
    """Fixture providing a connected summary with the compressor running."""
    return EquipmentSummary(
        identifier="T1",
        name="Living Room",
        connected=True,
        comp_cool1=True,
        fan=True,
    )


@pytest.fixture
def sample_thermostat_response() -> dict:
    """Fixture providing a sample thermostat API response.

    Returns:
        A dictionary representing a thermostat API response with one
        connected thermostat, a running hold and two remote sensors.

    """
    return {
        "page": {"page": 1, "totalPages": 1, "pageSize": 1, "total": 1},
        "thermostatList": [
            {
                "identifier": "T1",
                "name": "Living Room",
                "thermostatRev": "170101000000",
                "runtime": {
                    "connected": True,
                    "actualTemperature": 705,
                    "actualHumidity": 41,
                    "desiredHeat": 680,
                    "desiredCool": 720,
                },
                "settings": {"hvacMode": "auto", "fanMinOnTime": 0},
                "events": [
                    {
                        "type": "hold",
                        "name": "auto",
                        "running": True,
                        "coolHoldTemp": 730,
                        "heatHoldTemp": 690,
                        "isCoolOff": False,
                        "isHeatOff": False,
                    },
                ],
                "remoteSensors": [
                    {
                        "id": "ei:0",
                        "name": "Living Room",
                        "type": "thermostat",
                        "code": "",
                        "inUse": True,
                        "capability": [
                            {"id": "1", "type": "temperature", "value": "705"},
                            {"id": "2", "type": "humidity", "value": "41"},
                            {"id": "3", "type": "occupancy", "value": "false"},
                        ],
                    },
                    {
                        "id": "rs:100",
                        "name": "Bedroom",
                        "type": "ecobee3_remote_sensor",
                        "code": "ABCD",
                        "inUse": False,
                        "capability": [
                            {"id": "1", "type": "temperature", "value": "688"},
                            {"id": "2", "type": "occupancy", "value": "true"},
                        ],
                    },
                ],
            },
        ],
        "status": {"code": 0, "message": ""},
    }


@pytest.fixture
def sample_summary_response() -> dict:
    """Fixture providing a sample thermostat summary API response.

    Returns:
        A dictionary representing a thermostat summary API response with one
        connected thermostat cooling and one disconnected thermostat.

    """
    return {
        "revisionList": [
            "T1:Living Room:true:170101000000:170101000000:170101000000:170101000000",
            "T2:Basement:false:170101000000:170101000000:170101000000:170101000000",
        ],
        "thermostatCount": 2,
        "statusList": ["T1:compCool1,fan", "T2:"],
        "status": {"code": 0, "message": ""},
    }
