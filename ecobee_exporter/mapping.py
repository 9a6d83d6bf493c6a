"""Map Ecobee device state onto metric samples.

Thermostat snapshots produce runtime, hold and sensor samples; equipment
summaries produce one running-state sample per tracked equipment kind.
Bad values reported by the API are logged and skipped one sample at a
time, never aborting the rest of the thermostat.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from .const import (
    CAPABILITY_HUMIDITY,
    CAPABILITY_OCCUPANCY,
    CAPABILITY_TEMPERATURE,
    EVENT_TYPE_HOLD,
    HOLD_TYPE_COOL,
    HOLD_TYPE_HEAT,
    HVAC_MODE_COOL,
    HVAC_MODE_HEAT,
    HVAC_MODE_OFF,
    OCCUPANCY_VALUE_MAP,
)
from .descriptors import Sample

if TYPE_CHECKING:
    from .descriptors import EcobeeDescriptors
    from .models import EquipmentSummary, RemoteSensor, SensorCapability, Thermostat

_LOGGER = logging.getLogger(__name__)

TRACKED_EQUIPMENT: dict[str, Callable[[EquipmentSummary], bool]] = {
    "CompCool1": lambda summary: summary.comp_cool1,
    "AuxHeat1": lambda summary: summary.aux_heat1,
    "Fan": lambda summary: summary.fan,
}


def _tenths(value: int | float) -> float:
    return value / 10


def _temperature(
    descriptors: EcobeeDescriptors, capability: SensorCapability, labels: tuple
) -> Sample | None:
    try:
        value = float(capability.value)
    except ValueError:
        _LOGGER.error(
            "Invalid sensor temperature value %r for sensor %s",
            capability.value,
            labels[2],
        )
        return None
    return Sample(descriptors.temperature, _tenths(value), labels)


def _humidity(
    descriptors: EcobeeDescriptors, capability: SensorCapability, labels: tuple
) -> Sample | None:
    try:
        value = float(capability.value)
    except ValueError:
        _LOGGER.error(
            "Invalid sensor humidity value %r for sensor %s",
            capability.value,
            labels[2],
        )
        return None
    return Sample(descriptors.humidity, value, labels)


def _occupancy(
    descriptors: EcobeeDescriptors, capability: SensorCapability, labels: tuple
) -> Sample | None:
    value = OCCUPANCY_VALUE_MAP.get(capability.value)
    if value is None:
        _LOGGER.error("Unknown sensor occupancy value %r", capability.value)
        return None
    return Sample(descriptors.occupancy, value, labels)


CapabilityHandler = Callable[
    ["EcobeeDescriptors", "SensorCapability", tuple], "Sample | None"
]

CAPABILITY_HANDLERS: dict[str, CapabilityHandler] = {
    CAPABILITY_TEMPERATURE: _temperature,
    CAPABILITY_HUMIDITY: _humidity,
    CAPABILITY_OCCUPANCY: _occupancy,
}


def map_sensor(
    descriptors: EcobeeDescriptors,
    thermostat_labels: tuple[str, str],
    sensor: RemoteSensor,
) -> Iterator[Sample]:
    """Yield the in-use sample and one sample per usable sensor capability."""
    labels = (*thermostat_labels, sensor.id, sensor.name, sensor.type)
    yield Sample(descriptors.in_use, 1.0 if sensor.in_use else 0.0, labels)

    for capability in sensor.capabilities:
        handler = CAPABILITY_HANDLERS.get(capability.type)
        if handler is None:
            _LOGGER.info("Ignoring sensor capability %r", capability.type)
            continue
        sample = handler(descriptors, capability, labels)
        if sample is not None:
            yield sample


def map_hold_temperatures(
    descriptors: EcobeeDescriptors, thermostat: Thermostat
) -> Iterator[Sample]:
    """Yield hold setpoints of every running hold event.

    Nothing is held while the system is off. A heat-only mode has no cool
    setpoint and vice versa; auto mode holds both. Each running hold event
    yields its own samples even when labels repeat.
    """
    mode = thermostat.settings.hvac_mode
    if mode == HVAC_MODE_OFF:
        return

    for event in thermostat.events:
        if not (event.running and event.type == EVENT_TYPE_HOLD):
            continue
        if not event.is_cool_off and mode != HVAC_MODE_HEAT:
            yield Sample(
                descriptors.hold_temperature,
                _tenths(event.cool_hold_temp),
                (thermostat.identifier, thermostat.name, HOLD_TYPE_COOL),
            )
        if not event.is_heat_off and mode != HVAC_MODE_COOL:
            yield Sample(
                descriptors.hold_temperature,
                _tenths(event.heat_hold_temp),
                (thermostat.identifier, thermostat.name, HOLD_TYPE_HEAT),
            )


def map_thermostat(
    descriptors: EcobeeDescriptors, thermostat: Thermostat
) -> Iterator[Sample]:
    """Yield all samples for a thermostat snapshot.

    A disconnected thermostat yields nothing rather than stale or zero
    values.
    """
    runtime = thermostat.runtime
    if not runtime.connected:
        _LOGGER.debug("Thermostat %s is not connected", thermostat.identifier)
        return

    labels = (thermostat.identifier, thermostat.name)
    yield Sample(
        descriptors.actual_temperature, _tenths(runtime.actual_temperature), labels
    )
    yield Sample(
        descriptors.target_temperature_max, _tenths(runtime.desired_cool), labels
    )
    yield Sample(
        descriptors.target_temperature_min, _tenths(runtime.desired_heat), labels
    )
    yield Sample(
        descriptors.current_hvac_mode,
        0.0,
        (*labels, thermostat.settings.hvac_mode),
    )
    yield from map_hold_temperatures(descriptors, thermostat)

    for sensor in thermostat.remote_sensors:
        yield from map_sensor(descriptors, labels, sensor)


def map_summary(
    descriptors: EcobeeDescriptors, summary: EquipmentSummary
) -> Iterator[Sample]:
    """Yield the running state of each tracked equipment kind as 1 or 0."""
    if not summary.connected:
        return

    for equipment, is_running in TRACKED_EQUIPMENT.items():
        yield Sample(
            descriptors.hvac_in_operation,
            1.0 if is_running(summary) else 0.0,
            (summary.identifier, summary.name, equipment),
        )
