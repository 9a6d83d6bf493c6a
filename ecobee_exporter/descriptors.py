"""Metric descriptors exported for Ecobee thermostats.

A descriptor is the schema of one metric kind: its fully qualified name,
help text and ordered label names. The full set is built once per
collector by :func:`build_descriptors` and shared read-only by every
scrape.
"""

from collections.abc import Iterator
from dataclasses import dataclass, fields

from prometheus_client.core import GaugeMetricFamily

from .const import SENSOR_LABELS, THERMOSTAT_LABELS


@dataclass(frozen=True, slots=True)
class MetricDescriptor:
    """Immutable identity of a gauge metric."""

    name: str
    documentation: str
    labels: tuple[str, ...] = ()

    def family(self) -> GaugeMetricFamily:
        """Return an empty gauge family for this descriptor."""
        return GaugeMetricFamily(self.name, self.documentation, labels=self.labels)


@dataclass(frozen=True, slots=True)
class Sample:
    """One value emitted against a descriptor during a scrape."""

    descriptor: MetricDescriptor
    value: float
    label_values: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if len(self.label_values) != len(self.descriptor.labels):
            error_msg = (
                f"{self.descriptor.name} expects {len(self.descriptor.labels)} "
                f"label values, got {len(self.label_values)}"
            )
            raise ValueError(error_msg)


@dataclass(frozen=True, slots=True)
class EcobeeDescriptors:
    """The eleven descriptors exported by the collector."""

    fetch_time: MetricDescriptor
    actual_temperature: MetricDescriptor
    target_temperature_max: MetricDescriptor
    target_temperature_min: MetricDescriptor
    current_hvac_mode: MetricDescriptor
    hold_temperature: MetricDescriptor
    hvac_in_operation: MetricDescriptor
    temperature: MetricDescriptor
    humidity: MetricDescriptor
    occupancy: MetricDescriptor
    in_use: MetricDescriptor

    def all(self) -> Iterator[MetricDescriptor]:
        """Yield every descriptor in declaration order."""
        for f in fields(self):
            yield getattr(self, f.name)


def build_descriptors(prefix: str) -> EcobeeDescriptors:
    """Build the descriptor set with every name prefixed by ``prefix``.

    Metric names must be unique within a registry, so two collectors
    registered together need different prefixes.
    """

    def new(metric: str, documentation: str, labels=()) -> MetricDescriptor:
        return MetricDescriptor(f"{prefix}_{metric}", documentation, tuple(labels))

    return EcobeeDescriptors(
        fetch_time=new(
            "fetch_time",
            "Elapsed time fetching data via Ecobee API",
        ),
        actual_temperature=new(
            "actual_temperature",
            "Thermostat-averaged current temperature",
            THERMOSTAT_LABELS,
        ),
        target_temperature_max=new(
            "target_temperature_max",
            "Maximum temperature for thermostat to maintain",
            THERMOSTAT_LABELS,
        ),
        target_temperature_min=new(
            "target_temperature_min",
            "Minimum temperature for thermostat to maintain",
            THERMOSTAT_LABELS,
        ),
        current_hvac_mode=new(
            "current_hvac_mode",
            "Current HVAC mode of thermostat",
            (*THERMOSTAT_LABELS, "current_hvac_mode"),
        ),
        hold_temperature=new(
            "hold_temperature",
            "Temperature to hold by thermostat",
            (*THERMOSTAT_LABELS, "type"),
        ),
        hvac_in_operation=new(
            "hvac_in_operation",
            "HVAC equipment running status (0 or 1)",
            (*THERMOSTAT_LABELS, "equipment"),
        ),
        temperature=new(
            "temperature",
            "Temperature reported by a sensor in degrees",
            SENSOR_LABELS,
        ),
        humidity=new(
            "humidity",
            "Humidity reported by a sensor in percent",
            SENSOR_LABELS,
        ),
        occupancy=new(
            "occupancy",
            "Occupancy reported by a sensor (0 or 1)",
            SENSOR_LABELS,
        ),
        in_use=new(
            "in_use",
            "Is sensor being used in thermostat calculations (0 or 1)",
            SENSOR_LABELS,
        ),
    )
