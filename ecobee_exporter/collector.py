"""Prometheus collector that polls the Ecobee API on every scrape."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Protocol

import httpx
from prometheus_client.registry import Collector

from .api import EcobeeApiAuthError, EcobeeApiClientError
from .const import SUMMARY_SELECTION, THERMOSTAT_SELECTION
from .descriptors import EcobeeDescriptors, Sample, build_descriptors
from .mapping import map_summary, map_thermostat

if TYPE_CHECKING:
    from collections.abc import Iterator

    from prometheus_client.core import GaugeMetricFamily

    from .models import EquipmentSummary, Thermostat

_LOGGER = logging.getLogger(__name__)

FETCH_ERRORS = (EcobeeApiClientError, httpx.HTTPError)


class ThermostatSource(Protocol):
    """The two Ecobee fetches the collector depends on."""

    def get_thermostats(self, selection: dict[str, Any]) -> list[Thermostat]: ...

    def get_thermostat_summary(
        self, selection: dict[str, Any]
    ) -> list[EquipmentSummary]: ...


class EcobeeCollector(Collector):
    """Collector gathering Ecobee thermostat metrics on demand.

    Every scrape fetches thermostats and their equipment summary afresh.
    A failed fetch truncates the scrape at that point: the fetch latency
    is always reported, samples produced before the failure are kept and
    nothing is retried.
    """

    def __init__(
        self,
        client: ThermostatSource,
        descriptors: EcobeeDescriptors | str,
    ) -> None:
        """Initialize the collector.

        Args:
            client: Source of thermostat snapshots and summaries.
            descriptors: Prebuilt descriptors, or the metric prefix to build
                them with. Prefixes must be unique within a registry.

        """
        if isinstance(descriptors, str):
            descriptors = build_descriptors(descriptors)
        self._client = client
        self.descriptors = descriptors

    def describe(self) -> Iterator[GaugeMetricFamily]:
        """Yield an empty family for every exported metric."""
        for descriptor in self.descriptors.all():
            yield descriptor.family()

    def collect(self) -> Iterator[GaugeMetricFamily]:
        """Scrape the API and yield one family per metric that got samples."""
        families = {d.name: d.family() for d in self.descriptors.all()}
        populated = set()
        for sample in self.scrape():
            name = sample.descriptor.name
            families[name].add_metric(list(sample.label_values), sample.value)
            populated.add(name)

        for name, family in families.items():
            if name in populated:
                yield family

    def scrape(self) -> list[Sample]:
        """Run both fetches and return the samples of a single scrape."""
        samples: list[Sample] = []

        fetch_error: Exception | None = None
        start = time.monotonic()
        try:
            thermostats = self._client.get_thermostats(THERMOSTAT_SELECTION)
        except FETCH_ERRORS as err:
            thermostats = []
            fetch_error = err
        elapsed = time.monotonic() - start
        samples.append(Sample(self.descriptors.fetch_time, elapsed))

        if fetch_error is not None:
            self._log_fetch_error("thermostats", fetch_error)
            return samples

        _LOGGER.debug(
            "Fetched %d thermostats in %.3f seconds", len(thermostats), elapsed
        )
        for thermostat in thermostats:
            samples.extend(map_thermostat(self.descriptors, thermostat))

        try:
            summaries = self._client.get_thermostat_summary(SUMMARY_SELECTION)
        except FETCH_ERRORS as err:
            self._log_fetch_error("thermostat summary", err)
            return samples

        for summary in summaries:
            samples.extend(map_summary(self.descriptors, summary))

        return samples

    @staticmethod
    def _log_fetch_error(what: str, err: Exception) -> None:
        if isinstance(err, EcobeeApiAuthError):
            _LOGGER.warning("Authentication failed fetching %s: %s", what, err)
        else:
            _LOGGER.error("Failed to fetch %s: %s", what, err)
