"""API client for the Ecobee thermostat service.

This module provides functions to fetch thermostat snapshots and
equipment summaries from the Ecobee API, validate the responses and
decode them into the exporter's data models.
"""

import json
import logging
from typing import Any

import httpx

from .const import (
    AUTH_STATUS_CODES,
    BASE_URL,
    EQUIPMENT_STATUS_FIELDS,
    SUMMARY_SELECTION,
    THERMOSTAT_PATH,
    THERMOSTAT_SELECTION,
    THERMOSTAT_SUMMARY_PATH,
    USER_AGENT,
)
from .models import (
    EquipmentSummary,
    Event,
    RemoteSensor,
    Runtime,
    SensorCapability,
    Settings,
    Thermostat,
)

_LOGGER = logging.getLogger(__name__)

# HTTP status codes
HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401

# thermostatIdentifier:name:connected followed by four revision fields
REVISION_TRAILING_FIELDS = 5
REVISION_MIN_FIELDS = 7


class EcobeeApiClientError(Exception):
    """Base exception for Ecobee API client errors."""


class EcobeeApiAuthError(EcobeeApiClientError):
    """Exception raised for authentication errors."""


def create_headers(access_token: str) -> dict[str, str]:
    """Create HTTP headers for Ecobee API requests.

    Args:
        access_token: OAuth access token sent as a bearer token.

    Returns:
        Dictionary containing HTTP headers for API requests.

    """
    return {
        "content-type": "application/json;charset=UTF-8",
        "accept": "application/json",
        "user-agent": USER_AGENT,
        "authorization": f"Bearer {access_token}",
    }


def create_query(selection: dict[str, Any]) -> dict[str, str]:
    """Wrap a selection into the ``json`` query parameter Ecobee expects."""
    return {"json": json.dumps({"selection": selection}, separators=(",", ":"))}


def is_http_error(status: int) -> bool:
    """Check if HTTP status code indicates an error."""
    return status >= HTTP_BAD_REQUEST


def is_auth_error(status: int) -> bool:
    """Check if HTTP status code indicates authentication error."""
    return status == HTTP_UNAUTHORIZED


def get_status_code(data: dict[str, Any]) -> int:
    """Return the Ecobee status code of a response.

    Absent status counts as success (0); an unreadable code as failure (-1).
    """
    status = data.get("status")
    if not isinstance(status, dict):
        return 0
    try:
        return int(status.get("code", 0))
    except (TypeError, ValueError):
        return -1


def is_api_error(data: dict[str, Any]) -> bool:
    """Check if API response indicates an error.

    Args:
        data: API response data dictionary.

    Returns:
        True if the status code is not 0, False otherwise.

    """
    return get_status_code(data) != 0


def is_auth_api_error(data: dict[str, Any]) -> bool:
    """Check if API response indicates an unusable access token."""
    return get_status_code(data) in AUTH_STATUS_CODES


def validate_response(response: httpx.Response) -> dict[str, Any]:
    """Validate HTTP response and return parsed JSON data.

    Ecobee reports most failures twice: once as an HTTP error status and
    once as a ``status`` object in the body. The body is preferred when it
    can be decoded since it distinguishes expired tokens from other errors.

    Args:
        response: HTTP response object to validate.

    Returns:
        Parsed JSON data from response.

    Raises:
        EcobeeApiAuthError: If authentication error is detected.
        EcobeeApiClientError: If API error is detected.

    """
    _validate_http_status(response)
    try:
        data = response.json()
    except ValueError as err:
        error_msg = f"Invalid JSON in response: {err}"
        raise EcobeeApiClientError(error_msg) from err
    if not isinstance(data, dict):
        error_msg = "Unexpected response payload"
        raise EcobeeApiClientError(error_msg)
    _validate_api_status(data)
    return data


def _validate_http_status(response: httpx.Response) -> None:
    if not is_http_error(response.status_code):
        return

    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        _validate_api_status(data)

    if is_auth_error(response.status_code):
        auth_error = "Authentication error"
        raise EcobeeApiAuthError(auth_error)

    client_error = f"Request failed: {response.status_code}"
    raise EcobeeApiClientError(client_error)


def _validate_api_status(data: dict[str, Any]) -> None:
    if not is_api_error(data):
        return

    status = data.get("status") or {}
    error_message = status.get("message") or "Unknown API error"

    if is_auth_api_error(data):
        raise EcobeeApiAuthError(error_message)

    raise EcobeeApiClientError(error_message)


def _extract_capability(data: dict[str, Any]) -> SensorCapability:
    return SensorCapability(
        id=str(data.get("id", "")),
        type=str(data.get("type", "")),
        value=str(data.get("value", "")),
    )


def _extract_sensor(data: dict[str, Any]) -> RemoteSensor:
    return RemoteSensor(
        id=str(data["id"]),
        name=str(data.get("name", "")),
        type=str(data.get("type", "")),
        in_use=bool(data.get("inUse", False)),
        capabilities=[_extract_capability(c) for c in data.get("capability", [])],
    )


def _extract_event(data: dict[str, Any]) -> Event:
    return Event(
        type=str(data.get("type", "")),
        name=str(data.get("name", "")),
        running=bool(data.get("running", False)),
        cool_hold_temp=int(data.get("coolHoldTemp", 0)),
        heat_hold_temp=int(data.get("heatHoldTemp", 0)),
        is_cool_off=bool(data.get("isCoolOff", False)),
        is_heat_off=bool(data.get("isHeatOff", False)),
    )


def _extract_thermostat(data: dict[str, Any]) -> Thermostat:
    runtime = data.get("runtime") or {}
    settings = data.get("settings") or {}
    return Thermostat(
        identifier=str(data["identifier"]),
        name=str(data.get("name", "")),
        runtime=Runtime(
            connected=bool(runtime.get("connected", False)),
            actual_temperature=int(runtime.get("actualTemperature", 0)),
            desired_heat=int(runtime.get("desiredHeat", 0)),
            desired_cool=int(runtime.get("desiredCool", 0)),
        ),
        settings=Settings(hvac_mode=str(settings.get("hvacMode", ""))),
        events=[_extract_event(e) for e in data.get("events", [])],
        remote_sensors=[_extract_sensor(s) for s in data.get("remoteSensors", [])],
    )


def extract_thermostats(data: dict[str, Any]) -> list[Thermostat]:
    """Extract thermostat snapshots from a thermostat API response.

    Args:
        data: API response data dictionary.

    Returns:
        List of Thermostat objects in the order returned by the API.

    Raises:
        EcobeeApiClientError: If the payload is malformed.

    """
    try:
        return [_extract_thermostat(t) for t in data.get("thermostatList", [])]
    except (KeyError, TypeError, ValueError, AttributeError) as err:
        error_msg = f"Malformed thermostat payload: {err!r}"
        raise EcobeeApiClientError(error_msg) from err


def parse_revision(entry: str) -> tuple[str, str, bool]:
    """Parse a ``revisionList`` entry into identifier, name and connectivity.

    The entry has the form
    ``id:name:connected:thermostatRev:alertsRev:runtimeRev:intervalRev``.
    The name may itself contain colons, so fields are taken from both ends.

    Raises:
        ValueError: If the entry has too few fields.

    """
    parts = entry.split(":")
    if len(parts) < REVISION_MIN_FIELDS:
        error_msg = f"Invalid revision entry: {entry!r}"
        raise ValueError(error_msg)
    identifier = parts[0]
    name = ":".join(parts[1:-REVISION_TRAILING_FIELDS])
    connected = parts[-REVISION_TRAILING_FIELDS] == "true"
    return identifier, name, connected


def parse_equipment_status(entry: str) -> tuple[str, dict[str, bool]]:
    """Parse a ``statusList`` entry into identifier and running equipment flags.

    The entry has the form ``id:equipment1,equipment2``; the part after the
    colon is empty when nothing is running.
    """
    identifier, _, status = entry.partition(":")
    flags: dict[str, bool] = {}
    for token in filter(None, status.split(",")):
        field_name = EQUIPMENT_STATUS_FIELDS.get(token)
        if field_name is None:
            _LOGGER.debug("Ignoring unknown equipment status %r", token)
            continue
        flags[field_name] = True
    return identifier, flags


def extract_summaries(data: dict[str, Any]) -> list[EquipmentSummary]:
    """Extract equipment summaries from a thermostat summary API response.

    Joins ``revisionList`` (identity and connectivity) with ``statusList``
    (running equipment) on the thermostat identifier.

    Args:
        data: API response data dictionary.

    Returns:
        List of EquipmentSummary objects in revision list order.

    Raises:
        EcobeeApiClientError: If the payload is malformed.

    """
    try:
        statuses = dict(
            parse_equipment_status(entry) for entry in data.get("statusList", [])
        )
        summaries = []
        for entry in data.get("revisionList", []):
            identifier, name, connected = parse_revision(entry)
            summaries.append(
                EquipmentSummary(
                    identifier=identifier,
                    name=name,
                    connected=connected,
                    **statuses.get(identifier, {}),
                )
            )
    except (TypeError, ValueError, AttributeError) as err:
        error_msg = f"Malformed thermostat summary payload: {err!r}"
        raise EcobeeApiClientError(error_msg) from err
    return summaries


def create_session_client(timeout: float) -> httpx.Client:
    """Create HTTP client for the Ecobee API.

    Failed requests are not retried; the next scrape is the retry.

    Args:
        timeout: Request timeout in seconds.

    Returns:
        Configured httpx Client.

    """
    return httpx.Client(timeout=timeout)


def get_thermostats(
    session: httpx.Client,
    access_token: str,
    selection: dict[str, Any] = THERMOSTAT_SELECTION,
) -> list[Thermostat]:
    """Fetch thermostat snapshots from the Ecobee API.

    Args:
        session: HTTP client session.
        access_token: OAuth access token.
        selection: Ecobee selection object.

    Returns:
        List of Thermostat objects.

    Raises:
        EcobeeApiAuthError: If authentication fails.
        EcobeeApiClientError: If API request fails.

    """
    url = f"{BASE_URL}{THERMOSTAT_PATH}"

    _LOGGER.debug("Fetching thermostats from Ecobee API")
    response = session.get(
        url, headers=create_headers(access_token), params=create_query(selection)
    )
    data = validate_response(response)
    thermostats = extract_thermostats(data)
    _LOGGER.debug("Retrieved %d thermostats from Ecobee API", len(thermostats))
    return thermostats


def get_thermostat_summary(
    session: httpx.Client,
    access_token: str,
    selection: dict[str, Any] = SUMMARY_SELECTION,
) -> list[EquipmentSummary]:
    """Fetch the equipment summary of every thermostat from the Ecobee API.

    Args:
        session: HTTP client session.
        access_token: OAuth access token.
        selection: Ecobee selection object.

    Returns:
        List of EquipmentSummary objects.

    Raises:
        EcobeeApiAuthError: If authentication fails.
        EcobeeApiClientError: If API request fails.

    """
    url = f"{BASE_URL}{THERMOSTAT_SUMMARY_PATH}"

    _LOGGER.debug("Fetching thermostat summary from Ecobee API")
    response = session.get(
        url, headers=create_headers(access_token), params=create_query(selection)
    )
    data = validate_response(response)
    summaries = extract_summaries(data)
    _LOGGER.debug("Retrieved %d thermostat summaries from Ecobee API", len(summaries))
    return summaries


class EcobeeClient:
    """Ecobee API client bound to a session and an access token."""

    def __init__(self, session: httpx.Client, access_token: str) -> None:
        self.session = session
        self._access_token = access_token

    def get_thermostats(
        self, selection: dict[str, Any] = THERMOSTAT_SELECTION
    ) -> list[Thermostat]:
        """Fetch thermostat snapshots with the bound token."""
        return get_thermostats(self.session, self._access_token, selection)

    def get_thermostat_summary(
        self, selection: dict[str, Any] = SUMMARY_SELECTION
    ) -> list[EquipmentSummary]:
        """Fetch equipment summaries with the bound token."""
        return get_thermostat_summary(self.session, self._access_token, selection)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
