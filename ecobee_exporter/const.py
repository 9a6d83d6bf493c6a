"""Constants for the Ecobee Prometheus exporter.

This module contains the constants used throughout the exporter,
including API endpoints, fetch selections, metric label schemas and
configuration defaults.
"""

BASE_URL = "https://api.ecobee.com"
THERMOSTAT_PATH = "/1/thermostat"
THERMOSTAT_SUMMARY_PATH = "/1/thermostatSummary"
USER_AGENT = "ecobee-exporter"

DEFAULT_METRIC_PREFIX = "ecobee"
DEFAULT_LISTEN_ADDRESS = "0.0.0.0"  # noqa: S104
DEFAULT_LISTEN_PORT = 9098
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "INFO"

CONF_ACCESS_TOKEN = "access_token"
CONF_METRIC_PREFIX = "metric_prefix"
CONF_LISTEN_ADDRESS = "listen_address"
CONF_LISTEN_PORT = "listen_port"
CONF_REQUEST_TIMEOUT = "request_timeout"
CONF_LOG_LEVEL = "log_level"

ENV_PREFIX = "ECOBEE_"

# Ecobee status codes meaning the access token is unusable
AUTH_STATUS_CODES = frozenset({1, 2, 14, 16})

THERMOSTAT_SELECTION = {
    "selectionType": "registered",
    "selectionMatch": "",
    "includeSensors": True,
    "includeRuntime": True,
    "includeSettings": True,
    "includeEvents": True,
}
SUMMARY_SELECTION = {
    "selectionType": "registered",
    "selectionMatch": "",
    "includeEquipmentStatus": True,
    "includeAlerts": True,
}

HVAC_MODE_OFF = "off"
HVAC_MODE_HEAT = "heat"
HVAC_MODE_COOL = "cool"
EVENT_TYPE_HOLD = "hold"
HOLD_TYPE_COOL = "cool"
HOLD_TYPE_HEAT = "heat"

CAPABILITY_TEMPERATURE = "temperature"
CAPABILITY_HUMIDITY = "humidity"
CAPABILITY_OCCUPANCY = "occupancy"
OCCUPANCY_VALUE_MAP = {"true": 1.0, "false": 0.0}

THERMOSTAT_LABELS = ("thermostat_id", "thermostat_name")
SENSOR_LABELS = (*THERMOSTAT_LABELS, "sensor_id", "sensor_name", "sensor_type")

# equipmentStatus token -> summary field, as reported by thermostatSummary
EQUIPMENT_STATUS_FIELDS = {
    "heatPump": "heat_pump",
    "heatPump2": "heat_pump2",
    "heatPump3": "heat_pump3",
    "compCool1": "comp_cool1",
    "compCool2": "comp_cool2",
    "auxHeat1": "aux_heat1",
    "auxHeat2": "aux_heat2",
    "auxHeat3": "aux_heat3",
    "fan": "fan",
    "humidifier": "humidifier",
    "dehumidifier": "dehumidifier",
    "ventilator": "ventilator",
    "economizer": "economizer",
    "compHotWater": "comp_hot_water",
    "auxHotWater": "aux_hot_water",
}
