"""Discovery module - UDP broadcast probe and response collection."""

from .record_parser import DeviceRecord, FIELD_DELIMITER, parse_record
from .session import (
    BROADCAST_ADDRESS,
    DEFAULT_DISCOVERY_PORT,
    DEFAULT_TIMEOUT,
    PROBE,
    RECEIVE_BUFFER_SIZE,
    DiscoveryConfig,
    DiscoverySession,
)
from .timeout_handler import TimeoutHandler

__all__ = [
    "DeviceRecord",
    "FIELD_DELIMITER",
    "parse_record",
    "BROADCAST_ADDRESS",
    "DEFAULT_DISCOVERY_PORT",
    "DEFAULT_TIMEOUT",
    "PROBE",
    "RECEIVE_BUFFER_SIZE",
    "DiscoveryConfig",
    "DiscoverySession",
    "TimeoutHandler",
]
