"""Structured report generator for discovery results.

Produces a single JSON or YAML document describing one discovery run.
"""

import json
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

import yaml

from ..discovery.record_parser import DeviceRecord
from ..discovery.session import DiscoveryConfig
from .table_reporter import format_address


class JsonReporter:
    """Generates structured reports from discovery results."""

    def generate(
        self,
        devices: Iterable[tuple[DeviceRecord, tuple[str, int]]],
        config: Optional[DiscoveryConfig] = None,
    ) -> dict[str, Any]:
        """Generate a report from discovered devices.

        Args:
            devices: (record, source address) pairs in receipt order.
            config: Configuration the session ran with.

        Returns:
            Report dictionary ready for serialization.
        """
        config = config or DiscoveryConfig()
        entries = [
            {**record.to_dict(), "address": format_address(address)}
            for record, address in devices
        ]

        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "port": config.port,
            "timeout": config.timeout,
            "count": len(entries),
            "devices": entries,
        }

    def to_json_string(self, report: dict[str, Any], pretty: bool = True) -> str:
        """Convert report to JSON string.

        Args:
            report: Report dictionary.
            pretty: If True, format with indentation.

        Returns:
            JSON string.
        """
        if pretty:
            return json.dumps(report, indent=2, ensure_ascii=False)
        return json.dumps(report, ensure_ascii=False)

    def to_yaml_string(self, report: dict[str, Any]) -> str:
        return yaml.safe_dump(report, sort_keys=False, allow_unicode=True)
