"""Fixed-width table output for discovered devices."""

from ..discovery.record_parser import DeviceRecord

# Every cell is padded and truncated to its column width
ROW_FORMAT = "{:15.15} {:18.18} {:25.25} {:25.25} {:10.10}"

HEADER = ("Name", "MAC ID", "Address", "In Use Address", "Status")


def format_address(address: tuple[str, int]) -> str:
    """Render a (host, port) pair as host:port."""
    host, port = address[0], address[1]
    return f"{host}:{port}"


class TableReporter:
    """Formats discovery results as fixed-width text rows."""

    def header(self) -> str:
        return ROW_FORMAT.format(*HEADER)

    def row(self, record: DeviceRecord, address: tuple[str, int]) -> str:
        return ROW_FORMAT.format(
            record.name,
            record.mac_id,
            format_address(address),
            record.owner_ip,
            record.status,
        )
