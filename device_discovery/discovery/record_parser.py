"""Parser for device discovery replies.

Devices answer the probe with three CRLF-delimited UTF-8 fields:

    NAME\r\nMAC\r\nSOWNER_IP

where ``S`` is a single status character and the rest of the third field
is the address the device reports as in use.
"""

from dataclasses import asdict, dataclass
from typing import Optional


FIELD_DELIMITER = "\r\n"


@dataclass(frozen=True)
class DeviceRecord:
    """A device described by one discovery reply."""
    name: str
    mac_id: str
    status: str
    owner_ip: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def parse_record(payload: bytes) -> Optional[DeviceRecord]:
    """Decode a reply payload into a DeviceRecord.

    Args:
        payload: Raw datagram bytes.

    Returns:
        The parsed record, or None if the payload is not valid UTF-8,
        has fewer than three fields, or the third field is empty.
    """
    try:
        text = bytes(payload).decode("utf-8")
    except UnicodeDecodeError:
        return None

    fields = text.split(FIELD_DELIMITER)
    if len(fields) < 3:
        return None

    name, mac_id, tail = fields[0], fields[1], fields[2]
    if not tail:
        return None

    return DeviceRecord(
        name=name,
        mac_id=mac_id,
        status=tail[:1],
        owner_ip=tail[1:],
    )
