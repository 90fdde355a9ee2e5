"""UDP broadcast discovery session.

One session sends a single probe byte to the broadcast address and then
collects replies until a receive times out:

    session = DiscoverySession(DiscoveryConfig(port=30303, timeout=1))
    for record, address in session.run():
        ...

Each receive waits up to ``timeout`` seconds on its own, so a steady stream
of replies keeps the session alive. Set ``strict_deadline`` to bound the
whole session by ``timeout`` instead.
"""

import socket
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from ..errors import DiscoveryReceiveError, DiscoverySetupError
from .record_parser import DeviceRecord, parse_record
from .timeout_handler import TimeoutHandler


# Default UDP port devices listen on for the probe
DEFAULT_DISCOVERY_PORT = 30303

# Default per-receive timeout in seconds
DEFAULT_TIMEOUT = 1

PROBE = b"D"
BROADCAST_ADDRESS = "255.255.255.255"

# Replies longer than this are truncated by the socket
RECEIVE_BUFFER_SIZE = 256

DEFAULT_MAX_CONSECUTIVE_ERRORS = 8

# Largest receive timeout a socket accepts (INT_MAX milliseconds); longer
# timeouts are clamped to it
MAX_RECEIVE_TIMEOUT = (2**31 - 1) // 1000

Address = tuple[str, int]
SocketFactory = Callable[[], socket.socket]


@dataclass
class DiscoveryConfig:
    """Configuration for a discovery session."""
    port: int = DEFAULT_DISCOVERY_PORT
    timeout: float = DEFAULT_TIMEOUT
    broadcast_address: str = BROADCAST_ADDRESS
    strict_deadline: bool = False
    max_consecutive_errors: int = DEFAULT_MAX_CONSECUTIVE_ERRORS
    verbose: bool = False

    def __post_init__(self):
        if not 0 <= self.port <= 65535:
            raise ValueError(f"port must be in 0..65535, got {self.port}")
        if self.timeout < 0:
            raise ValueError(f"timeout must be non-negative, got {self.timeout}")
        if self.max_consecutive_errors < 0:
            raise ValueError(
                f"max_consecutive_errors must be non-negative, got {self.max_consecutive_errors}"
            )


def receive_timeout(seconds: float) -> float:
    """Clamp a timeout to what socket.settimeout accepts."""
    return min(seconds, MAX_RECEIVE_TIMEOUT)


def _udp_socket() -> socket.socket:
    return socket.socket(socket.AF_INET, socket.SOCK_DGRAM)


class DiscoverySession:
    """A single probe/collect round over UDP broadcast.

    Sessions are not restartable; construct a new one per round.
    """

    def __init__(
        self,
        config: Optional[DiscoveryConfig] = None,
        socket_factory: Optional[SocketFactory] = None,
    ):
        """Initialize discovery session.

        Args:
            config: Session configuration. Default: port 30303, 1s timeout.
            socket_factory: Callable returning an unbound UDP socket.
        """
        self.config = config or DiscoveryConfig()
        self._socket_factory = socket_factory or _udp_socket
        self._sock: Optional[socket.socket] = None
        self._started = False
        self._deadline: Optional[TimeoutHandler] = None

    @property
    def local_address(self) -> Optional[Address]:
        """Address the session socket is bound to, once started."""
        if self._sock is None:
            return None
        return self._sock.getsockname()

    def start(self) -> None:
        """Bind the socket, broadcast the probe and arm the receive timeout.

        Raises:
            RuntimeError: If the session was already started.
            DiscoverySetupError: If any socket operation fails.
        """
        if self._started:
            raise RuntimeError("DiscoverySession cannot be restarted")
        self._started = True

        destination = (self.config.broadcast_address, self.config.port)
        try:
            self._sock = self._socket_factory()
            self._setup_step("bind", self._sock.bind, ("", 0))
            self._setup_step(
                "broadcast", self._sock.setsockopt, socket.SOL_SOCKET, socket.SO_BROADCAST, 1
            )
            self._setup_step("send", self._sock.sendto, PROBE, destination)
            self._setup_step(
                "timeout", self._sock.settimeout, receive_timeout(self.config.timeout)
            )
        except OSError as e:
            self.close()
            raise DiscoverySetupError("socket", str(e)) from e
        except Exception:
            self.close()
            raise

        if self.config.strict_deadline:
            self._deadline = TimeoutHandler(self.config.timeout)
            self._deadline.start()

    def responses(self) -> Iterator[tuple[DeviceRecord, Address]]:
        """Yield (record, source address) pairs until a receive times out.

        Malformed replies are skipped. The socket is closed when the
        generator finishes.

        Raises:
            RuntimeError: If start() has not been called.
            DiscoveryReceiveError: If the consecutive error limit is reached.
        """
        if self._sock is None:
            raise RuntimeError("DiscoverySession.start() must be called first")

        sock = self._sock
        limit = self.config.max_consecutive_errors
        failures = 0

        try:
            while True:
                if self._deadline is not None:
                    if self._deadline.is_expired:
                        return
                    sock.settimeout(receive_timeout(self._deadline.remaining))

                try:
                    data, source = sock.recvfrom(RECEIVE_BUFFER_SIZE)
                except (BlockingIOError, socket.timeout):
                    return
                except OSError as e:
                    failures += 1
                    if limit and failures >= limit:
                        raise DiscoveryReceiveError(failures, e) from e
                    continue

                failures = 0
                record = parse_record(data)
                if record is not None:
                    yield record, (source[0], source[1])
        finally:
            self.close()

    def run(self) -> Iterator[tuple[DeviceRecord, Address]]:
        """Start the session and yield every parsed reply."""
        self.start()
        yield from self.responses()

    def close(self) -> None:
        """Close the UDP socket."""
        if self._sock:
            try:
                self._sock.close()
            except OSError:
                pass
            self._sock = None

    def _setup_step(self, stage: str, operation: Callable, *args) -> None:
        try:
            operation(*args)
        except (OSError, OverflowError) as e:
            raise DiscoverySetupError(stage, str(e)) from e

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
