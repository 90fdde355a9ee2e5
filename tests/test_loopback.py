"""End-to-end discovery exchanges over real loopback UDP sockets."""

import socket
import time

import pytest

from device_discovery.discovery.session import PROBE, DiscoveryConfig, DiscoverySession


@pytest.fixture
def device_socket():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()


def loopback_session(port, timeout):
    config = DiscoveryConfig(port=port, timeout=timeout, broadcast_address="127.0.0.1")
    return DiscoverySession(config)


class TestLoopbackDiscovery:

    def test_zero_timeout_without_replies(self, device_socket):
        port = device_socket.getsockname()[1]
        session = loopback_session(port, 0)

        start = time.monotonic()
        results = list(session.run())

        assert results == []
        assert time.monotonic() - start < 1.0
        assert device_socket.recvfrom(16)[0] == PROBE

    def test_two_devices_in_receipt_order(self, device_socket):
        other = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        other.bind(("127.0.0.1", 0))
        try:
            session = loopback_session(device_socket.getsockname()[1], 0.5)
            session.start()

            probe, client = device_socket.recvfrom(16)
            assert probe == b"D"

            device_socket.sendto(b"router\r\nAA:BB:CC:DD:EE:FF\r\n1192.168.1.1", client)
            other.sendto(b"garbage", client)
            other.sendto(b"host\r\nFF:FF:FF:FF:FF:FF\r\n0", client)

            results = list(session.responses())
        finally:
            other.close()

        assert [record.name for record, _ in results] == ["router", "host"]
        assert results[0][1] == device_socket.getsockname()
        assert results[1][1] == other.getsockname()
        assert results[1][0].owner_ip == ""

    def test_oversized_reply_truncated(self, device_socket):
        session = loopback_session(device_socket.getsockname()[1], 0.5)
        session.start()
        _, client = device_socket.recvfrom(16)

        device_socket.sendto(b"big\r\nmac\r\n1" + b"9" * 400, client)
        results = list(session.responses())

        assert len(results) == 1
        record = results[0][0]
        assert len(record.owner_ip) == 256 - len("big\r\nmac\r\n1")

    def test_huge_timeout_accepted_by_socket(self, device_socket):
        session = loopback_session(device_socket.getsockname()[1], 10**10)
        with session:
            session.start()
            assert session.local_address is not None
        assert device_socket.recvfrom(16)[0] == PROBE
