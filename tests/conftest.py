"""Shared pytest fixtures for the discovery client tests."""

import socket
from collections import deque

import pytest


class FakeSocket:
    """In-memory stand-in for a UDP socket.

    ``replies`` holds (data, address) tuples or exception instances; each
    recvfrom call consumes one. An empty queue behaves like a timeout.
    """

    def __init__(self, replies=None, fail_on=None):
        self.replies = deque(replies or [])
        self.fail_on = fail_on or {}
        self.calls = []
        self.recv_sizes = []
        self.timeouts = []
        self.closed = False

    def _check(self, name):
        if name in self.fail_on:
            raise self.fail_on[name]

    def bind(self, address):
        self.calls.append(("bind", address))
        self._check("bind")

    def setsockopt(self, level, option, value):
        self.calls.append(("setsockopt", level, option, value))
        self._check("setsockopt")

    def sendto(self, data, address):
        self.calls.append(("sendto", data, address))
        self._check("sendto")
        return len(data)

    def settimeout(self, value):
        self.calls.append(("settimeout", value))
        self.timeouts.append(value)
        self._check("settimeout")

    def getsockname(self):
        return ("0.0.0.0", 54321)

    def recvfrom(self, bufsize):
        self.recv_sizes.append(bufsize)
        if not self.replies:
            raise socket.timeout("timed out")
        item = self.replies.popleft()
        if isinstance(item, BaseException):
            raise item
        data, address = item
        return data[:bufsize], address

    def close(self):
        self.closed = True


@pytest.fixture
def fake_socket_cls():
    return FakeSocket
