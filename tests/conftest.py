"""Pytest configuration.

Probers here never touch the network: FakeProber replays canned RTTs and
EchoSession answers the Pinger's echo requests over a local socketpair.
"""

import errno
import socket
import struct

import pytest

from jitterpy.constants import ICMP_ECHO_REPLY, ICMP_HEADER_FORMAT, ICMP_HEADER_SIZE
from jitterpy.errors import ProberError
from jitterpy.prober import Prober


class FakeProber(Prober):

    instances = []

    def __init__(self, host, rtts=(10.0, 20.0, 30.0), fail=False, hook=None):
        if fail:
            raise ProberError("cannot resolve %s" % host)
        Prober.__init__(self, host)
        self.rtts = list(rtts)
        self.hook = hook
        self.ran = 0
        self.seen = None
        FakeProber.instances.append(self)

    def run(self):
        self.ran += 1
        self.seen = dict(count=self.count, timeout=self.timeout, interval=self.interval,
                         privileged=self.privileged, on_recv=self.on_recv, on_finish=self.on_finish)
        if self.hook is not None:
            self.hook(self)
        del self.rtts[self.count:]

    def statistics(self):
        return self


def ipv4_header(ttl=57, protocol=1):
    # version 4, ihl 5
    return struct.pack('!BBHHHBBH4s4s', 0x45, 0, 0, 0, 0, ttl, protocol, 0,
                       b'\xc0\x00\x02\x01', b'\xc0\x00\x02\x02')


class EchoSession:
    """Stands in for icmpSession: every request is answered by the far end."""

    def __init__(self, ipversion=4, privileged=False, ttl=64, reply=True, duplicate=False,
                 ip_header=False, foreign=False):
        self.near, self.far = socket.socketpair(socket.AF_UNIX, socket.SOCK_DGRAM)
        self.ipversion = ipversion
        self.privileged = privileged
        self.ttl = ttl
        self.reply = reply
        self.duplicate = duplicate
        self.ip_header = ip_header
        self.foreign = foreign
        self.running = True
        self.requests = []

    def sendto(self, data, address):
        self.requests.append(data)
        if not self.reply:
            return
        _, code, _, ident, seq = struct.unpack(ICMP_HEADER_FORMAT, data[:ICMP_HEADER_SIZE])
        if self.foreign:
            # somebody else's ping answered first
            self.far.send(self.frame(ident ^ 0xffff, code, seq, data))
        answer = self.frame(ident, code, seq, data)
        self.far.send(answer)
        if self.duplicate:
            self.far.send(answer)

    def frame(self, ident, code, seq, data):
        answer = struct.pack(ICMP_HEADER_FORMAT, ICMP_ECHO_REPLY, code, 0, ident, seq) + data[ICMP_HEADER_SIZE:]
        if self.ip_header:
            return ipv4_header() + answer
        return answer

    def recvfrom(self):
        return self.near.recv(9216), ("192.0.2.1", 0)

    def fileno(self):
        return self.near.fileno()

    def close(self):
        self.running = False
        self.near.close()
        self.far.close()


class UnreachableSession(EchoSession):
    """Every send fails the way a missing route does."""

    def sendto(self, data, address):
        self.requests.append(data)
        raise OSError(errno.ENETUNREACH, "Network is unreachable")


@pytest.fixture(autouse=True)
def reset_fake_probers():
    FakeProber.instances = []
    yield
    FakeProber.instances = []


@pytest.fixture
def fake_prober():
    return FakeProber
