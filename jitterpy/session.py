import binascii
import socket

from jitterpy.constants import RECV_BUFFER
from jitterpy.errors import ProberError

import logging
logger = logging.getLogger(__name__)


class icmpSession:

    def __init__(self, ipversion=4, privileged=False, ttl=64):
        self.ipversion = ipversion
        self.privileged = privileged
        if ipversion == 6:
            self.open6(privileged, ttl)
        else:
            self.open(privileged, ttl)
        self.running = True

    def _socket(self, family, proto, privileged):
        kind = socket.SOCK_RAW if privileged else socket.SOCK_DGRAM
        try:
            return socket.socket(family, kind, proto)
        except OSError as e:
            mode = "privileged (raw)" if privileged else "unprivileged (datagram)"
            raise ProberError("cannot open %s ICMP socket: %s" % (mode, e))

    def open(self, privileged, ttl):
        logger.debug("open(privileged=%s, ttl=%d)", privileged, ttl)
        self.socket = self._socket(
            socket.AF_INET, socket.IPPROTO_ICMP, privileged)
        self.socket.setsockopt(socket.IPPROTO_IP, socket.IP_TTL, ttl)

    def open6(self, privileged, ttl):
        logger.debug("open6(privileged=%s, ttl=%d)", privileged, ttl)
        self.socket = self._socket(
            socket.AF_INET6, socket.IPPROTO_ICMPV6, privileged)
        self.socket.setsockopt(
            socket.IPPROTO_IPV6, socket.IPV6_UNICAST_HOPS, ttl)

    def sendto(self, data, address):
        logger.debug("transmit: %s", binascii.hexlify(data))
        self.socket.sendto(data, (address, 0))

    def recvfrom(self):
        data, address = self.socket.recvfrom(RECV_BUFFER)
        logger.debug("received: %s", binascii.hexlify(data))
        return data, address

    def fileno(self):
        return self.socket.fileno()

    def close(self):
        self.running = False
        self.socket.close()
