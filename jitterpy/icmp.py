import struct
from collections import namedtuple

from jitterpy.constants import (ICMP_ECHO_REQUEST, ICMP_ECHO_REPLY, ICMP6_ECHO_REQUEST, ICMP6_ECHO_REPLY,
                                ICMP_HEADER_FORMAT, ICMP_HEADER_SIZE, TIMESTAMP_FORMAT, TIMESTAMP_SIZE)
from jitterpy.utils import checksum, generate_zero_bytes


EchoPacket = namedtuple('EchoPacket', ['type', 'code', 'ident', 'seq', 'payload', 'ttl'])


def build_echo_request(ident, seq, timestamp, size, ipversion=4):
    """
    Build an ICMP (or ICMPv6) echo request carrying the send timestamp,
    zero padded up to size payload bytes.
    """

    icmp_type = ICMP6_ECHO_REQUEST if ipversion == 6 else ICMP_ECHO_REQUEST
    payload = struct.pack(TIMESTAMP_FORMAT, timestamp)
    if size > TIMESTAMP_SIZE:
        payload += generate_zero_bytes(size - TIMESTAMP_SIZE)

    header = struct.pack(ICMP_HEADER_FORMAT, icmp_type, 0, 0, ident & 0xffff, seq & 0xffff)
    if ipversion == 6:
        # the kernel fills in the ICMPv6 checksum (pseudo header)
        return header + payload
    csum = checksum(header + payload)
    return struct.pack(ICMP_HEADER_FORMAT, icmp_type, 0, csum, ident & 0xffff, seq & 0xffff) + payload


def parse_echo_reply(data, ipversion=4, raw=False):
    """
    Decode an echo reply. Raw IPv4 sockets hand us the IP header as well,
    and so do datagram ICMP sockets on macOS; a leading version nibble of 4
    marks it (no ICMP type starts with 0x4). Returns None for anything that
    is not an echo reply.
    """

    ttl = None
    if ipversion == 4 and (raw or (data and data[0] >> 4 == 4)):
        if len(data) < 20:
            return None
        ihl = (data[0] & 0x0f) * 4
        ttl = data[8]
        data = data[ihl:]

    if len(data) < ICMP_HEADER_SIZE:
        return None

    icmp_type, code, _, ident, seq = struct.unpack(ICMP_HEADER_FORMAT, data[:ICMP_HEADER_SIZE])
    expected = ICMP6_ECHO_REPLY if ipversion == 6 else ICMP_ECHO_REPLY
    if icmp_type != expected:
        return None
    return EchoPacket(icmp_type, code, ident, seq, data[ICMP_HEADER_SIZE:], ttl)

