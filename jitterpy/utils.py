import socket
import struct
import time

from jitterpy.errors import ProberError


def parse_host(host):
    """ Normalize a target host.
        Works with:
            IPv6 address with and without brackets;
            IPv4 address or DNS name.
    """
    host = host.strip()
    if host.startswith('[') and ']' in host:
        # [IPv6] literal, optionally with a trailing port that ping ignores
        return host[1:host.index(']')]
    return host


def resolve_host(host):
    """
    Resolve a target host to (address, ipversion). IPv4 is preferred when
    the name has both A and AAAA records.
    """
    name = parse_host(host)
    if not name:
        raise ProberError("no target host given")

    try:
        infos = socket.getaddrinfo(name, None, 0, socket.SOCK_DGRAM)
    except (socket.gaierror, UnicodeError) as e:
        raise ProberError("cannot resolve %s: %s" % (name, e))

    infos.sort(key=lambda info: 0 if info[0] == socket.AF_INET else 1)
    for family, _, _, _, sockaddr in infos:
        if family == socket.AF_INET:
            return sockaddr[0], 4
        if family == socket.AF_INET6:
            return sockaddr[0], 6
    raise ProberError("no IPv4/IPv6 address for %s" % name)


def now():
    return time.time()


def checksum(data):
    """
    Internet checksum [RFC1071] over data
    """

    if len(data) % 2:
        data += b'\x00'
    total = sum(struct.unpack('!%dH' % (len(data) // 2), data))
    total = (total >> 16) + (total & 0xffff)
    total += total >> 16
    return ~total & 0xffff


def generate_zero_bytes(nbr):
    return struct.pack('!%sB' % nbr, *[0 for x in range(nbr)])


def format_time(ms):
    if abs(ms) > 60000:
        return "%7.1fmin" % float(ms / 60000)
    if abs(ms) > 10000:
        return "%7.1fsec" % float(ms / 1000)
    if abs(ms) > 1000:
        return "%7.2fsec" % float(ms / 1000)
    if abs(ms) > 1:
        return "%8.2fms" % ms
    return "%8dus" % int(ms * 1000)
