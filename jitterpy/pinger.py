import random
import select
from collections import namedtuple

from jitterpy.icmp import build_echo_request, parse_echo_reply
from jitterpy.prober import Prober
from jitterpy.session import icmpSession
from jitterpy.statistics import calculate_average, calculate_uncorrected_deviation
from jitterpy.utils import resolve_host, now


import logging
logger = logging.getLogger(__name__)


Reply = namedtuple('Reply', ['addr', 'seq', 'nbytes', 'ttl', 'rtt', 'duplicate'])

ProbeStatistics = namedtuple('ProbeStatistics', [
    'host', 'addr', 'packets_sent', 'packets_recv', 'packets_duplicate',
    'packet_loss', 'rtts', 'min_rtt', 'max_rtt', 'avg_rtt', 'std_dev_rtt'])


class Pinger(Prober):
    """
    ICMP echo prober. Privileged mode uses a raw socket, otherwise an
    unprivileged ICMP datagram socket ("UDP ping", needs the gid to be in
    net.ipv4.ping_group_range on Linux).
    """

    def __init__(self, host, session_factory=icmpSession):
        Prober.__init__(self, host)
        self.addr, self.ipversion = resolve_host(host)
        self.ident = random.getrandbits(16)
        self.session_factory = session_factory

        self.sent = {}
        self.rtts = []
        self.received = set()
        self.duplicates = 0

    def run(self):
        session = self.session_factory(self.ipversion, self.privileged, self.ttl)
        try:
            self.probe(session)
        finally:
            session.close()

        if self.on_finish is not None:
            self.on_finish(self.statistics())

    def probe(self, session):
        schedule = now()
        endtime = schedule + self.timeout

        idx = 0
        while session.running:
            while select.select([session], [], [], 0)[0]:
                self.receive(session, now())

                if len(self.received) >= self.count:
                    logger.info("All packets received back")
                    session.running = False
                    break

            if not session.running:
                break

            t1 = now()
            if t1 >= endtime:
                logger.info("Timeout after %.3fs (don't wait anymore)", self.timeout)
                break

            if (t1 >= schedule) and (idx < self.count):
                schedule = schedule + self.interval
                data = build_echo_request(self.ident, idx, t1, self.size, self.ipversion)
                # a probe that cannot leave the host counts as lost
                self.sent[idx] = t1
                try:
                    session.sendto(data, self.addr)
                    logger.info("Sent to %s [seq=%d]", self.addr, idx)
                except OSError as e:
                    logger.error("Send to %s failed [seq=%d]: %s", self.addr, idx, e)
                idx = idx + 1

            deadline = min(schedule, endtime) if idx < self.count else endtime
            wait = deadline - now()
            if wait > 0:
                select.select([session], [], [], wait)

    def receive(self, session, t4):
        try:
            data, address = session.recvfrom()
        except OSError as e:
            logger.error("Receive from %s failed: %s", self.addr, e)
            return
        packet = parse_echo_reply(data, self.ipversion, raw=self.privileged)
        if packet is None:
            return
        # datagram sockets rewrite the identifier, the kernel filters for us
        if self.privileged and packet.ident != self.ident:
            return
        if packet.seq not in self.sent:
            logger.debug("Stray reply from %s [seq=%d]", address[0], packet.seq)
            return

        rtt = 1000 * (t4 - self.sent[packet.seq])
        duplicate = packet.seq in self.received
        if duplicate:
            self.duplicates += 1
            logger.info("Duplicate reply from %s [seq=%d]", address[0], packet.seq)
        else:
            self.received.add(packet.seq)
            self.rtts.append(rtt)
            logger.info("Reply from %s [seq=%d rtt=%.2fms]", address[0], packet.seq, rtt)

        if self.on_recv is not None:
            self.on_recv(Reply(address[0], packet.seq, len(packet.payload), packet.ttl, rtt, duplicate))

    def statistics(self):
        sent = len(self.sent)
        recv = len(self.rtts)
        rtts = tuple(self.rtts)
        return ProbeStatistics(
            host=self.host,
            addr=self.addr,
            packets_sent=sent,
            packets_recv=recv,
            packets_duplicate=self.duplicates,
            packet_loss=100 * float(sent - recv) / sent if sent else 0.0,
            rtts=rtts,
            min_rtt=min(rtts) if rtts else 0.0,
            max_rtt=max(rtts) if rtts else 0.0,
            avg_rtt=calculate_average(rtts),
            std_dev_rtt=calculate_uncorrected_deviation(rtts))
