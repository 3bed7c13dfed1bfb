import threading
from collections import namedtuple

from jitterpy.constants import COUNT_DEFAULT, TIMEOUT_DEFAULT, INTERVAL_DEFAULT, SIZE_DEFAULT, TTL_DEFAULT
from jitterpy.errors import JitterError, ProberError, InvalidHostError, RunInProgressError
from jitterpy.pinger import Pinger
from jitterpy.statistics import generate_statistics
from jitterpy.utils import now


import logging
logger = logging.getLogger(__name__)


class JitterConfig(namedtuple('JitterConfig', ['sample_size', 'privileged', 'timeout', 'interval', 'size', 'ttl'])):
    """
    Probe batch settings. ``timeout`` and ``interval`` are seconds.
    """

    __slots__ = ()

    def __new__(cls, sample_size=COUNT_DEFAULT, privileged=False, timeout=TIMEOUT_DEFAULT,
                interval=INTERVAL_DEFAULT / 1000.0, size=SIZE_DEFAULT, ttl=TTL_DEFAULT):
        return super(JitterConfig, cls).__new__(cls, sample_size, privileged, timeout, interval, size, ttl)


class JitterRunner(threading.Thread):

    def __init__(self, jitterer):
        threading.Thread.__init__(self, name="jitter_runner", daemon=True)
        self.jitterer = jitterer
        self.error = None

    def run(self):
        try:
            stats = self.jitterer._measure()
        except (JitterError, OSError) as e:
            logger.error("Jitter run to %s failed: %s", self.jitterer.host, e)
            self.error = e
            return
        finally:
            self.jitterer._lock.release()

        try:
            self.jitterer._deliver(stats)
        except Exception as e:
            logger.error("on_finish for %s failed: %s", self.jitterer.host, e)
            self.error = e


class Jitterer:
    """
    Measures jitter towards one host.

    Every run builds a fresh prober from ``prober_factory`` with a snapshot
    of the current config, waits for the probe batch to finish or time out
    and turns the captured RTTs into a JitterStatistics. The result is
    returned by run(), kept for statistics() and handed to ``on_finish``
    (if set) exactly once, on the thread that executed the batch.

    One run at a time: run() or start() while a batch is in flight raises
    RunInProgressError.
    """

    def __init__(self, host, config=None, prober_factory=Pinger):
        self._host = host
        self.config = config if config is not None else JitterConfig()
        self.prober_factory = prober_factory
        self.on_finish = None

        self._lock = threading.Lock()
        self._statistics = None
        try:
            self._prober = prober_factory(host)
        except ProberError as e:
            raise InvalidHostError(host, e)
        logger.debug("Jitterer ready for %s", host)

    @property
    def host(self):
        return self._host

    def set_sample_size(self, size):
        self.config = self.config._replace(sample_size=size)

    def set_privileged(self, value):
        self.config = self.config._replace(privileged=value)

    def set_timeout(self, timeout):
        self.config = self.config._replace(timeout=timeout)

    def set_interval(self, interval):
        self.config = self.config._replace(interval=interval)

    def run(self):
        self._acquire()
        try:
            stats = self._measure()
        finally:
            self._lock.release()
        self._deliver(stats)
        return stats

    def start(self):
        """Run in the background; the result arrives through on_finish and statistics()."""
        self._acquire()
        runner = JitterRunner(self)
        try:
            runner.start()
        except RuntimeError:
            self._lock.release()
            raise
        return runner

    def statistics(self):
        return self._statistics

    def _acquire(self):
        if not self._lock.acquire(blocking=False):
            raise RunInProgressError("a jitter run to %s is already in progress" % self._host)

    def _measure(self):
        config = self.config
        prober = self._prober if self._prober is not None else self.prober_factory(self._host)
        self._prober = None

        prober.count = config.sample_size
        prober.timeout = config.timeout
        prober.interval = config.interval
        prober.privileged = config.privileged
        prober.size = config.size
        prober.ttl = config.ttl
        # only the terminal batch matters here
        prober.on_recv = None
        prober.on_finish = None

        logger.info("Jitter run to %s: %d samples, timeout %.3fs", self._host, config.sample_size, config.timeout)
        start = now()
        prober.run()
        end = now()

        raw = prober.statistics()
        stats = generate_statistics(self._host, start, end, raw.rtts, raw)
        self._statistics = stats
        logger.info("Jitter run to %s done: %d/%d samples, range=%.3fms sd=%.3fms",
                    self._host, len(stats.rtts), config.sample_size, stats.rtt_range, stats.uncorrected_sd)
        return stats

    def _deliver(self, stats):
        if self.on_finish is not None:
            self.on_finish(stats)
