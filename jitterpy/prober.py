from abc import ABC, abstractmethod

from jitterpy.constants import COUNT_DEFAULT, TIMEOUT_DEFAULT, INTERVAL_DEFAULT, SIZE_DEFAULT, TTL_DEFAULT


class Prober(ABC):
    """
    Contract between the Jitterer and whatever sends the echo probes.

    A prober is built for one target host (raising ProberError when the
    host cannot be prepared), configured through its attributes, run once
    with the blocking run() and then asked for its statistics(), an object
    exposing at least the captured ``rtts`` in milliseconds.
    """

    def __init__(self, host):
        self.host = host
        self.count = COUNT_DEFAULT
        self.timeout = TIMEOUT_DEFAULT
        self.interval = INTERVAL_DEFAULT / 1000.0
        self.privileged = False
        self.size = SIZE_DEFAULT
        self.ttl = TTL_DEFAULT
        self.on_recv = None
        self.on_finish = None

    @abstractmethod
    def run(self):
        """Send ``count`` probes and block until all replied or ``timeout`` expired."""
        raise NotImplementedError

    @abstractmethod
    def statistics(self):
        raise NotImplementedError
