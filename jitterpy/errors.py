class JitterError(Exception):
    """Base class for all jitterpy errors."""


class ProberError(JitterError):
    """The prober could not resolve its target or open its socket."""


class ConstructionError(JitterError):
    """The target host cannot be prepared for probing."""


class InvalidHostError(ConstructionError):

    def __init__(self, host, reason):
        JitterError.__init__(self, "invalid host %r: %s" % (host, reason))
        self.host = host
        self.reason = reason


class RunInProgressError(JitterError):
    """A second run was requested before the current one completed."""
