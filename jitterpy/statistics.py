import math
from collections import namedtuple

import click

from jitterpy.utils import format_time


class JitterStatistics(namedtuple('JitterStatistics', [
        'host', 'start', 'end', 'rtts', 'mean', 'squared_deviation',
        'uncorrected_sd', 'corrected_sd', 'rtt_range', 'probe_statistics'])):
    """
    Result of one jitter run. All durations are milliseconds except
    start/end, which are wall-clock epoch seconds bounding the batch.
    """

    __slots__ = ()

    @property
    def duration(self):
        return self.end - self.start

    def dump(self):
        probes = self.probe_statistics
        click.echo(
            "===============================================================================")
        click.echo("  Jitter test to %s  (%d samples)" % (self.host, len(self.rtts)))
        click.echo(
            "-------------------------------------------------------------------------------")
        if self.rtts:
            click.echo("  RTT:        min %s  max %s  avg %s" % (
                format_time(min(self.rtts)),
                format_time(max(self.rtts)),
                format_time(self.mean)))
            click.echo("  Jitter:     range %s  sd %s  corrected sd %s" % (
                format_time(self.rtt_range),
                format_time(self.uncorrected_sd),
                format_time(self.corrected_sd)))
            click.echo("  Samples:    %s" % ", ".join("%.3fms" % rtt for rtt in self.rtts))
        else:
            click.echo("  NO STATS AVAILABLE (100% loss)", err=True)
        packet_loss = getattr(probes, 'packet_loss', None)
        if packet_loss is not None:
            click.echo("  Loss:       %5.1f%%" % packet_loss)
        click.echo(
            "-------------------------------------------------------------------------------")
        click.echo("  Duration:   %s" % format_time(1000 * self.duration))
        click.echo(
            "===============================================================================")


def generate_statistics(host, start, end, rtts, probe_statistics=None):
    rtts = tuple(rtts)
    return JitterStatistics(
        host=host,
        start=start,
        end=end,
        rtts=rtts,
        mean=calculate_average(rtts),
        squared_deviation=calculate_squared_deviation(rtts),
        uncorrected_sd=calculate_uncorrected_deviation(rtts),
        corrected_sd=calculate_corrected_deviation(rtts),
        rtt_range=calculate_range(rtts),
        probe_statistics=probe_statistics)


def calculate_range(values):
    if len(values) <= 1:
        return 0.0
    return max(values) - min(values)


def calculate_average(values):
    if not values:
        return 0.0
    return math.fsum(values) / len(values)


def calculate_squared_deviation(values):
    avg = calculate_average(values)
    return math.fsum((v - avg) ** 2 for v in values)


def calculate_uncorrected_deviation(values):
    if not values:
        return 0.0
    return math.sqrt(calculate_squared_deviation(values) / len(values))


def calculate_corrected_deviation(values):
    """
    Standard deviation with Bessel's correction (n-1 in the denominator).
    A single sample carries no spread, so n <= 1 reports 0.
    """

    if len(values) <= 1:
        return 0.0
    return math.sqrt(calculate_squared_deviation(values) / (len(values) - 1))
