#!/usr/bin/env python3

from jitterpy.constants import COUNT_DEFAULT, TIMEOUT_DEFAULT, INTERVAL_DEFAULT, SIZE_DEFAULT, TTL_DEFAULT
from jitterpy.errors import JitterError
from jitterpy.jitterer import Jitterer, JitterConfig
from jitterpy.statistics import generate_statistics
from jitterpy.utils import now

import click
import click_log
import sys

from logging.handlers import TimedRotatingFileHandler


import logging
logger = logging.getLogger("jitterpy")
click_logger = click_log.basic_config(logger)


class AliasedGroup(click.Group):

    def get_command(self, ctx, cmd_name):
        rv = click.Group.get_command(self, ctx, cmd_name)
        if rv is not None:
            return rv
        matches = [x for x in self.list_commands(ctx)
                   if x.startswith(cmd_name)]
        if not matches:
            return None
        elif len(matches) == 1:
            return click.Group.get_command(self, ctx, matches[0])
        ctx.fail('Please be more specific \n%s' % '\n'.join(sorted(matches)))


@click.group(cls=AliasedGroup)
@click_log.simple_verbosity_option(logger)
@click.option("-q", "--quiet", "quiet", is_flag=True)
@click.option("-l", "--logfile", "logfile", type=click.Path())
def cli(quiet, logfile):
    """Measure network jitter with batches of ICMP echo probes."""

    loglevel = logger.level
    if quiet:
        logger.setLevel(logging.CRITICAL)

    if loglevel >= logging.DEBUG and logfile:
        file_handler = TimedRotatingFileHandler(
            filename=logfile, when='midnight', backupCount=31)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        file_handler.setLevel(loglevel)
        logger.addHandler(file_handler)


@cli.command('measure')
@click.argument('host', metavar='target-host')
@click.option('-c', '--count', metavar='packets', default=COUNT_DEFAULT,
              type=click.IntRange(1, 9999, True), help="[1..9999]")
@click.option('-t', '--timeout', metavar='sec', default=TIMEOUT_DEFAULT,
              type=click.FloatRange(0, 3600, min_open=True), help="whole batch (0..3600]")
@click.option('-i', '--interval', metavar='msec', default=INTERVAL_DEFAULT,
              type=click.IntRange(10, 1000, True), help="[10..1000]")
@click.option("--size", metavar="<bytes>", default=SIZE_DEFAULT,
              type=click.IntRange(8, 1472, True), help='ICMP payload size [8..1472]')
@click.option("--ttl", metavar="<time-to-live>", default=TTL_DEFAULT,
              type=click.IntRange(1, 255), help='[1..255]')
@click.option("--privileged", is_flag=True, help='Use raw ICMP sockets (needs root/CAP_NET_RAW)')
def measure(host, count, timeout, interval, size, ttl, privileged):
    """Send a probe batch to HOST and print its jitter."""

    config = JitterConfig(sample_size=count, privileged=privileged, timeout=timeout,
                          interval=float(interval) / 1000, size=size, ttl=ttl)
    try:
        jitterer = Jitterer(host, config)
        stats = jitterer.run()
    except JitterError as e:
        logger.error("%s", e)
        sys.exit(1)

    stats.dump()


@cli.command('compute')
@click.argument('rtts', metavar='rtt-msec', nargs=-1, type=float)
def compute(rtts):
    """Jitter of RTT samples given in milliseconds (arguments or stdin)."""

    if not rtts:
        stdin = click.get_text_stream('stdin')
        try:
            rtts = [float(token) for token in stdin.read().split()]
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint='rtt-msec')

    timestamp = now()
    generate_statistics('-', timestamp, timestamp, rtts).dump()


if __name__ == "__main__":
    cli()
