#!/usr/bin/python

##############################################################################
#                                                                            #
#  Objective:                                                                #
#    Python network jitter measurement: ICMP echo probe batches and the      #
#    dispersion of their round-trip times.                                   #
#                                                                            #
#  Features supported:                                                       #
#    - privileged (raw ICMP) and unprivileged (ICMP datagram) probing        #
#    - IPv4 and IPv6                                                         #
#    - RTT range, squared deviation, standard deviation with and without     #
#      Bessel's correction                                                   #
#    - blocking runs and background runs with completion callback            #
#    - pluggable prober                                                      #
#                                                                            #
#  Limitations:                                                              #
#    As there is no hardware based timestamping, latency and jitter values   #
#    measured by this tool are not very precise.                             #
#    Unprivileged probing needs the ICMP datagram socket support of Linux    #
#    (net.ipv4.ping_group_range) or macOS.                                   #
#                                                                            #
#  Not yet supported:                                                        #
#    - persisting measurements                                               #
#    - outlier rejection                                                     #
#    - multiple hosts per run                                                #
#                                                                            #
#  License:                                                                  #
#    Licensed under the BSD license                                          #
#                                                                            #
##############################################################################

from jitterpy.errors import JitterError, ProberError, ConstructionError, InvalidHostError, RunInProgressError
from jitterpy.jitterer import Jitterer, JitterConfig
from jitterpy.pinger import Pinger, ProbeStatistics
from jitterpy.prober import Prober
from jitterpy.statistics import JitterStatistics

__version__ = '0.1.0'
