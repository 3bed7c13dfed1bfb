# Jitterer defaults
COUNT_DEFAULT = 3
TIMEOUT_DEFAULT = 1.0      # seconds, whole probe batch
INTERVAL_DEFAULT = 100     # msec between probes
SIZE_DEFAULT = 24          # ICMP payload bytes
TTL_DEFAULT = 64

# ICMP message types (RFC792 / RFC4443)
ICMP_ECHO_REQUEST = 8
ICMP_ECHO_REPLY = 0
ICMP6_ECHO_REQUEST = 128
ICMP6_ECHO_REPLY = 129

ICMP_HEADER_FORMAT = '!BBHHH'
ICMP_HEADER_SIZE = 8
TIMESTAMP_FORMAT = '!d'
TIMESTAMP_SIZE = 8

RECV_BUFFER = 9216
