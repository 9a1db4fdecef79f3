# randlib/config.py
# Configuration for the generator, the draw service and the CLI.
# Every value can be overridden from the environment with a RANDLIB_ prefix,
# e.g. RANDLIB_SEED_SOURCE=urandom or RANDLIB_ENABLE_DEVICE_FILE_SOURCES=0.

import os

_FALSE = ('0', 'false', 'no', 'off')


def _env(name, default):
    return os.environ.get('RANDLIB_' + name, default)


def _env_flag(name, default):
    raw = os.environ.get('RANDLIB_' + name)
    if raw is None:
        return default
    return raw.strip().lower() not in _FALSE


def _env_int(name, default):
    raw = os.environ.get('RANDLIB_' + name)
    if raw is None or raw == '':
        return default
    return int(raw, 0)


# Capability flags. A disabled source cannot be selected at construction.
#   ENABLE_SYSTEM_CLOCK_AND_CLIB_SOURCE : 'time' and 'crand'
#   ENABLE_DEVICE_FILE_SOURCES          : 'urandom' and 'random' (posix only)
ENABLE_SYSTEM_CLOCK_AND_CLIB_SOURCE = _env_flag('ENABLE_SYSTEM_CLOCK_AND_CLIB_SOURCE', True)
ENABLE_DEVICE_FILE_SOURCES = _env_flag('ENABLE_DEVICE_FILE_SOURCES', True)

# Seed configuration used by the CLI and the draw service:
# - SEED_SOURCE:
#     'manual'  : use the integer in SEED
#     'time'    : current time expanded to 128 bits (low entropy)
#     'crand'   : four outputs of libc rand() (constant seed unless srand'd)
#     'urandom' : 16 bytes from /dev/urandom
#     'random'  : 16 bytes from /dev/random (may block)
SEED_SOURCE = _env('SEED_SOURCE', 'time')

# Used when SEED_SOURCE == 'manual' (128-bit integer).
SEED = _env_int('SEED', None)

# If SEED_SOURCE == 'time', this controls the clock tick.
# 'ns' -> time.time_ns(), 'ms' -> milliseconds, 's' -> seconds
TIME_GRANULARITY = _env('TIME_GRANULARITY', 'ns')

# Draw service network config
HOST = _env('HOST', '127.0.0.1')
PORT = _env_int('PORT', 5000)

# How many stream bits the service reveals on each /get_output call (1..128)
OUTPUT_BITS = _env_int('OUTPUT_BITS', 32)

# Logging level
LOG_LEVEL = _env('LOG_LEVEL', 'INFO')
