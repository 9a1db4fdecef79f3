# randlib/seed.py
# Seed providers: turn a SeedSource selection into a nonzero 128-bit seed.
# Supports SeedSource = 'manual' | 'time' | 'crand' | 'urandom' | 'random'

import ctypes
import ctypes.util
import enum
import logging
import os
import time

from randlib import config
from randlib.errors import EntropyUnavailable, SourceUnavailable
from randlib.lfsr import MASK128

logger = logging.getLogger('randlib.seed')

MASK32 = (1 << 32) - 1
MASK64 = (1 << 64) - 1
SEED_SIZE = 16  # bytes

DEVICE_PATHS = {
    'urandom': '/dev/urandom',
    'random': '/dev/random',
}


class SeedSource(enum.Enum):
    MANUAL = 'manual'
    SYSTEM_TIME = 'time'
    CRAND = 'crand'
    URANDOM_DEV = 'urandom'
    RANDOM_DEV = 'random'


def as_source(source):
    if isinstance(source, SeedSource):
        return source
    try:
        return SeedSource(str(source).strip().lower())
    except ValueError:
        names = ', '.join(s.value for s in SeedSource)
        raise ValueError(f"Unknown seed source {source!r} (expected one of: {names})") from None


def splitmix64(x):
    z = (x + 0x9E3779B97F4A7C15) & MASK64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & MASK64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & MASK64
    return z ^ (z >> 31)


def expand_tick(t):
    # tick in the high half, its splitmix64 hash in the low half
    t &= MASK64
    return (t << 64) | splitmix64(t)


def _check_available(source):
    if source is SeedSource.MANUAL:
        return
    if source in (SeedSource.SYSTEM_TIME, SeedSource.CRAND):
        if not config.ENABLE_SYSTEM_CLOCK_AND_CLIB_SOURCE:
            raise SourceUnavailable(f"Seed source '{source.value}' is disabled (ENABLE_SYSTEM_CLOCK_AND_CLIB_SOURCE)")
        return
    if not config.ENABLE_DEVICE_FILE_SOURCES:
        raise SourceUnavailable(f"Seed source '{source.value}' is disabled (ENABLE_DEVICE_FILE_SOURCES)")
    path = DEVICE_PATHS[source.value]
    if os.name != 'posix' or not os.path.exists(path):
        raise SourceUnavailable(f"Seed source '{source.value}' needs {path}, which this platform does not provide")


def available_sources():
    out = []
    for source in SeedSource:
        try:
            _check_available(source)
        except SourceUnavailable:
            continue
        out.append(source)
    return out


def seed_from_time(granularity=None):
    granularity = granularity or config.TIME_GRANULARITY
    try:
        ns = time.time_ns()
    except OSError as e:
        raise EntropyUnavailable(f"Cannot read the system clock: {e}") from e
    if granularity == 'ns':
        t = ns
    elif granularity == 'ms':
        t = ns // 1_000_000
    elif granularity == 's':
        t = ns // 1_000_000_000
    else:
        raise ValueError(f"Unknown TIME_GRANULARITY {granularity!r} (expected 'ns', 'ms' or 's')")
    return expand_tick(t)


def _load_libc():
    if os.name == 'nt':
        return ctypes.cdll.msvcrt
    # find_library may return None; CDLL(None) is the running process, which links libc
    return ctypes.CDLL(ctypes.util.find_library('c'))


def seed_from_crand():
    try:
        libc = _load_libc()
        crand = libc.rand
    except (OSError, AttributeError) as e:
        raise EntropyUnavailable(f"C library rand() is not available: {e}") from e
    crand.restype = ctypes.c_int
    crand.argtypes = []
    logger.warning("libc rand() uses a constant seed unless srand() was called; seeds will repeat across runs")
    seed = 0
    # first output is the most significant 32-bit word
    for _ in range(4):
        seed = (seed << 32) | (crand() & MASK32)
    return seed


def seed_from_device(path):
    try:
        with open(path, 'rb') as f:
            buf = b''
            while len(buf) < SEED_SIZE:
                chunk = f.read(SEED_SIZE - len(buf))
                if not chunk:
                    break
                buf += chunk
    except OSError as e:
        raise EntropyUnavailable(f"Cannot read entropy from {path}: {e}") from e
    if len(buf) < SEED_SIZE:
        raise EntropyUnavailable(f"Short read from {path}: got {len(buf)} of {SEED_SIZE} bytes")
    return int.from_bytes(buf, 'little')


def produce_seed(source, seed=None):
    """
    Derive a nonzero 128-bit seed integer from `source`.
      - 'manual'  -> `seed` masked to 128 bits
      - 'time'    -> time tick (config.TIME_GRANULARITY) expanded by expand_tick()
      - 'crand'   -> four libc rand() outputs, first one in the top word
      - 'urandom' / 'random' -> 16 device bytes, little-endian
    A zero result is forced to 1 so the LFSR never starts degenerate.
    Raises SourceUnavailable for disabled/unsupported sources and
    EntropyUnavailable when the provider fails.
    """
    source = as_source(source)
    _check_available(source)
    if source is SeedSource.MANUAL:
        if seed is None:
            raise ValueError("Seed source 'manual' needs a seed value")
        value = int(seed) & MASK128
    elif seed is not None:
        raise ValueError(f"A seed value is only accepted with the 'manual' source, not '{source.value}'")
    elif source is SeedSource.SYSTEM_TIME:
        value = seed_from_time()
    elif source is SeedSource.CRAND:
        value = seed_from_crand()
    else:
        value = seed_from_device(DEVICE_PATHS[source.value])
    value &= MASK128
    if value == 0:
        logger.warning(f"Seed source '{source.value}' produced a zero seed, forcing the low bit")
        value = 1
    logger.info(f"Using {source.value} SEED: {value:032x}")
    return value
