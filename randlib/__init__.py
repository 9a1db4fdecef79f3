"""
randlib: a small random number generator based on a 128-bit Galois LFSR.

    from randlib import Random, SeedSource

    rand = Random(SeedSource.SYSTEM_TIME)
    rand.rand_i32(), rand.rand_u32(), rand.rand_bool(), rand.rand_f32()

Not suitable for cryptography: 128 consecutive output bits reveal the state
(see randlib.recover).
"""

from randlib.errors import EntropyUnavailable, RandlibError, SourceUnavailable
from randlib.generator import Random
from randlib.lfsr import LFSR128, MASK128, TAP_MASK, GaloisLFSR
from randlib.seed import SeedSource, available_sources, produce_seed

__version__ = '0.1.0'

__all__ = [
    'Random',
    'SeedSource',
    'produce_seed',
    'available_sources',
    'GaloisLFSR',
    'LFSR128',
    'TAP_MASK',
    'MASK128',
    'RandlibError',
    'EntropyUnavailable',
    'SourceUnavailable',
]
