# randlib/generator.py
# Random: typed draws on top of the 128-bit LFSR.
# Every extractor consumes a fixed number of LFSR steps and packs them
# first-generated-bit-most-significant, so draws are reproducible bit for bit.

from randlib.lfsr import LFSR128
from randlib.seed import SeedSource, produce_seed


def to_signed(x, bits):
    # two's complement reinterpretation of an unsigned `bits`-wide value
    if x >> (bits - 1):
        return x - (1 << bits)
    return x


class Random:
    """A random number generator.

    Seeded once from `source` (a SeedSource or its string value); with the
    manual source, `seed` is the initial register value. Separate instances
    with the same seed produce the same values. Not thread-safe.
    """

    def __init__(self, source=SeedSource.SYSTEM_TIME, seed=None):
        self._seed = produce_seed(source, seed)
        self._lfsr = LFSR128(self._seed)

    @classmethod
    def from_seed(cls, seed):
        return cls(SeedSource.MANUAL, seed)

    @property
    def seed(self):
        return self._seed

    @property
    def state(self):
        return self._lfsr.state

    def __repr__(self):
        return f"Random(seed=0x{self._seed:032x})"

    def rand_bits(self, n):
        return self._lfsr.steps(n)

    def rand_bool(self):
        return self._lfsr.step() == 1

    def rand_u8(self):
        return self._lfsr.steps(8)

    def rand_u16(self):
        return self._lfsr.steps(16)

    def rand_u32(self):
        return self._lfsr.steps(32)

    def rand_u64(self):
        return self._lfsr.steps(64)

    def rand_u128(self):
        return self._lfsr.steps(128)

    # raw 128-bit draw
    random = rand_u128

    def rand_i8(self):
        return to_signed(self._lfsr.steps(8), 8)

    def rand_i16(self):
        return to_signed(self._lfsr.steps(16), 16)

    def rand_i32(self):
        return to_signed(self._lfsr.steps(32), 32)

    def rand_i64(self):
        return to_signed(self._lfsr.steps(64), 64)

    def rand_i128(self):
        return to_signed(self._lfsr.steps(128), 128)

    def rand_f32(self):
        """Float in [0.0, 1.0) from the top 24 of 32 consumed bits."""
        m = self._lfsr.steps(32) >> 8
        # 1.0 + m/2**24 is exact in a double, so the subtraction leaves m/2**24,
        # which a 32-bit float represents exactly
        return (1.0 + m / 16777216.0) - 1.0

    def rand_f64(self):
        """Float in [0.0, 1.0) from the top 53 of 64 consumed bits."""
        m = self._lfsr.steps(64) >> 11
        return m / 9007199254740992.0


DRAWS = {
    'bool': Random.rand_bool,
    'u8': Random.rand_u8,
    'u16': Random.rand_u16,
    'u32': Random.rand_u32,
    'u64': Random.rand_u64,
    'u128': Random.rand_u128,
    'i8': Random.rand_i8,
    'i16': Random.rand_i16,
    'i32': Random.rand_i32,
    'i64': Random.rand_i64,
    'i128': Random.rand_i128,
    'f32': Random.rand_f32,
    'f64': Random.rand_f64,
}
