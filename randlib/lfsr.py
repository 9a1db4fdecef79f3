# randlib/lfsr.py
# Galois LFSR used as the only bit source of the generator.
# State: single integer of `width` bits, never zero.
# Step: output the low bit, shift right, xor the tap mask in when the bit was 1.

MASK128 = (1 << 128) - 1

# x^128 + x^126 + x^101 + x^99 + 1 (maximal-length taps 128, 126, 101, 99).
# Galois right-shift form: bit k-1 is set for every tap k.
TAP_MASK = 0xA0000014000000000000000000000000


# prime factors of 2^128 - 1 (the Fermat numbers F0..F6; F5 and F6 split)
ORDER_FACTORS_128 = (3, 5, 17, 257, 641, 65537, 274177, 6700417, 67280421310721)


def char_poly(width, tap_mask):
    # polynomials over GF(2) as ints, bit i = coefficient of x^i.
    # tap mask bit i contributes x^(width-1-i)
    p = 1 << width
    for i in range(width):
        if (tap_mask >> i) & 1:
            p ^= 1 << (width - 1 - i)
    return p


def _mulmod(a, b, p, deg):
    r = 0
    while b:
        if b & 1:
            r ^= a
        b >>= 1
        a <<= 1
        if (a >> deg) & 1:
            a ^= p
    return r


def _pow_x(e, p, deg):
    result = 1
    base = 2  # x
    while e:
        if e & 1:
            result = _mulmod(result, base, p, deg)
        base = _mulmod(base, base, p, deg)
        e >>= 1
    return result


def is_primitive(width, tap_mask, order_factors):
    """True when the register has period 2^width - 1.

    x must have multiplicative order exactly 2^width - 1 modulo the
    characteristic polynomial; `order_factors` are the distinct primes
    dividing 2^width - 1.
    """
    p = char_poly(width, tap_mask)
    order = (1 << width) - 1
    if _pow_x(order, p, width) != 1:
        return False
    return all(_pow_x(order // q, p, width) != 1 for q in order_factors)


class GaloisLFSR:
    def __init__(self, width, tap_mask, state):
        self.width = width
        self.mask = (1 << width) - 1
        self.tap_mask = tap_mask & self.mask
        state &= self.mask
        if state == 0:
            # an all-zero register never leaves zero
            raise ValueError('LFSR state must be nonzero')
        self.state = state

    def step(self):
        s = self.state
        bit = s & 1
        self.state = (s >> 1) ^ (-bit & self.tap_mask)
        return bit

    def peek(self):
        # bit the next step() will return, without consuming it
        return self.state & 1

    def steps(self, n):
        """Run `n` steps and pack the output bits, first bit most significant."""
        s = self.state
        taps = self.tap_mask
        out = 0
        for _ in range(n):
            bit = s & 1
            s = (s >> 1) ^ (-bit & taps)
            out = (out << 1) | bit
        self.state = s
        return out

    def __repr__(self):
        digits = (self.width + 3) // 4
        return f"GaloisLFSR(width={self.width}, tap_mask=0x{self.tap_mask:0{digits}x}, state=0x{self.state:0{digits}x})"


class LFSR128(GaloisLFSR):
    def __init__(self, seed):
        super().__init__(128, TAP_MASK, seed)
