# randlib/recover.py
# Query the draw service for outputs, build a linear system over GF(2), solve for
# the 128-bit register state, then predict the next output and check it via /validate.
# The generator is linear: 128 consecutive output bits determine its state.

import argparse
import time

import requests

from randlib.lfsr import MASK128, TAP_MASK, GaloisLFSR

ORACLE = 'http://127.0.0.1:5000'
BITS = 128


def tap_positions(tap_mask=TAP_MASK):
    return [i for i in range(BITS) if (tap_mask >> i) & 1]


# Track how each output bit depends on the initial 128 state bits.
def build_maps(steps, tap_mask=TAP_MASK):
    # state_coeffs[i] is an integer mask (128-bit) telling which initial bits
    # contribute to bit i of the current state.
    state_coeffs = [1 << i for i in range(BITS)]
    taps = tap_positions(tap_mask)
    maps = []
    for _ in range(steps):
        # the output bit is state bit 0
        out = state_coeffs[0]
        maps.append(out)
        # shift right by one, then xor the output into every tap position
        new_coeffs = state_coeffs[1:] + [0]
        for j in taps:
            new_coeffs[j] ^= out
        state_coeffs = new_coeffs
    return maps


def stream_bits(words, output_bits):
    # words are consecutive draws, each packed first bit most significant
    for w in words:
        for k in reversed(range(output_bits)):
            yield (w >> k) & 1


def construct_equations(words, output_bits, tap_mask=TAP_MASK):
    bits = list(stream_bits(words, output_bits))
    maps = build_maps(len(bits), tap_mask)
    rows = []
    rhs = []
    for mask, bit in zip(maps, bits):
        if mask == 0:
            continue
        rows.append(mask)
        rhs.append(bit)
    return rows, rhs


# Gaussian elimination over GF(2) with integer row masks of <=128 bits
def solve_gf2(rows, rhs):
    rows = rows[:]
    rhs = rhs[:]
    n_eq = len(rows)
    pivot = {}
    row = 0
    for col in reversed(range(BITS)):
        if row >= n_eq:
            break
        sel = None
        for r in range(row, n_eq):
            if (rows[r] >> col) & 1:
                sel = r
                break
        if sel is None:
            continue
        rows[row], rows[sel] = rows[sel], rows[row]
        rhs[row], rhs[sel] = rhs[sel], rhs[row]
        pivot[col] = row
        # eliminate other rows
        for r in range(n_eq):
            if r != row and ((rows[r] >> col) & 1):
                rows[r] ^= rows[row]
                rhs[r] ^= rhs[row]
        row += 1
    if len(pivot) < BITS:
        # underdetermined: more outputs needed
        return None
    sol = 0
    for col, r in pivot.items():
        if rhs[r]:
            sol |= (1 << col)
    # verify
    for rmask, rval in zip(rows, rhs):
        lhs = bin(rmask & sol).count('1') & 1
        if lhs != rval:
            return None
    return sol


def recover_state(words, output_bits, tap_mask=TAP_MASK):
    """Register state before the first of `words` was drawn, or None."""
    rows, rhs = construct_equations(words, output_bits, tap_mask)
    return solve_gf2(rows, rhs)


def predict_next(state, consumed, output_bits, tap_mask=TAP_MASK):
    lfsr = GaloisLFSR(BITS, tap_mask, state)
    lfsr.steps(consumed)
    return lfsr.steps(output_bits)


def query_oracle(n, oracle=ORACLE):
    outs = []
    for _ in range(n):
        r = requests.get(oracle + '/get_output', timeout=5)
        r.raise_for_status()
        outs.append(int(r.json()['output'], 16))
    return outs


def main(argv=None):
    parser = argparse.ArgumentParser(description='Recover the register state of a running draw service')
    parser.add_argument('--oracle', default=ORACLE, help='draw service base URL')
    parser.add_argument('--samples', type=int, default=4, help='number of outputs to collect')
    parser.add_argument('--output_bits', type=int, default=32, help='bits returned per output (must match the service)')
    args = parser.parse_args(argv)

    t0 = time.time()
    print(f"[recover] Querying {args.oracle} for {args.samples} outputs (output_bits={args.output_bits})...")
    obs = query_oracle(args.samples, args.oracle)
    width = (args.output_bits + 3) // 4
    for i, o in enumerate(obs):
        print(f" obs[{i}]: {format(o, '0{}x'.format(width))}")
    rows, rhs = construct_equations(obs, args.output_bits)
    print(f"[recover] Constructed {len(rows)} linear equations. Solving...")
    sol = solve_gf2(rows, rhs)
    if sol is None:
        print("[recover] Failed to find unique solution. Collect at least 128 bits (samples * output_bits).")
        return 1
    print("[recover] Recovered 128-bit register state (hex):")
    print(format(sol & MASK128, '032x'))
    predicted = predict_next(sol, len(obs) * args.output_bits, args.output_bits)
    cand_hex = format(predicted, '0{}x'.format(width))
    print(f"[recover] Predicted next output: {cand_hex}")
    resp = requests.post(args.oracle + '/validate', json={'candidate': cand_hex}, timeout=5)
    print("[recover] Validate response:", resp.json())
    print(f"[recover] Done in {time.time() - t0:.2f}s")
    return 0 if resp.json().get('ok') else 1


if __name__ == '__main__':
    raise SystemExit(main())
