# randlib/__main__.py
# python -m randlib: print a few draws of every type

import argparse
import logging

from randlib import config
from randlib.errors import EntropyUnavailable
from randlib.generator import Random


def main(argv=None):
    parser = argparse.ArgumentParser(prog='randlib', description='Draw values from the LFSR generator')
    parser.add_argument('--source', default=config.SEED_SOURCE,
                        help="seed source: manual | time | crand | urandom | random")
    parser.add_argument('--seed', type=lambda s: int(s, 0), default=config.SEED,
                        help='seed for the manual source (decimal or 0x hex)')
    parser.add_argument('--count', type=int, default=10, help='raw 128-bit draws to print first')
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))
    seed = args.seed if args.source.lower() == 'manual' else None
    try:
        rand = Random(args.source, seed)
    except EntropyUnavailable as e:
        parser.exit(2, f"randlib: {e}\n")
    except ValueError as e:
        parser.error(str(e))

    for _ in range(args.count):
        print(rand.random())

    print(f"i128: {rand.rand_i128()}")
    print(f"i64: {rand.rand_i64()}")
    print(f"i32: {rand.rand_i32()}")
    print(f"i16: {rand.rand_i16()}")
    print(f"i8: {rand.rand_i8()}")

    print(f"u64: {rand.rand_u64()}")
    print(f"u32: {rand.rand_u32()}")
    print(f"u16: {rand.rand_u16()}")
    print(f"u8: {rand.rand_u8()}")

    print(f"bool: {rand.rand_bool()}")

    print(f"f32: {rand.rand_f32()}")
    print(f"f64: {rand.rand_f64()}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
