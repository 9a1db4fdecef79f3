# randlib/experiments.py
# Bit-balance experiments: draw rand_u32 / rand_bool from many seeds and record,
# per seed and per bit position, how often the bit is 1. Results go to CSV for
# plot_heatmap.py.

import argparse
import logging
import os
import time

import numpy as np
import pandas as pd

from randlib import config
from randlib.generator import Random
from randlib.seed import SeedSource, as_source, expand_tick, produce_seed

logger = logging.getLogger('randlib.experiments')

WORD_BITS = 32


def make_seeds(n, source=SeedSource.MANUAL):
    source = as_source(source)
    if source is SeedSource.MANUAL:
        # spread small indices over all 128 bits
        return [expand_tick(i) for i in range(n)]
    return [produce_seed(source) for _ in range(n)]


def u32_bits(rng, draws):
    """draws x 32 matrix of 0/1; column j is bit j of each rand_u32()."""
    words = np.fromiter((rng.rand_u32() for _ in range(draws)), dtype=np.uint64, count=draws)
    shifts = np.arange(WORD_BITS, dtype=np.uint64)
    return ((words[:, None] >> shifts) & np.uint64(1)).astype(np.uint8)


def bit_frequencies(seeds, draws):
    rows = []
    for idx, seed in enumerate(seeds):
        rates = u32_bits(Random.from_seed(seed), draws).mean(axis=0)
        for bit, rate in enumerate(rates):
            rows.append({'seed_index': idx, 'seed': f'{seed:032x}', 'bit': bit, 'ones_rate': float(rate)})
    return pd.DataFrame(rows, columns=['seed_index', 'seed', 'bit', 'ones_rate'])


def bool_rates(seeds, draws):
    rows = []
    for idx, seed in enumerate(seeds):
        rng = Random.from_seed(seed)
        trues = sum(rng.rand_bool() for _ in range(draws))
        rows.append({'seed_index': idx, 'seed': f'{seed:032x}', 'true_rate': trues / draws})
    return pd.DataFrame(rows, columns=['seed_index', 'seed', 'true_rate'])


def summarize(freq):
    # per-bit min / mean / max of the one-rate across seeds
    return freq.groupby('bit')['ones_rate'].agg(['min', 'mean', 'max']).reset_index()


def ensure_results_dir(path='results'):
    os.makedirs(path, exist_ok=True)
    return path


def main(argv=None):
    parser = argparse.ArgumentParser(description='Per-bit balance of rand_u32 and rand_bool across seeds')
    parser.add_argument('--seeds', type=int, default=16, help='number of seeds')
    parser.add_argument('--draws', type=int, default=2000, help='draws per seed')
    parser.add_argument('--source', default='manual', help='seed source for the seeds')
    parser.add_argument('--out_dir', default='results', help='directory for the CSV files')
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))
    seeds = make_seeds(args.seeds, args.source)
    t0 = time.time()
    freq = bit_frequencies(seeds, args.draws)
    bools = bool_rates(seeds, args.draws)
    out_dir = ensure_results_dir(args.out_dir)
    stamp = int(time.time())
    freq_path = os.path.join(out_dir, f'bit_frequencies_{stamp}.csv')
    bool_path = os.path.join(out_dir, f'bool_rates_{stamp}.csv')
    freq.to_csv(freq_path, index=False)
    bools.to_csv(bool_path, index=False)

    summary = summarize(freq)
    logger.info(f"Per-bit one-rate range: {summary['min'].min():.4f} .. {summary['max'].max():.4f}")
    logger.info(f"rand_bool true-rate mean: {bools['true_rate'].mean():.4f}")
    print(f"Experiments complete in {time.time() - t0:.2f}s. CSV saved at: {freq_path}, {bool_path}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
