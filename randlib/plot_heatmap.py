# randlib/plot_heatmap.py
"""
Heatmap of per-bit balance: x axis = seed index, y axis = bit position of
rand_u32(), cell value = fraction of draws in which the bit was 1.

CSV expected columns (written by experiments.py): seed_index, bit, ones_rate
 - seed_index: int (0..seeds-1)
 - bit: int (0..31, 31 = most significant)
 - ones_rate: float in [0, 1]

Usage:
    python -m randlib.plot_heatmap --csv results/bit_frequencies_XXXX.csv --out heatmap.png
"""

import argparse
import os

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

REQUIRED = {'seed_index', 'bit', 'ones_rate'}


def prepare_pivot(df):
    # mean one-rate for each (bit, seed_index)
    agg = df.groupby(['bit', 'seed_index'], as_index=False)['ones_rate'].mean()
    pivot = agg.pivot(index='bit', columns='seed_index', values='ones_rate')
    # most significant bit on top
    return pivot.sort_index(ascending=False)


def plot_heatmap(pivot, title='rand_u32 bit balance', out_file=None, annotate=None, show=False):
    rows = pivot.index.tolist()
    cols = pivot.columns.tolist()
    data = pivot.values
    if annotate is None:
        annotate = len(rows) * len(cols) <= 400

    fig, ax = plt.subplots(figsize=(0.5 * len(cols) + 3, 0.25 * len(rows) + 2))
    im = ax.imshow(data, aspect='auto', interpolation='nearest', vmin=0.0, vmax=1.0, cmap='coolwarm')

    ax.set_xticks(np.arange(len(cols)))
    ax.set_yticks(np.arange(len(rows)))
    ax.set_xticklabels(cols)
    ax.set_yticklabels(rows)
    ax.set_xlabel('Seed index')
    ax.set_ylabel('Bit position (31 = MSB)')
    ax.set_title(title)
    plt.setp(ax.get_xticklabels(), rotation=45, ha='right')

    if annotate:
        for i in range(len(rows)):
            for j in range(len(cols)):
                val = data[i, j]
                if np.isnan(val):
                    ax.text(j, i, 'N/A', ha='center', va='center', color='gray', fontsize=6)
                else:
                    ax.text(j, i, f"{val:.2f}", ha='center', va='center', color='black', fontsize=6)

    cbar = fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04)
    cbar.set_label('Fraction of ones (0-1)')

    fig.tight_layout()
    if out_file:
        os.makedirs(os.path.dirname(out_file) or '.', exist_ok=True)
        fig.savefig(out_file, dpi=150)
        print(f"Heatmap saved to {out_file}")
    if show:
        plt.show()
    return fig


def load_csv(path):
    df = pd.read_csv(path)
    if not REQUIRED.issubset(set(df.columns)):
        raise SystemExit(f"CSV must contain columns: {REQUIRED}. Found: {df.columns.tolist()}")
    df['seed_index'] = df['seed_index'].astype(int)
    df['bit'] = df['bit'].astype(int)
    df['ones_rate'] = df['ones_rate'].astype(float)
    return df


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument('--csv', required=True, help='Path to bit frequency CSV')
    parser.add_argument('--out', default='results/heatmap_bit_balance.png', help='Output PNG path')
    parser.add_argument('--title', default='rand_u32 bit balance', help='Plot title')
    parser.add_argument('--show', action='store_true', help='Open an interactive window')
    args = parser.parse_args(argv)

    if not args.show:
        matplotlib.use('Agg')
    pivot = prepare_pivot(load_csv(args.csv))
    fig = plot_heatmap(pivot, title=args.title, out_file=args.out, show=args.show)
    plt.close(fig)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
