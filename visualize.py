# visualize.py
import os

import matplotlib.pyplot as plt
import numpy as np


def _ensure_dir(outpath):
    dirname = os.path.dirname(outpath)
    if dirname:
        os.makedirs(dirname, exist_ok=True)


def per_set_counts(outcomes, num_sets):
    """Hits and misses per set index, as two numpy arrays of length num_sets."""
    indices = np.array([o.index for o in outcomes], dtype=np.int64)
    hit_mask = np.array([o.hit for o in outcomes], dtype=bool)
    hits = np.bincount(indices[hit_mask], minlength=num_sets)
    misses = np.bincount(indices[~hit_mask], minlength=num_sets)
    return hits, misses


def plot_hit_miss_rate(hit_rate, outpath):
    _ensure_dir(outpath)
    plt.figure(figsize=(4,4))
    labels = ['Hit', 'Miss']
    sizes = [hit_rate, 1.0 - hit_rate]
    plt.pie(sizes, labels=labels, autopct='%1.1f%%')
    plt.title("Cache Hit/Miss Rate")
    plt.tight_layout()
    plt.savefig(outpath)
    plt.close()


def plot_set_usage(outcomes, num_sets, outpath):
    _ensure_dir(outpath)
    hits, misses = per_set_counts(outcomes, num_sets)
    sets = np.arange(num_sets)
    plt.figure(figsize=(8,4))
    plt.bar(sets, hits, label='Hits')
    plt.bar(sets, misses, bottom=hits, label='Misses')
    plt.title("Accesses per Set")
    plt.xlabel("Set index")
    plt.ylabel("Accesses")
    plt.legend()
    plt.grid(True, axis='y')
    plt.tight_layout()
    plt.savefig(outpath)
    plt.close()


def plot_sweep(summaries, outpath):
    _ensure_dir(outpath)
    labels = [f"{s['geometry']['num_sets']}x{s['geometry']['associativity']}x{s['geometry']['line_size']}"
              for s in summaries]
    rates = [100.0 * s['hit_rate'] for s in summaries]
    plt.figure(figsize=(max(6, len(labels)), 4))
    plt.bar(labels, rates)
    plt.title("Hit Rate by Geometry (sets x ways x line)")
    plt.ylabel("Hit rate (%)")
    plt.xticks(rotation=45, ha='right')
    plt.tight_layout()
    plt.savefig(outpath)
    plt.close()
