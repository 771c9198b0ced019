# visualize.py
import os

import matplotlib.pyplot as plt


def _ensure_dir(outpath):
    directory = os.path.dirname(outpath)
    if directory:
        os.makedirs(directory, exist_ok=True)


def plot_hit_miss_rate(hits, misses, outpath):
    _ensure_dir(outpath)
    plt.figure(figsize=(4,4))
    if hits + misses:
        plt.pie([hits, misses], labels=['Hit', 'Miss'], autopct='%1.1f%%')
    plt.title("Cache Hit/Miss Rate")
    plt.tight_layout()
    plt.savefig(outpath)
    plt.close()
    return outpath


def plot_set_occupancy(cache, outpath):
    _ensure_dir(outpath)
    occupied = [s.occupied() for s in cache.sets]
    plt.figure(figsize=(8,4))
    plt.bar(range(len(occupied)), occupied)
    plt.axhline(cache.associativity, color='red', linestyle='--', linewidth=0.8)
    plt.title(f"Set Occupancy ({cache.associativity}-way, {cache.set_count} sets)")
    plt.xlabel("Set Index")
    plt.ylabel("Occupied Blocks")
    plt.ylim(0, cache.associativity + 1)
    plt.grid(True, axis='y')
    plt.tight_layout()
    plt.savefig(outpath)
    plt.close()
    return outpath
