# simulator.py
import copy
import json
import logging
import os
import time

import numpy as np

from cache import SetAssociativeCache

logger = logging.getLogger(__name__)

PATTERNS = ("sequential", "random", "mixed")

DEFAULT_CONFIG = {
    "cache": {
        "blocks": 8,
        "associativity": 4,
        "policy": "rotating",
    },
    "trace": {
        "num_accesses": 1000,
        "address_space": 64,
        "access_pattern": "mixed",
        "random_seed": None,
    },
    "output": {
        "results_dir": "results",
        "report_file": "results/cache_report.txt",
        "summary_file": "summary.json",
        "hitmiss_plot": "results/hit_miss_rate.png",
        "occupancy_plot": "results/set_occupancy.png",
    },
}


def _merge(base, override):
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path=None):
    """Load a JSON config file on top of DEFAULT_CONFIG. No path means defaults only."""
    if path is None:
        return copy.deepcopy(DEFAULT_CONFIG)
    with open(path, "r") as f:
        return _merge(DEFAULT_CONFIG, json.load(f))


class AddressStream:
    """Generates data values in [0, address_space) following an access pattern."""

    def __init__(self, num_accesses, address_space, pattern="mixed", seed=None):
        if pattern not in PATTERNS:
            raise ValueError(f"unknown access pattern {pattern!r}")
        if address_space <= 0:
            raise ValueError(f"address_space must be positive, got {address_space}")
        self.num_accesses = num_accesses
        self.address_space = address_space
        self.pattern = pattern
        self.rng = np.random.default_rng(seed)
        self._seq_ptr = 0

    def _next_sequential(self):
        addr = self._seq_ptr
        self._seq_ptr = (addr + 1) % self.address_space
        return addr

    def _next_address(self):
        if self.pattern == "sequential":
            return self._next_sequential()
        elif self.pattern == "random":
            return int(self.rng.integers(0, self.address_space))
        else:  # mixed: mostly sequential with some random
            if self.rng.random() < 0.8:
                return self._next_sequential()
            return int(self.rng.integers(0, self.address_space))

    def __iter__(self):
        for _ in range(self.num_accesses):
            yield self._next_address()


class SimulationRunner:
    def __init__(self, cfg):
        self.cfg = cfg
        cache_cfg = cfg["cache"]
        self.cache = SetAssociativeCache(
            cache_cfg.get("blocks", 8),
            cache_cfg.get("associativity", 4),
            policy=cache_cfg.get("policy", "rotating"),
        )
        trace_cfg = cfg["trace"]
        self.stream = AddressStream(
            trace_cfg.get("num_accesses", 1000),
            trace_cfg.get("address_space", 64),
            pattern=trace_cfg.get("access_pattern", "mixed"),
            seed=trace_cfg.get("random_seed", None),
        )

    def run(self, addresses=None):
        """
        Feed `addresses` (or the configured stream) through the cache.
        Returns a summary dict.
        """
        if addresses is None:
            addresses = self.stream
        start = time.time()
        for addr in addresses:
            self.cache.access(addr)
        end = time.time()

        summary = {
            "total_accesses": self.cache.total_accesses,
            "hits": self.cache.hits,
            "misses": self.cache.misses,
            "replacements": self.cache.replacements,
            "hit_rate": self.cache.hit_rate,
            "duration_s": end - start,
        }
        logger.info(
            "Replayed %d accesses: %d hits, %d misses, %d replacements",
            summary["total_accesses"], summary["hits"], summary["misses"], summary["replacements"],
        )
        return summary

    def save_results(self, summary, out_cfg):
        results_dir = out_cfg.get("results_dir", "results")
        os.makedirs(results_dir, exist_ok=True)
        path = os.path.join(results_dir, out_cfg.get("summary_file", "summary.json"))
        with open(path, "w") as f:
            json.dump(summary, f, indent=2)
        return path
