"""Tests for the matplotlib plots."""

from cache import SetAssociativeCache
from visualize import plot_hit_miss_rate, plot_set_occupancy


def test_plot_hit_miss_rate(tmp_path):
    out = tmp_path / "plots" / "hitmiss.png"
    assert plot_hit_miss_rate(3, 1, str(out)) == str(out)
    assert out.stat().st_size > 0


def test_plot_hit_miss_rate_without_accesses(tmp_path):
    out = tmp_path / "empty.png"
    plot_hit_miss_rate(0, 0, str(out))
    assert out.exists()


def test_plot_set_occupancy(tmp_path):
    cache = SetAssociativeCache(8, 2)
    for value in range(5):
        cache.access(value)
    out = tmp_path / "occupancy.png"
    plot_set_occupancy(cache, str(out))
    assert out.stat().st_size > 0
