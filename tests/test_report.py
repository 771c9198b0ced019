"""Tests for the text report."""

from cache import SetAssociativeCache
from report import REPORT_TITLE, render_report, write_report

EXPECTED = "\n".join([
    REPORT_TITLE,
    "Data in set# 0 block 0: [ 10 ]",
    "Data in set# 0 block 1: [-empty-]",
    "",
    "Data in set# 1 block 0: [ 1  ]",
    "Data in set# 1 block 1: [ 3  ]",
    "",
    "Total accesses: 4",
    "Cache Hits: 1",
    "Cache Misses: 3",
    "Cache Replacements: 0",
]) + "\n"


def _populated_cache():
    cache = SetAssociativeCache(4, 2)
    for value in (1, 10, 3, 1):
        cache.access(value)
    return cache


def test_render_report_layout():
    assert render_report(_populated_cache()) == EXPECTED


def test_empty_cache_report():
    text = render_report(SetAssociativeCache(2, 2), title="Cache")
    assert text.splitlines() == [
        "Cache",
        "Data in set# 0 block 0: [-empty-]",
        "Data in set# 0 block 1: [-empty-]",
        "",
        "Total accesses: 0",
        "Cache Hits: 0",
        "Cache Misses: 0",
        "Cache Replacements: 0",
    ]


def test_write_report_creates_directory(tmp_path):
    path = tmp_path / "out" / "report.txt"
    assert write_report(_populated_cache(), str(path)) == str(path)
    assert path.read_text(encoding="utf-8") == EXPECTED
