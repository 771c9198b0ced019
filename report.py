# report.py
import os

REPORT_TITLE = "----------------Cache Simulator Results----------------"
EMPTY_SLOT = "[-empty-]"


def format_slot(value, width):
    if value is None:
        return EMPTY_SLOT
    return f"[ {str(value).ljust(width)} ]"


def render_report(cache, title=REPORT_TITLE):
    """
    Render the legacy text report: one line per slot, a blank line after
    each set, then the Total/Hits/Misses/Replacements summary.
    """
    lines = [title]
    width = cache.max_digit_width
    for i, cache_set in enumerate(cache.sets):
        for j, value in enumerate(cache_set.snapshot()):
            lines.append(f"Data in set# {i} block {j}: {format_slot(value, width)}")
        lines.append("")
    lines.append(f"Total accesses: {cache.total_accesses}")
    lines.append(f"Cache Hits: {cache.hits}")
    lines.append(f"Cache Misses: {cache.misses}")
    lines.append(f"Cache Replacements: {cache.replacements}")
    return "\n".join(lines) + "\n"


def write_report(cache, path, title=REPORT_TITLE):
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_report(cache, title))
    return path
