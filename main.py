# main.py
import argparse
import logging
import os
import sys

from cache import POLICIES, AccessResult, SetAssociativeCache
from report import render_report, write_report
from simulator import SimulationRunner, load_config
from validation import (
    ValidationError,
    check_geometry,
    parse_associativity,
    parse_block_count,
    parse_data_value,
    parse_yes_no,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.json"

NOTE = ("**NOTE: Blocks are filled from start position zero and the replacement "
        "policy is LRU (Least Recently Used)**")

_console_handler = None


def setup_logging(verbose=False):
    """Route log records to stderr; -v lowers the threshold to DEBUG."""
    global _console_handler
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if _console_handler is not None:
        root_logger.removeHandler(_console_handler)
    _console_handler = logging.StreamHandler(sys.stderr)
    _console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(_console_handler)


def prompt(input_func, message, parse):
    """Ask until `parse` accepts the answer."""
    while True:
        try:
            return parse(input_func(message))
        except ValidationError as e:
            print(f"ERROR - {e.message}")


def run_interactive(input_func=None, report_path=None, policy="rotating"):
    if input_func is None:
        input_func = input
    print(NOTE)
    print()
    print("----------------Cache Simulator----------------")

    blocks = prompt(input_func, "Number of blocks in cache: ", parse_block_count)

    print()
    print("(For 4-way set associative input \"4\")")
    while True:
        associativity = prompt(input_func, "Reading operations set associativity: ", parse_associativity)
        try:
            check_geometry(blocks, associativity)
            break
        except ValidationError as e:
            print(f"ERROR - {e.message}")

    print()
    cache = SetAssociativeCache(blocks, associativity, policy=policy)
    print("Virtual cache created...")

    while True:
        value = prompt(input_func, "Data input: ", parse_data_value)
        if cache.access(value) is AccessResult.HIT:
            print(f"(Hit: {value})")
        if not parse_yes_no(input_func("Continue (Y/N): ")):
            break

    print()
    print("Printing cache...")
    print(render_report(cache), end="")
    if report_path:
        write_report(cache, report_path)
        print("Report saved to:", report_path)
    return cache


def run_trace(config_path=None, plots=True):
    if config_path is None and os.path.exists(DEFAULT_CONFIG_PATH):
        config_path = DEFAULT_CONFIG_PATH
    cfg = load_config(config_path)
    try:
        runner = SimulationRunner(cfg)
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    print("Starting simulation with config:", cfg["cache"], cfg["trace"])
    summary = runner.run()
    out_cfg = cfg["output"]
    results_path = runner.save_results(summary, out_cfg)
    print("Simulation Summary:", summary)
    print("Results saved to:", results_path)

    report_path = write_report(runner.cache, out_cfg.get("report_file", "results/cache_report.txt"))
    print("Report saved to:", report_path)

    if plots:
        # Imported lazily so interactive runs never load matplotlib.
        from visualize import plot_hit_miss_rate, plot_set_occupancy

        plot_hit_miss_rate(summary["hits"], summary["misses"],
                           out_cfg.get("hitmiss_plot", "results/hit_miss_rate.png"))
        plot_set_occupancy(runner.cache, out_cfg.get("occupancy_plot", "results/set_occupancy.png"))
        print("Plots saved in", out_cfg.get("results_dir", "results"))
    return 0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Set-associative cache simulator")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    interactive = sub.add_parser("interactive", help="Enter data values by hand (default)")
    interactive.add_argument("--report", help="Also write the final report to this file")
    interactive.add_argument("--policy", choices=POLICIES, default="rotating")

    trace = sub.add_parser("trace", help="Replay a generated address stream from a JSON config")
    trace.add_argument("--config", help=f"Config file (default: {DEFAULT_CONFIG_PATH} if present)")
    trace.add_argument("--no-plots", action="store_true", help="Skip matplotlib output")

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "trace":
        return run_trace(args.config, plots=not args.no_plots)
    run_interactive(report_path=getattr(args, "report", None), policy=getattr(args, "policy", "rotating"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
