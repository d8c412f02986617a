# main.py
import argparse
import logging
import os
import sys

import config
import report
from geometry import ConfigError, validate
from simulator import Simulation, run_sweep, save_results
from tracefile import read_trace, write_trace
from visualize import plot_hit_miss_rate, plot_set_usage, plot_sweep
from workload import PATTERNS, generate_trace

logger = logging.getLogger(__name__)


def parse_geometry_spec(text):
    """Parse SETSxWAYSxLINE, e.g. "16x2x16"."""
    parts = text.lower().split("x")
    if len(parts) != 3:
        raise argparse.ArgumentTypeError(f"{text!r} is not SETSxWAYSxLINE")
    try:
        return validate(*(int(p) for p in parts))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"{text!r}: {exc}") from exc


def parse_args(argv=None):
    ap = argparse.ArgumentParser(
        prog="dcache-sim",
        description="Set-associative data cache simulator (LRU, write-through, no-write-allocate)")
    ap.add_argument("trace", nargs="?", default="-",
                    help="trace file of KIND:SIZE:HEXADDR lines (default: stdin)")
    ap.add_argument("-c", "--config", default=config.DEFAULT_CONFIG_PATH,
                    help="geometry config, legacy text or .json (default: trace.config)")
    ap.add_argument("-q", "--quiet", action="store_true", help="do not print per-access lines")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    ap.add_argument("--results-dir", help="write summary.json into this directory")
    ap.add_argument("--plots", metavar="DIR", help="write PNG charts into this directory")
    ap.add_argument("--sweep", nargs="+", type=parse_geometry_spec, metavar="SxWxL",
                    help="compare several geometries over the same trace instead of a single run")

    gen = ap.add_argument_group("synthetic workload")
    gen.add_argument("--generate", type=int, metavar="N", help="simulate N generated accesses instead of a trace")
    gen.add_argument("--pattern", choices=PATTERNS, help="access pattern (default: mixed)")
    gen.add_argument("--read-ratio", type=float, help="fraction of reads (default: 0.8)")
    gen.add_argument("--working-set", type=int, metavar="BYTES", help="working set size in bytes")
    gen.add_argument("--seed", type=int, help="random seed")
    gen.add_argument("--save-trace", metavar="PATH", help="also write the generated trace to PATH")
    return ap.parse_args(argv)


def _load_events(args, cfg):
    if args.generate is not None:
        wl = config.workload_settings(cfg)
        events = generate_trace(
            args.generate,
            pattern=args.pattern or wl["pattern"],
            read_ratio=args.read_ratio if args.read_ratio is not None else wl["read_ratio"],
            working_set_bytes=args.working_set if args.working_set is not None else wl["working_set_bytes"],
            access_size=wl["access_size"],
            seed=args.seed if args.seed is not None else wl["seed"],
        )
        if args.save_trace:
            with open(args.save_trace, "w") as f:
                write_trace(events, f)
        return events
    if args.trace == "-":
        return read_trace(sys.stdin)
    with open(args.trace, "r") as f:
        return list(read_trace(f))


def _output_paths(args, cfg):
    """Command-line flags win; a JSON config with an "output" section fills the rest."""
    out = config.output_settings(cfg) if "output" in cfg else None
    results_dir = args.results_dir or (out["results_dir"] if out else None)
    if args.plots:
        plot_paths = (os.path.join(args.plots, "hit_miss_rate.png"),
                      os.path.join(args.plots, "set_usage.png"))
    elif out:
        plot_paths = (out["hitmiss_plot"], out["sets_plot"])
    else:
        plot_paths = None
    return results_dir, plot_paths


def _run_sweep(args, events):
    summaries = run_sweep(args.sweep, events)
    print(report.format_sweep(summaries))
    if args.results_dir:
        path = save_results({"runs": summaries}, args.results_dir, "sweep.json")
        print("Results saved to:", path)
    if args.plots:
        plot_sweep(summaries, os.path.join(args.plots, "sweep_hit_rate.png"))
    return 0


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(format='%(levelname)s - %(filename)s:%(lineno)d - %(message)s',
                        level=logging.DEBUG if args.verbose else logging.INFO)

    cfg = {}
    try:
        if str(args.config).endswith(".json"):
            cfg = config.load_config(args.config)
    except (OSError, ValueError) as exc:
        logger.error("Cannot read %s: %s", args.config, exc)
        return 1

    try:
        events = _load_events(args, cfg)
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 1

    if args.sweep:
        return _run_sweep(args, events)

    try:
        geom = config.geometry_from_dict(cfg) if cfg else config.read_geometry(args.config)
    except FileNotFoundError:
        logger.error("Cannot open %s file", args.config)
        return 1
    except (ConfigError, config.ConfigFormatError) as exc:
        logger.error("%s", exc)
        return 1

    print(report.format_banner(geom))
    on_outcome = None
    if not args.quiet:
        print(report.format_header())
        on_outcome = lambda outcome: print(report.format_outcome(outcome))

    sim = Simulation(geom, on_outcome=on_outcome)
    summary, outcomes = sim.run(events)
    print(report.format_summary(summary))

    results_dir, plot_paths = _output_paths(args, cfg)
    if results_dir:
        path = save_results(summary, results_dir)
        print("Results saved to:", path)
    if plot_paths:
        hitmiss_path, sets_path = plot_paths
        plot_hit_miss_rate(summary["hit_rate"], hitmiss_path)
        plot_set_usage(outcomes, geom.num_sets, sets_path)
        print("Plots saved:", hitmiss_path, sets_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
