"""Entry point for the cache hierarchy simulator.

Usage:
    python run.py BLOCK_SIZE L1_SIZE L1_ASSOC L2_SIZE L2_ASSOC TRACE_FILE
    python run.py 32 1024 2 8192 4 gcc_trace.txt --verbose

An L2_SIZE of 0 simulates a machine without an L2.
"""
import argparse
import sys

from cachesim.core.errors import SimulatorError
from cachesim.data.stats_export import Exporter, export_chart_pdf, export_stats_json
from cachesim.simulation import Simulation, SimulationConfig
from cachesim.simulation.report import describe_access, render_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Two-level LRU write-back cache simulator")
    parser.add_argument("block_size", help="block size in bytes")
    parser.add_argument("l1_size", help="L1 capacity in bytes")
    parser.add_argument("l1_assoc", help="L1 associativity")
    parser.add_argument("l2_size", help="L2 capacity in bytes (0 = no L2)")
    parser.add_argument("l2_assoc", help="L2 associativity")
    parser.add_argument("trace_file", help="trace of '<r|w> <hex-address>' lines")
    parser.add_argument("--verbose", action="store_true", help="print the outcome of every access")
    parser.add_argument("--csv", metavar="PATH", help="also export the counters as CSV")
    parser.add_argument("--json", metavar="PATH", help="also export the counters as JSON")
    parser.add_argument("--chart", metavar="PATH", help="also save a hit/miss bar chart as PDF")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = SimulationConfig.from_strings(
            args.block_size, args.l1_size, args.l1_assoc,
            args.l2_size, args.l2_assoc, args.trace_file,
        )
        sim = Simulation(config)
        print(render_config(config))
        callback = (lambda info: print(describe_access(info))) if args.verbose else None
        stats = sim.run(callback=callback)
    except (SimulatorError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(sim.render_report())

    try:
        if args.csv:
            Exporter.export_stats_csv(args.csv, stats)
        if args.json:
            export_stats_json(stats, args.json)
        if args.chart:
            export_chart_pdf(stats, args.chart)
    except OSError as e:
        print(f"error: export failed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
