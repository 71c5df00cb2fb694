"""
sqlitebench command line interface

Usage:
    sqlitebench [--drivers sqlite apsw] [--sizes 64 1024] [--iterations N] [--output FILE]
"""

import argparse
import platform
import sys
from typing import Dict, List, Optional

import psutil

from .config import DEFAULT_DATA_SIZES, DEFAULT_ITERATIONS, DEFAULT_OUTPUT, DEFAULT_SETUP_ROWS, DURATION_FORMATS, SweepConfig
from .drivers import create_driver, get_available_drivers, get_driver_identifier
from .errors import BenchmarkError
from .results import format_comparison, save_results_to_csv, save_results_to_json
from .sweep import RunOutcome, run_sweep


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqlitebench",
        description="Compare write/read latency of Python SQLite drivers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Full sweep, results in benchmark_results.csv
  sqlitebench

  # One driver, small payloads, 1000 statements per run
  sqlitebench --drivers apsw --sizes 64 256 --iterations 1000

  # Keep going past failures and also write JSON
  sqlitebench --keep-going --json results.json
""",
    )
    parser.add_argument(
        "--drivers",
        nargs="+",
        choices=get_available_drivers(),
        default=None,
        help="Driver(s) to benchmark (default: all)",
    )
    parser.add_argument(
        "--sizes",
        nargs="+",
        type=int,
        default=list(DEFAULT_DATA_SIZES),
        help=f"Payload sizes in bytes (default: {' '.join(str(s) for s in DEFAULT_DATA_SIZES)})",
    )
    parser.add_argument(
        "--operations",
        nargs="+",
        choices=["write", "read"],
        default=["write", "read"],
        help="Operation(s) to run (default: write read)",
    )
    parser.add_argument(
        "--iterations", type=int, default=DEFAULT_ITERATIONS,
        help=f"Timed statements per run (default: {DEFAULT_ITERATIONS})",
    )
    parser.add_argument(
        "--setup-rows", type=int, default=DEFAULT_SETUP_ROWS,
        help=f"Rows inserted before timing reads (default: {DEFAULT_SETUP_ROWS})",
    )
    parser.add_argument(
        "--output", "-o", default=DEFAULT_OUTPUT,
        help=f"CSV output file (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument("--no-csv", action="store_true", help="Do not write the CSV file")
    parser.add_argument("--json", dest="json_output", default=None, help="JSON output file")
    parser.add_argument(
        "--duration-format", choices=DURATION_FORMATS, default="human",
        help="CSV duration column: human ('1.2ms') or ns (integer nanoseconds)",
    )
    parser.add_argument(
        "--keep-going", action="store_true",
        help="Record failed combinations and continue instead of aborting",
    )
    parser.add_argument("--quiet", "-q", action="store_true", help="Do not print a line per result")
    parser.add_argument("--list-drivers", action="store_true", help="List registered drivers and exit")
    return parser


def config_from_args(args) -> SweepConfig:
    return SweepConfig(
        drivers=args.drivers,
        data_sizes=args.sizes,
        operations=args.operations,
        iterations=args.iterations,
        setup_rows=args.setup_rows,
        output=None if args.no_csv else args.output,
        json_output=args.json_output,
        duration_format=args.duration_format,
        fail_fast=not args.keep_going,
        quiet=args.quiet,
    )


def get_system_info(drivers: List[str]) -> Dict:
    info = {
        "platform": platform.platform(),
        "machine": platform.machine(),
        "processor": platform.processor(),
        "python": platform.python_version(),
        "cpu_count": psutil.cpu_count(logical=True),
        "memory_gb": round(psutil.virtual_memory().total / (1024**3), 1),
        "drivers": {},
    }
    for label in drivers:
        try:
            info["drivers"][label] = create_driver(label).version()
        except ImportError as e:
            info["drivers"][label] = f"unavailable ({e})"
    return info


def print_header(info: Dict, config: SweepConfig):
    print("=" * 80)
    print(" SQLite driver benchmark")
    print("=" * 80)
    print(f"\nSystem: {info['platform']} ({info['machine']})")
    print(f"CPU: {info.get('processor') or 'N/A'} ({info['cpu_count']} cores)")
    print(f"Memory: {info['memory_gb']} GB")
    print(f"Python: {info['python']}")
    for label, version in info["drivers"].items():
        print(f"{label}: v{version}")
    print(f"\nData sizes: {', '.join(str(s) for s in config.data_sizes)} bytes")
    print(f"Iterations: {config.iterations} per run, read setup: {config.setup_rows} rows")
    print()


def _print_failure(outcome: RunOutcome):
    print(
        f"FAILED driver={outcome.driver} operation={outcome.operation.value} "
        f"size={outcome.data_size}: {outcome.error}",
        file=sys.stderr,
    )


def run(config: SweepConfig) -> int:
    """Run a sweep and write its outputs. Returns the process exit status."""
    drivers = config.drivers or get_available_drivers()
    info = get_system_info(drivers)
    print_header(info, config)

    on_result = None if config.quiet else (lambda result: print(result.log_line()))
    try:
        report = run_sweep(
            drivers=drivers,
            data_sizes=config.data_sizes,
            operations=config.operations,
            iterations=config.iterations,
            setup_rows=config.setup_rows,
            fail_fast=config.fail_fast,
            on_result=on_result,
            on_failure=_print_failure,
        )
    except BenchmarkError as e:
        print(f"Benchmark failed: {e}", file=sys.stderr)
        return 1

    results = report.results
    if results:
        print()
        print(format_comparison(results))

    if config.output:
        try:
            path = save_results_to_csv(results, config.output, config.duration_format)
        except OSError as e:
            print(f"Failed to write CSV file {config.output}: {e}", file=sys.stderr)
            return 1
        print(f"\nResults saved to {path}")

    if config.json_output:
        try:
            path = save_results_to_json(results, config.json_output, info)
        except OSError as e:
            print(f"Failed to write JSON file {config.json_output}: {e}", file=sys.stderr)
            return 1
        print(f"Results saved to {path}")

    if report.failures:
        print(f"\n{len(report.failures)} of {len(report.outcomes)} runs failed", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.list_drivers:
        for label in get_available_drivers():
            print(f"{label:<10} {get_driver_identifier(label)}")
        return 0

    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    try:
        return run(config)
    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
