"""
sqlitebench - write/read latency comparison of Python SQLite drivers

Runs single-row inserts and point selects against a fresh shared
in-memory database for each driver and payload size, and records the
elapsed wall-clock time of each run.
"""

from .bench import prepare_operation, run_benchmark
from .config import DEFAULT_DATA_SIZES, DEFAULT_ITERATIONS, DEFAULT_OUTPUT, DEFAULT_SETUP_ROWS, MEMORY_URI, SHARED_CACHE_URI, SweepConfig
from .drivers import DRIVERS, BaseDriver, create_driver, get_available_drivers
from .errors import BenchmarkError
from .results import (
    BenchmarkResult,
    Operation,
    format_comparison,
    load_results_from_csv,
    results_to_frame,
    save_results_to_csv,
    save_results_to_json,
)
from .runner import benchmark_read, benchmark_write
from .sweep import RunOutcome, SweepReport, run_sweep
from .timing import format_duration
from .workload import generate_payload

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_DATA_SIZES",
    "DEFAULT_ITERATIONS",
    "DEFAULT_OUTPUT",
    "DEFAULT_SETUP_ROWS",
    "DRIVERS",
    "MEMORY_URI",
    "SHARED_CACHE_URI",
    "BaseDriver",
    "BenchmarkError",
    "BenchmarkResult",
    "Operation",
    "RunOutcome",
    "SweepConfig",
    "SweepReport",
    "benchmark_read",
    "benchmark_write",
    "create_driver",
    "format_comparison",
    "format_duration",
    "generate_payload",
    "get_available_drivers",
    "load_results_from_csv",
    "prepare_operation",
    "results_to_frame",
    "run_benchmark",
    "run_sweep",
    "save_results_to_csv",
    "save_results_to_json",
]
