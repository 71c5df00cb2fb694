"""
Default settings for sqlitebench runs.
"""

from dataclasses import dataclass, field
from typing import List, Optional

# Named in-memory database on the memdb VFS. Every connection in the process
# opening this name sees the same database, for both drivers; it is dropped
# when the last connection closes.
MEMORY_URI = "file:/sqlitebench?vfs=memdb"

# Shared-cache form of the in-memory database. Builds compiled with
# SQLITE_OMIT_SHARED_CACHE (the apsw wheels) cannot open it as shared.
SHARED_CACHE_URI = "file::memory:?cache=shared"

DEFAULT_DATA_SIZES = [64, 256, 1024, 4096, 1024 * 1024]
DEFAULT_ITERATIONS = 100
DEFAULT_SETUP_ROWS = 100
DEFAULT_OUTPUT = "benchmark_results.csv"

DURATION_FORMATS = ("human", "ns")


@dataclass
class SweepConfig:
    """
    Settings for one sweep over drivers, data sizes and operations.

    Parameters:
        drivers: List[str]
            Driver labels to run. None means every registered driver.
        data_sizes: List[int]
            Payload sizes in bytes.
        operations: List[str]
            Operation names, "write" and/or "read".
        iterations: int
            Timed statements per run.
        setup_rows: int
            Rows inserted before a read run starts timing.
        output: str
            CSV output path, or None to skip the CSV file.
        json_output: str
            Optional JSON output path.
        duration_format: str
            "human" for strings like "1.2ms", "ns" for integer nanoseconds.
        fail_fast: bool
            Abort the sweep at the first failure.
        quiet: bool
            Do not print a log line per result.
    """

    drivers: Optional[List[str]] = None
    data_sizes: List[int] = field(default_factory=lambda: list(DEFAULT_DATA_SIZES))
    operations: List[str] = field(default_factory=lambda: ["write", "read"])
    iterations: int = DEFAULT_ITERATIONS
    setup_rows: int = DEFAULT_SETUP_ROWS
    output: Optional[str] = DEFAULT_OUTPUT
    json_output: Optional[str] = None
    duration_format: str = "human"
    fail_fast: bool = True
    quiet: bool = False

    def __post_init__(self):
        if self.iterations < 0:
            raise ValueError(f"iterations must be >= 0, got {self.iterations}")
        if self.setup_rows < 1:
            raise ValueError(f"setup_rows must be >= 1, got {self.setup_rows}")
        for size in self.data_sizes:
            if size < 0:
                raise ValueError(f"data sizes must be >= 0, got {size}")
        if self.duration_format not in DURATION_FORMATS:
            raise ValueError(
                f"duration_format must be one of {', '.join(DURATION_FORMATS)}, got '{self.duration_format}'"
            )
