"""
Benchmark results and their serialization.

Results are written as CSV (the default output), as JSON, or printed as
log lines and a comparison table.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import orjson
import pandas as pd

from .config import DEFAULT_OUTPUT, DURATION_FORMATS
from .timing import format_duration

CSV_COLUMNS = ["Driver", "Operation", "DataSize", "Duration"]


class Operation(str, Enum):
    WRITE = "write"
    READ = "read"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class BenchmarkResult:
    """
    One timed run of one driver, operation and payload size.
    """

    driver: str
    operation: Operation
    data_size: int
    duration_ns: int

    def __post_init__(self):
        # Accept "write"/"read" strings as well as Operation members
        object.__setattr__(self, "operation", Operation(self.operation))
        if self.data_size < 0:
            raise ValueError(f"data_size must be >= 0, got {self.data_size}")
        if self.duration_ns < 0:
            raise ValueError(f"duration_ns must be >= 0, got {self.duration_ns}")

    @property
    def duration_ms(self) -> float:
        return self.duration_ns / 1_000_000

    def format_duration(self, duration_format: str = "human") -> str:
        if duration_format == "ns":
            return str(self.duration_ns)
        return format_duration(self.duration_ns)

    def log_line(self) -> str:
        return (
            f"Driver: {self.driver}, Operation: {self.operation.value}, "
            f"DataSize: {self.data_size} bytes, Duration: {format_duration(self.duration_ns)}"
        )

    def to_dict(self) -> Dict:
        return {
            "driver": self.driver,
            "operation": self.operation.value,
            "data_size": self.data_size,
            "duration_ns": self.duration_ns,
            "duration": format_duration(self.duration_ns),
        }


def results_to_frame(results: Iterable[BenchmarkResult], duration_format: str = "human") -> pd.DataFrame:
    """
    Convert results to a DataFrame with the CSV columns.

    Parameters:
        results: Iterable[BenchmarkResult]
            Results in output order
        duration_format: str
            "human" or "ns"
    """
    if duration_format not in DURATION_FORMATS:
        raise ValueError(f"duration_format must be one of {', '.join(DURATION_FORMATS)}, got '{duration_format}'")
    rows = [
        [r.driver, r.operation.value, r.data_size, r.format_duration(duration_format)]
        for r in results
    ]
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def save_results_to_csv(
    results: Iterable[BenchmarkResult],
    path: Union[str, Path] = DEFAULT_OUTPUT,
    duration_format: str = "human",
) -> Path:
    """
    Write results as CSV: a header line, then one line per result.

    Raises OSError if the file cannot be created.

    Returns:
        Path: The written file
    """
    path = Path(path)
    frame = results_to_frame(results, duration_format)
    frame.to_csv(path, index=False, encoding="utf-8", lineterminator="\n")
    return path


def save_results_to_json(
    results: Iterable[BenchmarkResult],
    path: Union[str, Path],
    system_info: Optional[Dict] = None,
) -> Path:
    """Write results and optional system information as indented JSON."""
    path = Path(path)
    output = {
        "system": system_info or {},
        "results": [r.to_dict() for r in results],
    }
    path.write_bytes(orjson.dumps(output, option=orjson.OPT_INDENT_2))
    return path


def load_results_from_csv(path: Union[str, Path]) -> List[BenchmarkResult]:
    """Read back a CSV written with ``duration_format="ns"``."""
    frame = pd.read_csv(path, dtype={"Driver": str, "Operation": str})
    return [
        BenchmarkResult(
            driver=row.Driver,
            operation=Operation(row.Operation),
            data_size=int(row.DataSize),
            duration_ns=int(row.Duration),
        )
        for row in frame.itertuples(index=False)
    ]


def format_comparison(results: Iterable[BenchmarkResult]) -> str:
    """
    Build a text table with one row per (operation, size) and one column per driver.
    """
    results = list(results)
    if not results:
        return "No results."

    drivers: List[str] = []
    for r in results:
        if r.driver not in drivers:
            drivers.append(r.driver)

    frame = pd.DataFrame(
        [(r.operation.value, r.data_size, r.driver, r.duration_ns) for r in results],
        columns=["operation", "data_size", "driver", "duration_ns"],
    )
    table = frame.pivot_table(
        index=["operation", "data_size"], columns="driver", values="duration_ns", aggfunc="first", sort=False
    )

    col_w = 14
    header = f"{'Operation':<10} {'DataSize':>10} " + " ".join(f"{d:>{col_w}}" for d in drivers)
    lines = [header, "-" * len(header)]
    for (operation, data_size), row in table.iterrows():
        cells = []
        for d in drivers:
            value = row.get(d)
            cells.append(f"{'N/A' if pd.isna(value) else format_duration(int(value)):>{col_w}}")
        lines.append(f"{operation:<10} {data_size:>10} " + " ".join(cells))
    return "\n".join(lines)
