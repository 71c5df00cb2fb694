"""
Driver x data size x operation sweep.

Runs every combination in a fixed order: drivers in registry order, data
sizes in the given order, write before read.
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence, Union

from .config import DEFAULT_DATA_SIZES, DEFAULT_ITERATIONS, DEFAULT_SETUP_ROWS, MEMORY_URI
from .drivers import BaseDriver, get_available_drivers, get_driver_identifier
from .errors import BenchmarkError
from .results import BenchmarkResult, Operation
from .runner import benchmark_read, benchmark_write, resolve_driver


@dataclass(frozen=True)
class RunOutcome:
    """Outcome of one combination: a result or an error, never both."""

    driver: str
    operation: Operation
    data_size: int
    result: Optional[BenchmarkResult] = None
    error: Optional[BenchmarkError] = None

    def __post_init__(self):
        if (self.result is None) == (self.error is None):
            raise ValueError("RunOutcome needs exactly one of result or error")

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SweepReport:
    """Outcomes of a sweep in run order."""

    outcomes: List[RunOutcome] = field(default_factory=list)

    @property
    def results(self) -> List[BenchmarkResult]:
        return [o.result for o in self.outcomes if o.ok]

    @property
    def failures(self) -> List[RunOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return not self.failures


def run_once(
    driver: BaseDriver,
    operation: Operation,
    data_size: int,
    iterations: int = DEFAULT_ITERATIONS,
    setup_rows: int = DEFAULT_SETUP_ROWS,
    uri: str = MEMORY_URI,
) -> BenchmarkResult:
    """Run one timed combination and wrap its duration in a result."""
    if operation is Operation.WRITE:
        elapsed = benchmark_write(driver, data_size, iterations, uri=uri)
    else:
        elapsed = benchmark_read(driver, data_size, iterations, setup_rows, uri=uri)
    return BenchmarkResult(driver=driver.label, operation=operation, data_size=data_size, duration_ns=elapsed)


def run_sweep(
    drivers: Optional[Iterable[Union[str, BaseDriver]]] = None,
    data_sizes: Sequence[int] = DEFAULT_DATA_SIZES,
    operations: Sequence[Union[str, Operation]] = (Operation.WRITE, Operation.READ),
    iterations: int = DEFAULT_ITERATIONS,
    setup_rows: int = DEFAULT_SETUP_ROWS,
    fail_fast: bool = True,
    on_result: Optional[Callable[[BenchmarkResult], None]] = None,
    on_failure: Optional[Callable[[RunOutcome], None]] = None,
    uri: str = MEMORY_URI,
) -> SweepReport:
    """
    Run every driver, data size and operation combination.

    Parameters:
        drivers: Iterable of labels or driver instances
            None runs every registered driver
        data_sizes: Sequence[int]
            Payload sizes in bytes
        operations: Sequence of "write"/"read"
            Run in the order given, once per driver and size
        fail_fast: bool
            If True the first BenchmarkError is raised and the sweep stops.
            If False the error is recorded in the report and the sweep continues.
            A driver whose library cannot be imported fails each of its
            combinations at the open step.
        on_result: callable
            Called with each successful result as soon as it is available
        on_failure: callable
            Called with each failed outcome when fail_fast is False

    Returns:
        SweepReport: All outcomes in run order
    """
    if drivers is None:
        drivers = get_available_drivers()
    drivers = list(drivers)
    for d in drivers:
        # unknown labels are a usage error, reported before anything runs
        if not isinstance(d, BaseDriver):
            get_driver_identifier(d)
    operations = [Operation(op) for op in operations]

    report = SweepReport()

    def record_failure(label, operation, data_size, error):
        outcome = RunOutcome(label, operation, data_size, error=error)
        report.outcomes.append(outcome)
        if on_failure is not None:
            on_failure(outcome)

    for d in drivers:
        try:
            driver = resolve_driver(d)
        except BenchmarkError as e:
            if fail_fast:
                raise
            for data_size in data_sizes:
                for operation in operations:
                    record_failure(e.driver, operation, data_size, e)
            continue

        for data_size in data_sizes:
            for operation in operations:
                try:
                    result = run_once(driver, operation, data_size, iterations, setup_rows, uri)
                except BenchmarkError as e:
                    if fail_fast:
                        raise
                    record_failure(driver.label, operation, data_size, e)
                    continue
                report.outcomes.append(RunOutcome(driver.label, operation, data_size, result=result))
                if on_result is not None:
                    on_result(result)
    return report
