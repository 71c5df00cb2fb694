"""
Benchmark-mode entry points.

An external harness such as pytest-benchmark decides how many times to
call the operation and measures its average cost. These helpers only do the
setup and hand back a zero-argument callable performing one operation.

Example (pytest-benchmark)::

    def test_sqlite_write_64(benchmark):
        run_benchmark(benchmark, "sqlite", "write", 64)
"""

from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Union

from .config import DEFAULT_SETUP_ROWS, MEMORY_URI
from .results import Operation
from .runner import DriverLike, INSERT_SQL, driver_errors, insert_rows, open_table, resolve_driver, select_once
from .workload import generate_payload


@contextmanager
def prepare_operation(
    driver: DriverLike,
    operation: Union[str, Operation],
    data_size: int,
    setup_rows: int = DEFAULT_SETUP_ROWS,
    uri: str = MEMORY_URI,
) -> Iterator[Callable[[], None]]:
    """
    Open a fresh table and yield a callable running one write or one read.

    For reads, ``setup_rows`` rows are inserted before the callable is
    yielded. The connection is closed when the block exits.
    """
    operation = Operation(operation)
    if operation is Operation.READ and setup_rows < 1:
        raise ValueError(f"setup_rows must be >= 1, got {setup_rows}")
    driver = resolve_driver(driver)
    payload = generate_payload(data_size)
    params = (payload,)

    with open_table(driver, uri) as conn:
        if operation is Operation.WRITE:
            def op():
                with driver_errors(driver, "insert", "Failed to insert data"):
                    conn.execute(INSERT_SQL, params)
        else:
            insert_rows(conn, payload, setup_rows, step="setup")

            def op():
                select_once(conn)

        yield op


def run_benchmark(
    benchmark,
    driver: DriverLike,
    operation: Union[str, Operation],
    data_size: int,
    setup_rows: int = DEFAULT_SETUP_ROWS,
    rounds: Optional[int] = None,
    uri: str = MEMORY_URI,
):
    """
    Run one operation under a pytest-benchmark ``benchmark`` fixture.

    By default the fixture calibrates its own iteration count. Passing
    ``rounds`` pins it instead, which bounds table growth for large writes.
    """
    with prepare_operation(driver, operation, data_size, setup_rows, uri) as op:
        if rounds is None:
            return benchmark(op)
        return benchmark.pedantic(op, rounds=rounds, iterations=1)
