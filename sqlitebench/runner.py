"""
Timed write and read runners.

Each runner opens its own connection to a fresh shared in-memory
database, creates the ``test`` table, runs its loop and closes the
connection before returning. Library errors are raised as BenchmarkError
naming the step that failed.
"""

from contextlib import contextmanager
from typing import Iterator, Union

from .config import DEFAULT_ITERATIONS, DEFAULT_SETUP_ROWS, MEMORY_URI
from .drivers import BaseConnection, BaseDriver, create_driver
from .errors import BenchmarkError
from .timing import timer
from .workload import generate_payload

CREATE_TABLE_SQL = "CREATE TABLE test (data BLOB)"
INSERT_SQL = "INSERT INTO test (data) VALUES (?)"
SELECT_SQL = "SELECT data FROM test LIMIT 1"

DriverLike = Union[str, BaseDriver]


def resolve_driver(driver: DriverLike) -> BaseDriver:
    """
    Accept a registered driver label or a driver instance.

    Unknown labels raise ValueError. A registered driver whose library cannot
    be imported raises BenchmarkError at the open step.
    """
    if isinstance(driver, BaseDriver):
        return driver
    try:
        return create_driver(driver)
    except ImportError as e:
        raise BenchmarkError(driver, "open", "Driver library not available") from e


@contextmanager
def driver_errors(driver: BaseDriver, step: str, message: str):
    try:
        yield
    except driver.error_types as e:
        raise BenchmarkError(driver.label, step, message) from e


@contextmanager
def open_table(driver: BaseDriver, uri: str = MEMORY_URI) -> Iterator[BaseConnection]:
    """
    Open a connection and create the empty ``test`` table.

    The connection is closed when the block exits, however it exits.
    """
    with driver_errors(driver, "open", "Failed to open database"):
        conn = driver.connect(uri)
    with conn:
        with driver_errors(driver, "create", "Failed to create table"):
            conn.execute(CREATE_TABLE_SQL)
        yield conn


def insert_rows(conn: BaseConnection, payload: bytes, count: int, step: str = "insert"):
    """Insert ``count`` rows carrying ``payload``, one statement per row."""
    driver = conn.driver
    with driver_errors(driver, step, "Failed to insert data"):
        for _ in range(count):
            conn.execute(INSERT_SQL, (payload,))


def select_once(conn: BaseConnection):
    """Run the point select, fetch its row and close the cursor."""
    driver = conn.driver
    with driver_errors(driver, "query", "Failed to query data"):
        cursor = conn.query(SELECT_SQL)
        try:
            row = cursor.fetchone()
        finally:
            cursor.close()
    if row is None:
        raise BenchmarkError(driver.label, "query", "Query returned no rows")
    return row


def select_rows(conn: BaseConnection, count: int):
    """Run the point select ``count`` times."""
    for _ in range(count):
        select_once(conn)


def benchmark_write(
    driver: DriverLike,
    data_size: int,
    iterations: int = DEFAULT_ITERATIONS,
    uri: str = MEMORY_URI,
) -> int:
    """
    Time ``iterations`` single-row inserts of a ``data_size`` byte blob.

    Parameters:
        driver: str or BaseDriver
            Registered driver label or driver instance
        data_size: int
            Payload size in bytes
        iterations: int
            Number of insert statements to time

    Returns:
        int: Elapsed wall-clock time in nanoseconds
    """
    driver = resolve_driver(driver)
    payload = generate_payload(data_size)

    with open_table(driver, uri) as conn:
        with timer() as t:
            insert_rows(conn, payload, iterations)
    return t["elapsed_ns"]


def benchmark_read(
    driver: DriverLike,
    data_size: int,
    iterations: int = DEFAULT_ITERATIONS,
    setup_rows: int = DEFAULT_SETUP_ROWS,
    uri: str = MEMORY_URI,
) -> int:
    """
    Time ``iterations`` point selects against a pre-populated table.

    ``setup_rows`` rows are inserted first, outside the timed section.

    Returns:
        int: Elapsed wall-clock time in nanoseconds
    """
    if setup_rows < 1:
        raise ValueError(f"setup_rows must be >= 1, got {setup_rows}")
    driver = resolve_driver(driver)
    payload = generate_payload(data_size)

    with open_table(driver, uri) as conn:
        insert_rows(conn, payload, setup_rows, step="setup")
        with timer() as t:
            select_rows(conn, iterations)
    return t["elapsed_ns"]
