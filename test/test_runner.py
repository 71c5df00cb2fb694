import pytest

from sqlitebench import BenchmarkError, MEMORY_URI, benchmark_read, benchmark_write, generate_payload
from sqlitebench.runner import insert_rows, open_table, select_once, select_rows

from helpers import BrokenCreateDriver, BrokenInsertDriver, UnopenableDriver


def _table_exists(driver) -> bool:
    with driver.connect(MEMORY_URI) as conn:
        cursor = conn.query("SELECT COUNT(*) FROM sqlite_master WHERE name = 'test'")
        row = cursor.fetchone()
        cursor.close()
    return row[0] == 1


@pytest.mark.parametrize("size", [0, 64, 4096])
def test_benchmark_write_duration(driver, size):
    duration = benchmark_write(driver, size, iterations=20)
    assert isinstance(duration, int)
    assert duration >= 0


@pytest.mark.parametrize("size", [0, 64, 4096])
def test_benchmark_read_duration(driver, size):
    duration = benchmark_read(driver, size, iterations=20, setup_rows=10)
    assert isinstance(duration, int)
    assert duration >= 0


def test_benchmark_by_label():
    assert benchmark_write("sqlite", 64, iterations=5) >= 0
    assert benchmark_read("apsw", 64, iterations=5) >= 0


def test_default_iterations(driver):
    assert benchmark_write(driver, 64) >= 0
    assert benchmark_read(driver, 64) >= 0


def test_zero_iterations(driver):
    assert benchmark_write(driver, 64, iterations=0) >= 0
    assert benchmark_read(driver, 64, iterations=0) >= 0


def test_write_duration_grows_with_iterations(driver):
    size = 1 << 20
    assert benchmark_write(driver, size, iterations=0) <= benchmark_write(driver, size, iterations=50)


def test_read_duration_grows_with_iterations(driver):
    size = 1 << 20
    assert benchmark_read(driver, size, iterations=0, setup_rows=5) <= benchmark_read(
        driver, size, iterations=50, setup_rows=5
    )


def test_runs_are_repeatable(driver):
    # Each run starts from a fresh table; a leaked connection would make CREATE TABLE fail
    for _ in range(3):
        benchmark_write(driver, 64, iterations=5)
        benchmark_read(driver, 64, iterations=5)
    assert not _table_exists(driver)


def test_insert_rows_leaves_exactly_n_rows(driver):
    with open_table(driver) as conn:
        insert_rows(conn, generate_payload(64), 37)
        assert conn.count_rows("test") == 37


def test_every_select_returns_a_row(driver):
    with open_table(driver) as conn:
        insert_rows(conn, generate_payload(256), 100)
        for _ in range(10):
            row = select_once(conn)
            assert len(row[0]) == 256
        select_rows(conn, 50)


def test_select_on_empty_table_fails(driver):
    with open_table(driver) as conn:
        with pytest.raises(BenchmarkError) as exc_info:
            select_once(conn)
    assert exc_info.value.step == "query"


def test_setup_rows_must_be_positive(driver):
    with pytest.raises(ValueError):
        benchmark_read(driver, 64, setup_rows=0)


def test_insert_failure_raises_and_closes():
    driver = BrokenInsertDriver()
    with pytest.raises(BenchmarkError) as exc_info:
        benchmark_write(driver, 64, iterations=5)
    err = exc_info.value
    assert err.step == "insert"
    assert err.driver == "broken"
    assert "disk I/O error" in str(err)
    assert not _table_exists(driver)


def test_setup_failure_in_read():
    with pytest.raises(BenchmarkError) as exc_info:
        benchmark_read(BrokenInsertDriver(), 64, iterations=5)
    assert exc_info.value.step == "setup"


def test_create_failure():
    with pytest.raises(BenchmarkError) as exc_info:
        benchmark_write(BrokenCreateDriver(), 64)
    assert exc_info.value.step == "create"
    assert "Failed to create table" in str(exc_info.value)


def test_open_failure():
    with pytest.raises(BenchmarkError) as exc_info:
        benchmark_read(UnopenableDriver(), 64)
    assert exc_info.value.step == "open"
    assert exc_info.value.__cause__ is not None


def test_unknown_driver_label():
    with pytest.raises(ValueError):
        benchmark_write("modernc", 64)
