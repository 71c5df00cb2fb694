import pytest

from sqlitebench import BenchmarkError, Operation, RunOutcome, run_sweep
from sqlitebench.results import BenchmarkResult

from helpers import BrokenInsertDriver


def test_sweep_order_is_deterministic():
    report = run_sweep(data_sizes=[256, 64], iterations=5, setup_rows=5)
    keys = [(o.driver, o.operation, o.data_size) for o in report.outcomes]
    assert keys == [
        ("sqlite", Operation.WRITE, 256),
        ("sqlite", Operation.READ, 256),
        ("sqlite", Operation.WRITE, 64),
        ("sqlite", Operation.READ, 64),
        ("apsw", Operation.WRITE, 256),
        ("apsw", Operation.READ, 256),
        ("apsw", Operation.WRITE, 64),
        ("apsw", Operation.READ, 64),
    ]
    assert report.ok
    assert len(report.results) == 8
    assert all(r.duration_ns >= 0 for r in report.results)


def test_sweep_sizes_match_runs():
    report = run_sweep(drivers=["apsw"], data_sizes=[0, 1024], operations=["read"], iterations=3)
    assert [r.data_size for r in report.results] == [0, 1024]
    assert all(r.operation is Operation.READ for r in report.results)


def test_sweep_on_result_callback():
    seen = []
    report = run_sweep(drivers=["sqlite"], data_sizes=[64], iterations=3, on_result=seen.append)
    assert seen == report.results


def test_sweep_fail_fast_raises():
    with pytest.raises(BenchmarkError):
        run_sweep(drivers=[BrokenInsertDriver(), "sqlite"], data_sizes=[64], iterations=3)


def test_sweep_keep_going_records_failures():
    failed = []
    report = run_sweep(
        drivers=[BrokenInsertDriver(), "sqlite"],
        data_sizes=[64],
        iterations=3,
        fail_fast=False,
        on_failure=failed.append,
    )
    assert not report.ok
    assert len(report.failures) == 2
    assert failed == report.failures
    assert {f.error.step for f in report.failures} == {"insert", "setup"}
    assert [r.driver for r in report.results] == ["sqlite", "sqlite"]


def test_run_outcome_needs_exactly_one_of_result_or_error():
    with pytest.raises(ValueError):
        RunOutcome("sqlite", Operation.WRITE, 64)
    result = BenchmarkResult("sqlite", Operation.WRITE, 64, 1)
    error = BenchmarkError("sqlite", "insert", "Failed to insert data")
    with pytest.raises(ValueError):
        RunOutcome("sqlite", Operation.WRITE, 64, result=result, error=error)
    assert RunOutcome("sqlite", Operation.WRITE, 64, result=result).ok
    assert not RunOutcome("sqlite", Operation.WRITE, 64, error=error).ok


def _without_apsw(monkeypatch):
    import sqlitebench.runner
    from sqlitebench.drivers import create_driver

    def create(label):
        if label == "apsw":
            raise ImportError("No module named 'apsw'")
        return create_driver(label)

    monkeypatch.setattr(sqlitebench.runner, "create_driver", create)


def test_sweep_missing_library_fails_fast(monkeypatch):
    _without_apsw(monkeypatch)
    with pytest.raises(BenchmarkError) as exc_info:
        run_sweep(drivers=["apsw", "sqlite"], data_sizes=[64], iterations=3)
    assert exc_info.value.step == "open"
    assert exc_info.value.driver == "apsw"
    assert isinstance(exc_info.value.__cause__, ImportError)


def test_sweep_keep_going_records_missing_library(monkeypatch):
    _without_apsw(monkeypatch)
    failed = []
    report = run_sweep(
        drivers=["apsw", "sqlite"],
        data_sizes=[64, 256],
        iterations=3,
        fail_fast=False,
        on_failure=failed.append,
    )
    assert failed == report.failures
    assert [(f.driver, f.operation, f.data_size) for f in report.failures] == [
        ("apsw", Operation.WRITE, 64),
        ("apsw", Operation.READ, 64),
        ("apsw", Operation.WRITE, 256),
        ("apsw", Operation.READ, 256),
    ]
    assert {f.error.step for f in report.failures} == {"open"}
    assert [r.driver for r in report.results] == ["sqlite"] * 4


def test_sweep_unknown_label_raises_before_running():
    seen = []
    with pytest.raises(ValueError):
        run_sweep(drivers=["sqlite", "modernc"], data_sizes=[64], iterations=3, on_result=seen.append)
    assert seen == []
