import pytest

from sqlitebench.timing import format_duration, timer


@pytest.mark.parametrize("ns, expected", [
    (0, "0s"),
    (850, "850ns"),
    (1_000, "1µs"),
    (12_500, "12.5µs"),
    (1_200_000, "1.2ms"),
    (1_234_567, "1.234567ms"),
    (999_999_999, "999.999999ms"),
    (1_500_000_000, "1.5s"),
    (90_000_000_000, "1m30s"),
    (123_250_000_000, "2m3.25s"),
    (3_600_000_000_000, "1h0m0s"),
])
def test_format_duration(ns, expected):
    assert format_duration(ns) == expected


def test_format_duration_negative():
    assert format_duration(-1_500_000) == "-1.5ms"


def test_timer_sets_elapsed():
    with timer() as t:
        sum(range(1000))
    assert t["elapsed_ns"] >= 0


def test_timer_not_set_on_error():
    with pytest.raises(RuntimeError):
        with timer() as t:
            raise RuntimeError("boom")
    assert "elapsed_ns" not in t
