"""
Timing helpers: a wall-clock timer and a duration formatter.
"""

import gc
import time
from contextlib import contextmanager

_NS_PER_US = 1_000
_NS_PER_MS = 1_000_000
_NS_PER_S = 1_000_000_000
_NS_PER_MIN = 60 * _NS_PER_S
_NS_PER_HOUR = 60 * _NS_PER_MIN


@contextmanager
def timer():
    """Context manager that yields a dict; sets 'elapsed_ns' on exit.

    'elapsed_ns' is only set when the block completes without raising.
    """
    result = {}
    gc.collect()
    t0 = time.perf_counter_ns()
    yield result
    result["elapsed_ns"] = time.perf_counter_ns() - t0


def _fraction(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{frac:0{digits}d}".rstrip("0")


def format_duration(ns: int) -> str:
    """
    Render a nanosecond duration as a short human readable string.

    Uses the largest unit below one second ("850ns", "12.5µs", "1.2ms") and
    hours/minutes/seconds above it ("1.5s", "2m3.25s", "1h0m0s").

    Parameters:
        ns: int
            Duration in nanoseconds
    """
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    ns = abs(ns)

    if ns < _NS_PER_US:
        return f"{sign}{ns}ns"
    if ns < _NS_PER_MS:
        return f"{sign}{_fraction(ns, _NS_PER_US)}µs"
    if ns < _NS_PER_S:
        return f"{sign}{_fraction(ns, _NS_PER_MS)}ms"

    hours, rest = divmod(ns, _NS_PER_HOUR)
    minutes, rest = divmod(rest, _NS_PER_MIN)
    out = sign
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    return out + f"{_fraction(rest, _NS_PER_S)}s"

