from typing import List, Tuple

from .base import BaseConnection, BaseCursor, BaseDriver

# (label, identifier) pairs in the order sweeps run them
DRIVERS: List[Tuple[str, str]] = [
    ("sqlite", "sqlite3"),
    ("apsw", "apsw"),
]


def get_available_drivers() -> List[str]:
    """Get list of registered driver labels."""
    return [label for label, _ in DRIVERS]


def get_driver_identifier(label: str) -> str:
    """Get the driver identifier registered for a label."""
    for name, identifier in DRIVERS:
        if name == label:
            return identifier
    raise ValueError(f"Unknown driver: {label}. Available: {', '.join(get_available_drivers())}")


def create_driver(label: str) -> BaseDriver:
    """
    Factory function to create a driver instance.

    The driver's library is imported on first use, so a missing optional
    library only fails for the driver that needs it.

    Parameters:
        label: str
            A registered driver label, e.g. "sqlite" or "apsw"
    """
    identifier = get_driver_identifier(label)

    if identifier == "sqlite3":
        from .sqlite3_driver import SQLite3Driver
        return SQLite3Driver()

    if identifier == "apsw":
        from .apsw_driver import APSWDriver
        return APSWDriver()

    raise ValueError(f"No implementation for driver identifier: {identifier}")


__all__ = [
    "DRIVERS",
    "BaseConnection",
    "BaseCursor",
    "BaseDriver",
    "create_driver",
    "get_available_drivers",
    "get_driver_identifier",
]
