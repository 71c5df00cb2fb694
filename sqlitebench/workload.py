"""
Payload generation for benchmark workloads.
"""

import numpy as np


def generate_payload(size: int) -> bytes:
    """
    Generate a zero-filled binary payload.

    Parameters:
        size: int
            Payload length in bytes, >= 0

    Returns:
        bytes: Exactly ``size`` bytes
    """
    if size < 0:
        raise ValueError(f"Payload size must be >= 0, got {size}")
    return np.zeros(size, dtype=np.uint8).tobytes()
