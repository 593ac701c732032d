"""Utility functions for converting between closed ranges, slices and point arrays.

Cuboids store closed integer ranges ``[lo, hi]`` while tensors are indexed with
half-open slices. These helpers keep that conversion in one place so the
off-by-one lives nowhere else.
"""

import numpy as np


def closed_to_slice(lo: int, hi: int, origin: int = 0) -> slice:
    """Convert a closed range to a half-open slice relative to an origin.

    Args:
        lo: Lowest included coordinate
        hi: Highest included coordinate
        origin: Coordinate that maps to index 0

    Returns:
        slice: ``slice(lo - origin, hi - origin + 1)``

    Examples:
        closed_to_slice(10, 12) -> slice(10, 13)
        closed_to_slice(-2, 2, origin=-5) -> slice(3, 8)
    """
    return slice(lo - origin, hi - origin + 1)


def standardize_points(points) -> np.ndarray:
    """Convert point input to an ``(N, 3)`` int64 array.

    Accepts a single point ``(x, y, z)`` or any array-like of points.

    Raises:
        ValueError: If the input cannot be shaped into 3-D integer points
    """
    arr = np.asarray(points)
    if arr.ndim == 1:
        arr = arr.reshape(1, -1)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"Points must have shape (N, 3), got {arr.shape}")
    if arr.size and not np.issubdtype(arr.dtype, np.integer):
        raise ValueError(f"Points must be integers, got dtype {arr.dtype}")
    return arr.astype(np.int64, copy=False)
