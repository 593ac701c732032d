"""Brute-force voxel reference used to check the region engine.

Everything here works cube by cube on numpy boolean grids and deliberately
avoids the intersection and subtraction code under test.
"""

import numpy as np
from typing import Iterable, Optional

from infinite_region import Cuboid, Instruction, Range, SwitchState


def window_slices(cuboid: Cuboid, window: Cuboid) -> Optional[tuple[slice, ...]]:
    """Slices of ``cuboid`` inside a grid covering ``window``, or None if outside."""
    slices = []
    for r, w in zip(cuboid.ranges, window.ranges):
        lo, hi = max(r.lo, w.lo), min(r.hi, w.hi)
        if lo > hi:
            return None
        slices.append(slice(lo - w.lo, hi - w.lo + 1))
    return tuple(slices)


def voxel_grid(instructions: Iterable[Instruction], window: Cuboid) -> np.ndarray:
    """Replay instructions on a dense boolean grid covering ``window``."""
    grid = np.zeros(window.shape, dtype=bool)
    for instruction in instructions:
        sl = window_slices(instruction.cuboid, window)
        if sl is not None:
            grid[sl] = instruction.switch_state is SwitchState.ON
    return grid


def coverage_count(cuboids: Iterable[Cuboid], window: Cuboid) -> np.ndarray:
    """How many of ``cuboids`` cover each cube of ``window``."""
    counts = np.zeros(window.shape, dtype=np.int64)
    for c in cuboids:
        sl = window_slices(c, window)
        if sl is not None:
            counts[sl] += 1
    return counts


def random_cuboid(rng: np.random.Generator, low: int = -6, high: int = 6) -> Cuboid:
    """Random cuboid with every bound in ``[low, high]``."""
    ranges = []
    for _ in range(3):
        a, b = sorted(int(v) for v in rng.integers(low, high + 1, size=2))
        ranges.append(Range(a, b))
    return Cuboid(*ranges)


def random_instructions(rng: np.random.Generator, count: int, low: int = -6, high: int = 6) -> list[Instruction]:
    states = [SwitchState.ON, SwitchState.OFF]
    return [Instruction(states[int(rng.integers(0, 2))], random_cuboid(rng, low, high))
            for _ in range(count)]


# Padded window around every random cuboid
REFERENCE_WINDOW = Cuboid(Range(-8, 8), Range(-8, 8), Range(-8, 8))
