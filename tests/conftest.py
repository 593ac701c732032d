"""Shared test fixtures and configuration for infinite region tests."""

import pytest
import numpy as np
from infinite_region import Cuboid, RegionEngine, parse_instruction


SAMPLE_LINES = [
    "on x=10..12,y=10..12,z=10..12",
    "on x=11..13,y=11..13,z=11..13",
    "off x=9..11,y=9..11,z=9..11",
    "on x=10..10,y=10..10,z=10..10",
]


@pytest.fixture
def rng():
    """Ensure reproducible random results in tests."""
    return np.random.default_rng(42)


@pytest.fixture
def sample_lines():
    """The four-line reboot sample."""
    return list(SAMPLE_LINES)


@pytest.fixture
def sample_instructions(sample_lines):
    return [parse_instruction(line) for line in sample_lines]


@pytest.fixture
def engine():
    """Empty region that checks its invariants after every instruction."""
    return RegionEngine(validate=True)


@pytest.fixture
def small_cube():
    """3x3x3 cube at the origin corner."""
    return Cuboid.from_bounds((0, 2), (0, 2), (0, 2))
