from .cuboid import Cuboid, Range
from .exceptions import (
    InfiniteRegionError,
    InvariantViolation,
    ParseError,
    RegionLimitError,
    ValidationError,
)
from .instruction import Instruction, SwitchState, parse_instruction, parse_instructions
from .region import INITIALIZATION_REGION, RegionEngine
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("infinite-region")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    'Cuboid',
    'Range',
    'Instruction',
    'SwitchState',
    'parse_instruction',
    'parse_instructions',
    'RegionEngine',
    'INITIALIZATION_REGION',
    'InfiniteRegionError',
    'InvariantViolation',
    'ParseError',
    'RegionLimitError',
    'ValidationError',
]
