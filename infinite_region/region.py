import logging
from typing import Iterable, Optional

import numpy as np
import torch

from infinite_region.cuboid import Cuboid, Range, bounding_cuboid
from infinite_region.exceptions import (
    InvariantViolation,
    RegionLimitError,
    ValidationError,
)
from infinite_region.instruction import Instruction, SwitchState
from infinite_region.utils import standardize_points

# CONSTANTS
DEFAULT_VALIDATE = False
DEFAULT_MAX_CUBOIDS = None
DEFAULT_MAX_RASTER_VOXELS = 256 ** 3
INITIALIZATION_REGION = Cuboid(Range(-50, 50), Range(-50, 50), Range(-50, 50))
_INT64 = Range(int(np.iinfo(np.int64).min), int(np.iinfo(np.int64).max))
INT64_REGION = Cuboid(_INT64, _INT64, _INT64)

# ERROR MESSAGES
LIMIT_ERROR_MSG = "Applying {instruction} would grow the region to {actual} cuboids (limit {limit})"
OVERLAP_ERROR_MSG = "Stored cuboids {first} and {second} overlap"
CONSERVATION_ERROR_MSG = "Volume not conserved after {instruction}: expected {expected}, got {actual}"

# Set up logging
logger = logging.getLogger(__name__)


def _validate_flag(validate) -> None:
    if not isinstance(validate, bool):
        raise ValidationError(f"validate must be a bool, got {type(validate)}")

def _validate_max_cuboids(max_cuboids: Optional[int]) -> None:
    if max_cuboids is None:
        return
    if not isinstance(max_cuboids, int) or isinstance(max_cuboids, bool) or max_cuboids <= 0:
        raise ValidationError(f"max_cuboids must be a positive integer or None, got {max_cuboids}")

def _validate_instruction(instruction) -> None:
    if not isinstance(instruction, Instruction):
        raise ValidationError(f"Expected an Instruction, got {type(instruction)}")

def _validate_window(window, max_voxels: Optional[int]) -> None:
    if not isinstance(window, Cuboid):
        raise ValidationError(f"Window must be a Cuboid, got {type(window)}")
    if max_voxels is not None and window.volume() > max_voxels:
        raise ValidationError(f"Window {window} has {window.volume()} voxels, more than the limit of {max_voxels}")


def _check_disjoint(cuboids: list[Cuboid]) -> None:
    for i, first in enumerate(cuboids):
        for second in cuboids[i + 1:]:
            if first.overlaps(second):
                raise InvariantViolation(OVERLAP_ERROR_MSG.format(first=first, second=second))


class RegionEngine:
    """The set of "on" cubes in an infinite integer lattice.

    The region is stored as a sequence of pairwise disjoint cuboids, which
    makes the total volume a plain sum. Instructions are applied in order:
    turning a cuboid on adds only the parts of it that are not already on,
    turning a cuboid off carves it out of every stored cuboid.

    The engine is single-writer. ``apply`` builds the next sequence on the
    side and swaps it in at the end, so a failure leaves the previous state
    in place.
    """

    def __init__(self,
                 validate: bool = DEFAULT_VALIDATE,
                 max_cuboids: Optional[int] = DEFAULT_MAX_CUBOIDS):
        """Initialize an empty region.

        Args:
            validate: Check disjointness and volume conservation after every
                      instruction. Quadratic in the number of stored cuboids,
                      intended for tests and debugging.
            max_cuboids: Ceiling on the number of stored cuboids. An instruction
                         that would exceed it raises RegionLimitError and is not
                         applied. None for no ceiling.
        """
        _validate_flag(validate)
        _validate_max_cuboids(max_cuboids)
        self._validate = validate
        self._max_cuboids = max_cuboids
        self._cuboids: list[Cuboid] = []

    @property
    def cuboids(self) -> tuple[Cuboid, ...]:
        return tuple(self._cuboids)

    @property
    def validate(self) -> bool:
        return self._validate

    @property
    def max_cuboids(self) -> Optional[int]:
        return self._max_cuboids

    def __len__(self) -> int:
        return len(self._cuboids)

    def apply(self, instruction: Instruction) -> None:
        """Apply one instruction to the region.

        Raises:
            ValidationError: If ``instruction`` is not an Instruction
            RegionLimitError: If the result would exceed ``max_cuboids``
            InvariantViolation: If validation is enabled and a check fails
        """
        _validate_instruction(instruction)
        cuboid = instruction.cuboid
        if instruction.switch_state is SwitchState.ON:
            updated = self._union(cuboid)
        else:
            updated = self._subtract(cuboid)

        if self._max_cuboids is not None and len(updated) > self._max_cuboids:
            raise RegionLimitError(LIMIT_ERROR_MSG.format(
                instruction=instruction, actual=len(updated), limit=self._max_cuboids))

        if self._validate:
            self._verify_transition(instruction, updated)

        logger.debug(f"Applied {instruction}: {len(self._cuboids)} -> {len(updated)} cuboids")
        self._cuboids = updated

    def run(self, instructions: Iterable[Instruction]) -> "RegionEngine":
        """Apply instructions in order and return self."""
        for instruction in instructions:
            self.apply(instruction)
        return self

    def _union(self, cuboid: Cuboid) -> list[Cuboid]:
        # Carve away everything already on; what remains is new
        candidates = [cuboid]
        for existing in self._cuboids:
            if not candidates:
                break
            candidates = [fragment
                          for candidate in candidates
                          for fragment in candidate.subtract(existing)]
        logger.debug(f"Turning on {cuboid} adds {len(candidates)} fragments")
        return self._cuboids + candidates

    def _subtract(self, cuboid: Cuboid) -> list[Cuboid]:
        return [fragment
                for existing in self._cuboids
                for fragment in existing.subtract(cuboid)]

    def total_volume(self) -> int:
        """Number of cubes that are on."""
        return sum(c.volume() for c in self._cuboids)

    def volume_within(self, region: Cuboid) -> int:
        """Number of cubes that are on inside ``region``."""
        total = 0
        for c in self._cuboids:
            overlap = c.intersection(region)
            if overlap is not None:
                total += overlap.volume()
        return total

    def initialization_volume(self) -> int:
        """Number of cubes that are on inside the initialization region ``[-50, 50]^3``."""
        return self.volume_within(INITIALIZATION_REGION)

    def bounds(self) -> Optional[Cuboid]:
        """Bounding cuboid of the region, or None if nothing is on."""
        return bounding_cuboid(self._cuboids)

    def contains(self, points) -> np.ndarray:
        """Test which points are on.

        Args:
            points: A single ``(x, y, z)`` point or an ``(N, 3)`` integer
                    array-like. Query coordinates must fit in int64; the
                    stored region may extend beyond that range.

        Returns:
            np.ndarray: Boolean array of shape ``(N,)``
        """
        pts = standardize_points(points)
        # Points are int64, so clipping stored bounds to that range keeps membership exact
        reachable = [c.intersection(INT64_REGION) for c in self._cuboids]
        reachable = [c for c in reachable if c is not None]
        if not reachable:
            return np.zeros(len(pts), dtype=bool)
        lo = np.array([[r.lo for r in c.ranges] for c in reachable], dtype=np.int64)
        hi = np.array([[r.hi for r in c.ranges] for c in reachable], dtype=np.int64)
        inside = (pts[:, None, :] >= lo[None]) & (pts[:, None, :] <= hi[None])
        return inside.all(axis=-1).any(axis=-1)

    def rasterize(self, window: Cuboid, max_voxels: Optional[int] = DEFAULT_MAX_RASTER_VOXELS) -> torch.Tensor:
        """Materialize the region inside a finite window as a dense grid.

        Args:
            window: Region of the lattice to materialize
            max_voxels: Refuse windows larger than this. None for no limit.

        Returns:
            torch.Tensor: Boolean tensor of shape ``window.shape`` where
            element ``[i, j, k]`` is the cube at
            ``(window.x.lo + i, window.y.lo + j, window.z.lo + k)``
        """
        _validate_window(window, max_voxels)
        origin = (window.x.lo, window.y.lo, window.z.lo)
        grid = torch.zeros(window.shape, dtype=torch.bool)
        for c in self._cuboids:
            clipped = c.intersection(window)
            if clipped is None:
                continue
            grid[clipped.to_slices(origin)] = True
        return grid

    def check_invariants(self) -> None:
        """Raise InvariantViolation if any two stored cuboids overlap."""
        _check_disjoint(self._cuboids)

    def _verify_transition(self, instruction: Instruction, updated: list[Cuboid]) -> None:
        cuboid = instruction.cuboid
        before = self.total_volume()
        covered = self.volume_within(cuboid)
        if instruction.switch_state is SwitchState.ON:
            expected = before + cuboid.volume() - covered
        else:
            expected = before - covered
        actual = sum(c.volume() for c in updated)
        if actual != expected:
            raise InvariantViolation(CONSERVATION_ERROR_MSG.format(
                instruction=instruction, expected=expected, actual=actual))
        _check_disjoint(updated)

    def __repr__(self) -> str:
        return f"RegionEngine(cuboids={len(self._cuboids)}, volume={self.total_volume()})"
