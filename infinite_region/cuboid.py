import itertools
from dataclasses import dataclass
from typing import Optional

from infinite_region.exceptions import InvariantViolation
from infinite_region.utils import closed_to_slice

AXES = ('x', 'y', 'z')


@dataclass(frozen=True)
class Range:
    """A closed integer interval ``[lo, hi]`` on one axis."""

    lo: int
    hi: int

    def __post_init__(self):
        if self.lo > self.hi:
            raise InvariantViolation(f"Range lower bound {self.lo} exceeds upper bound {self.hi}")

    @property
    def length(self) -> int:
        return self.hi - self.lo + 1

    def overlaps(self, other: "Range") -> bool:
        return max(self.lo, other.lo) <= min(self.hi, other.hi)

    def intersection(self, other: "Range") -> Optional["Range"]:
        if not self.overlaps(other):
            return None
        return Range(max(self.lo, other.lo), min(self.hi, other.hi))

    def contains(self, other: "Range") -> bool:
        return self.lo <= other.lo and other.hi <= self.hi

    def split(self, inner: "Range") -> tuple[Optional["Range"], "Range", Optional["Range"]]:
        """Partition this range around an inner range it contains.

        Returns:
            ``(below, inner, above)`` where ``below``/``above`` are None when
            ``inner`` touches the corresponding end of this range.
        """
        below = Range(self.lo, inner.lo - 1) if self.lo < inner.lo else None
        above = Range(inner.hi + 1, self.hi) if inner.hi < self.hi else None
        return below, inner, above

    def to_slice(self, origin: int = 0) -> slice:
        return closed_to_slice(self.lo, self.hi, origin)

    def __repr__(self) -> str:
        return f"{self.lo}..{self.hi}"


@dataclass(frozen=True)
class Cuboid:
    """An axis-aligned box of closed integer ranges on x, y and z.

    Cuboids are immutable values. Every operation returns new cuboids, so a
    fragment produced by subtraction is never aliased with its source.
    """

    x: Range
    y: Range
    z: Range

    @classmethod
    def from_bounds(cls, x: tuple[int, int], y: tuple[int, int], z: tuple[int, int]) -> "Cuboid":
        """Build a cuboid from three ``(lo, hi)`` pairs."""
        return cls(Range(*x), Range(*y), Range(*z))

    @property
    def ranges(self) -> tuple[Range, Range, Range]:
        return (self.x, self.y, self.z)

    @property
    def shape(self) -> tuple[int, int, int]:
        return (self.x.length, self.y.length, self.z.length)

    def volume(self) -> int:
        return self.x.length * self.y.length * self.z.length

    def overlaps(self, other: "Cuboid") -> bool:
        return self.x.overlaps(other.x) and self.y.overlaps(other.y) and self.z.overlaps(other.z)

    def intersection(self, other: "Cuboid") -> Optional["Cuboid"]:
        """Return the cuboid shared by both operands, or None if they do not overlap."""
        if not self.overlaps(other):
            return None
        return Cuboid(self.x.intersection(other.x),
                      self.y.intersection(other.y),
                      self.z.intersection(other.z))

    def contains(self, other: "Cuboid") -> bool:
        return all(a.contains(b) for a, b in zip(self.ranges, other.ranges))

    def to_slices(self, origin: tuple[int, int, int] = (0, 0, 0)) -> tuple[slice, slice, slice]:
        """Convert to half-open slices relative to ``origin`` for tensor indexing."""
        return tuple(r.to_slice(o) for r, o in zip(self.ranges, origin))

    def subtract(self, other: "Cuboid") -> list["Cuboid"]:
        """Remove ``other`` from this cuboid.

        Each axis is split into the parts below, inside and above the
        overlap. The 3x3x3 product of those parts tiles this cuboid exactly;
        every cell except the all-inside one (the overlap itself) is kept.
        Parts that would be empty are never generated, so at most 26
        fragments come back.

        Returns:
            Pairwise disjoint cuboids whose union is ``self \\ other``. If the
            operands do not overlap, a single-element list holding ``self``.
        """
        overlap = self.intersection(other)
        if overlap is None:
            return [self]

        parts = [own.split(inner) for own, inner in zip(self.ranges, overlap.ranges)]
        fragments = []
        for cell in itertools.product(range(3), repeat=3):
            if cell == (1, 1, 1):
                continue
            ranges = [axis_parts[i] for axis_parts, i in zip(parts, cell)]
            if any(r is None for r in ranges):
                continue
            fragments.append(Cuboid(*ranges))
        return fragments

    def __sub__(self, other: "Cuboid") -> list["Cuboid"]:
        return self.subtract(other)

    def __and__(self, other: "Cuboid") -> Optional["Cuboid"]:
        return self.intersection(other)

    def __repr__(self) -> str:
        return f"Cuboid(x={self.x!r},y={self.y!r},z={self.z!r})"


def bounding_cuboid(cuboids) -> Optional[Cuboid]:
    """Smallest cuboid containing every cuboid in ``cuboids``, or None if empty."""
    cuboids = list(cuboids)
    if not cuboids:
        return None
    return Cuboid(*(
        Range(min(c.ranges[axis].lo for c in cuboids), max(c.ranges[axis].hi for c in cuboids))
        for axis in range(len(AXES))
    ))
