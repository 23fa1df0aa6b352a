# brick_stack/model.py
"""
GEOMETRY PRIMITIVES: Point3, Position, Footprint and Brick
==========================================================

PURPOSE:
--------
This module defines the basic data structures for brick-stack settlement:
- Point3: An integer cell in 3D space
- Position: An integer cell on the ground plane (x, y)
- Footprint: The ground-plane bounding box a brick covers when viewed from above
- Brick: A straight run of unit cubes between two Point3 endpoints

GEOMETRIC CONTEXT:
------------------
A BRICK is a 1D segment of unit cross-section:
- It extends along at most ONE axis (x, y or z)
- A vertical brick has a 1x1 footprint but a height greater than 1
- A horizontal brick has height 1 and a footprint that is a 1xN strip
- A single cube is a brick too (lower == upper)

Everything is measured in whole cells. z is "up"; the ground is the plane
z = 0, so the lowest a brick can ever rest is z = 1.

WHY ORDER BY Z FIRST?
---------------------
Bricks fall in order of their lowest cell. Sorting points by z, then x,
then y gives every brick a deterministic place in that order, so the
settlement of a given input is always the same.
"""

from dataclasses import dataclass, replace
from functools import total_ordering
from typing import Iterator, Optional, Tuple


class BrickGeometryError(ValueError):
    """Raised when a brick is not an axis-aligned segment."""
    pass


@total_ordering
@dataclass(frozen=True)
class Point3:
    """
    A cell in 3D integer space.

    Parameters:
    -----------
    x, y : int
        Ground-plane coordinates

    z : int
        Height above the ground (the ground itself is z = 0)

    Examples:
    ---------
    >>> Point3(1, 0, 1) < Point3(0, 0, 2)   # lower z sorts first
    True
    >>> Point3(0, 5, 3) < Point3(1, 0, 3)   # same z: x decides
    True
    """
    x: int
    y: int
    z: int

    def sort_key(self) -> Tuple[int, int, int]:
        return (self.z, self.x, self.y)

    def __lt__(self, other):
        if not isinstance(other, Point3):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self):
        return f"{self.x},{self.y},{self.z}"


@dataclass(frozen=True, order=True)
class Position:
    """A cell on the ground plane."""
    x: int
    y: int

    def __str__(self):
        return f"{self.x},{self.y}"


@dataclass(frozen=True)
class Footprint:
    """
    Inclusive ground-plane bounding box of a brick.

    top_left holds the minimum x and y, bottom_right the maximum x and y.
    A footprint always covers at least one cell.
    """
    top_left: Position
    bottom_right: Position

    @property
    def width(self) -> int:
        return self.bottom_right.x - self.top_left.x + 1

    @property
    def depth(self) -> int:
        return self.bottom_right.y - self.top_left.y + 1

    @property
    def area(self) -> int:
        if self.width <= 0 or self.depth <= 0:
            return 0
        return self.width * self.depth

    def contains(self, position: Position) -> bool:
        return (self.top_left.x <= position.x <= self.bottom_right.x
                and self.top_left.y <= position.y <= self.bottom_right.y)

    def cells(self) -> Iterator[Position]:
        # Local import: the enumerator lives in the kernel
        from .kernel.footprint import footprint_cells
        return footprint_cells(self)

    def __str__(self):
        return f"[{self.top_left}..{self.bottom_right}]"


@dataclass(frozen=True)
class Brick:
    """
    A brick: a straight run of unit cubes from `lower` to `upper`.

    Endpoints may be given in either order: construction swaps them so
    that `lower` is the one with the smaller z.

    Parameters:
    -----------
    lower : Point3
        Endpoint with the smaller (or equal) z

    upper : Point3
        Endpoint with the larger (or equal) z

    label : Optional[str]
        Human-readable name (e.g. "A"). Diagnostic only.

    Notes:
    ------
    - Bricks are ordered by `lower`, then by `upper` (see Point3 ordering).
      Ordering ignores the label; equality does not, so two bricks at the
      same place with different labels are <= and >= each other but not ==
    - Bricks are frozen and hashable; the settlement engine produces lowered
      copies with dropped()
    """
    lower: Point3
    upper: Point3
    label: Optional[str] = None

    def __post_init__(self):
        if self.lower.z > self.upper.z:
            lower, upper = self.upper, self.lower
            object.__setattr__(self, 'lower', lower)
            object.__setattr__(self, 'upper', upper)

    @classmethod
    def from_endpoints(cls, a: Point3, b: Point3, label: Optional[str] = None) -> "Brick":
        """Build a brick from two endpoints given in any order."""
        return cls(lower=a, upper=b, label=label)

    @property
    def height(self) -> int:
        """Number of cells the brick spans vertically."""
        return self.upper.z - self.lower.z + 1

    @property
    def axis(self) -> Optional[str]:
        """The axis the brick extends along, or None for a single cube."""
        if self.lower.x != self.upper.x:
            return 'x'
        if self.lower.y != self.upper.y:
            return 'y'
        if self.lower.z != self.upper.z:
            return 'z'
        return None

    def validate(self) -> None:
        """
        Check that the brick extends along at most one axis.

        Raises:
            BrickGeometryError: If the endpoints differ in two or more axes
        """
        differing = sum([
            self.lower.x != self.upper.x,
            self.lower.y != self.upper.y,
            self.lower.z != self.upper.z,
        ])
        if differing > 1:
            raise BrickGeometryError(
                f"brick {self} is not axis-aligned: endpoints differ in {differing} axes"
            )

    def footprint(self) -> Footprint:
        """Project the brick onto the ground plane."""
        return Footprint(
            top_left=Position(min(self.lower.x, self.upper.x),
                              min(self.lower.y, self.upper.y)),
            bottom_right=Position(max(self.lower.x, self.upper.x),
                                  max(self.lower.y, self.upper.y)),
        )

    def cells(self) -> Iterator[Point3]:
        """Every 3D cell the brick occupies."""
        fp = self.footprint()
        for z in range(self.lower.z, self.upper.z + 1):
            for pos in fp.cells():
                yield Point3(pos.x, pos.y, z)

    def dropped(self, distance: int) -> "Brick":
        """Return a copy of this brick moved down by `distance` cells."""
        return replace(
            self,
            lower=replace(self.lower, z=self.lower.z - distance),
            upper=replace(self.upper, z=self.upper.z - distance),
        )

    def sort_key(self):
        return (self.lower.sort_key(), self.upper.sort_key())

    def __lt__(self, other):
        if not isinstance(other, Brick):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __le__(self, other):
        if not isinstance(other, Brick):
            return NotImplemented
        return self.sort_key() <= other.sort_key()

    def __gt__(self, other):
        if not isinstance(other, Brick):
            return NotImplemented
        return self.sort_key() > other.sort_key()

    def __ge__(self, other):
        if not isinstance(other, Brick):
            return NotImplemented
        return self.sort_key() >= other.sort_key()

    def __str__(self):
        if self.label is not None:
            return f"{self.lower}~{self.upper} <- {self.label}"
        return f"{self.lower}~{self.upper}"
