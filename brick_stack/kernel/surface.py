# brick_stack/kernel/surface.py
"""Sparse height map of settled bricks, with monotonic-height enforcement."""

from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np

from ..model import Footprint, Position
from .footprint import footprint_cells


class SettlementError(RuntimeError):
    """Raised when a settlement run cannot continue."""
    pass


class SurfaceInvariantError(SettlementError):
    """Raised when a column would be lowered (a brick settling into occupied space)."""
    pass


class Surface:
    """
    Top-of-stack height for every ground-plane column touched so far.

    Each entry maps a Position to (height, owner): the highest settled z in
    that column and the index of the brick that put it there. Columns with
    no entry are bare ground at `ground_height` with no owner.

    Heights in a column only ever go up. set_height() refuses to write a
    height that is not strictly above the existing one.

    Parameters:
    -----------
    ground_height : int
        Height reported for untouched columns (default 0)

    record_history : bool
        Keep every height ever written per column in `history`
    """

    def __init__(self, ground_height: int = 0, record_history: bool = False):
        self.ground_height = ground_height
        self.heightmap: Dict[Position, Tuple[int, int]] = {}
        self.history: Optional[Dict[Position, List[int]]] = {} if record_history else None

    def get(self, pos: Position) -> Tuple[int, Optional[int]]:
        """Return (height, owner) for a column; (ground_height, None) if untouched."""
        entry = self.heightmap.get(pos)
        if entry is None:
            return self.ground_height, None
        return entry

    def set_height(self, footprint: Footprint, height: int, owner: int) -> None:
        """
        Publish `owner` as the top of every column in `footprint` at `height`.

        The whole footprint is checked before anything is written, so a
        failed call leaves the surface untouched.

        Raises:
            SurfaceInvariantError: If any column is already at or above `height`
        """
        cells = list(footprint_cells(footprint))
        for pos in cells:
            entry = self.heightmap.get(pos)
            if entry is not None and entry[0] >= height:
                existing_height, existing_owner = entry
                raise SurfaceInvariantError(
                    f"brick {owner} with top at z={height} fell too far at {pos}: "
                    f"column already reaches z={existing_height} (brick {existing_owner})"
                )
        for pos in cells:
            self.heightmap[pos] = (height, owner)
            if self.history is not None:
                self.history.setdefault(pos, []).append(height)

    def columns(self) -> Iterator[Tuple[Position, int, int]]:
        """Yield (position, height, owner) for every touched column, sorted by position."""
        for pos in sorted(self.heightmap):
            height, owner = self.heightmap[pos]
            yield pos, height, owner

    def max_height(self) -> int:
        if not self.heightmap:
            return self.ground_height
        return max(h for h, _ in self.heightmap.values())

    def to_array(self) -> Tuple[np.ndarray, np.ndarray, Position]:
        """
        Dense view of the surface.

        Returns:
            heights: int array indexed [x - origin.x, y - origin.y]
            owners: int array of the same shape, -1 where no brick owns the column
            origin: Position of element [0, 0]
        """
        if not self.heightmap:
            return (np.full((0, 0), self.ground_height, dtype=int),
                    np.full((0, 0), -1, dtype=int),
                    Position(0, 0))
        xs = [p.x for p in self.heightmap]
        ys = [p.y for p in self.heightmap]
        origin = Position(min(xs), min(ys))
        shape = (max(xs) - origin.x + 1, max(ys) - origin.y + 1)
        heights = np.full(shape, self.ground_height, dtype=int)
        owners = np.full(shape, -1, dtype=int)
        for pos, (h, owner) in self.heightmap.items():
            heights[pos.x - origin.x, pos.y - origin.y] = h
            owners[pos.x - origin.x, pos.y - origin.y] = owner
        return heights, owners, origin

    def __len__(self):
        return len(self.heightmap)

    def __contains__(self, pos):
        return pos in self.heightmap
