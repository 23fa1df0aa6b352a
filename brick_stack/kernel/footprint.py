# brick_stack/kernel/footprint.py
"""
FOOTPRINT ENUMERATOR: Ground-Plane Cells Under a Brick
======================================================

PURPOSE:
--------
The settlement engine has to look at EVERY ground-plane cell under a brick:
once to find the tallest thing it will land on, and once to publish the
brick as the new top of each of those columns.

footprint_cells() turns a Footprint (an inclusive bounding box) into that
sequence of cells. It is a plain generator function, so each call starts a
fresh pass: there is no hidden iterator state to reset.

USAGE:
------
    fp = brick.footprint()
    for pos in footprint_cells(fp):
        height, owner = surface.get(pos)

    cells = footprint_array(fp)   # (n, 2) int array, same order
"""

from typing import Iterator

import numpy as np

from ..model import Footprint, Position


def footprint_cells(footprint: Footprint) -> Iterator[Position]:
    """
    Yield every Position inside the inclusive footprint box.

    Cells are produced x-major (x outer loop, y inner loop). A footprint
    with inverted corners yields nothing.
    """
    for x in range(footprint.top_left.x, footprint.bottom_right.x + 1):
        for y in range(footprint.top_left.y, footprint.bottom_right.y + 1):
            yield Position(x, y)


def footprint_array(footprint: Footprint) -> np.ndarray:
    """
    Footprint cells as an (n, 2) integer array of [x, y] rows.

    Rows are in the same order footprint_cells() yields them.
    """
    xs = np.arange(footprint.top_left.x, footprint.bottom_right.x + 1)
    ys = np.arange(footprint.top_left.y, footprint.bottom_right.y + 1)
    if xs.size == 0 or ys.size == 0:
        return np.zeros((0, 2), dtype=int)
    gx, gy = np.meshgrid(xs, ys, indexing='ij')
    return np.column_stack([gx.ravel(), gy.ravel()]).astype(int)
