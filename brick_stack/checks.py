# brick_stack/checks.py
"""Post-settlement checks: no overlaps, every brick resting on something, monotonic columns."""

from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .kernel.footprint import footprint_array
from .kernel.surface import Surface
from .model import Brick, Point3


def occupancy_grid(bricks: Sequence[Brick]) -> Tuple[np.ndarray, Point3]:
    """
    Count how many bricks occupy each cell.

    Returns:
        grid: int array indexed [x - origin.x, y - origin.y, z - origin.z]
        origin: Point3 of element [0, 0, 0]
    """
    if not bricks:
        return np.zeros((0, 0, 0), dtype=int), Point3(0, 0, 0)
    lo = np.array([[min(b.lower.x, b.upper.x), min(b.lower.y, b.upper.y), b.lower.z] for b in bricks])
    hi = np.array([[max(b.lower.x, b.upper.x), max(b.lower.y, b.upper.y), b.upper.z] for b in bricks])
    origin = lo.min(axis=0)
    grid = np.zeros(tuple(hi.max(axis=0) - origin + 1), dtype=int)
    for (x0, y0, z0), (x1, y1, z1) in zip(lo - origin, hi - origin):
        grid[x0:x1 + 1, y0:y1 + 1, z0:z1 + 1] += 1
    return grid, Point3(*(int(v) for v in origin))


def check_no_overlap(bricks: Sequence[Brick]) -> List[Dict[str, Any]]:
    """
    Find cells claimed by more than one brick.

    Returns:
        List of {'cell': Point3, 'bricks': [indices]}, empty if none overlap
    """
    grid, origin = occupancy_grid(bricks)
    if not np.any(grid > 1):
        return []
    owners: Dict[Point3, List[int]] = {}
    for i, brick in enumerate(bricks):
        for cell in brick.cells():
            owners.setdefault(cell, []).append(i)
    return [
        {'cell': cell, 'bricks': idx}
        for cell, idx in sorted(owners.items())
        if len(idx) > 1
    ]


def check_ground_contact(bricks: Sequence[Brick], ground_height: int = 0) -> List[int]:
    """
    Find bricks that float.

    A brick rests properly if its lower z is ground_height + 1, or if some
    other brick's top sits directly beneath one of its footprint cells.

    Returns:
        Sorted indices of floating bricks
    """
    cells = [footprint_array(brick.footprint()) for brick in bricks]
    tops: Dict[Tuple[int, int, int], List[int]] = {}
    for i, brick in enumerate(bricks):
        for x, y in cells[i].tolist():
            tops.setdefault((x, y, brick.upper.z), []).append(i)

    floating = []
    for i, brick in enumerate(bricks):
        if brick.lower.z == ground_height + 1:
            continue
        below = brick.lower.z - 1
        if not any(
            j != i
            for x, y in cells[i].tolist()
            for j in tops.get((x, y, below), [])
        ):
            floating.append(i)
    return floating


def check_monotonic_history(surface: Surface) -> List[Dict[str, Any]]:
    """
    Find columns whose recorded heights ever went down or stayed level.

    Needs a surface built with record_history=True.
    """
    if surface.history is None:
        raise ValueError("surface was built without record_history=True")
    violations = []
    for pos, heights in sorted(surface.history.items()):
        steps = np.diff(np.asarray(heights))
        if np.any(steps <= 0):
            violations.append({'position': pos, 'heights': list(heights)})
    return violations


def check_settled(bricks: Sequence[Brick], ground_height: int = 0,
                  surface: Optional[Surface] = None) -> Dict[str, Any]:
    """
    Run every check on a settled stack.

    Returns:
        Dict with 'overlaps', 'floating', 'non_monotonic' (only if a surface
        with history is given) and an overall 'ok' flag
    """
    report: Dict[str, Any] = {
        'overlaps': check_no_overlap(bricks),
        'floating': check_ground_contact(bricks, ground_height),
        'non_monotonic': [],
    }
    if surface is not None and surface.history is not None:
        report['non_monotonic'] = check_monotonic_history(surface)
    report['ok'] = not (report['overlaps'] or report['floating'] or report['non_monotonic'])
    return report
