# brick_stack/viz.py
"""
VISUALIZATION: SIDE ELEVATIONS OF A BRICK STACK
===============================================

PURPOSE:
--------
Draw a stack as seen from the side, looking along the y axis (x-z plane)
or along the x axis (y-z plane). Two renderings:

- render_side_view(): plain text, one character per cell, the classic
  puzzle diagram:

       x
      012
      .G. 9
      .G. 8
      ... 7
      FFF 6
      ..E 5
      D.. 4
      CCC 3
      BBB 2
      .A. 1
      --- 0

  A cell shows the brick's label (first character) when exactly one brick
  is visible there, '?' when several are, '.' when none.

- plot_side_view(): matplotlib figure, removable bricks and load-bearing
  bricks in different colours, saved to a file.
"""

import logging
import os
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

import matplotlib.pyplot as plt
from matplotlib.patches import Patch, Rectangle

from .model import Brick

logger = logging.getLogger(__name__)

COLORS = {
    'removable': '#3498DB',        # Sky blue
    'load_bearing': '#E74C3C',     # Coral red
    'unknown': '#95A5A6',          # Gray
    'edge': '#2C3E50',             # Dark blue-gray
    'ground': '#8B7355',           # Earth brown
    'background': '#FAFAFA',       # Off-white
}


def _horizontal_span(brick: Brick, axis: str) -> Tuple[int, int]:
    if axis == 'x':
        a, b = brick.lower.x, brick.upper.x
    elif axis == 'y':
        a, b = brick.lower.y, brick.upper.y
    else:
        raise ValueError(f"axis must be 'x' or 'y', got {axis!r}")
    return min(a, b), max(a, b)


def _cell_char(brick: Brick) -> str:
    return brick.label[0] if brick.label else '#'


def render_side_view(bricks: Sequence[Brick], axis: str = 'x') -> str:
    """
    Render the stack as text, viewed so that `axis` runs left to right.

    Rows run from the highest z down to the ground row (z = 0).
    """
    if not bricks:
        return ""
    spans = [_horizontal_span(b, axis) for b in bricks]
    h_min = min(lo for lo, _ in spans)
    h_max = max(hi for _, hi in spans)
    z_max = max(b.upper.z for b in bricks)
    width = h_max - h_min + 1

    visible: Dict[Tuple[int, int], List[int]] = {}
    for i, (brick, (lo, hi)) in enumerate(zip(bricks, spans)):
        for h in range(lo, hi + 1):
            for z in range(brick.lower.z, brick.upper.z + 1):
                visible.setdefault((h, z), []).append(i)

    lines = [axis.center(width).rstrip(),
             ''.join(str(abs(h) % 10) for h in range(h_min, h_max + 1))]
    for z in range(z_max, 0, -1):
        row = []
        for h in range(h_min, h_max + 1):
            here = visible.get((h, z), [])
            if not here:
                row.append('.')
            elif len(here) == 1:
                row.append(_cell_char(bricks[here[0]]))
            else:
                row.append('?')
        lines.append(f"{''.join(row)} {z}")
    lines.append('-' * width + ' 0')
    return '\n'.join(lines)


def plot_side_view(
    bricks: Sequence[Brick],
    outpath: str,
    axis: str = 'x',
    removable: Optional[Iterable[int]] = None,
    title: str = "Settled Brick Stack",
) -> None:
    """
    Save a side elevation of the stack to `outpath`.

    Parameters:
    -----------
    bricks : Sequence[Brick]
        Bricks to draw (usually settled)

    outpath : str
        Image file to write (format from the extension)

    axis : str
        'x' to look along y, 'y' to look along x

    removable : Optional[Iterable[int]]
        Indices of removable bricks; all others are drawn as load-bearing.
        If None, every brick is drawn in a neutral colour.
    """
    removable_set: Optional[Set[int]] = set(removable) if removable is not None else None
    fig, ax = plt.subplots(figsize=(6, 8))
    fig.patch.set_facecolor(COLORS['background'])

    h_lo, h_hi, z_hi = 0, 1, 1
    for i, brick in enumerate(bricks):
        lo, hi = _horizontal_span(brick, axis)
        if removable_set is None:
            color = COLORS['unknown']
        elif i in removable_set:
            color = COLORS['removable']
        else:
            color = COLORS['load_bearing']
        ax.add_patch(Rectangle(
            (lo, brick.lower.z), hi - lo + 1, brick.height,
            facecolor=color, edgecolor=COLORS['edge'], alpha=0.6, linewidth=1.0,
        ))
        label = brick.label if brick.label is not None else str(i)
        ax.text(lo + (hi - lo + 1) / 2, brick.lower.z + brick.height / 2, label,
                ha='center', va='center', fontsize=8, color=COLORS['edge'])
        h_lo, h_hi, z_hi = min(h_lo, lo), max(h_hi, hi + 1), max(z_hi, brick.upper.z + 1)

    # Ground
    ax.axhline(1, color=COLORS['ground'], linewidth=3)
    ax.set_xlim(h_lo - 0.5, h_hi + 0.5)
    ax.set_ylim(0.5, z_hi + 0.5)
    ax.set_aspect('equal')
    ax.set_xlabel(axis, fontsize=12, fontweight='bold')
    ax.set_ylabel('z', fontsize=12, fontweight='bold')
    ax.set_title(title, fontsize=14, fontweight='bold', pad=20)
    ax.grid(True, alpha=0.3, linestyle='--')

    if removable_set is not None:
        ax.legend(handles=[
            Patch(facecolor=COLORS['removable'], alpha=0.6, label='Removable'),
            Patch(facecolor=COLORS['load_bearing'], alpha=0.6, label='Load-bearing'),
        ], loc='upper right', fontsize=9, framealpha=0.9)

    os.makedirs(os.path.dirname(outpath) if os.path.dirname(outpath) else '.', exist_ok=True)
    plt.tight_layout()
    plt.savefig(outpath, dpi=150, bbox_inches='tight')
    plt.close(fig)

    logger.info("side view saved to %s", outpath)
