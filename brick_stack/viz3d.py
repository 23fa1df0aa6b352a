# brick_stack/viz3d.py
"""
3D VISUALIZATION: Interactive Brick Stack Viewer
================================================

PURPOSE:
--------
Draw every brick as a solid box with Plotly so the stack can be rotated,
zoomed and exported to HTML. Removable bricks and load-bearing bricks are
coloured differently; hovering a brick shows its index, label and what it
rests on.
"""

import logging
import os
from typing import Iterable, Optional, Sequence

import plotly.graph_objects as go

from .model import Brick

logger = logging.getLogger(__name__)

# Corner order of a unit box, and its 12 triangles as (i, j, k) index lists
_BOX_I = [0, 0, 4, 4, 0, 0, 2, 2, 0, 0, 1, 1]
_BOX_J = [1, 2, 5, 6, 1, 5, 3, 7, 3, 7, 2, 6]
_BOX_K = [2, 3, 6, 7, 5, 4, 7, 6, 7, 4, 6, 5]


def brick_corners(brick: Brick):
    """Return (xs, ys, zs) for the 8 corners of the brick's solid box."""
    x0, x1 = min(brick.lower.x, brick.upper.x), max(brick.lower.x, brick.upper.x) + 1
    y0, y1 = min(brick.lower.y, brick.upper.y), max(brick.lower.y, brick.upper.y) + 1
    z0, z1 = brick.lower.z, brick.upper.z + 1
    xs = [x0, x1, x1, x0, x0, x1, x1, x0]
    ys = [y0, y0, y1, y1, y0, y0, y1, y1]
    zs = [z0, z0, z0, z0, z1, z1, z1, z1]
    return xs, ys, zs


def create_stack_figure(
    bricks: Sequence[Brick],
    removable: Optional[Iterable[int]] = None,
    supported_by: Optional[Sequence[Iterable[int]]] = None,
    title: str = "Brick Stack",
) -> go.Figure:
    """
    Create a Plotly figure with one Mesh3d box per brick.

    Parameters:
    -----------
    bricks : Sequence[Brick]
        Bricks to draw

    removable : Optional[Iterable[int]]
        Indices of removable bricks (blue); others are red. If None, all grey.

    supported_by : Optional[Sequence[Iterable[int]]]
        Per-brick supporter indices, shown on hover

    Returns:
    --------
    go.Figure
    """
    removable_set = set(removable) if removable is not None else None
    fig = go.Figure()

    for i, brick in enumerate(bricks):
        xs, ys, zs = brick_corners(brick)
        if removable_set is None:
            color = 'darkgray'
        elif i in removable_set:
            color = 'steelblue'
        else:
            color = 'indianred'
        hover = f"Brick {i}" + (f" ({brick.label})" if brick.label else "") + f": {brick}"
        if supported_by is not None:
            holders = sorted(supported_by[i])
            hover += f"<br>rests on: {holders if holders else 'ground'}"
        fig.add_trace(go.Mesh3d(
            x=xs, y=ys, z=zs,
            i=_BOX_I, j=_BOX_J, k=_BOX_K,
            color=color,
            opacity=0.8,
            flatshading=True,
            name=brick.label or f"Brick {i}",
            hovertext=hover,
            hoverinfo='text',
        ))

    fig.update_layout(
        title=dict(text=title, font=dict(size=16)),
        scene=dict(
            xaxis=dict(title='X'),
            yaxis=dict(title='Y'),
            zaxis=dict(title='Z'),
            aspectmode='data',
            camera=dict(eye=dict(x=1.5, y=1.5, z=1.0)),
        ),
        showlegend=False,
        margin=dict(l=0, r=0, t=40, b=0),
    )
    return fig


def plot_stack_3d(
    bricks: Sequence[Brick],
    outpath: Optional[str] = None,
    show: bool = False,
    **kwargs
) -> go.Figure:
    """Create the 3D figure and optionally save it as HTML and/or display it."""
    fig = create_stack_figure(bricks, **kwargs)
    if outpath:
        os.makedirs(os.path.dirname(outpath) if os.path.dirname(outpath) else '.', exist_ok=True)
        fig.write_html(outpath)
        logger.info("3D view saved to %s", outpath)
    if show:
        fig.show()
    return fig
