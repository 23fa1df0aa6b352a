# brick_stack - Brick-stack settlement and support-graph analysis
"""
BRICK-STACK: Settling Bricks and Finding What Holds Them Up
===========================================================

This package provides:
- Geometry primitives for axis-aligned bricks (model.py)
- Bottom-up settlement of suspended bricks onto a height map (kernel/)
- Support-graph analysis: removable bricks and chain reactions (support.py)
- Post-settlement invariant checks (checks.py)
- Side-view and 3D visualization (viz.py, viz3d.py)

ARCHITECTURE:
-------------
    model.py        Point3, Position, Footprint, Brick
    parse.py        "x1,y1,z1~x2,y2,z2 <- label" snapshot parser
    config.py       SettleConfig and logging setup
    kernel/         Footprint enumeration, Surface, settlement engine
    support.py      SupportGraph built from a settlement run
    checks.py       No-overlap, ground-contact, monotonic-surface checks
    viz.py          Text and matplotlib side elevations
    viz3d.py        Interactive Plotly view

USAGE:
------
    from brick_stack import parse_bricks, settle_bricks, SupportGraph

    bricks = parse_bricks(open("snapshot.txt").read())
    result = settle_bricks(bricks)
    print(len(result.removable))

    graph = SupportGraph.from_result(result)
    print(graph.total_chain_reaction())
"""

from .model import Point3, Position, Footprint, Brick, BrickGeometryError
from .parse import BrickParseError, parse_brick, parse_bricks, load_bricks
from .config import SettleConfig, CONFIG, configure_logging
from .kernel import (
    Surface,
    SettleResult,
    SettlementError,
    SurfaceInvariantError,
    EmptyFootprintError,
    settle_bricks,
    count_removable,
)
from .support import SupportGraph

__version__ = "0.1.0"
