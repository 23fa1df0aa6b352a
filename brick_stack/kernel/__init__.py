# brick_stack/kernel - Settlement core
"""
KERNEL: FOOTPRINTS, SURFACE AND SETTLEMENT
==========================================

The three pieces that turn suspended bricks into a settled stack:
- footprint.py   Enumerate the ground-plane cells under a brick
- surface.py     Sparse height map with a monotonic-height invariant
- settle.py      Bottom-up settlement and the online removable set

Nothing here touches files, plots or the command line.
"""

from .footprint import footprint_cells, footprint_array
from .surface import Surface, SettlementError, SurfaceInvariantError
from .settle import (
    EmptyFootprintError,
    SettleResult,
    SupportScan,
    count_removable,
    merge_support,
    scan_supports,
    settle_bricks,
)

__all__ = [
    'footprint_cells',
    'footprint_array',
    'Surface',
    'SettlementError',
    'SurfaceInvariantError',
    'EmptyFootprintError',
    'SettleResult',
    'SupportScan',
    'count_removable',
    'merge_support',
    'scan_supports',
    'settle_bricks',
]
