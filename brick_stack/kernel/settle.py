# brick_stack/kernel/settle.py
"""
SETTLEMENT ENGINE: Dropping Bricks Onto the Stack
=================================================

PURPOSE:
--------
Given bricks hanging in the air, let each one fall straight down until it
rests on the ground or on another brick, and record what it landed on.

ALGORITHM:
----------
1. Pair every brick with its original index and sort by Brick ordering
   (lowest z first). A brick can only land on bricks that started below it,
   so processing bottom-up means everything underneath is already settled.

2. Start with every brick marked "removable" and an empty Surface.

3. For each brick, in order:
   a. Sample the Surface under its footprint and reduce the samples to
      (max_height, owners): the tallest column and EVERY brick that tops
      a column at exactly that height. A brick resting on two equally tall
      neighbours is supported by both.
   b. Its new lower z is max_height + 1. Shift lower and upper z by the
      same distance so the brick keeps its height.
   c. Publish the brick as the new top of every footprint column.
   d. If it has exactly one supporter, that supporter is load-bearing and
      leaves the removable set for good. Ground (no owners) or two or more
      supporters disqualify nobody.

WHY IS THE ONLINE REMOVABLE SET EXACT?
--------------------------------------
A settled brick never moves again, so once brick S is found to be the only
support of brick B, that stays true for the final configuration. Being
multiply supported by one brick does not protect a supporter that is some
other brick's sole support; that other brick disqualifies it on its own turn.

ERRORS:
-------
- SurfaceInvariantError: a brick would settle into an occupied column
  (overlapping input bricks, or a bug in the ordering)
- EmptyFootprintError: a brick covers no ground-plane cell
Both are fatal for the run: there is no meaningful partial result.
"""

import logging
from dataclasses import dataclass, field
from functools import reduce
from typing import FrozenSet, List, Optional, Sequence, Set, Tuple

from ..config import CONFIG, SettleConfig
from ..model import Brick, Footprint
from .footprint import footprint_cells
from .surface import SettlementError, Surface, SurfaceInvariantError

logger = logging.getLogger(__name__)


class EmptyFootprintError(SettlementError):
    """Raised when a brick's ground-plane projection has no cells."""
    pass


@dataclass(frozen=True)
class SupportScan:
    """
    Running result of sampling the surface under a footprint.

    max_height : int
        Tallest column seen so far

    owners : FrozenSet[int]
        Indices of the bricks topping columns at exactly max_height.
        Bare ground contributes a height but no owner.
    """
    max_height: int
    owners: FrozenSet[int] = frozenset()


def merge_support(scan: Optional[SupportScan], height: int, owner: Optional[int]) -> SupportScan:
    """
    Fold one (height, owner) surface sample into a SupportScan.

    A taller sample replaces the owners; an equal one joins them; a lower
    one is ignored.
    """
    sampled = frozenset() if owner is None else frozenset([owner])
    if scan is None or scan.max_height < height:
        return SupportScan(height, sampled)
    if scan.max_height == height:
        return SupportScan(height, scan.owners | sampled)
    return scan


def scan_supports(surface: Surface, footprint: Footprint) -> Optional[SupportScan]:
    """Reduce the surface samples under `footprint`; None if the footprint is empty."""
    return reduce(
        lambda scan, pos: merge_support(scan, *surface.get(pos)),
        footprint_cells(footprint),
        None,
    )


@dataclass
class SettleResult:
    """
    Outcome of a settlement run.

    All per-brick lists are indexed by the brick's ORIGINAL index in the
    input sequence, so index i always means the same brick.

    Attributes:
    -----------
    bricks : List[Brick]
        Settled copies of the input bricks

    order : List[int]
        Original indices in the order they were settled

    supported_by : List[FrozenSet[int]]
        Bricks each brick rests on (empty for bricks on the ground)

    removable : Set[int]
        Bricks that are nobody's sole support

    fell_by : List[int]
        Distance each brick dropped

    surface : Surface
        Final height map
    """
    bricks: List[Brick]
    order: List[int]
    supported_by: List[FrozenSet[int]]
    removable: Set[int]
    fell_by: List[int]
    surface: Surface = field(repr=False)

    @property
    def n_removable(self) -> int:
        return len(self.removable)


def settle_bricks(bricks: Sequence[Brick], config: Optional[SettleConfig] = None) -> SettleResult:
    """
    Drop every brick onto the stack in height order.

    Args:
        bricks: Unsettled bricks; they are not modified
        config: Settlement options (defaults to CONFIG)

    Returns:
        SettleResult with settled copies, support sets and the removable set

    Raises:
        BrickGeometryError: If validation is enabled and a brick is not axis-aligned
        EmptyFootprintError: If a brick covers no ground-plane cell
        SurfaceInvariantError: If a brick would settle into an occupied column
    """
    config = config or CONFIG
    if config.validate_geometry:
        for brick in bricks:
            brick.validate()

    # Ties on position fall back to the original index
    indexed: List[Tuple[Brick, int]] = sorted(
        ((brick, index) for index, brick in enumerate(bricks)),
        key=lambda pair: (pair[0].sort_key(), pair[1]),
    )

    n = len(bricks)
    settled: List[Optional[Brick]] = [None] * n
    supported_by: List[FrozenSet[int]] = [frozenset()] * n
    fell_by: List[int] = [0] * n
    removable: Set[int] = set(range(n))
    surface = Surface(ground_height=config.ground_height,
                      record_history=config.record_history)

    for brick, index in indexed:
        footprint = brick.footprint()
        scan = scan_supports(surface, footprint)
        if scan is None:
            raise EmptyFootprintError(f"brick {index} ({brick}) has zero area in the xy plane")

        resting_z = scan.max_height + 1
        distance = brick.lower.z - resting_z
        if distance < 0 and scan.owners:
            # The brick starts inside an already-settled column: the input overlaps
            raise SurfaceInvariantError(
                f"brick {index} ({brick}) starts at z={brick.lower.z} but the stack "
                f"under {footprint} already reaches z={scan.max_height} "
                f"(bricks {sorted(scan.owners)})"
            )
        fallen = brick.dropped(distance)
        logger.debug("brick %d (%s) fell %d to z=%d on %s",
                     index, brick, distance, resting_z, sorted(scan.owners) or "ground")

        surface.set_height(footprint, fallen.upper.z, index)

        if len(scan.owners) == 1:
            (sole,) = scan.owners
            if sole in removable:
                logger.debug("brick %d is the only support of brick %d", sole, index)
            removable.discard(sole)

        settled[index] = fallen
        supported_by[index] = scan.owners
        fell_by[index] = distance

    logger.info("settled %d bricks; %d removable", n, len(removable))
    return SettleResult(
        bricks=settled,
        order=[index for _, index in indexed],
        supported_by=supported_by,
        removable=removable,
        fell_by=fell_by,
        surface=surface,
    )


def count_removable(bricks: Sequence[Brick], config: Optional[SettleConfig] = None) -> int:
    """Number of bricks that can be removed without any other brick falling."""
    return settle_bricks(bricks, config).n_removable
