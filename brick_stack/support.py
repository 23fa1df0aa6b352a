# brick_stack/support.py
"""
SUPPORT GRAPH: Which Bricks Hold Up Which
=========================================

PURPOSE:
--------
The settlement engine records, for every brick, the set of bricks it came
to rest on. This module turns those records into a graph and answers the
structural questions:

- Which bricks are REMOVABLE? (no other brick rests on them alone)
- Which bricks are LOAD-BEARING? (sole support of at least one brick)
- If one brick were removed, how many others would fall? (chain reaction)

GRAPH CONVENTIONS:
------------------
    supported_by[b] = {a, ...}   bricks that b rests on
    supports[a]     = {b, ...}   bricks resting on a

A brick with an empty supported_by set rests on the ground and can never
fall. Indices are the bricks' original input indices.

CHAIN REACTION:
---------------
Remove brick i. A brick falls once EVERY brick it rests on has fallen (or
been removed). Falling propagates upwards only, so a single pass that
counts down each brick's remaining supports is enough.

Example (the classic seven-brick stack):
- Removing the bottom brick A drops all 6 bricks above it
- Removing F drops only G
- Every other brick drops nothing
- Total: 7
"""

from collections import deque
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Sequence, Set

import numpy as np
import pandas as pd

from .config import SettleConfig
from .kernel.settle import SettleResult, settle_bricks
from .model import Brick


REPORT_COLUMNS = [
    'brick', 'label', 'x1', 'y1', 'z1', 'x2', 'y2', 'z2', 'fell_by',
    'n_supporters', 'n_supported', 'removable', 'chain_reaction',
]


@dataclass
class SupportGraph:
    """
    Support relation of a settled stack.

    Build it with SupportGraph.from_result() or SupportGraph.from_bricks().
    """
    bricks: List[Brick]
    supported_by: List[FrozenSet[int]]
    supports: List[FrozenSet[int]]
    order: List[int]
    fell_by: List[int]

    @classmethod
    def from_result(cls, result: SettleResult) -> "SupportGraph":
        supports: List[Set[int]] = [set() for _ in result.bricks]
        for b, holders in enumerate(result.supported_by):
            for a in holders:
                supports[a].add(b)
        return cls(
            bricks=list(result.bricks),
            supported_by=list(result.supported_by),
            supports=[frozenset(s) for s in supports],
            order=list(result.order),
            fell_by=list(result.fell_by),
        )

    @classmethod
    def from_bricks(cls, bricks: Sequence[Brick], config: Optional[SettleConfig] = None) -> "SupportGraph":
        """Settle `bricks` and build the graph in one step."""
        return cls.from_result(settle_bricks(bricks, config))

    def __len__(self):
        return len(self.bricks)

    # ------------------------------------------------------------------
    # Removability
    # ------------------------------------------------------------------

    def sole_supporters(self) -> Dict[int, int]:
        """Map each brick resting on exactly one brick to that brick."""
        return {
            b: next(iter(holders))
            for b, holders in enumerate(self.supported_by)
            if len(holders) == 1
        }

    def load_bearing(self) -> List[int]:
        """Sorted indices of bricks that are the sole support of some brick."""
        return sorted(set(self.sole_supporters().values()))

    def is_removable(self, index: int) -> bool:
        return all(len(self.supported_by[b]) > 1 for b in self.supports[index])

    def removable(self) -> List[int]:
        """Sorted indices of bricks whose removal drops nothing."""
        return [i for i in range(len(self.bricks)) if self.is_removable(i)]

    def count_removable(self) -> int:
        return len(self.removable())

    # ------------------------------------------------------------------
    # Chain reaction
    # ------------------------------------------------------------------

    def falling_if_removed(self, index: int) -> Set[int]:
        """Bricks (other than `index`) that fall if `index` is removed."""
        remaining = {}
        fallen: Set[int] = set()
        queue = deque([index])
        while queue:
            current = queue.popleft()
            for above in self.supports[current]:
                if above not in remaining:
                    remaining[above] = len(self.supported_by[above])
                remaining[above] -= 1
                if remaining[above] == 0:
                    fallen.add(above)
                    queue.append(above)
        return fallen

    def chain_reaction(self, index: int) -> int:
        """Number of other bricks that fall if brick `index` is removed."""
        return len(self.falling_if_removed(index))

    def chain_reactions(self) -> List[int]:
        return [self.chain_reaction(i) for i in range(len(self.bricks))]

    def total_chain_reaction(self) -> int:
        """Sum of chain_reaction() over every brick."""
        return sum(self.chain_reactions())

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def adjacency_matrix(self) -> np.ndarray:
        """Boolean matrix M with M[a, b] True iff brick a supports brick b."""
        n = len(self.bricks)
        M = np.zeros((n, n), dtype=bool)
        for b, holders in enumerate(self.supported_by):
            for a in holders:
                M[a, b] = True
        return M

    def to_dataframe(self) -> pd.DataFrame:
        """
        One row per brick, in input order.

        Columns: brick, label, x1, y1, z1, x2, y2, z2, fell_by,
        n_supporters, n_supported, removable, chain_reaction.
        """
        rows = []
        chains = self.chain_reactions()
        for i, brick in enumerate(self.bricks):
            rows.append({
                'brick': i,
                'label': brick.label,
                'x1': brick.lower.x,
                'y1': brick.lower.y,
                'z1': brick.lower.z,
                'x2': brick.upper.x,
                'y2': brick.upper.y,
                'z2': brick.upper.z,
                'fell_by': self.fell_by[i],
                'n_supporters': len(self.supported_by[i]),
                'n_supported': len(self.supports[i]),
                'removable': self.is_removable(i),
                'chain_reaction': chains[i],
            })
        return pd.DataFrame(rows, columns=REPORT_COLUMNS)
