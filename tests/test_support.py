# File: tests/test_support.py
"""
Test the support graph: removable / load-bearing bricks, chain reactions,
and the per-brick report.
"""

import numpy as np
import pytest

from brick_stack.kernel.settle import settle_bricks
from brick_stack.parse import parse_bricks
from brick_stack.support import REPORT_COLUMNS, SupportGraph

from test_settle import random_stack


def test_removable_matches_engine(example_bricks):
    result = settle_bricks(example_bricks)
    graph = SupportGraph.from_result(result)
    assert graph.removable() == sorted(result.removable)
    assert graph.count_removable() == 5
    assert len(graph) == 7


def test_supports_is_inverse_of_supported_by(example_bricks):
    graph = SupportGraph.from_bricks(example_bricks)
    assert graph.supports[0] == frozenset({1, 2})    # A holds B and C
    assert graph.supports[1] == frozenset({3, 4})    # B holds D and E
    assert graph.supports[5] == frozenset({6})       # F holds G
    assert graph.supports[6] == frozenset()          # nothing on G
    for b, holders in enumerate(graph.supported_by):
        for a in holders:
            assert b in graph.supports[a]


def test_load_bearing_and_sole_supporters(example_bricks):
    graph = SupportGraph.from_bricks(example_bricks)
    assert graph.sole_supporters() == {1: 0, 2: 0, 6: 5}
    assert graph.load_bearing() == [0, 5]
    assert not graph.is_removable(0)
    assert graph.is_removable(3)


def test_chain_reaction_example(example_bricks):
    """
    Removing A drops every other brick; removing F drops only G.
    Nothing else causes a fall.
    """
    graph = SupportGraph.from_bricks(example_bricks)
    assert graph.chain_reaction(0) == 6
    assert graph.chain_reaction(5) == 1
    assert graph.falling_if_removed(5) == {6}
    assert graph.chain_reactions() == [6, 0, 0, 0, 0, 1, 0]
    assert graph.total_chain_reaction() == 7


def test_chain_reaction_stops_at_multiply_supported_brick():
    """Removing one leg of a bridge drops nothing above the bridge."""
    bricks = parse_bricks(
        "0,0,1~0,0,1\n"
        "2,0,1~2,0,1\n"
        "0,0,3~2,0,3\n"
        "1,0,5~1,0,6\n"
    )
    graph = SupportGraph.from_bricks(bricks)
    assert graph.chain_reaction(0) == 0
    assert graph.chain_reaction(2) == 1
    assert graph.total_chain_reaction() == 1


@pytest.mark.parametrize("seed", [21, 22])
def test_chain_reaction_matches_brute_force(seed):
    """Count the bricks that actually move when each brick is taken out."""
    result = settle_bricks(random_stack(seed))
    graph = SupportGraph.from_result(result)
    settled = result.bricks
    for i in range(len(settled)):
        rest = settled[:i] + settled[i + 1:]
        moved = sum(1 for d in settle_bricks(rest).fell_by if d > 0)
        assert graph.chain_reaction(i) == moved, f"brick {i}"


def test_adjacency_matrix(example_bricks):
    graph = SupportGraph.from_bricks(example_bricks)
    M = graph.adjacency_matrix()
    assert M.shape == (7, 7)
    assert M.dtype == bool
    assert M[0, 1] and M[0, 2]
    assert not M[1, 0]
    assert M.sum() == 9
    # Bricks on the ground have no incoming edges
    np.testing.assert_array_equal(M.sum(axis=0) == 0, [True] + [False] * 6)


def test_to_dataframe(example_bricks):
    df = SupportGraph.from_bricks(example_bricks).to_dataframe()
    assert list(df.columns) == REPORT_COLUMNS
    assert len(df) == 7
    assert df['removable'].sum() == 5
    assert df['chain_reaction'].sum() == 7

    g = df[df['label'] == 'G'].iloc[0]
    assert (g['z1'], g['z2']) == (5, 6)
    assert g['fell_by'] == 3
    assert g['n_supporters'] == 1


def test_to_dataframe_empty():
    df = SupportGraph.from_bricks([]).to_dataframe()
    assert list(df.columns) == REPORT_COLUMNS
    assert len(df) == 0
