# File: tests/test_settle.py
"""
TEST: Settlement Engine
=======================

Drop bricks onto the stack and check:
1. Resting positions for the classic seven-brick example
2. The removable set (sole supports are excluded, multiple supports are not)
3. Structural invariants: no overlaps, every brick resting on something,
   monotonic column heights, deterministic results
4. Fatal errors for overlapping input and empty footprints
"""

import random

import pytest

from brick_stack.checks import check_ground_contact, check_monotonic_history, check_no_overlap
from brick_stack.config import SettleConfig
from brick_stack.kernel.settle import (
    EmptyFootprintError,
    SupportScan,
    count_removable,
    merge_support,
    settle_bricks,
)
from brick_stack.kernel.surface import SurfaceInvariantError
from brick_stack.model import Brick, BrickGeometryError, Footprint, Point3, Position
from brick_stack.parse import parse_bricks


def random_stack(seed, n=25, size=4):
    """
    Non-overlapping random bricks: brick k lives in its own z band
    [3k+1, 3k+3], so no two bricks can start out intersecting.
    """
    rng = random.Random(seed)
    bricks = []
    for k in range(n):
        x, y, z = rng.randrange(size), rng.randrange(size), 3 * k + 1
        length = rng.randrange(3)
        axis = rng.choice('xyz')
        end = Point3(x + length if axis == 'x' else x,
                     y + length if axis == 'y' else y,
                     z + length if axis == 'z' else z)
        bricks.append(Brick.from_endpoints(Point3(x, y, z), end))
    rng.shuffle(bricks)
    return bricks


def test_example_resting_positions(example_bricks):
    result = settle_bricks(example_bricks)
    by_label = {b.label: b for b in result.bricks}

    # A didn't move
    assert by_label["A"] == Brick(Point3(1, 0, 1), Point3(1, 2, 1), "A")
    # B didn't move, resting on A
    assert by_label["B"] == Brick(Point3(0, 0, 2), Point3(2, 0, 2), "B")
    # C fell to z=2, resting on A
    assert by_label["C"] == Brick(Point3(0, 2, 2), Point3(2, 2, 2), "C")
    # D fell from z=4 to z=3
    assert by_label["D"] == Brick(Point3(0, 0, 3), Point3(0, 2, 3), "D")
    # E fell from z=5 to z=3
    assert by_label["E"] == Brick(Point3(2, 0, 3), Point3(2, 2, 3), "E")
    # F fell from z=6 to z=4
    assert by_label["F"] == Brick(Point3(0, 1, 4), Point3(2, 1, 4), "F")
    # G fell from z=8..9 to z=5..6
    assert by_label["G"] == Brick(Point3(1, 1, 5), Point3(1, 1, 6), "G")

    assert result.fell_by == [0, 0, 1, 1, 2, 2, 3]


def test_example_removable_count(example_bricks):
    result = settle_bricks(example_bricks)
    assert result.n_removable == 5
    # B, C, D, E and G can go; A holds up B and C alone, F holds up G alone
    assert result.removable == {1, 2, 3, 4, 6}
    assert count_removable(example_bricks) == 5


def test_example_support_sets(example_bricks):
    result = settle_bricks(example_bricks)
    assert result.supported_by == [
        frozenset(),         # A on the ground
        frozenset({0}),      # B on A
        frozenset({0}),      # C on A
        frozenset({1, 2}),   # D on B and C
        frozenset({1, 2}),   # E on B and C
        frozenset({3, 4}),   # F on D and E
        frozenset({5}),      # G on F
    ]
    assert result.order == [0, 1, 2, 3, 4, 5, 6]


def test_input_bricks_are_not_modified(example_bricks):
    before = [Brick(b.lower, b.upper, b.label) for b in example_bricks]
    settle_bricks(example_bricks)
    assert example_bricks == before


def test_order_does_not_depend_on_input_order(example_bricks):
    shuffled = list(reversed(example_bricks))
    result = settle_bricks(shuffled)
    assert sorted(b.label for i, b in enumerate(result.bricks) if i in result.removable) == \
        ["B", "C", "D", "E", "G"]
    assert [result.bricks[i].label for i in result.order] == list("ABCDEFG")


def test_single_brick_is_removable():
    result = settle_bricks(parse_bricks("3,3,10~3,5,10\n"))
    assert result.bricks[0].lower.z == 1
    assert result.removable == {0}


def test_stacked_pair():
    """The bottom brick is the sole support of the top brick."""
    result = settle_bricks(parse_bricks("0,0,1~0,0,1\n0,0,3~0,0,3\n"))
    assert result.bricks[1].lower.z == 2
    assert result.removable == {1}


def test_multiple_supports_keep_both_removable():
    """A bridge over two equally tall bricks disqualifies neither."""
    bricks = parse_bricks("0,0,1~0,0,1\n1,0,1~1,0,1\n0,0,5~1,0,5\n")
    result = settle_bricks(bricks)
    assert result.supported_by[2] == frozenset({0, 1})
    assert result.removable == {0, 1, 2}


def test_only_tallest_columns_count_as_support():
    """A short brick under the footprint does not support a brick held higher up."""
    bricks = parse_bricks(
        "0,0,1~0,0,1\n"     # short post
        "2,0,1~2,0,2\n"     # tall post
        "0,0,5~2,0,5\n"     # beam spanning both
    )
    result = settle_bricks(bricks)
    assert result.bricks[2].lower.z == 3
    assert result.supported_by[2] == frozenset({1})
    assert result.removable == {0, 2}


def test_empty_input():
    result = settle_bricks([])
    assert result.bricks == []
    assert result.n_removable == 0


def test_resettling_is_idempotent(example_bricks):
    first = settle_bricks(example_bricks)
    resorted = sorted(first.bricks)
    second = settle_bricks(resorted)
    assert sorted(second.bricks) == resorted
    assert all(d == 0 for d in second.fell_by)
    assert second.n_removable == first.n_removable


def test_settlement_is_deterministic():
    bricks = random_stack(seed=7)
    a = settle_bricks(bricks)
    b = settle_bricks(bricks)
    assert a.bricks == b.bricks
    assert a.removable == b.removable


@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
def test_structural_invariants(seed):
    """No overlaps, no floating bricks, and columns only ever rise."""
    bricks = random_stack(seed)
    result = settle_bricks(bricks, SettleConfig(record_history=True))
    assert check_no_overlap(result.bricks) == []
    assert check_ground_contact(result.bricks) == []
    assert check_monotonic_history(result.surface) == []


@pytest.mark.parametrize("seed", [11, 12, 13])
def test_removable_matches_brute_force(seed):
    """Removing a brick the engine calls removable moves nothing, and vice versa."""
    result = settle_bricks(random_stack(seed))
    settled = result.bricks
    for i in range(len(settled)):
        rest = settled[:i] + settled[i + 1:]
        nothing_moved = all(d == 0 for d in settle_bricks(rest).fell_by)
        assert nothing_moved == (i in result.removable), f"brick {i}"


def test_merge_support_reduction():
    scan = merge_support(None, 0, None)
    assert scan == SupportScan(0, frozenset())

    scan = merge_support(scan, 2, 4)
    assert scan == SupportScan(2, frozenset({4}))

    # Ties join, lower samples are ignored, taller samples replace
    scan = merge_support(scan, 2, 5)
    assert scan.owners == frozenset({4, 5})
    scan = merge_support(scan, 1, 9)
    assert scan.owners == frozenset({4, 5})
    scan = merge_support(scan, 3, 6)
    assert scan == SupportScan(3, frozenset({6}))


def test_overlapping_input_is_fatal():
    bricks = parse_bricks("0,0,1~0,0,5\n0,0,3~2,0,3\n")
    with pytest.raises(SurfaceInvariantError, match="starts at z=3"):
        settle_bricks(bricks)


def test_diagonal_brick_rejected():
    bricks = [Brick(Point3(0, 0, 1), Point3(1, 1, 1))]
    with pytest.raises(BrickGeometryError):
        settle_bricks(bricks)


def test_validation_can_be_disabled():
    """Without validation a diagonal brick settles by its bounding box."""
    bricks = [Brick(Point3(0, 0, 4), Point3(1, 1, 4))]
    result = settle_bricks(bricks, SettleConfig(validate_geometry=False))
    assert result.bricks[0].lower.z == 1


def test_empty_footprint_is_fatal():
    class HollowBrick(Brick):
        def footprint(self):
            return Footprint(Position(1, 0), Position(0, 0))

    with pytest.raises(EmptyFootprintError, match="zero area"):
        settle_bricks([HollowBrick(Point3(0, 0, 3), Point3(0, 0, 3))])


def test_ground_height_config():
    result = settle_bricks(parse_bricks("0,0,9~0,0,9\n"), SettleConfig(ground_height=4))
    assert result.bricks[0].lower.z == 5
    assert result.fell_by == [4]


def test_brick_at_ground_level_rises_to_rest():
    """A brick starting at z=0 sits on the ground at z=1."""
    result = settle_bricks(parse_bricks("0,0,0~0,0,0\n"))
    assert result.bricks[0].lower.z == 1
    assert result.fell_by == [-1]
    assert result.removable == {0}


def test_brick_below_ground_rests_on_ground():
    """Negative z is valid input; the brick comes to rest at z=1 and supports the next."""
    result = settle_bricks(parse_bricks("0,0,-3~2,0,-3\n1,0,5~1,0,5\n"))
    assert result.bricks[0].lower.z == 1
    assert result.bricks[1].lower.z == 2
    assert result.fell_by == [-4, 3]
    assert result.supported_by[1] == frozenset({0})
    assert result.removable == {1}


def test_upside_down_brick_settles_with_positive_height():
    """Endpoints given top-first are swapped, even with validation off."""
    bricks = [Brick(Point3(0, 0, 5), Point3(0, 0, 1))]
    result = settle_bricks(bricks, SettleConfig(validate_geometry=False))
    assert result.bricks[0].lower.z == 1
    assert result.bricks[0].upper.z == 5
    assert result.surface.get(Position(0, 0)) == (5, 0)
