# File: tests/conftest.py
"""Shared fixtures: the classic seven-brick snapshot."""

import pytest

from brick_stack.parse import parse_bricks


EXAMPLE = """\
1,0,1~1,2,1
0,0,2~2,0,2
0,2,3~2,2,3
0,0,4~0,2,4
2,0,5~2,2,5
0,1,6~2,1,6
1,1,8~1,1,9
"""

LABELED_EXAMPLE = """\
1,0,1~1,2,1   <- A
0,0,2~2,0,2   <- B
0,2,3~2,2,3   <- C
0,0,4~0,2,4   <- D
2,0,5~2,2,5   <- E
0,1,6~2,1,6   <- F
1,1,8~1,1,9   <- G
"""


@pytest.fixture
def example_text():
    return EXAMPLE


@pytest.fixture
def labeled_text():
    return LABELED_EXAMPLE


@pytest.fixture
def example_bricks():
    return parse_bricks(LABELED_EXAMPLE)
