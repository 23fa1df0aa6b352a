# brick_stack/parse.py
"""
Parser for brick snapshots.

One brick per line, two endpoints separated by '~', with an optional
label after '<-':

    1,0,1~1,2,1
    0,0,2~2,0,2   <- B
"""

from pathlib import Path
from typing import List, Optional, Union

from .model import Brick, Point3


class BrickParseError(ValueError):
    """Raised when a line is not a valid brick description."""

    def __init__(self, message: str, text: str, line_number: Optional[int] = None):
        self.text = text
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


def parse_point(text: str) -> Point3:
    """Parse 'x,y,z' into a Point3."""
    fields = text.strip().split(',')
    if len(fields) != 3:
        raise BrickParseError(f"not a valid 3D point: {text!r}", text)
    try:
        x, y, z = (int(f) for f in fields)
    except ValueError as e:
        raise BrickParseError(f"{text!r} is not a valid 3D point: {e}", text) from e
    return Point3(x, y, z)


def parse_brick(line: str) -> Brick:
    """Parse 'x1,y1,z1~x2,y2,z2[ <- label]' into a z-normalized Brick."""
    if '~' not in line:
        raise BrickParseError(f"expected '~' in {line!r}", line)
    left, right = line.split('~', 1)
    label = None
    if '<-' in right:
        right, label = right.split('<-', 1)
        label = label.strip() or None
    return Brick.from_endpoints(parse_point(left), parse_point(right), label=label)


def parse_bricks(text: str) -> List[Brick]:
    """
    Parse a whole snapshot, one brick per line.

    Blank lines are skipped. Errors carry the 1-based line number.
    """
    bricks = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            bricks.append(parse_brick(line))
        except BrickParseError as e:
            raise BrickParseError(str(e), line, line_number) from e
    return bricks


def load_bricks(path: Union[str, Path]) -> List[Brick]:
    """Read and parse a snapshot file."""
    return parse_bricks(Path(path).read_text())
