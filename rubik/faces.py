"""
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: Faces, axes and the sticker palette shared by every other module.

"""

from enum import Enum
from typing import Dict, Tuple


class Axis(Enum):
    """Principal axes; the value is the coordinate index in (x, y, z)."""
    X = 0
    Y = 1
    Z = 2


class CubeColor(Enum):
    """
    Sticker palette: six puzzle colors plus the BLACK interior sentinel.

    BLACK marks a facelet that points into the puzzle; it is cycled exactly like
    a colored facelet but must never end up on the outside.
    """
    WHITE = 0
    YELLOW = 1
    RED = 2
    ORANGE = 3
    GREEN = 4
    BLUE = 5
    BLACK = 6

    @property
    def is_interior(self) -> bool:
        return self is CubeColor.BLACK


class CubeFace(Enum):
    """
    The six outer faces of the puzzle.

    The cube is oriented such that +x = right, +y = up, +z = front; grid
    coordinates run 0..2 along each axis.
    """
    TOP = 0
    BOTTOM = 1
    FRONT = 2
    BACK = 3
    RIGHT = 4
    LEFT = 5

    @property
    def axis(self) -> Axis:
        return FACE_AXIS[self][0]

    @property
    def sign(self) -> int:
        """+1 if the outward normal points along the positive axis, else -1."""
        return FACE_AXIS[self][1]

    @property
    def layer(self) -> int:
        """Grid coordinate (along `axis`) shared by every cubie on this face."""
        return 2 if self.sign > 0 else 0

    @property
    def normal(self) -> Tuple[int, int, int]:
        vec = [0, 0, 0]
        vec[self.axis.value] = self.sign
        return tuple(vec)

    @property
    def default_color(self) -> CubeColor:
        return DEFAULT_COLORS[self]

    @property
    def letter(self) -> str:
        return FACE_LETTERS[self]


FACE_AXIS: Dict[CubeFace, Tuple[Axis, int]] = {
    CubeFace.TOP: (Axis.Y, +1),
    CubeFace.BOTTOM: (Axis.Y, -1),
    CubeFace.FRONT: (Axis.Z, +1),
    CubeFace.BACK: (Axis.Z, -1),
    CubeFace.RIGHT: (Axis.X, +1),
    CubeFace.LEFT: (Axis.X, -1),
}

DEFAULT_COLORS: Dict[CubeFace, CubeColor] = {
    CubeFace.TOP: CubeColor.WHITE,
    CubeFace.BOTTOM: CubeColor.YELLOW,
    CubeFace.FRONT: CubeColor.RED,
    CubeFace.BACK: CubeColor.ORANGE,
    CubeFace.RIGHT: CubeColor.GREEN,
    CubeFace.LEFT: CubeColor.BLUE,
}

# Singmaster letters
FACE_LETTERS: Dict[CubeFace, str] = {
    CubeFace.TOP: "U",
    CubeFace.BOTTOM: "D",
    CubeFace.FRONT: "F",
    CubeFace.BACK: "B",
    CubeFace.RIGHT: "R",
    CubeFace.LEFT: "L",
}
