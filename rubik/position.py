"""
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: Grid coordinates of a cubie inside the 3x3x3 block.

"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from rubik.faces import CubeFace


class Category(Enum):
    CORNER = "corner"
    EDGE = "edge"
    CENTER = "center"


# number of coordinates equal to 1 -> category; (1,1,1) is never built
_CATEGORY_BY_MIDDLES = {0: Category.CORNER, 1: Category.EDGE, 2: Category.CENTER}


@dataclass(frozen=True)
class Position:
    """
    Slot of a cubie in the grid.

    x runs left(0) -> right(2), y bottom(0) -> top(2), z back(0) -> front(2).
    The hidden core (1, 1, 1) is not a valid position.
    """
    x: int
    y: int
    z: int

    def __post_init__(self):
        coords = (self.x, self.y, self.z)
        assert all(c in (0, 1, 2) for c in coords), f"coordinate out of range: {coords}"
        assert coords != (1, 1, 1), "the core (1, 1, 1) is not a cubie position"

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.x, self.y, self.z

    def coord(self, index: int) -> int:
        return self.as_tuple()[index]

    def on_face(self, face: CubeFace) -> bool:
        """True if the cubie lies in the outer layer of `face`."""
        return self.coord(face.axis.value) == face.layer

    def category(self) -> Category:
        middles = sum(1 for c in self.as_tuple() if c == 1)
        return _CATEGORY_BY_MIDDLES[middles]

    @property
    def is_corner(self) -> bool:
        return self.category() is Category.CORNER

    @property
    def is_edge(self) -> bool:
        return self.category() is Category.EDGE

    @property
    def is_center(self) -> bool:
        return self.category() is Category.CENTER

    def __repr__(self) -> str:
        return f"Position({self.x}, {self.y}, {self.z})"
