"""
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: A single cubie: stable index, grid position and the color of each of its six facelets.

"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from rubik.faces import Axis, CubeColor, CubeFace
from rubik.position import Position

# 4-cycles read as (dest, src) pairs: dest's new color is src's old color.
# Every table lists its *clockwise* cycle, the counterclockwise one is the reverse.
Y_CYCLE: List[Tuple[CubeFace, CubeFace]] = [
    (CubeFace.FRONT, CubeFace.LEFT),
    (CubeFace.RIGHT, CubeFace.FRONT),
    (CubeFace.BACK, CubeFace.RIGHT),
    (CubeFace.LEFT, CubeFace.BACK),
]
X_CYCLE: List[Tuple[CubeFace, CubeFace]] = [
    (CubeFace.TOP, CubeFace.FRONT),
    (CubeFace.BACK, CubeFace.TOP),
    (CubeFace.BOTTOM, CubeFace.BACK),
    (CubeFace.FRONT, CubeFace.BOTTOM),
]
Z_CYCLE: List[Tuple[CubeFace, CubeFace]] = [
    (CubeFace.TOP, CubeFace.LEFT),
    (CubeFace.RIGHT, CubeFace.TOP),
    (CubeFace.BOTTOM, CubeFace.RIGHT),
    (CubeFace.LEFT, CubeFace.BOTTOM),
]

# The face a cycle table reads clockwise from: X from the right, Z from the front,
# Y from the bottom (front <- left turns the front sticker to the right).
CYCLE_VIEW: Dict[Axis, CubeFace] = {
    Axis.X: CubeFace.RIGHT,
    Axis.Y: CubeFace.BOTTOM,
    Axis.Z: CubeFace.FRONT,
}


def _solved_colors(position: Position) -> Dict[CubeFace, CubeColor]:
    return {
        face: face.default_color if position.on_face(face) else CubeColor.BLACK
        for face in CubeFace
    }


@dataclass
class Cubie:
    """
    Plain record for one of the 26 visible unit cubes.

    The cubie is identified by `index` (0..25) for the whole life of the cube;
    moves re-seat it (`position`) and recolor its facelets (`colors`) in place,
    they never create new cubies. Anything a renderer wants to attach to a cubie
    lives in a side table keyed by `index`, not here.

    `colors` is total over the six faces: facelets pointing inside the puzzle
    hold CubeColor.BLACK and are cycled like every other facelet.
    """
    index: int
    position: Position
    colors: Dict[CubeFace, CubeColor] = field(default_factory=dict)

    def __post_init__(self):
        if not self.colors:
            self.colors = _solved_colors(self.position)
        assert set(self.colors) == set(CubeFace), f"cubie {self.index} is missing facelets"

    # --- color cycles ---
    def _cycle(self, table: List[Tuple[CubeFace, CubeFace]], clockwise: bool) -> None:
        old = dict(self.colors)
        for dest, src in table:
            if clockwise:
                self.colors[dest] = old[src]
            else:
                self.colors[src] = old[dest]

    def turn_y(self, clockwise: bool) -> None:
        """Cycle front/right/back/left; top and bottom keep their colors."""
        self._cycle(Y_CYCLE, clockwise)

    def turn_x(self, clockwise: bool) -> None:
        """Cycle top/front/bottom/back; right and left keep their colors."""
        self._cycle(X_CYCLE, clockwise)

    def turn_z(self, clockwise: bool) -> None:
        """Cycle top/right/bottom/left; front and back keep their colors."""
        self._cycle(Z_CYCLE, clockwise)

    def turn(self, axis: Axis, clockwise: bool) -> None:
        {Axis.X: self.turn_x, Axis.Y: self.turn_y, Axis.Z: self.turn_z}[axis](clockwise)

    # --- views ---
    def visible_faces(self) -> List[CubeFace]:
        """Faces of this cubie that currently point outwards."""
        return [f for f in CubeFace if self.position.on_face(f)]

    def visible_colors(self) -> Dict[CubeFace, CubeColor]:
        return {f: self.colors[f] for f in self.visible_faces()}

    def copy(self) -> "Cubie":
        return Cubie(index=self.index, position=self.position, colors=dict(self.colors))

    def state(self) -> Tuple[Tuple[int, int, int], Tuple[int, ...]]:
        """Hashable (position, colors in CubeFace order) pair."""
        return self.position.as_tuple(), tuple(self.colors[f].value for f in CubeFace)

    def __repr__(self) -> str:
        cols = " ".join(f"{f.letter}={c.name.lower()}" for f, c in self.visible_colors().items())
        return f"Cubie #{self.index}: pos={self.position.as_tuple()} {self.position.category().value} [{cols}]"
