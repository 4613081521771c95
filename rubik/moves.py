"""
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: The 12 quarter-turn moves (Singmaster notation) and the recorded move event.

"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, List, Tuple

from rubik.faces import CubeFace


class MoveType(Enum):
    """
    Quarter turns of one outer layer. The value is the Singmaster token.

    Plain letters turn the layer 90° clockwise as seen from outside that face,
    the primed ones (``Up`` == U', ...) turn it counterclockwise.
    All derived properties are table lookups, see AXES/ANGLES/FACES/INVERSES below.
    """
    U = "U"
    Up = "U'"
    D = "D"
    Dp = "D'"
    F = "F"
    Fp = "F'"
    B = "B"
    Bp = "B'"
    R = "R"
    Rp = "R'"
    L = "L"
    Lp = "L'"

    @property
    def axis(self) -> Tuple[int, int, int]:
        """Rotation axis as a signed unit vector (the face's outward normal)."""
        return AXES[self]

    @property
    def angle(self) -> int:
        """Signed quarter-turn angle in degrees, +90 or -90."""
        return ANGLES[self]

    @property
    def radians(self) -> float:
        return math.radians(self.angle)

    @property
    def face(self) -> CubeFace:
        return FACES[self]

    @property
    def inverse(self) -> "MoveType":
        return INVERSES[self]

    @property
    def clockwise(self) -> bool:
        return self.angle > 0

    @property
    def notation(self) -> str:
        return self.value

    @classmethod
    def parse(cls, token: str) -> "MoveType":
        """
        Translate a textual move into a MoveType.

        Accepts the Singmaster token (``"R'"``, also with a typographic prime
        ``"R’"``) or the enum name (``"Rp"``).

        Raises:
            ValueError: if the token names none of the 12 moves.
        """
        if not isinstance(token, str):
            raise ValueError(f"Move token must be a string, got {token!r}")
        tok = token.strip().replace("’", "'")
        if tok in cls.__members__:
            return cls[tok]
        try:
            return cls(tok)
        except ValueError:
            raise ValueError(f"Unknown move token: {token!r}") from None


AXES: Dict[MoveType, Tuple[int, int, int]] = {
    MoveType.U: (0, 1, 0), MoveType.Up: (0, 1, 0),
    MoveType.D: (0, -1, 0), MoveType.Dp: (0, -1, 0),
    MoveType.F: (0, 0, 1), MoveType.Fp: (0, 0, 1),
    MoveType.B: (0, 0, -1), MoveType.Bp: (0, 0, -1),
    MoveType.R: (1, 0, 0), MoveType.Rp: (1, 0, 0),
    MoveType.L: (-1, 0, 0), MoveType.Lp: (-1, 0, 0),
}

ANGLES: Dict[MoveType, int] = {
    MoveType.U: 90, MoveType.Up: -90,
    MoveType.D: 90, MoveType.Dp: -90,
    MoveType.F: 90, MoveType.Fp: -90,
    MoveType.B: 90, MoveType.Bp: -90,
    MoveType.R: 90, MoveType.Rp: -90,
    MoveType.L: 90, MoveType.Lp: -90,
}

FACES: Dict[MoveType, CubeFace] = {
    MoveType.U: CubeFace.TOP, MoveType.Up: CubeFace.TOP,
    MoveType.D: CubeFace.BOTTOM, MoveType.Dp: CubeFace.BOTTOM,
    MoveType.F: CubeFace.FRONT, MoveType.Fp: CubeFace.FRONT,
    MoveType.B: CubeFace.BACK, MoveType.Bp: CubeFace.BACK,
    MoveType.R: CubeFace.RIGHT, MoveType.Rp: CubeFace.RIGHT,
    MoveType.L: CubeFace.LEFT, MoveType.Lp: CubeFace.LEFT,
}

INVERSES: Dict[MoveType, MoveType] = {
    MoveType.U: MoveType.Up, MoveType.Up: MoveType.U,
    MoveType.D: MoveType.Dp, MoveType.Dp: MoveType.D,
    MoveType.F: MoveType.Fp, MoveType.Fp: MoveType.F,
    MoveType.B: MoveType.Bp, MoveType.Bp: MoveType.B,
    MoveType.R: MoveType.Rp, MoveType.Rp: MoveType.R,
    MoveType.L: MoveType.Lp, MoveType.Lp: MoveType.L,
}

MOVES: List[MoveType] = list(MoveType)


def parse_sequence(seq: str | Iterable[str]) -> List[MoveType]:
    """
    Parse a whitespace separated move string such as ``"R U R' U'"``.

    A trailing ``2`` (``"U2"``) expands to two quarter turns of the same face.

    Raises:
        ValueError: on any token that is not a move.
    """
    tokens = seq.split() if isinstance(seq, str) else list(seq)
    out: List[MoveType] = []
    for tok in tokens:
        if isinstance(tok, str) and len(tok) > 1 and tok.endswith("2"):
            m = MoveType.parse(tok[:-1])
            out.extend([m, m])
        else:
            out.append(MoveType.parse(tok))
    return out


@dataclass(frozen=True)
class Move:
    """
    One recorded move event.

    `timestamp` is only there for displaying the history; `phase` tells apart
    scramble moves from the ones made afterwards ('scramble' / 'solve').
    """
    type: MoveType
    timestamp: datetime = field(default_factory=datetime.now)
    phase: str = "solve"

    def __str__(self) -> str:
        return self.type.notation
