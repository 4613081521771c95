"""
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: The cube engine. Owns the 26 cubies and the move history and keeps positions
and facelet colors in lock-step under quarter turns.

"""
import logging
import random
from contextlib import contextmanager
from dataclasses import replace
from functools import wraps
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import numpy as np
import pandas as pd

from rubik.config import CubeConfig
from rubik.cubies import CYCLE_VIEW, Cubie
from rubik.faces import CubeColor, CubeFace
from rubik.moves import MOVES, Move, MoveType, parse_sequence
from rubik.position import Position

logger = logging.getLogger(__name__)

Coords = Tuple[int, int, int]

# Position permutation per (face, clockwise). Each formula fixes the coordinate
# along the face's axis and rotates the other two; "clockwise" is as seen from
# outside that face, same as the color cycle the engine pairs it with.
POSITION_TURNS: Dict[Tuple[CubeFace, bool], Callable[[int, int, int], Coords]] = {
    (CubeFace.TOP, True): lambda x, y, z: (2 - z, y, x),
    (CubeFace.TOP, False): lambda x, y, z: (z, y, 2 - x),
    (CubeFace.BOTTOM, True): lambda x, y, z: (z, y, 2 - x),
    (CubeFace.BOTTOM, False): lambda x, y, z: (2 - z, y, x),
    (CubeFace.RIGHT, True): lambda x, y, z: (x, z, 2 - y),
    (CubeFace.RIGHT, False): lambda x, y, z: (x, 2 - z, y),
    (CubeFace.LEFT, True): lambda x, y, z: (x, 2 - z, y),
    (CubeFace.LEFT, False): lambda x, y, z: (x, z, 2 - y),
    (CubeFace.FRONT, True): lambda x, y, z: (y, 2 - x, z),
    (CubeFace.FRONT, False): lambda x, y, z: (2 - y, x, z),
    (CubeFace.BACK, True): lambda x, y, z: (2 - y, x, z),
    (CubeFace.BACK, False): lambda x, y, z: (y, 2 - x, z),
}

# (row, col) of a cubie's facelet in the 3x3 grid of a face, looking at that face
# from outside with the top face (or, for top/bottom, the back/front) upwards.
FACELET_GRID: Dict[CubeFace, Callable[[Position], Tuple[int, int]]] = {
    CubeFace.TOP: lambda p: (p.z, p.x),
    CubeFace.BOTTOM: lambda p: (2 - p.z, p.x),
    CubeFace.FRONT: lambda p: (2 - p.y, p.x),
    CubeFace.BACK: lambda p: (2 - p.y, 2 - p.x),
    CubeFace.RIGHT: lambda p: (2 - p.y, 2 - p.z),
    CubeFace.LEFT: lambda p: (2 - p.y, p.z),
}

HISTORY_COLUMNS = ["step", "move", "face", "clockwise", "timestamp", "phase"]


def color_cycle_clockwise(move_type: MoveType) -> bool:
    """
    Direction to drive the cubie color cycle for `move_type`.

    The cycle tables are written clockwise as seen from one face per axis
    (CYCLE_VIEW). A clockwise turn of the opposite face is the same physical
    rotation as a counterclockwise turn of the reference face, so the
    direction flips there. This keeps colors and positions on the same
    rotation: e.g. U moves the front-left corner to back-left and its front
    sticker ends up facing left.
    """
    face = move_type.face
    return move_type.clockwise == (face is CYCLE_VIEW[face.axis])


def track_history(method: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator for Cube._turn: logs every atomic quarter turn into `self._history`,
    unless history is disabled. Phase is taken from `self._phase` ("scramble"/"solve").
    """
    @wraps(method)
    def wrapper(self, move_type: MoveType) -> Any:
        # state change first, the record only describes a completed turn
        result = method(self, move_type)
        if self._history_enabled:
            self._history.append(Move(type=move_type, phase=self._phase))
        return result
    return wrapper


class Cube:
    """
    Logical 3x3x3 puzzle: 26 cubies, a move history and a derived solved test.

    Design principles
    -----------------
    • The cubies are the only mutable puzzle state. Each carries a stable
      `index` (0..25); moves re-seat and recolor cubies in place and never
      create new ones. Only reset() rebuilds them.

    • A move runs the color cycle and the position permutation for all nine
      affected cubies, then records the move, then notifies listeners once.
      Listeners therefore never see half a move.

    • `is_solved` is not stored: every face must show a single color, whatever
      color that is.

    • Invariant breaks (bad coordinates, a layer that isn't 9 cubies, a move
      that isn't a MoveType) are AssertionErrors. Undo on an empty history and
      scramble(0) are silent no-ops.

    Attributes
    ----------
    cubies : list[Cubie]
        The 26 cubies, ordered by index.
    cfg : CubeConfig
        Scramble defaults, invariant checking and log level.

    Key methods
    ------------
    perform_move(move_type)
        Turn one outer layer a quarter turn.
    undo_last_move()
        Roll back the most recent move and drop it from the history.
    scramble(length, seed)
        Clear the history and apply a random sequence.
    snapshot() / restore(snap)
        Deep copies of the cubie set for checkpointing.
    add_listener(fn)
        `fn(cube)` is called after each completed mutation.

    Example
    -------
        c = Cube()
        c.perform_move(MoveType.R)
        c.undo_last_move()
        assert c.is_solved
    """

    N_CUBIES = 26

    def __init__(self, config: Optional[CubeConfig] = None, **overrides):
        self.cfg = replace(config or CubeConfig(), **overrides)
        if self.cfg.log_level is not None:
            self.loglevel(self.cfg.log_level)

        self.cubies: List[Cubie] = []
        self._history: List[Move] = []
        self._history_enabled = True
        self._phase = "solve"
        self._listeners: List[Callable[["Cube"], None]] = []
        self._batch_depth = 0
        self._dirty = False

        self.reset()

    @staticmethod
    def loglevel(level: int = logging.INFO) -> None:
        """Set the logging level of the whole `rubik` package."""
        logging.getLogger("rubik").setLevel(level)

    # ---------- change notification ----------
    def add_listener(self, fn: Callable[["Cube"], None]) -> None:
        """Subscribe to state changes; fn(cube) fires once per completed mutation."""
        self._listeners.append(fn)

    def remove_listener(self, fn: Callable[["Cube"], None]) -> None:
        """Unsubscribe a previously added listener (unknown listeners are ignored)."""
        if fn in self._listeners:
            self._listeners.remove(fn)

    def _mark_changed(self) -> None:
        self._dirty = True

    def _notify(self) -> None:
        for fn in list(self._listeners):
            fn(self)

    @contextmanager
    def _batch(self, notify: bool = True):
        """
        Group mutations so listeners hear about them once, after the outermost
        batch is done. With notify=False the pending change is dropped (used by
        self-checks that leave the state as they found it).
        """
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1
        if self._batch_depth == 0:
            if self._dirty and notify:
                self._dirty = False
                self._notify()
            elif not notify:
                self._dirty = False

    # ---------- history ----------
    @contextmanager
    def history_phase(self, phase: str):
        """
        Temporarily set the history 'phase' for recorded moves ('scramble' or 'solve').
        Usage:
            with cube.history_phase('scramble'):
                cube.perform_move(MoveType.R)
        """
        prev = self._phase
        self._phase = phase
        try:
            yield
        finally:
            self._phase = prev

    @contextmanager
    def no_history(self):
        """Temporarily disable history recording (undo, self-checks)."""
        prev = self._history_enabled
        self._history_enabled = False
        try:
            yield
        finally:
            self._history_enabled = prev

    @property
    def move_history(self) -> List[Move]:
        """Recorded move events, oldest first (a copy)."""
        return list(self._history)

    def get_history(self) -> pd.DataFrame:
        """
        Return the move history as a DataFrame.

        Columns:
            step (int)              : 0-based move index
            move (str)              : Singmaster token, e.g. "R'"
            face (str)              : 'U','D','R','L','F','B'
            clockwise (bool)        : True for the plain letters
            timestamp (Timestamp)   : when the move was recorded
            phase (str)             : 'scramble' or 'solve'
        """
        rows = [
            {
                "step": i,
                "move": m.type.notation,
                "face": m.type.face.letter,
                "clockwise": m.type.clockwise,
                "timestamp": pd.Timestamp(m.timestamp),
                "phase": m.phase,
            }
            for i, m in enumerate(self._history)
        ]
        return pd.DataFrame(rows, columns=HISTORY_COLUMNS)

    def moves_since_scramble(self) -> int:
        """Number of logged moves made after the scramble."""
        return sum(1 for m in self._history if m.phase != "scramble")

    # ---------- lifecycle ----------
    def reset(self) -> None:
        """Rebuild the 26 cubies in the solved configuration and clear the history."""
        with self._batch():
            self.cubies = []
            for x in range(3):
                for y in range(3):
                    for z in range(3):
                        if (x, y, z) == (1, 1, 1):
                            continue
                        self.cubies.append(Cubie(index=len(self.cubies), position=Position(x, y, z)))
            self._history.clear()
            self._mark_changed()
        logger.debug("reset: %d cubies", len(self.cubies))

    # ---------- moves ----------
    @track_history
    def _turn(self, move_type: MoveType) -> None:
        """
        Apply one quarter turn: color cycle, then position permutation, for the
        nine cubies of the turning layer. Not recorded or notified here.
        """
        assert isinstance(move_type, MoveType), f"not a move: {move_type!r}"
        face = move_type.face
        layer = self.cubies_on_face(face)
        assert len(layer) == 9, f"{face.name} layer holds {len(layer)} cubies"

        cw_colors = color_cycle_clockwise(move_type)
        for cubie in layer:
            cubie.turn(face.axis, cw_colors)

        permute = POSITION_TURNS[(face, move_type.clockwise)]
        for cubie in layer:
            cubie.position = Position(*permute(*cubie.position.as_tuple()))

        self._mark_changed()
        if self.cfg.check_invariants:
            self.assert_invariants()

    def perform_move(self, move_type: MoveType) -> None:
        """
        Turn the layer of `move_type.face` a quarter turn and record the move.

        Args:
            move_type: One of the 12 MoveType values.
        """
        logger.debug("perform_move: %s", getattr(move_type, "notation", move_type))
        with self._batch():
            self._turn(move_type)

    def apply_sequence(self, seq: str | Iterable[str | MoveType]) -> List[MoveType]:
        """
        Apply several moves as one mutation (listeners fire once at the end).

        Args:
            seq: A Singmaster string ("R U R' U'", "U2" allowed) or an iterable of
                 tokens / MoveType values.

        Returns:
            The quarter turns that were applied.

        Raises:
            ValueError: on an unknown token; nothing is applied in that case.
        """
        if isinstance(seq, str):
            moves = parse_sequence(seq)
        else:
            moves = [m if isinstance(m, MoveType) else MoveType.parse(m) for m in seq]
        with self._batch():
            for m in moves:
                self._turn(m)
        return moves

    def undo_last_move(self) -> None:
        """
        Undo the most recent move.

        The last event is popped and its inverse is applied without being
        recorded, so the state rolls back by one move and the history gets
        one entry shorter. No-op on an empty history.
        """
        if not self._history:
            logger.debug("undo_last_move: empty history")
            return
        last = self._history.pop()
        logger.debug("undo_last_move: %s -> %s", last.type.notation, last.type.inverse.notation)
        with self._batch(), self.no_history():
            self._turn(last.type.inverse)

    def scramble(self, length: Optional[int] = None, seed: Optional[int] = None) -> List[MoveType]:
        """
        Clear the history and apply a random sequence of quarter turns.

        Each move is drawn uniformly from the 12 moves minus the previous move
        and its inverse. Nothing else is filtered: R R, or R L, may appear.

        Args:
            length: Number of quarter turns; defaults to cfg.scramble_length.
            seed: RNG seed; defaults to cfg.seed.

        Returns:
            The generated moves, in order.

        Raises:
            ValueError: if length is negative.
        """
        n = self.cfg.scramble_length if length is None else length
        if not isinstance(n, int) or n < 0:
            raise ValueError(f"scramble length must be an int >= 0, got {n!r}")
        rng = random.Random(self.cfg.seed if seed is None else seed)

        had_history = bool(self._history)
        self._history.clear()
        seq: List[MoveType] = []
        prev: Optional[MoveType] = None
        with self._batch(), self.history_phase("scramble"):
            for _ in range(n):
                cand = [m for m in MOVES if prev is None or (m is not prev and m is not prev.inverse)]
                m = rng.choice(cand)
                self._turn(m)
                seq.append(m)
                prev = m
            if had_history:
                self._mark_changed()
        logger.debug("scramble: %s", " ".join(m.notation for m in seq))
        return seq

    # ---------- queries ----------
    def cubies_on_face(self, face: CubeFace) -> List[Cubie]:
        return [c for c in self.cubies if c.position.on_face(face)]

    def cubie_at(self, position: Position | Tuple[int, int, int]) -> Cubie:
        """Return the cubie currently sitting at `position`."""
        pos = position if isinstance(position, Position) else Position(*position)
        by_position = {c.position: c for c in self.cubies}
        assert pos in by_position, f"no cubie at {pos}"
        return by_position[pos]

    @property
    def is_solved(self) -> bool:
        """True if each face shows a single color (any color)."""
        for face in CubeFace:
            face_colors = {c.colors[face] for c in self.cubies_on_face(face)}
            if len(face_colors) > 1:
                return False
        return True

    def solved_fraction(self) -> float:
        """
        Fraction of the 54 outer facelets that match the center of their face.

        Returns:
            Float in [0, 1]; 1.0 iff the cube is solved.
        """
        F = self.to_facelets()
        ok = sum(int((F[f] == F[f, 1, 1]).sum()) for f in range(6))
        return ok / 54.0

    # ---------- checkpoints ----------
    def snapshot(self) -> List[Cubie]:
        """Independent deep copy of the cubie set (history is not included)."""
        return [c.copy() for c in self.cubies]

    def restore(self, snap: List[Cubie]) -> None:
        """
        Write a snapshot back onto the cubies, matched by index. The cubie
        objects themselves (and the history) are kept.
        """
        assert len(snap) == self.N_CUBIES, f"snapshot holds {len(snap)} cubies"
        assert sorted(s.index for s in snap) == list(range(self.N_CUBIES)), "snapshot indices are not 0..25"
        assert len({s.position for s in snap}) == self.N_CUBIES, "two snapshot cubies share a slot"
        with self._batch():
            for saved in snap:
                target = self.cubies[saved.index]
                target.position = saved.position
                target.colors = dict(saved.colors)
            self.assert_invariants()
            self._mark_changed()
        logger.debug("restore: %d cubies", len(snap))

    # ---------- VIEWS ----------
    def to_hashable(self) -> Tuple[Tuple[Coords, Tuple[int, ...]], ...]:
        """Full (position, colors) state of every cubie, ordered by index."""
        return tuple(c.state() for c in self.cubies)

    def to_facelets(self) -> np.ndarray:
        """
        Generate a 6×3×3 integer array of outer facelet colors.

        The first axis follows CubeFace order (top, bottom, front, back, right,
        left); values are CubeColor values. Rows/cols are as seen looking at the
        face from outside (see FACELET_GRID).
        """
        F = np.full((6, 3, 3), CubeColor.BLACK.value, dtype=int)
        for cubie in self.cubies:
            for face in cubie.visible_faces():
                r, c = FACELET_GRID[face](cubie.position)
                F[face.value, r, c] = cubie.colors[face].value
        return F

    def print_net(self, use_color: bool = True) -> None:
        """
        Print a compact text-based cube net to the terminal.

              [U]
        [L] [F] [R] [B]
              [D]

        Args:
            use_color: If True, apply ANSI color codes to the color letters.
        """
        F = self.to_facelets()
        layout = {
            CubeFace.TOP: (0, 1),
            CubeFace.LEFT: (1, 0),
            CubeFace.FRONT: (1, 1),
            CubeFace.RIGHT: (1, 2),
            CubeFace.BACK: (1, 3),
            CubeFace.BOTTOM: (2, 1),
        }
        COLOR_CODES = {
            CubeColor.WHITE: "\033[97m",
            CubeColor.YELLOW: "\033[93m",
            CubeColor.RED: "\033[91m",
            CubeColor.ORANGE: "\033[33m",
            CubeColor.GREEN: "\033[92m",
            CubeColor.BLUE: "\033[94m",
            CubeColor.BLACK: "\033[90m",
        }
        RESET = "\033[0m"

        SCALE = 3
        grid = [[" " for _ in range(4 * SCALE)] for _ in range(3 * SCALE)]
        for face, (rt, ct) in layout.items():
            for r in range(3):
                for c in range(3):
                    col = CubeColor(int(F[face.value, r, c]))
                    letter = "." if col.is_interior else col.name[0]
                    grid[rt * SCALE + r][ct * SCALE + c] = (
                        f"{COLOR_CODES[col]}{letter}{RESET}" if use_color else letter
                    )

        for row in grid:
            print(" ".join(row).rstrip())

    # ---------- sanity ----------
    def assert_invariants(self) -> None:
        """
        Verify that positions and colors still describe a physical cube.

        Raises:
            AssertionError: on duplicate/missing cubies or positions, a layer
                            that isn't 9 cubies, an interior (BLACK) facelet on
                            the outside, or a color count other than 9.
        """
        assert len(self.cubies) == self.N_CUBIES, len(self.cubies)
        assert [c.index for c in self.cubies] == list(range(self.N_CUBIES))
        assert len({c.position for c in self.cubies}) == self.N_CUBIES, "two cubies share a slot"
        for face in CubeFace:
            n = len(self.cubies_on_face(face))
            assert n == 9, f"{face.name} layer holds {n} cubies"
        for c in self.cubies:
            visible = c.visible_colors()
            assert CubeColor.BLACK not in visible.values(), f"interior facelet showing on {c!r}"
            n_black = sum(1 for col in c.colors.values() if col is CubeColor.BLACK)
            assert n_black == 6 - len(visible), f"facelets lost on {c!r}"
        counts = np.bincount(self.to_facelets().ravel(), minlength=7)
        assert counts[:6].tolist() == [9] * 6, counts.tolist()

    def check_move(self, move_type: MoveType) -> None:
        """
        Test a single move for internal consistency, leaving the cube as it was.

        Performs:
          - m followed by m'  → identity
          - m⁴                → identity
          - assert_invariants() after each turn.

        Args:
            move_type: One of the 12 MoveType values.
        """
        snap = self.to_hashable()
        with self._batch(notify=False), self.no_history():
            self._turn(move_type)
            self.assert_invariants()
            self._turn(move_type.inverse)
            assert self.to_hashable() == snap, f"{move_type.notation} then inverse is not identity"
            for _ in range(4):
                self._turn(move_type)
                self.assert_invariants()
            assert self.to_hashable() == snap, f"{move_type.notation}^4 is not identity"

    def __repr__(self) -> str:
        return f"Cube(solved={self.is_solved}, moves={len(self._history)})"
