"""
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: Helpers for whoever draws the cube: a render-handle side table, a matplotlib
net and a listener that reprints the terminal net after every change.

"""
from __future__ import annotations

from typing import Any, Dict, Generic, Iterator, Optional, Tuple, TypeVar

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from rubik.faces import CubeColor, CubeFace

H = TypeVar("H")

# display colors for the palette (BLACK is the interior sentinel)
MPL_COLORS: Dict[CubeColor, str] = {
    CubeColor.WHITE: "#f2f2f2",
    CubeColor.YELLOW: "#ffd900",
    CubeColor.RED: "#e61a1a",
    CubeColor.ORANGE: "#ff8000",
    CubeColor.GREEN: "#00b333",
    CubeColor.BLUE: "#004dcc",
    CubeColor.BLACK: "#1a1a1a",
}

# face -> (row, col) of its 3x3 block in the net
#       [U]
# [L] [F] [R] [B]
#       [D]
NET_LAYOUT: Dict[CubeFace, Tuple[int, int]] = {
    CubeFace.TOP: (0, 1),
    CubeFace.LEFT: (1, 0),
    CubeFace.FRONT: (1, 1),
    CubeFace.RIGHT: (1, 2),
    CubeFace.BACK: (1, 3),
    CubeFace.BOTTOM: (2, 1),
}


class RenderHandles(Generic[H]):
    """
    Side table from cubie index (0..25) to whatever handle a renderer keeps
    for that cubie (scene node, artist, ...). Keeps presentation objects out
    of the Cubie records; indices are stable for the life of a cube.
    """

    def __init__(self):
        self._handles: Dict[int, H] = {}

    def bind(self, index: int, handle: H) -> None:
        assert 0 <= index < 26, f"cubie index out of range: {index}"
        self._handles[index] = handle

    def get(self, index: int) -> Optional[H]:
        return self._handles.get(index)

    def unbind(self, index: int) -> Optional[H]:
        return self._handles.pop(index, None)

    def clear(self) -> None:
        self._handles.clear()

    def __contains__(self, index: int) -> bool:
        return index in self._handles

    def __len__(self) -> int:
        return len(self._handles)

    def __iter__(self) -> Iterator[Tuple[int, H]]:
        return iter(sorted(self._handles.items()))


def plot_net(cube, ax: plt.Axes | None = None, edgecolor: str = "k", title: str | None = None) -> plt.Axes:
    """
    Draw the unfolded cube (U above F, L F R B in a row, D below) with matplotlib.

    Args:
        cube: Cube instance (reads cube.to_facelets()).
        ax: Optional axis to plot on. If None, a new figure is created.
        edgecolor: Edge color for sticker outlines.
        title: Optional axis title.

    Returns:
        The axis that was drawn on.
    """
    F = cube.to_facelets()
    if ax is None:
        fig = plt.figure(figsize=(6, 4.5))
        ax = fig.add_subplot(111)

    for face, (rt, ct) in NET_LAYOUT.items():
        for r in range(3):
            for c in range(3):
                col = MPL_COLORS[CubeColor(int(F[face.value, r, c]))]
                # y grows upwards in matplotlib, rows grow downwards in the net
                x0 = ct * 3 + c
                y0 = 9 - (rt * 3 + r) - 1
                ax.add_patch(Rectangle((x0, y0), 1, 1, facecolor=col, edgecolor=edgecolor))

    ax.set_xlim(0, 12)
    ax.set_ylim(0, 9)
    ax.set_aspect("equal")
    ax.set_axis_off()
    if title is not None:
        ax.set_title(title)
    return ax


class NetPrinter:
    """
    Listener that prints the terminal net each time the cube changes.

    Usage:
        printer = NetPrinter(use_color=False)
        cube.add_listener(printer)
    """

    def __init__(self, use_color: bool = True, show_history: bool = True):
        self.use_color = use_color
        self.show_history = show_history
        self.calls = 0

    def __call__(self, cube: Any) -> None:
        self.calls += 1
        cube.print_net(use_color=self.use_color)
        if self.show_history:
            moves = " ".join(str(m) for m in cube.move_history)
            print(f"moves: {moves or '-'}  solved: {cube.is_solved}")
