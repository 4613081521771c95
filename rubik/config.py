"""
Author: Elia Savino
github: github.com/EliaSavino

Happy Hacking!

Descr: Engine configuration.

"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class CubeConfig:
    """
    Configuration for a Cube engine.

    Pass overrides straight to the cube, e.g. ``Cube(scramble_length=10, seed=3)``.
    """

    scramble_length: int = 25
    # Quarter turns used by scramble() when no length is given.

    seed: Optional[int] = None
    # RNG seed for scramble(); None draws a fresh sequence every time.

    check_invariants: bool = False
    # Run Cube.assert_invariants() after every move. Slow, meant for tests/debugging.

    log_level: Optional[int] = None
    # If set, applied to the "rubik" logger when the cube is built.

    def __post_init__(self):
        if not isinstance(self.scramble_length, int) or self.scramble_length < 0:
            raise ValueError(f"'scramble_length' must be an int >= 0, got {self.scramble_length!r}")
        if self.seed is not None and not isinstance(self.seed, int):
            raise ValueError(f"'seed' must be an int or None, got {self.seed!r}")
