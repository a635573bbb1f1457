"""
Food for EvoForage.

Food never disappears: when eaten it is moved to a fresh random spot, so
the number of foods stays constant for the whole run.
"""

import numpy as np


class Food:
    __slots__ = ("position",)

    def __init__(self, position: np.ndarray):
        self.position = np.asarray(position, dtype=np.float64)

    @classmethod
    def random(cls, rng: np.random.Generator) -> "Food":
        return cls(rng.random(2))

    def relocate(self, rng: np.random.Generator):
        self.position = rng.random(2)

    def __repr__(self):
        return f"Food(x={self.position[0]:.4f}, y={self.position[1]:.4f})"
