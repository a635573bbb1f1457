"""
Eye for EvoForage.

An eye splits its field of view into `cells` equal angular sectors. Every
visible food adds energy to the sector it falls into; the closer the food,
the more energy:

    energy = 1 - distance / fov_range

The resulting vector (one float per cell, all >= 0) is the brain's input.
"""

import math

import numpy as np

from errors import InvalidConfig
from geometry import TAU, wrap_angle, wrapped_delta


class Eye:
    """Vision sensor shared by every animal of a run."""

    __slots__ = ("fov_range", "fov_angle", "cells")

    def __init__(self, fov_range: float, fov_angle: float, cells: int):
        if not fov_range > 0:
            raise InvalidConfig(f"fov_range must be > 0, got {fov_range!r}")
        if not fov_angle > 0:
            raise InvalidConfig(f"fov_angle must be > 0, got {fov_angle!r}")
        if cells < 1:
            raise InvalidConfig(f"cells must be >= 1, got {cells!r}")
        self.fov_range = fov_range
        self.fov_angle = fov_angle
        self.cells     = cells

    @classmethod
    def from_config(cls, config) -> "Eye":
        return cls(config.fov_range, config.fov_angle, config.cells)

    # ──────────────────────────────────────────────────────────────────────────

    def process(self, position: np.ndarray, rotation: float,
                food_positions: np.ndarray) -> np.ndarray:
        """
        Compute the vision vector of an animal.

        Args:
            position:       animal position, shape (2,)
            rotation:       animal heading in radians
            food_positions: food positions in stored order, shape (N, 2)

        Returns:
            vision: float array of shape (cells,), values >= 0
        """
        vision = np.zeros(self.cells, dtype=np.float64)
        if len(food_positions) == 0:
            return vision

        delta    = wrapped_delta(position, food_positions)
        distance = np.hypot(delta[:, 0], delta[:, 1])
        angle    = wrap_angle(np.arctan2(delta[:, 1], delta[:, 0]) - rotation)

        half = self.fov_angle / 2.0
        visible = distance < self.fov_range
        # a full-circle eye has no edge, so nothing is cut at angle pi
        if self.fov_angle < TAU:
            visible &= np.abs(angle) < half
        if not visible.any():
            return vision

        angle    = angle[visible]
        distance = distance[visible]

        sector = np.floor((angle + half) / self.fov_angle * self.cells).astype(int)
        sector = np.clip(sector, 0, self.cells - 1)

        # np.add.at accumulates in index order, so foods sharing a sector
        # are summed in the order they are stored
        np.add.at(vision, sector, 1.0 - distance / self.fov_range)
        return vision

    def __repr__(self):
        return (f"Eye(fov_range={self.fov_range}, "
                f"fov_angle={math.degrees(self.fov_angle):.1f}°, cells={self.cells})")
