"""
World for EvoForage.

The world is the unit torus holding an index-stable list of animals and a
fixed number of foods. It also resolves animal/food collisions and
produces read-only snapshots for renderers.
"""

from dataclasses import dataclass

import numpy as np

from animal import Animal
from food import Food
from geometry import wrapped_distance

# ──────────────────────────────────────────────────────────────────────────────
# Read-only snapshot
# ──────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FoodView:
    x: float
    y: float


@dataclass(frozen=True)
class AnimalView:
    x: float
    y: float
    rotation: float


@dataclass(frozen=True)
class WorldSnapshot:
    """Plain-float copy of the world; never aliases simulation state."""

    animals: tuple
    foods:   tuple

    def as_dict(self) -> dict:
        return {
            "animals": [{"x": a.x, "y": a.y, "rotation": a.rotation}
                        for a in self.animals],
            "foods":   [{"x": f.x, "y": f.y} for f in self.foods],
        }


# ──────────────────────────────────────────────────────────────────────────────

class World:
    """
    Holds every animal and food of the current generation.
    """

    def __init__(self, animals: list, foods: list, config):
        self.animals = animals
        self.foods   = foods
        self.config  = config

    @classmethod
    def random(cls, rng: np.random.Generator, config) -> "World":
        """Animals first (brain, position, rotation each), then foods."""
        animals = [Animal.random(rng, config) for _ in range(config.num_animals)]
        foods   = [Food.random(rng) for _ in range(config.num_foods)]
        return cls(animals, foods, config)

    # ──────────────────────────────────────────────────────────────────────────

    def food_positions(self) -> np.ndarray:
        """Food positions in stored order, shape (num_foods, 2)."""
        return np.array([f.position for f in self.foods], dtype=np.float64)

    def scatter_foods(self, rng: np.random.Generator):
        """Move every food to a fresh random spot."""
        for food in self.foods:
            food.relocate(rng)

    def collide(self, rng: np.random.Generator) -> int:
        """
        Let animals eat. Animals are checked in index order and foods in
        stored order; an eaten food is relocated immediately, so when two
        animals reach the same food the lower index gets it.

        Returns the number of foods eaten.
        """
        reach = self.config.collision_radius
        eaten = 0
        for animal in self.animals:
            for food in self.foods:
                if wrapped_distance(animal.position, food.position) <= reach:
                    animal.fitness += 1
                    eaten += 1
                    food.relocate(rng)
        return eaten

    def fitnesses(self) -> list:
        return [a.fitness for a in self.animals]

    def snapshot(self) -> WorldSnapshot:
        return WorldSnapshot(
            animals=tuple(AnimalView(float(a.position[0]), float(a.position[1]),
                                     float(a.rotation))
                          for a in self.animals),
            foods=tuple(FoodView(float(f.position[0]), float(f.position[1]))
                        for f in self.foods),
        )
