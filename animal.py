"""
Animal class for EvoForage.

Each animal has:
  - a position on the unit torus and a rotation (heading, radians)
  - a speed within [speed_min, speed_max]
  - a NeuralNetwork brain: eye cells → hidden → (Δspeed, Δrotation)
  - fitness: number of foods eaten this generation

Every simulation step the animal:
  1. Looks at the foods through the shared Eye
  2. Runs its neural network
  3. Accelerates / turns, then moves forward along its heading
"""

import numpy as np

from geometry import TAU, heading, wrap, wrap_position
from neural_network import NeuralNetwork


def brain_topology(config) -> list:
    """eye cells → 2·cells hidden neurons → (Δspeed, Δrotation)"""
    return [config.cells, 2 * config.cells, 2]


class Animal:
    """
    A single agent in the evolutionary simulation.
    """
    __slots__ = ("position", "rotation", "speed", "brain", "fitness")

    def __init__(self, position: np.ndarray, rotation: float, speed: float,
                 brain: NeuralNetwork):
        self.position = np.asarray(position, dtype=np.float64)
        self.rotation = wrap(float(rotation), TAU)
        self.speed    = float(speed)
        self.brain    = brain
        self.fitness  = 0

    @classmethod
    def random(cls, rng: np.random.Generator, config) -> "Animal":
        """A brand new animal with a random brain."""
        brain = NeuralNetwork.random(rng, brain_topology(config))
        return cls.spawn(rng, config, brain)

    @classmethod
    def spawn(cls, rng: np.random.Generator, config,
              brain: NeuralNetwork) -> "Animal":
        """Place an animal carrying the given brain at a random spot."""
        position = rng.random(2)
        rotation = rng.uniform(0.0, TAU)
        return cls(position, rotation, config.animal_speed, brain)

    # ──────────────────────────────────────────────────────────────────────────

    def step(self, eye, food_positions: np.ndarray, config):
        """Execute one simulation step: see → think → move."""
        vision = eye.process(self.position, self.rotation, food_positions)
        d_speed, d_rotation = self.brain.forward(vision)

        self.speed = float(np.clip(self.speed + d_speed * config.speed_accel,
                                   config.speed_min, config.speed_max))
        self.rotation = wrap(self.rotation + float(d_rotation) * config.rotation_accel,
                             TAU)
        self.position = wrap_position(self.position + heading(self.rotation) * self.speed)

    def __repr__(self):
        return (f"Animal(x={self.position[0]:.4f}, y={self.position[1]:.4f}, "
                f"rotation={self.rotation:.3f}, speed={self.speed:.5f}, "
                f"fitness={self.fitness})")
