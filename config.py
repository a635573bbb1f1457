"""
EvoForage Configuration
All tunable parameters for the foraging simulation.

The module constants are the defaults; a run is described by an immutable
SimulationConfig built from them (optionally overridden by a JSON mapping).
"""

import json
import math
from dataclasses import dataclass, asdict, fields

from errors import InvalidConfig

# ─── Kinematics ───────────────────────────────────────────────────────────────
SPEED_MIN      = 0.0001          # slowest an animal may move per step
SPEED_MAX      = 0.0025          # fastest an animal may move per step
SPEED_ACCEL    = 0.05            # brain output 0 is scaled by this
ROTATION_ACCEL = math.pi / 4     # brain output 1 is scaled by this (radians)
ANIMAL_SPEED   = 0.002           # speed of a freshly created animal

# ─── Genetic Algorithm ────────────────────────────────────────────────────────
MUTATION_CHANCE   = 0.01   # probability a single gene is perturbed
MUTATION_WEIGHT   = 0.3    # largest perturbation added to a gene
MAX_GENERATION    = 2000   # generations the runner trains for
GENERATION_LENGTH = 2500   # simulator steps each generation lives

# ─── World ────────────────────────────────────────────────────────────────────
NUM_ANIMALS   = 40
NUM_FOODS     = 60
ANIMAL_RADIUS = 0.005      # animal and food touch when their
FOOD_RADIUS   = 0.005      # centres are within the summed radii

# ─── Eye ──────────────────────────────────────────────────────────────────────
FOV_RANGE = 0.5                       # how far an animal sees
FOV_ANGLE = math.pi + math.pi / 4     # how wide an animal sees
CELLS     = 10                        # photoreceptors (= brain inputs)

# ─── Output / Logging ─────────────────────────────────────────────────────────
SAVE_DIR       = "output"   # directory for charts and the CSV log
CHART_INTERVAL = 50         # redraw the fitness chart every N generations
LOG_CSV        = True       # write per-generation CSV log

# Names accepted from the browser client, mapped to config fields
CAMEL_CASE_ALIASES = {
    "speedMin":         "speed_min",
    "speedMax":         "speed_max",
    "speedAccel":       "speed_accel",
    "rotationAccel":    "rotation_accel",
    "mutationChance":   "mutation_chance",
    "mutationWeight":   "mutation_weight",
    "maxGeneration":    "max_generation",
    "generationLength": "generation_length",
    "numAnimals":       "num_animals",
    "numFoods":         "num_foods",
    "animalSpeed":      "animal_speed",
    "animalRadius":     "animal_radius",
    "foodRadius":       "food_radius",
    "fovRange":         "fov_range",
    "fovAngle":         "fov_angle",
}

_POSITIVE_FIELDS = (
    "speed_min", "speed_max", "speed_accel", "rotation_accel",
    "mutation_chance", "mutation_weight", "animal_speed",
    "animal_radius", "food_radius", "fov_range", "fov_angle",
)
_COUNT_FIELDS = (
    "cells", "num_animals", "num_foods", "generation_length", "max_generation",
)


@dataclass(frozen=True)
class SimulationConfig:
    """Everything a run needs to know, fixed at construction."""

    speed_min:         float = SPEED_MIN
    speed_max:         float = SPEED_MAX
    speed_accel:       float = SPEED_ACCEL
    rotation_accel:    float = ROTATION_ACCEL
    mutation_chance:   float = MUTATION_CHANCE
    mutation_weight:   float = MUTATION_WEIGHT
    max_generation:    int   = MAX_GENERATION
    generation_length: int   = GENERATION_LENGTH
    num_animals:       int   = NUM_ANIMALS
    num_foods:         int   = NUM_FOODS
    animal_speed:      float = ANIMAL_SPEED
    animal_radius:     float = ANIMAL_RADIUS
    food_radius:       float = FOOD_RADIUS
    fov_range:         float = FOV_RANGE
    fov_angle:         float = FOV_ANGLE
    cells:             int   = CELLS

    def validate(self) -> "SimulationConfig":
        """Raise InvalidConfig on the first out-of-range field."""
        for name in _POSITIVE_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not value > 0:
                raise InvalidConfig(f"{name} must be > 0, got {value!r}")
        for name in _COUNT_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise InvalidConfig(f"{name} must be an integer >= 1, got {value!r}")
        if self.mutation_chance > 1.0:
            raise InvalidConfig(
                f"mutation_chance must be <= 1, got {self.mutation_chance!r}")
        if self.speed_min > self.speed_max:
            raise InvalidConfig(
                f"speed_min ({self.speed_min}) exceeds speed_max ({self.speed_max})")
        return self

    @property
    def collision_radius(self) -> float:
        return self.animal_radius + self.food_radius

    def as_dict(self) -> dict:
        return asdict(self)


def config_from_dict(data: dict) -> SimulationConfig:
    """Merge a mapping over the defaults and validate the result."""
    known = {f.name: f.type for f in fields(SimulationConfig)}
    values = {}
    for key, value in (data or {}).items():
        name = CAMEL_CASE_ALIASES.get(key, key)
        if name not in known:
            raise InvalidConfig(f"unknown config field {key!r}")
        if isinstance(value, bool):
            raise InvalidConfig(f"{key} is not a number: {value!r}")
        try:
            number = float(value)
        except (TypeError, ValueError) as exc:
            raise InvalidConfig(f"{key} is not a number: {value!r}") from exc
        if known[name] is int:
            if not number.is_integer():
                raise InvalidConfig(f"{key} must be a whole number, got {value!r}")
            values[name] = int(number)
        else:
            values[name] = number
    return SimulationConfig(**values).validate()


def load_config(path: str) -> SimulationConfig:
    """Read a JSON config file; missing fields fall back to the defaults."""
    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidConfig(f"{path}: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidConfig(f"{path}: expected a JSON object")
    return config_from_dict(data)
