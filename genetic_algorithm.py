"""
Genetic algorithm for EvoForage.

Produces the next generation's chromosomes from the current
(chromosome, fitness) pairs:

  for every slot of the new population:
    1. pick two parents by roulette-wheel (fitness-proportionate) selection
    2. uniform crossover – every gene comes from either parent, 50/50
    3. mutation – each gene is nudged with probability `mutation_chance`
       by up to ±`mutation_weight`

There is no elitism: the best individual only survives if it is picked
again by chance.
"""

from dataclasses import dataclass, asdict

import numpy as np

from errors import EmptyPopulation, InvalidConfig, ShapeMismatch

# ──────────────────────────────────────────────────────────────────────────────
# Operators
# ──────────────────────────────────────────────────────────────────────────────

def roulette_select(fitnesses: np.ndarray, rng: np.random.Generator) -> int:
    """
    Index of one individual, picked with probability proportional to its
    fitness. With zero total fitness every individual is equally likely.
    """
    n = len(fitnesses)
    if n == 0:
        raise EmptyPopulation("cannot select from an empty population")
    cumulative = np.cumsum(fitnesses, dtype=np.float64)
    total = cumulative[-1]
    if total <= 0.0:
        return int(rng.integers(0, n))
    r = rng.random() * total
    # first individual whose cumulative fitness exceeds r
    idx = int(np.searchsorted(cumulative, r, side="right"))
    return min(idx, n - 1)


def uniform_crossover(parent_a: np.ndarray, parent_b: np.ndarray,
                      rng: np.random.Generator) -> np.ndarray:
    """Each gene independently from parent A or B with equal chance."""
    if parent_a.shape != parent_b.shape:
        raise ShapeMismatch(
            f"parents differ in length: {parent_a.size} vs {parent_b.size}")
    take_a = rng.random(parent_a.size) < 0.5
    return np.where(take_a, parent_a, parent_b)


def mutate(genes: np.ndarray, chance: float, weight: float,
           rng: np.random.Generator) -> np.ndarray:
    """
    Bounded uniform mutation. For every gene a sign is drawn, then whether
    it mutates (probability `chance`), then the magnitude u ~ U[0, 1);
    a mutated gene becomes gene + sign * weight * u.
    """
    n = genes.size
    sign     = np.where(rng.random(n) < 0.5, -1.0, 1.0)
    mutated  = rng.random(n) < chance
    amount   = rng.random(n)
    return np.where(mutated, genes + sign * weight * amount, genes)


# ──────────────────────────────────────────────────────────────────────────────
# Statistics
# ──────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Statistics:
    """Fitness summary of one concluded generation."""

    generation:  int
    min_fitness: float
    max_fitness: float
    avg_fitness: float
    std_fitness: float

    @classmethod
    def from_fitnesses(cls, generation: int, fitnesses) -> "Statistics":
        f = np.asarray(fitnesses, dtype=np.float64)
        if f.size == 0:
            raise EmptyPopulation("no fitness values to summarise")
        return cls(
            generation  = int(generation),
            min_fitness = float(f.min()),
            max_fitness = float(f.max()),
            avg_fitness = float(f.mean()),
            std_fitness = float(f.std()),
        )

    def summary(self) -> str:
        return (f"generation={self.generation} "
                f"min={self.min_fitness:.4f} "
                f"max={self.max_fitness:.4f} "
                f"avg={self.avg_fitness:.4f}")

    def as_dict(self) -> dict:
        return asdict(self)


# ──────────────────────────────────────────────────────────────────────────────
# Population-level operation
# ──────────────────────────────────────────────────────────────────────────────

class GeneticAlgorithm:
    """Roulette-wheel selection + uniform crossover + bounded mutation."""

    def __init__(self, mutation_chance: float, mutation_weight: float):
        if not 0.0 <= mutation_chance <= 1.0:
            raise InvalidConfig(
                f"mutation_chance must be within [0, 1], got {mutation_chance!r}")
        if mutation_weight < 0.0:
            raise InvalidConfig(
                f"mutation_weight must be >= 0, got {mutation_weight!r}")
        self.mutation_chance = mutation_chance
        self.mutation_weight = mutation_weight

    def evolve(self, population: list, rng: np.random.Generator) -> list:
        """
        Breed a new population of the same size.

        Args:
            population: list of (chromosome, fitness) pairs
            rng:        the run's random source

        Returns:
            list of new chromosomes, same length and gene count as the input
        """
        if not population:
            raise EmptyPopulation("cannot evolve an empty population")

        chromosomes = [np.asarray(c, dtype=np.float64) for c, _ in population]
        fitnesses   = np.array([f for _, f in population], dtype=np.float64)
        length = chromosomes[0].size
        for c in chromosomes:
            if c.ndim != 1 or c.size != length:
                raise ShapeMismatch(
                    f"chromosome of {c.size} genes in a population of {length}")

        new_population = []
        for _ in range(len(population)):
            parent_a = chromosomes[roulette_select(fitnesses, rng)]
            parent_b = chromosomes[roulette_select(fitnesses, rng)]
            child = uniform_crossover(parent_a, parent_b, rng)
            child = mutate(child, self.mutation_chance, self.mutation_weight, rng)
            new_population.append(child)
        return new_population
