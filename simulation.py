"""
Simulation Engine for EvoForage.

Orchestrates the evolutionary loop:
  for each generation:
    1. Run `generation_length` steps: every animal sees, thinks and moves,
       then animals eat the foods they touch
    2. Turn every animal into (chromosome, fitness)
    3. Breed the next generation with the genetic algorithm
    4. Rebuild the animals from the new chromosomes, scatter the foods
    5. Report fitness statistics

The simulation never stops by itself; the caller decides how many
generations to run (see main.py).
"""

import numpy as np

from chromosome import from_chromosome, gene_diversity, to_chromosome
from config import SimulationConfig
from eye import Eye
from genetic_algorithm import GeneticAlgorithm, Statistics
from world import World, WorldSnapshot


class Simulation:
    """
    Main simulation controller. Owns its world, config and random source.
    """

    def __init__(self, config: SimulationConfig = None, seed: int = None,
                 rng: np.random.Generator = None):
        self.config = (config if config is not None else SimulationConfig()).validate()
        self.rng    = rng if rng is not None else np.random.default_rng(seed)
        self.eye    = Eye.from_config(self.config)
        self.ga     = GeneticAlgorithm(self.config.mutation_chance,
                                       self.config.mutation_weight)
        self.world  = World.random(self.rng, self.config)

        # History
        self.generation = 0      # completed generations
        self.age        = 0      # steps taken in the current generation
        self.stats      = []     # list of dicts, one per generation

    # ──────────────────────────────────────────────────────────────────────────
    # Stepping
    # ──────────────────────────────────────────────────────────────────────────

    def step(self):
        """Advance the world by one step."""
        food_positions = self.world.food_positions()
        for animal in self.world.animals:
            animal.step(self.eye, food_positions, self.config)
        self.world.collide(self.rng)
        self.age += 1

    def tick(self):
        """
        One step; when that completes the generation, evolve as well.
        Returns the generation's Statistics, or None mid-generation.
        """
        self.step()
        if self.age >= self.config.generation_length:
            return self.evolve()
        return None

    def fast_forward(self) -> str:
        """Run the rest of the current generation and evolve once."""
        while True:
            stats = self.tick()
            if stats is not None:
                return stats.summary()

    # ──────────────────────────────────────────────────────────────────────────
    # Evolution
    # ──────────────────────────────────────────────────────────────────────────

    def evolve(self) -> Statistics:
        """
        Replace the population with its offspring and return the fitness
        statistics of the generation that just ended.
        """
        population = [(to_chromosome(a), a.fitness) for a in self.world.animals]
        stats = Statistics.from_fitnesses(self.generation,
                                          [f for _, f in population])

        new_chromosomes = self.ga.evolve(population, self.rng)
        self.world.animals = [from_chromosome(self.rng, self.config, genes)
                              for genes in new_chromosomes]
        self.world.scatter_foods(self.rng)

        record = stats.as_dict()
        record["diversity"] = round(gene_diversity(new_chromosomes), 6)
        self.stats.append(record)

        self.generation += 1
        self.age = 0
        return stats

    # ──────────────────────────────────────────────────────────────────────────

    def world_snapshot(self) -> WorldSnapshot:
        return self.world.snapshot()


def initialize(config: SimulationConfig = None, seed: int = None,
               rng: np.random.Generator = None) -> Simulation:
    """Validate the config and build a fresh simulation."""
    return Simulation(config, seed=seed, rng=rng)
