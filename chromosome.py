"""
Chromosome bridge for EvoForage.

A chromosome is the flat float64 vector of every weight and bias of an
animal's brain (see NeuralNetwork.to_genes). The genetic algorithm only ever
sees chromosomes; this module converts animals to chromosomes and back.
"""

import numpy as np

from animal import Animal, brain_topology
from neural_network import NeuralNetwork, parameter_count


def to_chromosome(animal: Animal) -> np.ndarray:
    """Flatten an animal's brain into its chromosome."""
    return animal.brain.to_genes()


def from_chromosome(rng: np.random.Generator, config, genes) -> Animal:
    """
    Rebuild a brain from genes and put it in a freshly spawned animal:
    random position and rotation, initial speed, zero fitness.
    Raises ShapeMismatch if genes do not fit the configured topology.
    """
    brain = NeuralNetwork.from_genes(brain_topology(config), genes)
    return Animal.spawn(rng, config, brain)


def chromosome_length(config) -> int:
    """Number of genes every chromosome of a run carries."""
    return parameter_count(brain_topology(config))


def gene_diversity(chromosomes: list) -> float:
    """
    Population diversity as the mean per-gene standard deviation.
    0 means every chromosome is identical.
    """
    if len(chromosomes) < 2:
        return 0.0
    genes = np.stack(chromosomes)
    return float(genes.std(axis=0).mean())
