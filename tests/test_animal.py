import math

import numpy as np
import pytest

from animal import Animal, brain_topology
from chromosome import (chromosome_length, from_chromosome, gene_diversity,
                        to_chromosome)
from config import SimulationConfig
from errors import ShapeMismatch
from eye import Eye
from geometry import TAU
from neural_network import NeuralNetwork, parameter_count

CONFIG = SimulationConfig(cells=3, speed_min=0.001, speed_max=0.02,
                          animal_speed=0.01)
# [3, 6, 2]: 24 genes for the hidden layer, then 12 output weights,
# then the two output biases
SPEED_BIAS, ROTATION_BIAS = 36, 37


def brain_with(genes=None):
    values = np.zeros(parameter_count(brain_topology(CONFIG)))
    for index, value in (genes or {}).items():
        values[index] = value
    return NeuralNetwork.from_genes(brain_topology(CONFIG), values)


def test_brain_topology():
    assert brain_topology(CONFIG) == [3, 6, 2]


def test_random_animal(rng):
    animal = Animal.random(rng, CONFIG)
    assert animal.fitness == 0
    assert animal.speed == CONFIG.animal_speed
    assert 0.0 <= animal.rotation < TAU
    assert np.all((animal.position >= 0.0) & (animal.position < 1.0))
    assert animal.brain.topology == [3, 6, 2]


def test_moves_along_heading_and_wraps():
    eye = Eye.from_config(CONFIG)
    animal = Animal(np.array([0.999, 0.5]), 0.0, 0.01, brain_with())
    animal.step(eye, np.empty((0, 2)), CONFIG)
    assert animal.position[0] == pytest.approx(0.009)
    assert animal.position[1] == pytest.approx(0.5)
    assert 0.0 <= animal.position[0] < 1.0


def test_speed_is_clamped_to_max():
    eye = Eye.from_config(CONFIG)
    animal = Animal(np.array([0.5, 0.5]), 0.0, 0.01,
                    brain_with({SPEED_BIAS: 100.0}))
    animal.step(eye, np.empty((0, 2)), CONFIG)
    assert animal.speed == CONFIG.speed_max


def test_speed_is_clamped_to_min():
    eye = Eye.from_config(CONFIG)
    animal = Animal(np.array([0.5, 0.5]), 0.0, 0.01,
                    brain_with({SPEED_BIAS: -100.0}))
    animal.step(eye, np.empty((0, 2)), CONFIG)
    assert animal.speed == CONFIG.speed_min


def test_rotation_stays_normalised():
    eye = Eye.from_config(CONFIG)
    animal = Animal(np.array([0.5, 0.5]), 0.1, 0.01,
                    brain_with({ROTATION_BIAS: -1.0}))
    animal.step(eye, np.empty((0, 2)), CONFIG)
    expected = (0.1 - CONFIG.rotation_accel) % TAU
    assert animal.rotation == pytest.approx(expected)
    assert 0.0 <= animal.rotation < TAU


def test_chromosome_length(rng):
    animal = Animal.random(rng, CONFIG)
    genes = to_chromosome(animal)
    assert genes.shape == (chromosome_length(CONFIG),)
    assert chromosome_length(CONFIG) == 3 * 6 + 6 + 6 * 2 + 2


def test_from_chromosome_builds_fresh_animal(rng):
    parent = Animal.random(rng, CONFIG)
    parent.fitness = 9
    parent.speed = CONFIG.speed_max

    child = from_chromosome(rng, CONFIG, to_chromosome(parent))
    assert np.array_equal(to_chromosome(child), to_chromosome(parent))
    assert child.fitness == 0
    assert child.speed == CONFIG.animal_speed
    assert 0.0 <= child.rotation < TAU
    assert child.brain is not parent.brain


def test_from_chromosome_wrong_length(rng):
    with pytest.raises(ShapeMismatch):
        from_chromosome(rng, CONFIG, np.zeros(5))


def test_gene_diversity():
    same = [np.ones(4), np.ones(4), np.ones(4)]
    assert gene_diversity(same) == 0.0
    assert gene_diversity([np.zeros(4)]) == 0.0
    assert gene_diversity([np.zeros(2), np.full(2, 2.0)]) == pytest.approx(1.0)
