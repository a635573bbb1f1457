import numpy as np
import pytest

from config import SimulationConfig


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def small_config():
    return SimulationConfig(
        num_animals=6,
        num_foods=8,
        generation_length=25,
        cells=3,
    )
