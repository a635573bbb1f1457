import dataclasses
import json
import math

import pytest

import config
from config import SimulationConfig, config_from_dict, load_config
from errors import InvalidConfig
from simulation import initialize


def test_defaults_are_valid():
    cfg = SimulationConfig().validate()
    assert cfg.num_animals == config.NUM_ANIMALS
    assert cfg.fov_angle == pytest.approx(math.pi + math.pi / 4)
    assert cfg.collision_radius == pytest.approx(0.01)


def test_config_is_immutable():
    cfg = SimulationConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.num_animals = 3


@pytest.mark.parametrize("field, value", [
    ("speed_min", 0.0),
    ("speed_max", -1.0),
    ("speed_accel", 0.0),
    ("rotation_accel", 0.0),
    ("mutation_chance", 0.0),
    ("mutation_chance", 1.5),
    ("mutation_weight", 0.0),
    ("fov_range", 0.0),
    ("fov_angle", -1.0),
    ("cells", 0),
    ("num_animals", 0),
    ("num_foods", 0),
    ("generation_length", 0),
    ("animal_radius", 0.0),
])
def test_out_of_range_fields(field, value):
    with pytest.raises(InvalidConfig):
        SimulationConfig(**{field: value}).validate()


def test_speed_min_above_max():
    with pytest.raises(InvalidConfig):
        SimulationConfig(speed_min=0.01, speed_max=0.001).validate()


def test_initialize_rejects_bad_config():
    with pytest.raises(InvalidConfig):
        initialize(SimulationConfig(num_foods=0))


def test_from_dict_merges_over_defaults():
    cfg = config_from_dict({"num_animals": 12, "fovRange": "0.25"})
    assert cfg.num_animals == 12
    assert cfg.fov_range == 0.25
    assert cfg.num_foods == config.NUM_FOODS


def test_from_dict_unknown_field():
    with pytest.raises(InvalidConfig):
        config_from_dict({"gravity": 9.81})


def test_from_dict_not_a_number():
    with pytest.raises(InvalidConfig):
        config_from_dict({"cells": "many"})


def test_load_config(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"cells": 5, "numFoods": 3}))
    cfg = load_config(str(path))
    assert cfg.cells == 5
    assert cfg.num_foods == 3


def test_load_config_rejects_non_object(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("[1, 2]")
    with pytest.raises(InvalidConfig):
        load_config(str(path))


@pytest.mark.parametrize("data", [{"cells": 2.7}, {"numAnimals": "3.5"},
                                  {"num_foods": True}])
def test_from_dict_rejects_non_whole_counts(data):
    with pytest.raises(InvalidConfig):
        config_from_dict(data)


def test_from_dict_accepts_whole_float_counts():
    assert config_from_dict({"cells": 4.0}).cells == 4
