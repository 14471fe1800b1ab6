"""Pytest configuration and fixtures for system generator tests."""

import copy
import os

import numpy as np
import pytest

from sysgen import GeneratorConfig, load_config

CONFIG_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "configurations")
SOLAR_SYSTEM_PATH = os.path.join(CONFIG_DIR, "SolarSystem.yaml")


@pytest.fixture
def rng():
    """Provide a deterministic random generator for tests."""
    return np.random.default_rng(42)


@pytest.fixture
def quiet():
    """Generator config with diagnostic prints switched off."""
    return GeneratorConfig(diag_prints=False)


@pytest.fixture(scope="session")
def solar_system_path():
    """Path of the shipped solar system configuration file."""
    return SOLAR_SYSTEM_PATH


@pytest.fixture(scope="session")
def _solar_tree(solar_system_path):
    return load_config(solar_system_path)


@pytest.fixture
def solar_tree(_solar_tree):
    """The shipped solar system configuration, safe to mutate per test."""
    return copy.deepcopy(_solar_tree)


@pytest.fixture
def gens():
    """Generator section matching the shipped solar system."""
    return [
        {"name": "p_mass", "type": "mass", "min": 0.1, "max": 0.3},
        {"name": "p_trans", "type": "translation",
         "x": {"min": -10.0, "max": 10.0}, "y": {"min": -10.0, "max": 10.0}},
        {"name": "p_vel", "type": "velocity",
         "dx": {"min": -10.0, "max": 10.0}, "dy": {"min": -10.0, "max": 10.0}},
        {"name": "p_rot", "type": "rotation", "min": 0.1, "max": 0.3},
    ]
