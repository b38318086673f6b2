"""Pytest configuration and fixtures for animalsim tests."""

import random

import pytest

from animalsim import SimulationConfig


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def small_config():
    """A world small and short-lived enough to run whole generations quickly."""
    return SimulationConfig(num_animals=6, num_food=8, generation_length=30)
