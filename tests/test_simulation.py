"""Tests for the per-tick orchestrator."""

import math
import random

import numpy as np
import pytest

from animalsim import SectorEye, Simulation, SimulationConfig, Statistics
from animalsim.config import SPEED_MAX, SPEED_MIN
from animalsim.network import NeuralNetwork
from animalsim.world import Animal, Food, Position


def constant_brain(speed_signal, rotation_signal, inputs=9):
    """Brain whose outputs are fixed by its biases (all weights zero)."""
    return NeuralNetwork.from_weights(
        (inputs, 2),
        [speed_signal] + [0.0] * inputs + [rotation_signal] + [0.0] * inputs,
    )


@pytest.fixture
def sim(seeded_rng, small_config):
    return Simulation.random(seeded_rng, config=small_config)


class TestCreation:
    def test_reference_defaults(self, seeded_rng):
        sim = Simulation.random(seeded_rng)
        world = sim.world()
        assert len(world.animals) == 40
        assert len(world.foods) == 60
        assert sim.ga.mutation.chance == 0.01
        assert sim.ga.mutation.coefficient == 0.3
        assert sim.age == 0

    def test_world_snapshot(self, sim):
        world = sim.world()
        assert len(world.animals) == 6
        assert len(world.foods) == 8
        for animal in world.animals:
            assert animal.speed == SPEED_MIN
            assert animal.satiation == 0


class TestCollisions:
    def test_eating_food_increments_satiation_and_moves_food(self, sim, seeded_rng):
        animal = sim._world.animals[0]
        food = sim._world.foods[0]
        food.position = Position(animal.position.x + 0.005, animal.position.y)
        sim.process_collisions(seeded_rng)
        assert animal.satiation >= 1
        assert sim.food_eaten >= 1
        assert food.position != Position(animal.position.x + 0.005, animal.position.y)

    def test_one_animal_can_eat_several_foods(self, small_config, seeded_rng):
        animal = Animal(constant_brain(0.0, 0.5), position=Position(0.5, 0.5))
        foods = [Food(Position(0.5, 0.5)), Food(Position(0.505, 0.5)), Food(Position(0.5, 0.509))]
        sim = Simulation.random(seeded_rng, config=small_config)
        sim._world.animals = [animal]
        sim._world.foods = foods
        # relocations are drawn from this rng; keep them far from the animal
        rng = random.Random(0)
        sim.process_collisions(rng)
        assert animal.satiation == 3

    def test_food_just_out_of_reach(self, sim, seeded_rng):
        animal = Animal(constant_brain(0.0, 0.5), position=Position(0.5, 0.5))
        sim._world.animals = [animal]
        sim._world.foods = [Food(Position(0.5, 0.52))]
        sim.process_collisions(seeded_rng)
        assert animal.satiation == 0


class TestBrains:
    def test_full_speed_signal_accelerates(self, sim):
        animal = Animal(constant_brain(1.0, 0.5), position=Position(0.5, 0.5))
        sim._world.animals = [animal]
        sim.process_brains()
        assert animal.speed == pytest.approx(SPEED_MIN + 0.00002)
        assert animal.rotation == pytest.approx(0.0)

    def test_speed_is_clamped(self, sim):
        animal = Animal(constant_brain(5.0, 0.5), position=Position(0.5, 0.5), speed=SPEED_MAX)
        sim._world.animals = [animal]
        sim.process_brains()
        assert animal.speed == SPEED_MAX

    def test_rotation_signal(self, sim):
        animal = Animal(constant_brain(0.0, 1.0), position=Position(0.5, 0.5))
        sim._world.animals = [animal]
        sim.process_brains()
        assert animal.rotation == pytest.approx(0.05)

    def test_zero_output_turns_right(self, sim):
        # ReLU output 0 -> rotation signal 0 -> -0.05 rad per tick
        animal = Animal(constant_brain(0.0, -3.0), position=Position(0.5, 0.5))
        sim._world.animals = [animal]
        sim.process_brains()
        assert animal.rotation == pytest.approx(-0.05)
        assert animal.speed == SPEED_MIN


class TestMovement:
    def test_moves_along_heading(self, sim):
        animal = Animal(constant_brain(0.0, 0.5), position=Position(0.5, 0.5), rotation=math.pi / 2, speed=0.001)
        sim._world.animals = [animal]
        sim.process_movements()
        assert animal.position.x == pytest.approx(0.5)
        assert animal.position.y == pytest.approx(0.501)

    def test_wraps_around(self, sim):
        animal = Animal(constant_brain(0.0, 0.5), position=Position(0.9995, 0.0001), rotation=-math.pi / 4, speed=0.001)
        sim._world.animals = [animal]
        sim.process_movements()
        assert 0.0 <= animal.position.x < 0.001
        assert 0.999 < animal.position.y < 1.0

    def test_positions_stay_in_unit_square(self, sim, seeded_rng):
        for _ in range(200):
            sim.step(seeded_rng)
            for animal in sim.world().animals:
                x, y = animal.position
                assert 0.0 <= x < 1.0 and 0.0 <= y < 1.0


class TestGenerations:
    def test_step_returns_none_until_threshold(self, sim, seeded_rng):
        for _ in range(30):
            assert sim.step(seeded_rng) is None
        assert sim.age == 30
        stats = sim.step(seeded_rng)
        assert isinstance(stats, Statistics)
        assert sim.age == 0
        assert sim.generation == 1

    def test_train_runs_one_generation(self, sim, seeded_rng):
        stats = sim.train(seeded_rng)
        assert stats.min_fitness <= stats.avg_fitness <= stats.max_fitness
        assert sim.age == 0
        stats = sim.train(seeded_rng)
        assert sim.generation == 2

    def test_evolve_uses_satiation_and_resets_world(self, sim, seeded_rng):
        for i, animal in enumerate(sim._world.animals):
            animal.satiation = i
        old_foods = [(f.position.x, f.position.y) for f in sim._world.foods]

        stats = sim.evolve(seeded_rng)

        assert stats == Statistics(0.0, 5.0, 2.5)
        world = sim.world()
        assert len(world.animals) == 6
        assert len(world.foods) == 8
        assert all(a.satiation == 0 for a in world.animals)
        assert all(a.position != (0.5, 0.5) for a in world.animals)
        assert [f for f in world.foods] != old_foods

    def test_offspring_brains_match_chromosomes(self, sim, seeded_rng):
        sim.train(seeded_rng)
        for animal in sim._world.animals:
            np.testing.assert_array_equal(animal.chromosome, animal.brain.chromosome())


class TestDeterminism:
    def test_same_seed_same_world(self, small_config):
        def run(ticks):
            rng = random.Random(1234)
            sim = Simulation.random(rng, config=small_config, eye=SectorEye())
            for _ in range(ticks):
                sim.step(rng)
            return sim.world()

        assert run(75) == run(75)

    def test_different_seed_different_world(self, small_config):
        a = Simulation.random(random.Random(1), config=small_config).world()
        b = Simulation.random(random.Random(2), config=small_config).world()
        assert a != b

    def test_numpy_generator_satisfies_rng_contract(self, small_config):
        rng = np.random.default_rng(5)
        sim = Simulation.random(rng, config=small_config)
        assert isinstance(sim.train(rng), Statistics)


def test_custom_topology(seeded_rng):
    config = SimulationConfig(num_animals=3, num_food=3, generation_length=5, topology=(4, 3, 2))
    sim = Simulation.random(seeded_rng, config=config, eye=SectorEye(cells=4))
    sim.train(seeded_rng)
    assert all(a.brain.topology == (4, 3, 2) for a in sim._world.animals)
