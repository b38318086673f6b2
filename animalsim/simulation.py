import logging
import math
from functools import partial

from .config import SimulationConfig
from .genetics import GeneticAlgorithm, PerturbationMutation, RouletteWheelSelection, UniformCrossover
from .vision import BlindEye
from .world import Animal, Position, World, random_rotation

logger = logging.getLogger(__name__)


class Simulation:
    """Owns the world and advances it one tick at a time.

    Every method that needs randomness takes the rng as an argument; the
    simulation never keeps one of its own, so identical rng sequences replay
    identical worlds.
    """

    def __init__(self, world, ga, config=None, eye=None):
        self.config = config or SimulationConfig()
        self._world = world
        self.ga = ga
        self.eye = eye or BlindEye(self.config.topology[0])
        self.age = 0
        self.generation = 0
        self.food_eaten = 0

    @classmethod
    def random(cls, rng, config=None, eye=None):
        config = config or SimulationConfig()
        world = World.random(rng, config.num_animals, config.num_food, config.topology)
        ga = GeneticAlgorithm(
            RouletteWheelSelection(),
            UniformCrossover(),
            PerturbationMutation(config.mutation_chance, config.mutation_coefficient),
        )
        logger.info(
            "Created world with %d animals, %d food, brain topology %s",
            len(world.animals), len(world.foods), list(config.topology),
        )
        return cls(world, ga, config=config, eye=eye)

    def world(self):
        return self._world.snapshot()

    def step(self, rng):
        """Advance one tick; return Statistics on a generation boundary, else None."""
        self.process_collisions(rng)
        self.process_brains()
        self.process_movements()

        self.age += 1
        if self.age > self.config.generation_length:
            return self.evolve(rng)
        return None

    def train(self, rng):
        """Step until the current generation ends and return its Statistics."""
        while True:
            stats = self.step(rng)
            if stats is not None:
                return stats

    # =========================================================================
    # Per-tick phases
    # =========================================================================
    def process_collisions(self, rng):
        for animal in self._world.animals:
            for food in self._world.foods:
                if animal.position.distance_to(food.position) <= self.config.eat_radius:
                    animal.satiation += 1
                    self.food_eaten += 1
                    food.position = Position.random(rng)

    def process_brains(self):
        cfg = self.config
        for animal in self._world.animals:
            vision = self.eye(animal, self._world.foods)
            response = animal.brain.propagate(vision)

            speed = min(max(float(response[0]), 0.0), 1.0)
            rotation = min(max(float(response[1]), 0.0), 1.0)

            animal.speed = min(max(animal.speed + speed * cfg.speed_accel, cfg.speed_min), cfg.speed_max)
            animal.rotation += (rotation - 0.5) * cfg.rotation_accel

    def process_movements(self):
        for animal in self._world.animals:
            animal.position.x += math.cos(animal.rotation) * animal.speed
            animal.position.y += math.sin(animal.rotation) * animal.speed
            animal.position.wrap()

    # =========================================================================
    # Generation boundary
    # =========================================================================
    def evolve(self, rng):
        self.age = 0
        factory = partial(Animal.from_chromosome, topology=self.config.topology)
        new_animals, stats = self.ga.evolve(rng, self._world.animals, factory)

        # offspring come out at the default placement
        for animal in new_animals:
            animal.position = Position.random(rng)
            animal.rotation = random_rotation(rng)
        self._world.animals = new_animals

        for food in self._world.foods:
            food.position = Position.random(rng)

        self.generation += 1
        self.food_eaten = 0
        logger.info("Generation %d complete: %s", self.generation, stats)
        return stats
