import math
from dataclasses import asdict, dataclass
from typing import Tuple

from .config import BRAIN_TOPOLOGY, SPEED_MIN
from .network import NeuralNetwork


# =============================================================================
# CLASS: Position
# =============================================================================
class Position:
    """A point on the unit torus: both coordinates live in [0, 1)."""

    def __init__(self, x=0.5, y=0.5):
        self.x = float(x)
        self.y = float(y)

    @classmethod
    def random(cls, rng):
        return cls(rng.random(), rng.random())

    def distance_to(self, other):
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)

    def wrap(self):
        self.x %= 1.0
        self.y %= 1.0
        # x % 1.0 rounds to 1.0 for tiny negative x
        if self.x >= 1.0:
            self.x = 0.0
        if self.y >= 1.0:
            self.y = 0.0
        return self

    def __eq__(self, other):
        return isinstance(other, Position) and (self.x, self.y) == (other.x, other.y)

    def __repr__(self):
        return f"Position({self.x}, {self.y})"


def random_rotation(rng):
    return rng.random() * 2.0 * math.pi


# =============================================================================
# CLASS: Animal and Food
# =============================================================================
class Animal:
    def __init__(self, brain, position=None, rotation=0.0, speed=SPEED_MIN, chromosome=None):
        self.position = position if position is not None else Position()
        self.rotation = rotation
        self.speed = speed
        self.brain = brain
        self.chromosome = chromosome if chromosome is not None else brain.chromosome()
        # number of foods eaten; doubles as fitness
        self.satiation = 0

    @classmethod
    def random(cls, rng, topology=BRAIN_TOPOLOGY):
        brain = NeuralNetwork.random(rng, topology)
        position = Position.random(rng)
        return cls(brain, position=position, rotation=random_rotation(rng))

    @classmethod
    def from_chromosome(cls, chromosome, topology=BRAIN_TOPOLOGY):
        """Build an offspring at the default placement; the caller positions it."""
        brain = NeuralNetwork.from_weights(topology, chromosome)
        return cls(brain, chromosome=brain.chromosome())

    @property
    def fitness(self):
        return float(self.satiation)

    def get_info(self):
        return AnimalView(
            position=(self.position.x, self.position.y),
            rotation=self.rotation,
            speed=self.speed,
            satiation=self.satiation,
        )


class Food:
    def __init__(self, position):
        self.position = position

    @classmethod
    def random(cls, rng):
        return cls(Position.random(rng))


# =============================================================================
# CLASS: World and its read-only snapshot
# =============================================================================
class World:
    def __init__(self, animals, foods):
        self.animals = list(animals)
        self.foods = list(foods)

    @classmethod
    def random(cls, rng, num_animals, num_food, topology=BRAIN_TOPOLOGY):
        animals = [Animal.random(rng, topology) for _ in range(num_animals)]
        foods = [Food.random(rng) for _ in range(num_food)]
        return cls(animals, foods)

    def snapshot(self):
        return WorldSnapshot(
            animals=tuple(animal.get_info() for animal in self.animals),
            foods=tuple((food.position.x, food.position.y) for food in self.foods),
        )


@dataclass(frozen=True)
class AnimalView:
    position: Tuple[float, float]
    rotation: float
    speed: float
    satiation: int


@dataclass(frozen=True)
class WorldSnapshot:
    animals: Tuple[AnimalView, ...]
    foods: Tuple[Tuple[float, float], ...]

    def to_dict(self):
        return {
            "animals": [asdict(animal) for animal in self.animals],
            "foods": [{"x": x, "y": y} for x, y in self.foods],
        }
