import math
from dataclasses import dataclass, field
from typing import Tuple

# --- World Configuration ---
NUM_ANIMALS = 40  # Number of animals in every generation
NUM_FOOD = 60  # Number of food items, constant for the whole run
GENERATION_LENGTH = 2500  # Duration of one generation in ticks
EAT_RADIUS = 0.01  # Max distance between an animal and food for it to be eaten

# --- Animal Configuration ---
SPEED_MIN = 0.0002  # Lowest speed an animal can slow down to
SPEED_MAX = 0.001  # Highest speed an animal can accelerate to
SPEED_ACCEL = 0.00002  # Speed gained per tick at full speed signal
ROTATION_ACCEL = 0.1  # Max rotation per tick (radians), centered on a 0.5 signal

# --- Neural Network Configuration ---
NUM_EYE_CELLS = 9  # Number of vision cells feeding the brain
BRAIN_TOPOLOGY = (NUM_EYE_CELLS, 2 * NUM_EYE_CELLS - 2, 2)  # Vision -> hidden -> (speed, rotation)

# --- Vision Configuration (SectorEye only) ---
FOV_RANGE = 0.25  # How far an animal can see
FOV_ANGLE = math.pi + math.pi / 4  # Width of the field of view

# --- Evolution Configuration ---
MUTATION_CHANCE = 0.01  # Probability of mutation per gene
MUTATION_COEFFICIENT = 0.3  # Max magnitude of a mutation

# --- Runner Configuration ---
METRICS_PORT = 8000  # Port for the Prometheus HTTP endpoint


@dataclass
class SimulationConfig:
    """Knobs of a single simulation run, defaulting to the constants above."""

    num_animals: int = NUM_ANIMALS
    num_food: int = NUM_FOOD
    generation_length: int = GENERATION_LENGTH
    eat_radius: float = EAT_RADIUS
    speed_min: float = SPEED_MIN
    speed_max: float = SPEED_MAX
    speed_accel: float = SPEED_ACCEL
    rotation_accel: float = ROTATION_ACCEL
    topology: Tuple[int, ...] = field(default=BRAIN_TOPOLOGY)
    mutation_chance: float = MUTATION_CHANCE
    mutation_coefficient: float = MUTATION_COEFFICIENT
