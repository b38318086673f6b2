from .config import SimulationConfig
from .errors import (
    AnimalSimError,
    ChromosomeLengthError,
    EmptyPopulation,
    ExcessWeights,
    InsufficientWeights,
    InvalidFitness,
    InvalidTopology,
    ShapeMismatch,
)
from .genetics import (
    GeneticAlgorithm,
    PerturbationMutation,
    RouletteWheelSelection,
    Statistics,
    UniformCrossover,
)
from .network import NeuralNetwork
from .simulation import Simulation
from .vision import BlindEye, SectorEye
from .world import WorldSnapshot

__all__ = [
    "AnimalSimError",
    "BlindEye",
    "ChromosomeLengthError",
    "EmptyPopulation",
    "ExcessWeights",
    "GeneticAlgorithm",
    "InsufficientWeights",
    "InvalidFitness",
    "InvalidTopology",
    "NeuralNetwork",
    "PerturbationMutation",
    "RouletteWheelSelection",
    "SectorEye",
    "ShapeMismatch",
    "Simulation",
    "SimulationConfig",
    "Statistics",
    "UniformCrossover",
    "WorldSnapshot",
]
