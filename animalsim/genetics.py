"""Genetic algorithm over flat float chromosomes.

The engine is assembled from three interchangeable strategies (selection,
crossover, mutation). Individuals are duck-typed: anything with a numeric
``fitness`` and an array-like ``chromosome`` can be evolved, and new
individuals are built by a factory supplied by the caller.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Protocol, Sequence, Tuple, TypeVar

import numpy as np

from .errors import EmptyPopulation, InvalidFitness, ShapeMismatch

logger = logging.getLogger(__name__)


class Individual(Protocol):
    fitness: float
    chromosome: np.ndarray


I = TypeVar("I", bound=Individual)


@dataclass(frozen=True)
class Statistics:
    min_fitness: float
    max_fitness: float
    avg_fitness: float

    @classmethod
    def from_population(cls, population):
        if not population:
            raise EmptyPopulation()
        fitnesses = np.array([individual.fitness for individual in population], dtype=float)
        return cls(
            min_fitness=float(fitnesses.min()),
            max_fitness=float(fitnesses.max()),
            avg_fitness=float(fitnesses.mean()),
        )

    def __str__(self):
        return f"Min: {self.min_fitness:.2f}, Max: {self.max_fitness:.2f}, Avg: {self.avg_fitness:.2f}"


# =============================================================================
# Selection
# =============================================================================
class SelectionMethod(ABC):
    @abstractmethod
    def select(self, rng, population):
        """Return one member of a non-empty population."""


class RouletteWheelSelection(SelectionMethod):
    """Fitness-proportionate selection.

    An individual is picked with probability fitness / total fitness. If every
    individual scored zero there is nothing to be proportional to, so the pick
    falls back to uniform.
    """

    def select(self, rng, population):
        if not population:
            raise EmptyPopulation()
        fitnesses = [float(individual.fitness) for individual in population]
        if any(f < 0 for f in fitnesses):
            raise InvalidFitness("roulette wheel selection needs non-negative fitness")
        total = sum(fitnesses)
        if total <= 0:
            index = min(int(rng.random() * len(population)), len(population) - 1)
            return population[index]

        spin = rng.random() * total
        cumulative = 0.0
        for individual, fitness in zip(population, fitnesses):
            cumulative += fitness
            if spin < cumulative:
                return individual
        # float rounding can leave spin just past the last boundary
        return next(ind for ind, f in zip(reversed(population), reversed(fitnesses)) if f > 0)


# =============================================================================
# Crossover
# =============================================================================
class CrossoverMethod(ABC):
    @abstractmethod
    def crossover(self, rng, parent_a, parent_b):
        """Combine two equal-length chromosomes into a child chromosome."""


class UniformCrossover(CrossoverMethod):
    def crossover(self, rng, parent_a, parent_b):
        parent_a = np.asarray(parent_a)
        parent_b = np.asarray(parent_b)
        if parent_a.shape != parent_b.shape:
            raise ShapeMismatch(parent_a.shape[0], parent_b.shape[0], what="genes")
        mask = np.array([rng.random() < 0.5 for _ in range(parent_a.size)], dtype=bool)
        return np.where(mask, parent_a, parent_b)


# =============================================================================
# Mutation
# =============================================================================
class MutationMethod(ABC):
    @abstractmethod
    def mutate(self, rng, chromosome):
        """Return a mutated copy of the chromosome."""


class PerturbationMutation(MutationMethod):
    """Nudge each gene, with probability ``chance``, by up to ``coefficient``."""

    def __init__(self, chance, coefficient):
        if not 0.0 <= chance <= 1.0:
            raise ValueError(f"mutation chance must be within [0, 1], got {chance}")
        if coefficient < 0:
            raise ValueError(f"mutation coefficient must be non-negative, got {coefficient}")
        self.chance = chance
        self.coefficient = coefficient

    def mutate(self, rng, chromosome):
        genes = np.array(chromosome, copy=True)
        for i in range(genes.size):
            if rng.random() < self.chance:
                genes[i] += (rng.random() * 2.0 - 1.0) * self.coefficient
        return genes


# =============================================================================
# Engine
# =============================================================================
class GeneticAlgorithm:
    def __init__(self, selection: SelectionMethod, crossover: CrossoverMethod, mutation: MutationMethod):
        self.selection = selection
        self.crossover = crossover
        self.mutation = mutation

    def evolve(
        self, rng, population: Sequence[I], factory: Callable[[np.ndarray], I]
    ) -> Tuple[List[I], Statistics]:
        """Breed a new population of the same size as ``population``.

        Statistics describe the population passed in, measured before any
        breeding happens.
        """
        if not population:
            raise EmptyPopulation()
        stats = Statistics.from_population(population)

        new_population = []
        for _ in range(len(population)):
            parent_a = self.selection.select(rng, population)
            parent_b = self.selection.select(rng, population)
            child = self.crossover.crossover(rng, parent_a.chromosome, parent_b.chromosome)
            child = self.mutation.mutate(rng, child)
            new_population.append(factory(child))

        logger.debug("Evolved %d individuals (%s)", len(new_population), stats)
        return new_population, stats
