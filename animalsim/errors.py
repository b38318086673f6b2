"""Exceptions raised when a caller breaks the contract of the core."""


class AnimalSimError(Exception):
    """Base class for every error raised by animalsim."""


class ShapeMismatch(AnimalSimError, ValueError):
    """Input vector or chromosome has the wrong length."""

    def __init__(self, expected, got, what="inputs"):
        super().__init__(f"expected {expected} {what}, got {got}")
        self.expected = expected
        self.got = got


class InvalidTopology(AnimalSimError, ValueError):
    pass


class ChromosomeLengthError(AnimalSimError, ValueError):
    """Flat weight sequence does not fit the requested topology."""


class InsufficientWeights(ChromosomeLengthError):
    def __init__(self, expected, got):
        super().__init__(f"got not enough weights: need {expected}, ran out after {got}")
        self.expected = expected
        self.got = got


class ExcessWeights(ChromosomeLengthError):
    def __init__(self, expected):
        super().__init__(f"got too many weights: need exactly {expected}")
        self.expected = expected


class EmptyPopulation(AnimalSimError, ValueError):
    def __init__(self):
        super().__init__("cannot evolve an empty population")


class InvalidFitness(AnimalSimError, ValueError):
    pass
