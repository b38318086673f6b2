"""Feed-forward ReLU network used as an animal's brain.

A network is a list of layers, each layer a matrix of weights (one row per
neuron) plus a vector of biases. The network can be flattened into a single
sequence of numbers and rebuilt from it; the order is, for each layer, for
each neuron, the bias followed by that neuron's weights. The genetic
algorithm only ever sees that flat sequence.
"""
import itertools

import numpy as np

from .errors import ExcessWeights, InsufficientWeights, InvalidTopology, ShapeMismatch

DTYPE = np.float32


def check_topology(topology):
    topology = tuple(int(n) for n in topology)
    if len(topology) < 2:
        raise InvalidTopology(f"a network needs at least 2 layers, got {len(topology)}")
    if any(n < 1 for n in topology):
        raise InvalidTopology(f"every layer needs at least one neuron, got {topology}")
    return topology


def weight_count(topology):
    """Number of biases and weights a network of this shape carries."""
    topology = check_topology(topology)
    return sum((n_in + 1) * n_out for n_in, n_out in zip(topology, topology[1:]))


class Layer:
    def __init__(self, biases, weights):
        self.biases = np.asarray(biases, dtype=DTYPE)
        self.weights = np.asarray(weights, dtype=DTYPE)
        if self.weights.ndim != 2 or self.weights.shape[0] != self.biases.shape[0]:
            raise ShapeMismatch(self.biases.shape[0], self.weights.shape[0], what="weight rows")

    @property
    def input_size(self):
        return self.weights.shape[1]

    @property
    def output_size(self):
        return self.weights.shape[0]

    @classmethod
    def random(cls, rng, input_size, output_size):
        rows = [[rng.random() * 2.0 - 1.0 for _ in range(input_size + 1)] for _ in range(output_size)]
        rows = np.array(rows, dtype=DTYPE).reshape(output_size, input_size + 1)
        return cls(rows[:, 0], rows[:, 1:])

    @classmethod
    def from_weights(cls, input_size, output_size, weights, consumed=0, expected=None):
        rows = []
        for _ in range(output_size):
            row = list(itertools.islice(weights, input_size + 1))
            consumed += len(row)
            if len(row) < input_size + 1:
                raise InsufficientWeights(expected, consumed)
            rows.append(row)
        rows = np.array(rows, dtype=DTYPE).reshape(output_size, input_size + 1)
        return cls(rows[:, 0], rows[:, 1:]), consumed

    def propagate(self, inputs):
        return np.maximum(self.weights @ inputs + self.biases, 0.0)

    def flat(self):
        # [bias, w0, w1, ...] per neuron, neurons in order
        return np.hstack([self.biases[:, None], self.weights]).ravel()


class WeightView:
    """Lazy, re-iterable view over a network's genes in chromosome order."""

    def __init__(self, layers):
        self._layers = layers

    def __iter__(self):
        for layer in self._layers:
            for value in layer.flat():
                yield float(value)

    def __len__(self):
        return sum(layer.biases.size + layer.weights.size for layer in self._layers)


class NeuralNetwork:
    def __init__(self, layers):
        self.layers = list(layers)
        for prev, layer in zip(self.layers, self.layers[1:]):
            if layer.input_size != prev.output_size:
                raise ShapeMismatch(prev.output_size, layer.input_size, what="layer inputs")

    @property
    def topology(self):
        return (self.layers[0].input_size,) + tuple(layer.output_size for layer in self.layers)

    @classmethod
    def random(cls, rng, topology):
        """Build a network with every bias and weight drawn from [-1, 1]."""
        topology = check_topology(topology)
        return cls(Layer.random(rng, n_in, n_out) for n_in, n_out in zip(topology, topology[1:]))

    @classmethod
    def from_weights(cls, topology, weights):
        """Rebuild a network from a flat sequence produced by ``weights()``.

        Raises InsufficientWeights if the sequence runs out and ExcessWeights
        if anything is left over once every layer is filled.
        """
        topology = check_topology(topology)
        expected = weight_count(topology)
        weights = iter(weights)
        layers, consumed = [], 0
        for n_in, n_out in zip(topology, topology[1:]):
            layer, consumed = Layer.from_weights(n_in, n_out, weights, consumed, expected)
            layers.append(layer)
        if next(weights, None) is not None:
            raise ExcessWeights(expected)
        return cls(layers)

    def propagate(self, inputs):
        x = np.asarray(inputs, dtype=DTYPE)
        if x.shape != (self.layers[0].input_size,):
            got = x.shape[0] if x.ndim == 1 else x.shape
            raise ShapeMismatch(self.layers[0].input_size, got)
        for layer in self.layers:
            x = layer.propagate(x)
        return x

    def weights(self):
        return WeightView(self.layers)

    def chromosome(self):
        return np.concatenate([layer.flat() for layer in self.layers])

    def __repr__(self):
        return f"NeuralNetwork(topology={list(self.topology)})"
