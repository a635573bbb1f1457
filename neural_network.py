"""
Neural Network Brain for EvoForage.

A fixed-topology feed-forward network:
  eye cells → hidden (ReLU) → (Δspeed, Δrotation) (identity)

The network's parameters double as the animal's genes: to_genes() flattens
every layer (row-major weights, then biases) into one float64 vector and
from_genes() rebuilds the exact same network from it.
"""

import enum
from dataclasses import dataclass

import numpy as np

from errors import ShapeMismatch


class Activation(enum.Enum):
    RELU     = "relu"
    IDENTITY = "identity"

    def apply(self, x: np.ndarray) -> np.ndarray:
        if self is Activation.RELU:
            return np.maximum(x, 0.0)
        return x


@dataclass
class Layer:
    """One fully connected layer: activation(weights @ inputs + biases)."""

    weights:    np.ndarray   # shape (output_size, input_size)
    biases:     np.ndarray   # shape (output_size,)
    activation: Activation

    @property
    def input_size(self) -> int:
        return self.weights.shape[1]

    @property
    def output_size(self) -> int:
        return self.weights.shape[0]

    @property
    def parameter_count(self) -> int:
        return self.weights.size + self.biases.size

    def propagate(self, inputs: np.ndarray) -> np.ndarray:
        return self.activation.apply(self.weights @ inputs + self.biases)


def layer_activations(topology: list) -> list:
    """ReLU on every hidden layer, raw (identity) output on the last one."""
    n_layers = len(topology) - 1
    return [Activation.IDENTITY if i == n_layers - 1 else Activation.RELU
            for i in range(n_layers)]


def parameter_count(topology: list) -> int:
    """Total weights + biases of a network with the given layer sizes."""
    return sum(n_in * n_out + n_out
               for n_in, n_out in zip(topology[:-1], topology[1:]))


class NeuralNetwork:
    """
    Feed-forward network built from a list of Layer records.
    Topology is a list of neuron counts, e.g. [cells, 2 * cells, 2].
    """

    def __init__(self, layers: list):
        if not layers:
            raise ShapeMismatch("a network needs at least one layer")
        for prev, nxt in zip(layers[:-1], layers[1:]):
            if prev.output_size != nxt.input_size:
                raise ShapeMismatch(
                    f"layer of {prev.output_size} outputs cannot feed "
                    f"a layer of {nxt.input_size} inputs")
        self.layers = layers

    # ──────────────────────────────────────────────────────────────────────────

    @classmethod
    def random(cls, rng: np.random.Generator, topology: list) -> "NeuralNetwork":
        """Draw every weight, then every bias, of each layer from U[-1, 1]."""
        _check_topology(topology)
        layers = []
        for n_in, n_out, act in zip(topology[:-1], topology[1:],
                                    layer_activations(topology)):
            weights = rng.uniform(-1.0, 1.0, size=(n_out, n_in))
            biases  = rng.uniform(-1.0, 1.0, size=n_out)
            layers.append(Layer(weights, biases, act))
        return cls(layers)

    @classmethod
    def from_genes(cls, topology: list, genes) -> "NeuralNetwork":
        """Rebuild a network by consuming genes layer by layer."""
        _check_topology(topology)
        genes = np.asarray(genes, dtype=np.float64)
        expected = parameter_count(topology)
        if genes.ndim != 1 or genes.size != expected:
            raise ShapeMismatch(
                f"got {genes.size} genes, topology {topology} "
                f"needs {expected}")

        layers = []
        offset = 0
        for n_in, n_out, act in zip(topology[:-1], topology[1:],
                                    layer_activations(topology)):
            n_weights = n_in * n_out
            weights = genes[offset:offset + n_weights].reshape(n_out, n_in).copy()
            offset += n_weights
            biases = genes[offset:offset + n_out].copy()
            offset += n_out
            layers.append(Layer(weights, biases, act))
        return cls(layers)

    def to_genes(self) -> np.ndarray:
        """Flatten all parameters: per layer, row-major weights then biases."""
        return np.concatenate(
            [np.concatenate((layer.weights.ravel(), layer.biases))
             for layer in self.layers])

    # ──────────────────────────────────────────────────────────────────────────

    @property
    def topology(self) -> list:
        return [self.layers[0].input_size] + [l.output_size for l in self.layers]

    @property
    def parameter_count(self) -> int:
        return sum(l.parameter_count for l in self.layers)

    def forward(self, inputs) -> np.ndarray:
        """
        Run one forward pass.

        Args:
            inputs: float array of shape (input_size,)

        Returns:
            outputs: float array of shape (output_size,), unbounded
        """
        x = np.asarray(inputs, dtype=np.float64)
        if x.shape != (self.layers[0].input_size,):
            raise ShapeMismatch(
                f"expected {self.layers[0].input_size} inputs, got shape {x.shape}")
        for layer in self.layers:
            x = layer.propagate(x)
        return x

    def summary(self) -> str:
        lines = [f"NeuralNetwork {self.topology} ({self.parameter_count} parameters)"]
        for i, layer in enumerate(self.layers):
            lines.append(
                f"  L{i}  {layer.input_size:>3} → {layer.output_size:<3}"
                f"  {layer.activation.value:<8}"
                f"  |w|max={np.abs(layer.weights).max():.3f}")
        return "\n".join(lines)


def _check_topology(topology: list):
    if len(topology) < 2 or any(int(n) < 1 for n in topology):
        raise ShapeMismatch(f"invalid topology {topology}")
