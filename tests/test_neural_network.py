import numpy as np
import pytest

from errors import ShapeMismatch
from neural_network import (Activation, Layer, NeuralNetwork,
                            layer_activations, parameter_count)

TOPOLOGY = [3, 6, 2]


def test_parameter_count():
    assert parameter_count(TOPOLOGY) == 3 * 6 + 6 + 6 * 2 + 2


def test_activations_relu_hidden_identity_output():
    assert layer_activations(TOPOLOGY) == [Activation.RELU, Activation.IDENTITY]


def test_random_weights_in_range(rng):
    net = NeuralNetwork.random(rng, TOPOLOGY)
    genes = net.to_genes()
    assert genes.size == parameter_count(TOPOLOGY)
    assert np.all(genes >= -1.0) and np.all(genes <= 1.0)
    assert net.topology == TOPOLOGY


def test_random_is_reproducible():
    a = NeuralNetwork.random(np.random.default_rng(5), TOPOLOGY)
    b = NeuralNetwork.random(np.random.default_rng(5), TOPOLOGY)
    assert np.array_equal(a.to_genes(), b.to_genes())


def test_gene_round_trip_is_exact(rng):
    net = NeuralNetwork.random(rng, TOPOLOGY)
    rebuilt = NeuralNetwork.from_genes(TOPOLOGY, net.to_genes())
    for original, copy in zip(net.layers, rebuilt.layers):
        assert np.array_equal(original.weights, copy.weights)
        assert np.array_equal(original.biases, copy.biases)
        assert original.activation is copy.activation
    for _ in range(20):
        x = rng.random(3)
        assert np.array_equal(net.forward(x), rebuilt.forward(x))


def test_gene_layout_weights_then_biases_per_layer():
    genes = np.arange(parameter_count(TOPOLOGY), dtype=np.float64)
    net = NeuralNetwork.from_genes(TOPOLOGY, genes)
    first, second = net.layers
    assert np.array_equal(first.weights, np.arange(18).reshape(6, 3))
    assert np.array_equal(first.biases, np.arange(18, 24))
    assert np.array_equal(second.weights, np.arange(24, 36).reshape(2, 6))
    assert np.array_equal(second.biases, np.arange(36, 38))
    assert np.array_equal(net.to_genes(), genes)


@pytest.mark.parametrize("length", [0, 37, 39])
def test_from_genes_wrong_length(length):
    with pytest.raises(ShapeMismatch):
        NeuralNetwork.from_genes(TOPOLOGY, np.zeros(length))


def test_forward_known_values():
    hidden = Layer(np.array([[1.0, 2.0], [-1.0, -1.0]]), np.array([0.5, 0.0]),
                   Activation.RELU)
    output = Layer(np.array([[1.0, 1.0], [-2.0, 3.0]]), np.array([0.0, -1.0]),
                   Activation.IDENTITY)
    net = NeuralNetwork([hidden, output])
    # hidden = relu([3.5, -2]) = [3.5, 0]; output = [3.5, -8]
    assert net.forward([1.0, 1.0]) == pytest.approx([3.5, -8.0])


def test_forward_output_is_unbounded():
    layer = Layer(np.array([[10.0]]), np.array([-50.0]), Activation.IDENTITY)
    assert NeuralNetwork([layer]).forward([1.0])[0] == pytest.approx(-40.0)


def test_forward_rejects_wrong_input_size(rng):
    net = NeuralNetwork.random(rng, TOPOLOGY)
    with pytest.raises(ShapeMismatch):
        net.forward([1.0, 2.0])


def test_layers_must_chain():
    a = Layer(np.zeros((4, 3)), np.zeros(4), Activation.RELU)
    b = Layer(np.zeros((2, 5)), np.zeros(2), Activation.IDENTITY)
    with pytest.raises(ShapeMismatch):
        NeuralNetwork([a, b])
