import dataclasses
import math

import pytest

from playground.network import (
    CROSS_ENTROPY,
    L1,
    L2,
    LINEAR,
    RELU,
    SIGMOID,
    SQUARE,
    TANH,
    NetworkConfigError,
    get_activation,
    get_cost,
    get_regularization,
)


def test_cross_entropy_saturates_at_zero_output():
    assert CROSS_ENTROPY.cost(0, 1) == 9
    assert CROSS_ENTROPY.der(0, 1) == -1e9
    assert CROSS_ENTROPY.cost(0, 0.5) == pytest.approx(4.5)


@pytest.mark.parametrize("output", [0.0, 0.2, 0.9, 1.0])
def test_cross_entropy_zero_target(output):
    assert CROSS_ENTROPY.cost(output, 0) == 0
    assert CROSS_ENTROPY.der(output, 0) == 0


def test_cross_entropy_regular_values():
    assert CROSS_ENTROPY.cost(0.5, 1) == pytest.approx(-math.log(0.5))
    assert CROSS_ENTROPY.der(0.5, 1) == pytest.approx(-2.0)


def test_cross_entropy_negative_output_is_nan():
    assert math.isnan(CROSS_ENTROPY.cost(-0.5, 1))


def test_square():
    assert SQUARE.cost(3, 5) == pytest.approx(2.0)
    assert SQUARE.der(3, 5) == pytest.approx(-2.0)


def test_activations():
    assert LINEAR.output(-2.5) == -2.5
    assert LINEAR.der(7) == 1
    assert SIGMOID.output(0) == pytest.approx(0.5)
    assert SIGMOID.der(0) == pytest.approx(0.25)
    assert TANH.output(0) == 0
    assert TANH.der(0) == pytest.approx(1.0)
    assert TANH.der(1.0) == pytest.approx(1 - math.tanh(1.0) ** 2)


def test_sigmoid_extreme_inputs():
    assert SIGMOID.output(-1000) == pytest.approx(0.0)
    assert SIGMOID.output(1000) == pytest.approx(1.0)
    assert SIGMOID.der(-1000) == pytest.approx(0.0)


def test_relu_derivative_is_zero_at_zero():
    assert RELU.output(-3) == 0
    assert RELU.output(2) == 2
    assert RELU.der(0) == 0
    assert RELU.der(-1) == 0
    assert RELU.der(0.001) == 1


def test_regularization():
    assert L1.output(-3) == 3
    assert L1.der(-3) == -1
    assert L1.der(0) == 1
    assert L1.der(2) == 1
    assert L2.output(2) == pytest.approx(2.0)
    assert L2.der(-0.4) == -0.4


def test_function_tables_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        TANH.output = math.sin


def test_lookup_by_name():
    assert get_activation("ReLU") is RELU
    assert get_cost("cross_entropy") is CROSS_ENTROPY
    assert get_regularization("l2") is L2
    assert get_regularization(None) is None
    assert get_regularization("none") is None


@pytest.mark.parametrize("lookup", [get_activation, get_cost, get_regularization])
def test_lookup_unknown_name(lookup):
    with pytest.raises(NetworkConfigError):
        lookup("softplus")
