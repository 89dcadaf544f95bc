import random

import pytest

from playground import Config
from playground.data import Example
from playground.network import LINEAR, SIGMOID, TANH, build_network


def link_by_id(network, id):
    for link in network.links.values():
        if link.id == id:
            return link
    raise KeyError(id)


def flatten(nested):
    return [x for layer in nested for row in layer for x in (row if isinstance(row, list) else [row])]


@pytest.fixture
def linear_net():
    """
    [2, 2, 1] linear network, all zero except x1->1 and 1->3 which are 1.
    """
    network = build_network([2, 2, 1], LINEAR, LINEAR, None, ["x1", "x2"], init_zero=True)
    link_by_id(network, "x1-1").weight = 1.0
    link_by_id(network, "1-3").weight = 1.0
    return network


@pytest.fixture
def tanh_net():
    return build_network(
        [3, 4, 3, 1], TANH, SIGMOID, None, ["a", "b", "c"], rng=random.Random(42)
    )


@pytest.fixture
def small_config(tmp_path):
    class SmallConfig(Config):
        network_shape = [2, 3, 1]
        input_ids = ["x1", "x2"]
        activation = "tanh"
        output_activation = "linear"
        learning_rate = 0.2
        batch_size = 4
        epochs = 300
        seed = 1
        log_path = str(tmp_path / "training.log")
        stats_path = str(tmp_path / "stats.csv")
        log_interval = 100

    return SmallConfig()


@pytest.fixture
def regression_examples():
    points = [(-1.0, -1.0), (-1.0, 1.0), (1.0, -1.0), (1.0, 1.0), (0.5, 0.0), (0.0, -0.5)]
    return [Example([x1, x2], 0.5 * x1 - 0.3 * x2) for x1, x2 in points]
