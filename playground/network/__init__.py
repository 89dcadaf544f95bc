from .components import Link, Node
from .errors import InvocationError, NetworkConfigError, PlaygroundError
from .functions import (
    ACTIVATIONS,
    COSTS,
    CROSS_ENTROPY,
    L1,
    L2,
    LINEAR,
    REGULARIZATIONS,
    RELU,
    SIGMOID,
    SQUARE,
    TANH,
    ActivationFunction,
    CostFunction,
    RegularizationFunction,
    get_activation,
    get_cost,
    get_regularization,
)
from .network import (
    Network,
    back_prop,
    build_network,
    for_each_node,
    forward_prop,
    get_output_node,
    update_weights,
)

__all__ = [
    "Link", "Node", "Network",
    "PlaygroundError", "NetworkConfigError", "InvocationError",
    "ActivationFunction", "CostFunction", "RegularizationFunction",
    "LINEAR", "SIGMOID", "TANH", "RELU", "SQUARE", "CROSS_ENTROPY", "L1", "L2",
    "ACTIVATIONS", "COSTS", "REGULARIZATIONS",
    "get_activation", "get_cost", "get_regularization",
    "build_network", "forward_prop", "back_prop", "update_weights",
    "for_each_node", "get_output_node",
]
