from typing import Sequence, Tuple

import torch
import torch.nn as nn

from .functions import CostFunction
from .network import Biases, Network, Weights

_TORCH_ACTIVATIONS = {
    "linear": lambda x: x,
    "sigmoid": torch.sigmoid,
    "tanh": torch.tanh,
    "relu": torch.relu,
}

_TORCH_COSTS = {
    "square": lambda output, target: 0.5 * (output - target) ** 2,
    "cross_entropy": lambda output, target: -target * torch.log(output),
}


class ReferenceNet(nn.Module):
    def __init__(self, network: Network):
        """Mirror a Network as dense torch layers (float64)."""
        super().__init__()
        self.network = network

        weights, biases = network.parameters()
        self.weights = nn.ParameterList(
            [nn.Parameter(torch.tensor(w, dtype=torch.float64).reshape(len(w), -1)) for w in weights]
        )
        self.biases = nn.ParameterList(
            [nn.Parameter(torch.tensor(b, dtype=torch.float64)) for b in biases]
        )

        # Nodes of a layer share one activation
        self.activations = []
        for layer in network.layers[1:]:
            name = network.nodes[layer[0]].activation.name
            if name not in _TORCH_ACTIVATIONS:
                raise ValueError(f"No torch equivalent for activation '{name}'")
            self.activations.append(_TORCH_ACTIVATIONS[name])

    def forward(self, x):
        values = torch.as_tensor(x, dtype=torch.float64)
        for weight, bias, activation in zip(self.weights, self.biases, self.activations):
            values = activation(weight @ values + bias)
        return values

    def export_network(self) -> Network:
        """Write the module's current parameters back into the network."""
        weights = [w.detach().tolist() for w in self.weights]
        biases = [b.detach().tolist() for b in self.biases]
        self.network.load_parameters(weights, biases)
        return self.network


def reference_gradients(
    network: Network,
    inputs: Sequence[float],
    target: float,
    cost: CostFunction,
) -> Tuple[Weights, Biases]:
    """
    dE/d(weight) and dE/d(bias) for a single example computed with torch
    autograd, in the layout of Network.parameters().
    """
    if cost.name not in _TORCH_COSTS:
        raise ValueError(f"No torch equivalent for cost '{cost.name}'")

    net = ReferenceNet(network)
    output = net(inputs)
    loss = _TORCH_COSTS[cost.name](output, target).sum()
    loss.backward()

    weight_grads = [w.grad.tolist() for w in net.weights]
    bias_grads = [b.grad.tolist() for b in net.biases]
    return weight_grads, bias_grads
