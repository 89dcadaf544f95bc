import logging
import random
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

import networkx as nx

from .components import Link, Node
from .errors import InvocationError, NetworkConfigError
from .functions import ActivationFunction, CostFunction, RegularizationFunction

logger = logging.getLogger(__name__)  # child of the "playground" logger

Weights = List[List[List[float]]]
Biases = List[List[float]]


class Network:
    """
    A layered, fully-connected feed-forward network of scalar nodes.

    The network owns every Node and Link; they refer to each other by integer
    handle. Training must follow the order forward_prop -> back_prop
    [-> back_prop ...] -> update_weights, since each phase reads the state the
    previous one wrote.
    """
    def __init__(
        self,
        shape: Sequence[int],
        activation: ActivationFunction,
        output_activation: ActivationFunction,
        regularization: Optional[RegularizationFunction],
        input_ids: Sequence[str],
        init_zero: bool = False,
        rng=None,
    ):
        if len(shape) == 0:
            raise NetworkConfigError("The network shape must have at least one layer")
        if any(size < 1 for size in shape):
            raise NetworkConfigError(f"Every layer needs at least one node, got shape {list(shape)}")
        if len(input_ids) != shape[0]:
            raise NetworkConfigError(
                f"Got {len(input_ids)} input ids for an input layer of {shape[0]} nodes"
            )

        rng = random if rng is None else rng
        self.nodes: Dict[int, Node] = {}
        self.links: Dict[int, Link] = {}
        self.layers: List[List[int]] = []
        self.node_ids: Dict[str, int] = {}
        self.node_idx = 0
        self.link_idx = 0

        id = 1
        num_layers = len(shape)
        for layer_idx, num_nodes in enumerate(shape):
            is_input_layer = layer_idx == 0
            is_output_layer = layer_idx == num_layers - 1
            current_layer: List[int] = []
            self.layers.append(current_layer)

            for i in range(num_nodes):
                if is_input_layer:
                    node_id = input_ids[i]
                    node_activation = None
                else:
                    node_id = str(id)
                    id += 1
                    node_activation = output_activation if is_output_layer else activation

                if node_id in self.node_ids:
                    raise NetworkConfigError(f"Duplicate node id '{node_id}'")

                node = Node(self.node_idx, node_id, layer_idx, node_activation, init_zero)
                self.nodes[self.node_idx] = node
                self.node_ids[node_id] = node.handle
                self.node_idx += 1
                current_layer.append(node.handle)

                if is_input_layer:
                    continue
                # Fully connect the previous layer to this node
                for source_handle in self.layers[layer_idx - 1]:
                    source = self.nodes[source_handle]
                    link = Link(
                        self.link_idx,
                        f"{source.id}-{node.id}",
                        source.handle,
                        node.handle,
                        regularization=regularization,
                        weight=0.0 if init_zero else None,
                        rng=rng,
                    )
                    self.links[self.link_idx] = link
                    self.link_idx += 1
                    source.output_links.append(link.handle)
                    node.input_links.append(link.handle)

        logger.debug(f"Built network shape={list(shape)}, nodes={len(self.nodes)}, links={len(self.links)}")

    # --- accessors ---
    @property
    def shape(self) -> List[int]:
        return [len(layer) for layer in self.layers]

    @property
    def input_layer(self) -> List[Node]:
        return [self.nodes[h] for h in self.layers[0]]

    @property
    def output_layer(self) -> List[Node]:
        return [self.nodes[h] for h in self.layers[-1]]

    def source(self, link: Link) -> Node:
        return self.nodes[link.source]

    def dest(self, link: Link) -> Node:
        return self.nodes[link.dest]

    def input_links(self, node: Node) -> List[Link]:
        return [self.links[h] for h in node.input_links]

    def output_links(self, node: Node) -> List[Link]:
        return [self.links[h] for h in node.output_links]

    def get_node(self, id: str) -> Node:
        return self.nodes[self.node_ids[id]]

    def get_output_node(self) -> Node:
        """Returns the single node of the output layer."""
        if len(self.layers[-1]) != 1:
            raise InvocationError(
                f"Expected exactly one output node, the output layer has {len(self.layers[-1])}"
            )
        return self.nodes[self.layers[-1][0]]

    def iter_nodes(self, ignore_inputs: bool = False) -> Iterator[Node]:
        for layer in self.layers[1 if ignore_inputs else 0:]:
            for handle in layer:
                yield self.nodes[handle]

    def for_each_node(self, ignore_inputs: bool, visitor: Callable[[Node], object]):
        for node in self.iter_nodes(ignore_inputs):
            visitor(node)

    # --- training ---
    def update_output(self, node: Node) -> float:
        """Recomputes a node's total input and output. Input nodes pass through."""
        if node.is_input:
            return node.output
        node.total_input = node.bias
        for link in self.input_links(node):
            node.total_input += link.weight * self.nodes[link.source].output
        node.output = node.activation.output(node.total_input)
        return node.output

    def forward_prop(self, inputs: Sequence[float]) -> float:
        """
        Runs the inputs through the network, storing each node's total input
        and output. Returns the output node's output.
        """
        input_layer = self.layers[0]
        if len(inputs) != len(input_layer):
            raise InvocationError(
                f"The number of inputs ({len(inputs)}) must match the number of "
                f"nodes in the input layer ({len(input_layer)})"
            )
        output_node = self.get_output_node()

        for handle, value in zip(input_layer, inputs):
            self.nodes[handle].output = value
        for layer in self.layers[1:]:
            for handle in layer:
                self.update_output(self.nodes[handle])
        return output_node.output

    def back_prop(self, target: float, cost: CostFunction):
        """
        Computes the error derivative of every node and link for the output
        of the previous forward_prop and adds them to the accumulators.
        """
        output_node = self.get_output_node()
        output_node.output_der = cost.der(output_node.output, target)

        for layer_idx in range(len(self.layers) - 1, 0, -1):
            current_layer = [self.nodes[h] for h in self.layers[layer_idx]]

            # dE/d(total_input), which is also dE/d(bias)
            for node in current_layer:
                node.input_der = node.output_der * node.activation.der(node.total_input)
                node.accumulate()

            # dE/d(weight) of every incoming link
            for node in current_layer:
                for link in self.input_links(node):
                    link.error_der = node.input_der * self.nodes[link.source].output
                    link.accumulate()

            if layer_idx == 1:
                break

            for handle in self.layers[layer_idx - 1]:
                node = self.nodes[handle]
                node.output_der = 0.0
                for link in self.output_links(node):
                    node.output_der += link.weight * self.nodes[link.dest].input_der

    def update_weights(self, learning_rate: float, regularization_rate: float):
        """Applies the averaged accumulated derivatives and resets them."""
        for node in self.iter_nodes(ignore_inputs=True):
            if node.num_accumulated_ders > 0:
                node.bias -= learning_rate * node.acc_input_der / node.num_accumulated_ders
                node.reset_accumulators()

            for link in self.input_links(node):
                if link.num_accumulated_ders == 0:
                    continue
                regul_der = link.regularization.der(link.weight) if link.regularization else 0.0
                link.weight -= (learning_rate / link.num_accumulated_ders) * (
                    link.acc_error_der + regularization_rate * regul_der
                )
                link.reset_accumulators()

    # --- parameters ---
    def parameters(self) -> Tuple[Weights, Biases]:
        """
        Returns (weights, biases). weights[i][j][k] is the weight of the k-th
        incoming link of node j in layer i + 1, biases[i][j] that node's bias.
        """
        weights: Weights = []
        biases: Biases = []
        for layer in self.layers[1:]:
            nodes = [self.nodes[h] for h in layer]
            weights.append([[link.weight for link in self.input_links(n)] for n in nodes])
            biases.append([n.bias for n in nodes])
        return weights, biases

    def load_parameters(self, weights: Weights, biases: Biases):
        """Sets every weight and bias, in the layout returned by parameters()."""
        shape = self.shape
        if len(weights) != len(shape) - 1 or len(biases) != len(shape) - 1:
            raise NetworkConfigError(
                f"Expected parameters for {len(shape) - 1} layers, "
                f"got {len(weights)} weight and {len(biases)} bias layers"
            )
        for i, (layer_weights, layer_biases) in enumerate(zip(weights, biases)):
            if len(layer_weights) != shape[i + 1] or len(layer_biases) != shape[i + 1]:
                raise NetworkConfigError(f"Layer {i + 1} has {shape[i + 1]} nodes")
            for row in layer_weights:
                if len(row) != shape[i]:
                    raise NetworkConfigError(
                        f"Every node of layer {i + 1} has {shape[i]} incoming weights, got {len(row)}"
                    )

        for layer, layer_weights, layer_biases in zip(self.layers[1:], weights, biases):
            for handle, row, bias in zip(layer, layer_weights, layer_biases):
                node = self.nodes[handle]
                node.bias = float(bias)
                for link, weight in zip(self.input_links(node), row):
                    link.weight = float(weight)

    # --- utils ---
    def to_digraph(self) -> nx.DiGraph:
        """Snapshot of the graph for renderers, keyed by node id."""
        G = nx.DiGraph()
        for node in self.iter_nodes():
            G.add_node(node.id, layer=node.layer, bias=node.bias, output=node.output)
        for link in self.links.values():
            G.add_edge(
                self.nodes[link.source].id,
                self.nodes[link.dest].id,
                weight=link.weight,
                error_der=link.error_der,
            )
        return G

    def __repr__(self):
        return f"Network(shape={self.shape})"


# -------------------------------
# Functional API
# -------------------------------
def build_network(
    shape: Sequence[int],
    activation: ActivationFunction,
    output_activation: ActivationFunction,
    regularization: Optional[RegularizationFunction],
    input_ids: Sequence[str],
    init_zero: bool = False,
    rng=None,
) -> Network:
    """
    Builds a network. E.g. shape [1, 2, 3, 1] has one input node, 2 and 3
    nodes in the hidden layers and 1 output node. Non-input nodes get ids
    "1", "2", ... in layer order; input nodes get input_ids.
    """
    return Network(shape, activation, output_activation, regularization, input_ids, init_zero, rng)


def forward_prop(network: Network, inputs: Sequence[float]) -> float:
    return network.forward_prop(inputs)


def back_prop(network: Network, target: float, cost: CostFunction):
    network.back_prop(target, cost)


def update_weights(network: Network, learning_rate: float, regularization_rate: float):
    network.update_weights(learning_rate, regularization_rate)


def for_each_node(network: Network, ignore_inputs: bool, visitor: Callable[[Node], object]):
    network.for_each_node(ignore_inputs, visitor)


def get_output_node(network: Network) -> Node:
    return network.get_output_node()
