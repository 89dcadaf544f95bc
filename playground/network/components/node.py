from typing import List, Optional

from ..functions import ActivationFunction


class Node:
    """
    A computation unit in the network.

    Its state (total input, output and their error derivatives) changes on
    every forward and back propagation run. Links are referenced by handle;
    the owning Network resolves them.
    """
    def __init__(
        self,
        handle: int,
        id: str,
        layer: int,
        activation: Optional[ActivationFunction] = None,
        init_zero: bool = False,
    ):
        self.handle = handle
        self.id = id
        self.layer = layer
        # None for input nodes, which pass their input through
        self.activation = activation
        self.bias = 0.0 if init_zero else 0.1

        self.input_links: List[int] = []
        self.output_links: List[int] = []

        self.total_input = 0.0
        self.output = 0.0
        # dE/d(output)
        self.output_der = 0.0
        # dE/d(total_input)
        self.input_der = 0.0
        # Sum of input_der since the last update, i.e. dE/d(bias)
        self.acc_input_der = 0.0
        self.num_accumulated_ders = 0

    @property
    def is_input(self) -> bool:
        return self.activation is None

    def accumulate(self):
        self.acc_input_der += self.input_der
        self.num_accumulated_ders += 1

    def reset_accumulators(self):
        self.acc_input_der = 0.0
        self.num_accumulated_ders = 0

    def __repr__(self):
        kind = "input" if self.is_input else self.activation.name
        return f"Node(id={self.id}, layer={self.layer}, {kind}, b={self.bias:.2f})"
