import random
from typing import Optional

from ..functions import RegularizationFunction


class Link:
    """A weighted edge from a source node to a destination node, by handle."""
    def __init__(
        self,
        handle: int,
        id: str,
        source: int,
        dest: int,
        regularization: Optional[RegularizationFunction] = None,
        weight: Optional[float] = None,
        rng=random,
    ):
        self.handle = handle
        self.id = id
        self.source = source
        self.dest = dest
        self.regularization = regularization
        self.weight = rng.uniform(-0.5, 0.5) if weight is None else weight

        # dE/d(weight) for the latest back propagation run
        self.error_der = 0.0
        self.acc_error_der = 0.0
        self.num_accumulated_ders = 0

    def accumulate(self):
        self.acc_error_der += self.error_der
        self.num_accumulated_ders += 1

    def reset_accumulators(self):
        self.acc_error_der = 0.0
        self.num_accumulated_ders = 0

    def __repr__(self):
        return f"Link({self.id}, w={self.weight:.2f})"
