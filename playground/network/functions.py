import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .errors import NetworkConfigError


@dataclass(frozen=True)
class ActivationFunction:
    """A node's activation function and its derivative."""
    name: str
    output: Callable[[float], float]
    der: Callable[[float], float]


@dataclass(frozen=True)
class CostFunction:
    """An error function of (output, target) and its derivative w.r.t. output."""
    name: str
    cost: Callable[[float, float], float]
    der: Callable[[float, float], float]


@dataclass(frozen=True)
class RegularizationFunction:
    """Penalty for a single weight and its derivative."""
    name: str
    output: Callable[[float], float]
    der: Callable[[float], float]


# -------------------------------
# Activations
# -------------------------------
def _sigmoid(x: float) -> float:
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    # exp(-x) overflows for large negative x
    e = math.exp(x)
    return e / (1.0 + e)


def _sigmoid_der(x: float) -> float:
    output = _sigmoid(x)
    return output * (1 - output)


def _tanh_der(x: float) -> float:
    output = math.tanh(x)
    return 1 - output * output


LINEAR = ActivationFunction("linear", lambda x: x, lambda x: 1.0)
SIGMOID = ActivationFunction("sigmoid", _sigmoid, _sigmoid_der)
TANH = ActivationFunction("tanh", math.tanh, _tanh_der)
RELU = ActivationFunction(
    "relu",
    lambda x: max(0.0, x),
    lambda x: 0.0 if x <= 0 else 1.0,
)


# -------------------------------
# Costs
# -------------------------------
def _square_cost(output: float, target: float) -> float:
    diff = output - target
    return 0.5 * diff * diff


def _cross_entropy_cost(output: float, target: float) -> float:
    if target == 0:
        return 0.0
    if output == 0:
        return target * 9
    if output < 0:
        return math.nan
    return -target * math.log(output)


def _cross_entropy_der(output: float, target: float) -> float:
    if target == 0:
        return 0.0
    if output == 0:
        return -target * 1e9
    return -target / output


SQUARE = CostFunction("square", _square_cost, lambda output, target: output - target)
CROSS_ENTROPY = CostFunction("cross_entropy", _cross_entropy_cost, _cross_entropy_der)


# -------------------------------
# Regularization
# -------------------------------
L1 = RegularizationFunction("L1", abs, lambda w: -1.0 if w < 0 else 1.0)
L2 = RegularizationFunction("L2", lambda w: 0.5 * w * w, lambda w: w)


ACTIVATIONS: Dict[str, ActivationFunction] = {
    f.name: f for f in (LINEAR, SIGMOID, TANH, RELU)
}
COSTS: Dict[str, CostFunction] = {f.name: f for f in (SQUARE, CROSS_ENTROPY)}
REGULARIZATIONS: Dict[str, RegularizationFunction] = {f.name: f for f in (L1, L2)}


def _lookup(table: Dict, name: str, kind: str):
    try:
        return table[name]
    except KeyError:
        raise NetworkConfigError(
            f"Unknown {kind} function '{name}', expected one of {sorted(table)}"
        ) from None


def get_activation(name: str) -> ActivationFunction:
    return _lookup(ACTIVATIONS, name.lower(), "activation")


def get_cost(name: str) -> CostFunction:
    return _lookup(COSTS, name.lower(), "cost")


def get_regularization(name: Optional[str]) -> Optional[RegularizationFunction]:
    """Returns None for no regularization (``None`` or ``"none"``)."""
    if name is None or name.lower() == "none":
        return None
    return _lookup(REGULARIZATIONS, name.upper(), "regularization")
