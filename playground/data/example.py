from dataclasses import dataclass
from typing import List


@dataclass
class Example:
    inputs: List[float]
    target: float


@dataclass
class EpochStats:
    epoch: int
    train_loss: float
    test_loss: float = float("nan")
