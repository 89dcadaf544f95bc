from .example import EpochStats, Example
from .history import TrainingHistory

__all__ = ["EpochStats", "Example", "TrainingHistory"]
