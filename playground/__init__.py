from .config import Config
from .training_loop import TrainingLoop

__all__ = ["Config", "TrainingLoop"]
