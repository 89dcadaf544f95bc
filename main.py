from playground import TrainingLoop, Config
from playground.data import Example

XOR = [
    Example([-1.0, -1.0], -1.0),
    Example([-1.0, 1.0], 1.0),
    Example([1.0, -1.0], 1.0),
    Example([1.0, 1.0], -1.0),
]

if __name__ == "__main__":
    config = Config()
    config.batch_size = len(XOR)
    training_loop = TrainingLoop(config)
    training_loop.run(XOR, XOR)
