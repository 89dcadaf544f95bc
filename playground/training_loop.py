import logging
import os
import random
from typing import Optional, Sequence

import pandas as pd

from .config import Config
from .data import EpochStats, Example, TrainingHistory
from .network import (
    InvocationError,
    Network,
    build_network,
    get_activation,
    get_cost,
    get_regularization,
)

FORMAT = "[%(asctime)s][%(levelname)s] %(message)s"


# -------------------------------
# Logging helpers
# -------------------------------
def setup_logging(log_path: Optional[str]) -> logging.Logger:
    # Engine modules log under "playground.*", so they share these handlers
    logger = logging.getLogger("playground")
    logger.setLevel(logging.DEBUG)

    fmt = logging.Formatter(FORMAT)

    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        ch = logging.StreamHandler()
        ch.setLevel(logging.INFO)
        ch.setFormatter(fmt)
        logger.addHandler(ch)

    target = os.path.abspath(log_path) if log_path else None
    for h in list(logger.handlers):
        if isinstance(h, logging.FileHandler) and h.baseFilename != target:
            logger.removeHandler(h)
            h.close()

    if log_path and not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        directory = os.path.dirname(log_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        fh = logging.FileHandler(log_path)
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger


def network_from_config(config: Config, rng=None) -> Network:
    return build_network(
        config.network_shape,
        get_activation(config.activation),
        get_activation(getattr(config, "output_activation", config.activation)),
        get_regularization(getattr(config, "regularization", None)),
        config.input_ids,
        init_zero=getattr(config, "init_zero", False),
        rng=rng,
    )


class TrainingLoop:
    def __init__(self, config: Config, network: Optional[Network] = None, rng=None) -> None:
        self.config = config
        self.learning_rate = config.learning_rate
        self.regularization_rate = getattr(config, "regularization_rate", 0.0)
        self.batch_size = getattr(config, "batch_size", 1)
        self.cost = get_cost(getattr(config, "cost", "square"))
        self.stats_path = getattr(config, "stats_path", None)
        self.log_interval = getattr(config, "log_interval", 10)

        if rng is None:
            seed = getattr(config, "seed", None)
            rng = random.Random(seed) if seed is not None else random
        self.rng = rng
        self.logger = setup_logging(getattr(config, "log_path", None))
        self.network = network if network is not None else network_from_config(config, rng)

        self.history = TrainingHistory()

    def train_epoch(self, examples: Sequence[Example]) -> None:
        """
        One pass over the examples. Weights are updated after every
        batch_size examples; a trailing partial batch stays accumulated.
        """
        for i, example in enumerate(examples):
            self.network.forward_prop(example.inputs)
            self.network.back_prop(example.target, self.cost)
            if (i + 1) % self.batch_size == 0:
                self.network.update_weights(self.learning_rate, self.regularization_rate)

    def get_loss(self, examples: Sequence[Example]) -> float:
        """Mean cost over the examples."""
        if len(examples) == 0:
            raise InvocationError("Cannot compute the loss of an empty data set")
        loss = 0.0
        for example in examples:
            output = self.network.forward_prop(example.inputs)
            loss += self.cost.cost(output, example.target)
        return loss / len(examples)

    def run(
        self,
        train_examples: Sequence[Example],
        test_examples: Optional[Sequence[Example]] = None,
    ) -> pd.DataFrame:
        if self.stats_path and not os.path.exists(self.stats_path):
            directory = os.path.dirname(self.stats_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            df = pd.DataFrame(columns=["epoch", "train_loss", "test_loss"])
            df.to_csv(self.stats_path, index=False)

        self.logger.info(
            f"Starting training: shape={self.network.shape}, examples={len(train_examples)}, "
            f"epochs={self.config.epochs}, lr={self.learning_rate}, batch={self.batch_size}"
        )

        start_epoch = len(self.history)
        for epoch in range(start_epoch, start_epoch + self.config.epochs):
            self.train_epoch(train_examples)

            stats = EpochStats(epoch=epoch, train_loss=self.get_loss(train_examples))
            if test_examples:
                stats.test_loss = self.get_loss(test_examples)
            self.history.add(stats)
            self.log_stats(stats)

            if (epoch + 1) % self.log_interval == 0:
                self.logger.info(
                    f"Epoch {epoch + 1}: train_loss={stats.train_loss:.6f}, test_loss={stats.test_loss:.6f}"
                )
            else:
                self.logger.debug(f"Epoch {epoch + 1}: train_loss={stats.train_loss:.6f}")

        best = self.history.best
        if best is not None:
            self.logger.info(
                f"Training complete | best epoch {best.epoch + 1}: "
                f"train_loss={best.train_loss:.6f}, test_loss={best.test_loss:.6f}"
            )
        return self.history.to_frame()

    def log_stats(self, stats: EpochStats) -> None:
        if not self.stats_path:
            return
        df = pd.DataFrame(
            {
                "epoch": [stats.epoch],
                "train_loss": [stats.train_loss],
                "test_loss": [stats.test_loss],
            }
        )
        df.to_csv(self.stats_path, mode="a", header=False, index=False)
