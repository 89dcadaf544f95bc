import math
import os
from typing import List, Optional

import pandas as pd

from .example import EpochStats

COLUMNS = ["epoch", "train_loss", "test_loss"]


class TrainingHistory:
    def __init__(self, path: Optional[str] = None):
        self.epochs: List[EpochStats] = []
        self.best: Optional[EpochStats] = None

        if path is not None:
            self.load(path)

    def add(self, stats: EpochStats):
        self.epochs.append(stats)
        if self.best is None or self._is_better(stats, self.best):
            self.best = stats

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [[s.epoch, s.train_loss, s.test_loss] for s in self.epochs],
            columns=COLUMNS,
        )

    def save(self, path: str):
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self.to_frame().to_csv(path, index=False)

    def load(self, path: str):
        df = pd.read_csv(path)
        self.epochs = []
        self.best = None
        for row in df.itertuples(index=False):
            self.add(EpochStats(epoch=int(row.epoch), train_loss=row.train_loss, test_loss=row.test_loss))

    @staticmethod
    def _loss(stats: EpochStats) -> float:
        # Rank by test loss when a test set was evaluated
        return stats.train_loss if math.isnan(stats.test_loss) else stats.test_loss

    def _is_better(self, stats1: EpochStats, stats2: EpochStats) -> bool:
        loss1 = self._loss(stats1)
        loss2 = self._loss(stats2)

        # NaN ranks below every finite loss
        if math.isnan(loss2):
            return not math.isnan(loss1)
        return loss1 < loss2

    def __len__(self):
        return len(self.epochs)
