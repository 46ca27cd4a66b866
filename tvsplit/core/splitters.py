"""Train/validation partitioning of a dataset."""

from dataclasses import dataclass
import gc
import math
from numbers import Real
from typing import Protocol, runtime_checkable

import numpy as np
import polars as pl

from tvsplit.core.errors import ConfigurationError

DEFAULT_TRAIN_RATIO = 0.75


def validate_train_ratio(ratio: float) -> float:
    """Check that the ratio lies in the open interval (0, 1).

    Args:
        ratio: Expected fraction of rows assigned to training.

    Returns:
        The ratio as a float.

    Raises:
        ConfigurationError: If the ratio is not a number strictly between 0 and 1.
    """
    if isinstance(ratio, bool) or not isinstance(ratio, Real):
        raise ConfigurationError(f"train_ratio must be a number, got {type(ratio).__name__}")
    ratio = float(ratio)
    if math.isnan(ratio) or not 0.0 < ratio < 1.0:
        raise ConfigurationError(f"train_ratio must be strictly between 0 and 1, got {ratio}")
    return ratio


@dataclass(slots=True)
class SplitData:
    """Result of data splitting.

    Partitions are dropped explicitly once they are no longer needed, so
    that at most one of them is alive while candidates are scored.

    Attributes:
        train: Training partition, or None once released.
        validation: Validation partition, or None once released.
    """

    train: pl.DataFrame | None
    validation: pl.DataFrame | None

    def release_train(self) -> None:
        """Drop the training partition."""
        self.train = None
        gc.collect()

    def release_validation(self) -> None:
        """Drop the validation partition."""
        self.validation = None
        gc.collect()


@runtime_checkable
class DataSplitter(Protocol):
    """Protocol for splitting a dataset into train/validation partitions."""

    def split(self, dataset: pl.DataFrame, ratio: float, seed: int | None = None) -> SplitData:
        """Split the dataset.

        Args:
            dataset: The dataset to partition.
            ratio: Expected fraction of rows assigned to training.
            seed: Random seed for reproducibility.

        Returns:
            The two partitions.
        """
        ...


class RandomSplitter:
    """Splits rows independently at random.

    Each row goes to the training partition with probability `ratio` and to
    the validation partition otherwise. Partition sizes therefore match the
    ratio only in expectation and vary between runs unless a seed is fixed.
    """

    def split(self, dataset: pl.DataFrame, ratio: float, seed: int | None = None) -> SplitData:
        ratio = validate_train_ratio(ratio)
        rng = np.random.default_rng(seed)
        mask = rng.random(dataset.height) < ratio

        return SplitData(
            train=dataset.filter(pl.Series(mask, dtype=pl.Boolean)),
            validation=dataset.filter(pl.Series(~mask, dtype=pl.Boolean)),
        )


__all__ = [
    "DEFAULT_TRAIN_RATIO",
    "validate_train_ratio",
    "SplitData",
    "DataSplitter",
    "RandomSplitter",
]
