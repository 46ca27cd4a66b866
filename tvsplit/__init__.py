"""Single-split hyperparameter validation.

Example usage:
    import polars as pl
    from sklearn.linear_model import Ridge

    import tvsplit
    from tvsplit.adapters import SklearnEstimator, SklearnEvaluator

    tvs = tvsplit.configure(
        estimator=SklearnEstimator(Ridge(), features=["x1", "x2"], label="y"),
        evaluator=SklearnEvaluator("rmse", label="y"),
        param_grid=[{"alpha": 0.1}, {"alpha": 1.0}, {"alpha": 10.0}],
        seed=42,
    )
    model = tvs.fit(pl.read_parquet("data.parquet"))
    model.save("models/ridge")
    reloaded = tvsplit.load("models/ridge")
"""

from tvsplit.api import configure, load
from tvsplit.core import (
    ConfigurationError,
    PersistenceError,
    PersistenceReadError,
    PersistenceWriteError,
    TrainValidationSplit,
    TrainValidationSplitModel,
    TuningError,
)

__all__ = [
    "configure",
    "load",
    "TrainValidationSplit",
    "TrainValidationSplitModel",
    "TuningError",
    "ConfigurationError",
    "PersistenceError",
    "PersistenceReadError",
    "PersistenceWriteError",
]
