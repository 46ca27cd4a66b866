"""Shared fixtures and stub collaborators for tvsplit tests."""

from collections.abc import Sequence
from typing import Any

import numpy as np
import polars as pl
import pytest

from tvsplit.core.identifiable import random_uid
from tvsplit.core.persistence import DefaultParamsPersistable
from tvsplit.core.protocols import ParamMap
from tvsplit.core.registry import register_persistable

# ============================================================================
# Stub Collaborators
# ============================================================================


@register_persistable
class RowCountingModel(DefaultParamsPersistable):
    """Model predicting a constant and remembering how many rows it was fit on."""

    def __init__(self, fitted_rows: int, alpha: float = 0.0, uid: str | None = None) -> None:
        self.uid = uid or random_uid("rows_model")
        self.fitted_rows = fitted_rows
        self.alpha = alpha

    def transform(self, dataset: pl.DataFrame, params: ParamMap | None = None) -> pl.DataFrame:
        return dataset.with_columns(pl.lit(self.alpha, dtype=pl.Float64).alias("prediction"))

    def copy(self, extra: ParamMap | None = None) -> "RowCountingModel":
        alpha = (extra or {}).get("alpha", self.alpha)
        return RowCountingModel(self.fitted_rows, alpha, uid=self.uid)

    def get_params(self) -> dict[str, Any]:
        return {"fitted_rows": self.fitted_rows, "alpha": self.alpha}


@register_persistable
class RowCountingEstimator(DefaultParamsPersistable):
    """Estimator recording the row count and params of every fit call."""

    def __init__(self, alpha: float = 0.0, uid: str | None = None) -> None:
        self.uid = uid or random_uid("rows_estimator")
        self.alpha = alpha
        self.fit_calls: list[tuple[int, dict[str, Any]]] = []

    def fit(self, dataset: pl.DataFrame, params: ParamMap | None = None) -> RowCountingModel:
        params = dict(params or {})
        self.fit_calls.append((dataset.height, params))
        return RowCountingModel(dataset.height, params.get("alpha", self.alpha))

    def copy(self, extra: ParamMap | None = None) -> "RowCountingEstimator":
        return RowCountingEstimator((extra or {}).get("alpha", self.alpha), uid=self.uid)

    def get_params(self) -> dict[str, Any]:
        return {"alpha": self.alpha}


class BatchRowCountingEstimator(RowCountingEstimator):
    """Row counting estimator offering a batched fit.

    `drop` models are removed from the end of each batch.
    """

    def __init__(self, alpha: float = 0.0, drop: int = 0, uid: str | None = None) -> None:
        super().__init__(alpha, uid=uid)
        self.drop = drop
        self.batch_calls = 0

    def fit_many(self, dataset: pl.DataFrame, param_grid: Sequence[ParamMap]) -> list:
        self.batch_calls += 1
        models = [RowCountingModel(dataset.height, p.get("alpha", self.alpha)) for p in param_grid]
        return models[: len(models) - self.drop]


@register_persistable
class PredictionMaxEvaluator(DefaultParamsPersistable):
    """Evaluator scoring a dataset with the largest value of its prediction column."""

    def __init__(self, larger_is_better: bool = True, uid: str | None = None) -> None:
        self.uid = uid or random_uid("max_evaluator")
        self.larger_is_better = larger_is_better

    @property
    def is_larger_better(self) -> bool:
        return self.larger_is_better

    def evaluate(self, dataset: pl.DataFrame) -> float:
        return float(dataset["prediction"].max())

    def copy(self, extra: ParamMap | None = None) -> "PredictionMaxEvaluator":
        larger = (extra or {}).get("larger_is_better", self.larger_is_better)
        return PredictionMaxEvaluator(larger, uid=self.uid)

    def get_params(self) -> dict[str, Any]:
        return {"larger_is_better": self.larger_is_better}


class RecordingObserver:
    """Observer keeping every event it receives."""

    def __init__(self) -> None:
        self.events: list[tuple[Any, ...]] = []

    def on_candidate_scored(self, uid, index, params, metric) -> None:
        self.events.append(("candidate", uid, index, dict(params), metric))

    def on_candidates_scored(self, uid, metrics) -> None:
        self.events.append(("summary", uid, list(metrics)))

    def on_best_selected(self, uid, selection, params) -> None:
        self.events.append(("best", uid, selection, dict(params)))


# ============================================================================
# Common Test Data
# ============================================================================


@pytest.fixture
def dataset() -> pl.DataFrame:
    """A 200-row dataset with a unique row id."""
    return pl.DataFrame({"id": np.arange(200), "x": np.linspace(0.0, 1.0, 200)})


@pytest.fixture
def regression_data() -> pl.DataFrame:
    """A noisy linear regression problem."""
    rng = np.random.default_rng(7)
    x1 = rng.normal(size=300)
    x2 = rng.normal(size=300)
    y = 3.0 * x1 - 2.0 * x2 + rng.normal(scale=0.1, size=300)
    return pl.DataFrame({"x1": x1, "x2": x2, "y": y})


@pytest.fixture
def alpha_grid() -> list[dict[str, float]]:
    """Candidates whose score equals their alpha under PredictionMaxEvaluator."""
    return [{"alpha": 0.2}, {"alpha": 0.9}, {"alpha": 0.9}, {"alpha": 0.1}]


@pytest.fixture
def estimator() -> RowCountingEstimator:
    return RowCountingEstimator()


@pytest.fixture
def batch_estimator() -> BatchRowCountingEstimator:
    return BatchRowCountingEstimator()


@pytest.fixture
def evaluator() -> PredictionMaxEvaluator:
    return PredictionMaxEvaluator()


@pytest.fixture
def minimizing_evaluator() -> PredictionMaxEvaluator:
    return PredictionMaxEvaluator(larger_is_better=False)


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def short_batch_estimator() -> BatchRowCountingEstimator:
    """A batched estimator returning one model less than asked for."""
    return BatchRowCountingEstimator(drop=1)
