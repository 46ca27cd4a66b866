"""Scikit-Learn adapters implementing the estimator, model and evaluator protocols.

Datasets are Polars DataFrames; features are selected by column name and
materialized to NumPy arrays before being handed to Scikit-Learn.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np
import polars as pl
from sklearn.base import BaseEstimator, clone
from sklearn.metrics import (
    accuracy_score,
    balanced_accuracy_score,
    confusion_matrix,
    f1_score,
    mean_absolute_error,
    mean_squared_error,
    r2_score,
)

from tvsplit.core.errors import ConfigurationError, PersistenceReadError, PersistenceWriteError
from tvsplit.core.identifiable import class_identity, random_uid
from tvsplit.core.persistence import DefaultParamsPersistable, read_metadata, write_metadata
from tvsplit.core.protocols import ParamMap
from tvsplit.core.registry import register_persistable
from tvsplit.storage import LocalStorage, Storage, StorageError

ESTIMATOR_KEY = "estimator.joblib"
MODEL_KEY = "model.joblib"


def g_mean_score(y_true, y_pred):
    """Calculates the Geometric Mean of Sensitivity and Specificity."""
    tn, fp, fn, tp = confusion_matrix(y_true, y_pred, labels=[0, 1]).ravel()
    sensitivity = tp / (tp + fn) if (tp + fn) > 0 else 0
    specificity = tn / (tn + fp) if (tn + fp) > 0 else 0
    return np.sqrt(sensitivity * specificity)


def _rmse(y_true, y_pred):
    return np.sqrt(mean_squared_error(y_true, y_pred))


@dataclass(frozen=True, slots=True)
class MetricSpec:
    """A named metric and its direction."""

    score: Callable[[Any, Any], float]
    larger_is_better: bool


METRICS: dict[str, MetricSpec] = {
    "accuracy": MetricSpec(accuracy_score, True),
    "balanced_accuracy": MetricSpec(balanced_accuracy_score, True),
    "f1": MetricSpec(f1_score, True),
    "g_mean": MetricSpec(g_mean_score, True),
    "r2": MetricSpec(r2_score, True),
    "mse": MetricSpec(mean_squared_error, False),
    "rmse": MetricSpec(_rmse, False),
    "mae": MetricSpec(mean_absolute_error, False),
}


def _write_blob(storage: Storage, obj: Any, key: str, path: str | Path) -> None:
    try:
        storage.write_joblib(obj, key)
    except StorageError as e:
        raise PersistenceWriteError(path, e.reason) from e


def _read_blob(path: str | Path, key: str) -> Any:
    try:
        return LocalStorage(Path(path)).read_joblib(key)
    except StorageError as e:
        raise PersistenceReadError(path, e.reason) from e


def _features_matrix(dataset: pl.DataFrame, features: Sequence[str]) -> np.ndarray:
    return dataset.select(list(features)).to_numpy()


@register_persistable
class SklearnModel:
    """Fitted Scikit-Learn estimator appending its predictions as a column."""

    def __init__(
        self,
        estimator: BaseEstimator,
        features: Sequence[str],
        prediction_col: str = "prediction",
        uid: str | None = None,
    ) -> None:
        self.uid = uid or random_uid("sklearn_model")
        self.estimator = estimator
        self.features = list(features)
        self.prediction_col = prediction_col

    def transform(self, dataset: pl.DataFrame, params: ParamMap | None = None) -> pl.DataFrame:
        """Append the predictions of the fitted estimator.

        Hyperparameters in `params` only take effect at fit time, so they do
        not change the predictions of an already fitted model.
        """
        predictions = self.estimator.predict(_features_matrix(dataset, self.features))
        return dataset.with_columns(pl.Series(self.prediction_col, predictions))

    def copy(self, extra: ParamMap | None = None) -> "SklearnModel":
        prediction_col = (extra or {}).get("prediction_col", self.prediction_col)
        return SklearnModel(self.estimator, self.features, prediction_col, uid=self.uid)

    def save(self, path: str | Path, overwrite: bool = False) -> None:
        storage = write_metadata(
            self,
            path,
            param_map={"features": self.features, "predictionCol": self.prediction_col},
            overwrite=overwrite,
        )
        _write_blob(storage, self.estimator, MODEL_KEY, path)

    @classmethod
    def load(cls, path: str | Path) -> "SklearnModel":
        metadata = read_metadata(path, expected_identity=class_identity(cls))
        return cls(
            _read_blob(path, MODEL_KEY),
            metadata.get_param("features"),
            metadata.get_param("predictionCol"),
            uid=metadata.uid,
        )


@register_persistable
class SklearnEstimator:
    """Estimator fitting a clone of a Scikit-Learn estimator per configuration.

    Args:
        estimator: Unfitted Scikit-Learn estimator used as template.
        features: Feature column names.
        label: Label column name.
        prediction_col: Name of the column added by the fitted models.
        uid: Optional unique identifier.
    """

    def __init__(
        self,
        estimator: BaseEstimator,
        features: Sequence[str],
        label: str,
        prediction_col: str = "prediction",
        uid: str | None = None,
    ) -> None:
        if not features:
            raise ConfigurationError("features must name at least one column")
        self.uid = uid or random_uid("sklearn_estimator")
        self.estimator = estimator
        self.features = list(features)
        self.label = label
        self.prediction_col = prediction_col

    def fit(self, dataset: pl.DataFrame, params: ParamMap | None = None) -> SklearnModel:
        """Fit a fresh clone of the template with `params` applied."""
        estimator = clone(self.estimator)
        if params:
            estimator.set_params(**params)
        estimator.fit(_features_matrix(dataset, self.features), dataset[self.label].to_numpy())
        return SklearnModel(estimator, self.features, self.prediction_col)

    def copy(self, extra: ParamMap | None = None) -> "SklearnEstimator":
        """Copy the estimator, applying the entries of `extra` it knows about."""
        estimator = clone(self.estimator)
        known = estimator.get_params()
        overrides = {k: v for k, v in (extra or {}).items() if k in known}
        if overrides:
            estimator.set_params(**overrides)
        return SklearnEstimator(
            estimator, self.features, self.label, self.prediction_col, uid=self.uid
        )

    def save(self, path: str | Path, overwrite: bool = False) -> None:
        storage = write_metadata(
            self,
            path,
            param_map={
                "features": self.features,
                "label": self.label,
                "predictionCol": self.prediction_col,
            },
            overwrite=overwrite,
        )
        _write_blob(storage, self.estimator, ESTIMATOR_KEY, path)

    @classmethod
    def load(cls, path: str | Path) -> "SklearnEstimator":
        metadata = read_metadata(path, expected_identity=class_identity(cls))
        try:
            return cls(
                _read_blob(path, ESTIMATOR_KEY),
                metadata.get_param("features"),
                metadata.get_param("label"),
                metadata.get_param("predictionCol"),
                uid=metadata.uid,
            )
        except ConfigurationError as e:
            raise PersistenceReadError(path, str(e), identity=metadata.class_identity) from e


@register_persistable
class SklearnEvaluator(DefaultParamsPersistable):
    """Evaluator scoring predictions with a named Scikit-Learn metric.

    Args:
        metric: One of the keys of `METRICS`.
        label: Label column name.
        prediction_col: Prediction column name.
        uid: Optional unique identifier.
    """

    def __init__(
        self,
        metric: str = "r2",
        label: str = "label",
        prediction_col: str = "prediction",
        uid: str | None = None,
    ) -> None:
        if metric not in METRICS:
            raise ConfigurationError(
                f"Unknown metric '{metric}', expected one of {sorted(METRICS)}"
            )
        self.uid = uid or random_uid("sklearn_evaluator")
        self.metric = metric
        self.label = label
        self.prediction_col = prediction_col

    @property
    def is_larger_better(self) -> bool:
        return METRICS[self.metric].larger_is_better

    def evaluate(self, dataset: pl.DataFrame) -> float:
        score = METRICS[self.metric].score
        y_true = dataset[self.label].to_numpy()
        return float(score(y_true, dataset[self.prediction_col].to_numpy()))

    def get_params(self) -> dict[str, Any]:
        return {"metric": self.metric, "label": self.label, "prediction_col": self.prediction_col}

    def copy(self, extra: ParamMap | None = None) -> "SklearnEvaluator":
        """Copy the evaluator, applying the entries of `extra` it knows about."""
        params = self.get_params()
        params.update({k: v for k, v in (extra or {}).items() if k in params})
        return SklearnEvaluator(uid=self.uid, **params)


__all__ = [
    "METRICS",
    "MetricSpec",
    "g_mean_score",
    "SklearnEstimator",
    "SklearnModel",
    "SklearnEvaluator",
]
