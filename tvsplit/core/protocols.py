"""Protocol definitions for the collaborators of the validation core.

The core never fits or scores anything itself. It coordinates three opaque
collaborators: an estimator that fits models, the models it produces, and an
evaluator that scores transformed datasets. Datasets are Polars DataFrames.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import polars as pl

ParamMap = Mapping[str, Any]
"""One candidate configuration: hyperparameter name to value."""

ParamGrid = Sequence[ParamMap]
"""Ordered candidate configurations. A candidate is identified by its index."""


@dataclass(frozen=True, slots=True)
class SelectionResult:
    """Outcome of the selection over a metric vector.

    Attributes:
        best_index: Index of the winning candidate in the param grid.
        best_metric: Score of the winning candidate.
    """

    best_index: int
    best_metric: float


@runtime_checkable
class Model(Protocol):
    """Protocol for fitted models."""

    uid: str

    def transform(self, dataset: pl.DataFrame, params: ParamMap | None = None) -> pl.DataFrame:
        """Transform a dataset, optionally overriding parameters for this call.

        Args:
            dataset: The dataset to transform.
            params: Optional parameter overrides.

        Returns:
            The transformed dataset.
        """
        ...

    def copy(self, extra: ParamMap | None = None) -> "Model":
        """Return a copy of this model with `extra` parameters applied."""
        ...


@runtime_checkable
class Estimator(Protocol):
    """Protocol for estimators, which fit models from datasets."""

    uid: str

    def fit(self, dataset: pl.DataFrame, params: ParamMap | None = None) -> Model:
        """Fit a model on the dataset using the given configuration.

        Args:
            dataset: The dataset to fit on.
            params: Hyperparameters overriding the estimator defaults.

        Returns:
            The fitted model.
        """
        ...

    def copy(self, extra: ParamMap | None = None) -> "Estimator":
        """Return a copy of this estimator with `extra` parameters applied."""
        ...


@runtime_checkable
class BatchEstimator(Estimator, Protocol):
    """Estimator able to fit every candidate of a param grid in a single call.

    Implementations may fit candidates in parallel internally. The returned
    models must be in the same order as the param grid.
    """

    def fit_many(self, dataset: pl.DataFrame, param_grid: ParamGrid) -> list[Model]:
        """Fit one model per candidate configuration."""
        ...


@runtime_checkable
class Evaluator(Protocol):
    """Protocol for evaluators, which score the output of a model."""

    uid: str

    @property
    def is_larger_better(self) -> bool:
        """Whether a larger score means a better model."""
        ...

    def evaluate(self, dataset: pl.DataFrame) -> float:
        """Score a transformed dataset.

        Args:
            dataset: Output of `Model.transform`.

        Returns:
            The score.
        """
        ...

    def copy(self, extra: ParamMap | None = None) -> "Evaluator":
        """Return a copy of this evaluator with `extra` parameters applied."""
        ...


@runtime_checkable
class Persistable(Protocol):
    """Protocol for components that can be saved to a directory.

    Saving alone is not enough for an artifact to be reloadable: the
    component's class must also have a loader registered in the loader
    registry (see `tvsplit.core.registry.register_persistable`).
    """

    uid: str

    def save(self, path: str | Path, overwrite: bool = False) -> None:
        """Save the component under `path`.

        Args:
            path: Target directory.
            overwrite: Whether an existing artifact at `path` may be replaced.
        """
        ...


@runtime_checkable
class ValidationObserver(Protocol):
    """Observer notified at well-defined points of a validation run.

    Observers are purely diagnostic. Exceptions raised by an observer are
    logged and discarded, they never affect the run.
    """

    def on_candidate_scored(self, uid: str, index: int, params: ParamMap, metric: float) -> None:
        """Called after each candidate is scored on the validation partition."""
        ...

    def on_candidates_scored(self, uid: str, metrics: Sequence[float]) -> None:
        """Called once every candidate has been scored."""
        ...

    def on_best_selected(self, uid: str, selection: SelectionResult, params: ParamMap) -> None:
        """Called once the winning candidate is known, before the refit."""
        ...


__all__ = [
    "ParamMap",
    "ParamGrid",
    "SelectionResult",
    "Model",
    "Estimator",
    "BatchEstimator",
    "Evaluator",
    "Persistable",
    "ValidationObserver",
]
