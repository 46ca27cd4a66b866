"""Hyperparameter validation over a single train/validation split.

`TrainValidationSplit` is an immutable configuration: an estimator, an
evaluator, an ordered param grid and a train ratio. Fitting it:

1. splits the dataset once into training and validation partitions;
2. fits one model per candidate on the training partition;
3. scores every model on the validation partition;
4. selects the best-scoring candidate;
5. refits that candidate on the complete dataset.

The result is a `TrainValidationSplitModel`, which owns the refitted best
model and can be saved and reloaded together with it.
"""

from dataclasses import dataclass, field, replace
from numbers import Real
from pathlib import Path
from typing import Any

import polars as pl

from tvsplit.core.errors import ConfigurationError, PersistenceReadError
from tvsplit.core.evaluation import CandidateEvaluator
from tvsplit.core.identifiable import class_identity, random_uid
from tvsplit.core.observers import notify
from tvsplit.core.persistence import (
    Metadata,
    ensure_persistable,
    load_instance,
    read_metadata,
    write_metadata,
)
from tvsplit.core.protocols import (
    Estimator,
    Evaluator,
    Model,
    ParamGrid,
    ParamMap,
    ValidationObserver,
)
from tvsplit.core.registry import register_persistable
from tvsplit.core.selection import select_best
from tvsplit.core.splitters import (
    DEFAULT_TRAIN_RATIO,
    DataSplitter,
    RandomSplitter,
    validate_train_ratio,
)

ESTIMATOR_DIR = "estimator"
EVALUATOR_DIR = "evaluator"
BEST_MODEL_DIR = "bestModel"


def _freeze_param_grid(param_grid: ParamGrid) -> tuple[dict[str, Any], ...]:
    return tuple(dict(params) for params in param_grid)


def _is_score(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _validator_param_map(
    train_ratio: float,
    seed: int | None,
    param_grid: ParamGrid,
) -> dict[str, Any]:
    return {
        "trainRatio": train_ratio,
        "seed": seed,
        "estimatorParamMaps": [dict(params) for params in param_grid],
    }


def _save_validator(
    instance: "TrainValidationSplit | TrainValidationSplitModel",
    path: str | Path,
    overwrite: bool,
    extra: dict[str, Any] | None = None,
) -> None:
    """Write the metadata and the estimator/evaluator shared by both variants."""
    write_metadata(
        instance,
        path,
        param_map=_validator_param_map(instance.train_ratio, instance.seed, instance.param_grid),
        extra=extra,
        overwrite=overwrite,
    )
    instance.estimator.save(Path(path) / ESTIMATOR_DIR)
    instance.evaluator.save(Path(path) / EVALUATOR_DIR)


def _load_validator(
    path: str | Path,
    expected_identity: str,
) -> tuple[Metadata, Any, Any, tuple[dict[str, Any], ...], float, int | None]:
    """Read the metadata and rebuild the estimator, evaluator and param grid."""
    metadata = read_metadata(path, expected_identity=expected_identity)

    param_grid = metadata.get_param("estimatorParamMaps")
    if not isinstance(param_grid, list) or not all(isinstance(p, dict) for p in param_grid):
        raise PersistenceReadError(path, "estimatorParamMaps must be a list of JSON objects")
    try:
        train_ratio = validate_train_ratio(metadata.get_param("trainRatio"))
    except ConfigurationError as e:
        raise PersistenceReadError(path, str(e)) from e
    seed = metadata.param_map.get("seed")

    estimator = load_instance(Path(path) / ESTIMATOR_DIR)
    evaluator = load_instance(Path(path) / EVALUATOR_DIR)
    return metadata, estimator, evaluator, _freeze_param_grid(param_grid), train_ratio, seed


@register_persistable
@dataclass(frozen=True, slots=True)
class TrainValidationSplit:
    """Validator selecting hyperparameters with a single random split.

    Attributes:
        estimator: Estimator fitting one model per candidate.
        evaluator: Evaluator scoring candidates on the validation partition.
        param_grid: Ordered candidate configurations.
        train_ratio: Expected fraction of rows used for training, in (0, 1).
        seed: Random seed of the split, or None for a random split.
        uid: Unique identifier, shared with the fitted model.
        observer: Optional observer of the validation run. Not persisted.
        splitter: Component partitioning the dataset. Not persisted.
    """

    estimator: Estimator
    evaluator: Evaluator
    param_grid: tuple[dict[str, Any], ...]
    train_ratio: float = DEFAULT_TRAIN_RATIO
    seed: int | None = None
    uid: str = field(default_factory=lambda: random_uid("tvs"))
    observer: ValidationObserver | None = field(default=None, compare=False, repr=False)
    splitter: DataSplitter = field(default_factory=RandomSplitter, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.estimator is None:
            raise ConfigurationError("estimator is required")
        if self.evaluator is None:
            raise ConfigurationError("evaluator is required")
        if self.param_grid is None:
            raise ConfigurationError("param_grid is required")
        object.__setattr__(self, "param_grid", _freeze_param_grid(self.param_grid))
        object.__setattr__(self, "train_ratio", validate_train_ratio(self.train_ratio))

    def fit(
        self,
        dataset: pl.DataFrame,
        params: ParamMap | None = None,
    ) -> "TrainValidationSplitModel":
        """Select the best candidate and refit it on the whole dataset.

        Args:
            dataset: The complete dataset.
            params: Optional extra parameters, applied through `copy` first.

        Returns:
            The fitted validation model.

        Raises:
            ConfigurationError: If the param grid is empty.
        """
        if params:
            return self.copy(params).fit(dataset)
        if not self.param_grid:
            raise ConfigurationError("param_grid must contain at least one candidate")

        split = self.splitter.split(dataset, self.train_ratio, self.seed)
        metrics = CandidateEvaluator(observer=self.observer, owner_uid=self.uid).evaluate(
            split, self.estimator, self.evaluator, self.param_grid
        )

        selection = select_best(metrics, self.evaluator.is_larger_better)
        best_params = self.param_grid[selection.best_index]
        notify(self.observer, "on_best_selected", self.uid, selection, best_params)

        best_model = self.estimator.fit(dataset, best_params)
        return TrainValidationSplitModel(
            uid=self.uid,
            best_model=best_model,
            validation_metrics=tuple(metrics),
            estimator=self.estimator,
            evaluator=self.evaluator,
            param_grid=self.param_grid,
            train_ratio=self.train_ratio,
            seed=self.seed,
            parent=self,
        )

    def copy(self, extra: ParamMap | None = None) -> "TrainValidationSplit":
        """Return a copy whose estimator and evaluator are copied with `extra`.

        The `train_ratio` and `seed` entries of `extra`, when present, also
        replace the validator's own values.
        """
        extra = extra or {}
        return replace(
            self,
            estimator=self.estimator.copy(extra),
            evaluator=self.evaluator.copy(extra),
            train_ratio=extra.get("train_ratio", self.train_ratio),
            seed=extra.get("seed", self.seed),
        )

    def save(self, path: str | Path, overwrite: bool = False) -> None:
        """Save the configuration, its estimator and its evaluator under `path`.

        Raises:
            PersistenceWriteError: If the estimator or evaluator cannot be
                persisted, or `path` exists and `overwrite` is False.
        """
        ensure_persistable(self.estimator, "estimator", path)
        ensure_persistable(self.evaluator, "evaluator", path)
        _save_validator(self, path, overwrite)

    @classmethod
    def load(cls, path: str | Path) -> "TrainValidationSplit":
        """Load a configuration saved with `save`.

        Raises:
            PersistenceReadError: If the artifact is missing, invalid or was
                written by another class.
        """
        metadata, estimator, evaluator, param_grid, train_ratio, seed = _load_validator(
            path, class_identity(cls)
        )
        return cls(
            estimator=estimator,
            evaluator=evaluator,
            param_grid=param_grid,
            train_ratio=train_ratio,
            seed=seed,
            uid=metadata.uid,
        )


@register_persistable
@dataclass(frozen=True, slots=True)
class TrainValidationSplitModel:
    """Model produced by `TrainValidationSplit.fit`.

    Attributes:
        uid: UID of the validator that produced the model.
        best_model: Best candidate, refitted on the complete dataset.
        validation_metrics: One validation score per candidate.
        estimator: Estimator used for the candidates.
        evaluator: Evaluator used to score them.
        param_grid: Candidate configurations, aligned with `validation_metrics`.
        train_ratio: Train ratio used for the split.
        seed: Seed used for the split.
        parent: Validator that produced the model. Not persisted.
    """

    uid: str
    best_model: Model
    validation_metrics: tuple[float, ...]
    estimator: Estimator
    evaluator: Evaluator
    param_grid: tuple[dict[str, Any], ...]
    train_ratio: float = DEFAULT_TRAIN_RATIO
    seed: int | None = None
    parent: TrainValidationSplit | None = field(default=None, compare=False, repr=False)

    @property
    def best_index(self) -> int:
        """Index of the best candidate in the param grid."""
        return select_best(self.validation_metrics, self.evaluator.is_larger_better).best_index

    @property
    def best_metric(self) -> float:
        return self.validation_metrics[self.best_index]

    @property
    def best_params(self) -> dict[str, Any]:
        """Configuration of the best candidate."""
        return self.param_grid[self.best_index]

    def transform(self, dataset: pl.DataFrame, params: ParamMap | None = None) -> pl.DataFrame:
        """Transform the dataset with the best model."""
        return self.best_model.transform(dataset, params)

    def copy(self, extra: ParamMap | None = None) -> "TrainValidationSplitModel":
        return replace(
            self,
            best_model=self.best_model.copy(extra),
            validation_metrics=tuple(self.validation_metrics),
        )

    def save(self, path: str | Path, overwrite: bool = False) -> None:
        """Save the model, its configuration and its best model under `path`.

        The best model is saved with its own `save` under `<path>/bestModel`.

        Raises:
            PersistenceWriteError: If the estimator, evaluator or best model
                cannot be persisted, or `path` exists and `overwrite` is False.
        """
        ensure_persistable(self.estimator, "estimator", path)
        ensure_persistable(self.evaluator, "evaluator", path)
        ensure_persistable(self.best_model, "best model", path)
        _save_validator(
            self,
            path,
            overwrite,
            extra={"validationMetrics": list(self.validation_metrics)},
        )
        self.best_model.save(Path(path) / BEST_MODEL_DIR)

    @classmethod
    def load(cls, path: str | Path) -> "TrainValidationSplitModel":
        """Load a model saved with `save`, including its best model.

        Raises:
            PersistenceReadError: If the artifact or its best model is
                missing, invalid or was written by another class.
        """
        metadata, estimator, evaluator, param_grid, train_ratio, seed = _load_validator(
            path, class_identity(cls)
        )
        validation_metrics = metadata.get_extra("validationMetrics")
        if not isinstance(validation_metrics, list) or len(validation_metrics) != len(param_grid):
            raise PersistenceReadError(path, "validationMetrics must hold one score per candidate")
        if not all(_is_score(m) for m in validation_metrics):
            raise PersistenceReadError(path, "validationMetrics must only hold numbers")

        best_model = load_instance(Path(path) / BEST_MODEL_DIR)
        return cls(
            uid=metadata.uid,
            best_model=best_model,
            validation_metrics=tuple(float(m) for m in validation_metrics),
            estimator=estimator,
            evaluator=evaluator,
            param_grid=param_grid,
            train_ratio=train_ratio,
            seed=seed,
        )


__all__ = [
    "ESTIMATOR_DIR",
    "EVALUATOR_DIR",
    "BEST_MODEL_DIR",
    "TrainValidationSplit",
    "TrainValidationSplitModel",
]
