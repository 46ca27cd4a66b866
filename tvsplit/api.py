"""Library entry points.

`configure` builds a validator, filling unset options from the settings and
services of the dependency injection container. `load` reloads any persisted
component from the identity recorded in its metadata.
"""

from pathlib import Path
from typing import Any

from tvsplit.containers import container
from tvsplit.core.persistence import load_instance
from tvsplit.core.protocols import Estimator, Evaluator, ParamGrid, ValidationObserver
from tvsplit.core.validation import TrainValidationSplit


def configure(
    estimator: Estimator,
    evaluator: Evaluator,
    param_grid: ParamGrid,
    train_ratio: float | None = None,
    seed: int | None = None,
    observer: ValidationObserver | None = None,
) -> TrainValidationSplit:
    """Create a validator.

    Args:
        estimator: Estimator fitting one model per candidate.
        evaluator: Evaluator scoring the candidates.
        param_grid: Ordered candidate configurations.
        train_ratio: Expected training fraction. Defaults to `TVS_TRAIN_RATIO` or 0.75.
        seed: Split seed. Defaults to `TVS_SEED` or a random split.
        observer: Observer of the run. Defaults to the container's logging observer.

    Returns:
        The immutable validator configuration.

    Raises:
        ConfigurationError: If a required collaborator is missing or the
            ratio lies outside (0, 1).
    """
    settings = container.settings().validation
    return TrainValidationSplit(
        estimator=estimator,
        evaluator=evaluator,
        param_grid=param_grid,
        train_ratio=settings.train_ratio if train_ratio is None else train_ratio,
        seed=settings.seed if seed is None else seed,
        observer=container.observer() if observer is None else observer,
        splitter=container.splitter(),
    )


def load(path: str | Path) -> Any:
    """Load a persisted validator, validation model or collaborator.

    Raises:
        PersistenceReadError: If the artifact is invalid or its class has no
            registered loader.
    """
    return load_instance(path, registry=container.loader_registry())


__all__ = ["configure", "load"]
