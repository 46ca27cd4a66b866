"""Validation core components.

This package provides single-split hyperparameter validation:
- Random train/validation partitioning
- Candidate fitting and scoring in param grid order
- Best candidate selection and refit on the complete dataset
- Versioned persistence of validators and fitted models

Example usage:
    from tvsplit.core import TrainValidationSplit, TrainValidationSplitModel

    tvs = TrainValidationSplit(
        estimator=estimator,
        evaluator=evaluator,
        param_grid=[{"alpha": 0.1}, {"alpha": 1.0}],
        train_ratio=0.8,
    )
    model = tvs.fit(df)
    model.save("models/tvs")
    reloaded = TrainValidationSplitModel.load("models/tvs")
"""

from tvsplit.core.errors import (
    CandidateCountMismatchError,
    ConfigurationError,
    PersistenceError,
    PersistenceReadError,
    PersistenceWriteError,
    TuningError,
)
from tvsplit.core.evaluation import CandidateEvaluator
from tvsplit.core.observers import IgnoreAllObserver
from tvsplit.core.persistence import (
    DefaultParamsPersistable,
    Metadata,
    load_instance,
    read_metadata,
    write_metadata,
)
from tvsplit.core.protocols import (
    BatchEstimator,
    Estimator,
    Evaluator,
    Model,
    ParamGrid,
    ParamMap,
    Persistable,
    SelectionResult,
    ValidationObserver,
)
from tvsplit.core.registry import LoaderRegistry, get_loader_registry, register_persistable
from tvsplit.core.selection import select_best
from tvsplit.core.splitters import DEFAULT_TRAIN_RATIO, DataSplitter, RandomSplitter, SplitData
from tvsplit.core.validation import TrainValidationSplit, TrainValidationSplitModel

__all__ = [
    # Protocols
    "Estimator",
    "BatchEstimator",
    "Evaluator",
    "Model",
    "Persistable",
    "ValidationObserver",
    "DataSplitter",
    "ParamMap",
    "ParamGrid",
    # Data classes
    "SelectionResult",
    "SplitData",
    "Metadata",
    # Implementations
    "RandomSplitter",
    "CandidateEvaluator",
    "IgnoreAllObserver",
    "DefaultParamsPersistable",
    "LoaderRegistry",
    "select_best",
    "get_loader_registry",
    "register_persistable",
    "read_metadata",
    "write_metadata",
    "load_instance",
    "DEFAULT_TRAIN_RATIO",
    # Validation
    "TrainValidationSplit",
    "TrainValidationSplitModel",
    # Errors
    "TuningError",
    "ConfigurationError",
    "CandidateCountMismatchError",
    "PersistenceError",
    "PersistenceReadError",
    "PersistenceWriteError",
]
