"""Fitting and scoring of every candidate configuration."""

from collections.abc import Sequence

from tvsplit.core.errors import CandidateCountMismatchError
from tvsplit.core.observers import notify
from tvsplit.core.protocols import (
    BatchEstimator,
    Estimator,
    Evaluator,
    Model,
    ParamGrid,
    ValidationObserver,
)
from tvsplit.core.splitters import SplitData


class CandidateEvaluator:
    """Fits one model per candidate and scores each on the validation partition.

    This implementation:
    - Uses the estimator's batched `fit_many` when it offers one
    - Releases the training partition before scoring begins
    - Scores candidates strictly in param grid order
    - Releases the validation partition once every candidate is scored

    Any exception raised by the estimator, a model or the evaluator aborts the
    whole evaluation; no partial metric vector is produced.
    """

    def __init__(self, observer: ValidationObserver | None = None, owner_uid: str = "") -> None:
        """Initialize the evaluator.

        Args:
            observer: Optional observer notified of each score and of the summary.
            owner_uid: UID of the validator on whose behalf candidates are evaluated.
        """
        self._observer = observer
        self._owner_uid = owner_uid

    def evaluate(
        self,
        split: SplitData,
        estimator: Estimator,
        evaluator: Evaluator,
        param_grid: ParamGrid,
    ) -> list[float]:
        """Fit and score every candidate.

        Args:
            split: Train/validation partitions. Both are released by this call.
            estimator: Estimator fitting the candidate models.
            evaluator: Evaluator scoring the transformed validation partition.
            param_grid: Ordered candidate configurations.

        Returns:
            One score per candidate, index-aligned with `param_grid`.
        """
        models = self._fit_candidates(split, estimator, param_grid)
        split.release_train()

        metrics = [0.0] * len(param_grid)
        for index, params in enumerate(param_grid):
            # The evaluator is shared and is not re-parameterized per candidate;
            # only the model transform receives the candidate params.
            metric = float(evaluator.evaluate(models[index].transform(split.validation, params)))
            metrics[index] = metric
            notify(self._observer, "on_candidate_scored", self._owner_uid, index, params, metric)
        split.release_validation()

        notify(self._observer, "on_candidates_scored", self._owner_uid, list(metrics))
        return metrics

    @staticmethod
    def _fit_candidates(
        split: SplitData,
        estimator: Estimator,
        param_grid: ParamGrid,
    ) -> Sequence[Model]:
        if isinstance(estimator, BatchEstimator):
            models = list(estimator.fit_many(split.train, param_grid))
        else:
            models = [estimator.fit(split.train, params) for params in param_grid]

        if len(models) != len(param_grid):
            raise CandidateCountMismatchError(expected=len(param_grid), actual=len(models))
        return models


__all__ = ["CandidateEvaluator"]
