"""Selection of the best candidate from a metric vector."""

from collections.abc import Sequence

from tvsplit.core.errors import ConfigurationError
from tvsplit.core.protocols import SelectionResult


def select_best(metrics: Sequence[float], is_larger_better: bool) -> SelectionResult:
    """Pick the best-scoring candidate.

    The scan is stable: when several candidates share the extreme score,
    the first of them wins.

    Args:
        metrics: One score per candidate, aligned with the param grid.
        is_larger_better: Whether larger scores are better (argmax) or
            smaller ones are (argmin).

    Returns:
        The index and score of the winning candidate.

    Raises:
        ConfigurationError: If there are no metrics to select from.
    """
    if len(metrics) == 0:
        raise ConfigurationError("Cannot select a best candidate from an empty metric vector")

    best_index = 0
    best_metric = metrics[0]
    for index, metric in enumerate(metrics[1:], start=1):
        improved = metric > best_metric if is_larger_better else metric < best_metric
        if improved:
            best_index, best_metric = index, metric

    return SelectionResult(best_index=best_index, best_metric=float(best_metric))


__all__ = ["select_best"]
