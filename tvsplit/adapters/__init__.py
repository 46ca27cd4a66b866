"""Adapters exposing third-party learners through the validation protocols."""

from tvsplit.adapters.sklearn import (
    METRICS,
    MetricSpec,
    SklearnEstimator,
    SklearnEvaluator,
    SklearnModel,
    g_mean_score,
)

__all__ = [
    "METRICS",
    "MetricSpec",
    "SklearnEstimator",
    "SklearnEvaluator",
    "SklearnModel",
    "g_mean_score",
]
