"""Tests for tvsplit.api module."""

from pathlib import Path

import pytest

import tvsplit
from tvsplit.api import configure, load
from tvsplit.config.logging import LoggingObserver
from tvsplit.containers import container
from tvsplit.core.errors import ConfigurationError, PersistenceReadError
from tvsplit.core.validation import TrainValidationSplit
from tvsplit.settings import TvsSettings, ValidationSettings


@pytest.fixture
def overridden_settings():
    """Override the global container settings for a single test."""
    settings = TvsSettings(validation=ValidationSettings(train_ratio=0.6, seed=17))
    with container.settings.override(settings):
        yield settings


class DescribeConfigure:
    def it_uses_container_defaults(
        self, overridden_settings, estimator, evaluator, alpha_grid
    ) -> None:
        tvs = configure(estimator, evaluator, alpha_grid)

        assert isinstance(tvs, TrainValidationSplit)
        assert tvs.train_ratio == 0.6
        assert tvs.seed == 17
        assert isinstance(tvs.observer, LoggingObserver)

    def it_prefers_explicit_arguments(
        self, overridden_settings, estimator, evaluator, alpha_grid, observer
    ) -> None:
        tvs = configure(
            estimator, evaluator, alpha_grid, train_ratio=0.9, seed=1, observer=observer
        )

        assert tvs.train_ratio == 0.9
        assert tvs.seed == 1
        assert tvs.observer is observer

    def it_rejects_invalid_ratios(self, estimator, evaluator, alpha_grid) -> None:
        with pytest.raises(ConfigurationError):
            configure(estimator, evaluator, alpha_grid, train_ratio=1.0)

    def it_is_exposed_at_package_level(self) -> None:
        assert tvsplit.configure is configure
        assert tvsplit.load is load


class DescribeLoad:
    def it_loads_by_recorded_identity(
        self, tmp_path: Path, dataset, estimator, evaluator, alpha_grid
    ) -> None:
        model = configure(estimator, evaluator, alpha_grid, seed=2).fit(dataset)
        model.save(tmp_path / "tvs")

        loaded = load(tmp_path / "tvs")

        assert type(loaded) is type(model)
        assert loaded.best_params == model.best_params

    def it_fails_for_missing_artifacts(self, tmp_path: Path) -> None:
        with pytest.raises(PersistenceReadError):
            load(tmp_path / "missing")
