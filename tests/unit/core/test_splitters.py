"""Tests for tvsplit.core.splitters module."""

import numpy as np
import polars as pl
import pytest

from tvsplit.core.errors import ConfigurationError
from tvsplit.core.splitters import (
    DEFAULT_TRAIN_RATIO,
    DataSplitter,
    RandomSplitter,
    SplitData,
    validate_train_ratio,
)


class DescribeValidateTrainRatio:
    @pytest.mark.parametrize("ratio", [0.01, 0.5, 0.75, 0.99, np.float64(0.3)])
    def it_accepts_ratios_strictly_between_zero_and_one(self, ratio: float) -> None:
        assert validate_train_ratio(ratio) == float(ratio)

    @pytest.mark.parametrize("ratio", [0, 0.0, 1, 1.0, -0.2, 1.5, float("nan")])
    def it_rejects_ratios_outside_the_open_interval(self, ratio: float) -> None:
        with pytest.raises(ConfigurationError, match="strictly between 0 and 1"):
            validate_train_ratio(ratio)

    @pytest.mark.parametrize("ratio", ["0.5", None, True])
    def it_rejects_non_numbers(self, ratio: object) -> None:
        with pytest.raises(ConfigurationError, match="must be a number"):
            validate_train_ratio(ratio)  # type: ignore[arg-type]

    def it_defaults_to_three_quarters(self) -> None:
        assert DEFAULT_TRAIN_RATIO == 0.75


class DescribeRandomSplitter:
    @pytest.fixture
    def splitter(self) -> RandomSplitter:
        return RandomSplitter()

    def it_satisfies_the_splitter_protocol(self, splitter: RandomSplitter) -> None:
        assert isinstance(splitter, DataSplitter)

    def it_produces_disjoint_partitions_covering_every_row(
        self, splitter: RandomSplitter, dataset: pl.DataFrame
    ) -> None:
        split = splitter.split(dataset, 0.75, seed=42)

        train_ids = set(split.train["id"].to_list())
        validation_ids = set(split.validation["id"].to_list())
        assert train_ids.isdisjoint(validation_ids)
        assert train_ids | validation_ids == set(dataset["id"].to_list())
        assert split.train.height + split.validation.height == dataset.height

    def it_is_reproducible_with_a_seed(
        self, splitter: RandomSplitter, dataset: pl.DataFrame
    ) -> None:
        first = splitter.split(dataset, 0.6, seed=7)
        second = splitter.split(dataset, 0.6, seed=7)

        assert first.train.equals(second.train)
        assert first.validation.equals(second.validation)

    def it_varies_with_the_seed(self, splitter: RandomSplitter, dataset: pl.DataFrame) -> None:
        first = splitter.split(dataset, 0.6, seed=1)
        second = splitter.split(dataset, 0.6, seed=2)

        assert not first.train.equals(second.train)

    def it_matches_the_ratio_in_expectation(self, splitter: RandomSplitter) -> None:
        large = pl.DataFrame({"id": np.arange(20_000)})

        split = splitter.split(large, 0.3, seed=0)

        assert split.train.height / large.height == pytest.approx(0.3, abs=0.02)

    def it_keeps_the_schema(self, splitter: RandomSplitter, dataset: pl.DataFrame) -> None:
        split = splitter.split(dataset, 0.5, seed=3)

        assert split.train.schema == dataset.schema
        assert split.validation.schema == dataset.schema

    @pytest.mark.parametrize("ratio", [0.0, 1.0])
    def it_rejects_boundary_ratios(
        self, splitter: RandomSplitter, dataset: pl.DataFrame, ratio: float
    ) -> None:
        with pytest.raises(ConfigurationError):
            splitter.split(dataset, ratio)


class DescribeSplitData:
    def it_releases_partitions_independently(self, dataset: pl.DataFrame) -> None:
        split = SplitData(train=dataset.head(10), validation=dataset.tail(10))

        split.release_train()

        assert split.train is None
        assert split.validation is not None

        split.release_validation()

        assert split.validation is None
