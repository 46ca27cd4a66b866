"""Tests for tvsplit.core.registry module."""

from pathlib import Path

import pytest

from tvsplit.core.identifiable import class_identity
from tvsplit.core.registry import LoaderRegistry, get_loader_registry, register_persistable


def _load_a(path: Path) -> str:
    return f"a:{path}"


def _load_b(path: Path) -> str:
    return f"b:{path}"


class DescribeLoaderRegistry:
    @pytest.fixture
    def registry(self) -> LoaderRegistry:
        return LoaderRegistry()

    def it_registers_and_returns_a_loader(self, registry: LoaderRegistry) -> None:
        registry.register("pkg.A", _load_a)

        assert registry.get("pkg.A") is _load_a
        assert registry.is_registered("pkg.A")

    def it_returns_none_for_unknown_identity(self, registry: LoaderRegistry) -> None:
        assert registry.get("pkg.Unknown") is None
        assert not registry.is_registered("pkg.Unknown")

    def it_accepts_registering_the_same_loader_twice(self, registry: LoaderRegistry) -> None:
        registry.register("pkg.A", _load_a)
        registry.register("pkg.A", _load_a)

        assert registry.identities() == ["pkg.A"]

    def it_rejects_a_different_loader_for_a_registered_identity(
        self, registry: LoaderRegistry
    ) -> None:
        registry.register("pkg.A", _load_a)

        with pytest.raises(ValueError, match="already registered"):
            registry.register("pkg.A", _load_b)

    def it_lists_identities_sorted(self, registry: LoaderRegistry) -> None:
        registry.register("pkg.B", _load_b)
        registry.register("pkg.A", _load_a)

        assert registry.identities() == ["pkg.A", "pkg.B"]

    def it_unregisters_and_clears(self, registry: LoaderRegistry) -> None:
        registry.register("pkg.A", _load_a)
        registry.register("pkg.B", _load_b)

        registry.unregister("pkg.A")
        assert registry.identities() == ["pkg.B"]

        registry.clear()
        assert registry.identities() == []


class DescribeRegisterPersistable:
    def it_registers_the_class_loader_under_its_identity(self) -> None:
        @register_persistable
        class Temporary:
            @classmethod
            def load(cls, path):
                return cls()

        identity = class_identity(Temporary)
        try:
            loader = get_loader_registry().get(identity)
            assert loader is not None
            assert isinstance(loader(Path("ignored")), Temporary)
        finally:
            get_loader_registry().unregister(identity)

    def it_requires_a_load_classmethod(self) -> None:
        with pytest.raises(TypeError, match="must define a 'load'"):

            @register_persistable
            class NotLoadable:
                pass

    def it_registers_the_validators(self) -> None:
        identities = get_loader_registry().identities()

        assert "tvsplit.core.validation.TrainValidationSplit" in identities
        assert "tvsplit.core.validation.TrainValidationSplitModel" in identities
