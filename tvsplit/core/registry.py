"""Loader registry for reloading persisted components by recorded identity.

Every persisted artifact records the identity of the class that produced it.
On read, the identity selects the loader registered for it, so that nested
artifacts of arbitrary types (estimators, evaluators, best models) can be
rebuilt without importing classes by name.

Example:
    ```python
    @register_persistable
    class MyModel:
        def save(self, path, overwrite=False): ...

        @classmethod
        def load(cls, path): ...
    ```
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from tvsplit.core.identifiable import class_identity

Loader = Callable[[Path], Any]

T = TypeVar("T", bound=type)


class LoaderRegistry:
    """Maps implementation identities to loader callables."""

    def __init__(self) -> None:
        self._loaders: dict[str, Loader] = {}

    def register(self, identity: str, loader: Loader) -> None:
        """Register a loader for an identity.

        Registering the same loader twice is a no-op.

        Raises:
            ValueError: If a different loader is already registered for the identity.
        """
        registered = self._loaders.get(identity)
        if registered is not None and registered != loader:
            raise ValueError(f"Loader already registered for '{identity}': {registered!r}")
        self._loaders[identity] = loader

    def get(self, identity: str) -> Loader | None:
        """Get the loader for an identity, or None if not registered."""
        return self._loaders.get(identity)

    def is_registered(self, identity: str) -> bool:
        return identity in self._loaders

    def identities(self) -> list[str]:
        return sorted(self._loaders)

    def unregister(self, identity: str) -> None:
        self._loaders.pop(identity, None)

    def clear(self) -> None:
        """Clear the registry.

        This is primarily useful for testing.
        """
        self._loaders.clear()


# Global registry used unless a caller supplies its own
_LOADER_REGISTRY = LoaderRegistry()


def get_loader_registry() -> LoaderRegistry:
    """Get the global loader registry."""
    return _LOADER_REGISTRY


def register_persistable(cls: T) -> T:
    """Class decorator registering `cls.load` under the class identity.

    Apply it outermost when combined with `@dataclass(slots=True)`, which
    replaces the class object.

    Raises:
        TypeError: If the class does not define a callable `load`.
    """
    loader = getattr(cls, "load", None)
    if not callable(loader):
        raise TypeError(f"{cls.__name__} must define a 'load' classmethod to be persistable")
    _LOADER_REGISTRY.register(class_identity(cls), loader)
    return cls


__all__ = [
    "Loader",
    "LoaderRegistry",
    "get_loader_registry",
    "register_persistable",
]
