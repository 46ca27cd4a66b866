"""Dependency injection container for tvsplit.

This module defines the Container class which manages the shared services
of the package using dependency-injector. Defaults used by `tvsplit.configure`
are resolved through the module-level container instance.
"""

from dependency_injector import containers, providers
from loguru import logger

from tvsplit.config.logging import LoggingObserver
from tvsplit.core.registry import get_loader_registry
from tvsplit.core.splitters import RandomSplitter
from tvsplit.settings import TvsSettings


class Container(containers.DeclarativeContainer):
    """Main dependency injection container.

    Services are accessed via the container singleton instance.
    """

    # Root settings - loaded from environment/.env
    settings = providers.Singleton(TvsSettings)

    # Logger - use loguru global logger
    log = providers.Object(logger)

    # Registry used to reload persisted components
    loader_registry = providers.Object(get_loader_registry())

    observer = providers.Singleton(LoggingObserver)

    splitter = providers.Factory(RandomSplitter)


def create_container() -> Container:
    """Create and initialize the DI container.

    Returns:
        Initialized Container instance.
    """
    container = Container()
    return container


# Global container instance
container = create_container()
