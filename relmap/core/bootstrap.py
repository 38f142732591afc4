"""
Application bootstrap for relmap.

Initializes the DI container with the process-wide services. Accessors
such as get_relation_store() bootstrap on first use, so library callers
never have to call bootstrap() themselves unless they want non-default
settings.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from .container import ServiceContainer, get_container
from .interfaces.inflector import IInflector
from .interfaces.loader import IModuleLoader
from .interfaces.logger import ILogger
from .settings import RelmapSettings, load_settings

if TYPE_CHECKING:
    from ..hooks import HookPipeline
    from ..relations.store import RelationMappingStore
    from ..resolution import RecordKindResolver

_initialized = False
_lock = threading.RLock()


def bootstrap(settings: RelmapSettings | None = None) -> ServiceContainer:
    """
    Bootstrap relmap.

    Registers settings, logger, module loader, inflector, record kind
    resolver, relation store and the default hook pipeline.

    Args:
        settings: Settings to use; loaded from config files and the
            environment when omitted

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    with _lock:
        container = get_container()
        if _initialized:
            return container

        _register_core_services(container, settings or load_settings())
        _initialized = True
        return container


def _register_core_services(container: ServiceContainer, settings: RelmapSettings) -> None:
    """Register core application services."""
    from ..hooks import HookPipeline, build_default_pipeline
    from ..relations.store import RelationMappingStore
    from ..resolution import RecordKindResolver
    from ..services.inflector import InflectionInflector
    from ..services.loader import ImportlibModuleLoader
    from ..services.logging import RelmapLogger

    container.register_singleton(RelmapSettings, implementation=settings)

    def create_logger() -> ILogger:
        return RelmapLogger(settings.logging)

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]
    container.register_class(IModuleLoader, ImportlibModuleLoader)  # type: ignore[type-abstract]
    container.register_class(IInflector, InflectionInflector)  # type: ignore[type-abstract]

    def create_resolver() -> RecordKindResolver:
        return RecordKindResolver(
            loader=container.resolve(IModuleLoader),  # type: ignore[type-abstract]
            models_package=settings.conventions.models_package,
        )

    container.register_singleton(RecordKindResolver, factory=create_resolver)
    container.register_singleton(
        RelationMappingStore,
        factory=lambda: RelationMappingStore(resolver=lambda: container.resolve(RecordKindResolver)),
    )
    container.register_singleton(
        HookPipeline,
        factory=lambda: build_default_pipeline(
            created_at=settings.conventions.created_at_column,
            updated_at=settings.conventions.updated_at_column,
        ),
    )


def reset() -> None:
    """
    Reset the application state.

    Useful for testing to ensure clean state between tests.
    """
    global _initialized
    with _lock:
        ServiceContainer.reset()
        _initialized = False


def is_initialized() -> bool:
    """Check if the application has been bootstrapped."""
    return _initialized


# -------------------------------------------------------------------------
# Accessors
# -------------------------------------------------------------------------


def get_settings() -> RelmapSettings:
    return bootstrap().resolve(RelmapSettings)


def get_relation_store() -> RelationMappingStore:
    from ..relations.store import RelationMappingStore

    return bootstrap().resolve(RelationMappingStore)


def get_hook_pipeline() -> HookPipeline:
    from ..hooks import HookPipeline

    return bootstrap().resolve(HookPipeline)


def get_record_kind_resolver() -> RecordKindResolver:
    from ..resolution import RecordKindResolver

    return bootstrap().resolve(RecordKindResolver)
