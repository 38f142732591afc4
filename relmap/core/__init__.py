"""
Core infrastructure for relmap.

This module provides:
- ServiceContainer: DI container using dependency-injector
- Application bootstrap and service accessors
- Settings loading
- Custom exception hierarchy
"""

from .bootstrap import (
    bootstrap,
    get_hook_pipeline,
    get_record_kind_resolver,
    get_relation_store,
    get_settings,
    is_initialized,
    reset,
)
from .container import ServiceContainer, get_container, resolve, try_resolve
from .exceptions import (
    ConfigFileError,
    ConfigValidationError,
    InvalidJoinSpecError,
    InvalidNameError,
    RelationDeclarationError,
    RelmapConfigError,
    RelmapException,
    UnresolvedRecordKindError,
)
from .settings import RelmapSettings, find_config_file, load_settings

__all__ = [
    "ConfigFileError",
    "ConfigValidationError",
    "InvalidJoinSpecError",
    "InvalidNameError",
    "RelationDeclarationError",
    "RelmapConfigError",
    "RelmapException",
    "RelmapSettings",
    "ServiceContainer",
    "UnresolvedRecordKindError",
    "bootstrap",
    "find_config_file",
    "get_container",
    "get_hook_pipeline",
    "get_record_kind_resolver",
    "get_relation_store",
    "get_settings",
    "is_initialized",
    "load_settings",
    "reset",
    "resolve",
    "try_resolve",
]
