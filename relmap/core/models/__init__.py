"""
Pydantic models for relmap.

Relation metadata (ColumnRef, JoinSpec, ThroughSpec, RelationMapping) and
configuration sections.
"""

from .base import ImmutableModel, RelmapBaseModel
from .config import ConventionsConfig, LoggingConfig
from .relations import (
    ColumnRef,
    JoinSpec,
    RelationFilter,
    RelationKind,
    RelationMapping,
    ThroughSpec,
)

__all__ = [
    "ColumnRef",
    "ConventionsConfig",
    "ImmutableModel",
    "JoinSpec",
    "LoggingConfig",
    "RelationFilter",
    "RelationKind",
    "RelationMapping",
    "RelmapBaseModel",
    "ThroughSpec",
]
