"""
relmap - convention-driven relation mapping and lifecycle hooks.

Declare relations tersely on a record kind and relmap infers the join
columns, builds the relation graph once per kind and stamps audit
timestamps before writes.
"""

from .core.bootstrap import bootstrap, get_hook_pipeline, get_relation_store, reset
from .core.exceptions import (
    InvalidJoinSpecError,
    InvalidNameError,
    RelationDeclarationError,
    RelmapException,
    UnresolvedRecordKindError,
)
from .core.models.relations import ColumnRef, JoinSpec, RelationKind, RelationMapping, ThroughSpec
from .hooks import HookPipeline, OperationContext, TouchTimestamps, build_default_pipeline
from .model import RecordKind
from .relations import RelationDeclarations, RelationMappingStore
from .resolution import RecordKindResolver

__version__ = "0.3.0"

__all__ = [
    "ColumnRef",
    "HookPipeline",
    "InvalidJoinSpecError",
    "InvalidNameError",
    "JoinSpec",
    "OperationContext",
    "RecordKind",
    "RecordKindResolver",
    "RelationDeclarationError",
    "RelationDeclarations",
    "RelationKind",
    "RelationMapping",
    "RelationMappingStore",
    "RelmapException",
    "ThroughSpec",
    "TouchTimestamps",
    "UnresolvedRecordKindError",
    "__version__",
    "bootstrap",
    "build_default_pipeline",
    "get_hook_pipeline",
    "get_relation_store",
    "reset",
]
