"""
Relation declarations and the per-kind relation graph store.
"""

from .builder import RelationDeclarations
from .store import RelationGraph, RelationMappingStore

__all__ = [
    "RelationDeclarations",
    "RelationGraph",
    "RelationMappingStore",
]
