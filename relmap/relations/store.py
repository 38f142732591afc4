"""
Relation mapping store.

Registry from record kind (by class identity) to its relation graph. A
graph is built the first time it is requested, by running the kind's
``declare_relations`` hook once, and is read-only afterwards.

Slots are never inherited: a subclass gets its own graph, computed with
its own name feeding the conventions. Use ``inherit_relation_mappings``
to copy a parent's graph verbatim instead.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from types import MappingProxyType

from ..core.di import get_logger
from ..core.exceptions import InvalidJoinSpecError, RelationDeclarationError
from ..core.models.relations import RelationMapping
from ..model import RecordKind
from ..resolution import RecordKindResolver
from .builder import RelationDeclarations

RelationGraph = Mapping[str, RelationMapping]


class RelationMappingStore:
    """Lazily built, per-kind relation graphs.

    First access for a kind is serialized by a lock belonging to that kind
    alone; kinds never wait on each other.
    """

    def __init__(
        self,
        resolver: RecordKindResolver | Callable[[], RecordKindResolver] | None = None,
    ) -> None:
        self._resolver = resolver
        self._graphs: dict[type, RelationGraph] = {}
        self._locks: dict[type, threading.RLock] = {}
        self._building = threading.local()

    def get_relation_mappings(self, kind: type[RecordKind]) -> RelationGraph:
        """
        Relation graph of ``kind``, building it on first access.

        A top-level first access waits on the kind's lock, so the hook runs
        once. An access made from inside another kind's ``declare_relations``
        never waits: if the kind's lock is busy the graph is built without it
        and the first installed graph wins.

        Raises:
            InvalidNameError, UnresolvedRecordKindError, InvalidJoinSpecError:
                Raised unchanged from the declarations; the slot stays empty
                and the next call retries
            RelationDeclarationError: The kind's graph was requested while
                this thread is still declaring it
        """
        graph = self._graphs.get(kind)
        if graph is not None:
            return graph

        lock = self._locks.setdefault(kind, threading.RLock())
        if not self._in_progress():
            with lock:
                return self._populate(kind)

        # Never block while this thread holds another kind's lock
        if lock.acquire(blocking=False):
            try:
                return self._populate(kind)
            finally:
                lock.release()
        return self._graphs.setdefault(kind, self._build(kind))

    def set_relation_mappings(self, kind: type[RecordKind], mappings: Mapping[str, RelationMapping]) -> None:
        """Install ``mappings`` as the graph of ``kind``; its hook will not run."""
        for name, mapping in mappings.items():
            if not isinstance(mapping, RelationMapping):
                raise InvalidJoinSpecError(
                    f"Relation {name!r} is not a RelationMapping",
                    option="mappings",
                    owner=kind.__name__,
                )
        lock = self._locks.setdefault(kind, threading.RLock())
        with lock:
            self._graphs[kind] = MappingProxyType(dict(mappings))

    def inherit_relation_mappings(self, kind: type[RecordKind], parent: type[RecordKind]) -> RelationGraph:
        """Copy ``parent``'s graph (built if needed) into ``kind``'s slot."""
        self.set_relation_mappings(kind, self.get_relation_mappings(parent))
        return self._graphs[kind]

    def is_populated(self, kind: type[RecordKind]) -> bool:
        return kind in self._graphs

    def clear(self, kind: type[RecordKind] | None = None) -> None:
        """Drop one kind's graph, or every graph."""
        if kind is None:
            self._graphs.clear()
        else:
            self._graphs.pop(kind, None)

    def _populate(self, kind: type[RecordKind]) -> RelationGraph:
        graph = self._graphs.get(kind)
        if graph is None:
            graph = self._graphs.setdefault(kind, self._build(kind))
        return graph

    def _in_progress(self) -> set[type]:
        kinds: set[type] | None = getattr(self._building, "kinds", None)
        if kinds is None:
            kinds = self._building.kinds = set()
        return kinds

    def _build(self, kind: type[RecordKind]) -> RelationGraph:
        in_progress = self._in_progress()
        if kind in in_progress:
            raise RelationDeclarationError(
                f"Relation graph of {kind.__name__} requested while it is being declared",
                context={"kind": kind.__name__},
            )

        in_progress.add(kind)
        try:
            rel = RelationDeclarations(kind, self._get_resolver())
            kind.declare_relations(rel)
        finally:
            in_progress.discard(kind)

        graph = MappingProxyType(rel.mappings)
        get_logger().debug("Built relation graph for %s: %d relation(s)", kind.__name__, len(graph))
        return graph

    def _get_resolver(self) -> RecordKindResolver:
        if isinstance(self._resolver, RecordKindResolver):
            return self._resolver
        if callable(self._resolver):
            return self._resolver()

        from ..core.bootstrap import get_record_kind_resolver

        return get_record_kind_resolver()
