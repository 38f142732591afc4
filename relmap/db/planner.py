"""
Join planning from relation mappings.

Turns a RelationMapping into SQLAlchemy expressions. Column references are
bound to the mapped Table of the owner, target or through model when the
table name matches, or to a Core Table of the same name on their
metadata. Any other table (typically a join table without a model) is
represented by a lightweight ``sqlalchemy.table()`` clause.

Which side of a join carries the owner's value depends on the relation
kind, not on table names, so self-referencing relations plan correctly:

    belongs_to / has_many   owner side: join.to     target side: join.from
    has_one / many-to-many  owner side: join.from   target side: join.to
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import ColumnElement, MetaData, Select, column, select, table
from sqlalchemy.sql.expression import FromClause

from ..core.exceptions import InvalidJoinSpecError
from ..core.models.relations import ColumnRef, RelationKind, RelationMapping
from ..model import RecordKind
from ..relations.store import RelationMappingStore


def owner_and_target_refs(mapping: RelationMapping) -> tuple[ColumnRef, ColumnRef]:
    """(owner-side ref, target-side ref) of a relation's main join."""
    if mapping.kind in (RelationKind.BELONGS_TO_ONE, RelationKind.HAS_MANY):
        return mapping.join.to, mapping.join.from_
    return mapping.join.from_, mapping.join.to


class _Tables:
    """Resolves table names to FromClauses for one relation."""

    def __init__(self, owner: type[RecordKind], mapping: RelationMapping) -> None:
        self._mapped: dict[str, FromClause] = {}
        kinds = (owner, mapping.target, getattr(mapping.join.through, "model", None))
        for kind in kinds:
            mapped_table = getattr(kind, "__table__", None)
            if mapped_table is not None:
                self._mapped.setdefault(mapped_table.fullname, mapped_table)
        # Join tables declared as Core Tables on the same metadata
        for kind in kinds:
            metadata = getattr(kind, "metadata", None)
            if isinstance(metadata, MetaData):
                for name, metadata_table in metadata.tables.items():
                    self._mapped.setdefault(name, metadata_table)

        wanted: dict[str, list[str]] = {}
        for ref in self._refs(mapping):
            if ref.table not in self._mapped:
                columns = wanted.setdefault(ref.table, [])
                if ref.column not in columns:
                    columns.append(ref.column)
        self._light: dict[str, FromClause] = {
            name: _light_table(name, columns) for name, columns in wanted.items()
        }

    @staticmethod
    def _refs(mapping: RelationMapping) -> list[ColumnRef]:
        refs = [mapping.join.from_, mapping.join.to]
        through = mapping.join.through
        if through is not None:
            refs += [through.from_, through.to]
            refs += [ColumnRef(table=through.table, column=c) for c in through.extra]
        return refs

    def table(self, name: str) -> FromClause:
        if name in self._mapped:
            return self._mapped[name]
        return self._light[name]

    def column(self, ref: ColumnRef) -> ColumnElement:
        from_clause = self.table(ref.table)
        try:
            return from_clause.c[ref.column]
        except KeyError:
            raise InvalidJoinSpecError(
                f"Column {ref} does not exist on the mapped table",
                option="join",
                value=str(ref),
            ) from None


def _light_table(name: str, columns: list[str]) -> FromClause:
    schema, _, table_name = name.rpartition(".")
    return table(table_name, *[column(c) for c in columns], schema=schema or None)


class JoinPlanner:
    """Builds join conditions and relation queries for record kinds."""

    def __init__(self, store: RelationMappingStore | None = None) -> None:
        self._store = store

    def mapping(self, owner: type[RecordKind], name: str) -> RelationMapping:
        store = self._store
        if store is None:
            from ..core.bootstrap import get_relation_store

            store = get_relation_store()
        mappings = store.get_relation_mappings(owner)
        if name not in mappings:
            raise KeyError(f"{owner.__name__} has no relation {name!r}")
        return mappings[name]

    def join_conditions(self, owner: type[RecordKind], name: str) -> list[ColumnElement]:
        """
        Equality conditions joining owner to target.

        One condition for direct relations; two (owner to join table, join
        table to target) for many-to-many.
        """
        mapping = self.mapping(owner, name)
        tables = _Tables(owner, mapping)
        owner_ref, target_ref = owner_and_target_refs(mapping)
        through = mapping.join.through
        if through is None:
            return [tables.column(target_ref) == tables.column(owner_ref)]
        return [
            tables.column(through.from_) == tables.column(owner_ref),
            tables.column(through.to) == tables.column(target_ref),
        ]

    def related_query(self, owner: type[RecordKind], name: str, record: Any) -> Select:
        """Query for the records related to ``record`` through relation ``name``."""
        mapping = self.mapping(owner, name)
        tables = _Tables(owner, mapping)
        owner_ref, target_ref = owner_and_target_refs(mapping)
        owner_value = getattr(record, owner_ref.column)

        target = mapping.target
        selectable: Any = target if hasattr(target, "__table__") else tables.table(target_ref.table)

        through = mapping.join.through
        if through is None:
            stmt = select(selectable).where(tables.column(target_ref) == owner_value)
        else:
            extra = [tables.column(ColumnRef(table=through.table, column=c)) for c in through.extra]
            stmt = (
                select(selectable, *extra)
                .join(tables.table(through.table), tables.column(through.to) == tables.column(target_ref))
                .where(tables.column(through.from_) == owner_value)
            )
            if through.filter is not None:
                stmt = through.filter(stmt)

        if mapping.filter is not None:
            stmt = mapping.filter(stmt)
        return stmt
