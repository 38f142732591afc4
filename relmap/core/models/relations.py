"""
Relation metadata models.

A RelationMapping is the resolved, read-only description of how an owner
record kind joins to a target record kind. Mappings are produced by the
relation declaration collector and consumed by the join planner.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import Field

from .base import ImmutableModel

# A filter receives the relation's query scope (a SQLAlchemy Select) and
# returns the narrowed scope.
RelationFilter = Callable[[Any], Any]


class RelationKind(str, Enum):
    """Supported relation kinds."""

    BELONGS_TO_ONE = "belongs_to_one"
    HAS_ONE = "has_one"
    HAS_MANY = "has_many"
    MANY_TO_MANY = "many_to_many"

    @property
    def is_to_many(self) -> bool:
        return self in (RelationKind.HAS_MANY, RelationKind.MANY_TO_MANY)


class ColumnRef(ImmutableModel):
    """A fully qualified ``table.column`` reference."""

    table: str
    column: str

    @classmethod
    def parse(cls, value: str) -> ColumnRef:
        """Split ``"table.column"`` on the last dot.

        The table part may itself be schema-qualified (``"audit.Person.id"``).
        Callers are expected to have validated the shape already.
        """
        table, _, column = value.rpartition(".")
        return cls(table=table, column=column)

    def __str__(self) -> str:
        return f"{self.table}.{self.column}"


class ThroughSpec(ImmutableModel):
    """Join table description for many-to-many relations."""

    table: str
    from_: ColumnRef = Field(alias="from")
    to: ColumnRef
    extra: tuple[str, ...] = ()
    filter: RelationFilter | None = None
    model: Any = None

    def describe(self) -> dict[str, Any]:
        return {
            "table": self.table,
            "from": str(self.from_),
            "to": str(self.to),
            "extra": list(self.extra),
            "filter": self.filter is not None,
            "model": self.model.__name__ if self.model is not None else None,
        }


class JoinSpec(ImmutableModel):
    """Join columns of a relation; ``through`` is set for many-to-many only."""

    from_: ColumnRef = Field(alias="from")
    to: ColumnRef
    through: ThroughSpec | None = None

    def describe(self) -> dict[str, Any]:
        data: dict[str, Any] = {"from": str(self.from_), "to": str(self.to)}
        if self.through is not None:
            data["through"] = self.through.describe()
        return data


class RelationMapping(ImmutableModel):
    """Resolved relation between an owner record kind and its target."""

    kind: RelationKind
    name: str
    target: Any
    filter: RelationFilter | None = None
    join: JoinSpec

    def describe(self) -> dict[str, Any]:
        """Plain-data view suitable for JSON output."""
        return {
            "name": self.name,
            "kind": self.kind.value,
            "target": self.target.__name__,
            "filter": self.filter is not None,
            "join": self.join.describe(),
        }
