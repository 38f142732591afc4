"""
Declarative base for SQLAlchemy-mapped record kinds.

    class Person(RecordBase):
        id: Mapped[int] = mapped_column(primary_key=True)
        createdAt: Mapped[datetime | None]
        updatedAt: Mapped[datetime | None]

        @classmethod
        def declare_relations(cls, rel):
            rel.has_many("Pet")

The table name follows the record kind conventions: ``table_name`` or a
plain ``__tablename__`` set on the class, else the class name.
"""

from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.orm import DeclarativeBase, Session, declared_attr

from ..model import RecordKind


class RecordBase(DeclarativeBase, RecordKind):
    """Base class for mapped record kinds."""

    __allow_unmapped__ = True

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.get_table_name()

    # -------------------------------------------------------------------------
    # Query shortcuts
    # -------------------------------------------------------------------------

    @classmethod
    def query(cls) -> Select:
        return select(cls)

    @classmethod
    def where(cls, session: Session, *criteria: Any, **filters: Any) -> list:
        """Records matching SQL expression ``criteria`` and ``column=value`` filters."""
        stmt = select(cls)
        if criteria:
            stmt = stmt.where(*criteria)
        if filters:
            stmt = stmt.filter_by(**filters)
        return list(session.scalars(stmt))

    @classmethod
    def find(cls, session: Session, ident: Any) -> Any:
        return session.get(cls, ident)

    def related(self, session: Session, name: str) -> Any:
        """
        Load relation ``name`` for this record.

        Returns a single record (or None) for to-one relations, a list
        otherwise. Many-to-many relations with ``extra`` columns return
        rows of (target, *extra).
        """
        from .planner import JoinPlanner

        mapping = type(self).relation_mappings()[name]
        stmt = JoinPlanner().related_query(type(self), name, self)

        if not mapping.kind.is_to_many:
            return session.scalars(stmt).first()
        if mapping.join.through is not None and mapping.join.through.extra:
            return list(session.execute(stmt).all())
        return list(session.scalars(stmt))
