"""
Record kind base class.

A record kind is a class of persisted records sharing a table. Subclass
RecordKind (or relmap.db.RecordBase for SQLAlchemy-mapped kinds) and
declare relations in ``declare_relations``:

    class Pet(RecordKind):
        @classmethod
        def declare_relations(cls, rel):
            rel.belongs_to("Person")
            rel.has_many_through(Toy, through={"table": "PetToys"})

The relation graph is built on first access and cached per class; a
subclass never shares its parent's cached graph.
"""

import threading
import weakref
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from .core.exceptions import InvalidNameError
from .naming import table_name_of

if TYPE_CHECKING:
    from .core.models.relations import RelationMapping
    from .relations.builder import RelationDeclarations

_table_names: "weakref.WeakKeyDictionary[type, str]" = weakref.WeakKeyDictionary()
_table_names_lock = threading.Lock()


class RecordKind:
    """Metadata holder for one record kind.

    Class attributes:
        table_name: Explicit table name; only read from the class itself,
            never inherited. Defaults to the class name.
        id_column: Primary key column; None means the configured default.
        timestamps: Whether hooks stamp createdAt/updatedAt; None means the
            configured default.
        defaults: Attribute defaults applied before insert. Values may be
            zero-argument callables.
    """

    table_name: ClassVar[str | None] = None
    id_column: ClassVar[str | None] = None
    timestamps: ClassVar[bool | None] = None
    defaults: ClassVar[dict[str, Any]] = {}

    # -------------------------------------------------------------------------
    # Table and key
    # -------------------------------------------------------------------------

    @classmethod
    def get_table_name(cls) -> str:
        """
        Resolved table name, stable once computed.

        Taken from ``table_name`` set on the class itself, else from a string
        ``__tablename__`` set on the class itself, else the class name.
        Neither attribute is inherited.
        """
        cached = _table_names.get(cls)
        if cached is not None:
            return cached
        with _table_names_lock:
            cached = _table_names.get(cls)
            if cached is None:
                explicit = cls.__dict__.get("table_name")
                if explicit is None and isinstance(cls.__dict__.get("__tablename__"), str):
                    explicit = cls.__dict__["__tablename__"]
                cached = _check_table_name(explicit) if explicit is not None else table_name_of(cls.__name__)
                _table_names[cls] = cached
            return cached

    @classmethod
    def set_table_name(cls, name: str) -> None:
        """Override the table name.

        Only meaningful before the name is first used to build relations or,
        for SQLAlchemy-mapped kinds, before the class is mapped.
        """
        with _table_names_lock:
            _table_names[cls] = _check_table_name(name)

    @classmethod
    def get_id_column(cls) -> str:
        if cls.id_column:
            return cls.id_column
        from .core.bootstrap import get_settings

        return get_settings().conventions.id_column

    @classmethod
    def timestamps_enabled(cls) -> bool:
        if cls.timestamps is not None:
            return cls.timestamps
        from .core.bootstrap import get_settings

        return get_settings().conventions.timestamps

    # -------------------------------------------------------------------------
    # Relations
    # -------------------------------------------------------------------------

    @classmethod
    def declare_relations(cls, rel: "RelationDeclarations") -> None:
        """Declare this kind's relations on ``rel``. No relations by default."""

    @classmethod
    def relation_mappings(cls) -> Mapping[str, "RelationMapping"]:
        from .core.bootstrap import get_relation_store

        return get_relation_store().get_relation_mappings(cls)

    @classmethod
    def set_relation_mappings(cls, mappings: Mapping[str, "RelationMapping"]) -> None:
        from .core.bootstrap import get_relation_store

        get_relation_store().set_relation_mappings(cls, mappings)


def is_record_kind(obj: object) -> bool:
    return isinstance(obj, type) and issubclass(obj, RecordKind)


def _check_table_name(name: object) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidNameError("Table name must be a non-empty string", name=name)
    return name
