"""
Relation declaration collector.

A RelationDeclarations instance is handed to a record kind's
``declare_relations`` hook. Each declaration resolves its target, fills
in convention defaults for anything not overridden and records one
RelationMapping under the relation's name.

Foreign key direction per relation kind (owner = declaring kind):

    belongs_to   from: Target.<owner>Id    to: Owner.id
    has_one      from: Owner.<target>Id    to: Target.id
    has_many     from: Target.<owner>Id    to: Owner.id
    many-to-many from: Owner.id            to: Target.id
                 through: Owner_Target.<owner>Id -> Owner_Target.<target>Id
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ..core.di import get_logger
from ..core.exceptions import InvalidJoinSpecError
from ..core.models.relations import (
    ColumnRef,
    JoinSpec,
    RelationFilter,
    RelationKind,
    RelationMapping,
    ThroughSpec,
)
from ..model import RecordKind
from ..naming import foreign_key_column_of, relation_name_plural, relation_name_singular
from ..resolution import RecordKindRef, RecordKindResolver

THROUGH_OPTIONS = frozenset({"table", "model", "from", "to", "extra", "filter"})


class RelationDeclarations:
    """Collects the relation mappings of one owner record kind."""

    def __init__(self, owner: type[RecordKind], resolver: RecordKindResolver | None = None) -> None:
        if resolver is None:
            from ..core.bootstrap import get_record_kind_resolver

            resolver = get_record_kind_resolver()
        self.owner = owner
        self._resolver = resolver
        self._mappings: dict[str, RelationMapping] = {}

    @property
    def mappings(self) -> dict[str, RelationMapping]:
        """Mappings declared so far, in declaration order."""
        return dict(self._mappings)

    # -------------------------------------------------------------------------
    # Declarations
    # -------------------------------------------------------------------------

    def belongs_to(
        self,
        target: RecordKindRef,
        *,
        name: str | None = None,
        join_from: str | None = None,
        join_to: str | None = None,
        filter: RelationFilter | None = None,
    ) -> RelationMapping:
        """Owner belongs to one target; accessible as ``owner.<target>``."""
        target_kind = self._resolve(target)
        owner = self.owner
        return self._add(
            RelationKind.BELONGS_TO_ONE,
            target_kind,
            name=self._name(name, relation_name_singular(target_kind.__name__)),
            join_from=self._column(
                "join_from",
                join_from,
                target_kind.get_table_name(),
                foreign_key_column_of(owner.__name__, owner.get_id_column()),
            ),
            join_to=self._column("join_to", join_to, owner.get_table_name(), owner.get_id_column()),
            filter=filter,
        )

    def has_one(
        self,
        target: RecordKindRef,
        *,
        name: str | None = None,
        join_from: str | None = None,
        join_to: str | None = None,
        filter: RelationFilter | None = None,
    ) -> RelationMapping:
        """Owner has one target, keyed by a column on the owner's table."""
        target_kind = self._resolve(target)
        owner = self.owner
        return self._add(
            RelationKind.HAS_ONE,
            target_kind,
            name=self._name(name, relation_name_singular(target_kind.__name__)),
            join_from=self._column(
                "join_from",
                join_from,
                owner.get_table_name(),
                foreign_key_column_of(target_kind.__name__, target_kind.get_id_column()),
            ),
            join_to=self._column(
                "join_to", join_to, target_kind.get_table_name(), target_kind.get_id_column()
            ),
            filter=filter,
        )

    def has_many(
        self,
        target: RecordKindRef,
        *,
        name: str | None = None,
        join_from: str | None = None,
        join_to: str | None = None,
        filter: RelationFilter | None = None,
    ) -> RelationMapping:
        """Owner has many targets, keyed by a column on the target's table."""
        target_kind = self._resolve(target)
        owner = self.owner
        return self._add(
            RelationKind.HAS_MANY,
            target_kind,
            name=self._name(name, relation_name_plural(target_kind.__name__)),
            join_from=self._column(
                "join_from",
                join_from,
                target_kind.get_table_name(),
                foreign_key_column_of(owner.__name__, owner.get_id_column()),
            ),
            join_to=self._column("join_to", join_to, owner.get_table_name(), owner.get_id_column()),
            filter=filter,
        )

    def has_many_through(
        self,
        target: RecordKindRef,
        *,
        name: str | None = None,
        join_from: str | None = None,
        join_to: str | None = None,
        filter: RelationFilter | None = None,
        through: Mapping[str, Any] | None = None,
    ) -> RelationMapping:
        """
        Owner has many targets through a join table.

        ``through`` accepts:
            table: join table name (default ``Owner_Target``, or the
                through model's table when ``model`` is given)
            model: record kind of the join table (class or string)
            from / to: join table columns pointing at owner / target
            extra: join table column(s) to select alongside the target
            filter: narrows the join table rows
        """
        target_kind = self._resolve(target)
        owner = self.owner
        options = self._through_options(through)

        through_model = None
        if options.get("model") is not None:
            through_model = self._resolve(options["model"])

        if options.get("table") is not None:
            through_table = self._name(options["table"], "", option="through.table")
        elif through_model is not None:
            through_table = through_model.get_table_name()
        else:
            through_table = f"{owner.__name__}_{target_kind.__name__}"

        through_spec = ThroughSpec(
            table=through_table,
            from_=self._column(
                "through.from",
                options.get("from"),
                through_table,
                foreign_key_column_of(owner.__name__, owner.get_id_column()),
            ),
            to=self._column(
                "through.to",
                options.get("to"),
                through_table,
                foreign_key_column_of(target_kind.__name__, target_kind.get_id_column()),
            ),
            extra=self._extra(options.get("extra")),
            filter=self._filter(options.get("filter"), option="through.filter"),
            model=through_model,
        )

        return self._add(
            RelationKind.MANY_TO_MANY,
            target_kind,
            name=self._name(name, relation_name_plural(target_kind.__name__)),
            join_from=self._column("join_from", join_from, owner.get_table_name(), owner.get_id_column()),
            join_to=self._column(
                "join_to", join_to, target_kind.get_table_name(), target_kind.get_id_column()
            ),
            filter=filter,
            through=through_spec,
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _resolve(self, target: RecordKindRef) -> type[RecordKind]:
        return self._resolver.resolve(target, owner=self.owner)

    def _add(
        self,
        kind: RelationKind,
        target: type[RecordKind],
        *,
        name: str,
        join_from: ColumnRef,
        join_to: ColumnRef,
        filter: RelationFilter | None,
        through: ThroughSpec | None = None,
    ) -> RelationMapping:
        mapping = RelationMapping(
            kind=kind,
            name=name,
            target=target,
            filter=self._filter(filter, option="filter"),
            join=JoinSpec(from_=join_from, to=join_to, through=through),
        )
        if name in self._mappings:
            # Later declarations win
            get_logger().debug(
                "Relation %s.%s redeclared; replacing %s with %s",
                self.owner.__name__,
                name,
                self._mappings[name].kind.value,
                kind.value,
            )
        self._mappings[name] = mapping
        return mapping

    def _name(self, explicit: object, default: str, option: str = "name") -> str:
        if explicit is None:
            return default
        if not isinstance(explicit, str) or not explicit.strip():
            raise InvalidJoinSpecError(
                f"{option} must be a non-empty string",
                option=option,
                value=explicit,
                owner=self.owner.__name__,
            )
        return explicit

    def _column(self, option: str, explicit: object, default_table: str, default_column: str) -> ColumnRef:
        if explicit is None:
            return ColumnRef(table=default_table, column=default_column)
        if not isinstance(explicit, str):
            raise InvalidJoinSpecError(
                f"{option} must be a 'table.column' string",
                option=option,
                value=explicit,
                owner=self.owner.__name__,
            )
        ref = ColumnRef.parse(explicit.strip())
        if not ref.table or not ref.column:
            raise InvalidJoinSpecError(
                f"{option} must have the form 'table.column'",
                option=option,
                value=explicit,
                owner=self.owner.__name__,
            )
        return ref

    def _filter(self, value: object, option: str) -> RelationFilter | None:
        if value is None or callable(value):
            return value
        raise InvalidJoinSpecError(
            f"{option} must be callable",
            option=option,
            value=value,
            owner=self.owner.__name__,
        )

    def _through_options(self, through: object) -> Mapping[str, Any]:
        if through is None:
            return {}
        if not isinstance(through, Mapping):
            raise InvalidJoinSpecError(
                "through must be a mapping of options",
                option="through",
                value=through,
                owner=self.owner.__name__,
            )
        unknown = set(through) - THROUGH_OPTIONS
        if unknown:
            raise InvalidJoinSpecError(
                f"Unknown through options: {', '.join(sorted(map(str, unknown)))}",
                option="through",
                owner=self.owner.__name__,
            )
        return through

    def _extra(self, value: object) -> tuple[str, ...]:
        if value is None:
            return ()
        columns: Sequence[object] = [value] if isinstance(value, str) else value  # type: ignore[assignment]
        if not isinstance(columns, Sequence) or not all(
            isinstance(c, str) and c.strip() for c in columns
        ):
            raise InvalidJoinSpecError(
                "through.extra must be a column name or a sequence of column names",
                option="through.extra",
                value=value,
                owner=self.owner.__name__,
            )
        return tuple(columns)  # type: ignore[arg-type]
