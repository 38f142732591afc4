"""
Naming conventions for record kinds.

Pure functions that turn record kind names into table names, foreign key
column names and relation names:

    >>> foreign_key_column_of("Person", "id")
    'personId'
    >>> relation_name_plural("Pet")
    'pets'
"""

from __future__ import annotations

import re

from .core.exceptions import InvalidNameError
from .core.interfaces.inflector import IInflector

# Words are split on separators, lower/upper transitions and acronym
# boundaries: "HTTPServer" -> ["HTTP", "Server"], "pet_owner2" -> ["pet", "owner2"].
_WORD_RE = re.compile(r"[A-Z]{2,}(?=[A-Z][a-z]|[0-9]|\b|_)|[A-Z]?[a-z]+[0-9]*|[A-Z]+[0-9]*|[0-9]+")


def _require_name(value: object, what: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidNameError(f"{what} must be a non-empty string", name=value)
    return value


def split_words(value: str) -> list[str]:
    """Split an identifier into its words."""
    words = _WORD_RE.findall(_require_name(value, "Name"))
    if not words:
        raise InvalidNameError("Name contains no word characters", name=value)
    return words


def camel_case(value: str) -> str:
    """lowerCamelCase an identifier ("PetOwner" -> "petOwner")."""
    words = split_words(value)
    return words[0].lower() + "".join(w[:1].upper() + w[1:].lower() for w in words[1:])


def upper_first(value: str) -> str:
    """Upper-case the first character only ("id" -> "Id", "uuid_v4" -> "Uuid_v4")."""
    value = _require_name(value, "Name")
    return value[:1].upper() + value[1:]


def table_name_of(kind_name: str) -> str:
    """Default table name: the record kind name itself."""
    return _require_name(kind_name, "Record kind name")


def foreign_key_column_of(owner_name: str, id_column: str) -> str:
    """Column on the referencing side that points at ``owner_name``'s key."""
    _require_name(id_column, "Id column name")
    return camel_case(owner_name) + upper_first(id_column)


def relation_name_singular(target_name: str) -> str:
    return camel_case(target_name)


def relation_name_plural(target_name: str, inflector: IInflector | None = None) -> str:
    """Pluralized relation name ("Pet" -> "pets").

    Pluralization is best effort; irregular words come out however the
    inflector renders them.
    """
    if inflector is None:
        inflector = _default_inflector()
    return inflector.pluralize(relation_name_singular(target_name))


def column_ref(table: str, column: str) -> str:
    return f"{_require_name(table, 'Table name')}.{_require_name(column, 'Column name')}"


def _default_inflector() -> IInflector:
    from .core.di import resolve_or_default
    from .services.inflector import InflectionInflector

    return resolve_or_default(IInflector, InflectionInflector)  # type: ignore[type-abstract]
