"""
Record kind resolution.

Relation targets may be given as the record kind class itself or as a
string:

- ``"./models/person.py"`` or ``"/abs/path/person.py"``: a file path
  (relative paths are resolved against the current working directory)
- ``"Person"``: a bare name, imported as ``<models_package>.Person``

Either string form may end in ``:AttrName`` to pick a class explicitly.
Without it, the module attribute named after the module is used, falling
back to the only RecordKind subclass the module defines.
"""

from __future__ import annotations

from pathlib import Path
from types import ModuleType
from typing import Any

from .core.di import get_logger
from .core.exceptions import UnresolvedRecordKindError
from .core.interfaces.loader import IModuleLoader
from .model import RecordKind, is_record_kind

PATH_PREFIXES = (".", "/")

# Anything accepted where a relation target is expected
RecordKindRef = Any


class RecordKindResolver:
    """Resolve relation targets into RecordKind subclasses."""

    def __init__(self, loader: IModuleLoader | None = None, models_package: str = "models") -> None:
        if loader is None:
            from .services.loader import ImportlibModuleLoader

            loader = ImportlibModuleLoader()
        self._loader = loader
        self.models_package = models_package

    def resolve(self, target: RecordKindRef, *, owner: type | None = None) -> type[RecordKind]:
        """
        Resolve ``target`` to a record kind class.

        Args:
            target: RecordKind subclass, path string or bare name
            owner: Declaring kind, used for error context only

        Raises:
            UnresolvedRecordKindError: If the target cannot be located
        """
        owner_name = owner.__name__ if owner is not None else None

        if isinstance(target, type):
            if is_record_kind(target):
                return target
            raise UnresolvedRecordKindError(
                f"{target.__name__} is not a record kind",
                target=target,
                owner=owner_name,
            )

        if not isinstance(target, str) or not target.strip():
            raise UnresolvedRecordKindError(
                "Relation target must be a record kind or a non-empty string",
                target=target,
                owner=owner_name,
            )

        identifier, attr = split_identifier(target.strip())
        is_path = identifier.startswith(PATH_PREFIXES)
        try:
            if is_path:
                module = self._loader.load_path(Path(identifier))
            else:
                module = self._loader.load_module(f"{self.models_package}.{identifier}")
        except (ImportError, FileNotFoundError) as e:
            raise UnresolvedRecordKindError(
                f"Cannot load record kind {target!r}",
                target=target,
                owner=owner_name,
                cause=e,
            ) from e

        default_attr = Path(identifier).stem if is_path else identifier.rsplit(".", 1)[-1]
        kind = self._pick(module, attr, default_attr)
        if kind is None:
            raise UnresolvedRecordKindError(
                f"No record kind found in module {module.__name__!r}",
                target=target,
                owner=owner_name,
            )

        get_logger().debug("Resolved %r to %s.%s", target, kind.__module__, kind.__name__)
        return kind

    @staticmethod
    def _pick(module: ModuleType, attr: str | None, default_attr: str) -> type[RecordKind] | None:
        if attr is not None:
            candidate = getattr(module, attr, None)
            return candidate if is_record_kind(candidate) else None

        candidate = getattr(module, default_attr, None)
        if is_record_kind(candidate):
            return candidate

        defined = [
            value
            for value in vars(module).values()
            if is_record_kind(value) and value.__module__ == module.__name__
        ]
        if len(defined) == 1:
            return defined[0]
        return None


def split_identifier(target: str) -> tuple[str, str | None]:
    """Split ``"models/person.py:Person"`` into the location and attribute."""
    location, sep, attr = target.rpartition(":")
    if sep and location and attr.isidentifier():
        return location, attr
    return target, None
