"""
Click context extension for the relmap CLI.

Provides RelmapContext dataclass that holds relmap-specific data
passed through the Click command chain via ctx.obj.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

from ..core.bootstrap import bootstrap
from ..core.settings import RelmapSettings, load_settings
from ..relations.store import RelationMappingStore
from ..resolution import RecordKindResolver


@dataclass
class RelmapContext:
    """Extended context passed through Click command chain.

    Attributes:
        cwd: Current working directory
        settings: Effective settings
    """

    cwd: Path
    settings: RelmapSettings

    @classmethod
    def create(cls, cwd: Path | None = None) -> RelmapContext:
        """Create a RelmapContext for the current environment.

        Loads settings starting from ``cwd``, bootstraps the container with
        them and puts ``cwd`` on sys.path so the models package of the
        project being inspected is importable.
        """
        if cwd is None:
            cwd = Path.cwd()

        settings = load_settings(start_dir=str(cwd))
        bootstrap(settings)

        if str(cwd) not in sys.path:
            sys.path.insert(0, str(cwd))

        return cls(cwd=cwd, settings=settings)

    def resolver(self, models_package: str | None = None) -> RecordKindResolver:
        """Record kind resolver, optionally for another models package."""
        from ..core.bootstrap import get_record_kind_resolver

        if models_package is None:
            return get_record_kind_resolver()
        return RecordKindResolver(models_package=models_package)

    def relation_store(self, models_package: str | None = None) -> RelationMappingStore:
        """Relation store whose targets resolve against ``models_package``.

        Without a package the process-wide store is returned.
        """
        from ..core.bootstrap import get_relation_store

        if models_package is None:
            return get_relation_store()
        return RelationMappingStore(resolver=self.resolver(models_package))
