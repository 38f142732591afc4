"""
SQLAlchemy integration for record kinds.

- RecordBase: declarative base whose table names follow the conventions
- install_hooks / untouched: run lifecycle hooks on session flushes
- JoinPlanner: SQL expressions from relation mappings
"""

from .base import RecordBase
from .engine import create_relmap_engine, create_session_factory, init_database
from .listeners import SKIP_TOUCH_KEY, install_hooks, remove_hooks, untouched
from .planner import JoinPlanner, owner_and_target_refs

__all__ = [
    "SKIP_TOUCH_KEY",
    "JoinPlanner",
    "RecordBase",
    "create_relmap_engine",
    "create_session_factory",
    "init_database",
    "install_hooks",
    "owner_and_target_refs",
    "remove_hooks",
    "untouched",
]
