"""
Lifecycle hooks run before records are written.

A HookPipeline holds two ordered lists of named steps, one run before
insert and one before update. The default pipeline is:

    before_insert: populate_defaults, touch_timestamps
    before_update: touch_timestamps

Stamping composes after default population and never replaces it. The
persistence layer decides when to run the pipeline (see
relmap.db.listeners) and passes an OperationContext; ``skip_touch`` on the
context suppresses timestamp stamping for that write.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from .core.di import get_logger
from .model import RecordKind

BEFORE_INSERT = "before_insert"
BEFORE_UPDATE = "before_update"
EVENTS = (BEFORE_INSERT, BEFORE_UPDATE)

HookStep = Callable[[Any, "OperationContext"], None]


@dataclass(frozen=True)
class OperationContext:
    """Per-write context handed to every hook step."""

    skip_touch: bool = False
    now: datetime | None = None

    def timestamp(self) -> datetime:
        return self.now if self.now is not None else datetime.now(timezone.utc)


@dataclass
class _Step:
    name: str
    fn: HookStep


class HookPipeline:
    """Ordered, named hook steps per write event."""

    def __init__(self) -> None:
        self._steps: dict[str, list[_Step]] = {event: [] for event in EVENTS}

    def register(
        self,
        event: str,
        name: str,
        step: HookStep,
        *,
        before: str | None = None,
        after: str | None = None,
    ) -> None:
        """
        Add a step to ``event``.

        Args:
            event: 'before_insert' or 'before_update'
            name: Unique step name within the event
            step: Callable taking (record, context)
            before: Place the step just before this step
            after: Place the step just after this step

        Raises:
            ValueError: Unknown event or anchor, duplicate name, or both
                anchors given
        """
        steps = self._event_steps(event)
        if any(s.name == name for s in steps):
            raise ValueError(f"Hook step {name!r} already registered for {event}")
        if before is not None and after is not None:
            raise ValueError("Give either before= or after=, not both")

        index = len(steps)
        if before is not None:
            index = self._index(event, before)
        elif after is not None:
            index = self._index(event, after) + 1
        steps.insert(index, _Step(name, step))

    def unregister(self, event: str, name: str) -> None:
        steps = self._event_steps(event)
        del steps[self._index(event, name)]

    def step_names(self, event: str) -> list[str]:
        return [s.name for s in self._event_steps(event)]

    def run(self, event: str, record: Any, context: OperationContext | None = None) -> None:
        context = context or OperationContext()
        for step in list(self._event_steps(event)):
            step.fn(record, context)

    def run_before_insert(self, record: Any, context: OperationContext | None = None) -> None:
        self.run(BEFORE_INSERT, record, context)

    def run_before_update(self, record: Any, context: OperationContext | None = None) -> None:
        self.run(BEFORE_UPDATE, record, context)

    def _event_steps(self, event: str) -> list[_Step]:
        if event not in self._steps:
            raise ValueError(f"Unknown hook event {event!r}; expected one of {EVENTS}")
        return self._steps[event]

    def _index(self, event: str, name: str) -> int:
        for i, step in enumerate(self._event_steps(event)):
            if step.name == name:
                return i
        raise ValueError(f"No hook step {name!r} registered for {event}")


# -------------------------------------------------------------------------
# Built-in steps
# -------------------------------------------------------------------------


def populate_defaults(record: Any, context: OperationContext) -> None:
    """Fill attributes that are still None from the kind's ``defaults``."""
    kind = type(record)
    if not issubclass(kind, RecordKind):
        return
    for attr, default in kind.defaults.items():
        if getattr(record, attr, None) is None:
            setattr(record, attr, default() if callable(default) else default)


class TouchTimestamps:
    """Stamps creation and update times on records of timestamped kinds.

    Never raises: records that are not record kinds, kinds with timestamps
    disabled and attributes that cannot be assigned are left alone.
    """

    def __init__(self, created_at: str = "createdAt", updated_at: str = "updatedAt") -> None:
        self.created_at = created_at
        self.updated_at = updated_at

    def before_insert(self, record: Any, context: OperationContext) -> None:
        if self._applies(record, context):
            now = context.timestamp()
            self._assign(record, self.created_at, now)
            self._assign(record, self.updated_at, now)

    def before_update(self, record: Any, context: OperationContext) -> None:
        if self._applies(record, context):
            self._assign(record, self.updated_at, context.timestamp())

    @staticmethod
    def _applies(record: Any, context: OperationContext) -> bool:
        if context.skip_touch:
            return False
        kind = type(record)
        return issubclass(kind, RecordKind) and kind.timestamps_enabled()

    @staticmethod
    def _assign(record: Any, attr: str, value: datetime) -> None:
        try:
            setattr(record, attr, value)
        except (AttributeError, TypeError) as e:
            get_logger().debug("Cannot stamp %s.%s: %s", type(record).__name__, attr, e)


def build_default_pipeline(created_at: str = "createdAt", updated_at: str = "updatedAt") -> HookPipeline:
    touch = TouchTimestamps(created_at, updated_at)
    pipeline = HookPipeline()
    pipeline.register(BEFORE_INSERT, "populate_defaults", populate_defaults)
    pipeline.register(BEFORE_INSERT, "touch_timestamps", touch.before_insert)
    pipeline.register(BEFORE_UPDATE, "touch_timestamps", touch.before_update)
    return pipeline
