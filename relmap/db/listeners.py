"""
Session event wiring for lifecycle hooks.

install_hooks() registers a ``before_flush`` listener that runs the hook
pipeline over the session's pending writes: new objects get the insert
hooks, modified objects the update hooks. Attribute changes made by the
hooks are part of the same flush.

Touching is suppressed for a session while ``session.info["skip_touch"]``
is true:

    with untouched(session):
        record.title = "fixed typo"
        session.commit()  # updatedAt unchanged
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import event
from sqlalchemy.orm import Session

from ..core.di import get_logger
from ..hooks import HookPipeline, OperationContext

SKIP_TOUCH_KEY = "skip_touch"

FlushListener = Callable[[Session, Any, Any], None]


def install_hooks(target: Any, pipeline: HookPipeline | None = None) -> FlushListener:
    """
    Run ``pipeline`` before every flush of sessions created from ``target``.

    Args:
        target: A Session, sessionmaker or Session subclass
        pipeline: Hook pipeline (default: the process-wide pipeline)

    Returns:
        The registered listener, for remove_hooks()
    """
    if pipeline is None:
        from ..core.bootstrap import get_hook_pipeline

        pipeline = get_hook_pipeline()

    def before_flush(session: Session, flush_context: Any, instances: Any) -> None:
        context = operation_context(session)
        for obj in list(session.new):
            pipeline.run_before_insert(obj, context)
        for obj in list(session.dirty):
            if session.is_modified(obj, include_collections=False):
                pipeline.run_before_update(obj, context)

    event.listen(target, "before_flush", before_flush)
    get_logger().debug("Installed lifecycle hooks on %r", target)
    return before_flush


def remove_hooks(target: Any, listener: FlushListener) -> None:
    event.remove(target, "before_flush", listener)


def operation_context(session: Session) -> OperationContext:
    return OperationContext(skip_touch=bool(session.info.get(SKIP_TOUCH_KEY, False)))


@contextmanager
def untouched(session: Session) -> Iterator[Session]:
    """Suppress timestamp stamping for flushes inside the block."""
    previous = session.info.get(SKIP_TOUCH_KEY)
    session.info[SKIP_TOUCH_KEY] = True
    try:
        yield session
    finally:
        if previous is None:
            session.info.pop(SKIP_TOUCH_KEY, None)
        else:
            session.info[SKIP_TOUCH_KEY] = previous
