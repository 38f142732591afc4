"""
Custom exception hierarchy for relmap.

Declaration-time errors are raised while a record kind's relation graph is
being built and propagate out of the relation store unchanged. Nothing in
this hierarchy is meant to be logged-and-continued: a half-built relation
graph is unsafe to plan queries with.
"""

from __future__ import annotations


class RelmapException(Exception):
    """
    Base exception for all relmap errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (record kinds, columns, etc.)
        recoverable: Whether a retry may succeed once the cause is fixed
    """

    recoverable: bool = False

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class RelmapConfigError(RelmapException):
    """Base class for configuration-related errors."""

    pass


class ConfigFileError(RelmapConfigError):
    """Error reading or parsing a configuration file."""

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class ConfigValidationError(RelmapConfigError, ValueError):
    """
    Invalid or missing configuration value.

    Inherits from ValueError so callers catching ValueError keep working.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        value: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Declaration Errors
# =============================================================================


class RelationDeclarationError(RelmapException):
    """Base class for errors raised while declaring relations."""

    pass


class InvalidNameError(RelationDeclarationError, ValueError):
    """Empty or malformed record kind or column name."""

    def __init__(
        self,
        message: str,
        *,
        name: object = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        ctx["name"] = name
        super().__init__(message, context=ctx, cause=cause)


class UnresolvedRecordKindError(RelationDeclarationError, LookupError):
    """
    Relation target could not be located.

    The owning kind's relation graph stays unpopulated, so the next access
    retries the declaration (e.g. after the missing module is installed).
    """

    recoverable = True

    def __init__(
        self,
        message: str,
        *,
        target: object = None,
        owner: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        ctx["target"] = target
        if owner:
            ctx["owner"] = owner
        super().__init__(message, context=ctx, cause=cause)


class InvalidJoinSpecError(RelationDeclarationError, ValueError):
    """Malformed explicit join override (name, join columns, through options)."""

    def __init__(
        self,
        message: str,
        *,
        option: str | None = None,
        value: object = None,
        owner: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if option:
            ctx["option"] = option
        if value is not None:
            ctx["value"] = value
        if owner:
            ctx["owner"] = owner
        super().__init__(message, context=ctx, cause=cause)
