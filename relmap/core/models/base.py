"""
Base Pydantic models for relmap.

Provides common configuration and base classes for all relmap models.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class RelmapBaseModel(BaseModel):
    """Base model for all relmap Pydantic models.

    Configuration:
        - strict: Strict type coercion (no implicit conversions)
        - validate_assignment: Validate on attribute assignment
        - extra: Reject unknown fields
        - populate_by_name: Allow field aliases
    """

    model_config = ConfigDict(
        strict=True,
        validate_assignment=True,
        extra="forbid",
        populate_by_name=True,
        revalidate_instances="never",
    )


class ImmutableModel(RelmapBaseModel):
    """Immutable base model for metadata that must not change after creation."""

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        extra="forbid",
        populate_by_name=True,
        arbitrary_types_allowed=True,
        revalidate_instances="never",
    )
