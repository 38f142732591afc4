"""
Configuration models.

Provides Pydantic models for relmap configuration with validation.
"""

from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict, field_validator

from .base import RelmapBaseModel

LogLevel = Literal["debug", "info", "warning", "error"]


class ConfigBaseModel(RelmapBaseModel):
    """Base model for config sections with relaxed strict mode for TOML loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML types and env strings
        validate_assignment=True,
        extra="ignore",  # Ignore unknown fields in config files
        populate_by_name=True,
        revalidate_instances="never",
    )


class ConventionsConfig(ConfigBaseModel):
    """Naming and lifecycle conventions applied to record kinds."""

    id_column: str = "id"
    models_package: str = "models"
    timestamps: bool = True
    created_at_column: str = "createdAt"
    updated_at_column: str = "updatedAt"

    @field_validator(
        "id_column",
        "models_package",
        "created_at_column",
        "updated_at_column",
    )
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Convention names are used to build identifiers; blanks are never valid."""
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "warning"
    console: bool = False
    file: bool = False
    file_path: str | None = None

