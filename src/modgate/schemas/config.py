"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.criterion import check_complaint_quality


class DiscoveryConfig(BaseModel):
    directories: list[str] = Field(default_factory=list)
    recursive: bool = False
    include_private: bool = False

    model_config = ConfigDict(extra="forbid")


class CriteriaConfig(BaseModel):
    base_class: str | None = None
    required_attributes: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)
    include_abstract: bool = False
    default_complaints: list[str] | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("base_class")
    @classmethod
    def _check_base_class(cls, value: str | None) -> str | None:
        if value is not None and ":" not in value:
            raise ValueError("base_class must look like 'package.module:ClassName'")
        return value

    @field_validator("default_complaints")
    @classmethod
    def _check_default_complaints(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return value
        return list(check_complaint_quality(value))


class AppConfig(BaseModel):
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    criteria: CriteriaConfig = Field(default_factory=CriteriaConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(raw: Any) -> AppConfig:
    """Validate a raw mapping (usually parsed YAML) into an ``AppConfig``."""
    return AppConfig.model_validate(raw if raw is not None else {})
