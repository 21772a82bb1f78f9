"""Pydantic schemas for runtime validation of conversion inputs."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from file_converter.formats import normalize_extension


class ConversionOptionsConfig(BaseModel):
    """Validated optional image parameters."""

    model_config = ConfigDict(extra="forbid")

    quality: int | None = Field(default=None, ge=0, le=100)
    width: int | None = Field(default=None, gt=0)
    height: int | None = Field(default=None, gt=0)


class ConversionRequestConfig(BaseModel):
    """Validated input for a single dispatch call."""

    model_config = ConfigDict(extra="forbid")

    source_mime: str = Field(min_length=1)
    target_extension: str = Field(min_length=1)
    source_name: str | None = None
    options: ConversionOptionsConfig = Field(default_factory=ConversionOptionsConfig)

    @field_validator("source_mime")
    @classmethod
    def _normalize_mime(cls, value: str) -> str:
        cleaned = value.strip().lower()
        if not cleaned:
            raise ValueError("source_mime cannot be blank.")
        return cleaned

    @field_validator("target_extension")
    @classmethod
    def _normalize_target(cls, value: str) -> str:
        cleaned = normalize_extension(value)
        if not cleaned:
            raise ValueError("target_extension cannot be blank.")
        return cleaned
