"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from .criteria import SkillsMatchMode


class FilterSettings(BaseModel):
    default_match_mode: str | None = None
    min_similarity: float | None = Field(default=None, ge=0.0, le=100.0)

    @field_validator("default_match_mode")
    @classmethod
    def _known_mode(cls, value: str | None) -> str | None:
        if value is None:
            return None
        mode = SkillsMatchMode.parse(value)
        if mode is None:
            raise ValueError(f"Unknown skills match mode: {value!r}")
        return mode.value


class AppConfig(BaseModel):
    filter: FilterSettings = Field(default_factory=FilterSettings)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        filter_settings = self.filter.model_dump(exclude_none=True)
        if filter_settings:
            settings["filter"] = filter_settings
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
