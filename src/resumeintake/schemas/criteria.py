"""Recruiter-supplied filter criteria."""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class SkillsMatchMode(str, Enum):
    """How required skills combine: every one (ALL) or at least one (ANY)."""

    ALL = "ALL"
    ANY = "ANY"

    @classmethod
    def parse(cls, value: Any) -> "SkillsMatchMode | None":
        """Map wire spellings (``AND``/``OR``/``ALL``/``ANY``) to a mode."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        return _MODE_ALIASES.get(value.strip().upper())


_MODE_ALIASES: dict[str, SkillsMatchMode] = {
    "ALL": SkillsMatchMode.ALL,
    "AND": SkillsMatchMode.ALL,
    "ANY": SkillsMatchMode.ANY,
    "OR": SkillsMatchMode.ANY,
}


class FilterCriteria(BaseModel):
    """Criteria a candidate must satisfy; unset fields never exclude.

    Malformed optional values are coerced to "absent" instead of failing
    validation so that a sloppy request body degrades to a looser filter.
    """

    skills: list[str] = Field(default_factory=list)
    skills_match_mode: SkillsMatchMode | None = None
    position: str | None = None
    min_experience: float | None = None
    max_experience: float | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @field_validator("skills", mode="before")
    @classmethod
    def _clean_skills(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple, set)):
            return []
        return [item.strip() for item in value if isinstance(item, str) and item.strip()]

    @field_validator("skills_match_mode", mode="before")
    @classmethod
    def _parse_mode(cls, value: Any) -> SkillsMatchMode | None:
        return SkillsMatchMode.parse(value)

    @field_validator("position", mode="before")
    @classmethod
    def _blank_position(cls, value: Any) -> str | None:
        if not isinstance(value, str) or not value.strip():
            return None
        return value.strip()

    @field_validator("min_experience", "max_experience", mode="before")
    @classmethod
    def _numeric_bound(cls, value: Any) -> float | None:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str) and value.strip():
            try:
                parsed = float(value)
            except ValueError:
                return None
            return None if math.isnan(parsed) else parsed
        return None

    @property
    def has_skills(self) -> bool:
        return bool(self.skills)

    @property
    def has_experience_bounds(self) -> bool:
        return self.min_experience is not None or self.max_experience is not None
