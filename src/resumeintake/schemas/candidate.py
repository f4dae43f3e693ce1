"""Candidate record schema produced by the upload / extraction pipeline."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="allow",
)


class EducationEntry(BaseModel):
    """Education history entry."""

    degree: str = ""
    institution: str = ""
    graduation_date: str | None = None
    field_of_study: str | None = Field(default=None, alias="field")

    model_config = _WIRE_CONFIG


class ExperienceEntry(BaseModel):
    """Employment history entry with free-text dates."""

    title: str = ""
    company: str = ""
    start_date: str | None = None
    end_date: str | None = None
    description: str | None = None

    model_config = _WIRE_CONFIG

    @field_validator("title", "company", mode="before")
    @classmethod
    def _none_to_blank(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _stringify_date(cls, value: Any) -> Any:
        # Extractors occasionally emit a bare year as a number.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(int(value))
        return value


class Certification(BaseModel):
    """Certification or licence."""

    name: str
    issuer: str | None = None
    date: str | None = None

    model_config = _WIRE_CONFIG


class Attachment(BaseModel):
    """File attached to an uploaded email resume."""

    id: str
    filename: str
    mime_type: str
    size: int
    extracted_text: str | None = None
    processed: bool = False

    model_config = _WIRE_CONFIG


class ConfidenceScores(BaseModel):
    """Per-field extraction reliability in the 0..1 range."""

    overall: float = Field(ge=0.0, le=1.0)
    name: float | None = Field(default=None, ge=0.0, le=1.0)
    emails: float | None = Field(default=None, ge=0.0, le=1.0)
    phones: float | None = Field(default=None, ge=0.0, le=1.0)
    education: float | None = Field(default=None, ge=0.0, le=1.0)
    experience: float | None = Field(default=None, ge=0.0, le=1.0)
    skills: float | None = Field(default=None, ge=0.0, le=1.0)

    model_config = _WIRE_CONFIG


class CandidateRecord(BaseModel):
    """Structured candidate document.

    ``experience`` is ordered most recent first; index 0 is the current
    position. Wire names are camelCase (``fullName``, ``rawText``) and both
    spellings are accepted on input.
    """

    id: str = ""
    full_name: str | None = None
    emails: list[str] = Field(default_factory=list)
    phones: list[str] = Field(default_factory=list)
    summary: str | None = None
    education: list[EducationEntry] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    attachments: list[Attachment] = Field(default_factory=list)
    source_file: str = ""
    extracted_at: str | None = None
    confidence: ConfidenceScores | None = None
    flagged: bool = False
    extraction_mode: Literal["manual", "ai"] = "manual"
    raw_text: str | None = None

    model_config = _WIRE_CONFIG

    @field_validator(
        "emails",
        "phones",
        "education",
        "experience",
        "skills",
        "certifications",
        "attachments",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("skills", "emails", "phones")
    @classmethod
    def _drop_blank(cls, values: list[str]) -> list[str]:
        return [value for value in values if value and value.strip()]

    @property
    def current_position(self) -> ExperienceEntry | None:
        return self.experience[0] if self.experience else None

    def to_wire(self) -> dict[str, Any]:
        """Serialise with camelCase keys for JSON consumers."""
        return self.model_dump(mode="json", by_alias=True)
