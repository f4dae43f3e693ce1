"""Pydantic schema definitions for candidate records and filter criteria."""

from __future__ import annotations

from .candidate import (
    Attachment,
    CandidateRecord,
    Certification,
    ConfidenceScores,
    EducationEntry,
    ExperienceEntry,
)
from .criteria import FilterCriteria, SkillsMatchMode

__all__ = [
    "Attachment",
    "CandidateRecord",
    "Certification",
    "ConfidenceScores",
    "EducationEntry",
    "ExperienceEntry",
    "FilterCriteria",
    "SkillsMatchMode",
]
