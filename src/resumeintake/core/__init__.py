"""Candidate filtering and experience normalisation core."""

from __future__ import annotations

from .experience import (
    ExperienceDuration,
    calculate_total_experience,
    parse_date,
    parse_experience_to_years,
    resolve_experience,
)
from .filtering import CandidateFilter, FilterConfig, filter_candidates
from .matching import position_matches, skill_matches

__all__ = [
    "CandidateFilter",
    "ExperienceDuration",
    "FilterConfig",
    "calculate_total_experience",
    "filter_candidates",
    "parse_date",
    "parse_experience_to_years",
    "position_matches",
    "resolve_experience",
    "skill_matches",
]
