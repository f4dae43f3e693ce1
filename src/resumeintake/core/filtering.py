"""Candidate filter engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, TypeVar

import pendulum
import structlog
from rapidfuzz import fuzz

from ..schemas import CandidateRecord, FilterCriteria, SkillsMatchMode
from .experience import coerce_candidate, resolve_experience
from .matching import normalize_skill, position_matches, skill_matches

CandidateT = TypeVar("CandidateT", CandidateRecord, Mapping[str, Any])


@dataclass
class FilterConfig:
    """Tunable knobs for the filter engine."""

    default_match_mode: SkillsMatchMode | str = SkillsMatchMode.ALL
    # rapidfuzz ratio (0-100) accepted as an extra skill rule; None disables it.
    min_similarity: float | None = None

    def __post_init__(self) -> None:
        mode = SkillsMatchMode.parse(self.default_match_mode)
        if mode is None:
            raise ValueError(f"Unknown skills match mode: {self.default_match_mode!r}")
        self.default_match_mode = mode


class CandidateFilter:
    """Select candidates satisfying every supplied criterion."""

    def __init__(
        self,
        *,
        config: FilterConfig | None = None,
        now_provider: Callable[[], pendulum.DateTime] | None = None,
    ) -> None:
        self._config = config or FilterConfig()
        self._now_provider = now_provider or pendulum.now
        self._logger = structlog.get_logger(__name__)

    def filter(
        self,
        candidates: Iterable[CandidateT],
        criteria: FilterCriteria | Mapping[str, Any],
        *,
        now: pendulum.DateTime | None = None,
    ) -> list[CandidateT]:
        """Return the matching candidates in input order.

        Input objects are returned as-is; nothing is copied or mutated.
        """
        if not isinstance(criteria, FilterCriteria):
            criteria = FilterCriteria.model_validate(criteria)
        reference = now or self._now_provider()

        matched: list[CandidateT] = []
        total = 0
        for candidate in candidates:
            total += 1
            record = coerce_candidate(candidate)
            failed = self.rejection_reason(record, criteria, now=reference)
            if failed is None:
                matched.append(candidate)
            else:
                self._logger.debug("candidates.rejected", candidate_id=record.id, criterion=failed)

        self._logger.info(
            "candidates.filtered",
            total=total,
            matched=len(matched),
            skills=criteria.skills,
            position=criteria.position,
            min_experience=criteria.min_experience,
            max_experience=criteria.max_experience,
        )
        return matched

    def rejection_reason(
        self,
        candidate: CandidateRecord,
        criteria: FilterCriteria,
        *,
        now: pendulum.DateTime | None = None,
    ) -> str | None:
        """Name the first criterion the candidate fails, or None if it passes."""
        if criteria.has_skills and not self._skills_pass(candidate.skills, criteria):
            return "skills"
        if criteria.position and not self._position_pass(candidate, criteria.position):
            return "position"
        if criteria.has_experience_bounds and not self._experience_pass(candidate, criteria, now):
            return "experience"
        return None

    def matches(
        self,
        candidate: CandidateRecord | Mapping[str, Any],
        criteria: FilterCriteria | Mapping[str, Any],
        *,
        now: pendulum.DateTime | None = None,
    ) -> bool:
        if not isinstance(criteria, FilterCriteria):
            criteria = FilterCriteria.model_validate(criteria)
        record = coerce_candidate(candidate)
        return self.rejection_reason(record, criteria, now=now or self._now_provider()) is None

    def _skills_pass(self, candidate_skills: list[str], criteria: FilterCriteria) -> bool:
        if not candidate_skills:
            return False
        mode = criteria.skills_match_mode or self._config.default_match_mode
        hits = (
            any(self._skill_hit(skill, required) for skill in candidate_skills)
            for required in criteria.skills
        )
        if mode is SkillsMatchMode.ANY:
            return any(hits)
        return all(hits)

    def _skill_hit(self, candidate_skill: str, required_skill: str) -> bool:
        if skill_matches(candidate_skill, required_skill):
            return True
        threshold = self._config.min_similarity
        if threshold is None:
            return False
        candidate = normalize_skill(candidate_skill)
        required = normalize_skill(required_skill)
        if not candidate or not required:
            return False
        return fuzz.ratio(candidate, required) >= threshold

    @staticmethod
    def _position_pass(candidate: CandidateRecord, required_title: str) -> bool:
        current = candidate.current_position
        if current is None:
            return False
        return position_matches(current.title, required_title)

    @staticmethod
    def _experience_pass(
        candidate: CandidateRecord,
        criteria: FilterCriteria,
        now: pendulum.DateTime | None,
    ) -> bool:
        duration = resolve_experience(candidate, now=now)
        years = duration.total_years if duration is not None else 0.0
        if criteria.min_experience is not None and years < criteria.min_experience:
            return False
        if criteria.max_experience is not None and years > criteria.max_experience:
            return False
        return True


def filter_candidates(
    candidates: Iterable[CandidateT],
    criteria: FilterCriteria | Mapping[str, Any],
    *,
    now: pendulum.DateTime | None = None,
) -> list[CandidateT]:
    """Filter with the default rule set."""
    return CandidateFilter().filter(candidates, criteria, now=now)


__all__ = ["CandidateFilter", "FilterConfig", "filter_candidates"]
