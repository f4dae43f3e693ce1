"""Candidate filtering pipeline assembly and execution."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

import pendulum
import structlog
from pydantic import ValidationError

from .core import CandidateFilter
from .core.experience import calculate_total_experience
from .export import build_summary_row
from .schemas import CandidateRecord, FilterCriteria
from .storage import CandidateRepository
from . import __version__


class CandidateLoadError(ValueError):
    """Raised when candidate loading encounters invalid records."""

    def __init__(self, errors: list[str], partial: list[CandidateRecord]):
        super().__init__("Candidate loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Candidate loading failed: {self.errors}"


class CandidateLoader:
    """Load candidate records from JSON lines."""

    def load(self, path: Path) -> list[CandidateRecord]:
        candidates: list[CandidateRecord] = []
        errors: list[str] = []
        with path.open("r", encoding="utf-8") as handle:
            for idx, line in enumerate(handle, start=1):
                raw = line.strip()
                if not raw:
                    continue
                try:
                    record = json.loads(raw)
                except json.JSONDecodeError as exc:
                    errors.append(f"line {idx}: invalid JSON ({exc})")
                    continue
                if not isinstance(record, dict):
                    errors.append(f"line {idx}: expected a JSON object")
                    continue
                try:
                    candidate = CandidateRecord.model_validate(record)
                except ValidationError as exc:
                    errors.append(f"line {idx}: {exc}")
                    continue
                candidates.append(candidate)
        if errors:
            raise CandidateLoadError(errors, candidates)
        return candidates


class CriteriaLoader:
    """Load a filter criteria request body."""

    def load(self, path: Path) -> dict[str, Any]:
        with path.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid criteria JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError("Criteria JSON must be an object")
        return data


class OutputWriter:
    """Persist filter results."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )


class FilterService:
    """Request-level facade: repository in, ``{"candidates": [...]}`` out.

    Any failure while applying the criteria falls back to the unfiltered
    candidate list; the caller always gets a usable response.
    """

    def __init__(
        self,
        *,
        repository: CandidateRepository,
        candidate_filter: CandidateFilter,
    ) -> None:
        self._repository = repository
        self._filter = candidate_filter
        self._logger = structlog.get_logger(__name__)

    def filter(
        self,
        payload: Mapping[str, Any] | None,
        *,
        now: pendulum.DateTime | None = None,
    ) -> dict[str, list[CandidateRecord]]:
        candidates = self._repository.list_all()
        try:
            criteria = FilterCriteria.model_validate(dict(payload or {}))
            matched = self._filter.filter(candidates, criteria, now=now)
        except Exception as exc:  # noqa: BLE001
            self._logger.error("candidates.filter_failed", error=str(exc))
            matched = candidates
        return {"candidates": matched}


class FilterPipeline:
    """Load candidates, apply criteria and write the result document."""

    def __init__(
        self,
        *,
        service: FilterService,
        repository: CandidateRepository,
        candidate_loader: CandidateLoader | None = None,
        criteria_loader: CriteriaLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._service = service
        self._repository = repository
        self._candidates = candidate_loader or CandidateLoader()
        self._criteria = criteria_loader or CriteriaLoader()
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def load(self, candidates_path: Path) -> list[str]:
        """Import a JSONL file into the repository; return load errors."""
        load_errors: list[str] = []
        try:
            candidates = self._candidates.load(candidates_path)
        except CandidateLoadError as exc:
            candidates = exc.partial
            load_errors.extend(exc.errors)
            self._logger.warning("candidates.partial_load", errors=exc.errors)

        for candidate in candidates:
            self._repository.add(candidate)
        self._logger.info("candidates.loaded", count=len(candidates), errors=len(load_errors))
        return load_errors

    def run(
        self,
        *,
        candidates_path: Path,
        output_path: Path,
        criteria_path: Path | None = None,
        as_of: str | None = None,
        summary: bool = False,
    ) -> list[dict[str, Any]]:
        now = resolve_as_of(as_of)
        load_errors = self.load(candidates_path)
        criteria = self._criteria.load(criteria_path) if criteria_path else {}

        matched = self._service.filter(criteria, now=now)["candidates"]
        if summary:
            rendered = [build_summary_row(candidate, now=now) for candidate in matched]
        else:
            rendered = [
                {
                    **candidate.to_wire(),
                    "totalExperience": calculate_total_experience(candidate, now=now),
                }
                for candidate in matched
            ]

        metadata = {
            "candidate_count": len(self._repository.list_all()),
            "matched_count": len(matched),
            "criteria": criteria,
            "errors": load_errors,
            "as_of": now.to_date_string(),
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        }
        self._writer.write(output_path, {"metadata": metadata, "candidates": rendered})
        return rendered


def resolve_as_of(as_of: str | None) -> pendulum.DateTime:
    """Reference date for "present" job endings; ``YYYY-MM`` or ISO."""
    if not as_of:
        return pendulum.now()
    value = as_of.strip()
    try:
        if len(value) == 7 and value[4] == "-":
            return pendulum.datetime(int(value[:4]), int(value[5:7]), 1)
        parsed = pendulum.parse(value)
    except (ValueError, pendulum.parsing.exceptions.ParserError) as exc:
        raise ValueError(f"Invalid reference date: {as_of!r}") from exc
    if not isinstance(parsed, pendulum.DateTime):
        raise ValueError(f"Invalid reference date: {as_of!r}")
    return parsed
