"""In-memory candidate repository."""

from __future__ import annotations

import uuid
from typing import Any, Mapping, Protocol, runtime_checkable

import pendulum
from pydantic.alias_generators import to_camel

from .schemas import CandidateRecord

# Wire (camelCase) key to field name; field names map to themselves.
_FIELD_NAMES: dict[str, str] = {
    **{name: name for name in CandidateRecord.model_fields},
    **{info.alias or to_camel(name): name for name, info in CandidateRecord.model_fields.items()},
}


@runtime_checkable
class CandidateRepository(Protocol):
    """Storage contract injected into request handlers and pipelines."""

    def list_all(self) -> list[CandidateRecord]:
        """Return all candidates, most recently extracted first."""

    def get(self, candidate_id: str) -> CandidateRecord | None:
        """Return a candidate by id, or None."""

    def add(self, candidate: CandidateRecord) -> CandidateRecord:
        """Store an already identified candidate."""

    def create(self, data: Mapping[str, Any]) -> CandidateRecord:
        """Store a new candidate, assigning id and extraction timestamp."""

    def update(self, candidate_id: str, changes: Mapping[str, Any]) -> CandidateRecord | None:
        """Merge changes into a stored candidate."""

    def flag(self, candidate_id: str) -> CandidateRecord | None:
        """Mark a candidate for manual review."""

    def delete(self, candidate_id: str) -> bool:
        """Remove one candidate; False when it was not stored."""

    def delete_all(self) -> int:
        """Remove every candidate and return how many were removed."""


class InMemoryCandidateRepository:
    """Dict-backed repository; contents live only as long as the process."""

    def __init__(self, *, now_provider: Any | None = None) -> None:
        self._candidates: dict[str, CandidateRecord] = {}
        self._now_provider = now_provider or pendulum.now

    def list_all(self) -> list[CandidateRecord]:
        return sorted(
            self._candidates.values(),
            key=lambda candidate: _timestamp(candidate.extracted_at),
            reverse=True,
        )

    def get(self, candidate_id: str) -> CandidateRecord | None:
        return self._candidates.get(candidate_id)

    def add(self, candidate: CandidateRecord) -> CandidateRecord:
        if not candidate.id:
            candidate = candidate.model_copy(update={"id": str(uuid.uuid4())})
        if candidate.extracted_at is None:
            candidate = candidate.model_copy(update={"extracted_at": self._now_iso()})
        self._candidates[candidate.id] = candidate
        return candidate

    def create(self, data: Mapping[str, Any]) -> CandidateRecord:
        payload = {
            key: value
            for key, value in dict(data).items()
            if key not in {"id", "extractedAt", "extracted_at"}
        }
        candidate = CandidateRecord.model_validate(
            {**payload, "id": str(uuid.uuid4()), "extractedAt": self._now_iso()}
        )
        self._candidates[candidate.id] = candidate
        return candidate

    def update(self, candidate_id: str, changes: Mapping[str, Any]) -> CandidateRecord | None:
        existing = self._candidates.get(candidate_id)
        if existing is None:
            return None
        normalized = {_FIELD_NAMES.get(key, key): value for key, value in dict(changes).items()}
        merged = {**existing.model_dump(), **normalized, "id": candidate_id}
        updated = CandidateRecord.model_validate(merged)
        self._candidates[candidate_id] = updated
        return updated

    def flag(self, candidate_id: str) -> CandidateRecord | None:
        return self.update(candidate_id, {"flagged": True})

    def delete(self, candidate_id: str) -> bool:
        return self._candidates.pop(candidate_id, None) is not None

    def delete_all(self) -> int:
        count = len(self._candidates)
        self._candidates.clear()
        return count

    def __len__(self) -> int:
        return len(self._candidates)

    def _now_iso(self) -> str:
        return self._now_provider().to_iso8601_string()


def _timestamp(value: str | None) -> float:
    if not value:
        return 0.0
    try:
        return pendulum.parse(value).timestamp()
    except (ValueError, pendulum.parsing.exceptions.ParserError):
        return 0.0


__all__ = ["CandidateRepository", "InMemoryCandidateRepository"]
