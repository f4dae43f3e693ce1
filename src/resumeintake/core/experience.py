"""Experience normalisation: free-text resume dates and total tenure."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Literal, Mapping

import pendulum
from pydantic import ValidationError

from ..schemas import CandidateRecord, ExperienceEntry

FRESHER = "Fresher"
LESS_THAN_A_MONTH = "< 1 month"

PRESENT_KEYWORDS: tuple[str, ...] = ("present", "current", "till date", "till now", "ongoing")

# Zero-based month index, including truncations seen in extracted resumes.
MONTH_NAMES: dict[str, int] = {
    "january": 0, "jan": 0, "janua": 0,
    "february": 1, "feb": 1, "febru": 1,
    "march": 2, "mar": 2,
    "april": 3, "apr": 3,
    "may": 4,
    "june": 5, "jun": 5,
    "july": 6, "jul": 6,
    "august": 7, "aug": 7,
    "september": 8, "sep": 8, "sept": 8,
    "october": 9, "oct": 9,
    "november": 10, "nov": 10,
    "december": 11, "dec": 11,
}

_MIN_YEAR = 1900
_MAX_YEAR = 2100

_PREFIX = re.compile(r"^(from|since|to)\s+")
_MONTH_NAME_YEAR = re.compile(r"^(\w+\.?)\s+(\d{4})$")
_SLASH_MONTH_YEAR = re.compile(r"^(\d{2})/(\d{4})$")
_YEAR_DASH_MONTH = re.compile(r"^(\d{4})-(\d{2})$")
_MONTH_DASH_YEAR = re.compile(r"^(\d{2})-(\d{4})$")
_BARE_YEAR = re.compile(r"^(\d{4})$")

_NUMBER = r"(\d+(?:\.\d+)?)"
STATED_EXPERIENCE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(_NUMBER + r"\s*years?\s+of\s+(?:professional\s+)?work\s+experience", re.IGNORECASE),
    re.compile(_NUMBER + r"\s*years?\s+(?:of\s+)?experience", re.IGNORECASE),
    re.compile(r"(?:possessing\s+)?(?:over\s+)?" + _NUMBER + r"\s*years?\s+of\s+experience", re.IGNORECASE),
    re.compile(r"approximately?\s+" + _NUMBER + r"\s*years?\s+of\s+(?:professional\s+)?experience", re.IGNORECASE),
    re.compile(r"around?\s+" + _NUMBER + r"\s*years?\s+of\s+experience", re.IGNORECASE),
)

_YEARS_COMPONENT = re.compile(r"(\d+)\s*years?", re.IGNORECASE)
_MONTHS_COMPONENT = re.compile(r"(\d+)\s*months?", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class ExperienceDuration:
    """Whole years plus leftover months of professional experience."""

    years: int
    months: int
    source: Literal["stated", "dated"]

    @property
    def total_months(self) -> int:
        return self.years * 12 + self.months

    @property
    def total_years(self) -> float:
        return self.years + self.months / 12

    def format(self) -> str:
        return format_duration(self.years, self.months)


def parse_date(text: str | None, *, now: pendulum.DateTime | None = None) -> pendulum.DateTime | None:
    """Parse one side of a resume date range.

    Accepts ``June 2024``, ``Jun. 2024``, ``06/2024``, ``2024-06``,
    ``06-2024`` and ``2024`` (January). Ongoing markers such as ``Present``
    resolve to ``now``. Returns ``None`` when nothing is recognised.
    """
    if not text:
        return None

    lowered = text.lower()
    if any(keyword in lowered for keyword in PRESENT_KEYWORDS):
        return now or pendulum.now()

    normalized = re.sub(r"\s+", " ", lowered.strip().replace("–", "-").replace("—", "-")).strip()

    parsed = _match_formats(_PREFIX.sub("", normalized))
    if parsed is None and "-" in normalized:
        # Still a range: keep the end side.
        end_side = normalized.rsplit("-", 1)[1].strip()
        parsed = _match_formats(_PREFIX.sub("", end_side))
    return parsed


def _match_formats(value: str) -> pendulum.DateTime | None:
    match = _MONTH_NAME_YEAR.match(value)
    if match:
        month = MONTH_NAMES.get(match.group(1).rstrip("."))
        result = _build_date(int(match.group(2)), month)
        if result is not None:
            return result

    match = _SLASH_MONTH_YEAR.match(value)
    if match:
        result = _build_date(int(match.group(2)), int(match.group(1)) - 1)
        if result is not None:
            return result

    match = _YEAR_DASH_MONTH.match(value)
    if match:
        result = _build_date(int(match.group(1)), int(match.group(2)) - 1)
        if result is not None:
            return result

    match = _MONTH_DASH_YEAR.match(value)
    if match:
        result = _build_date(int(match.group(2)), int(match.group(1)) - 1)
        if result is not None:
            return result

    match = _BARE_YEAR.match(value)
    if match:
        return _build_date(int(match.group(1)), 0)

    return None


def _build_date(year: int, month: int | None) -> pendulum.DateTime | None:
    if month is None or not 0 <= month <= 11:
        return None
    if not _MIN_YEAR < year < _MAX_YEAR:
        return None
    return pendulum.datetime(year, month + 1, 1)


def format_duration(years: int, months: int) -> str:
    if years == 0 and months == 0:
        return LESS_THAN_A_MONTH
    month_text = "month" if months == 1 else "months"
    if years == 0:
        return f"{months} {month_text}"
    year_text = "year" if years == 1 else "years"
    if months == 0:
        return f"{years} {year_text}"
    return f"{years} {year_text} {months} {month_text}"


def stated_experience(text: str) -> ExperienceDuration | None:
    """Find an explicit "N years of experience" claim in free text."""
    for pattern in STATED_EXPERIENCE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        value = float(match.group(1))
        if value <= 0 or value >= 100:
            continue
        years = math.floor(value)
        months = _round_half_up((value - years) * 12)
        return ExperienceDuration(years=years, months=months, source="stated")
    return None


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def dated_experience(
    entries: list[ExperienceEntry],
    *,
    now: pendulum.DateTime | None = None,
) -> ExperienceDuration | None:
    """Sum month spans of every job whose start and end dates both parse.

    Overlapping jobs are added independently, not merged.
    """
    reference = now or pendulum.now()
    total_months = 0
    valid_jobs = 0
    for entry in entries:
        start = parse_date(entry.start_date, now=reference)
        end = parse_date(entry.end_date, now=reference)
        if start is None or end is None:
            continue
        months = (end.year - start.year) * 12 + (end.month - start.month)
        if months < 0:
            continue
        total_months += months
        valid_jobs += 1

    if valid_jobs == 0:
        return None
    return ExperienceDuration(years=total_months // 12, months=total_months % 12, source="dated")


def resolve_experience(
    candidate: CandidateRecord | Mapping[str, Any],
    *,
    now: pendulum.DateTime | None = None,
) -> ExperienceDuration | None:
    """Return the candidate's total experience, or ``None`` for a fresher.

    A figure stated in the summary or raw text wins over job date arithmetic.
    """
    record = coerce_candidate(candidate)
    full_text = f"{record.summary or ''} {record.raw_text or ''}".lower()
    stated = stated_experience(full_text)
    if stated is not None:
        return stated
    if not record.experience:
        return None
    return dated_experience(record.experience, now=now)


def calculate_total_experience(
    candidate: CandidateRecord | Mapping[str, Any],
    *,
    now: pendulum.DateTime | None = None,
) -> str:
    duration = resolve_experience(candidate, now=now)
    if duration is None:
        return FRESHER
    return duration.format()


def parse_experience_to_years(text: str | None) -> float:
    """Invert :func:`calculate_total_experience` into fractional years."""
    if not text:
        return 0.0
    stripped = text.strip()
    if stripped.lower() in {"fresher", "n/a"} or stripped == LESS_THAN_A_MONTH:
        return 0.0

    years_match = _YEARS_COMPONENT.search(stripped)
    months_match = _MONTHS_COMPONENT.search(stripped)
    years = int(years_match.group(1)) if years_match else 0
    months = int(months_match.group(1)) if months_match else 0
    return years + months / 12


def coerce_candidate(candidate: CandidateRecord | Mapping[str, Any]) -> CandidateRecord:
    """Read a candidate for filtering; a malformed mapping never raises.

    When full validation fails, only the fields the core reads (``id``,
    ``skills``, ``experience``, ``summary``, ``rawText``) are picked out and
    anything unreadable among them is treated as absent.
    """
    if isinstance(candidate, CandidateRecord):
        return candidate
    try:
        return CandidateRecord.model_validate(candidate)
    except ValidationError:
        return _lenient_view(candidate)


def _lenient_view(candidate: Mapping[str, Any]) -> CandidateRecord:
    skills = candidate.get("skills")
    entries = candidate.get("experience")
    identifier = candidate.get("id")
    return CandidateRecord.model_construct(
        id="" if identifier is None else str(identifier),
        skills=[skill for skill in skills if _text(skill)] if isinstance(skills, list) else [],
        experience=[_lenient_entry(entry) for entry in entries] if isinstance(entries, list) else [],
        summary=_text(candidate.get("summary")),
        raw_text=_text(candidate.get("rawText", candidate.get("raw_text"))),
    )


def _lenient_entry(entry: Any) -> ExperienceEntry:
    if not isinstance(entry, Mapping):
        return ExperienceEntry()
    try:
        return ExperienceEntry.model_validate(entry)
    except ValidationError:
        return ExperienceEntry.model_construct(
            title=_text(entry.get("title")) or "",
            company=_text(entry.get("company")) or "",
            start_date=_text(entry.get("startDate", entry.get("start_date"))),
            end_date=_text(entry.get("endDate", entry.get("end_date"))),
        )


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) and value.strip() else None


__all__ = [
    "ExperienceDuration",
    "FRESHER",
    "calculate_total_experience",
    "coerce_candidate",
    "dated_experience",
    "format_duration",
    "parse_date",
    "parse_experience_to_years",
    "resolve_experience",
    "stated_experience",
]
