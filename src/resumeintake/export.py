"""Display rows for candidate export."""

from __future__ import annotations

import re
from typing import Any, Mapping

import pendulum

from .core.experience import calculate_total_experience, coerce_candidate
from .schemas import CandidateRecord

NOT_AVAILABLE = "N/A"

SUMMARY_COLUMNS: tuple[tuple[str, str], ...] = (
    ("fullName", "Full Name"),
    ("email", "Email"),
    ("phone", "Phone"),
    ("currentPosition", "Current Position"),
    ("currentCompany", "Current Company"),
    ("previousCompany", "Previous Company"),
    ("totalExperience", "Total Experience"),
    ("skills", "Skills"),
    ("certifications", "Certifications"),
    ("linkedin", "LinkedIn"),
    ("github", "GitHub"),
    ("portfolio", "Portfolio"),
    ("summary", "Summary"),
    ("confidence", "Confidence"),
    ("sourceFile", "Source File"),
    ("extractedAt", "Extracted At"),
)

_LINKEDIN_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"linkedin\.com/in/([\w-]+)", re.IGNORECASE),
    re.compile(r"linkedin\.com/([\w-]+)", re.IGNORECASE),
)
_GITHUB_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"github\.com/([\w-]+)/?(?:\s|$)", re.IGNORECASE),
    re.compile(r"https?://github\.com/([\w-]+)", re.IGNORECASE),
)
_URL = re.compile(r"https?://[\w.-]+\.[a-z]{2,}(?:/[\w.-]*)?", re.IGNORECASE)


def extract_urls(raw_text: str | None) -> dict[str, str | None]:
    """Pull LinkedIn, GitHub and a portfolio link out of resume text."""
    urls: dict[str, str | None] = {"linkedin": None, "github": None, "portfolio": None}
    if not raw_text:
        return urls

    for pattern in _LINKEDIN_PATTERNS:
        match = pattern.search(raw_text)
        if match:
            urls["linkedin"] = f"https://linkedin.com/in/{match.group(1)}"
            break

    for pattern in _GITHUB_PATTERNS:
        match = pattern.search(raw_text)
        if match:
            urls["github"] = f"https://github.com/{match.group(1)}"
            break

    for url in _URL.findall(raw_text):
        lowered = url.lower()
        if "linkedin" not in lowered and "github" not in lowered:
            urls["portfolio"] = url
            break

    return urls


def build_summary_row(
    candidate: CandidateRecord | Mapping[str, Any],
    *,
    now: pendulum.DateTime | None = None,
) -> dict[str, str]:
    """Flatten a candidate into export display strings keyed by column."""
    record = coerce_candidate(candidate)
    urls = extract_urls(record.raw_text)
    current = record.experience[0] if record.experience else None
    previous = record.experience[1] if len(record.experience) > 1 else None
    confidence = record.confidence.overall if record.confidence else None

    row = {
        "fullName": record.full_name,
        "email": record.emails[0] if record.emails else None,
        "phone": record.phones[0] if record.phones else None,
        "currentPosition": current.title if current else None,
        "currentCompany": current.company if current else None,
        "previousCompany": previous.company if previous else None,
        "totalExperience": calculate_total_experience(record, now=now),
        "skills": ", ".join(record.skills),
        "certifications": ", ".join(cert.name for cert in record.certifications),
        "linkedin": urls["linkedin"],
        "github": urls["github"],
        "portfolio": urls["portfolio"],
        "summary": record.summary,
        "confidence": f"{confidence * 100:.0f}%" if confidence else None,
        "sourceFile": record.source_file,
        "extractedAt": _format_timestamp(record.extracted_at),
    }
    return {key: value or NOT_AVAILABLE for key, value in row.items()}


def _format_timestamp(value: str | None) -> str | None:
    if not value:
        return None
    try:
        return pendulum.parse(value).to_datetime_string()
    except (ValueError, pendulum.parsing.exceptions.ParserError):
        return value


__all__ = ["NOT_AVAILABLE", "SUMMARY_COLUMNS", "build_summary_row", "extract_urls"]
