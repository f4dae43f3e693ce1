"""Fuzzy skill and job-title matching rules."""

from __future__ import annotations

import re

# Groups hold normalised forms (lowercase, alphanumerics only).
SKILL_SYNONYMS: tuple[frozenset[str], ...] = (
    frozenset({"javascript", "js", "ecmascript"}),
    frozenset({"typescript", "ts"}),
    frozenset({"react", "reactjs"}),
    frozenset({"vue", "vuejs"}),
    frozenset({"angular", "angularjs"}),
    frozenset({"java", "corejava", "advancedjava"}),
    frozenset({"python", "py"}),
    frozenset({"testing", "test", "qa", "qualityassurance"}),
)

# Matched as substrings of a normalised title, so multi-word terms are fine.
TITLE_SYNONYMS: tuple[tuple[str, ...], ...] = (
    ("developer", "engineer", "programmer", "coder"),
    ("tester", "qa", "test engineer", "quality analyst", "test consultant"),
    ("frontend", "front-end", "ui developer", "client-side"),
    ("backend", "back-end", "server-side"),
    ("fullstack", "full-stack", "full stack"),
)

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_NON_ALNUM_SPACE = re.compile(r"[^a-z0-9\s]")


def normalize_skill(value: str) -> str:
    return _NON_ALNUM.sub("", value.lower())


def normalize_title(value: str) -> str:
    return _NON_ALNUM_SPACE.sub("", value.lower())


def skill_matches(candidate_skill: str, required_skill: str) -> bool:
    """Return True when a resume skill satisfies a required skill.

    ``Node.js`` equals ``nodejs``, ``java`` is found inside ``corejava`` and
    ``JS`` pairs with ``JavaScript`` through :data:`SKILL_SYNONYMS`. The
    relation is pairwise only; it is not transitive.
    """
    candidate = normalize_skill(candidate_skill or "")
    required = normalize_skill(required_skill or "")
    if candidate == required:
        return True
    if candidate in required or required in candidate:
        return True
    return any(candidate in group and required in group for group in SKILL_SYNONYMS)


def position_matches(candidate_title: str | None, required_title: str | None) -> bool:
    """Return True when a job title satisfies a required position."""
    if not candidate_title or not required_title:
        return False

    candidate = normalize_title(candidate_title)
    required = normalize_title(required_title)
    if required in candidate or candidate in required:
        return True

    for terms in TITLE_SYNONYMS:
        if any(term in required for term in terms) and any(term in candidate for term in terms):
            return True
    return False


__all__ = [
    "SKILL_SYNONYMS",
    "TITLE_SYNONYMS",
    "normalize_skill",
    "normalize_title",
    "position_matches",
    "skill_matches",
]
