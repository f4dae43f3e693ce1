from __future__ import annotations

import pytest

from resumeintake.core.matching import (
    SKILL_SYNONYMS,
    normalize_skill,
    position_matches,
    skill_matches,
)


@pytest.mark.parametrize(
    ("candidate", "required"),
    [
        ("Node.js", "nodejs"),
        ("JS", "JavaScript"),
        ("ECMAScript", "js"),
        ("Core Java", "java"),
        ("ReactJS", "React"),
        ("QA", "Testing"),
        ("python", "Py"),
        ("Spring Boot", "spring"),
    ],
)
def test_skill_matches_positive(candidate: str, required: str):
    assert skill_matches(candidate, required) is True


@pytest.mark.parametrize(
    ("candidate", "required"),
    [
        ("Python", "Java"),
        ("TS", "JavaScript"),
        ("Angular", "Vue"),
    ],
)
def test_skill_matches_negative(candidate: str, required: str):
    assert skill_matches(candidate, required) is False


@pytest.mark.parametrize(("candidate", "required"), [("", "Java"), ("++", "Go"), ("Go", "#")])
def test_skill_that_normalises_to_empty_is_a_substring_of_anything(candidate: str, required: str):
    assert skill_matches(candidate, required) is True


def test_skill_synonym_groups_are_normalised_forms():
    for group in SKILL_SYNONYMS:
        assert all(term == normalize_skill(term) for term in group)


def test_position_matches_via_synonym_group():
    assert position_matches("Senior Software Engineer", "Developer") is True
    assert position_matches("QA Analyst", "Tester") is True
    assert position_matches("Full Stack Web Developer", "fullstack engineer") is True


def test_position_matches_substring():
    assert position_matches("Frontend Developer", "frontend") is True
    assert position_matches("Manager", "Engineering Manager") is True


@pytest.mark.parametrize(
    ("candidate", "required"),
    [
        ("", "Developer"),
        ("Developer", ""),
        (None, "Developer"),
        ("Product Manager", "Developer"),
        ("Accountant", "Tester"),
    ],
)
def test_position_matches_negative(candidate, required):
    assert position_matches(candidate, required) is False


def test_punctuation_only_title_matches_by_substring():
    assert position_matches("---", "Developer") is True
    assert position_matches("Accountant", "(!)") is True
