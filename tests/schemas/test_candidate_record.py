from __future__ import annotations

import pytest
from pydantic import ValidationError

from resumeintake.schemas import CandidateRecord, ConfidenceScores, FilterCriteria, SkillsMatchMode


def test_candidate_record_defaults():
    record = CandidateRecord(id="C-001")

    assert record.full_name is None
    assert record.experience == []
    assert record.skills == []
    assert record.education == []
    assert record.confidence is None
    assert record.flagged is False
    assert record.extraction_mode == "manual"
    assert record.current_position is None


def test_candidate_record_accepts_camel_case_wire_names():
    record = CandidateRecord.model_validate(
        {
            "id": "C-002",
            "fullName": "Asha Rao",
            "rawText": "github.com/asha",
            "sourceFile": "asha.pdf",
            "extractionMode": "ai",
            "experience": [{"title": "QA Lead", "company": "Globex", "startDate": "2021", "endDate": "Present"}],
            "education": [{"degree": "BSc", "institution": "IIT", "field": "CS"}],
            "skills": ["Selenium", "  ", "Java"],
            "confidence": {"overall": 0.9, "skills": 0.8},
            "linkedinHandle": "asha-rao",
        }
    )

    assert record.full_name == "Asha Rao"
    assert record.raw_text == "github.com/asha"
    assert record.current_position.title == "QA Lead"
    assert record.experience[0].start_date == "2021"
    assert record.education[0].field_of_study == "CS"
    assert record.skills == ["Selenium", "Java"]
    assert record.confidence.overall == pytest.approx(0.9)

    wire = record.to_wire()
    assert wire["fullName"] == "Asha Rao"
    assert wire["experience"][0]["endDate"] == "Present"
    assert wire["linkedinHandle"] == "asha-rao"


def test_candidate_record_tolerates_nulls_from_extractor():
    record = CandidateRecord.model_validate(
        {
            "id": "C-003",
            "skills": None,
            "experience": [{"title": None, "company": None, "startDate": 2019, "endDate": None}],
        }
    )

    assert record.skills == []
    assert record.experience[0].title == ""
    assert record.experience[0].start_date == "2019"


def test_confidence_scores_bounded():
    with pytest.raises(ValidationError):
        ConfidenceScores(overall=1.5)


def test_candidate_record_rejects_unknown_extraction_mode():
    with pytest.raises(ValidationError):
        CandidateRecord(id="C-004", extraction_mode="ocr")


@pytest.mark.parametrize(
    ("wire", "expected"),
    [("AND", SkillsMatchMode.ALL), ("or", SkillsMatchMode.ANY), ("ALL", SkillsMatchMode.ALL), ("any", SkillsMatchMode.ANY)],
)
def test_filter_criteria_match_mode_aliases(wire: str, expected: SkillsMatchMode):
    criteria = FilterCriteria.model_validate({"skillsMatchMode": wire})

    assert criteria.skills_match_mode is expected


def test_filter_criteria_cleans_inputs():
    criteria = FilterCriteria.model_validate(
        {
            "skills": [" React ", "", 42, "Go"],
            "position": "  Test Engineer ",
            "minExperience": "2.5",
            "maxExperience": True,
        }
    )

    assert criteria.skills == ["React", "Go"]
    assert criteria.position == "Test Engineer"
    assert criteria.min_experience == pytest.approx(2.5)
    assert criteria.max_experience is None
    assert criteria.has_skills is True
    assert criteria.has_experience_bounds is True


def test_filter_criteria_empty_payload_is_unconstrained():
    criteria = FilterCriteria.model_validate({})

    assert criteria.has_skills is False
    assert criteria.position is None
    assert criteria.has_experience_bounds is False
