from __future__ import annotations

import pendulum
import pytest

from resumeintake.core.experience import (
    ExperienceDuration,
    calculate_total_experience,
    format_duration,
    parse_date,
    parse_experience_to_years,
    resolve_experience,
)
from resumeintake.schemas import CandidateRecord, ExperienceEntry

NOW = pendulum.datetime(2025, 1, 15)


def build_candidate(
    experiences: list[dict] | None = None,
    *,
    summary: str | None = None,
    raw_text: str | None = None,
) -> CandidateRecord:
    return CandidateRecord(
        id="C-100",
        summary=summary,
        raw_text=raw_text,
        experience=[ExperienceEntry(**exp) for exp in experiences or []],
    )


@pytest.mark.parametrize("text", ["June 2024", "Jun 2024", "jun. 2024", "06/2024", "2024-06", "06-2024"])
def test_parse_date_formats_agree(text: str):
    parsed = parse_date(text)

    assert parsed is not None
    assert (parsed.year, parsed.month) == (2024, 6)


def test_parse_date_bare_year_defaults_to_january():
    parsed = parse_date("2019")

    assert (parsed.year, parsed.month) == (2019, 1)


@pytest.mark.parametrize("text", ["Present", "ongoing", "till date", "Till Now", "current"])
def test_parse_date_present_keywords_resolve_to_now(text: str):
    before = pendulum.now()
    parsed = parse_date(text)
    after = pendulum.now()

    assert parsed is not None
    assert before.subtract(seconds=1) <= parsed <= after.add(seconds=1)


def test_parse_date_present_uses_reference_now():
    assert parse_date("Present", now=NOW) == NOW


@pytest.mark.parametrize("text", ["99/9999", "banana", "", None, "13/2020", "1850", "2024-13"])
def test_parse_date_rejects_unrecognised(text):
    assert parse_date(text) is None


def test_parse_date_takes_end_of_embedded_range():
    parsed = parse_date("Jan 2019 – Mar 2021")

    assert (parsed.year, parsed.month) == (2021, 3)


def test_parse_date_strips_prefixes_and_whitespace():
    parsed = parse_date("  Since   September 2018 ")

    assert (parsed.year, parsed.month) == (2018, 9)
    assert parse_date("from 03/2017").month == 3


def test_stated_experience_wins_over_job_dates():
    candidate = build_candidate(
        [{"title": "Dev", "company": "A", "start_date": "2010", "end_date": "2020"}],
        summary="Engineer with 4.5 years of experience in fintech.",
    )

    assert calculate_total_experience(candidate, now=NOW) == "4 years 6 months"


def test_stated_experience_rounds_half_up():
    candidate = build_candidate(raw_text="Approximately 4.3 years of professional experience")

    # 0.3 * 12 = 3.6 months
    assert calculate_total_experience(candidate, now=NOW) == "4 years 4 months"


def test_stated_experience_professional_work_phrase():
    candidate = build_candidate(summary="I bring 1 year of professional work experience.")

    assert calculate_total_experience(candidate) == "1 year"


@pytest.mark.parametrize("summary", ["0 years of experience", "150 years of experience"])
def test_implausible_stated_experience_falls_back_to_dates(summary: str):
    candidate = build_candidate(
        [{"title": "Dev", "company": "A", "start_date": "Jan 2020", "end_date": "Jan 2022"}],
        summary=summary,
    )

    assert calculate_total_experience(candidate, now=NOW) == "2 years"


def test_no_experience_is_fresher():
    candidate = build_candidate()

    assert calculate_total_experience(candidate) == "Fresher"
    assert parse_experience_to_years("Fresher") == 0


def test_unparseable_dates_are_fresher():
    candidate = build_candidate(
        [{"title": "Intern", "company": "A", "start_date": "summer", "end_date": "autumn"}]
    )

    assert calculate_total_experience(candidate, now=NOW) == "Fresher"


def test_job_dates_summed_with_present_end():
    candidate = build_candidate(
        [
            {"title": "Lead", "company": "A", "start_date": "March 2023", "end_date": "Present"},
            {"title": "Dev", "company": "B", "start_date": "01/2020", "end_date": "02/2023"},
            {"title": "Dev", "company": "C", "start_date": "2019", "end_date": None},
        ]
    )

    # 22 months + 37 months; the open-ended third job is skipped
    assert calculate_total_experience(candidate, now=NOW) == "4 years 11 months"


def test_overlapping_jobs_are_counted_twice():
    candidate = build_candidate(
        [
            {"title": "Dev", "company": "A", "start_date": "2020-01", "end_date": "2021-01"},
            {"title": "Dev", "company": "B", "start_date": "2020-01", "end_date": "2021-01"},
        ]
    )

    assert calculate_total_experience(candidate, now=NOW) == "2 years"


def test_negative_spans_are_ignored():
    candidate = build_candidate(
        [
            {"title": "Dev", "company": "A", "start_date": "2022-01", "end_date": "2021-01"},
            {"title": "Dev", "company": "B", "start_date": "2021-01", "end_date": "2021-02"},
        ]
    )

    assert calculate_total_experience(candidate, now=NOW) == "1 month"


def test_same_month_job_is_less_than_a_month():
    candidate = build_candidate(
        [{"title": "Dev", "company": "A", "start_date": "May 2021", "end_date": "May 2021"}]
    )

    assert calculate_total_experience(candidate, now=NOW) == "< 1 month"


def test_accepts_wire_dict():
    candidate = {
        "id": "C-1",
        "experience": [{"title": "QA", "company": "X", "startDate": "2021-01", "endDate": "2023-04"}],
    }

    assert calculate_total_experience(candidate, now=NOW) == "2 years 3 months"


@pytest.mark.parametrize(
    ("years", "months", "expected"),
    [
        (0, 0, "< 1 month"),
        (0, 1, "1 month"),
        (0, 7, "7 months"),
        (1, 0, "1 year"),
        (3, 0, "3 years"),
        (1, 1, "1 year 1 month"),
        (2, 5, "2 years 5 months"),
    ],
)
def test_format_duration_pluralisation(years: int, months: int, expected: str):
    assert format_duration(years, months) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("3 years 6 months", 3.5),
        ("1 year", 1.0),
        ("9 months", 0.75),
        ("N/A", 0.0),
        ("", 0.0),
        (None, 0.0),
        ("< 1 month", 0.0),
    ],
)
def test_parse_experience_to_years(text, expected: float):
    assert parse_experience_to_years(text) == pytest.approx(expected)


def test_whole_years_round_trip():
    for years in range(1, 31):
        assert parse_experience_to_years(format_duration(years, 0)) == years


def test_resolve_experience_reports_source():
    stated = resolve_experience(build_candidate(summary="around 2 years of experience"))
    dated = resolve_experience(
        build_candidate([{"title": "Dev", "company": "A", "start_date": "2020", "end_date": "2021"}]),
        now=NOW,
    )

    assert stated == ExperienceDuration(years=2, months=0, source="stated")
    assert dated.source == "dated"
    assert dated.total_years == pytest.approx(1.0)
    assert resolve_experience(build_candidate()) is None
