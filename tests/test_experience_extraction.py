"""Tests for experience extraction from resumes."""

from fastapi.testclient import TestClient

from resume_structurer.core.experience_parser import (
    parse_experience_header,
    parse_experiences,
    split_header,
)
from resume_structurer.main import app

client = TestClient(app)


def test_pipe_header_fields_classified_by_content():
    exps = parse_experiences([
        "Software Engineer | Acme Corp | San Francisco, CA | Jan 2021 - Present",
        "- Built the billing platform",
    ])

    assert len(exps) == 1
    exp = exps[0]
    assert exp.title == "Software Engineer"
    assert exp.company == "Acme Corp"
    assert exp.location == "San Francisco, CA"
    assert exp.start_date == "2021-01-01"
    assert exp.end_date is None
    assert exp.is_current is True
    assert exp.description == ["Built the billing platform"]
    # baseline 50 + date 15 + title 15 + company 10
    assert exp.confidence == 90


def test_company_first_header():
    fields, _ = parse_experience_header("Globex Inc | Data Analyst | 2018 - 2020")
    assert fields["company"] == "Globex Inc"
    assert fields["title"] == "Data Analyst"
    assert fields["start_date"] == "2018-01-01"
    assert fields["end_date"] == "2020-01-01"
    assert fields["is_current"] is False


def test_only_first_title_match_is_the_title():
    fields, _ = parse_experience_header("Senior Engineer | Lead Systems Inc | 2019 - 2021")
    assert fields["title"] == "Senior Engineer"
    assert fields["company"] == "Lead Systems Inc"


def test_comma_header_with_embedded_dates():
    assert split_header("Data Analyst, Globex Inc, 2018 - 2020") == [
        "Data Analyst", "Globex Inc", "2018 - 2020",
    ]
    fields, _ = parse_experience_header("Data Analyst, Globex Inc, 2018 - 2020")
    assert fields["title"] == "Data Analyst"
    assert fields["company"] == "Globex Inc"


def test_comma_fallback_without_date_or_title():
    fields, contributions = parse_experience_header("Initech, Remote")
    assert fields["company"] == "Initech"
    assert fields["title"] == "Remote"
    assert fields["start_date"] == ""
    assert [rule for rule, _ in contributions] == ["company"]


def test_two_digit_years_fall_through_to_location():
    fields, contributions = parse_experience_header("Software Engineer | Acme Corp | Jan 21 - Mar 22")
    assert fields["start_date"] == ""
    assert fields["location"] == "Jan 21 - Mar 22"
    assert "date_range" not in [rule for rule, _ in contributions]


def test_stacked_header_lines():
    """Company, title and dates on their own lines above the bullets."""
    exps = parse_experiences([
        "NEODENT",
        "Territory Manager",
        "January 2024 – Present",
        "• Grew territory sales by 25%",
        "• Opened 12 new accounts",
    ])

    assert len(exps) == 1
    exp = exps[0]
    assert exp.company == "NEODENT"
    assert exp.title == "Territory Manager"
    assert exp.start_date == "2024-01-01"
    assert exp.is_current is True
    assert len(exp.description) == 2


def test_plain_line_after_bullets_opens_next_record():
    exps = parse_experiences([
        "TECH CORP",
        "Software Engineer",
        "● Led team of 5 developers",
        "● Shipped 3 major features",
        "SALES CORP",
        "Account Manager",
        "● Managed $2M portfolio",
    ])

    assert [e.company for e in exps] == ["TECH CORP", "SALES CORP"]
    assert [e.title for e in exps] == ["Software Engineer", "Account Manager"]
    assert [e.order for e in exps] == [0, 1]


def test_structured_h3_records_fold_wrapped_lines():
    exps = parse_experiences([
        "### Software Engineer | Acme Corp | 2019 - 2021",
        "- Built the billing platform that processed",
        "two million invoices a month",
        "### Data Analyst | Globex Inc | 2017 - 2019",
        "- Wrote reports",
    ])

    assert len(exps) == 2
    assert exps[0].description == ["Built the billing platform that processed two million invoices a month"]
    assert exps[1].company == "Globex Inc"


def test_orphan_bullets_are_kept_as_low_confidence_record():
    exps = parse_experiences(["- Migrated the monolith to services"])
    assert len(exps) == 1
    assert exps[0].company == ""
    assert exps[0].confidence == 50
    assert exps[0].description == ["Migrated the monolith to services"]


def test_experience_extraction_via_api():
    resume_text = """Jane Doe
jane@example.com
(555) 123-4567

EXPERIENCE

Senior Software Engineer | Acme Corp | Jan 2021 - Present
• Led team of 5 developers
• Migrated billing to event sourcing
"""
    r = client.post("/parse", files={"file": ("resume.txt", resume_text.encode(), "text/plain")})
    assert r.status_code == 200
    exps = r.json()["structured"]["experiences"]

    assert len(exps) == 1
    assert exps[0]["title"] == "Senior Software Engineer"
    assert exps[0]["company"] == "Acme Corp"
    assert exps[0]["startDate"] == "2021-01-01"
    assert exps[0]["isCurrent"] is True
    assert exps[0]["endDate"] is None


def test_glyphless_lines_under_pipe_header_are_description():
    """DOCX and TXT lists lose their glyphs; those lines must not leak into the header."""
    exps = parse_experiences([
        "Software Engineer | Acme Corp | San Francisco, CA | Jan 2021 - Present",
        "Built internal tooling",
        "Reduced costs by 20%",
    ])

    assert len(exps) == 1
    assert exps[0].location == "San Francisco, CA"
    assert exps[0].description == ["Built internal tooling", "Reduced costs by 20%"]


def test_second_date_range_opens_next_stacked_record():
    exps = parse_experiences([
        "Acme Corp",
        "Software Engineer",
        "2019 - 2021",
        "Globex Inc",
        "Data Analyst",
        "2017 - 2019",
    ])

    assert [(e.company, e.title) for e in exps] == [
        ("Acme Corp", "Software Engineer"),
        ("Globex Inc", "Data Analyst"),
    ]
    assert [e.start_date for e in exps] == ["2019-01-01", "2017-01-01"]
    assert [e.location for e in exps] == [None, None]
    assert [e.order for e in exps] == [0, 1]


def test_description_then_stacked_record_without_glyphs():
    exps = parse_experiences([
        "Software Engineer | Acme Corp | 2019 - 2021",
        "Built internal tooling",
        "Globex Inc",
        "Data Analyst",
        "2017 - 2019",
    ])

    assert [e.company for e in exps] == ["Acme Corp", "Globex Inc"]
    assert exps[0].description == ["Built internal tooling"]
    assert exps[1].title == "Data Analyst"
    assert exps[1].end_date == "2019-01-01"


def test_comma_fallback_with_date_range():
    fields, _ = parse_experience_header("Acme, Owner, Austin, Jan 2019 - Present")
    assert fields["company"] == "Acme"
    assert fields["title"] == "Owner"
    assert fields["location"] == "Austin"
    assert fields["is_current"] is True
