"""
Test suite to ensure bullet lines never start new entries.
This prevents education detail bullets like "● Applied Communications Major: Social Media/Marketing"
from being misclassified as experience entries.
"""

from fastapi.testclient import TestClient

from resume_structurer.main import app

client = TestClient(app)


def test_education_bullets_not_parsed_as_experiences():
    resume_text = """
SARAH CHEN
sarah.chen@email.com
(555) 123-4567
Seattle, WA

EDUCATION

GONZAGA UNIVERSITY
Spokane, Washington
2012 – 2016
Bachelor of Science in Communication Studies
● Applied Communications Major: Social Media/Marketing
● Focus in Cross Cultural Communications / Journalism Minor
● Student Journalist for Gonzaga Bulletin Newspaper

EXPERIENCE

NEODENT
Territory Manager
Portland, Oregon
January 2024 – Present
● Grew territory sales by 25%
""".strip()

    response = client.post(
        "/parse",
        files={"file": ("resume.txt", resume_text.encode(), "text/plain")}
    )

    assert response.status_code == 200
    structured = response.json()["structured"]

    experiences = structured["experiences"]
    assert len(experiences) == 1
    assert experiences[0]["company"] == "NEODENT"
    assert experiences[0]["title"] == "Territory Manager"
    assert experiences[0]["location"] == "Portland, Oregon"
    assert experiences[0]["isCurrent"] is True

    education = structured["education"]
    assert len(education) == 1
    details = " ".join(education[0]["description"]).lower()
    assert len(education[0]["description"]) == 3
    assert "applied communications" in details
    assert "social media" in details


def test_no_experiences_start_with_bullets():
    """Bullets are always attachments to an existing entry."""
    resume_text = """
JOHN DOE
john@email.com

EXPERIENCE

TECH CORP
Software Engineer
● Led team of 5 developers
● Shipped 3 major features

SALES CORP
Account Manager
● Managed $2M portfolio
""".strip()

    response = client.post(
        "/parse",
        files={"file": ("resume.txt", resume_text.encode(), "text/plain")}
    )

    assert response.status_code == 200
    experiences = response.json()["structured"]["experiences"]

    assert [e["company"] for e in experiences] == ["TECH CORP", "SALES CORP"]
    assert [len(e["description"]) for e in experiences] == [2, 1]
    for exp in experiences:
        assert not exp["company"].startswith("●")
        assert not exp["title"].startswith("Led")
