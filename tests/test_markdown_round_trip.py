"""
Rendering a parsed resume and parsing the rendering again must give the same
records, so edits made on the markdown view do not drift.
"""

from resume_structurer.core.markdown_renderer import render_markdown, render_skills
from resume_structurer.core.resume_assembler import assemble_resume
from resume_structurer.core.schemas import Experience, ParsedResume, Skill
from resume_structurer.core.skills_parser import user_skill


CANONICAL = """## Personal Information

Jane Doe
jane@example.com | +1 555-123-4567 | San Francisco, CA
https://linkedin.com/in/janedoe | https://github.com/janedoe

## Summary

Backend engineer focused on data platforms.

## Experience

### Senior Software Engineer | Acme Corp | San Francisco, CA | Jan 2021 - Present

- Built the billing platform
- Led a team of 4

### Software Engineer | Globex Inc | Mar 2018 - Dec 2020

- Shipped the search API

## Education

### Stanford University | Bachelor of Science in Computer Science | GPA: 3.8 | Sep 2014 - Jun 2018

## Skills

### Technical Skills

- Python
- AWS

### Soft Skills

- Leadership

## Projects

### Resume Parser | https://github.com/janedoe/rp | Jan 2022 - Present

- Technologies: FastAPI, pdfplumber
- Parses resumes into structured records

## Certifications

- AWS Certified Developer
"""


def _records(resume: ParsedResume) -> dict:
    return resume.model_dump(exclude={"raw_text": True, "parsed_at": True, "skills": {"__all__": {"frequency"}}})


def test_canonical_markdown_is_a_fixed_point():
    resume = assemble_resume(CANONICAL)
    assert render_markdown(resume) == CANONICAL


def test_parse_render_parse_is_stable():
    first = assemble_resume(CANONICAL)
    second = assemble_resume(render_markdown(first))
    assert _records(second) == _records(first)


def test_canonical_fields():
    resume = assemble_resume(CANONICAL)

    info = resume.personal_info
    assert info.name == "Jane Doe"
    assert info.phone == "+1 555-123-4567"
    assert info.location == "San Francisco, CA"
    assert info.portfolio is None

    senior, engineer = resume.experiences
    assert senior.title == "Senior Software Engineer"
    assert senior.location == "San Francisco, CA"
    assert senior.is_current is True
    assert engineer.start_date == "2018-03-01"
    assert engineer.end_date == "2020-12-01"

    edu = resume.education[0]
    assert (edu.degree, edu.field, edu.gpa) == ("Bachelor of Science", "Computer Science", "3.8")

    assert {s.name: s.category for s in resume.skills} == {
        "Python": "programming",
        "AWS": "programming",
        "Leadership": "soft-skills",
    }
    assert resume.projects[0].technologies == ["FastAPI", "pdfplumber"]
    assert resume.certifications == ["AWS Certified Developer"]
    # 100 + 90 + 90 + 90 + 70 * 3 + 85 over 8 records
    assert resume.overall_confidence == 83


def test_unrendered_sections_are_omitted():
    resume = ParsedResume(raw_text="", overall_confidence=30, needs_review=True)
    assert render_markdown(resume) == "\n"


def test_experience_without_end_renders_start_only():
    resume = ParsedResume(
        raw_text="",
        experiences=[Experience(company="Acme Corp", title="Engineer", start_date="2019-05-01")],
        overall_confidence=50,
        needs_review=True,
    )
    assert "### Engineer | Acme Corp | May 2019\n" in render_markdown(resume)


def test_skills_grouped_in_fixed_category_order():
    lines = render_skills([
        Skill(name="Leadership", category="soft-skills"),
        user_skill("Docker", "tools"),
        Skill(name="Go", category="programming"),
    ])
    assert lines == [
        "### Technical Skills", "", "- Go", "",
        "### Tools & Frameworks", "", "- Docker", "",
        "### Soft Skills", "", "- Leadership",
    ]


def test_title_without_keyword_survives_round_trip():
    first = assemble_resume("Experience\nAcme, Owner\n- Ran shop")
    assert [(e.title, e.company) for e in first.experiences] == [("Owner", "Acme")]

    markdown = render_markdown(first)
    assert "### Acme, Owner\n" in markdown

    second = assemble_resume(markdown)
    assert [(e.title, e.company) for e in second.experiences] == [("Owner", "Acme")]
    assert _records(second) == _records(first)


def test_title_without_keyword_keeps_location_and_dates():
    resume = ParsedResume(
        raw_text="",
        experiences=[Experience(
            company="Acme", title="Owner", location="Austin",
            start_date="2019-01-01", is_current=True,
        )],
        overall_confidence=50,
        needs_review=True,
    )
    markdown = render_markdown(resume)
    assert "### Acme, Owner, Austin, Jan 2019 - Present\n" in markdown

    exp = assemble_resume(markdown).experiences[0]
    assert (exp.company, exp.title, exp.location) == ("Acme", "Owner", "Austin")
    assert (exp.start_date, exp.is_current) == ("2019-01-01", True)


def test_unrecognized_content_is_rendered_last():
    first = assemble_resume("Skills\nPython\n## Volunteering\nFood bank shifts")
    assert first.unrecognized == ["Volunteering", "Food bank shifts"]

    markdown = render_markdown(first)
    assert markdown.endswith("## Unrecognized Content\n\nVolunteering\nFood bank shifts\n")

    second = assemble_resume(markdown)
    assert second.unrecognized == first.unrecognized
    assert _records(second) == _records(first)
