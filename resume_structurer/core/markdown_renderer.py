"""
Canonical markdown rendering of a ParsedResume.

Heading syntax matches what the segmenter and extractors read back:
"## <Section>" per section, "### a | b | c" per record, "- " bullets.
An experience whose title carries no job-title keyword is written in the
comma form ("### Acme, Owner"), the only form that reads back a title by
position.
"""

from typing import Dict, List, Optional, Sequence

from resume_structurer.core.dates import format_display_date
from resume_structurer.core.keywords import (
    CERTIFICATIONS,
    DEFAULT_TABLES,
    EDUCATION,
    EXPERIENCE,
    KeywordTables,
    PERSONAL_INFO,
    PROJECTS,
    SECTION_TITLES,
    SKILLS,
    SUMMARY,
    UNRECOGNIZED,
)
from resume_structurer.core.schemas import (
    Education,
    Experience,
    ParsedResume,
    PersonalInfo,
    Project,
    Skill,
)

SKILL_CATEGORY_ORDER = ("programming", "tools", "soft-skills", "language", "other")
SKILL_CATEGORY_LABELS: Dict[str, str] = {
    "programming": "Technical Skills",
    "tools": "Tools & Frameworks",
    "soft-skills": "Soft Skills",
    "language": "Languages",
    "other": "Other Skills",
}


def _row(parts: Sequence[Optional[str]]) -> str:
    return " | ".join(p for p in parts if p)


def _date_range(start: Optional[str], end: Optional[str], open_ended: bool) -> Optional[str]:
    if not start:
        return None
    if open_ended:
        return f"{format_display_date(start)} - Present"
    if end:
        return f"{format_display_date(start)} - {format_display_date(end)}"
    return format_display_date(start)


def _bullets(items: Sequence[str]) -> List[str]:
    return [f"- {item}" for item in items]


def _record(header: str, bullets: Sequence[str]) -> List[str]:
    lines = [f"### {header}"]
    if bullets:
        lines += [""] + _bullets(bullets)
    return lines


def render_personal_info(info: PersonalInfo) -> List[str]:
    lines: List[str] = []
    if info.name:
        lines.append(info.name)
    contact = _row([info.email, info.phone, info.location])
    if contact:
        lines.append(contact)
    links = _row([
        info.linked_in,
        info.github,
        f"Portfolio: {info.portfolio}" if info.portfolio else None,
    ])
    if links:
        lines.append(links)
    return lines


def render_experience(exp: Experience, tables: KeywordTables = DEFAULT_TABLES) -> List[str]:
    date_range = _date_range(exp.start_date, exp.end_date, exp.is_current)
    if exp.company and exp.title and not tables.job_title_re.search(exp.title):
        parts = [exp.company, exp.title, exp.location, date_range]
        header = ", ".join(p for p in parts if p)
    else:
        header = _row([exp.title, exp.company, exp.location, date_range])
    return _record(header, exp.description)


def render_education(edu: Education) -> List[str]:
    degree_field = f"{edu.degree} in {edu.field}" if edu.degree and edu.field else (edu.degree or edu.field)
    header = _row([
        edu.institution,
        degree_field,
        f"GPA: {edu.gpa}" if edu.gpa else None,
        _date_range(edu.start_date, edu.end_date, edu.end_date is None),
    ])
    return _record(header, edu.description)


def render_project(project: Project) -> List[str]:
    header = _row([
        project.name,
        project.url,
        _date_range(project.start_date, project.end_date, project.end_date is None),
    ])
    bullets = list(project.description)
    if project.technologies:
        bullets.insert(0, f"Technologies: {', '.join(project.technologies)}")
    return _record(header, bullets)


def render_skills(skills: Sequence[Skill]) -> List[str]:
    """Skills grouped under one "### <Category label>" per non-empty category."""
    lines: List[str] = []
    for category in SKILL_CATEGORY_ORDER:
        names = [s.name for s in skills if s.category == category]
        if not names:
            continue
        if lines:
            lines.append("")
        lines.append(f"### {SKILL_CATEGORY_LABELS[category]}")
        lines.append("")
        lines.extend(_bullets(names))
    return lines


def _section(title_key: str, body: List[str]) -> List[str]:
    return [f"## {SECTION_TITLES[title_key]}", ""] + body + [""]


def render_markdown(resume: ParsedResume, tables: KeywordTables = DEFAULT_TABLES) -> str:
    out: List[str] = []

    if resume.personal_info:
        out += _section(PERSONAL_INFO, render_personal_info(resume.personal_info))

    if resume.summary:
        out += _section(SUMMARY, [resume.summary])

    if resume.experiences:
        body: List[str] = []
        for exp in sorted(resume.experiences, key=lambda e: e.order):
            body += render_experience(exp, tables) + [""]
        out += _section(EXPERIENCE, body[:-1])

    if resume.education:
        body = []
        for edu in sorted(resume.education, key=lambda e: e.order):
            body += render_education(edu) + [""]
        out += _section(EDUCATION, body[:-1])

    if resume.skills:
        out += _section(SKILLS, render_skills(resume.skills))

    if resume.projects:
        body = []
        for project in sorted(resume.projects, key=lambda p: p.order):
            body += render_project(project) + [""]
        out += _section(PROJECTS, body[:-1])

    if resume.certifications:
        out += _section(CERTIFICATIONS, _bullets(resume.certifications))

    if resume.unrecognized:
        out += _section(UNRECOGNIZED, list(resume.unrecognized))

    return "\n".join(out).strip() + "\n"
