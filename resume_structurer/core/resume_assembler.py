"""
Resume assembly: segmenter + field extractors -> ParsedResume.

The extractors have no data dependency on each other, so they can run on a
thread pool (Settings.parallel_extractors). Sequential and parallel runs
produce identical records; results are collected by key, not by completion
order.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Dict, List, Optional

from resume_structurer.core.config import Settings, get_settings
from resume_structurer.core.confidence_calculator import ConfidenceCalculator
from resume_structurer.core.education_parser import parse_education
from resume_structurer.core.experience_parser import parse_experiences
from resume_structurer.core.keywords import (
    CERTIFICATIONS,
    DEFAULT_TABLES,
    EDUCATION,
    EXPERIENCE,
    KeywordTables,
    PERSONAL_INFO,
    PROJECTS,
    SKILLS,
    SUMMARY,
    UNRECOGNIZED,
)
from resume_structurer.core.personal_info_parser import parse_personal_info
from resume_structurer.core.project_parser import parse_projects
from resume_structurer.core.record_partition import is_sub_heading, strip_bullet
from resume_structurer.core.schemas import ParsedResume
from resume_structurer.core.segmenter import segment_sections
from resume_structurer.core.skills_parser import count_mentions, parse_skills

logger = logging.getLogger(__name__)

MISSING_SECTION_WARNINGS = (
    ("personal_info", "Could not parse personal information"),
    ("experiences", "No work experience found"),
    ("education", "No education found"),
    ("skills", "No skills found"),
)


def _run_extractors(
    jobs: Dict[str, Callable[[], Any]],
    parallel: bool,
    max_workers: int,
) -> Dict[str, Any]:
    if not parallel:
        return {key: job() for key, job in jobs.items()}

    results: Dict[str, Any] = {}
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {executor.submit(job): key for key, job in jobs.items()}
        for future in as_completed(futures):
            results[futures[future]] = future.result()
    logger.debug(f"Extractor fan-out finished: {sorted(results)}")
    return results


def _plain_lines(lines: List[str]) -> List[str]:
    out: List[str] = []
    for line in lines:
        if is_sub_heading(line):
            continue
        bullet = strip_bullet(line)
        text = (bullet if bullet is not None else line).strip()
        if text:
            out.append(text)
    return out


def _summary(lines: List[str]) -> Optional[str]:
    text = " ".join(_plain_lines(lines))
    return text or None


def _renumber(records: List[Any]) -> List[Any]:
    return [r.model_copy(update={"order": i}) for i, r in enumerate(records)]


def assemble_resume(
    text: str,
    *,
    tables: KeywordTables = DEFAULT_TABLES,
    settings: Optional[Settings] = None,
) -> ParsedResume:
    """
    Structure a linearized or markdown resume.

    Never raises for unparseable content: sparse input yields a low-confidence
    result with needs_review set and one warning per missing core section.
    """
    settings = settings or get_settings()
    doc = segment_sections(text, tables)

    jobs: Dict[str, Callable[[], Any]] = {
        "personal_info": lambda: parse_personal_info(doc.lines(PERSONAL_INFO)),
        "experiences": lambda: parse_experiences(doc.lines(EXPERIENCE), tables),
        "education": lambda: parse_education(doc.lines(EDUCATION), tables),
        "projects": lambda: parse_projects(doc.lines(PROJECTS)),
        "skills": lambda: parse_skills(doc.lines(SKILLS), tables),
    }
    results = _run_extractors(jobs, settings.parallel_extractors, settings.max_workers)

    personal_info = results["personal_info"]
    experiences = _renumber(results["experiences"])
    education = _renumber(results["education"])
    projects = _renumber(results["projects"])
    skills = [
        s.model_copy(update={"frequency": count_mentions(s.name, text)})
        for s in results["skills"]
    ]

    scores = ConfidenceCalculator.record_scores(
        personal_info.confidence if personal_info else None,
        experiences,
        education,
        skills,
        projects,
    )
    overall = ConfidenceCalculator.overall(scores, settings.empty_resume_confidence)
    needs_review = ConfidenceCalculator.needs_review(overall, settings.review_threshold)

    extracted = {
        "personal_info": personal_info,
        "experiences": experiences,
        "education": education,
        "skills": skills,
    }
    warnings = [message for key, message in MISSING_SECTION_WARNINGS if not extracted[key]]
    warnings.extend(doc.warnings)

    if needs_review:
        logger.info(f"Resume flagged for review: overall confidence {overall}, {len(warnings)} warning(s)")

    return ParsedResume(
        raw_text=text,
        personal_info=personal_info,
        summary=_summary(doc.lines(SUMMARY)),
        experiences=experiences,
        education=education,
        skills=skills,
        projects=projects,
        certifications=_plain_lines(doc.lines(CERTIFICATIONS)),
        unrecognized=list(doc.lines(UNRECOGNIZED)),
        overall_confidence=overall,
        needs_review=needs_review,
        warnings=warnings,
        errors=[],
    )
