import logging
import re
from typing import Dict, List, Optional, Tuple

from resume_structurer.core import confidence_calculator as cc
from resume_structurer.core.confidence_calculator import ConfidenceCalculator, Contribution
from resume_structurer.core.dates import PROJECT_RANGE_RE, parse_date_range
from resume_structurer.core.experience_parser import split_header
from resume_structurer.core.record_partition import partition_records
from resume_structurer.core.schemas import Project

logger = logging.getLogger(__name__)

URL_RE = re.compile(r"https?://[^\s|]+", re.IGNORECASE)
TECH_LINE_RE = re.compile(r"^(?:tech|stack|built with|technologies)", re.IGNORECASE)
TECH_VALUE_RE = re.compile(r"[:：]\s*(.+)")


def parse_technologies(bullet: str) -> Optional[List[str]]:
    """
    "Tech Stack: React, FastAPI" -> ["React", "FastAPI"].

    Returns None when the bullet is not a technology line.
    """
    if not TECH_LINE_RE.match(bullet):
        return None
    m = TECH_VALUE_RE.search(bullet)
    if not m:
        return None
    return [t.strip() for t in re.split(r"[,，]", m.group(1)) if t.strip()]


def parse_project_header(header: str) -> Tuple[Dict, List[str], List[Contribution]]:
    """Returns (fields, extra_parts, contributions). Extra parts are kept as description."""
    fields: Dict = {"name": "", "url": None, "start_date": None, "end_date": None}
    extra: List[str] = []
    contributions: List[Contribution] = []

    for part in split_header(header, PROJECT_RANGE_RE):
        rng = parse_date_range(part, PROJECT_RANGE_RE)
        if rng:
            start, end, _open_ended = rng
            fields["start_date"] = start
            fields["end_date"] = end
            contributions.append(cc.DATE_RANGE)
            continue

        url = URL_RE.search(part)
        if url:
            fields["url"] = url.group(0)
            continue

        if not fields["name"]:
            fields["name"] = part
            contributions.append(cc.PROJECT_NAME)
        else:
            extra.append(part)

    return fields, extra, contributions


def parse_projects(lines: List[str]) -> List[Project]:
    projects: List[Project] = []
    for block in partition_records(lines):
        fields, extra, contributions = parse_project_header(block.header_text)

        description: List[str] = list(extra)
        technologies: List[str] = []
        for bullet in block.bullets:
            techs = parse_technologies(bullet)
            if techs is not None:
                technologies.extend(techs)
            else:
                description.append(bullet)

        if not (fields["name"] or description or technologies):
            continue
        project = Project(
            **fields,
            description=description,
            technologies=technologies,
            confidence=ConfidenceCalculator.fold(contributions),
            order=len(projects),
        )
        logger.debug(f"Project entry: name='{project.name}', confidence={project.confidence}")
        projects.append(project)
    return projects
