"""
Education parsing module for extracting education entries from resumes.

Deterministic, rule-based classification of header parts:
- GPA:        "GPA" followed by a number, anywhere in any part
- Dates:      date range, "Present"/"Expected" meaning no end date   (+15)
- Degree:     degree keyword; "<degree> in <field>" splits the two    (+15)
- Institution: university/college/institute/school keyword            (+10)
              or, without a keyword, the first unclaimed part
- Field:      the next unclaimed part that is not itself a degree
"""

import logging
import re
from typing import Dict, List, Tuple

from resume_structurer.core import confidence_calculator as cc
from resume_structurer.core.confidence_calculator import ConfidenceCalculator, Contribution
from resume_structurer.core.dates import EDUCATION_RANGE_RE, parse_date_range
from resume_structurer.core.experience_parser import split_header
from resume_structurer.core.keywords import DEFAULT_TABLES, KeywordTables
from resume_structurer.core.record_partition import partition_records
from resume_structurer.core.schemas import Education

logger = logging.getLogger(__name__)

GPA_RE = re.compile(r"gpa[:\s]*(\d+(?:\.\d+)?)(?:\s*/\s*\d+(?:\.\d+)?)?", re.IGNORECASE)
DEGREE_FIELD_RE = re.compile(r"(.+?)\s+in\s+(.+)", re.IGNORECASE)


def split_degree_and_field(text: str) -> Tuple[str, str]:
    """
    Split "<degree> in <field>".

    Examples:
        "Bachelor of Science in Computer Science" -> ("Bachelor of Science", "Computer Science")
        "MBA" -> ("MBA", "")
    """
    m = DEGREE_FIELD_RE.match(text)
    if m:
        return m.group(1).strip(), m.group(2).strip(" ,")
    return text.strip(), ""


def parse_education_header(
    header: str,
    tables: KeywordTables = DEFAULT_TABLES,
) -> Tuple[Dict, List[Contribution]]:
    fields: Dict = {
        "institution": "",
        "degree": "",
        "field": "",
        "start_date": "",
        "end_date": None,
        "gpa": None,
    }
    contributions: List[Contribution] = []

    for part in split_header(header, EDUCATION_RANGE_RE):
        gpa = GPA_RE.search(part)
        if gpa:
            if fields["gpa"] is None:
                fields["gpa"] = gpa.group(1)
            part = (part[:gpa.start()] + part[gpa.end():]).strip(" ,;-|()")
            if not part:
                continue

        rng = parse_date_range(part, EDUCATION_RANGE_RE)
        if rng:
            start, end, _open_ended = rng
            fields["start_date"] = start
            fields["end_date"] = end
            contributions.append(cc.DATE_RANGE)
            continue

        if not fields["degree"] and tables.degree_re.search(part):
            fields["degree"], field = split_degree_and_field(part)
            if field:
                fields["field"] = field
            contributions.append(cc.DEGREE)
            continue

        if not fields["institution"] and tables.institution_re.search(part):
            fields["institution"] = part
            contributions.append(cc.INSTITUTION)
            continue

        if not fields["institution"]:
            fields["institution"] = part
        elif not fields["field"] and not tables.degree_re.search(part):
            fields["field"] = part

    return fields, contributions


def parse_education(lines: List[str], tables: KeywordTables = DEFAULT_TABLES) -> List[Education]:
    entries: List[Education] = []
    for block in partition_records(lines):
        fields, contributions = parse_education_header(block.header_text, tables)
        if not (fields["institution"] or fields["degree"] or block.bullets):
            continue
        entry = Education(
            **fields,
            description=list(block.bullets),
            confidence=ConfidenceCalculator.fold(contributions),
            order=len(entries),
        )
        logger.debug(
            f"Education entry: institution='{entry.institution}', degree='{entry.degree}', "
            f"confidence={entry.confidence}"
        )
        entries.append(entry)
    return entries
