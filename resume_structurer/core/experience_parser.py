"""
Work experience extraction.

A header row is split on "|" and every part is classified independently of
its position, in priority order:
  1. date range        -> start/end/is_current   (+15)
  2. job-title keyword -> title, first match only (+15)
  3. first unclaimed   -> company                 (+10)
  4. later unclaimed   -> location
Headers without "|" that carry a date range are split on commas around it
("Engineer, Acme, 2019 - 2021"). When no title matched a "|"-less header,
the comma fallback applies to its non-date segments: first segment company,
second title, the rest location ("Acme, Owner, Austin, 2019 - 2021").
"""

import logging
import re
from typing import Dict, List, Tuple

from resume_structurer.core import confidence_calculator as cc
from resume_structurer.core.confidence_calculator import ConfidenceCalculator, Contribution
from resume_structurer.core.dates import EXPERIENCE_RANGE_RE, parse_date_range
from resume_structurer.core.keywords import DEFAULT_TABLES, KeywordTables
from resume_structurer.core.record_partition import partition_records
from resume_structurer.core.schemas import Experience

logger = logging.getLogger(__name__)

HEADER_TRIM = " ,;-–—|()"


def split_header(header: str, range_re: re.Pattern = EXPERIENCE_RANGE_RE) -> List[str]:
    """
    Split a header row into parts.

    "|" rows split on "|". A "|"-less row that embeds a date range is split
    into the range itself plus the comma-separated residue around it.
    """
    if "|" in header:
        return [p.strip() for p in header.split("|") if p.strip()]

    m = range_re.search(header)
    if m:
        residue = (header[:m.start()] + "," + header[m.end():]).strip(HEADER_TRIM)
        parts = [s.strip(HEADER_TRIM) for s in residue.split(",")]
        return [p for p in parts if p] + [m.group(0)]
    return [header.strip()] if header.strip() else []


def parse_experience_header(
    header: str,
    tables: KeywordTables = DEFAULT_TABLES,
) -> Tuple[Dict, List[Contribution]]:
    """Classify header parts into experience fields; returns (fields, contributions)."""
    fields: Dict = {
        "company": "",
        "title": "",
        "location": None,
        "start_date": "",
        "end_date": None,
        "is_current": False,
    }
    contributions: List[Contribution] = []
    parts = split_header(header)
    locations: List[str] = []

    for part in parts:
        rng = parse_date_range(part, EXPERIENCE_RANGE_RE)
        if rng:
            start, end, open_ended = rng
            fields["start_date"] = start
            fields["end_date"] = end
            fields["is_current"] = open_ended
            contributions.append(cc.DATE_RANGE)
            continue

        if not fields["title"] and tables.job_title_re.search(part):
            fields["title"] = part
            contributions.append(cc.JOB_TITLE)
            continue

        if not fields["company"]:
            fields["company"] = part
            contributions.append(cc.COMPANY)
        else:
            locations.append(part)

    if locations:
        fields["location"] = ", ".join(locations)

    fired = ConfidenceCalculator.reasons(contributions)
    if "|" not in header and "job_title" not in fired:
        if "date_range" in fired:
            segments = [fields["company"]] + locations if fields["company"] else []
        else:
            segments = [p.strip() for p in header.split(",") if p.strip()]
        if len(segments) >= 2:
            fields["company"] = segments[0]
            fields["title"] = segments[1]
            fields["location"] = ", ".join(segments[2:]) or None
        elif segments:
            fields["company"] = segments[0]

    return fields, contributions


def parse_experiences(lines: List[str], tables: KeywordTables = DEFAULT_TABLES) -> List[Experience]:
    experiences: List[Experience] = []
    for block in partition_records(lines):
        fields, contributions = parse_experience_header(block.header_text, tables)
        if not (fields["company"] or fields["title"] or block.bullets):
            continue
        exp = Experience(
            **fields,
            description=list(block.bullets),
            confidence=ConfidenceCalculator.fold(contributions),
            order=len(experiences),
        )
        logger.debug(
            f"Experience entry: company='{exp.company}', title='{exp.title}', "
            f"confidence={exp.confidence} ({ConfidenceCalculator.reasons(contributions)})"
        )
        experiences.append(exp)
    return experiences
