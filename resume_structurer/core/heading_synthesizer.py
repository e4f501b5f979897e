"""
Markdown heading synthesis for reconstructed PDF text.

Runs the segmenter over the linearized text and writes each section back out
as markdown so that the structured parse (and a human editor) sees explicit
"##" / "###" headings and "- " bullets instead of [BULLET] tags:

- Experience: job header rows become "### <row>"; the detail text below each
  header is split on [BULLET] into "- " bullets.
- Skills: regrouped by classified category under "### <Category>" headings.
- Everything else: [BULLET] lines become "- " bullets; a following line that
  starts in lowercase is folded into the bullet (wrapped line).
- Unrecognized lines are kept under "## Unrecognized Content" at the end.
"""

import logging
import re
from typing import List, Optional, Tuple

from resume_structurer.core.keywords import (
    DEFAULT_TABLES,
    EXPERIENCE,
    KeywordTables,
    PERSONAL_INFO,
    SECTION_TITLES,
    SKILLS,
    UNRECOGNIZED,
)
from resume_structurer.core.layout_reconstructor import BULLET_TAG
from resume_structurer.core.markdown_renderer import render_skills
from resume_structurer.core.record_partition import strip_bullet
from resume_structurer.core.segmenter import segment_sections
from resume_structurer.core.skills_parser import parse_skills

logger = logging.getLogger(__name__)

BULLET_TOKEN = BULLET_TAG.strip()
LEADING_GLYPHS_RE = re.compile(r"^\s*[-•◦▪■▸▹◾●○►*]+\s*")
HEADER_DATE_HINT_RE = re.compile(
    r"\d{4}|january|february|march|april|may|june|july|august|september|october"
    r"|november|december|jan|feb|mar|apr|jun|jul|aug|sep|oct|nov|dec|–|-|\bto\b|through",
    re.IGNORECASE,
)
COMPANY_HINT_RE = re.compile(r"inc|ltd|corp|llc|gmbh|\bag\b|co\.|company|startup", re.IGNORECASE)
CAPITALIZED_WORD_RE = re.compile(r"\b[A-Z][a-zA-Z]*\b")

MIN_HEADER_CHARS = 15
MAX_HEADER_CHARS = 200


def is_experience_header_line(line: str, tables: KeywordTables = DEFAULT_TABLES) -> bool:
    """
    A job header row must contain "|" and, across its parts, a date-like part,
    a company-like part (2+ capitalized words or a company suffix) and a job
    title keyword.
    """
    t = line.strip()
    if t.startswith(BULLET_TOKEN) or strip_bullet(t) is not None:
        return False
    if not (MIN_HEADER_CHARS <= len(t) <= MAX_HEADER_CHARS) or "|" not in t:
        return False

    parts = [p.strip() for p in t.split("|")]
    if len(parts) < 2:
        return False

    has_date = any(HEADER_DATE_HINT_RE.search(p) for p in parts)
    has_company = any(
        len(CAPITALIZED_WORD_RE.findall(p)) >= 2 or COMPANY_HINT_RE.search(p)
        for p in parts
    )
    has_title = any(tables.job_title_re.search(p) for p in parts)
    return has_date and has_company and has_title


def _clean_bullet(text: str) -> str:
    return " ".join(LEADING_GLYPHS_RE.sub("", text).split())


def bulletize(lines: List[str]) -> List[str]:
    """Rewrite [BULLET] lines as "- " bullets, folding lowercase-start continuation lines."""
    out: List[str] = []
    in_bullet = False
    for line in lines:
        t = line.strip()
        if t.startswith(BULLET_TOKEN):
            text = _clean_bullet(t[len(BULLET_TOKEN):])
            if text:
                out.append(f"- {text}")
                in_bullet = True
            continue
        if in_bullet and t[:1].islower():
            out[-1] = f"{out[-1]} {t}"
            continue
        out.append(t)
        in_bullet = strip_bullet(t) is not None
    return out


def format_experience_section(lines: List[str], tables: KeywordTables = DEFAULT_TABLES) -> List[str]:
    preamble: List[str] = []
    jobs: List[Tuple[str, List[str]]] = []
    for line in lines:
        if is_experience_header_line(line, tables):
            jobs.append((line.strip(), []))
        elif jobs:
            jobs[-1][1].append(line)
        else:
            preamble.append(line)

    out: List[str] = bulletize(preamble)
    for header, details in jobs:
        if out:
            out.append("")
        out += [f"### {header}", ""]
        detail_text = "\n".join(details)
        for piece in detail_text.split(BULLET_TOKEN):
            cleaned = _clean_bullet(piece)
            if cleaned:
                out.append(f"- {cleaned}")
    logger.debug(f"Experience formatting: {len(jobs)} job header(s), {len(preamble)} preamble line(s)")
    return out


def format_skills_section(lines: List[str], tables: KeywordTables = DEFAULT_TABLES) -> List[str]:
    return render_skills(parse_skills(lines, tables))


def synthesize_markdown(text: str, tables: KeywordTables = DEFAULT_TABLES) -> str:
    """Convert linearized text into markdown with synthesized section headings."""
    doc = segment_sections(text, tables)
    blocks: List[str] = []
    unrecognized: Optional[List[str]] = None

    for section, lines in doc.sections.items():
        if section == UNRECOGNIZED:
            unrecognized = lines
            continue
        if section == EXPERIENCE:
            body = format_experience_section(lines, tables)
        elif section == SKILLS:
            body = format_skills_section(lines, tables)
        elif section == PERSONAL_INFO:
            body = list(lines)
        else:
            body = bulletize(lines)
        blocks.append(f"## {SECTION_TITLES[section]}\n\n" + "\n".join(body).strip())

    if unrecognized:
        blocks.append(f"## {SECTION_TITLES[UNRECOGNIZED]}\n\n" + "\n".join(unrecognized))

    return "\n\n".join(blocks).strip()
