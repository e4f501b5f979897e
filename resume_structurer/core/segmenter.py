"""
Section segmentation for linearized resume text.

Two passes over the non-empty lines:
1. Contact block: the top of the document (at most 5 lines) is scanned for
   email / phone / profile-link / region-code signals. Lines up to the last
   contiguous signal line become the PersonalInfo section.
2. Headings: "## Title" lines, or short bare lines whose text matches a known
   section keyword, open a canonical section. Content before the first heading
   falls into Summary; content under an unknown "## Title" is kept in the
   Unrecognized bucket and reported as a warning. A "Skills: a, b" line opens
   Skills and stays in it as content.

"###" lines are never section headings: they are record sub-headings and stay
in the content of the enclosing section.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from resume_structurer.core.keywords import (
    DEFAULT_TABLES,
    KeywordTables,
    PERSONAL_INFO,
    SKILLS,
    SUMMARY,
    UNRECOGNIZED,
)

logger = logging.getLogger(__name__)

CONTACT_SCAN_LIMIT = 5
MAX_BARE_HEADING_WORDS = 5

H2_RE = re.compile(r"^##\s+(.+?)\s*#*$")
EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")
PHONE_SIGNAL_RE = re.compile(r"\+\d|\(\d+\)|\d{3}[-.\s]\d{3}")
LINK_SIGNAL_RE = re.compile(r"http|linkedin|github|portfolio|www", re.IGNORECASE)
REGION_CODE_RE = re.compile(r"\b[A-Z]{2}\b(?=\s|,|$)")
BULLET_PREFIX_RE = re.compile(r"^\s*(?:\[BULLET\]|[-*•◦▪■▸▹◾●○►])\s*")
INLINE_SECTION_RE = re.compile(r"^([A-Za-z][A-Za-z &]{1,30}):\s*(\S.*)$")


@dataclass
class SegmentedDocument:
    """Ordered mapping of canonical section name -> content lines."""
    sections: Dict[str, List[str]] = field(default_factory=dict)
    unrecognized_headings: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def lines(self, section: str) -> List[str]:
        return self.sections.get(section, [])

    def add(self, section: str, line: str) -> None:
        self.sections.setdefault(section, []).append(line)


def has_contact_signal(line: str) -> bool:
    return bool(
        EMAIL_RE.search(line)
        or PHONE_SIGNAL_RE.search(line)
        or LINK_SIGNAL_RE.search(line)
        or REGION_CODE_RE.search(line)
    )


def match_heading(line: str, tables: KeywordTables = DEFAULT_TABLES) -> Optional[Tuple[str, str]]:
    """
    Classify a line as a section heading.

    Returns (canonical_section, heading_text) or None. Unknown "## Title"
    headings map to the Unrecognized bucket.
    """
    stripped = line.strip()
    if stripped.startswith("###"):
        return None

    m = H2_RE.match(stripped)
    if m:
        title = m.group(1).strip()
        return tables.section_for_heading(title) or UNRECOGNIZED, title

    if stripped.startswith("#") or BULLET_PREFIX_RE.match(stripped):
        return None
    # Bare keyword headings are short standalone lines, never header rows or prose
    if len(stripped.split()) > MAX_BARE_HEADING_WORDS or re.search(r"[\d@|]", stripped):
        return None
    section = tables.section_for_heading(stripped)
    if section:
        return section, stripped
    return None


def match_inline_heading(line: str, tables: KeywordTables = DEFAULT_TABLES) -> Optional[str]:
    """
    "Skills: Python, SQL" / "Technical Skills: Go" open the Skills section
    on the line that carries the content. Only Skills takes this form.
    """
    m = INLINE_SECTION_RE.match(line.strip())
    if m and tables.section_for_heading(m.group(1)) == SKILLS:
        return SKILLS
    return None


def detect_contact_block(lines: List[str], tables: KeywordTables = DEFAULT_TABLES) -> int:
    """
    Return the number of leading lines that form the contact block (0 if none).

    Scanning stops at a heading, or at the first line without a contact signal
    once the block has started. Signal-free lines above the first signal line
    (usually the candidate's name) belong to the block.
    """
    end = 0
    started = False
    for i, line in enumerate(lines[:CONTACT_SCAN_LIMIT]):
        if match_heading(line, tables) or match_inline_heading(line, tables):
            break
        if has_contact_signal(line):
            started = True
            end = i + 1
        elif started:
            break
    return end


def segment_sections(text: str, tables: KeywordTables = DEFAULT_TABLES) -> SegmentedDocument:
    lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
    doc = SegmentedDocument()

    contact_end = detect_contact_block(lines, tables)
    for line in lines[:contact_end]:
        doc.add(PERSONAL_INFO, line)
    if contact_end:
        logger.debug(f"Contact block detected: {contact_end} line(s)")

    current: Optional[str] = None
    for idx in range(contact_end, len(lines)):
        line = lines[idx]
        inline = match_inline_heading(line, tables)
        if inline:
            logger.debug(f"INLINE SECTION DETECTED at line {idx}: '{line}' -> {inline}")
            current = inline
            doc.add(current, line)
            continue
        heading = match_heading(line, tables)
        if heading:
            section, title = heading
            logger.debug(f"SECTION HEADER DETECTED at line {idx}: '{title}' -> {section}")
            current = section
            if section == UNRECOGNIZED and tables.section_for_heading(title) is None:
                doc.unrecognized_headings.append(title)
                doc.add(UNRECOGNIZED, title)
            continue
        if current is None:
            # First-content fallback: nothing is dropped before the first heading
            current = SUMMARY
        doc.add(current, line)

    unrecognized = doc.lines(UNRECOGNIZED)
    if unrecognized:
        doc.warnings.append(
            f"{len(unrecognized)} line(s) of unrecognized content preserved under '{UNRECOGNIZED}'"
        )
        logger.debug(f"Unrecognized headings: {doc.unrecognized_headings}")

    return doc
