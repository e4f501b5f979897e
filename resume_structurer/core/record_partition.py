"""
Partition a section's lines into records (header + description bullets).

Two modes, chosen per section:
- structured: the section contains "### header" sub-headings. Only those open
  records; plain lines continue the previous bullet (PDF line wraps).
- heuristic: no sub-headings. A plain line opens a record when none is open,
  when the open record already has bullets, or when it is a "|" row and the
  open header is a "|" row or already dated. Short plain lines under an
  incomplete header extend it ("Acme Corp" / "Engineer" / "2019 - 2021" on
  separate lines); longer ones are description lines.

A header is complete once it is a "|" row or carries a date range. Plain
lines under a complete header are held until the next line decides them:
- a glyph bullet: short held lines under a stacked header still belong to
  it ("2012 - 2016" / "Bachelor of Science" / "● ...")
- a short line with a date range: it closes the next stacked header, whose
  leading held lines open a new record
- anything else (or the end of the section): description lines, which is
  what DOCX and TXT bullets look like once their list glyphs are gone

Nothing is dropped: bullets before any header open a record with an empty
header, which the extractors keep as a low-confidence guess.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from resume_structurer.core.dates import ANY_RANGE_RE

H3_RE = re.compile(r"^###\s+(.+?)\s*$")
BULLET_RE = re.compile(r"^(?:\[BULLET\]\s*|[-*+]\s+|[•◦▪■▸▹◾●○►]\s*)(.*)$")

MAX_HEADER_CONTINUATION_CHARS = 60
MAX_STACKED_HEADER_LINES = 3


@dataclass
class RecordBlock:
    header: str
    header_lines: List[str] = field(default_factory=list)
    bullets: List[str] = field(default_factory=list)

    @property
    def header_text(self) -> str:
        """Header plus its continuation lines as one "|"-delimited header row."""
        parts = [p for p in [self.header] + self.header_lines if p]
        return " | ".join(parts)

    @property
    def complete(self) -> bool:
        return "|" in self.header or bool(ANY_RANGE_RE.search(self.header_text))


def strip_bullet(line: str) -> Optional[str]:
    """Return the text after a bullet marker, or None when the line is not a bullet."""
    m = BULLET_RE.match(line.strip())
    if not m:
        return None
    return m.group(1).strip()


def is_sub_heading(line: str) -> bool:
    return bool(H3_RE.match(line.strip()))


def _continues_header(line: str) -> bool:
    return len(line) <= MAX_HEADER_CONTINUATION_CHARS and not line.endswith(".")


def _settle_held(block: RecordBlock, held: List[str], before_bullet: bool) -> None:
    if not held:
        return
    stacked = "|" not in block.header and not block.bullets
    if before_bullet and stacked and all(_continues_header(h) for h in held):
        block.header_lines.extend(held)
    else:
        block.bullets.extend(held)
    held.clear()


def _split_stacked_header(held: List[str]) -> Tuple[List[str], List[str]]:
    """Split held lines into (description of the open record, head of the next one)."""
    n = 0
    for line in reversed(held):
        if n == MAX_STACKED_HEADER_LINES - 1 or not _continues_header(line):
            break
        n += 1
    cut = len(held) - n
    return held[:cut], held[cut:]


def partition_records(lines: List[str]) -> List[RecordBlock]:
    structured = any(is_sub_heading(ln) for ln in lines)
    blocks: List[RecordBlock] = []
    current: Optional[RecordBlock] = None
    held: List[str] = []

    for line in lines:
        t = line.strip()
        if not t:
            continue

        m = H3_RE.match(t)
        if m:
            if current is not None:
                _settle_held(current, held, before_bullet=False)
            current = RecordBlock(header=m.group(1))
            blocks.append(current)
            continue

        bullet = strip_bullet(t)
        if bullet is not None:
            if not bullet:
                continue
            if current is None:
                current = RecordBlock(header="")
                blocks.append(current)
            _settle_held(current, held, before_bullet=True)
            current.bullets.append(bullet)
            continue

        if t.startswith("#"):
            continue

        if current is None:
            current = RecordBlock(header=t)
            blocks.append(current)
        elif structured:
            if current.bullets:
                current.bullets[-1] = f"{current.bullets[-1]} {t}"
            else:
                current.bullets.append(t)
        elif current.bullets or ("|" in t and current.complete):
            _settle_held(current, held, before_bullet=False)
            current = RecordBlock(header=t)
            blocks.append(current)
        elif current.complete:
            if ANY_RANGE_RE.search(t) and _continues_header(t):
                description, head = _split_stacked_header(held)
                current.bullets.extend(description)
                held.clear()
                head.append(t)
                current = RecordBlock(header=head[0], header_lines=head[1:])
                blocks.append(current)
            else:
                held.append(t)
        elif _continues_header(t):
            current.header_lines.append(t)
        else:
            current.bullets.append(t)

    if current is not None:
        _settle_held(current, held, before_bullet=False)

    return blocks
