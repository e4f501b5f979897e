"""
Text layout reconstruction from positioned PDF text fragments.

Fragments arrive in natural reading order per page. Line breaks are inferred
from vertical jumps, inter-word spaces from horizontal gaps, and list markers
are replaced with a [BULLET] tag so later stages can split bullet runs.

Fragment width is NOT measured: it is estimated as len(text) * glyph_width.
That estimate decides where the previous fragment ends, and therefore whether
the next fragment gets a leading space. Wide or narrow fonts will produce
extra or missing spaces.
"""

import logging
import re
from typing import List, Optional, Sequence

from resume_structurer.core.config import get_settings
from resume_structurer.core.schemas import TextFragment

logger = logging.getLogger(__name__)

BULLET_TAG = "[BULLET] "
BULLET_GLYPH_RE = re.compile(r"^[•◦▪■▸▹◾●○►\-\*]$|^\d+[.)]$|^[a-z][.)]$")
INLINE_BULLET_GLYPHS = "•◦▪■▸▹◾●○►"
PAGE_SEPARATOR = "\n\n"


def is_bullet_marker(text: str) -> bool:
    """True for a lone list glyph ("•", "-", ...) or a "1." / "a)" style marker."""
    return bool(BULLET_GLYPH_RE.match(text))


def reconstruct_page_text(
    fragments: Sequence[TextFragment],
    *,
    line_break_threshold: Optional[float] = None,
    word_gap_threshold: Optional[float] = None,
    glyph_width: Optional[float] = None,
) -> str:
    """
    Linearize one page of fragments.

    Rules:
    1. |y - last_y| > line_break_threshold -> newline
    2. else x - last_x > word_gap_threshold -> space (never before a bullet)
    3. bullet marker -> newline if mid-line, then "[BULLET] " (glyph dropped).
       Round glyphs count anywhere; "-", "*" and numbered markers only at the
       start of a line.
    """
    settings = get_settings()
    if line_break_threshold is None:
        line_break_threshold = settings.line_break_threshold
    if word_gap_threshold is None:
        word_gap_threshold = settings.word_gap_threshold
    if glyph_width is None:
        glyph_width = settings.glyph_width

    out: List[str] = []
    last_x = 0.0
    last_y = 0.0

    def at_line_start() -> bool:
        return not out or out[-1].endswith("\n")

    for frag in fragments:
        text = frag.text or ""
        new_line = abs(frag.y - last_y) > line_break_threshold
        # "-", "*" and "1." are only list markers at the start of a line ("2019 - 2021")
        bullet = is_bullet_marker(text) and (
            text in INLINE_BULLET_GLYPHS or new_line or at_line_start()
        )

        if new_line:
            if not at_line_start():
                out.append("\n")
        elif frag.x - last_x > word_gap_threshold and out and not out[-1].endswith(" ") and not bullet:
            out.append(" ")

        if bullet:
            if not at_line_start():
                out.append("\n")
            out.append(BULLET_TAG)
        elif text:
            out.append(text)

        last_x = frag.x + len(text) * glyph_width
        last_y = frag.y

    return "".join(out)


def reconstruct_document_text(
    pages: Sequence[Sequence[TextFragment]],
    **thresholds: float,
) -> str:
    """Linearize every page and join pages with a blank line."""
    page_texts = [reconstruct_page_text(page, **thresholds) for page in pages]
    logger.debug(
        f"Reconstructed {len(page_texts)} page(s), "
        f"{sum(len(p) for p in pages)} fragment(s), "
        f"{sum(t.count(BULLET_TAG) for t in page_texts)} bullet(s)"
    )
    return PAGE_SEPARATOR.join(page_texts)
